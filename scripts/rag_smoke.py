"""
Smoke test of the query pipeline against the configured providers.

Example:
    python -m scripts.rag_smoke --question "The belt keeps slipping" --equipment-name "Conveyor B"
    python -m scripts.rag_smoke -q "Printer won't feed" --stream
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from app.config import setup_logging
from app.embeddings.client import EmbeddingsClient
from app.equipment.registry import InMemoryEquipmentRegistry
from app.llm.client import LLMClient
from app.models.schemas import QueryRequest
from app.rag.pipeline import RAGService
from app.rag.retrieval import Retriever
from app.vector_store import get_vector_store


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Smoke test of the query pipeline.")
    parser.add_argument("--question", "-q", required=True, help="Question to ask")
    parser.add_argument("--top-k", type=int, default=4, help="Number of snippets to retrieve")
    parser.add_argument("--equipment-name", default=None, help="Selected equipment name")
    parser.add_argument("--equipment-id", default=None, help="Selected equipment id")
    parser.add_argument("--stream", action="store_true", help="Print the NDJSON stream instead of a buffered answer")
    return parser.parse_args()


async def run(service: RAGService, request: QueryRequest, stream: bool) -> None:
    if stream:
        async for line in service.stream_answer(request):
            record = json.loads(line)
            if "delta" in record:
                print(record["delta"], end="", flush=True)
            else:
                print(line, end="")
        print()
        return

    response = await service.answer_question(request)
    print("\n=== RAG Smoke Result ===")
    print(f"answer:\n{response.answer}")
    print(f"\nContexts used: {len(response.contexts)}")
    for idx, ctx in enumerate(response.contexts, start=1):
        print(f"#{idx}: {ctx[:200].replace(chr(10), ' ')}")


def main() -> None:
    setup_logging()
    logger = logging.getLogger(__name__)
    args = parse_args()

    service = RAGService(
        retriever=Retriever(get_vector_store(), EmbeddingsClient()),
        llm_client=LLMClient(),
        equipment_registry=InMemoryEquipmentRegistry(),
        logger_=logger,
    )
    request = QueryRequest(
        query=args.question,
        top_k=args.top_k,
        equipment_name=args.equipment_name,
        equipment_id=args.equipment_id,
    )

    try:
        asyncio.run(run(service, request, args.stream))
    except Exception:
        logger.exception("RAG smoke failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
