"""
CLI to search the vector index with a text query.

Example:
    python -m scripts.search_query --query "belt keeps slipping" --top-k 4 --equipment-id conveyor-b
"""

from __future__ import annotations

import argparse
import asyncio

from app.embeddings.client import EmbeddingsClient
from app.vector_store import get_vector_store
from app.vector_store.base import EQUIPMENT_ID_KEY


def main() -> None:
    parser = argparse.ArgumentParser(description="Search indexed chunks by text query.")
    parser.add_argument("--query", "-q", required=True, help="Query text")
    parser.add_argument("--top-k", type=int, default=4, help="How many matches to return")
    parser.add_argument("--equipment-id", default=None, help="Only match records tagged with this equipment id")
    parser.add_argument("--snippet", type=int, default=300, help="Snippet length")
    args = parser.parse_args()

    vs = get_vector_store()
    emb = EmbeddingsClient()

    q_vec = asyncio.run(emb.embed_text(args.query))
    matches = vs.query(q_vec, top_k=args.top_k, equipment_id=args.equipment_id)

    if not matches:
        print("No results")
        return

    for idx, match in enumerate(matches, start=1):
        text = str(match.metadata.get("text", ""))
        snippet = text[: args.snippet].replace("\n", " ")
        distance = f"{match.distance:.4f}" if match.distance is not None else "n/a"
        print(f"\n#{idx} distance={distance} id={match.id}")
        print("source:", match.metadata.get("source"), "equipmentId:", match.metadata.get(EQUIPMENT_ID_KEY))
        print("text:", snippet + ("..." if len(text) > args.snippet else ""))


if __name__ == "__main__":
    main()
