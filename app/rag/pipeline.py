"""
RAG pipeline: retrieve context, scope it to the equipment, prompt the LLM, sanitize output.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import AsyncIterator, Dict, List

from app.equipment.registry import EquipmentRegistry
from app.llm.client import LLMClient
from app.models.schemas import QueryRequest, QueryResponse
from app.rag.context import select_contexts
from app.rag.prompts import build_prompt
from app.rag.retrieval import Retriever
from app.rag.sanitizer import sanitize

logger = logging.getLogger(__name__)

STREAM_FAILURE_MESSAGE = "Query stream failed"


def ndjson_line(record: Dict[str, object]) -> str:
    return json.dumps(record, ensure_ascii=False) + "\n"


@dataclass
class PreparedQuery:
    prompt: str
    contexts: List[str]
    equipment_name: str | None


class RAGService:
    """Answers equipment questions, buffered or streamed."""

    def __init__(
        self,
        retriever: Retriever,
        llm_client: LLMClient,
        equipment_registry: EquipmentRegistry | None = None,
        logger_: logging.Logger | None = None,
    ) -> None:
        self.retriever = retriever
        self.llm_client = llm_client
        self.equipment_registry = equipment_registry
        self.logger = logger_ or logging.getLogger(__name__)

    # --- Public API ---
    async def answer_question(self, request: QueryRequest) -> QueryResponse:
        prepared = await self.prepare(request)
        raw_answer = await self.llm_client.chat(self._messages(prepared.prompt))
        return QueryResponse(answer=sanitize(raw_answer), contexts=prepared.contexts)

    async def stream_answer(self, request: QueryRequest) -> AsyncIterator[str]:
        """
        Yield NDJSON lines: one ``contexts`` record, then ``delta`` records.

        A provider failure after the first line is reported as a terminal
        ``error`` record since the HTTP status is already sent.
        """
        prepared = await self.prepare(request)
        yield ndjson_line({"contexts": prepared.contexts})

        try:
            async for token in self.llm_client.chat_stream(self._messages(prepared.prompt)):
                cleaned = sanitize(token, trim=False)
                if cleaned:
                    yield ndjson_line({"delta": cleaned})
        except Exception as exc:
            self.logger.exception("Completion stream failed")
            yield ndjson_line({"error": str(exc) or STREAM_FAILURE_MESSAGE})

    # --- Steps ---
    async def prepare(self, request: QueryRequest) -> PreparedQuery:
        equipment_name = self.resolve_equipment_name(request)
        retrieved = await self.retriever.retrieve(request.query, request.top_k, equipment_id=request.equipment_id)
        contexts = select_contexts(retrieved, equipment_name)
        self.logger.info(
            "Prepared query",
            extra={
                "retrieved": len(retrieved),
                "selected": len(contexts),
                "grounded": bool(contexts),
                "equipment_name": equipment_name,
            },
        )
        prompt = build_prompt(request.query, request.history, contexts, equipment_name)
        return PreparedQuery(prompt=prompt, contexts=contexts, equipment_name=equipment_name)

    def resolve_equipment_name(self, request: QueryRequest) -> str | None:
        if request.equipment_name:
            return request.equipment_name
        if request.equipment_id and self.equipment_registry is not None:
            equipment = self.equipment_registry.get(request.equipment_id)
            if equipment is not None:
                return equipment.name
        return None

    @staticmethod
    def _messages(prompt: str) -> List[dict]:
        return [{"role": "user", "content": prompt}]


__all__ = ["RAGService", "PreparedQuery", "ndjson_line", "STREAM_FAILURE_MESSAGE"]
