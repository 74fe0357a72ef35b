"""
Time-boxed retrieval of documentation snippets.

Retrieval is advisory: a slow or failing embedding provider or vector store
degrades to an empty context list and the answer falls back to the LLM alone.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List

from app.config import settings
from app.embeddings.client import EmbeddingsClient
from app.utils.concurrency import first_completed
from app.vector_store.base import VectorStore

DEFAULT_RETRIEVAL_TIMEOUT_SEC = settings.retrieval_timeout_ms / 1000.0

logger = logging.getLogger(__name__)


class Retriever:
    def __init__(
        self,
        vector_store: VectorStore,
        embeddings_client: EmbeddingsClient,
        timeout_sec: float = DEFAULT_RETRIEVAL_TIMEOUT_SEC,
    ) -> None:
        self.vector_store = vector_store
        self.embeddings_client = embeddings_client
        self.timeout_sec = timeout_sec

    async def _lookup(self, query_text: str, top_k: int, equipment_id: str | None) -> List[str]:
        vector = await self.embeddings_client.embed_text(query_text)
        matches = await asyncio.to_thread(self.vector_store.query, vector, top_k, equipment_id)
        texts = [str(match.metadata.get("text") or "") for match in matches]
        return [text for text in texts if text][:top_k]

    async def retrieve(self, query_text: str, top_k: int, equipment_id: str | None = None) -> List[str]:
        """Return up to ``top_k`` snippets, or ``[]`` on timeout or any error."""
        try:
            finished, contexts = await first_completed(
                self._lookup(query_text, top_k, equipment_id),
                self.timeout_sec,
            )
        except Exception:
            logger.warning("Retrieval failed, continuing without context", exc_info=True)
            return []

        if not finished:
            logger.warning(
                "Retrieval timed out, continuing without context",
                extra={"timeout_sec": self.timeout_sec},
            )
            return []

        logger.info(
            "Retrieved contexts",
            extra={"requested": top_k, "returned": len(contexts or []), "equipment_id": equipment_id},
        )
        return contexts or []


__all__ = ["Retriever", "DEFAULT_RETRIEVAL_TIMEOUT_SEC"]
