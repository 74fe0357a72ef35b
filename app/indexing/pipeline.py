"""
Indexing pipeline: chunk documents, embed the chunks, and upsert them into the vector store.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

from app.config import settings
from app.embeddings.client import EmbeddingsClient
from app.indexing.chunker import Chunk, build_chunks
from app.models.schemas import Document
from app.vector_store.base import EQUIPMENT_ID_KEY, IndexRecord, VectorStore

logger = logging.getLogger(__name__)

SOURCE_API = "api"
SOURCE_UPLOAD = "upload"


@dataclass
class IngestSummary:
    documents: int
    records: int
    elapsed_sec: float


def build_records(
    chunks: Sequence[Chunk],
    vectors: Sequence[List[float]],
    source: str,
    equipment_id: str | None = None,
) -> List[IndexRecord]:
    records: List[IndexRecord] = []
    for chunk, vector in zip(chunks, vectors):
        metadata: Dict[str, Any] = {"text": chunk.text, "source": source}
        if equipment_id:
            metadata[EQUIPMENT_ID_KEY] = equipment_id
        records.append(IndexRecord(id=chunk.record_id, vector=vector, metadata=metadata))
    return records


class IngestService:
    """Turns documents into index records. Failures propagate: ingest is never best-effort."""

    def __init__(
        self,
        vector_store: VectorStore,
        embeddings_client: EmbeddingsClient,
        chunk_size: int = settings.chunk_size_chars,
        chunk_overlap: int = settings.chunk_overlap_chars,
        logger_: logging.Logger | None = None,
    ) -> None:
        self.vector_store = vector_store
        self.embeddings_client = embeddings_client
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self.logger = logger_ or logging.getLogger(__name__)

    def chunk_documents(self, documents: Sequence[Document]) -> List[Chunk]:
        chunks: List[Chunk] = []
        for document in documents:
            chunks.extend(
                build_chunks(document.id, document.text, chunk_size=self.chunk_size, overlap=self.chunk_overlap)
            )
        return chunks

    async def ingest(
        self,
        documents: Sequence[Document],
        source: str = SOURCE_API,
        equipment_id: str | None = None,
    ) -> IngestSummary:
        """
        Embed every chunk of every document, then write them in one upsert.

        Nothing reaches the store unless all embeddings succeed.
        """
        started = time.time()
        chunks = self.chunk_documents(documents)
        vectors = await self.embeddings_client.embed_texts([c.text for c in chunks])
        records = build_records(chunks, vectors, source=source, equipment_id=equipment_id)
        await asyncio.to_thread(self.vector_store.upsert, records)
        elapsed = time.time() - started
        self.logger.info(
            "Ingest completed",
            extra={"documents": len(documents), "records": len(records), "source": source, "elapsed_sec": round(elapsed, 2)},
        )
        return IngestSummary(documents=len(documents), records=len(records), elapsed_sec=elapsed)


__all__ = ["IngestService", "IngestSummary", "build_records", "SOURCE_API", "SOURCE_UPLOAD"]
