"""
Chroma-based VectorStore implementation.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

import chromadb

from app.config import settings
from app.vector_store.base import EQUIPMENT_ID_KEY, IndexRecord, QueryMatch, VectorStore

CHROMA_COLLECTION = settings.vector_collection
CHROMA_PERSIST_DIR = settings.vector_store_path

logger = logging.getLogger(__name__)


def _clean_metadata(metadata: Dict[str, Any]) -> Dict[str, Any]:
    # Chroma rejects None values in metadata.
    return {key: value for key, value in metadata.items() if value is not None}


class ChromaVectorStore(VectorStore):
    def __init__(
        self,
        persist_directory: str | None = None,
        collection_name: str = CHROMA_COLLECTION,
        client: Any | None = None,
    ) -> None:
        self.persist_directory = persist_directory or CHROMA_PERSIST_DIR
        self.collection_name = collection_name
        self.client = client or chromadb.PersistentClient(path=self.persist_directory)
        self.collection = self.client.get_or_create_collection(self.collection_name)
        logger.info(
            "ChromaVectorStore initialised",
            extra={"persist_directory": self.persist_directory, "collection": self.collection_name},
        )

    def clear(self) -> None:
        self.client.delete_collection(self.collection_name)
        self.collection = self.client.get_or_create_collection(self.collection_name)
        logger.info("Chroma collection cleared and recreated", extra={"collection": self.collection_name})

    def count(self) -> int:
        return self.collection.count()

    def upsert(self, records: List[IndexRecord]) -> None:
        if not records:
            return

        ids = [rec.id for rec in records]
        embeddings = [rec.vector for rec in records]
        metadatas = [_clean_metadata(rec.metadata) for rec in records]
        texts = [str(rec.metadata.get("text", "")) for rec in records]

        self.collection.upsert(ids=ids, embeddings=embeddings, metadatas=metadatas, documents=texts)
        logger.info("Upserted records into Chroma", extra={"count": len(records), "collection": self.collection_name})

    def query(self, vector: List[float], top_k: int, equipment_id: str | None = None) -> List[QueryMatch]:
        if top_k <= 0:
            return []

        kwargs: Dict[str, Any] = {
            "query_embeddings": [vector],
            "n_results": top_k,
            "include": ["documents", "metadatas", "distances"],
        }
        if equipment_id:
            kwargs["where"] = {EQUIPMENT_ID_KEY: {"$eq": equipment_id}}

        result = self.collection.query(**kwargs)

        ids = (result.get("ids") or [[]])[0] or []
        texts = (result.get("documents") or [[]])[0] or []
        metadatas = (result.get("metadatas") or [[]])[0] or []
        distances = (result.get("distances") or [[]])[0] or []

        matches: List[QueryMatch] = []
        for pos, doc_id in enumerate(ids):
            metadata = dict(metadatas[pos] or {}) if pos < len(metadatas) else {}
            if not metadata.get("text") and pos < len(texts) and texts[pos]:
                metadata["text"] = texts[pos]
            distance = float(distances[pos]) if pos < len(distances) else None
            matches.append(QueryMatch(id=doc_id, metadata=metadata, distance=distance))

        return matches[:top_k]


__all__ = ["ChromaVectorStore", "CHROMA_COLLECTION", "CHROMA_PERSIST_DIR"]
