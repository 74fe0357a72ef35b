"""
Vector store backends for indexed equipment documentation.
"""

from app.config import settings
from app.vector_store.base import IndexRecord, QueryMatch, VectorStore
from app.vector_store.chroma_store import ChromaVectorStore

SUPPORTED_BACKENDS = ("chroma",)


def get_vector_store(backend: str | None = None, collection_name: str | None = None) -> VectorStore:
    """
    Build the configured store. ``backend`` and ``collection_name`` override settings.
    """
    name = (backend or settings.vector_store_backend).lower()
    if name == "chroma":
        return ChromaVectorStore(collection_name=collection_name or settings.vector_collection)
    raise ValueError(f"Unsupported vector store backend: {name} (supported: {', '.join(SUPPORTED_BACKENDS)})")


__all__ = ["get_vector_store", "ChromaVectorStore", "IndexRecord", "QueryMatch", "VectorStore", "SUPPORTED_BACKENDS"]
