"""
Process-wide provider clients and services, built once and injected into handlers.
"""

from __future__ import annotations

from functools import lru_cache

from app.config import settings
from app.embeddings.client import EmbeddingsClient
from app.equipment.registry import EquipmentRegistry, InMemoryEquipmentRegistry
from app.indexing.pipeline import IngestService
from app.llm.client import LLMClient
from app.rag.pipeline import RAGService
from app.rag.retrieval import Retriever
from app.vector_store import get_vector_store
from app.vector_store.base import VectorStore


@lru_cache(maxsize=1)
def get_store() -> VectorStore:
    return get_vector_store()


@lru_cache(maxsize=1)
def get_embeddings_client() -> EmbeddingsClient:
    return EmbeddingsClient()


@lru_cache(maxsize=1)
def get_llm_client() -> LLMClient:
    return LLMClient()


@lru_cache(maxsize=1)
def get_equipment_registry() -> EquipmentRegistry:
    if settings.equipment_registry_path:
        return InMemoryEquipmentRegistry.from_json_file(settings.equipment_registry_path)
    return InMemoryEquipmentRegistry()


def get_ingest_service() -> IngestService:
    return IngestService(get_store(), get_embeddings_client())


def get_rag_service() -> RAGService:
    retriever = Retriever(get_store(), get_embeddings_client())
    return RAGService(retriever, get_llm_client(), equipment_registry=get_equipment_registry())


__all__ = [
    "get_store",
    "get_embeddings_client",
    "get_llm_client",
    "get_equipment_registry",
    "get_ingest_service",
    "get_rag_service",
]
