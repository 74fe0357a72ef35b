from __future__ import annotations

import asyncio
import time
from typing import Any, AsyncIterator, Dict, List, Sequence

import pytest

from app.embeddings.client import fit_dimension
from app.vector_store.base import IndexRecord, QueryMatch

TEST_DIMENSION = 8


class FakeEmbeddings:
    """Deterministic stand-in for EmbeddingsClient."""

    def __init__(self, dimension: int = TEST_DIMENSION, delay_sec: float = 0.0, error: Exception | None = None,
                 fail_on: str | None = None):
        self.dimension = dimension
        self.delay_sec = delay_sec
        self.error = error
        self.fail_on = fail_on
        self.calls: List[str] = []

    async def embed_text(self, text: str) -> List[float]:
        vectors = await self.embed_texts([text])
        return vectors[0]

    async def embed_texts(self, texts: Sequence[str]) -> List[List[float]]:
        self.calls.extend(texts)
        if self.delay_sec:
            await asyncio.sleep(self.delay_sec)
        if self.error is not None:
            raise self.error
        if self.fail_on is not None and self.fail_on in texts:
            raise RuntimeError(f"cannot embed {self.fail_on!r}")
        return [fit_dimension([float(len(t)), 1.0], self.dimension) for t in texts]


class FakeStore:
    """In-memory VectorStore; ``query`` returns records in insertion order."""

    def __init__(self, delay_sec: float = 0.0, error: Exception | None = None):
        self.records: Dict[str, IndexRecord] = {}
        self.delay_sec = delay_sec
        self.error = error
        self.queries: List[Dict[str, Any]] = []

    def clear(self) -> None:
        self.records.clear()

    def count(self) -> int:
        return len(self.records)

    def upsert(self, records: List[IndexRecord]) -> None:
        if self.error is not None:
            raise self.error
        for record in records:
            self.records[record.id] = record

    def query(self, vector: List[float], top_k: int, equipment_id: str | None = None) -> List[QueryMatch]:
        self.queries.append({"vector": vector, "top_k": top_k, "equipment_id": equipment_id})
        if self.delay_sec:
            time.sleep(self.delay_sec)
        if self.error is not None:
            raise self.error
        matches = [
            QueryMatch(id=rec.id, metadata=dict(rec.metadata), distance=0.1)
            for rec in self.records.values()
            if equipment_id is None or rec.metadata.get("equipmentId") == equipment_id
        ]
        return matches[:top_k]

    def add_texts(self, *texts: str, equipment_id: str | None = None) -> None:
        for idx, text in enumerate(texts, start=len(self.records)):
            metadata: Dict[str, Any] = {"text": text, "source": "api"}
            if equipment_id:
                metadata["equipmentId"] = equipment_id
            self.records[f"doc{idx}#0"] = IndexRecord(id=f"doc{idx}#0", vector=[0.0] * TEST_DIMENSION, metadata=metadata)


class FakeLLM:
    """Records prompts; answers with a canned reply or token list."""

    def __init__(self, answer: str = "Check the belt tension.", tokens: Sequence[str] | None = None,
                 error: Exception | None = None, fail_after: int | None = None):
        self.answer = answer
        self.tokens = list(tokens) if tokens is not None else ["Check", " the", " belt."]
        self.error = error
        self.fail_after = fail_after
        self.prompts: List[str] = []

    async def chat(self, messages: List[Dict[str, Any]]) -> str:
        self.prompts.append(messages[-1]["content"])
        if self.error is not None:
            raise self.error
        return self.answer

    async def chat_stream(self, messages: List[Dict[str, Any]]) -> AsyncIterator[str]:
        self.prompts.append(messages[-1]["content"])
        for idx, token in enumerate(self.tokens):
            if self.fail_after is not None and idx >= self.fail_after:
                raise self.error or RuntimeError("provider dropped the stream")
            yield token


@pytest.fixture
def fake_embeddings() -> FakeEmbeddings:
    return FakeEmbeddings()


@pytest.fixture
def fake_store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def fake_llm() -> FakeLLM:
    return FakeLLM()
