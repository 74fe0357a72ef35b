import asyncio
import time

from conftest import FakeEmbeddings, FakeStore

from app.rag.retrieval import Retriever
from app.vector_store.base import IndexRecord


def test_returns_context_texts_in_store_order(fake_embeddings, fake_store):
    fake_store.add_texts("Printer A jam procedure", "Conveyor B belt tension", "Press C hydraulic check")
    retriever = Retriever(fake_store, fake_embeddings, timeout_sec=1.0)

    contexts = asyncio.run(retriever.retrieve("paper jam", top_k=2))

    assert contexts == ["Printer A jam procedure", "Conveyor B belt tension"]
    assert fake_embeddings.calls == ["paper jam"]


def test_empty_and_missing_texts_are_dropped(fake_embeddings, fake_store):
    fake_store.add_texts("", "Conveyor B belt tension")
    fake_store.records["no-text#0"] = IndexRecord(id="no-text#0", vector=[0.0], metadata={"source": "api"})
    retriever = Retriever(fake_store, fake_embeddings, timeout_sec=1.0)

    assert asyncio.run(retriever.retrieve("belt", top_k=4)) == ["Conveyor B belt tension"]


def test_equipment_id_is_pushed_to_the_store(fake_embeddings, fake_store):
    fake_store.add_texts("Printer A jam procedure", equipment_id="printer-a")
    fake_store.add_texts("Conveyor B belt tension", equipment_id="conveyor-b")
    retriever = Retriever(fake_store, fake_embeddings, timeout_sec=1.0)

    contexts = asyncio.run(retriever.retrieve("belt", top_k=4, equipment_id="conveyor-b"))

    assert contexts == ["Conveyor B belt tension"]
    assert fake_store.queries[-1]["equipment_id"] == "conveyor-b"


def test_slow_store_fails_open_within_the_timeout(fake_embeddings):
    store = FakeStore(delay_sec=0.5)
    store.add_texts("Printer A jam procedure")
    retriever = Retriever(store, fake_embeddings, timeout_sec=0.05)

    async def scenario():
        started = time.monotonic()
        contexts = await retriever.retrieve("jam", top_k=4)
        return contexts, time.monotonic() - started

    contexts, elapsed = asyncio.run(scenario())
    assert contexts == []
    assert elapsed < 0.4


def test_slow_embedding_fails_open(fake_store):
    fake_store.add_texts("Printer A jam procedure")
    retriever = Retriever(fake_store, FakeEmbeddings(delay_sec=1.0), timeout_sec=0.05)

    assert asyncio.run(retriever.retrieve("jam", top_k=4)) == []
    assert fake_store.queries == []


def test_store_error_fails_open(fake_embeddings):
    store = FakeStore(error=ConnectionError("index not found"))
    retriever = Retriever(store, fake_embeddings, timeout_sec=1.0)

    assert asyncio.run(retriever.retrieve("jam", top_k=4)) == []


def test_embedding_error_fails_open(fake_store):
    retriever = Retriever(fake_store, FakeEmbeddings(error=RuntimeError("quota exceeded")), timeout_sec=1.0)

    assert asyncio.run(retriever.retrieve("jam", top_k=4)) == []
