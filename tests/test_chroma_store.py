import uuid

import chromadb
import pytest

from app.vector_store.base import IndexRecord
from app.vector_store.chroma_store import ChromaVectorStore


@pytest.fixture
def store():
    return ChromaVectorStore(collection_name=f"test-{uuid.uuid4().hex}", client=chromadb.EphemeralClient())


def _record(record_id, vector, text, equipment_id=None):
    metadata = {"text": text, "source": "api", "equipmentId": equipment_id}
    return IndexRecord(id=record_id, vector=vector, metadata=metadata)


def test_upsert_overwrites_same_id(store):
    store.upsert([_record("d1#0", [1.0, 0.0, 0.0], "first")])
    store.upsert([_record("d1#0", [1.0, 0.0, 0.0], "second")])

    assert store.count() == 1
    (match,) = store.query([1.0, 0.0, 0.0], top_k=4)
    assert match.id == "d1#0"
    assert match.metadata["text"] == "second"


def test_query_ranks_by_similarity_and_caps_top_k(store):
    store.upsert(
        [
            _record("a#0", [1.0, 0.0, 0.0], "near"),
            _record("b#0", [0.0, 1.0, 0.0], "far"),
            _record("c#0", [0.9, 0.1, 0.0], "close"),
        ]
    )

    matches = store.query([1.0, 0.0, 0.0], top_k=2)

    assert [m.id for m in matches] == ["a#0", "c#0"]
    assert matches[0].distance <= matches[1].distance


def test_query_filters_by_equipment_id(store):
    store.upsert(
        [
            _record("p#0", [1.0, 0.0, 0.0], "Printer A jam", equipment_id="printer-a"),
            _record("c#0", [1.0, 0.0, 0.0], "Conveyor B belt", equipment_id="conveyor-b"),
            _record("g#0", [1.0, 0.0, 0.0], "General safety"),
        ]
    )

    matches = store.query([1.0, 0.0, 0.0], top_k=4, equipment_id="conveyor-b")

    assert [m.metadata["text"] for m in matches] == ["Conveyor B belt"]


def test_non_positive_top_k_returns_nothing(store):
    store.upsert([_record("a#0", [1.0, 0.0, 0.0], "near")])
    assert store.query([1.0, 0.0, 0.0], top_k=0) == []


def test_clear_recreates_empty_collection(store):
    store.upsert([_record("a#0", [1.0, 0.0, 0.0], "near")])
    store.clear()
    assert store.count() == 0
