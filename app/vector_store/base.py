"""
Vector store interface and shared types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Protocol

EQUIPMENT_ID_KEY = "equipmentId"


@dataclass
class IndexRecord:
    id: str
    vector: List[float]
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class QueryMatch:
    id: str
    metadata: Dict[str, Any]
    distance: float | None = None


class VectorStore(Protocol):
    def clear(self) -> None:
        ...

    def count(self) -> int:
        ...

    def upsert(self, records: List[IndexRecord]) -> None:
        ...

    def query(self, vector: List[float], top_k: int, equipment_id: str | None = None) -> List[QueryMatch]:
        ...


__all__ = ["EQUIPMENT_ID_KEY", "IndexRecord", "QueryMatch", "VectorStore"]
