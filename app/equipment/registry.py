"""
Equipment registry boundary.

The assistant only needs an equipment's id and display name to scope
retrieval; the registry that owns equipment records lives elsewhere. The
in-memory implementation here is what the service uses by default and can be
seeded from a JSON file of ``[{"id": ..., "name": ...}, ...]``.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Equipment:
    id: str
    name: str


class EquipmentRegistry(Protocol):
    def get(self, equipment_id: str) -> Equipment | None:
        ...


class InMemoryEquipmentRegistry(EquipmentRegistry):
    def __init__(self, items: Iterable[Equipment] = ()) -> None:
        self._by_id: Dict[str, Equipment] = {item.id: item for item in items}

    def __len__(self) -> int:
        return len(self._by_id)

    def get(self, equipment_id: str) -> Equipment | None:
        return self._by_id.get(equipment_id)

    @classmethod
    def from_json_file(cls, path: str | Path) -> "InMemoryEquipmentRegistry":
        file_path = Path(path)
        raw = json.loads(file_path.read_text(encoding="utf-8"))
        if not isinstance(raw, list):
            raise ValueError(f"Equipment registry file must contain a JSON list: {file_path}")

        items: List[Equipment] = []
        for entry in raw:
            if not isinstance(entry, dict) or not entry.get("id") or not entry.get("name"):
                logger.warning("Skipping malformed equipment entry", extra={"entry": entry})
                continue
            items.append(Equipment(id=str(entry["id"]), name=str(entry["name"])))

        logger.info("Loaded equipment registry", extra={"path": str(file_path), "count": len(items)})
        return cls(items)


__all__ = ["Equipment", "EquipmentRegistry", "InMemoryEquipmentRegistry"]
