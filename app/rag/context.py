from __future__ import annotations

from typing import List, Sequence


def select_contexts(contexts: Sequence[str], equipment_name: str | None = None) -> List[str]:
    """
    Keep only snippets that mention ``equipment_name`` (case-insensitive).

    When nothing mentions it the result is empty: documentation for another
    machine is never passed off as relevant.
    """
    if not equipment_name:
        return list(contexts)
    needle = equipment_name.lower()
    return [ctx for ctx in contexts if needle in ctx.lower()]


__all__ = ["select_contexts"]
