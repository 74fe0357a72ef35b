"""
Text chunking utilities.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from app.config import settings

CHUNK_SIZE_CHARS = settings.chunk_size_chars
CHUNK_OVERLAP_CHARS = settings.chunk_overlap_chars


@dataclass(frozen=True)
class Chunk:
    parent_id: str
    index: int
    text: str

    @property
    def record_id(self) -> str:
        return f"{self.parent_id}#{self.index}"


def chunk_text(text: str, chunk_size: int = CHUNK_SIZE_CHARS, overlap: int = CHUNK_OVERLAP_CHARS) -> List[str]:
    """
    Split text into overlapping fixed-size windows.

    Every window except the last is exactly ``chunk_size`` long; consecutive
    windows share ``overlap`` characters.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    if overlap < 0 or overlap >= chunk_size:
        raise ValueError(f"overlap must be in [0, chunk_size), got overlap={overlap} chunk_size={chunk_size}")

    length = len(text)
    if length <= chunk_size:
        return [text]

    stride = chunk_size - overlap
    chunks: List[str] = []
    start = 0
    while True:
        end = min(start + chunk_size, length)
        chunks.append(text[start:end])
        if end >= length:
            break
        start += stride
    return chunks


def build_chunks(
    parent_id: str,
    text: str,
    chunk_size: int = CHUNK_SIZE_CHARS,
    overlap: int = CHUNK_OVERLAP_CHARS,
) -> List[Chunk]:
    return [
        Chunk(parent_id=parent_id, index=idx, text=piece)
        for idx, piece in enumerate(chunk_text(text, chunk_size=chunk_size, overlap=overlap))
    ]


__all__ = ["Chunk", "chunk_text", "build_chunks", "CHUNK_SIZE_CHARS", "CHUNK_OVERLAP_CHARS"]
