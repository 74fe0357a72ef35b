"""
OpenAI embeddings client.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from openai import AsyncOpenAI

from app.config import settings
from app.utils.concurrency import gather_bounded

DEFAULT_EMBEDDING_MODEL = settings.embedding_model_name
DEFAULT_EMBEDDING_DIMENSION = settings.embedding_dimension
DEFAULT_EMBED_CONCURRENCY = settings.embed_concurrency

logger = logging.getLogger(__name__)


def fit_dimension(vector: Sequence[float], dimension: int) -> List[float]:
    """
    Zero-pad or truncate ``vector`` to exactly ``dimension`` values.
    """
    if len(vector) == dimension:
        return list(vector)
    out = [0.0] * dimension
    keep = min(len(vector), dimension)
    out[:keep] = vector[:keep]
    return out


class EmbeddingsClient:
    def __init__(
        self,
        model: str = DEFAULT_EMBEDDING_MODEL,
        dimension: int = DEFAULT_EMBEDDING_DIMENSION,
        concurrency: int = DEFAULT_EMBED_CONCURRENCY,
        client: AsyncOpenAI | None = None,
    ) -> None:
        self.model = model
        self.dimension = dimension
        self.concurrency = concurrency
        api_key = settings.openai_api_key.get_secret_value() if settings.openai_api_key else None
        self.client = client or AsyncOpenAI(api_key=api_key)

    async def _embed_one(self, text: str) -> List[float]:
        response = await self.client.embeddings.create(model=self.model, input=text)
        raw = response.data[0].embedding
        if len(raw) != self.dimension:
            logger.debug(
                "Reconciling embedding dimension",
                extra={"provider_dim": len(raw), "index_dim": self.dimension},
            )
        return fit_dimension(raw, self.dimension)

    async def embed_texts(self, texts: Sequence[str]) -> List[List[float]]:
        if not texts:
            return []
        return await gather_bounded(self._embed_one, texts, self.concurrency)

    async def embed_text(self, text: str) -> List[float]:
        vectors = await self.embed_texts([text])
        return vectors[0] if vectors else []


__all__ = ["EmbeddingsClient", "fit_dimension", "DEFAULT_EMBEDDING_MODEL", "DEFAULT_EMBEDDING_DIMENSION"]
