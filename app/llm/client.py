"""
OpenAI-compatible chat LLM client, buffered and streaming.
"""

from __future__ import annotations

from typing import Any, AsyncIterator, Dict, List

from openai import AsyncOpenAI

from app.config import settings

DEFAULT_LLM_MODEL = settings.llm_model_name
DEFAULT_TEMPERATURE = settings.llm_temperature
DEFAULT_MAX_TOKENS = settings.llm_max_tokens


class LLMClient:
    def __init__(
        self,
        model: str = DEFAULT_LLM_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        client: AsyncOpenAI | None = None,
    ) -> None:
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        api_key = settings.openai_api_key.get_secret_value() if settings.openai_api_key else None
        self.client = client or AsyncOpenAI(api_key=api_key, base_url=settings.llm_base_url)

    def _request_kwargs(self, messages: List[Dict[str, Any]]) -> Dict[str, Any]:
        return {
            "model": self.model,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "messages": messages,
        }

    async def chat(self, messages: List[Dict[str, Any]]) -> str:
        response = await self.client.chat.completions.create(**self._request_kwargs(messages))
        choice = response.choices[0].message
        return choice.content or ""

    async def chat_stream(self, messages: List[Dict[str, Any]]) -> AsyncIterator[str]:
        """Yield raw content deltas as the provider produces them."""
        stream = await self.client.chat.completions.create(stream=True, **self._request_kwargs(messages))
        async for chunk in stream:
            if not chunk.choices:
                continue
            content = chunk.choices[0].delta.content
            if content:
                yield content


__all__ = ["LLMClient", "DEFAULT_LLM_MODEL", "DEFAULT_TEMPERATURE", "DEFAULT_MAX_TOKENS"]
