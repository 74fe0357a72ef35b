"""
Application configuration loaded from environment variables.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Centralised application settings."""

    model_config = SettingsConfigDict(
        env_file=(".env",),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    openai_api_key: SecretStr | None = Field(default=None, alias="OPENAI_API_KEY")
    llm_base_url: str | None = Field(default=None, alias="LLM_BASE_URL")
    llm_model_name: str = Field(default="gpt-4.1-mini", alias="LLM_MODEL_NAME")
    llm_temperature: float = Field(default=0.3, alias="LLM_TEMPERATURE")
    llm_max_tokens: int = Field(default=150, gt=0, alias="LLM_MAX_TOKENS")

    embedding_model_name: str = Field(default="text-embedding-3-small", alias="EMBEDDING_MODEL_NAME")
    embedding_dimension: int = Field(default=1024, gt=0, alias="EMBEDDING_DIMENSION")
    embed_concurrency: int = Field(default=8, gt=0, alias="EMBED_CONCURRENCY")

    vector_store_backend: str = Field(default="chroma", alias="VECTOR_STORE_BACKEND")
    vector_store_path: str = Field(default="./data/vector_store", alias="VECTOR_STORE_PATH")
    vector_collection: str = Field(default="equipment_docs", alias="VECTOR_COLLECTION")

    chunk_size_chars: int = Field(default=6000, gt=0, alias="CHUNK_SIZE_CHARS")
    chunk_overlap_chars: int = Field(default=400, ge=0, alias="CHUNK_OVERLAP_CHARS")

    retrieval_timeout_ms: int = Field(default=1200, gt=0, alias="RETRIEVAL_TIMEOUT_MS")
    default_top_k: int = Field(default=4, ge=1, le=8, alias="DEFAULT_TOP_K")
    history_turns: int = Field(default=4, ge=0, alias="HISTORY_TURNS")

    max_upload_mb: int = Field(default=25, gt=0, alias="MAX_UPLOAD_MB")
    max_upload_files: int = Field(default=8, gt=0, alias="MAX_UPLOAD_FILES")

    equipment_registry_path: str | None = Field(default=None, alias="EQUIPMENT_REGISTRY_PATH")

    app_host: str = Field(default="0.0.0.0", alias="APP_HOST")
    app_port: int = Field(default=8787, alias="APP_PORT")

    @model_validator(mode="after")
    def _check_chunking(self) -> "Settings":
        if self.chunk_overlap_chars >= self.chunk_size_chars:
            raise ValueError("CHUNK_OVERLAP_CHARS must be smaller than CHUNK_SIZE_CHARS")
        return self


settings = Settings()


def setup_logging() -> logging.Logger:
    """
    Configure base logging for the app.
    """
    logging.basicConfig(
        level=logging.INFO,
        format="[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
    )
    return logging.getLogger("app")


def public_settings() -> Dict[str, Any]:
    """
    Return settings without secrets for safe logging/inspection.
    """
    return settings.model_dump(
        exclude={"openai_api_key"},
        exclude_none=True,
    )


__all__ = ["Settings", "settings", "setup_logging", "public_settings"]
