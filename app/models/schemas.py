from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.config import settings


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# Ingest
class Document(BaseModel):
    """A raw document submitted for indexing."""

    id: str = Field(..., min_length=1, description="Caller-assigned document id")
    text: str = Field(..., min_length=1, description="Full document text")


class IngestRequest(BaseModel):
    documents: List[Document] = Field(..., min_length=1)


class IngestResponse(BaseModel):
    ok: bool = True
    upserted: int = Field(..., ge=0, description="Number of index records written")


class UploadIngestResponse(BaseModel):
    ok: bool = True
    upserted: int = Field(..., ge=0, description="Number of documents extracted and indexed")
    records: int = Field(..., ge=0, description="Number of index records written")


# Query
class ConversationTurn(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class QueryRequest(_CamelModel):
    """Question about a piece of equipment."""

    query: str = Field(..., min_length=1, description="User question")
    top_k: int = Field(default=settings.default_top_k, ge=1, le=8, alias="topK")
    equipment_name: str | None = Field(default=None, alias="equipmentName")
    equipment_id: str | None = Field(default=None, alias="equipmentId")
    history: List[ConversationTurn] = Field(default_factory=list)

    @field_validator("query")
    @classmethod
    def _query_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Query must not be empty")
        return value

    @field_validator("equipment_name", "equipment_id")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        return value or None


class QueryResponse(BaseModel):
    answer: str
    contexts: List[str]


__all__ = [
    "Document",
    "IngestRequest",
    "IngestResponse",
    "UploadIngestResponse",
    "ConversationTurn",
    "QueryRequest",
    "QueryResponse",
]
