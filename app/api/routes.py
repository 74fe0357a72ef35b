from __future__ import annotations

import logging
import time
from typing import List

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from fastapi.responses import StreamingResponse

from app.api.deps import get_ingest_service, get_rag_service
from app.config import settings
from app.indexing.parser import extract_text
from app.indexing.pipeline import SOURCE_API, SOURCE_UPLOAD, IngestService
from app.models.schemas import (
    Document,
    IngestRequest,
    IngestResponse,
    QueryRequest,
    QueryResponse,
    UploadIngestResponse,
)
from app.rag.pipeline import RAGService

router = APIRouter()
logger = logging.getLogger(__name__)

NDJSON_MEDIA_TYPE = "application/x-ndjson"


def _dependency_error(exc: Exception, fallback: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc) or fallback)


@router.post("/ingest", response_model=IngestResponse, summary="Index raw documents")
async def ingest(
    request: IngestRequest,
    service: IngestService = Depends(get_ingest_service),
) -> IngestResponse:
    logger.info("Ingest request", extra={"documents": len(request.documents)})
    try:
        summary = await service.ingest(request.documents, source=SOURCE_API)
    except Exception as exc:
        logger.exception("Ingest failed")
        raise _dependency_error(exc, "Ingest failed") from exc
    return IngestResponse(ok=True, upserted=summary.records)


@router.post("/ingest/upload", response_model=UploadIngestResponse, summary="Index uploaded text/PDF files")
async def ingest_upload(
    files: List[UploadFile] = File(..., description="Text or PDF documentation files"),
    equipment_id: str | None = Query(default=None, alias="equipmentId"),
    service: IngestService = Depends(get_ingest_service),
) -> UploadIngestResponse:
    if not files:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No files uploaded")
    if len(files) > settings.max_upload_files:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"At most {settings.max_upload_files} files per upload",
        )

    max_bytes = settings.max_upload_mb * 1024 * 1024
    stamp = int(time.time() * 1000)
    documents: List[Document] = []
    for position, upload in enumerate(files):
        filename = upload.filename or "upload"
        data = await upload.read()
        if len(data) > max_bytes:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"{filename} exceeds {settings.max_upload_mb} MB",
            )
        try:
            text = extract_text(filename, upload.content_type, data)
        except Exception as exc:
            logger.exception("Text extraction failed", extra={"upload_filename": filename})
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Could not read {filename}: {exc}",
            ) from exc
        if text:
            documents.append(Document(id=f"{filename}-{stamp}-{position}", text=text))

    if not documents:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unsupported or empty files")

    logger.info("Upload ingest request", extra={"documents": len(documents), "equipment_id": equipment_id})
    try:
        summary = await service.ingest(documents, source=SOURCE_UPLOAD, equipment_id=equipment_id)
    except Exception as exc:
        logger.exception("Upload ingest failed")
        raise _dependency_error(exc, "Upload ingest failed") from exc
    return UploadIngestResponse(ok=True, upserted=summary.documents, records=summary.records)


@router.post("/query", response_model=QueryResponse, summary="Ask a question about equipment")
async def query(
    request: QueryRequest,
    service: RAGService = Depends(get_rag_service),
) -> QueryResponse:
    logger.info("Query request", extra={"len": len(request.query), "top_k": request.top_k})
    try:
        return await service.answer_question(request)
    except Exception as exc:
        logger.exception("Query failed")
        raise _dependency_error(exc, "Query failed") from exc


@router.post("/query/stream", summary="Ask a question and stream the answer as NDJSON")
async def query_stream(
    request: QueryRequest,
    service: RAGService = Depends(get_rag_service),
) -> StreamingResponse:
    logger.info("Streaming query request", extra={"len": len(request.query), "top_k": request.top_k})
    return StreamingResponse(
        service.stream_answer(request),
        media_type=NDJSON_MEDIA_TYPE,
        headers={"Cache-Control": "no-cache"},
    )


__all__ = ["router", "NDJSON_MEDIA_TYPE"]
