"""
CLI to index a directory of equipment documentation (.txt, .md, .pdf).

Example:
    python -m scripts.ingest_corpus --corpus-dir ./data/manuals --equipment-id press-01
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List

from tqdm import tqdm

from app.config import setup_logging
from app.embeddings.client import EmbeddingsClient
from app.indexing.parser import load_file
from app.indexing.pipeline import SOURCE_UPLOAD, IngestService
from app.models.schemas import Document
from app.vector_store import get_vector_store

SUPPORTED_SUFFIXES = {".txt", ".md", ".pdf"}


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Index a directory of documentation files.")
    parser.add_argument("--corpus-dir", required=True, help="Directory with documentation files")
    parser.add_argument("--equipment-id", default=None, help="Tag every record with this equipment id")
    parser.add_argument("--clear", action="store_true", help="Drop the collection before indexing")
    return parser.parse_args()


def collect_documents(corpus_dir: Path) -> List[Document]:
    documents: List[Document] = []
    for path in sorted(corpus_dir.rglob("*")):
        if not path.is_file() or path.suffix.lower() not in SUPPORTED_SUFFIXES:
            continue
        text = load_file(path)
        if text:
            documents.append(Document(id=path.relative_to(corpus_dir).as_posix(), text=text))
    return documents


async def run(service: IngestService, documents: List[Document], equipment_id: str | None) -> int:
    total = 0
    for document in tqdm(documents, desc="Indexing", unit="docs"):
        summary = await service.ingest([document], source=SOURCE_UPLOAD, equipment_id=equipment_id)
        total += summary.records
    return total


def main() -> None:
    setup_logging()
    logger = logging.getLogger(__name__)
    args = parse_args()

    corpus_dir = Path(args.corpus_dir)
    if not corpus_dir.is_dir():
        logger.error("Corpus directory not found: %s", corpus_dir)
        sys.exit(1)

    store = get_vector_store()
    if args.clear:
        store.clear()

    documents = collect_documents(corpus_dir)
    logger.info("Collected documents", extra={"documents": len(documents)})
    service = IngestService(store, EmbeddingsClient(), logger_=logger)

    try:
        records = asyncio.run(run(service, documents, args.equipment_id))
    except Exception:
        logger.exception("Ingest failed")
        sys.exit(1)

    print(f"Indexed documents: {len(documents)}, records: {records} (collection size {store.count()})")


if __name__ == "__main__":
    main()
