"""
Text extraction for uploaded documentation files (plain text and PDF).
"""

from __future__ import annotations

import io
import logging
import re
from pathlib import Path
from typing import List

from pypdf import PdfReader

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"
TEXT_SUFFIXES = {".txt", ".md", ".csv", ".log"}


def clean_text(text: str) -> str:
    text = text.replace("\r\n", "\n")
    text = re.sub(r"\n{3,}", "\n\n", text)
    text = re.sub(r"[ \t]{2,}", " ", text)
    return text.strip()


def extract_pdf_text(data: bytes) -> str:
    reader = PdfReader(io.BytesIO(data))
    pages: List[str] = []
    for page in reader.pages:
        page_text = page.extract_text() or ""
        if page_text.strip():
            pages.append(page_text)
    return "\n".join(pages)


def is_pdf(filename: str, content_type: str | None) -> bool:
    return content_type == PDF_CONTENT_TYPE or filename.lower().endswith(".pdf")


def is_text(filename: str, content_type: str | None) -> bool:
    if content_type and content_type.startswith("text/"):
        return True
    return Path(filename).suffix.lower() in TEXT_SUFFIXES


def extract_text(filename: str, content_type: str | None, data: bytes) -> str | None:
    """
    Return cleaned text for a supported file, or ``None`` when the type is unsupported.
    """
    if is_pdf(filename, content_type):
        raw = extract_pdf_text(data)
    elif is_text(filename, content_type):
        raw = data.decode("utf-8", errors="replace")
    else:
        logger.info("Skipping unsupported file", extra={"upload_filename": filename, "content_type": content_type})
        return None
    return clean_text(raw)


def load_file(path: str | Path) -> str | None:
    file_path = Path(path)
    return extract_text(file_path.name, None, file_path.read_bytes())


__all__ = ["clean_text", "extract_pdf_text", "extract_text", "load_file", "is_pdf", "is_text"]
