from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import fitz  # PyMuPDF

from .errors import DocumentParseError

logger = logging.getLogger(__name__)


def read_pdf_bytes(path: str | Path) -> bytes:
    return Path(path).read_bytes()


@contextmanager
def open_document(data: bytes) -> Iterator[fitz.Document]:
    """Open PDF bytes for the duration of a with-block.

    Raises DocumentParseError when the bytes are not a readable PDF.
    The document is closed on every exit path.
    """
    if not data:
        raise DocumentParseError("empty document bytes")
    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except Exception as e:
        raise DocumentParseError(f"failed to open document: {e}") from e

    try:
        if doc.needs_pass:
            raise DocumentParseError("document is encrypted")
        if doc.page_count == 0:
            raise DocumentParseError("document has no pages")
        logger.debug("opened document: %d page(s)", doc.page_count)
        yield doc
    finally:
        doc.close()


def iter_pages(doc: fitz.Document) -> Iterator[tuple[int, fitz.Page]]:
    """Yield (page_number, page) with 1-based page numbers."""
    for i in range(doc.page_count):
        yield i + 1, doc.load_page(i)


def page_height(page: fitz.Page) -> float:
    return float(page.rect.height)
