from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

import fitz  # PyMuPDF

from .errors import RenderError

logger = logging.getLogger(__name__)


class Rasterizer(Protocol):
    def render(self, document: fitz.Document, page_number: int, scale: float) -> bytes:
        """Return the page (1-based) encoded as PNG at the given scale."""
        ...


@dataclass(frozen=True)
class PdfRasterizer:
    """Render pages with PyMuPDF. Output size is page size x scale."""

    alpha: bool = False

    def render(self, document: fitz.Document, page_number: int, scale: float) -> bytes:
        if scale <= 0:
            raise ValueError(f"scale must be > 0, got {scale}")
        if page_number < 1 or page_number > document.page_count:
            raise RenderError(page_number, f"no such page (document has {document.page_count})")

        try:
            page = document.load_page(page_number - 1)
            pix = page.get_pixmap(matrix=fitz.Matrix(scale, scale), alpha=self.alpha)
            png = pix.tobytes("png")
        except Exception as e:
            raise RenderError(page_number, str(e)) from e

        logger.debug("rendered page %d at scale %.2f: %dx%d", page_number, scale, pix.width, pix.height)
        return png
