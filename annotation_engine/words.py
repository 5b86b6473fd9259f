from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Protocol

import fitz  # PyMuPDF

from .geometry import pdf_rect_from_xyxy
from .types import WordToken


class WordLocator(Protocol):
    def words_on_page(self, page: fitz.Page) -> Iterator[WordToken]:
        ...


@dataclass(frozen=True)
class PdfWordLocator:
    """Word tokens from the page content stream, boxes in PDF space.

    Annotation appearances (stamp labels, free-text bodies) are left out.
    Each call re-reads the page; nothing is cached.
    """

    def words_on_page(self, page: fitz.Page) -> Iterator[WordToken]:
        height = float(page.rect.height)
        for x0, y0, x1, y1, text, *_ in _content_words(page):
            text = (text or "").strip()
            if not text:
                continue
            yield WordToken(text=text, bbox=pdf_rect_from_xyxy(x0, y0, x1, y1, page_height=height))


def _content_words(page: fitz.Page) -> list[tuple]:
    """(x0, y0, x1, y1, word, block_no, line_no, word_no) without annotation text."""
    tp = fitz.TextPage(page.get_displaylist(annots=False).get_textpage())
    tp.parent = page
    return tp.extractWORDS()
