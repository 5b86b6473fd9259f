"""Shared fixtures: small PDFs built in memory with PyMuPDF.

Page geometry below is given the way PyMuPDF takes it (origin top-left).
On a 612 x 792 page, MuPDF y = 792 - PDF y.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import fitz  # PyMuPDF
import pytest

from annotation_engine.types import PdfRect, WordToken

PAGE_W = 612
PAGE_H = 792

_MISSING = object()


@dataclass
class AnnotSpec:
    kind: str  # stamp|freetext|line|square
    rect: tuple[float, float, float, float]  # MuPDF x0, y0, x1, y1
    content: Any = _MISSING  # str, None (no /Contents), or left as created
    fill_color: tuple[float, float, float] | None = None
    text: str = ""  # freetext body, drawn into the appearance stream


@dataclass
class PageSpec:
    words: list[tuple[str, tuple[float, float]]] = field(default_factory=list)  # text, baseline point
    annots: list[AnnotSpec] = field(default_factory=list)
    links: list[tuple[float, float, float, float]] = field(default_factory=list)  # MuPDF rects, added first
    rotation: int = 0


def _add_annot(doc: fitz.Document, page: fitz.Page, a: AnnotSpec) -> None:
    r = fitz.Rect(*a.rect)
    if a.kind == "stamp":
        annot = page.add_stamp_annot(r, stamp=0)
    elif a.kind == "freetext":
        if a.fill_color is not None:
            annot = page.add_freetext_annot(r, a.text, fontsize=8, fill_color=a.fill_color)
        else:
            annot = page.add_freetext_annot(r, a.text, fontsize=8)
    elif a.kind == "line":
        annot = page.add_line_annot(r.tl, r.br)
    elif a.kind == "square":
        annot = page.add_rect_annot(r)
    else:
        raise ValueError(a.kind)

    if a.content is None:
        doc.xref_set_key(annot.xref, "Contents", "null")
    elif a.content is not _MISSING:
        doc.xref_set_key(annot.xref, "Contents", fitz.get_pdf_str(a.content))


def build_pdf(pages: list[PageSpec]) -> bytes:
    doc = fitz.open()
    try:
        for page_spec in pages:
            page = doc.new_page(width=PAGE_W, height=PAGE_H)
            for text, point in page_spec.words:
                page.insert_text(point, text, fontsize=10)
            for link_rect in page_spec.links:
                page.insert_link({"kind": fitz.LINK_URI, "from": fitz.Rect(*link_rect), "uri": "https://example.com"})
            for a in page_spec.annots:
                _add_annot(doc, page, a)
            if page_spec.rotation:
                page.set_rotation(page_spec.rotation)
        return doc.tobytes()
    finally:
        doc.close()


def word(text: str, cx: float, cy: float, w: float = 20.0, h: float = 10.0) -> WordToken:
    """WordToken in PDF space centered on (cx, cy)."""
    return WordToken(text=text, bbox=PdfRect(left=cx - w / 2, bottom=cy - h / 2, width=w, height=h))


class FakeWordLocator:
    """Serves fixed PDF-space words per 1-based page number."""

    def __init__(self, words_by_page: dict[int, list[WordToken]]):
        self.words_by_page = words_by_page
        self.calls: list[int] = []

    def words_on_page(self, page: fitz.Page):
        page_number = page.number + 1
        self.calls.append(page_number)
        yield from self.words_by_page.get(page_number, [])


@pytest.fixture
def mixed_pdf() -> bytes:
    """Page 1: stamp, freetext, line, square. Page 2: nothing. Page 3: one line."""
    return build_pdf(
        [
            PageSpec(
                annots=[
                    AnnotSpec("stamp", (100, 100, 200, 150)),
                    AnnotSpec("freetext", (100, 72, 150, 92)),
                    AnnotSpec("line", (300, 300, 400, 320)),
                    AnnotSpec("square", (400, 400, 450, 450)),
                ]
            ),
            PageSpec(),
            PageSpec(annots=[AnnotSpec("line", (50, 50, 150, 60))]),
        ]
    )
