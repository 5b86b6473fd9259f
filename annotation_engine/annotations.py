"""Annotation extraction and the annotation-type filter.

Filter semantics:
- Stamp selects Stamp annotations.
- FreeText or Line selects FreeText *and* Line annotations together; the two
  types cannot be requested separately.
- Any other type selects nothing: every page is still reported, with an
  empty list.
"""
from __future__ import annotations

import logging
from typing import Iterable, Iterator

import fitz  # PyMuPDF

from .document import iter_pages, open_document
from .geometry import pdf_rect_from_xyxy
from .types import Annotation, AnnotationType, PdfRect

logger = logging.getLogger(__name__)

_LINE_LIKE = frozenset({AnnotationType.FREE_TEXT, AnnotationType.LINE})


def coerce_type(annotation_type: AnnotationType | str) -> AnnotationType:
    if isinstance(annotation_type, AnnotationType):
        return annotation_type
    return AnnotationType.from_name(str(annotation_type))


def selected_types(annotation_type: AnnotationType | str) -> frozenset[AnnotationType]:
    t = coerce_type(annotation_type)
    if t == AnnotationType.STAMP:
        return frozenset({AnnotationType.STAMP})
    if t in _LINE_LIKE:
        return _LINE_LIKE
    return frozenset()


def filter_annotations(
    annotations: Iterable[Annotation], annotation_type: AnnotationType | str
) -> list[Annotation]:
    wanted = selected_types(annotation_type)
    return [a for a in annotations if a.type in wanted]


def _read_content(doc: fitz.Document, xref: int, annot: fitz.Annot | None = None) -> str | None:
    kind, value = doc.xref_get_key(xref, "Contents")
    if kind == "null":
        return None
    if annot is not None:
        return annot.info.get("content", "")
    if kind == "string":
        return value
    return ""


def _raw_annotation(doc: fitz.Document, xref: int) -> Annotation:
    """Annotation read straight from its dictionary; /Rect is already in PDF space."""
    _, subtype = doc.xref_get_key(xref, "Subtype")
    _, raw_rect = doc.xref_get_key(xref, "Rect")
    try:
        x0, y0, x1, y1 = (float(v) for v in raw_rect.strip("[]").split())
    except ValueError:
        x0 = y0 = x1 = y1 = 0.0
    return Annotation(
        type=AnnotationType.from_name(subtype.lstrip("/")),
        rect=PdfRect(left=min(x0, x1), bottom=min(y0, y1), width=abs(x1 - x0), height=abs(y1 - y0)),
        content=_read_content(doc, xref),
    )


def iter_page_annotations(page: fitz.Page) -> Iterator[Annotation]:
    """All annotations of a page in /Annots order, geometry in PDF space.

    Links and widgets are skipped by ``page.annots()``; they are read from
    their dictionaries so ordinals still count every entry.
    """
    doc = page.parent
    height = float(page.rect.height)
    by_xref = {annot.xref: annot for annot in page.annots()}
    for xref, _, _ in page.annot_xrefs():
        annot = by_xref.get(xref)
        if annot is None:
            yield _raw_annotation(doc, xref)
            continue
        _, type_name = annot.type[:2]
        r = annot.rect
        yield Annotation(
            type=AnnotationType.from_name(type_name),
            rect=pdf_rect_from_xyxy(r.x0, r.y0, r.x1, r.y1, page_height=height),
            content=_read_content(doc, xref, annot),
        )


def page_annotations(page: fitz.Page, annotation_type: AnnotationType | str) -> list[Annotation]:
    return filter_annotations(iter_page_annotations(page), annotation_type)


def extract_annotations(data: bytes, annotation_type: AnnotationType | str) -> dict[int, list[Annotation]]:
    """Filtered annotations per 1-based page number; every page is a key."""
    out: dict[int, list[Annotation]] = {}
    with open_document(data) as doc:
        for page_number, page in iter_pages(doc):
            out[page_number] = page_annotations(page, annotation_type)
            logger.debug("page %d: %d annotation(s) selected", page_number, len(out[page_number]))
    return out
