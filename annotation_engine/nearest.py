"""Nearest-word association.

Each annotation is measured from its top-left corner to the center of every
word box on its page; the closest words win. Words at equal distance keep
their page enumeration order (sorted() is stable).
"""
from __future__ import annotations

import logging
from typing import Iterable, Sequence

from .annotations import page_annotations
from .document import iter_pages, open_document
from .geometry import annotation_anchor, distance_to_center
from .types import Annotation, AnnotationType, NearestWord, WordToken
from .words import PdfWordLocator, WordLocator

logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 3


def annotation_key(page_number: int, ordinal: int) -> str:
    return f"{page_number}_{ordinal}"


def rank_words(annotation: Annotation, words: Iterable[WordToken]) -> list[NearestWord]:
    """All words ordered by distance from the annotation anchor."""
    x, y = annotation_anchor(annotation)
    measured = [NearestWord(text=w.text, bbox=w.bbox, distance=distance_to_center(w.bbox, x, y)) for w in words]
    return sorted(measured, key=lambda nw: nw.distance)


def nearest_words(annotation: Annotation, words: Iterable[WordToken], top_k: int = DEFAULT_TOP_K) -> list[str]:
    if top_k < 0:
        raise ValueError(f"top_k must be >= 0, got {top_k}")
    return [nw.text for nw in rank_words(annotation, words)[:top_k]]


def nearest_words_for_page(
    page_number: int,
    annotations: Sequence[Annotation],
    words: Sequence[WordToken],
    top_k: int = DEFAULT_TOP_K,
) -> dict[str, list[str]]:
    """Map "<page>_<ordinal>" to the nearest word texts for one page."""
    return {
        annotation_key(page_number, ordinal): nearest_words(annotation, words, top_k)
        for ordinal, annotation in enumerate(annotations, start=1)
    }


def find_nearest_words(
    data: bytes,
    annotation_type: AnnotationType | str,
    *,
    top_k: int = DEFAULT_TOP_K,
    word_locator: WordLocator | None = None,
) -> dict[int, dict[str, list[str]]]:
    if top_k < 0:
        raise ValueError(f"top_k must be >= 0, got {top_k}")
    locator = word_locator or PdfWordLocator()

    out: dict[int, dict[str, list[str]]] = {}
    with open_document(data) as doc:
        for page_number, page in iter_pages(doc):
            annotations = page_annotations(page, annotation_type)
            if not annotations:
                out[page_number] = {}
                continue
            words = list(locator.words_on_page(page))
            out[page_number] = nearest_words_for_page(page_number, annotations, words, top_k)
            logger.debug("page %d: %d annotation(s), %d word(s)", page_number, len(annotations), len(words))
    return out
