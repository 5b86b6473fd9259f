"""Annotation color classification.

Pages are rendered one at a time; the first annotation whose nearest words
contain the expected word is mapped onto the raster and its mean HSV color
is returned. Scanning stops at that first match.
"""
from __future__ import annotations

import logging

import fitz  # PyMuPDF
import numpy as np

from .annotations import page_annotations
from .codec import Codec, ImageCodec, mean_color
from .document import iter_pages, open_document
from .errors import RegionOutOfBoundsError, RenderError
from .geometry import clamp_region_xywh, to_raster_rect
from .nearest import DEFAULT_TOP_K, annotation_key, nearest_words
from .page_provider import PdfRasterizer, Rasterizer
from .types import Annotation, AnnotationType, ColorResult, ColorSample
from .words import PdfWordLocator, WordLocator

logger = logging.getLogger(__name__)


def sample_region(
    image: np.ndarray,
    annotation: Annotation,
    *,
    key: str,
    scale: float,
    codec: Codec,
) -> tuple[ColorSample, tuple[int, int, int, int]]:
    """Mean HSV over the annotation's raster region.

    Raises RegionOutOfBoundsError if the region has no pixels on the raster.
    """
    h, w = image.shape[:2]
    region = to_raster_rect(annotation.rect, raster_height=h, scale=scale)
    clamped = clamp_region_xywh(region, w=w, h=h)
    if clamped is None:
        raise RegionOutOfBoundsError(key, region, (w, h))

    x0, y0, x1, y1 = clamped
    hsv = codec.color_convert(image[y0:y1, x0:x1], "HSV")
    hue, sat, val = mean_color(hsv)
    return ColorSample(hue=hue, saturation=sat, value=val), (x0, y0, x1 - x0, y1 - y0)


def _decode_page(
    doc: fitz.Document, page_number: int, scale: float, rasterizer: Rasterizer, codec: Codec
) -> np.ndarray:
    raster = rasterizer.render(doc, page_number, scale)
    try:
        return codec.decode(raster)
    except ValueError as e:
        raise RenderError(page_number, str(e)) from e


def classify_annotation_color(
    data: bytes,
    scale: float,
    expected_word: str,
    annotation_type: AnnotationType | str,
    *,
    top_k: int = DEFAULT_TOP_K,
    rasterizer: Rasterizer | None = None,
    word_locator: WordLocator | None = None,
    codec: Codec | None = None,
) -> ColorResult:
    if scale <= 0:
        raise ValueError(f"scale must be > 0, got {scale}")
    rasterizer = rasterizer or PdfRasterizer()
    word_locator = word_locator or PdfWordLocator()
    codec = codec or ImageCodec()
    expected = expected_word.strip()

    failed_pages: list[int] = []
    skipped: list[str] = []

    with open_document(data) as doc:
        for page_number, page in iter_pages(doc):
            annotations = page_annotations(page, annotation_type)
            if not annotations:
                continue

            try:
                image = _decode_page(doc, page_number, scale, rasterizer, codec)
            except RenderError as e:
                logger.warning("skipping page: %s", e)
                failed_pages.append(page_number)
                continue

            for ordinal, annotation in enumerate(annotations, start=1):
                key = annotation_key(page_number, ordinal)
                words = nearest_words(annotation, word_locator.words_on_page(page), top_k)
                if expected not in words:
                    continue

                try:
                    sample, region = sample_region(image, annotation, key=key, scale=scale, codec=codec)
                except RegionOutOfBoundsError as e:
                    logger.warning("skipping annotation: %s", e)
                    skipped.append(key)
                    continue

                logger.debug("%s matched %r, region=%s, hsv=%s", key, expected, region, sample.to_list())
                return ColorResult(
                    sample=sample,
                    page_number=page_number,
                    annotation_key=key,
                    region_xywh=region,
                    failed_pages=tuple(failed_pages),
                    skipped_annotations=tuple(skipped),
                )

    logger.info("no annotation has %r among its nearest words", expected)
    return ColorResult(failed_pages=tuple(failed_pages), skipped_annotations=tuple(skipped))
