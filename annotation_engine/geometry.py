"""Geometry helpers shared by the associator and the color classifier.

Two coordinate spaces meet here:
- PDF space: origin bottom-left, y grows upward (annotation rects, word boxes)
- raster space: origin top-left, y grows downward (rendered page pixels)
"""
from __future__ import annotations

import math

from .types import Annotation, PdfRect
from .utils import clamp_int


def bbox_center(rect: PdfRect) -> tuple[float, float]:
    return rect.center


def euclidean_distance(p: tuple[float, float], q: tuple[float, float]) -> float:
    return math.sqrt((p[0] - q[0]) ** 2 + (p[1] - q[1]) ** 2)


def distance_to_center(rect: PdfRect, x: float, y: float) -> float:
    """Distance from (x, y) to the center of rect."""
    return euclidean_distance(bbox_center(rect), (x, y))


def annotation_anchor(annotation: Annotation) -> tuple[float, float]:
    return annotation.rect.top_left


def pdf_rect_from_xyxy(x0: float, y0: float, x1: float, y1: float, *, page_height: float) -> PdfRect:
    """Convert a top-left-origin box (as PyMuPDF reports it) into PDF space."""
    left, right = min(x0, x1), max(x0, x1)
    top_down, bottom_down = min(y0, y1), max(y0, y1)
    return PdfRect(
        left=float(left),
        bottom=float(page_height - bottom_down),
        width=float(right - left),
        height=float(bottom_down - top_down),
    )


def to_raster_rect(rect: PdfRect, *, raster_height: int, scale: float) -> tuple[int, int, int, int]:
    """Map a PDF-space rect onto the rendered raster as (x, y, w, h).

    The rect is anchored at its top-left corner:
    x' = left * scale, y' = (raster_height - top) * scale.
    """
    x, y = rect.top_left
    return (
        int(x * scale),
        int((raster_height - y) * scale),
        int(rect.width * scale),
        int(rect.height * scale),
    )


def clamp_region_xywh(region: tuple[int, int, int, int], *, w: int, h: int) -> tuple[int, int, int, int] | None:
    """Clamp an (x, y, w, h) region to a w x h raster.

    Returns (x0, y0, x1, y1) of the visible part, or None if nothing is left.
    """
    x, y, rw, rh = region
    x0 = clamp_int(x, 0, w)
    y0 = clamp_int(y, 0, h)
    x1 = clamp_int(x + rw, 0, w)
    y1 = clamp_int(y + rh, 0, h)
    if x1 <= x0 or y1 <= y0:
        return None
    return x0, y0, x1, y1
