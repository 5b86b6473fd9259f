"""Geometry utilities: centers, distances, PDF <-> raster mapping, clamping."""
from __future__ import annotations

import pytest

from annotation_engine.geometry import (
    annotation_anchor,
    bbox_center,
    clamp_region_xywh,
    distance_to_center,
    euclidean_distance,
    pdf_rect_from_xyxy,
    to_raster_rect,
)
from annotation_engine.types import Annotation, AnnotationType, PdfRect


class TestPdfRect:
    def test_derived_edges(self):
        r = PdfRect(left=100, bottom=700, width=50, height=20)

        assert r.right == 150
        assert r.top == 720
        assert r.top_left == (100, 720)
        assert r.center == (125.0, 710.0)
        assert r.to_list() == [100, 700, 50, 20]


class TestDistances:
    def test_center(self):
        assert bbox_center(PdfRect(0, 0, 10, 20)) == (5.0, 10.0)

    def test_euclidean(self):
        assert euclidean_distance((0, 0), (3, 4)) == 5.0

    def test_distance_to_center(self):
        # center (110, 705), anchor (100, 720)
        rect = PdfRect(left=100, bottom=700, width=20, height=10)
        assert distance_to_center(rect, 100, 720) == pytest.approx((10**2 + 15**2) ** 0.5)

    def test_anchor_is_top_left(self):
        a = Annotation(type=AnnotationType.STAMP, rect=PdfRect(10, 20, 30, 40))
        assert annotation_anchor(a) == (10, 60)


class TestCoordinateTransforms:
    def test_top_down_box_to_pdf_space(self):
        r = pdf_rect_from_xyxy(100, 72, 150, 92, page_height=792)
        assert r == PdfRect(left=100, bottom=700, width=50, height=20)

    def test_swapped_corners_normalized(self):
        r = pdf_rect_from_xyxy(150, 92, 100, 72, page_height=792)
        assert r == PdfRect(left=100, bottom=700, width=50, height=20)

    def test_raster_rect_at_unit_scale(self):
        r = PdfRect(left=100, bottom=700, width=50, height=20)
        assert to_raster_rect(r, raster_height=792, scale=1.0) == (100, 72, 50, 20)

    def test_raster_rect_scales_every_component(self):
        # x' = x*s, y' = (H - top)*s, w' = w*s, h' = h*s
        r = PdfRect(left=10, bottom=100, width=5, height=10)
        assert to_raster_rect(r, raster_height=200, scale=2.0) == (20, 180, 10, 20)

    def test_origin_rect_lands_below_raster(self):
        # (0, 0, 10, 10) on an 800px raster at scale 2: y' = (800 - 10) * 2
        r = PdfRect(left=0, bottom=0, width=10, height=10)
        assert to_raster_rect(r, raster_height=800, scale=2.0) == (0, 1580, 20, 20)


class TestClamp:
    def test_inside_unchanged(self):
        assert clamp_region_xywh((10, 10, 20, 20), w=100, h=100) == (10, 10, 30, 30)

    def test_partial_overlap_clipped(self):
        assert clamp_region_xywh((90, -5, 20, 20), w=100, h=100) == (90, 0, 100, 15)

    def test_fully_outside_rejected(self):
        assert clamp_region_xywh((0, 1580, 20, 20), w=600, h=800) is None

    def test_zero_area_rejected(self):
        assert clamp_region_xywh((10, 10, 0, 5), w=100, h=100) is None
