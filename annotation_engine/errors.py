from __future__ import annotations


class AnnotationEngineError(Exception):
    """Base class for annotation_engine failures."""


class DocumentParseError(AnnotationEngineError):
    """Input bytes could not be opened as a document."""


class RenderError(AnnotationEngineError):
    def __init__(self, page_number: int, message: str):
        super().__init__(f"page {page_number}: {message}")
        self.page_number = page_number


class RegionOutOfBoundsError(AnnotationEngineError):
    def __init__(self, annotation_key: str, region_xywh: tuple[int, int, int, int], raster_size: tuple[int, int]):
        w, h = raster_size
        super().__init__(f"{annotation_key}: region {list(region_xywh)} outside raster {w}x{h}")
        self.annotation_key = annotation_key
        self.region_xywh = region_xywh
        self.raster_size = raster_size
