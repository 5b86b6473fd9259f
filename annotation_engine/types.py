from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class AnnotationType(str, Enum):
    """PDF annotation subtypes, named as PyMuPDF reports them."""

    TEXT = "Text"
    LINK = "Link"
    FREE_TEXT = "FreeText"
    LINE = "Line"
    SQUARE = "Square"
    CIRCLE = "Circle"
    POLYGON = "Polygon"
    POLY_LINE = "PolyLine"
    HIGHLIGHT = "Highlight"
    UNDERLINE = "Underline"
    SQUIGGLY = "Squiggly"
    STRIKE_OUT = "StrikeOut"
    STAMP = "Stamp"
    CARET = "Caret"
    INK = "Ink"
    POPUP = "Popup"
    FILE_ATTACHMENT = "FileAttachment"
    SOUND = "Sound"
    WIDGET = "Widget"
    REDACT = "Redact"
    UNKNOWN = "Unknown"

    @classmethod
    def from_name(cls, name: str) -> "AnnotationType":
        key = (name or "").strip().replace(" ", "").lower()
        for member in cls:
            if member.value.lower() == key:
                return member
        return cls.UNKNOWN


@dataclass(frozen=True)
class PdfRect:
    """Rectangle in PDF space (origin bottom-left, y up)."""

    left: float
    bottom: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def top(self) -> float:
        return self.bottom + self.height

    @property
    def top_left(self) -> tuple[float, float]:
        return (self.left, self.top)

    @property
    def center(self) -> tuple[float, float]:
        return (self.left + self.width / 2, self.bottom + self.height / 2)

    def to_list(self) -> list[float]:
        return [self.left, self.bottom, self.width, self.height]


@dataclass(frozen=True)
class Annotation:
    type: AnnotationType
    rect: PdfRect
    content: str | None = None  # None when the annotation has no /Contents


@dataclass(frozen=True)
class WordToken:
    text: str
    bbox: PdfRect


@dataclass(frozen=True)
class NearestWord:
    """A page word measured against one annotation anchor."""

    text: str
    bbox: PdfRect
    distance: float


@dataclass(frozen=True)
class ColorSample:
    """Mean HSV value over a raster region (OpenCV ranges: H 0-179, S/V 0-255)."""

    hue: float
    saturation: float
    value: float

    def to_list(self) -> list[float]:
        return [self.hue, self.saturation, self.value]


@dataclass(frozen=True)
class ColorResult:
    sample: ColorSample | None = None
    page_number: int | None = None
    annotation_key: str | None = None
    region_xywh: tuple[int, int, int, int] | None = None
    failed_pages: tuple[int, ...] = ()
    skipped_annotations: tuple[str, ...] = ()

    @property
    def found(self) -> bool:
        return self.sample is not None


@dataclass(frozen=True)
class OCRToken:
    text: str
    confidence: float  # 0.0 - 1.0
    bbox_xywh: tuple[int, int, int, int]


@dataclass(frozen=True)
class CanvasWord:
    text: str
    bbox_xywh: tuple[int, int, int, int]  # raster space, origin top-left
    confidence: float
    segment: int  # index of the screenshot segment the word came from
