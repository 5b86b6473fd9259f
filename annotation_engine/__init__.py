"""Annotation / text association engine for PDF pages and canvas screenshots.

Public operations:
- extract_annotations: annotations per page, filtered by type
- find_nearest_words: the closest words to each annotation
- classify_annotation_color: mean HSV color of the annotation next to a word
- extract_annotation_content: trimmed annotation contents
- CanvasTextLocator: OCR word boxes on canvas screenshots

Choosing a named color from the HSV statistic is left to callers.
"""

from __future__ import annotations

from .annotations import extract_annotations
from .color import classify_annotation_color
from .content import extract_annotation_content
from .document import read_pdf_bytes
from .errors import AnnotationEngineError, DocumentParseError, RegionOutOfBoundsError, RenderError
from .nearest import find_nearest_words
from .ocr import CanvasTextLocator, EasyOCREngine
from .types import AnnotationType

__all__ = [
    "__version__",
    "AnnotationEngineError",
    "AnnotationType",
    "CanvasTextLocator",
    "DocumentParseError",
    "EasyOCREngine",
    "RegionOutOfBoundsError",
    "RenderError",
    "classify_annotation_color",
    "extract_annotation_content",
    "extract_annotations",
    "find_nearest_words",
    "read_pdf_bytes",
]

__version__ = "0.1.0"
