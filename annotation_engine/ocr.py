"""Text location on canvas screenshots.

Each screenshot segment is equalized and adaptively thresholded before OCR.
Words the engine is unsure about are read again, one at a time, from a
slightly larger crop of the untouched color screenshot.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol, Sequence

import cv2
import numpy as np
from PIL import Image

from .types import CanvasWord, OCRToken
from .utils import clamp_int

logger = logging.getLogger(__name__)


def _poly_to_xywh(poly: list[list[float]] | list[tuple[float, float]]) -> tuple[int, int, int, int]:
    xs = [p[0] for p in poly]
    ys = [p[1] for p in poly]
    x0, y0, x1, y1 = int(min(xs)), int(min(ys)), int(max(xs)), int(max(ys))
    return x0, y0, x1 - x0, y1 - y0


class OCREngine(Protocol):
    def read_words(self, image: Image.Image) -> list[OCRToken]:
        """Word-level text, confidence (0-1) and box for a page image."""
        ...

    def read_word(self, image: Image.Image) -> str:
        """Best single-word reading of a small crop."""
        ...


@dataclass
class EasyOCREngine:
    lang: str = "en"
    gpu: bool = False
    _reader: Any | None = None

    def _get_reader(self) -> Any:
        if self._reader is None:
            try:
                import easyocr
            except Exception as e:  # pragma: no cover
                raise RuntimeError("EasyOCR is required for canvas OCR. Install easyocr.") from e
            logger.info("loading EasyOCR reader (%s)", self.lang)
            self._reader = easyocr.Reader(self.lang.split(","), gpu=self.gpu)
        return self._reader

    def read_words(self, image: Image.Image) -> list[OCRToken]:
        results = self._get_reader().readtext(np.array(image))
        tokens = []
        for bbox, text, confidence in results:
            tokens.append(OCRToken(text=text, confidence=float(confidence), bbox_xywh=_poly_to_xywh(bbox)))
        return tokens

    def read_word(self, image: Image.Image) -> str:
        results = self._get_reader().readtext(np.array(image))
        if not results:
            return ""
        _, text, _ = max(results, key=lambda r: float(r[2]))
        return text


def _decode_color(data: bytes) -> np.ndarray:
    img = cv2.imdecode(np.frombuffer(data, dtype=np.uint8), cv2.IMREAD_COLOR)
    if img is None:
        raise ValueError("screenshot bytes could not be decoded")
    return img


def _equalized_gray(img: np.ndarray) -> np.ndarray:
    gray = cv2.cvtColor(img, cv2.COLOR_BGR2GRAY)
    return cv2.equalizeHist(gray)


def expand_roi(
    bbox_xywh: tuple[int, int, int, int], *, pad_px: int, w: int, h: int
) -> tuple[int, int, int, int]:
    """Grow a word box by pad_px up/left and pad_px in size, kept on the image.

    Returns (x0, y0, x1, y1).
    """
    x, y, bw, bh = bbox_xywh
    x0 = clamp_int(x - pad_px, 0, max(0, w - 1))
    y0 = clamp_int(y - pad_px, 0, max(0, h - 1))
    x1 = clamp_int(x0 + bw + pad_px, x0 + 1, max(x0 + 1, w))
    y1 = clamp_int(y0 + bh + pad_px, y0 + 1, max(y0 + 1, h))
    return x0, y0, x1, y1


@dataclass
class CanvasTextLocator:
    engine: OCREngine
    confidence_threshold: float = 0.80
    roi_padding_px: int = 2

    def _threshold(self, img: np.ndarray, block_size: int, c: int) -> np.ndarray:
        return cv2.adaptiveThreshold(
            _equalized_gray(img),
            255,
            cv2.ADAPTIVE_THRESH_GAUSSIAN_C,
            cv2.THRESH_BINARY,
            block_size,
            c,
        )

    def _reread(self, img: np.ndarray, bbox_xywh: tuple[int, int, int, int]) -> str:
        h, w = img.shape[:2]
        x0, y0, x1, y1 = expand_roi(bbox_xywh, pad_px=self.roi_padding_px, w=w, h=h)
        roi = _equalized_gray(img[y0:y1, x0:x1])
        return self.engine.read_word(Image.fromarray(roi))

    def locate_segment(self, data: bytes, threshold: Sequence[int], *, segment: int = 0) -> list[CanvasWord]:
        block_size, c = _check_threshold(threshold)
        raw = _decode_color(data)
        binary = self._threshold(raw, block_size, c)

        words: list[CanvasWord] = []
        for token in self.engine.read_words(Image.fromarray(binary)):
            text = token.text or ""
            if text.strip() and token.confidence < self.confidence_threshold:
                corrected = self._reread(raw, token.bbox_xywh)
                logger.debug("re-read %r (conf %.2f) -> %r", text, token.confidence, corrected)
                text = corrected or ""
            text = text.strip()
            if text:
                words.append(
                    CanvasWord(text=text, bbox_xywh=token.bbox_xywh, confidence=token.confidence, segment=segment)
                )
        return words

    def locate(self, images: Sequence[bytes], threshold: Sequence[int]) -> list[CanvasWord]:
        """Words from every screenshot segment, in segment then OCR order."""
        _check_threshold(threshold)
        words: list[CanvasWord] = []
        for i, data in enumerate(images):
            words.extend(self.locate_segment(data, threshold, segment=i))
        logger.debug("canvas: %d word(s) from %d segment(s)", len(words), len(images))
        return words


def _check_threshold(threshold: Sequence[int]) -> tuple[int, int]:
    if len(threshold) != 2:
        raise ValueError(f"threshold must be (block_size, c), got {list(threshold)}")
    block_size, c = int(threshold[0]), int(threshold[1])
    if block_size < 3 or block_size % 2 == 0:
        raise ValueError(f"block_size must be odd and >= 3, got {block_size}")
    return block_size, c
