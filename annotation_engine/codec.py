from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import cv2
import numpy as np

_CONVERSIONS = {
    "HSV": cv2.COLOR_BGR2HSV,
    "HLS": cv2.COLOR_BGR2HLS,
    "LAB": cv2.COLOR_BGR2LAB,
    "GRAY": cv2.COLOR_BGR2GRAY,
    "RGB": cv2.COLOR_BGR2RGB,
}


class Codec(Protocol):
    def decode(self, raster: bytes) -> np.ndarray:
        ...

    def color_convert(self, region: np.ndarray, target: str = "HSV") -> np.ndarray:
        ...


@dataclass(frozen=True)
class ImageCodec:
    """OpenCV decode + color conversion. Decoded images are BGR."""

    def decode(self, raster: bytes) -> np.ndarray:
        buf = np.frombuffer(raster, dtype=np.uint8)
        img = cv2.imdecode(buf, cv2.IMREAD_COLOR)
        if img is None:
            raise ValueError("raster bytes could not be decoded")
        return img

    def color_convert(self, region: np.ndarray, target: str = "HSV") -> np.ndarray:
        code = _CONVERSIONS.get(target.upper())
        if code is None:
            raise ValueError(f"Unknown color space: {target}")
        return cv2.cvtColor(region, code)


def mean_color(region: np.ndarray) -> tuple[float, float, float]:
    """Per-channel mean of the first three channels."""
    m = cv2.mean(region)
    return float(m[0]), float(m[1]), float(m[2])
