from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .utils import load_json

DEFAULT_RENDER: dict[str, Any] = {"scale": 1.0}
DEFAULT_ASSOCIATION: dict[str, Any] = {"top_k": 3}
DEFAULT_OCR: dict[str, Any] = {
    "lang": "en",
    "confidence_threshold": 0.80,
    "roi_padding_px": 2,
    "block_size": 11,
    "c": 2,
}


@dataclass(frozen=True)
class EngineConfig:
    render: dict[str, Any] = field(default_factory=lambda: dict(DEFAULT_RENDER))
    association: dict[str, Any] = field(default_factory=lambda: dict(DEFAULT_ASSOCIATION))
    ocr: dict[str, Any] = field(default_factory=lambda: dict(DEFAULT_OCR))

    @property
    def scale(self) -> float:
        return float(self.render.get("scale", DEFAULT_RENDER["scale"]))

    @property
    def top_k(self) -> int:
        return int(self.association.get("top_k", DEFAULT_ASSOCIATION["top_k"]))


def load_config(config_path: str | Path | None = None) -> EngineConfig:
    if config_path is None:
        return EngineConfig()
    data = load_json(config_path)
    return EngineConfig(
        render={**DEFAULT_RENDER, **data.get("render", {})},
        association={**DEFAULT_ASSOCIATION, **data.get("association", {})},
        ocr={**DEFAULT_OCR, **data.get("ocr", {})},
    )
