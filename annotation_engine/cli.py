from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any

from .annotations import extract_annotations
from .color import classify_annotation_color
from .config import EngineConfig, load_config
from .content import extract_annotation_content
from .document import read_pdf_bytes
from .errors import DocumentParseError
from .nearest import annotation_key, find_nearest_words
from .ocr import CanvasTextLocator, EasyOCREngine
from .types import AnnotationType
from .utils import dumps_json, write_json

TYPE_CHOICES = [t.value for t in AnnotationType]


def _add_pdf_args(p: argparse.ArgumentParser, *, type_required: bool = True) -> None:
    p.add_argument("--pdf", required=True, help="Input PDF path")
    p.add_argument("--type", required=type_required, default=None, choices=TYPE_CHOICES, help="Annotation type filter")
    p.add_argument("--out", default=None, help="Write JSON here instead of stdout")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="annotation_engine")
    p.add_argument("--config", default=None, help="Config path (JSON)")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    ann = sub.add_parser("annotations", help="List annotations per page")
    _add_pdf_args(ann)

    near = sub.add_parser("nearest", help="Nearest words for each annotation")
    _add_pdf_args(near)

    color = sub.add_parser("color", help="Mean HSV color of the annotation next to a word")
    _add_pdf_args(color)
    color.add_argument("--word", required=True, help="Expected nearby word (exact match)")
    color.add_argument("--scale", type=float, default=None, help="Render scale (default from config)")

    content = sub.add_parser("content", help="Annotation contents per page")
    _add_pdf_args(content, type_required=False)

    canvas = sub.add_parser("canvas", help="OCR word boxes on canvas screenshots")
    canvas.add_argument("--image", required=True, action="append", help="Screenshot segment (repeatable, in order)")
    canvas.add_argument(
        "--threshold",
        nargs=2,
        type=int,
        default=None,
        metavar=("BLOCK", "C"),
        help="Adaptive threshold block size and constant (default from config)",
    )
    canvas.add_argument("--out", default=None, help="Write JSON here instead of stdout")

    return p


def _emit(data: Any, out: str | None) -> None:
    if out:
        write_json(out, data)
        print(str(Path(out)))
    else:
        print(dumps_json(data))


def _annotations_json(pages: dict[int, list]) -> dict[str, Any]:
    return {
        str(page_number): [
            {"key": annotation_key(page_number, i), "type": a.type.value, "rect": a.rect.to_list(), "content": a.content}
            for i, a in enumerate(annotations, start=1)
        ]
        for page_number, annotations in pages.items()
    }


def cmd_annotations(args: argparse.Namespace, cfg: EngineConfig) -> int:
    pages = extract_annotations(read_pdf_bytes(args.pdf), args.type)
    _emit(_annotations_json(pages), args.out)
    return 0


def cmd_nearest(args: argparse.Namespace, cfg: EngineConfig) -> int:
    result = find_nearest_words(read_pdf_bytes(args.pdf), args.type, top_k=cfg.top_k)
    _emit({str(k): v for k, v in result.items()}, args.out)
    return 0


def cmd_color(args: argparse.Namespace, cfg: EngineConfig) -> int:
    scale = args.scale if args.scale is not None else cfg.scale
    result = classify_annotation_color(read_pdf_bytes(args.pdf), scale, args.word, args.type, top_k=cfg.top_k)
    _emit(
        {
            "found": result.found,
            "hsv": result.sample.to_list() if result.sample else None,
            "page": result.page_number,
            "key": result.annotation_key,
            "region_xywh": list(result.region_xywh) if result.region_xywh else None,
            "failed_pages": list(result.failed_pages),
            "skipped_annotations": list(result.skipped_annotations),
        },
        args.out,
    )
    return 0 if result.found else 3


def cmd_content(args: argparse.Namespace, cfg: EngineConfig) -> int:
    result = extract_annotation_content(read_pdf_bytes(args.pdf), args.type)
    _emit({str(k): v for k, v in result.items()}, args.out)
    return 0


def cmd_canvas(args: argparse.Namespace, cfg: EngineConfig) -> int:
    ocr_cfg = cfg.ocr
    threshold = args.threshold or [int(ocr_cfg["block_size"]), int(ocr_cfg["c"])]
    locator = CanvasTextLocator(
        engine=EasyOCREngine(lang=str(ocr_cfg["lang"])),
        confidence_threshold=float(ocr_cfg["confidence_threshold"]),
        roi_padding_px=int(ocr_cfg["roi_padding_px"]),
    )
    images = [Path(p).read_bytes() for p in args.image]
    words = locator.locate(images, threshold)
    _emit(
        [
            {"text": w.text, "bbox_xywh": list(w.bbox_xywh), "confidence": w.confidence, "segment": w.segment}
            for w in words
        ],
        args.out,
    )
    return 0


COMMANDS = {
    "annotations": cmd_annotations,
    "nearest": cmd_nearest,
    "color": cmd_color,
    "content": cmd_content,
    "canvas": cmd_canvas,
}


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    handler = COMMANDS[args.command]

    try:
        cfg = load_config(args.config)
        return handler(args, cfg)
    except OSError as e:
        print(f"read_failed: {e}")
        return 1
    except DocumentParseError as e:
        print(f"parse_failed: {e}")
        return 1
    except ValueError as e:
        print(f"invalid_argument: {e}")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
