from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .artifacts import write_tokens_json_artifact
from .contracts import OcrConfig, OcrInvocationError
from .module import run_ocr_on_image_file

log = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="boxscore-ocr",
        description="OCR (perception only): emit word tokens + positions + confidences as JSON.",
    )
    p.add_argument("--image", required=True, type=Path, help="Image file to OCR (already cropped).")
    p.add_argument("--out", required=True, type=Path, help="Output JSON artifact file path.")
    p.add_argument("--tesseract", default="tesseract", help="Tesseract binary (default: tesseract).")
    p.add_argument("--language", default="eng", help="Tesseract language hint (default: eng).")
    p.add_argument("--oem", type=int, default=1, help="Tesseract OCR engine mode (default: 1).")
    p.add_argument("--psm", type=int, default=6, help="Tesseract page segmentation mode (default: 6).")
    p.add_argument(
        "--timeout-s",
        type=float,
        default=None,
        help="Kill tesseract after this many seconds (default: no timeout).",
    )
    p.add_argument("--log-level", default="INFO")
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    config = OcrConfig(
        binary=args.tesseract,
        language=args.language,
        oem=args.oem,
        psm=args.psm,
        timeout_s=args.timeout_s,
    )

    try:
        tokens = run_ocr_on_image_file(config=config, image_file=args.image)
    except OcrInvocationError as e:
        log.error("%s: %s %s", e.code, e.message, e.detail or "")
        return 2

    write_tokens_json_artifact(tokens=tokens, out_file=args.out, source_image=args.image.name)
    log.info("wrote %d tokens to %s", len(tokens), args.out)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
