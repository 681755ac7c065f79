from __future__ import annotations

from pathlib import Path

from contracts.ocr import Token

from .contracts import OcrConfig, OcrEngineName
from .engines.base import OcrEngine
from .engines.tesseract_cli import TesseractCliEngine


def get_engine(config: OcrConfig) -> OcrEngine:
    if config.engine == OcrEngineName.TESSERACT_CLI:
        return TesseractCliEngine(config)
    raise ValueError(f"Unsupported OCR engine: {config.engine}")


def run_ocr_on_image_file(*, config: OcrConfig, image_file: Path) -> list[Token]:
    """
    Run OCR on an explicit image file path.

    Raises OcrInvocationError when the backend fails; an image with no
    recognizable words yields an empty list.
    """

    return get_engine(config).extract_tokens(image_file)
