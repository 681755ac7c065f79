"""
OCR stage (perception only).

- Input: path to a cropped image file
- Output: word tokens with text, top-left pixel position and confidence
- Constraints: no correction, no merging, no inference

No environment variable reads in this module; the engine is configured via
an explicitly passed OcrConfig.
"""

from .contracts import OcrConfig, OcrEngineName, OcrInvocationError
from .engines.base import OcrEngine
from .engines.tesseract_cli import TesseractCliEngine, parse_tesseract_tsv
from .module import get_engine, run_ocr_on_image_file

__all__ = [
    "OcrConfig",
    "OcrEngine",
    "OcrEngineName",
    "OcrInvocationError",
    "TesseractCliEngine",
    "get_engine",
    "parse_tesseract_tsv",
    "run_ocr_on_image_file",
]
