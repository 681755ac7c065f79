from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class OcrEngineName(str, Enum):
    """
    OCR backends supported by this module.

    The OCR module is perception only: engines return literal word text and
    positions. OCR-confusion correction belongs to the stat line parser.
    """

    TESSERACT_CLI = "tesseract_cli"


class OcrInvocationError(Exception):
    """
    The external OCR process could not be started or exited non-zero.

    Fatal for the current image; never retried here.
    """

    def __init__(self, code: str, message: str, detail: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.detail = detail


@dataclass(frozen=True, slots=True)
class OcrConfig:
    """
    OCR module configuration.

    Defaults reproduce the box-score invocation: English, LSTM engine
    (oem 1), single uniform block of text (psm 6), TSV output.
    This module must NOT read environment variables itself.
    """

    engine: OcrEngineName = OcrEngineName.TESSERACT_CLI
    binary: str = "tesseract"
    language: str = "eng"
    oem: int | None = 1
    psm: int | None = 6
    timeout_s: float | None = None  # None => wait for the process indefinitely

    def __post_init__(self) -> None:
        if self.timeout_s is not None and self.timeout_s <= 0:
            raise ValueError("timeout_s must be > 0 when set")
        if not self.binary:
            raise ValueError("binary must be a non-empty command name or path")
