from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from contracts.ocr import Token


class OcrEngine(ABC):
    """
    Interface for OCR perception engines.

    IMPORTANT:
    - Engines must return literal text hypotheses, pixel positions, confidences.
    - Engines must NOT apply semantic correction/guessing/normalization.
    - Failure to run the backend raises OcrInvocationError.
    """

    @abstractmethod
    def extract_tokens(self, image_file: Path) -> list[Token]:
        raise NotImplementedError
