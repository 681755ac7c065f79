from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Token:
    """
    Single OCR word hypothesis.

    `x`/`y` are the top-left pixel of the word inside the cropped image.
    `confidence` is engine-native 0..100, or None when the engine did not
    report one (Tesseract emits -1 for non-word rows).
    """

    text: str
    x: int
    y: int
    confidence: int | None = None

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "Token":
        return Token(
            text=str(d.get("text", "")),
            x=int(d["x"]),
            y=int(d["y"]),
            confidence=(None if d.get("confidence") is None else int(d.get("confidence"))),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "x": self.x, "y": self.y, "confidence": self.confidence}


@dataclass(frozen=True, slots=True)
class Row:
    """
    Tokens sharing one vertical band, ordered left to right.
    """

    center_y: int
    tokens: list[str]

    def text(self) -> str:
        return " ".join(self.tokens)

    def to_dict(self) -> dict[str, Any]:
        return {"center_y": self.center_y, "tokens": list(self.tokens)}
