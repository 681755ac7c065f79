from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CropBounds:
    """
    Layout-relative crop rectangle, each edge a fraction of the image size.

    Argument order follows the layout presets: (x1, x2, y1, y2).
    """

    x1: float
    x2: float
    y1: float
    y2: float

    def __post_init__(self) -> None:
        for name in ("x1", "x2", "y1", "y2"):
            v = getattr(self, name)
            if not (0.0 <= v <= 1.0):
                raise ValueError(f"{name} must be within [0, 1], got {v!r}")


@dataclass(frozen=True, slots=True)
class CropBox:
    """
    Absolute pixel box (inclusive-exclusive), always non-empty.
    """

    left: int
    top: int
    right: int
    bottom: int

    def width(self) -> int:
        return self.right - self.left

    def height(self) -> int:
        return self.bottom - self.top

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.left, self.top, self.right, self.bottom)


# Pre-cropped "receipt" image: stats tables sit center-right.
RECEIPT_PRESET = CropBounds(x1=0.28, x2=0.98, y1=0.12, y2=0.80)

# Full 3840x2160 console screenshot.
FULL_SCREENSHOT_PRESET = CropBounds(x1=0.08, x2=0.985, y1=0.14, y2=0.78)

PRESETS: dict[str, CropBounds] = {
    "receipt": RECEIPT_PRESET,
    "full": FULL_SCREENSHOT_PRESET,
}
