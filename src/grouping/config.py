from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RowConfig:
    """
    Row reconstruction parameters.

    Defaults are tuned for the 4K box-score table crop.
    Confidence is used only as a threshold, never as a weight.
    """

    # Tokens left of crop_width * min_x_fraction are icon-gutter noise.
    min_x_fraction: float = 0.03
    # Max |y - first_y| (pixels) for a token to join the current row.
    y_threshold: int = 14
    # Engine confidence (0..100) below which a token is dropped; None-confidence tokens are kept.
    min_confidence: int = 40

    def validate(self) -> None:
        if not (0.0 <= self.min_x_fraction < 1.0):
            raise ValueError("min_x_fraction must be within [0, 1)")
        if self.y_threshold < 0:
            raise ValueError("y_threshold must be >= 0")
        if not (0 <= self.min_confidence <= 100):
            raise ValueError("min_confidence must be within [0, 100]")
