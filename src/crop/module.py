from __future__ import annotations

import logging
import math
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from .contracts import CropBounds, CropBox

log = logging.getLogger(__name__)


class ImageReadError(Exception):
    pass


def _round_half_up(v: float) -> int:
    return int(math.floor(v + 0.5))


def _clamp(v: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, v))


def compute_crop_box(*, width: int, height: int, bounds: CropBounds) -> CropBox:
    """
    Map fractional bounds onto a width x height image.

    The start edge is clamped into [0, size-1] and the end edge into
    [start+1, size], so the box is never empty and never leaves the image.
    """

    if width < 1 or height < 1:
        raise ValueError("image dimensions must be >= 1")

    left = _clamp(_round_half_up(width * bounds.x1), 0, width - 1)
    right = _clamp(_round_half_up(width * bounds.x2), left + 1, width)
    top = _clamp(_round_half_up(height * bounds.y1), 0, height - 1)
    bottom = _clamp(_round_half_up(height * bounds.y2), top + 1, height)
    return CropBox(left=left, top=top, right=right, bottom=bottom)


def load_image(image_file: Path) -> Image.Image:
    if not image_file.exists():
        raise ImageReadError(f"Input image file not found: {image_file}")
    try:
        with Image.open(image_file) as img:
            img.load()
            return img.copy()
    except (UnidentifiedImageError, OSError) as e:
        raise ImageReadError(f"Could not decode image: {image_file}") from e


def crop_image(image: Image.Image, bounds: CropBounds) -> Image.Image:
    box = compute_crop_box(width=image.width, height=image.height, bounds=bounds)
    log.debug("crop %sx%s -> %s", image.width, image.height, box.as_tuple())
    return image.crop(box.as_tuple())


def write_crop_png(*, image: Image.Image, out_file: Path) -> None:
    out_file.parent.mkdir(parents=True, exist_ok=True)
    image.save(out_file, format="PNG")
