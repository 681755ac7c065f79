"""
Region extraction: crop a box-score image down to its statistics table.

Pure over pixel data; persisting the crop (for OCR input or diagnostics) is
an explicit, separate call.
"""

from .contracts import FULL_SCREENSHOT_PRESET, PRESETS, RECEIPT_PRESET, CropBounds, CropBox
from .module import ImageReadError, compute_crop_box, crop_image, load_image, write_crop_png

__all__ = [
    "CropBounds",
    "CropBox",
    "FULL_SCREENSHOT_PRESET",
    "RECEIPT_PRESET",
    "PRESETS",
    "ImageReadError",
    "compute_crop_box",
    "crop_image",
    "load_image",
    "write_crop_png",
]
