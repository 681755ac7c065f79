from __future__ import annotations

import shutil
import unittest
from pathlib import Path

from PIL import Image

from crop.contracts import FULL_SCREENSHOT_PRESET, RECEIPT_PRESET, CropBounds
from crop.module import ImageReadError, compute_crop_box, crop_image, load_image, write_crop_png


class TestCropRegion(unittest.TestCase):
    def test_full_screenshot_preset_on_4k_frame(self) -> None:
        box = compute_crop_box(width=3840, height=2160, bounds=FULL_SCREENSHOT_PRESET)
        self.assertEqual(box.as_tuple(), (307, 302, 3782, 1685))

    def test_bounds_are_deterministic_and_non_empty(self) -> None:
        for bounds in (
            RECEIPT_PRESET,
            FULL_SCREENSHOT_PRESET,
            CropBounds(0.0, 1.0, 0.0, 1.0),
            CropBounds(1.0, 1.0, 1.0, 1.0),
            CropBounds(0.0, 0.0, 0.0, 0.0),
            CropBounds(0.6, 0.2, 0.9, 0.1),  # inverted edges
        ):
            b1 = compute_crop_box(width=101, height=57, bounds=bounds)
            b2 = compute_crop_box(width=101, height=57, bounds=bounds)
            self.assertEqual(b1, b2)
            self.assertGreaterEqual(b1.width(), 1)
            self.assertGreaterEqual(b1.height(), 1)
            self.assertGreaterEqual(b1.left, 0)
            self.assertGreaterEqual(b1.top, 0)
            self.assertLessEqual(b1.right, 101)
            self.assertLessEqual(b1.bottom, 57)

    def test_degenerate_right_edge_is_clamped_inside_image(self) -> None:
        box = compute_crop_box(width=100, height=50, bounds=CropBounds(1.0, 1.0, 1.0, 1.0))
        self.assertEqual(box.as_tuple(), (99, 49, 100, 50))

    def test_rounding_is_half_up(self) -> None:
        box = compute_crop_box(width=5, height=5, bounds=CropBounds(0.5, 1.0, 0.5, 1.0))
        self.assertEqual((box.left, box.top), (3, 3))

    def test_fractions_outside_unit_interval_are_rejected(self) -> None:
        with self.assertRaises(ValueError):
            CropBounds(-0.1, 0.5, 0.0, 1.0)
        with self.assertRaises(ValueError):
            CropBounds(0.0, 1.2, 0.0, 1.0)

    def test_crop_image_matches_box_size(self) -> None:
        img = Image.new("RGB", (200, 100), color=(10, 20, 30))
        out = crop_image(img, CropBounds(0.25, 0.75, 0.1, 0.9))
        self.assertEqual(out.size, (100, 80))


class TestImageIo(unittest.TestCase):
    def setUp(self) -> None:
        repo_root = Path(__file__).resolve().parents[1]
        self.root = repo_root / "artifacts" / "_test_crop_io"
        if self.root.exists():
            shutil.rmtree(self.root)
        self.root.mkdir(parents=True, exist_ok=True)

    def tearDown(self) -> None:
        shutil.rmtree(self.root, ignore_errors=True)

    def test_missing_file_raises_image_read_error(self) -> None:
        with self.assertRaises(ImageReadError):
            load_image(self.root / "no_such_image.png")

    def test_undecodable_file_raises_image_read_error(self) -> None:
        bad = self.root / "not_an_image.png"
        bad.write_bytes(b"definitely not a png")
        with self.assertRaises(ImageReadError):
            load_image(bad)

    def test_crop_png_round_trips_through_disk(self) -> None:
        img = Image.new("RGB", (64, 32), color=(255, 255, 255))
        out_file = self.root / "nested" / "crop.png"
        write_crop_png(image=img, out_file=out_file)
        loaded = load_image(out_file)
        self.assertEqual(loaded.size, (64, 32))


if __name__ == "__main__":
    unittest.main()
