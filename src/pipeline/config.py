from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from crop.contracts import FULL_SCREENSHOT_PRESET, CropBounds
from grouping.config import RowConfig
from roster.match import RosterTiePolicy
from statline.config import StatParseConfig


@dataclass(frozen=True, slots=True)
class ExtractionConfig:
    """
    All tunables for one pipeline instance, fixed at construction.

    `debug_crop_path`, when set, keeps the cropped table PNG there for
    inspection; otherwise the crop lives in a temporary directory for the
    duration of the OCR call only.
    """

    crop: CropBounds = FULL_SCREENSHOT_PRESET
    rows: RowConfig = field(default_factory=RowConfig)
    parse: StatParseConfig = field(default_factory=StatParseConfig)
    tie_policy: RosterTiePolicy = RosterTiePolicy.FIRST
    debug_crop_path: Path | None = None

    def validate(self) -> None:
        self.rows.validate()
        self.parse.validate()
