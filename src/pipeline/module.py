from __future__ import annotations

import logging
import tempfile
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from PIL import Image

from contracts.boxscore import PlayerId, RosterEntry, StatLine
from contracts.extraction import ExtractionResult
from contracts.ocr import Row, Token
from crop.module import compute_crop_box, load_image, write_crop_png
from grouping.group_tokens import group_tokens_into_rows
from ocr.contracts import OcrConfig
from ocr.engines.base import OcrEngine
from ocr.module import get_engine
from roster.match import build_roster, match_row
from statline.parse import RowParseFailure, parse_stat_line
from storage.base import StatSink

from .config import ExtractionConfig

log = logging.getLogger(__name__)


class ExtractionPipeline:
    """
    crop -> OCR -> rows -> roster match -> stat parse -> sink, for one image.

    Synchronous, no retries, no shared mutable state: independent instances
    may run in parallel on different images.
    """

    def __init__(
        self,
        engine: OcrEngine,
        config: ExtractionConfig | None = None,
        sink: StatSink | None = None,
    ) -> None:
        self.engine = engine
        self.config = config or ExtractionConfig()
        self.config.validate()
        self.sink = sink

    def _ocr_crop(self, crop: Image.Image) -> list[Token]:
        # tesseract CLI reads files, so the crop must be materialized.
        debug_path = self.config.debug_crop_path
        if debug_path is not None:
            write_crop_png(image=crop, out_file=debug_path)
            log.info("saved OCR crop: %s", debug_path)
            return self.engine.extract_tokens(debug_path)

        with tempfile.TemporaryDirectory(prefix="boxscore_crop_") as tmp:
            crop_file = Path(tmp) / "stats_crop.png"
            write_crop_png(image=crop, out_file=crop_file)
            return self.engine.extract_tokens(crop_file)

    def _parse_rows(
        self,
        rows: list[Row],
        roster: list[RosterEntry],
        *,
        midpoint_y: int,
        skipped: list[dict[str, Any]],
    ) -> tuple[list[StatLine], int]:
        lines: list[StatLine] = []
        failures = 0

        for idx, row in enumerate(rows):
            entry = match_row(row.tokens, roster, self.config.tie_policy)
            if entry is None:
                skipped.append({"row_index": idx, "center_y": row.center_y, "reason": "NO_ROSTER_MATCH"})
                continue

            try:
                line = parse_stat_line(
                    row.tokens,
                    player_id=entry.player_id,
                    gamertag=entry.display_name,
                    center_y=row.center_y,
                    midpoint_y=midpoint_y,
                    config=self.config.parse,
                )
            except RowParseFailure as e:
                failures += 1
                log.warning("parse failed for %s (%s): tokens=%s", entry.display_name, e.reason, e.tokens)
                skipped.append(
                    {
                        "row_index": idx,
                        "center_y": row.center_y,
                        "reason": e.reason,
                        "player_id": entry.player_id,
                        "tokens": e.tokens,
                    }
                )
                continue

            lines.append(line)

        return lines, failures

    def run(
        self,
        image_file: Path,
        roster: Mapping[PlayerId, str],
        *,
        game_id: int | None = None,
    ) -> ExtractionResult:
        """
        Extract stat lines from one box-score image.

        Raises ImageReadError / OcrInvocationError (fatal for this image).
        When both a sink and `game_id` are present every line is handed to
        the sink and counted in `written`. Lines are written one at a time;
        if the sink raises, lines already written stay stored and the error
        propagates.
        """

        image = load_image(image_file)
        box = compute_crop_box(width=image.width, height=image.height, bounds=self.config.crop)
        crop = image.crop(box.as_tuple())

        tokens = self._ocr_crop(crop)
        grouping = group_tokens_into_rows(tokens, crop_width=crop.width, config=self.config.rows)

        entries = build_roster(roster)
        midpoint_y = crop.height // 2
        skipped: list[dict[str, Any]] = []
        lines, failures = self._parse_rows(grouping.rows, entries, midpoint_y=midpoint_y, skipped=skipped)

        written = 0
        if self.sink is not None and game_id is not None:
            for line in lines:
                try:
                    self.sink.replace_stat_line(game_id, line)
                except Exception:
                    log.error(
                        "sink failed for game %s player %s after %d of %d lines written",
                        game_id,
                        line.player_id,
                        written,
                        len(lines),
                    )
                    raise
                written += 1

        log.info(
            "OCR %s: rows=%d matched=%d written=%d parse_failures=%d",
            image_file.name,
            len(grouping.rows),
            len(lines),
            written,
            failures,
        )

        meta: dict[str, Any] = {
            "source_image": image_file.name,
            "game_id": game_id,
            "image_size": {"width_px": image.width, "height_px": image.height},
            "crop_box": {"left": box.left, "top": box.top, "right": box.right, "bottom": box.bottom},
            "midpoint_y": midpoint_y,
            "roster_size": len(entries),
            "tie_policy": self.config.tie_policy.value,
            "row_counts": grouping.meta["counts"],
            "skipped_rows": skipped,
        }

        return ExtractionResult(
            ok=True,
            stat_lines=lines,
            matched=len(lines),
            written=written,
            parse_failures=failures,
            errors=[],
            meta=meta,
        )


def run_extraction(
    image_file: Path,
    roster: Mapping[PlayerId, str],
    *,
    ocr_config: OcrConfig | None = None,
    config: ExtractionConfig | None = None,
    sink: StatSink | None = None,
    game_id: int | None = None,
) -> ExtractionResult:
    engine = get_engine(ocr_config or OcrConfig())
    return ExtractionPipeline(engine, config, sink).run(image_file, roster, game_id=game_id)
