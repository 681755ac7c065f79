from __future__ import annotations

import argparse
import datetime
import json
import logging
import sqlite3
from pathlib import Path
from typing import Any

from contracts.boxscore import PlayerId
from contracts.extraction import ExtractionError, ExtractionResult
from crop.contracts import PRESETS, CropBounds
from crop.module import ImageReadError
from grouping.config import RowConfig
from ocr.contracts import OcrConfig, OcrInvocationError
from roster.match import RosterTiePolicy
from statline.config import StatParseConfig
from storage.sqlite_store import SqliteStatStore

from .artifacts import write_extraction_json_artifact
from .config import ExtractionConfig
from .module import run_extraction

log = logging.getLogger(__name__)


def _build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="boxscore-extract",
        description="Extract per-player stat lines from a box-score screenshot.",
    )
    p.add_argument("--image", required=True, type=Path, help="Box-score screenshot.")
    p.add_argument("--out", required=True, type=Path, help="Path to write the extraction JSON artifact.")

    roster = p.add_mutually_exclusive_group(required=True)
    roster.add_argument("--roster-json", type=Path, help='JSON object {"<player_id>": "<gamertag>", ...}.')
    roster.add_argument("--db", type=Path, help="SQLite database: roster is read from it, stat lines written to it.")

    game = p.add_mutually_exclusive_group()
    game.add_argument("--game-id", type=int, default=None, help="Existing game to write stat lines to (requires --db).")
    game.add_argument("--new-game", action="store_true", help="Create a DRAFT game for this image (requires --db).")

    p.add_argument("--preset", choices=sorted(PRESETS), default="full", help="Crop layout preset.")
    p.add_argument(
        "--crop",
        type=float,
        nargs=4,
        metavar=("X1", "X2", "Y1", "Y2"),
        default=None,
        help="Explicit fractional crop bounds (overrides --preset).",
    )
    p.add_argument("--debug-crop", type=Path, default=None, help="Keep the cropped table PNG at this path.")

    p.add_argument("--min-x-fraction", type=float, default=0.03)
    p.add_argument("--y-threshold", type=int, default=14)
    p.add_argument("--min-confidence", type=int, default=40)
    p.add_argument("--tie-policy", choices=[t.value for t in RosterTiePolicy], default=RosterTiePolicy.FIRST.value)
    p.add_argument("--merge-split-pairs", action="store_true", default=False)

    p.add_argument("--tesseract", default="tesseract")
    p.add_argument("--timeout-s", type=float, default=None)
    p.add_argument("--log-level", default="INFO")
    return p


def _load_roster_json(path: Path) -> dict[PlayerId, str]:
    raw: Any = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise TypeError("roster JSON must be an object mapping player id -> gamertag")
    out: dict[PlayerId, str] = {}
    for k, v in raw.items():
        key: PlayerId = int(k) if str(k).isdigit() else str(k)
        out[key] = str(v)
    return out


def _failure(code: str, message: str, detail: dict[str, Any] | None) -> ExtractionResult:
    return ExtractionResult(
        ok=False,
        stat_lines=[],
        matched=0,
        written=0,
        parse_failures=0,
        errors=[ExtractionError(code=code, message=message, detail=detail)],
        meta={},
    )


def main(argv: list[str] | None = None) -> int:
    p = _build_arg_parser()
    args = p.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    if (args.game_id is not None or args.new_game) and args.db is None:
        p.error("--game-id/--new-game require --db")

    try:
        bounds = CropBounds(*args.crop) if args.crop else PRESETS[args.preset]
        config = ExtractionConfig(
            crop=bounds,
            rows=RowConfig(
                min_x_fraction=args.min_x_fraction,
                y_threshold=args.y_threshold,
                min_confidence=args.min_confidence,
            ),
            parse=StatParseConfig(merge_split_pairs=args.merge_split_pairs),
            tie_policy=RosterTiePolicy(args.tie_policy),
            debug_crop_path=args.debug_crop,
        )
        config.validate()
        ocr_config = OcrConfig(binary=args.tesseract, timeout_s=args.timeout_s)
    except ValueError as e:
        p.error(str(e))

    store: SqliteStatStore | None = None
    game_id: int | None = args.game_id
    if args.db is not None:
        store = SqliteStatStore(args.db)
        store.init_schema()
        roster = store.load_roster()
        if args.new_game:
            game_id = store.create_draft_game(
                played_at=datetime.date.today().isoformat(),
                image_path=str(args.image),
            )
            log.info("created DRAFT game #%d", game_id)
    else:
        roster = _load_roster_json(args.roster_json)

    if store is not None and game_id is not None and not store.game_exists(game_id):
        detail = {"db": str(args.db), "game_id": game_id}
        result = _failure("GAME_NOT_FOUND", f"game #{game_id} does not exist", detail)
    else:
        try:
            result = run_extraction(
                args.image,
                roster,
                ocr_config=ocr_config,
                config=config,
                sink=store,
                game_id=game_id,
            )
        except ImageReadError as e:
            result = _failure("IMAGE_READ_ERROR", str(e), {"image": str(args.image)})
        except OcrInvocationError as e:
            result = _failure(e.code, e.message, e.detail)
        except sqlite3.Error as e:
            result = _failure("STORAGE_ERROR", str(e), {"db": str(args.db), "game_id": game_id})

    write_extraction_json_artifact(result=result, out_file=args.out)

    summary = {
        "ok": result.ok,
        "game_id": game_id,
        "matched": result.matched,
        "written": result.written,
        "parse_failures": result.parse_failures,
    }
    print(json.dumps(summary, sort_keys=True, separators=(",", ":"), ensure_ascii=False))

    return 0 if result.ok else 2


if __name__ == "__main__":
    raise SystemExit(main())
