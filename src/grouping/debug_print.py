from __future__ import annotations

import argparse
from pathlib import Path

from ocr.artifacts import read_tokens_json_artifact

from .config import RowConfig
from .group_tokens import group_tokens_into_rows


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="boxscore-rows-debug")
    ap.add_argument("--tokens", required=True, type=Path, help="Token JSON artifact (boxscore-ocr output).")
    ap.add_argument("--crop-width", required=True, type=int, help="Width in px of the image the tokens came from.")
    ap.add_argument("--min-x-fraction", type=float, default=0.03)
    ap.add_argument("--y-threshold", type=int, default=14)
    ap.add_argument("--min-confidence", type=int, default=40)
    ap.add_argument("--show-dropped", action="store_true")
    args = ap.parse_args(argv)

    tokens = read_tokens_json_artifact(args.tokens)
    cfg = RowConfig(
        min_x_fraction=args.min_x_fraction,
        y_threshold=args.y_threshold,
        min_confidence=args.min_confidence,
    )
    result = group_tokens_into_rows(tokens, crop_width=args.crop_width, config=cfg)

    counts = result.meta["counts"]
    print(f"tokens_in={counts['tokens_in']} tokens_used={counts['tokens_used']} rows={counts['rows']}")

    print("\n-- ROWS (table order) --")
    for i, row in enumerate(result.rows):
        print(f"r{i:03d} y={row.center_y:>5} :: {row.text()}")

    if args.show_dropped:
        print("\n-- DROPPED --")
        for d in result.meta["dropped_tokens"]:
            print(f"  x={d['x']:>5} y={d['y']:>5} {d['reason']:<24} text={d['text']!r}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
