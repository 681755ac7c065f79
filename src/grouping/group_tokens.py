from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from contracts.ocr import Row, Token

from .config import RowConfig

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RowGroupingResult:
    rows: list[Row]
    meta: dict[str, Any] = field(default_factory=dict)


def _drop_reason(tok: Token, *, min_x: int, config: RowConfig) -> str | None:
    if tok.text.strip() == "":
        return "WHITESPACE"
    if tok.x < min_x:
        return "LEFT_MARGIN"
    # Missing confidence is not a quality signal; only known-low values are dropped.
    if tok.confidence is not None and 0 <= tok.confidence < config.min_confidence:
        return "BELOW_CONFIDENCE_FLOOR"
    return None


def _to_row(cluster: list[Token]) -> Row:
    ordered = sorted(cluster, key=lambda t: t.x)
    center_y = sum(t.y for t in ordered) // len(ordered)
    return Row(center_y=center_y, tokens=[t.text for t in ordered])


def _cluster_rows(tokens: list[Token], *, y_threshold: int) -> list[Row]:
    # Greedy single pass over tokens sorted by (y, x). A token joins the
    # current cluster when it is within y_threshold of the cluster's FIRST
    # token; otherwise it starts a new cluster. Rows therefore come out in
    # ascending y. Skewed (non-monotonic) rows are not supported.
    sweep = sorted(tokens, key=lambda t: (t.y, t.x))

    rows: list[Row] = []
    current: list[Token] = []
    anchor_y = 0

    for tok in sweep:
        if not current:
            current = [tok]
            anchor_y = tok.y
            continue

        if abs(tok.y - anchor_y) <= y_threshold:
            current.append(tok)
        else:
            rows.append(_to_row(current))
            current = [tok]
            anchor_y = tok.y

    if current:
        rows.append(_to_row(current))
    return rows


def group_tokens_into_rows(tokens: list[Token], *, crop_width: int, config: RowConfig) -> RowGroupingResult:
    """
    Reconstruct visual table rows from unordered OCR word tokens.

    `crop_width` is the width of the image the tokens were read from; it
    scales the left-margin exclusion.
    """

    config.validate()
    min_x = int(crop_width * config.min_x_fraction)

    used: list[Token] = []
    dropped: list[dict[str, Any]] = []
    for tok in tokens:
        reason = _drop_reason(tok, min_x=min_x, config=config)
        if reason is not None:
            dropped.append({"text": tok.text, "x": tok.x, "y": tok.y, "reason": reason})
            continue
        used.append(tok)

    rows = _cluster_rows(used, y_threshold=config.y_threshold)
    log.debug("rows=%d tokens_used=%d dropped=%d", len(rows), len(used), len(dropped))

    meta: dict[str, Any] = {
        "params": {
            "min_x_fraction": config.min_x_fraction,
            "y_threshold": config.y_threshold,
            "min_confidence": config.min_confidence,
        },
        "derived": {"crop_width": crop_width, "min_x": min_x},
        "counts": {
            "tokens_in": len(tokens),
            "tokens_used": len(used),
            "rows": len(rows),
            "dropped_tokens_count": len(dropped),
        },
        "dropped_tokens": dropped,
    }
    return RowGroupingResult(rows=rows, meta=meta)
