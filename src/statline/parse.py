from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from contracts.boxscore import ZERO_PAIR, PlayerId, ShotPair, StatLine, Team

from .config import StatParseConfig

log = logging.getLogger(__name__)

# Box-score column order before the shooting splits.
BASE_STAT_COUNT = 7

_PAIR = re.compile(r"^([0-9]{1,2})\s*/\s*([0-9]{1,2})$")
_INT = re.compile(r"\b[0-9]{1,3}\b")
_GRADE = re.compile(r"^[ABCDF][+-]?$")
_NUM = re.compile(r"^[0-9]{1,2}$")
_NUM_SLASH = re.compile(r"^[0-9]{1,2}/$")
_SLASH_NUM = re.compile(r"^/[0-9]{1,2}$")

# OCR confusions seen on the stat table: O for zero, V for the pair slash.
_CONFUSIONS = str.maketrans({"O": "0", "o": "0", "V": "/", "v": "/"})


class RowParseFailure(Exception):
    """
    A row could not be turned into a StatLine. Non-fatal: the row is skipped.
    """

    def __init__(self, reason: str, tokens: Sequence[str]) -> None:
        super().__init__(f"{reason}: {list(tokens)!r}")
        self.reason = reason
        self.tokens = list(tokens)


def assign_team(center_y: int, midpoint_y: int) -> Team:
    # Boundary is inclusive to B.
    return Team.A if center_y < midpoint_y else Team.B


def is_header_row(tokens: Sequence[str], markers: Sequence[str]) -> bool:
    upper = " ".join(tokens).upper()
    return any(m in upper for m in markers)


def correct_tokens(tokens: Sequence[str]) -> list[str]:
    """
    Apply the narrow OCR-confusion fixes and drop letter-grade overlays.
    """

    out: list[str] = []
    for tok in tokens:
        s = (tok or "").strip()
        if s == "":
            continue
        s = s.translate(_CONFUSIONS)
        if _GRADE.match(s):
            continue
        out.append(s)
    return out


def merge_split_pairs(tokens: Sequence[str]) -> list[str]:
    out: list[str] = []
    i = 0
    n = len(tokens)
    while i < n:
        tok = tokens[i]
        nxt = tokens[i + 1] if i + 1 < n else None
        nxt2 = tokens[i + 2] if i + 2 < n else None

        if _NUM.match(tok) and nxt == "/" and nxt2 is not None and _NUM.match(nxt2):
            out.append(f"{tok}/{nxt2}")
            i += 3
        elif nxt is not None and (
            (_NUM_SLASH.match(tok) and _NUM.match(nxt)) or (_NUM.match(tok) and _SLASH_NUM.match(nxt))
        ):
            out.append(tok + nxt)
            i += 2
        else:
            out.append(tok)
            i += 1
    return out


def classify_tokens(tokens: Sequence[str]) -> tuple[list[int], list[tuple[int, int]]]:
    """
    Split corrected tokens into (integers before the first pair, shot pairs).

    Integers after the first pair belong to the shooting columns and are
    ignored.
    """

    ints: list[int] = []
    pairs: list[tuple[int, int]] = []
    seen_pair = False

    for s in tokens:
        m = _PAIR.match(s)
        if m:
            pairs.append((int(m.group(1)), int(m.group(2))))
            seen_pair = True
            continue
        if not seen_pair:
            ints.extend(int(v) for v in _INT.findall(s))

    return ints, pairs


def parse_stat_line(
    tokens: Sequence[str],
    *,
    player_id: PlayerId,
    gamertag: str,
    center_y: int,
    midpoint_y: int,
    config: StatParseConfig | None = None,
) -> StatLine:
    """
    Parse one matched player's row into a StatLine.

    Layout: ... PTS REB AST STL BLK FOULS TO FG 3PT FT, where the shooting
    columns are made/attempted pairs. Extra leading integers (jersey
    numbers, overlay digits) are dropped by taking the LAST seven integers
    seen before the first pair.

    Raises RowParseFailure when the row does not fit the layout.
    """

    cfg = config or StatParseConfig()

    if is_header_row(tokens, cfg.header_markers):
        raise RowParseFailure("HEADER_ROW", tokens)

    corrected = correct_tokens(tokens)
    if cfg.merge_split_pairs:
        corrected = merge_split_pairs(corrected)

    ints, pairs = classify_tokens(corrected)

    if not pairs:
        raise RowParseFailure("NO_SHOT_PAIR", tokens)
    if len(ints) < BASE_STAT_COUNT:
        raise RowParseFailure("TOO_FEW_INTEGERS", tokens)

    pts, reb, ast, stl, blk, fouls, turnovers = ints[-BASE_STAT_COUNT:]

    # Every pair on the row must be sane, not just the three that are kept.
    if any(not ShotPair.is_valid(made, att) for made, att in pairs):
        raise RowParseFailure("SHOT_PAIR_INVALID", tokens)

    shooting = pairs[:3]

    fg = ShotPair(*shooting[0])
    three_pt = ShotPair(*shooting[1]) if len(shooting) > 1 else ZERO_PAIR
    ft = ShotPair(*shooting[2]) if len(shooting) > 2 else ZERO_PAIR

    return StatLine(
        team=assign_team(center_y, midpoint_y),
        player_id=player_id,
        gamertag=gamertag,
        pts=pts,
        reb=reb,
        ast=ast,
        stl=stl,
        blk=blk,
        fouls=fouls,
        turnovers=turnovers,
        fg=fg,
        three_pt=three_pt,
        ft=ft,
    )
