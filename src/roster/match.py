from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from enum import Enum

from contracts.boxscore import PlayerId, RosterEntry

_NON_ALNUM = re.compile(r"[^a-z0-9]")


class RosterTiePolicy(str, Enum):
    """
    What to do when more than one roster name is contained in a row.
    """

    FIRST = "first"  # roster iteration order wins
    LONGEST = "longest"  # longest normalized name wins; ties by roster order
    REJECT = "reject"  # ambiguous rows match nobody


def normalize_name(s: str | None) -> str:
    """
    Lower-case and strip every character outside [a-z0-9].

    Removes spaces, punctuation and overlay artifacts such as the leading
    '@' the game draws in front of a gamertag. Idempotent.
    """

    if s is None:
        return ""
    return _NON_ALNUM.sub("", s.lower())


def build_roster(players: Mapping[PlayerId, str]) -> list[RosterEntry]:
    """
    Normalize a {player_id: display_name} mapping, keeping its order.

    Names that normalize to "" are skipped: an empty name is a substring of
    every row.
    """

    out: list[RosterEntry] = []
    for player_id, name in players.items():
        norm = normalize_name(name)
        if norm == "":
            continue
        out.append(RosterEntry(player_id=player_id, display_name=name, normalized_name=norm))
    return out


def _joined(tokens: Iterable[str]) -> str:
    # No separators, so ["@", "lying", "bible"] still matches "lyingbible".
    return "".join(normalize_name(t) for t in tokens)


def match_row(
    tokens: Iterable[str],
    roster: list[RosterEntry],
    policy: RosterTiePolicy = RosterTiePolicy.FIRST,
) -> RosterEntry | None:
    joined = _joined(tokens)
    if joined == "":
        return None

    if policy == RosterTiePolicy.FIRST:
        for entry in roster:
            if entry.normalized_name and entry.normalized_name in joined:
                return entry
        return None

    hits = [e for e in roster if e.normalized_name and e.normalized_name in joined]
    if not hits:
        return None
    if policy == RosterTiePolicy.REJECT:
        return hits[0] if len(hits) == 1 else None

    best = hits[0]
    for e in hits[1:]:
        if len(e.normalized_name) > len(best.normalized_name):
            best = e
    return best
