from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class StatParseConfig:
    # Upper-cased substrings marking column-header / totals rows.
    header_markers: tuple[str, ...] = ("PTS", "TOTAL")
    # Re-join shot pairs the engine split apart ("9" "/" "20" -> "9/20").
    merge_split_pairs: bool = False

    def validate(self) -> None:
        for m in self.header_markers:
            if not m or m != m.upper():
                raise ValueError(f"header markers must be non-empty upper-case strings, got {m!r}")
