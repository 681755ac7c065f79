"""
Stat line parsing: one matched row's tokens -> validated StatLine.
"""

from .config import StatParseConfig
from .parse import (
    BASE_STAT_COUNT,
    RowParseFailure,
    assign_team,
    classify_tokens,
    correct_tokens,
    is_header_row,
    merge_split_pairs,
    parse_stat_line,
)

__all__ = [
    "BASE_STAT_COUNT",
    "RowParseFailure",
    "StatParseConfig",
    "assign_team",
    "classify_tokens",
    "correct_tokens",
    "is_header_row",
    "merge_split_pairs",
    "parse_stat_line",
]
