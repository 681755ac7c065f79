"""
Shared contracts between the extraction stages.

crop -> ocr (Token) -> grouping (Row) -> roster (RosterEntry)
-> statline (StatLine) -> pipeline (ExtractionResult)

Stage code should consume/produce these contract objects (not ad-hoc dicts).
"""

from .boxscore import ZERO_PAIR, PlayerId, RosterEntry, ShotPair, StatLine, Team
from .extraction import ExtractionError, ExtractionResult
from .ocr import Row, Token

__all__ = [
    "Token",
    "Row",
    "PlayerId",
    "Team",
    "ShotPair",
    "ZERO_PAIR",
    "RosterEntry",
    "StatLine",
    "ExtractionError",
    "ExtractionResult",
]
