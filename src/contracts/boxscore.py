from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

PlayerId = Union[int, str]


class Team(str, Enum):
    """
    Table half a stat line was read from: A = top table, B = bottom table.
    """

    A = "A"
    B = "B"


@dataclass(frozen=True, slots=True)
class ShotPair:
    made: int
    attempted: int

    def __post_init__(self) -> None:
        if self.made < 0 or self.attempted < 0:
            raise ValueError("shot pair counts must be >= 0")
        if self.made > self.attempted:
            raise ValueError(f"made ({self.made}) exceeds attempted ({self.attempted})")

    @staticmethod
    def is_valid(made: int, attempted: int) -> bool:
        return 0 <= made <= attempted

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "ShotPair":
        return ShotPair(made=int(d["made"]), attempted=int(d["attempted"]))

    def to_dict(self) -> dict[str, Any]:
        return {"made": self.made, "attempted": self.attempted}


ZERO_PAIR = ShotPair(0, 0)


@dataclass(frozen=True, slots=True)
class RosterEntry:
    player_id: PlayerId
    display_name: str
    normalized_name: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "player_id": self.player_id,
            "display_name": self.display_name,
            "normalized_name": self.normalized_name,
        }


_BASE_FIELDS = ("pts", "reb", "ast", "stl", "blk", "fouls", "turnovers")


@dataclass(frozen=True, slots=True)
class StatLine:
    """
    One validated box-score line for a matched player.

    Self-contained: carries no reference back to the tokens or row it was
    parsed from. This is the unit handed to a StatSink.
    """

    team: Team
    player_id: PlayerId
    gamertag: str
    pts: int
    reb: int
    ast: int
    stl: int
    blk: int
    fouls: int
    turnovers: int
    fg: ShotPair
    three_pt: ShotPair
    ft: ShotPair

    def __post_init__(self) -> None:
        for name in _BASE_FIELDS:
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0")

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "StatLine":
        return StatLine(
            team=Team(d["team"]),
            player_id=d["player_id"],
            gamertag=str(d.get("gamertag", "")),
            pts=int(d["pts"]),
            reb=int(d["reb"]),
            ast=int(d["ast"]),
            stl=int(d["stl"]),
            blk=int(d["blk"]),
            fouls=int(d["fouls"]),
            turnovers=int(d["turnovers"]),
            fg=ShotPair.from_dict(d["fg"]),
            three_pt=ShotPair.from_dict(d["three_pt"]),
            ft=ShotPair.from_dict(d["ft"]),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"team": self.team.value, "player_id": self.player_id, "gamertag": self.gamertag}
        for name in _BASE_FIELDS:
            out[name] = getattr(self, name)
        out["fg"] = self.fg.to_dict()
        out["three_pt"] = self.three_pt.to_dict()
        out["ft"] = self.ft.to_dict()
        return out
