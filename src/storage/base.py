from __future__ import annotations

from abc import ABC, abstractmethod

from contracts.boxscore import StatLine


class StatSink(ABC):
    """
    Storage collaborator for extracted stat lines.

    Implementations must overwrite: a second write for the same
    (game_id, stat_line.player_id) replaces the first, so re-running
    extraction on the same image never duplicates rows.
    """

    @abstractmethod
    def replace_stat_line(self, game_id: int, stat_line: StatLine) -> None:
        raise NotImplementedError
