from __future__ import annotations

import shutil
import unittest
from pathlib import Path

from contracts.boxscore import ShotPair, StatLine, Team
from storage.sqlite_store import SqliteStatStore


def _line(player_id: int, gamertag: str, pts: int, team: Team = Team.A) -> StatLine:
    return StatLine(
        team=team,
        player_id=player_id,
        gamertag=gamertag,
        pts=pts,
        reb=4,
        ast=1,
        stl=0,
        blk=2,
        fouls=1,
        turnovers=3,
        fg=ShotPair(9, 20),
        three_pt=ShotPair(0, 1),
        ft=ShotPair(4, 4),
    )


class TestSqliteStatStore(unittest.TestCase):
    def setUp(self) -> None:
        repo_root = Path(__file__).resolve().parents[1]
        self.root = repo_root / "artifacts" / "_test_sqlite_store"
        if self.root.exists():
            shutil.rmtree(self.root)
        self.store = SqliteStatStore(self.root / "boxscore.db")
        self.store.init_schema()
        # Safe to run every startup.
        self.store.init_schema()

    def tearDown(self) -> None:
        shutil.rmtree(self.root, ignore_errors=True)

    def test_roster_is_returned_in_id_order(self) -> None:
        a = self.store.add_player("Lying_Bible")
        b = self.store.add_player("Hoopz")
        self.assertEqual(self.store.load_roster(), {a: "Lying_Bible", b: "Hoopz"})

    def test_replace_overwrites_same_game_and_player(self) -> None:
        pid = self.store.add_player("Lying_Bible")
        other = self.store.add_player("Hoopz")
        game_id = self.store.create_draft_game(played_at="2026-10-18", image_path="data/images/game_1.png")

        self.store.replace_stat_line(game_id, _line(pid, "Lying_Bible", 12))
        self.store.replace_stat_line(game_id, _line(pid, "Lying_Bible", 21))
        self.store.replace_stat_line(game_id, _line(other, "Hoopz", 8, Team.B))

        lines = self.store.list_stat_lines(game_id)
        self.assertEqual(len(lines), 2)
        by_player = {s.player_id: s for s in lines}
        self.assertEqual(by_player[pid].pts, 21)
        self.assertEqual(by_player[pid], _line(pid, "Lying_Bible", 21))
        self.assertEqual(by_player[other].team, Team.B)

    def test_lines_are_scoped_per_game(self) -> None:
        pid = self.store.add_player("Lying_Bible")
        g1 = self.store.create_draft_game(played_at="2026-10-18")
        g2 = self.store.create_draft_game(played_at="2026-10-19")
        self.store.replace_stat_line(g1, _line(pid, "Lying_Bible", 12))

        self.assertEqual(len(self.store.list_stat_lines(g1)), 1)
        self.assertEqual(self.store.list_stat_lines(g2), [])


if __name__ == "__main__":
    unittest.main()
