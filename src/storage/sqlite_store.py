from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Any

from contracts.boxscore import ShotPair, StatLine, Team

from .base import StatSink

log = logging.getLogger(__name__)

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS players (
      id INTEGER PRIMARY KEY AUTOINCREMENT,
      gamertag TEXT NOT NULL UNIQUE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS games (
      id INTEGER PRIMARY KEY AUTOINCREMENT,
      played_at TEXT NOT NULL,
      team_a_score INTEGER,
      team_b_score INTEGER,
      status TEXT NOT NULL DEFAULT 'DRAFT',
      image_path TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS participants (
      id INTEGER PRIMARY KEY AUTOINCREMENT,
      game_id INTEGER NOT NULL,
      player_id INTEGER NOT NULL,
      team TEXT NOT NULL CHECK(team IN ('A','B')),
      pts INTEGER NOT NULL,
      reb INTEGER NOT NULL,
      ast INTEGER NOT NULL,
      stl INTEGER NOT NULL,
      blk INTEGER NOT NULL,
      fouls INTEGER NOT NULL,
      turnovers INTEGER NOT NULL,
      fgm INTEGER NOT NULL,
      fga INTEGER NOT NULL,
      tpm INTEGER NOT NULL,
      tpa INTEGER NOT NULL,
      ftm INTEGER NOT NULL,
      fta INTEGER NOT NULL,
      FOREIGN KEY(game_id) REFERENCES games(id) ON DELETE CASCADE,
      FOREIGN KEY(player_id) REFERENCES players(id)
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_participants_game ON participants(game_id)",
    "CREATE INDEX IF NOT EXISTS idx_participants_player ON participants(player_id)",
)


class SqliteStatStore(StatSink):
    """
    SQLite-backed players / games / participants store.

    Only the pieces the extraction flow needs: roster lookup, draft game
    creation and idempotent participant replacement.
    """

    def __init__(self, db_path: Path) -> None:
        self._db_path = db_path

    def _get_connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path))
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    def init_schema(self) -> None:
        """Create tables if they don't exist. Safe to run every startup."""
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = self._get_connection()
        try:
            with conn:
                for stmt in _SCHEMA:
                    conn.execute(stmt)
        finally:
            conn.close()

    def add_player(self, gamertag: str) -> int:
        conn = self._get_connection()
        try:
            with conn:
                cur = conn.execute("INSERT INTO players (gamertag) VALUES (?)", (gamertag,))
            return int(cur.lastrowid)
        finally:
            conn.close()

    def load_roster(self) -> dict[int, str]:
        """{player_id: gamertag}, in id order."""
        conn = self._get_connection()
        try:
            rows = conn.execute("SELECT id, gamertag FROM players ORDER BY id").fetchall()
            return {int(r["id"]): str(r["gamertag"]) for r in rows}
        finally:
            conn.close()

    def create_draft_game(self, *, played_at: str, image_path: str | None = None) -> int:
        conn = self._get_connection()
        try:
            with conn:
                cur = conn.execute(
                    "INSERT INTO games (played_at, status, image_path) VALUES (?, 'DRAFT', ?)",
                    (played_at, image_path),
                )
            return int(cur.lastrowid)
        finally:
            conn.close()

    def game_exists(self, game_id: int) -> bool:
        conn = self._get_connection()
        try:
            row = conn.execute("SELECT 1 FROM games WHERE id = ?", (game_id,)).fetchone()
            return row is not None
        finally:
            conn.close()

    def replace_stat_line(self, game_id: int, stat_line: StatLine) -> None:
        # Delete-then-insert in one transaction: the (game, player) key is
        # overwritten, never duplicated.
        conn = self._get_connection()
        try:
            with conn:
                conn.execute(
                    "DELETE FROM participants WHERE game_id = ? AND player_id = ?",
                    (game_id, stat_line.player_id),
                )
                conn.execute(
                    """
                    INSERT INTO participants (
                      game_id, player_id, team,
                      pts, reb, ast, stl, blk, fouls, turnovers,
                      fgm, fga, tpm, tpa, ftm, fta
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        game_id,
                        stat_line.player_id,
                        stat_line.team.value,
                        stat_line.pts,
                        stat_line.reb,
                        stat_line.ast,
                        stat_line.stl,
                        stat_line.blk,
                        stat_line.fouls,
                        stat_line.turnovers,
                        stat_line.fg.made,
                        stat_line.fg.attempted,
                        stat_line.three_pt.made,
                        stat_line.three_pt.attempted,
                        stat_line.ft.made,
                        stat_line.ft.attempted,
                    ),
                )
        finally:
            conn.close()
        log.debug("replaced participant game=%s player=%s", game_id, stat_line.player_id)

    def list_stat_lines(self, game_id: int) -> list[StatLine]:
        conn = self._get_connection()
        try:
            rows = conn.execute(
                """
                SELECT p.*, pl.gamertag AS gamertag
                FROM participants p
                JOIN players pl ON pl.id = p.player_id
                WHERE p.game_id = ?
                ORDER BY p.team, p.id
                """,
                (game_id,),
            ).fetchall()
        finally:
            conn.close()
        return [_row_to_stat_line(r) for r in rows]


def _row_to_stat_line(r: sqlite3.Row) -> StatLine:
    d: dict[str, Any] = dict(r)
    return StatLine(
        team=Team(d["team"]),
        player_id=int(d["player_id"]),
        gamertag=str(d["gamertag"]),
        pts=d["pts"],
        reb=d["reb"],
        ast=d["ast"],
        stl=d["stl"],
        blk=d["blk"],
        fouls=d["fouls"],
        turnovers=d["turnovers"],
        fg=ShotPair(d["fgm"], d["fga"]),
        three_pt=ShotPair(d["tpm"], d["tpa"]),
        ft=ShotPair(d["ftm"], d["fta"]),
    )
