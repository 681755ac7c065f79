from __future__ import annotations

import contextlib
import io
import json
import shutil
import sqlite3
import unittest
from pathlib import Path
from unittest.mock import patch

from PIL import Image

from contracts.ocr import Token
from ocr.engines.base import OcrEngine
from pipeline.cli import main
from storage.sqlite_store import SqliteStatStore


class _FakeEngine(OcrEngine):
    def extract_tokens(self, image_file: Path) -> list[Token]:
        texts = ["@Lying_Bible", "12", "4", "1", "0", "2", "1", "3", "9/20", "0/1", "4/4"]
        return [Token(text=t, x=40 + 30 * i, y=20, confidence=90) for i, t in enumerate(texts)]


class TestExtractCli(unittest.TestCase):
    def setUp(self) -> None:
        repo_root = Path(__file__).resolve().parents[1]
        self.root = repo_root / "artifacts" / "_test_extract_cli"
        if self.root.exists():
            shutil.rmtree(self.root)
        self.root.mkdir(parents=True, exist_ok=True)
        self.image = self.root / "game.png"
        Image.new("RGB", (640, 360), color=(0, 0, 0)).save(self.image, format="PNG")
        self.out = self.root / "out" / "extraction.json"

    def tearDown(self) -> None:
        shutil.rmtree(self.root, ignore_errors=True)

    def test_roster_json_run_writes_artifact(self) -> None:
        roster = self.root / "roster.json"
        roster.write_text(json.dumps({"1": "Lying_Bible", "2": "Hoopz"}), encoding="utf-8")

        with patch("pipeline.module.get_engine", return_value=_FakeEngine()):
            code = main(["--image", str(self.image), "--out", str(self.out), "--roster-json", str(roster)])

        self.assertEqual(code, 0)
        payload = json.loads(self.out.read_text(encoding="utf-8"))
        self.assertTrue(payload["ok"])
        self.assertEqual(payload["matched"], 1)
        self.assertEqual(payload["written"], 0)
        self.assertEqual(payload["stat_lines"][0]["player_id"], 1)
        self.assertEqual(payload["stat_lines"][0]["team"], "A")

    def test_db_run_creates_draft_game_and_writes_lines(self) -> None:
        db = self.root / "boxscore.db"
        store = SqliteStatStore(db)
        store.init_schema()
        pid = store.add_player("Lying_Bible")

        with patch("pipeline.module.get_engine", return_value=_FakeEngine()):
            code = main(["--image", str(self.image), "--out", str(self.out), "--db", str(db), "--new-game"])

        self.assertEqual(code, 0)
        payload = json.loads(self.out.read_text(encoding="utf-8"))
        game_id = payload["meta"]["game_id"]
        self.assertEqual(payload["written"], 1)
        lines = store.list_stat_lines(game_id)
        self.assertEqual([s.player_id for s in lines], [pid])

    def test_unknown_game_id_writes_failure_artifact(self) -> None:
        db = self.root / "boxscore.db"
        store = SqliteStatStore(db)
        store.init_schema()
        store.add_player("Lying_Bible")

        with patch("pipeline.module.get_engine", return_value=_FakeEngine()):
            code = main(["--image", str(self.image), "--out", str(self.out), "--db", str(db), "--game-id", "999"])

        self.assertEqual(code, 2)
        payload = json.loads(self.out.read_text(encoding="utf-8"))
        self.assertFalse(payload["ok"])
        self.assertEqual(payload["errors"][0]["code"], "GAME_NOT_FOUND")
        self.assertEqual(payload["errors"][0]["detail"]["game_id"], 999)
        self.assertEqual(store.list_stat_lines(999), [])

    def test_storage_failure_writes_failure_artifact(self) -> None:
        db = self.root / "boxscore.db"
        store = SqliteStatStore(db)
        store.init_schema()
        store.add_player("Lying_Bible")
        game_id = store.create_draft_game(played_at="2026-10-18")

        with patch("pipeline.module.get_engine", return_value=_FakeEngine()), patch.object(
            SqliteStatStore, "replace_stat_line", side_effect=sqlite3.OperationalError("database is locked")
        ):
            code = main(
                ["--image", str(self.image), "--out", str(self.out), "--db", str(db), "--game-id", str(game_id)]
            )

        self.assertEqual(code, 2)
        payload = json.loads(self.out.read_text(encoding="utf-8"))
        self.assertEqual(payload["errors"][0]["code"], "STORAGE_ERROR")
        self.assertIn("database is locked", payload["errors"][0]["message"])

    def test_out_of_range_crop_is_a_usage_error(self) -> None:
        roster = self.root / "roster.json"
        roster.write_text(json.dumps({"1": "Lying_Bible"}), encoding="utf-8")
        argv = ["--image", str(self.image), "--out", str(self.out), "--roster-json", str(roster)]

        with contextlib.redirect_stderr(io.StringIO()) as err:
            with self.assertRaises(SystemExit) as ctx:
                main([*argv, "--crop", "0.1", "1.5", "0.1", "0.9"])

        self.assertEqual(ctx.exception.code, 2)
        self.assertIn("error:", err.getvalue())
        self.assertFalse(self.out.exists())

    def test_unreadable_image_writes_failure_artifact(self) -> None:
        roster = self.root / "roster.json"
        roster.write_text(json.dumps({"1": "Lying_Bible"}), encoding="utf-8")

        code = main(
            ["--image", str(self.root / "missing.png"), "--out", str(self.out), "--roster-json", str(roster)]
        )

        self.assertEqual(code, 2)
        payload = json.loads(self.out.read_text(encoding="utf-8"))
        self.assertFalse(payload["ok"])
        self.assertEqual(payload["errors"][0]["code"], "IMAGE_READ_ERROR")
        self.assertEqual(payload["stat_lines"], [])


if __name__ == "__main__":
    unittest.main()
