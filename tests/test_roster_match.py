from __future__ import annotations

import unittest

from roster.match import RosterTiePolicy, build_roster, match_row, normalize_name


class TestNormalizeName(unittest.TestCase):
    def test_strips_overlay_symbols_and_case(self) -> None:
        self.assertEqual(normalize_name("@Lying_Bible!"), "lyingbible")
        self.assertEqual(normalize_name("  Hoop Z 23 "), "hoopz23")
        self.assertEqual(normalize_name(None), "")

    def test_is_idempotent(self) -> None:
        for raw in ("@Lying_Bible!", "xX_Sn1per_Xx", "ÉLAN", "", "plain"):
            once = normalize_name(raw)
            self.assertEqual(normalize_name(once), once)


class TestMatchRow(unittest.TestCase):
    def setUp(self) -> None:
        self.roster = build_roster({1: "Lying_Bible", 2: "Hoopz", 3: "@@@"})

    def test_roster_build_skips_names_that_normalize_to_nothing(self) -> None:
        self.assertEqual([e.player_id for e in self.roster], [1, 2])
        self.assertEqual(self.roster[0].normalized_name, "lyingbible")

    def test_split_gamertag_tokens_still_match(self) -> None:
        entry = match_row(["@", "lying", "bible", "12", "4"], self.roster)
        self.assertIsNotNone(entry)
        self.assertEqual(entry.player_id, 1)

    def test_unknown_row_is_no_match(self) -> None:
        self.assertIsNone(match_row(["PLAYER", "PTS", "REB"], self.roster))
        self.assertIsNone(match_row([], self.roster))
        self.assertIsNone(match_row(["@", "!"], self.roster))

    def test_tie_policies(self) -> None:
        roster = build_roster({10: "Bob", 11: "Bobby"})
        row = ["@Bobby", "10", "3"]

        self.assertEqual(match_row(row, roster, RosterTiePolicy.FIRST).player_id, 10)
        self.assertEqual(match_row(row, roster, RosterTiePolicy.LONGEST).player_id, 11)
        self.assertIsNone(match_row(row, roster, RosterTiePolicy.REJECT))

    def test_reject_policy_accepts_unambiguous_rows(self) -> None:
        roster = build_roster({10: "Bob", 11: "Bobby"})
        entry = match_row(["bob", "7"], roster, RosterTiePolicy.REJECT)
        self.assertEqual(entry.player_id, 10)


if __name__ == "__main__":
    unittest.main()
