"""
Unit tests for roster bookkeeping: player edits, presence and rounds.
"""
import unittest
from datetime import date

from matchday.models import AttendanceTag, Player, Position, PresenceStatus, Round
from matchday.services import (
    PlayerValidationError, PresenceError, add_player, archive_season, build_round, compute_stats,
    create_player, delete_player, delete_round, ensure_presence_defaults, save_round,
    set_presence, update_player, validate_player
)


class TestPlayerEdits(unittest.TestCase):
    """Test cases for player creation, update and deletion."""

    def setUp(self) -> None:
        """Set up test fixtures."""
        self.players = [
            create_player("Beto", Position.FORWARD, player_id="p1", skill_rating=8),
            create_player("Caio", Position.GOALKEEPER, player_id="p2"),
        ]

    def test_create_player_generates_id(self) -> None:
        """Test a UUID is assigned when no id is given."""
        player = create_player("  Duda  ")
        self.assertTrue(player.id)
        self.assertEqual(player.name, "Duda")
        self.assertNotEqual(player.id, create_player("Duda").id)

    def test_create_player_validation(self) -> None:
        """Test invalid data is rejected."""
        with self.assertRaises(PlayerValidationError):
            create_player("")
        with self.assertRaises(PlayerValidationError):
            create_player("Edu", skill_rating=11)
        with self.assertRaises(PlayerValidationError):
            create_player("Edu", birth_day=30, birth_month=2)
        with self.assertRaises(PlayerValidationError):
            create_player("Edu", birth_day=12)

    def test_validate_player_collects_errors(self) -> None:
        """Test every problem is reported."""
        errors = validate_player(Player(id="", name=" ", skill_rating=0))
        self.assertEqual(len(errors), 3)
        self.assertEqual(validate_player(self.players[0]), [])

    def test_add_player_rejects_duplicate_id(self) -> None:
        with self.assertRaises(PlayerValidationError):
            add_player(self.players, Player(id="p1", name="Clone"))
        self.assertEqual(len(add_player(self.players, Player(id="p3", name="New"))), 3)

    def test_update_player(self) -> None:
        """Test edits produce a new record and keep the id."""
        updated = update_player(self.players, "p1", skill_rating=9, id="other")
        self.assertEqual(updated[0].skill_rating, 9)
        self.assertEqual(updated[0].id, "p1")
        self.assertEqual(self.players[0].skill_rating, 8)

    def test_update_player_errors(self) -> None:
        with self.assertRaises(PlayerValidationError):
            update_player(self.players, "missing", skill_rating=3)
        with self.assertRaises(PlayerValidationError):
            update_player(self.players, "p1", skill_rating=0)

    def test_delete_player_strips_attendance(self) -> None:
        """Test deleting a player removes them from history too."""
        rounds = [Round(id="r1", date=date(2025, 1, 8),
                        attendance={"p1": frozenset({AttendanceTag.PLAYED}),
                                    "p2": frozenset({AttendanceTag.DINED})})]

        players, rounds_after = delete_player(self.players, rounds, "p1")

        self.assertEqual([p.id for p in players], ["p2"])
        self.assertEqual(set(rounds_after[0].attendance), {"p2"})
        self.assertIn("p1", rounds[0].attendance)


class TestPresence(unittest.TestCase):
    """Test presence defaults and role restrictions."""

    def setUp(self) -> None:
        self.member = Player(id="m", name="Member")
        self.social = Player(id="s", name="Social", position=Position.SOCIAL)

    def test_defaults_to_absent(self) -> None:
        presence = ensure_presence_defaults({"m": PresenceStatus.PLAYING_FULL},
                                            [self.member, self.social])
        self.assertEqual(presence, {"m": PresenceStatus.PLAYING_FULL,
                                    "s": PresenceStatus.ABSENT})

    def test_social_member_cannot_play(self) -> None:
        with self.assertRaises(PresenceError):
            set_presence({}, self.social, PresenceStatus.PLAYING_FULL)
        presence = set_presence({}, self.social, PresenceStatus.DINNER_ONLY)
        self.assertEqual(presence["s"], PresenceStatus.DINNER_ONLY)

    def test_member_can_take_any_status(self) -> None:
        for status in PresenceStatus:
            self.assertEqual(set_presence({}, self.member, status)["m"], status)


class TestRounds(unittest.TestCase):
    """Test round recording and season archiving."""

    def setUp(self) -> None:
        self.players = [
            Player(id="a", name="A"),
            Player(id="b", name="B"),
            Player(id="s", name="S", position=Position.SOCIAL),
            Player(id="t", name="T", position=Position.SOCIAL),
        ]

    def test_build_round(self) -> None:
        """Test untagged members are absent and social members are never recorded."""
        tags = {
            "a": [AttendanceTag.PLAYED, AttendanceTag.ABSENT],
            "s": [AttendanceTag.DINED],
        }

        round_ = build_round(self.players, tags, date(2025, 1, 8), round_id="r1")

        self.assertEqual(round_.id, "r1")
        self.assertEqual(round_.tags_for("a"), frozenset({AttendanceTag.PLAYED}))
        self.assertEqual(round_.tags_for("b"), frozenset({AttendanceTag.ABSENT}))
        self.assertNotIn("s", round_.attendance)
        self.assertNotIn("t", round_.attendance)

    def test_social_members_never_score(self) -> None:
        """Test a dinner tag on a social member earns no points."""
        round_ = build_round(self.players, {"s": [AttendanceTag.DINED]}, date(2025, 1, 8))
        stats = compute_stats(self.players, [round_], 2025)
        self.assertEqual(stats["s"].total_points_year, 0)
        self.assertEqual(stats["s"].dinners_attended, 0)

    def test_save_round_replaces_same_id(self) -> None:
        first = build_round(self.players, {}, date(2025, 1, 8), round_id="r1")
        edited = build_round(self.players, {"a": [AttendanceTag.PLAYED]}, date(2025, 1, 8),
                             round_id="r1")

        rounds = save_round(save_round([], first), edited)

        self.assertEqual(rounds, [edited])
        self.assertEqual(delete_round(rounds, "r1"), [])

    def test_archive_season(self) -> None:
        """Test a season archive holds only its year, oldest first."""
        rounds = [
            Round(id="late", date=date(2024, 12, 18), attendance={}),
            Round(id="new", date=date(2025, 1, 8), attendance={}),
            Round(id="early", date=date(2024, 1, 3), attendance={}),
        ]

        archive, remaining = archive_season(rounds, 2024)

        self.assertEqual(archive.year, 2024)
        self.assertEqual([r.id for r in archive.rounds], ["early", "late"])
        self.assertEqual([r.id for r in remaining], ["new"])


if __name__ == "__main__":
    unittest.main()
