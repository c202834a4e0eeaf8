"""
Unit tests for the Player model and Position enum.

Tests role helpers, birthday ranges, immutability and serialization.
"""
import dataclasses
import unittest
from datetime import date

from matchday.models.player import ContactInfo, Player, Position, parse_birth_date


class TestPosition(unittest.TestCase):
    """Test Position role helpers."""

    def test_field_positions(self) -> None:
        """Every position except goalkeeper and social is a field position."""
        self.assertFalse(Position.GOALKEEPER.is_field)
        self.assertFalse(Position.SOCIAL.is_field)
        for position in (Position.DEFENDER, Position.FULLBACK, Position.DEFENSIVE_MIDFIELDER,
                         Position.MIDFIELDER, Position.FORWARD):
            self.assertTrue(position.is_field)


class TestPlayerModel(unittest.TestCase):
    """Test cases for the Player record."""

    def setUp(self) -> None:
        """Set up test fixtures."""
        self.keeper = Player(id="gk", name="Rogerio", position=Position.GOALKEEPER, skill_rating=7)
        self.member = Player(
            id="p1",
            name="Beto",
            position=Position.FORWARD,
            skill_rating=8,
            base_points=10,
            birth_day=7,
            birth_month=3,
            contact_info=ContactInfo(email="beto@example.com", phone="555-1234"),
        )

    def test_defaults(self) -> None:
        """Test default values of a minimal player."""
        player = Player(id="x", name="Guest")
        self.assertEqual(player.position, Position.MIDFIELDER)
        self.assertEqual(player.skill_rating, 5)
        self.assertEqual(player.base_points, 0)
        self.assertFalse(player.is_fee_exempt)
        self.assertIsNone(player.birth_day)

    def test_role_properties(self) -> None:
        """Test goalkeeper/social/field helpers."""
        social = Player(id="s", name="Dinner Guy", position=Position.SOCIAL)
        self.assertTrue(self.keeper.is_goalkeeper)
        self.assertFalse(self.keeper.is_field_player)
        self.assertTrue(social.is_social)
        self.assertFalse(social.is_field_player)
        self.assertTrue(self.member.is_field_player)

    def test_player_is_immutable(self) -> None:
        """Edits must go through dataclasses.replace."""
        with self.assertRaises(dataclasses.FrozenInstanceError):
            self.member.skill_rating = 3  # type: ignore[misc]
        edited = dataclasses.replace(self.member, skill_rating=3)
        self.assertEqual(edited.skill_rating, 3)
        self.assertEqual(self.member.skill_rating, 8)

    def test_birthday_within_range(self) -> None:
        """Test birthday lookup in a week that stays inside one year."""
        self.assertTrue(self.member.has_birthday_between(date(2025, 3, 3), date(2025, 3, 9)))
        self.assertFalse(self.member.has_birthday_between(date(2025, 3, 10), date(2025, 3, 16)))

    def test_birthday_range_across_new_year(self) -> None:
        """Test birthday lookup when the range wraps around December."""
        new_year = Player(id="ny", name="Ano", birth_day=2, birth_month=1)
        self.assertTrue(new_year.has_birthday_between(date(2024, 12, 29), date(2025, 1, 4)))
        self.assertFalse(self.member.has_birthday_between(date(2024, 12, 29), date(2025, 1, 4)))

    def test_birthday_unknown(self) -> None:
        """Players without birth date never match."""
        self.assertFalse(self.keeper.has_birthday_between(date(2025, 1, 1), date(2025, 12, 31)))

    def test_serialization_round_trip(self) -> None:
        """Test to_dict/from_dict preserve every field."""
        data = self.member.to_dict()
        self.assertEqual(data["position"], "forward")
        self.assertEqual(data["birth_date"], "07-03")
        self.assertEqual(Player.from_dict(data), self.member)

    def test_from_dict_minimal(self) -> None:
        """Test deserialization with only id and name."""
        player = Player.from_dict({"id": 12, "name": "Caio"})
        self.assertEqual(player.id, "12")
        self.assertEqual(player.position, Position.MIDFIELDER)
        self.assertEqual(player.contact_info, ContactInfo())

    def test_from_dict_invalid_position(self) -> None:
        """Unknown positions are rejected."""
        with self.assertRaises(ValueError):
            Player.from_dict({"id": "1", "name": "X", "position": "libero"})


class TestParseBirthDate(unittest.TestCase):
    """Test birth date parsing."""

    def test_day_month(self) -> None:
        self.assertEqual(parse_birth_date("07-03"), (7, 3))

    def test_iso_date(self) -> None:
        self.assertEqual(parse_birth_date("1980-03-07"), (7, 3))

    def test_missing_or_malformed(self) -> None:
        self.assertEqual(parse_birth_date(None), (None, None))
        self.assertEqual(parse_birth_date(""), (None, None))
        self.assertEqual(parse_birth_date("abc"), (None, None))
        self.assertEqual(parse_birth_date("1980-13-40"), (None, None))


if __name__ == "__main__":
    unittest.main()
