"""
Player model for Matchday.

This module contains the Player record which represents a member of the group,
along with the closed set of positions a member can hold.
"""
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from ..utils.constants import DEFAULT_SKILL_RATING


class Position(Enum):
    """Positions a group member can hold."""
    GOALKEEPER = "goalkeeper"
    DEFENDER = "defender"
    FULLBACK = "fullback"
    DEFENSIVE_MIDFIELDER = "defensive_midfielder"
    MIDFIELDER = "midfielder"
    FORWARD = "forward"
    # Member who takes part in the dinner but not in the match
    SOCIAL = "social"

    @property
    def is_field(self) -> bool:
        """Whether this position is ranked and fills a field-player slot."""
        return self not in (Position.GOALKEEPER, Position.SOCIAL)


@dataclass(frozen=True)
class ContactInfo:
    """Player contact information."""
    email: Optional[str] = None
    phone: Optional[str] = None
    favorite_team: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "email": self.email,
            "phone": self.phone,
            "favorite_team": self.favorite_team,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'ContactInfo':
        """Create from dictionary for JSON deserialization."""
        if not data:
            return cls()
        return cls(
            email=data.get("email") or None,
            phone=data.get("phone") or None,
            favorite_team=data.get("favorite_team") or None,
        )


def parse_birth_date(value: Optional[str]) -> Tuple[Optional[int], Optional[int]]:
    """
    Parse a stored birth date into (day, month).

    Accepts "DD-MM" and full ISO dates ("YYYY-MM-DD"); the year is discarded.

    Args:
        value: Raw birth date string

    Returns:
        (day, month) tuple, or (None, None) if missing or malformed
    """
    if not value:
        return None, None
    parts = value.strip().split("-")
    try:
        if len(parts) == 3:
            parsed = date.fromisoformat(value.strip())
            return parsed.day, parsed.month
        if len(parts) == 2:
            return int(parts[0]), int(parts[1])
    except ValueError:
        pass  # Malformed birth date, treat as unknown
    return None, None


@dataclass(frozen=True)
class Player:
    """
    Represents a member of the football group.

    Records are immutable; edits produce a new record through
    ``dataclasses.replace`` (see ``services.roster_service.update_player``).

    Attributes:
        id: Opaque unique identifier
        name: Display name
        position: Playing position (or the social role)
        skill_rating: Skill rating used for team balancing (1-10)
        base_points: Season points carried over before the first round
        is_fee_exempt: Whether the member is exempt from monthly fees
        birth_day: Day of birth (1-31), optional
        birth_month: Month of birth (1-12), optional
        full_name: Full legal name, optional
        member_number: Club membership number, optional
        contact_info: Contact information
    """
    id: str
    name: str
    position: Position = Position.MIDFIELDER
    skill_rating: int = DEFAULT_SKILL_RATING
    base_points: int = 0
    is_fee_exempt: bool = False
    birth_day: Optional[int] = None
    birth_month: Optional[int] = None
    full_name: Optional[str] = None
    member_number: Optional[str] = None
    contact_info: ContactInfo = field(default_factory=ContactInfo)

    @property
    def is_goalkeeper(self) -> bool:
        return self.position is Position.GOALKEEPER

    @property
    def is_social(self) -> bool:
        return self.position is Position.SOCIAL

    @property
    def is_field_player(self) -> bool:
        """Whether the player is ranked and eligible for field-player slots."""
        return self.position.is_field

    def has_birthday_between(self, start: date, end: date) -> bool:
        """
        Check whether the player's birthday falls within [start, end].

        The range may cross a year boundary (e.g. Dec 29 - Jan 4).

        Args:
            start: First day of the range
            end: Last day of the range

        Returns:
            True if the birthday (day, month) lies inside the range
        """
        if self.birth_day is None or self.birth_month is None:
            return False
        birthday = (self.birth_month, self.birth_day)
        first = (start.month, start.day)
        last = (end.month, end.day)
        if first <= last:
            return first <= birthday <= last
        return birthday >= first or birthday <= last

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert player to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the player
        """
        birth_date = None
        if self.birth_day is not None and self.birth_month is not None:
            birth_date = f"{self.birth_day:02d}-{self.birth_month:02d}"
        return {
            "id": self.id,
            "name": self.name,
            "position": self.position.value,
            "skill_rating": self.skill_rating,
            "base_points": self.base_points,
            "is_fee_exempt": self.is_fee_exempt,
            "birth_date": birth_date,
            "full_name": self.full_name,
            "member_number": self.member_number,
            "contact_info": self.contact_info.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Player':
        """
        Create player from dictionary for JSON deserialization.

        Args:
            data: Dictionary representation of player

        Returns:
            Player instance

        Raises:
            KeyError: If id or name is missing
            ValueError: If position or numeric fields are invalid
        """
        birth_day, birth_month = parse_birth_date(data.get("birth_date"))

        return cls(
            id=str(data["id"]),
            name=data["name"],
            position=Position(data.get("position", Position.MIDFIELDER.value)),
            skill_rating=int(data.get("skill_rating", DEFAULT_SKILL_RATING)),
            base_points=int(data.get("base_points", 0) or 0),
            is_fee_exempt=bool(data.get("is_fee_exempt", False)),
            birth_day=birth_day,
            birth_month=birth_month,
            full_name=data.get("full_name") or None,
            member_number=data.get("member_number") or None,
            contact_info=ContactInfo.from_dict(data.get("contact_info")),
        )
