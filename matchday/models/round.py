"""
Round model for Matchday.

A round is one saved day of attendance: which members played, which stayed
for dinner and which did not show up.
"""
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Tuple


class AttendanceTag(Enum):
    """What a member did on a given round."""
    PLAYED = "played"
    DINED = "dined"
    ABSENT = "absent"


def normalize_tags(tags: Iterable[AttendanceTag]) -> FrozenSet[AttendanceTag]:
    """
    Collapse a tag collection into a valid attendance set.

    ABSENT cannot be combined with PLAYED or DINED; when it is, the attendance
    tags win and ABSENT is dropped.

    Args:
        tags: Raw tags

    Returns:
        Valid frozen set of tags (possibly empty)
    """
    tag_set = frozenset(tags)
    if AttendanceTag.ABSENT in tag_set and len(tag_set) > 1:
        return tag_set - {AttendanceTag.ABSENT}
    return tag_set


def toggle_tag(tags: Iterable[AttendanceTag], tag: AttendanceTag) -> FrozenSet[AttendanceTag]:
    """
    Toggle a tag the way the operator's attendance sheet does.

    Toggling ABSENT either clears the record or makes ABSENT the only tag.
    Toggling PLAYED or DINED flips that tag and always drops ABSENT.

    Args:
        tags: Current tags for the player
        tag: Tag being toggled

    Returns:
        New tag set
    """
    current = frozenset(tags)
    if tag is AttendanceTag.ABSENT:
        return frozenset() if AttendanceTag.ABSENT in current else frozenset({AttendanceTag.ABSENT})
    if tag in current:
        return current - {tag}
    return (current - {AttendanceTag.ABSENT}) | {tag}


def _parse_tags(raw: Any) -> FrozenSet[AttendanceTag]:
    # Older saves stored a single tag string instead of a list
    if isinstance(raw, str):
        raw = [raw]
    return normalize_tags(AttendanceTag(value) for value in (raw or []))


@dataclass(frozen=True)
class Round:
    """
    Attendance for a single day.

    Attributes:
        id: Opaque unique identifier
        date: Calendar date of the round
        attendance: Player id -> attendance tags
    """
    id: str
    date: date
    attendance: Mapping[str, FrozenSet[AttendanceTag]] = field(default_factory=dict)

    def tags_for(self, player_id: str) -> FrozenSet[AttendanceTag]:
        """Get the attendance tags recorded for a player (empty if none)."""
        return self.attendance.get(player_id, frozenset())

    def without_player(self, player_id: str) -> 'Round':
        """Return a copy of this round with the player's record removed."""
        if player_id not in self.attendance:
            return self
        attendance = {pid: tags for pid, tags in self.attendance.items() if pid != player_id}
        return Round(id=self.id, date=self.date, attendance=attendance)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "attendance": {
                pid: sorted(tag.value for tag in tags)
                for pid, tags in self.attendance.items()
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Round':
        """
        Create from dictionary for JSON deserialization.

        Raises:
            KeyError: If id or date is missing
            ValueError: If the date or a tag is invalid
        """
        return cls(
            id=str(data["id"]),
            date=date.fromisoformat(data["date"]),
            attendance={
                str(pid): _parse_tags(raw)
                for pid, raw in (data.get("attendance") or {}).items()
            },
        )


@dataclass(frozen=True)
class SeasonArchive:
    """Rounds of a closed season, kept read-only for history reports."""
    year: int
    rounds: Tuple[Round, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "year": self.year,
            "rounds": [r.to_dict() for r in self.rounds],
        }
