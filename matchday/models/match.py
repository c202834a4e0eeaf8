"""Match-day models: configuration, roster selection results, team assignments and goals."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, FrozenSet, Iterator, Optional, Tuple, Union

from .player import Player
from ..utils.constants import DEFAULT_GAME_SIZE, SUPPORTED_GAME_SIZES

# Incoming reserve id -> id of the starter it replaces
SubstitutionMap = Dict[str, str]

TEAM_A = "A"
TEAM_B = "B"


@dataclass(frozen=True)
class GameConfig:
    """Size of the upcoming match."""
    players_per_side: int = DEFAULT_GAME_SIZE

    def __post_init__(self):
        """Reject game sizes the group does not play."""
        if self.players_per_side not in SUPPORTED_GAME_SIZES:
            raise ValueError(
                f"Unsupported game size {self.players_per_side}: "
                f"must be one of {SUPPORTED_GAME_SIZES}"
            )

    @property
    def field_capacity(self) -> int:
        """Total field players needed for both sides."""
        return self.players_per_side * 2


@dataclass(frozen=True)
class RosterResult:
    """Starters and reserves selected for a match day."""
    starters: Tuple[Player, ...]
    reserves: Tuple[Player, ...] = ()

    @property
    def starter_ids(self) -> Tuple[str, ...]:
        return tuple(p.id for p in self.starters)

    @property
    def reserve_ids(self) -> Tuple[str, ...]:
        return tuple(p.id for p in self.reserves)

    @property
    def goalkeepers(self) -> Tuple[Player, ...]:
        return tuple(p for p in self.starters if p.is_goalkeeper)

    @property
    def field_starters(self) -> Tuple[Player, ...]:
        return tuple(p for p in self.starters if not p.is_goalkeeper)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "starters": [p.to_dict() for p in self.starters],
            "reserves": [p.to_dict() for p in self.reserves],
        }


# ---------- Selection failures ---------- #

@dataclass(frozen=True)
class WrongGoalkeeperCount:
    """Selection needs exactly two goalkeepers among the starting candidates."""
    actual: int
    required: int = 2

    @property
    def message(self) -> str:
        return (
            f"Exactly {self.required} goalkeepers must be playing the full match "
            f"or the first half, found {self.actual}"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"error_type": "WrongGoalkeeperCount", "error": self.message,
                "actual": self.actual, "required": self.required}


@dataclass(frozen=True)
class InsufficientFieldPlayers:
    """Fewer eligible field players present than the game size requires."""
    required: int
    available: int

    @property
    def shortfall(self) -> int:
        return self.required - self.available

    @property
    def message(self) -> str:
        return (
            f"{self.required} field players are needed but only {self.available} "
            f"are available ({self.shortfall} short)"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"error_type": "InsufficientFieldPlayers", "error": self.message,
                "required": self.required, "available": self.available,
                "shortfall": self.shortfall}


SelectionError = Union[WrongGoalkeeperCount, InsufficientFieldPlayers]
SelectionOutcome = Union[RosterResult, WrongGoalkeeperCount, InsufficientFieldPlayers]


# ---------- Team assignment ---------- #

@dataclass(frozen=True)
class PlacedPlayer:
    """A player on the tactical board with display coordinates (0-100)."""
    player: Player
    x: float
    y: float

    @property
    def id(self) -> str:
        return self.player.id

    def to_dict(self) -> Dict[str, Any]:
        data = self.player.to_dict()
        data["x"] = self.x
        data["y"] = self.y
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PlacedPlayer':
        """Create from a player dictionary carrying optional x/y (default: board centre)."""
        return cls(
            player=Player.from_dict(data),
            x=float(data.get("x", 50)),
            y=float(data.get("y", 50)),
        )


@dataclass(frozen=True)
class TeamAssignment:
    """Two disjoint teams built from the starters."""
    team_a: Tuple[PlacedPlayer, ...]
    team_b: Tuple[PlacedPlayer, ...]

    def team(self, side: str) -> Tuple[PlacedPlayer, ...]:
        """Get the players of side "A" or "B"."""
        if side == TEAM_A:
            return self.team_a
        if side == TEAM_B:
            return self.team_b
        raise ValueError(f"Unknown team side: {side}")

    def skill_sum(self, side: str) -> int:
        return sum(p.player.skill_rating for p in self.team(side))

    def ids(self, side: str) -> FrozenSet[str]:
        return frozenset(p.id for p in self.team(side))

    def side_of(self, player_id: str) -> Optional[str]:
        """Get the side a player was assigned to, or None."""
        if player_id in self.ids(TEAM_A):
            return TEAM_A
        if player_id in self.ids(TEAM_B):
            return TEAM_B
        return None

    def players(self) -> Iterator[Player]:
        """Iterate over every assigned player, team A first."""
        for placed in self.team_a + self.team_b:
            yield placed.player

    def to_dict(self) -> Dict[str, Any]:
        return {
            "team_a": [p.to_dict() for p in self.team_a],
            "team_b": [p.to_dict() for p in self.team_b],
            "skill_sum_a": self.skill_sum(TEAM_A),
            "skill_sum_b": self.skill_sum(TEAM_B),
        }


@dataclass(frozen=True)
class Goal:
    """A goal scored during a match, credited to a player and a side."""
    player_id: str
    player_name: str
    team: str

    def to_dict(self) -> Dict[str, Any]:
        return {"player_id": self.player_id, "player_name": self.player_name, "team": self.team}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Goal':
        return cls(
            player_id=str(data["player_id"]),
            player_name=data.get("player_name", ""),
            team=data["team"],
        )


@dataclass(frozen=True)
class MatchLineup:
    """
    The lineup in use during a match, including manual edits.

    Attributes:
        team_a: Players on side A
        team_b: Players on side B
        reserves: Players waiting to come in
        free_play: Teams were built by hand; no automatic substitutions
        goals: Goals scored so far, in the order they were recorded
    """
    team_a: Tuple[PlacedPlayer, ...] = ()
    team_b: Tuple[PlacedPlayer, ...] = ()
    reserves: Tuple[Player, ...] = field(default_factory=tuple)
    free_play: bool = False
    goals: Tuple[Goal, ...] = ()

    def all_ids(self) -> FrozenSet[str]:
        return frozenset(
            [p.id for p in self.team_a]
            + [p.id for p in self.team_b]
            + [p.id for p in self.reserves]
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "team_a": [p.to_dict() for p in self.team_a],
            "team_b": [p.to_dict() for p in self.team_b],
            "reserves": [p.to_dict() for p in self.reserves],
            "free_play": self.free_play,
            "goals": [g.to_dict() for g in self.goals],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MatchLineup':
        """
        Create a lineup from its dictionary form.

        Raises:
            KeyError: If a player or goal misses a required field
            ValueError: If a position or coordinate is invalid
        """
        return cls(
            team_a=tuple(PlacedPlayer.from_dict(p) for p in data.get("team_a") or []),
            team_b=tuple(PlacedPlayer.from_dict(p) for p in data.get("team_b") or []),
            reserves=tuple(Player.from_dict(p) for p in data.get("reserves") or []),
            free_play=bool(data.get("free_play", False)),
            goals=tuple(Goal.from_dict(g) for g in data.get("goals") or []),
        )


@dataclass(frozen=True)
class MatchRecord:
    """
    A finished match as kept in the group's history.

    Attributes:
        id: Opaque unique identifier
        played_on: Date of the match
        lineup: Final lineup, including the goals
        score_a: Final score of side A, if recorded
        score_b: Final score of side B, if recorded
    """
    id: str
    played_on: date
    lineup: MatchLineup
    score_a: Optional[int] = None
    score_b: Optional[int] = None

    @property
    def goals(self) -> Tuple[Goal, ...]:
        return self.lineup.goals

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": self.played_on.isoformat(),
            "lineup": self.lineup.to_dict(),
            "score_a": self.score_a,
            "score_b": self.score_b,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MatchRecord':
        """Create from dictionary; the date may be a plain date or a full ISO timestamp."""
        score_a, score_b = data.get("score_a"), data.get("score_b")
        return cls(
            id=str(data["id"]),
            played_on=date.fromisoformat(str(data["date"])[:10]),
            lineup=MatchLineup.from_dict(data.get("lineup") or {}),
            score_a=None if score_a in (None, "") else int(score_a),
            score_b=None if score_b in (None, "") else int(score_b),
        )
