"""
Roster service for Matchday.

This module provides the bookkeeping around the engine: player validation and
edits, presence defaults, round recording and season archiving. All functions
return new records and collections; nothing is mutated in place.
"""
import uuid
from dataclasses import replace
from datetime import date
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..models import (
    AttendanceTag, Player, Position, PresenceStatus, Round, SeasonArchive,
    allowed_statuses, normalize_tags
)
from ..utils import get_logger
from ..utils.constants import MAX_SKILL_RATING, MIN_SKILL_RATING

logger = get_logger(__name__)

_DAYS_IN_MONTH = {1: 31, 2: 29, 3: 31, 4: 30, 5: 31, 6: 30,
                  7: 31, 8: 31, 9: 30, 10: 31, 11: 30, 12: 31}


class PlayerValidationError(Exception):
    """Custom exception for player validation errors."""
    pass


class PresenceError(Exception):
    """Raised when a presence status is not allowed for a player."""
    pass


def validate_player(player: Player) -> List[str]:
    """
    Validate player data and return list of validation errors.

    Args:
        player: Player instance to validate

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    if not player.id:
        errors.append("Player id is required")

    if not player.name or not player.name.strip():
        errors.append("Player name is required")

    if not MIN_SKILL_RATING <= player.skill_rating <= MAX_SKILL_RATING:
        errors.append(
            f"Skill rating must be between {MIN_SKILL_RATING} and {MAX_SKILL_RATING}"
        )

    if (player.birth_day is None) != (player.birth_month is None):
        errors.append("Birth date needs both day and month")
    elif player.birth_month is not None:
        if not 1 <= player.birth_month <= 12:
            errors.append("Birth month must be between 1 and 12")
        elif not 1 <= player.birth_day <= _DAYS_IN_MONTH[player.birth_month]:
            errors.append("Birth day is not valid for the given month")

    return errors


def _check(player: Player) -> Player:
    errors = validate_player(player)
    if errors:
        raise PlayerValidationError(f"Player validation failed: {'; '.join(errors)}")
    return player


def create_player(name: str, position: Position = Position.MIDFIELDER,
                  player_id: Optional[str] = None, **fields) -> Player:
    """
    Create a new player with validation.

    Args:
        name: Display name
        position: Playing position
        player_id: Optional id (a random UUID is generated otherwise)
        **fields: Additional Player attributes

    Returns:
        Validated Player instance

    Raises:
        PlayerValidationError: If player data is invalid
    """
    player = Player(
        id=player_id or str(uuid.uuid4()),
        name=(name or "").strip(),
        position=position,
        **fields
    )
    return _check(player)


def add_player(players: Sequence[Player], player: Player) -> List[Player]:
    """
    Append a player to the roster.

    Raises:
        PlayerValidationError: If the id is already taken
    """
    if any(p.id == player.id for p in players):
        raise PlayerValidationError(f"Player id '{player.id}' already exists")
    return list(players) + [player]


def update_player(players: Sequence[Player], player_id: str, **changes) -> List[Player]:
    """
    Replace a player's record with an edited copy.

    Args:
        players: Current roster
        player_id: Id of the player to edit
        **changes: Attributes to change (the id cannot change)

    Returns:
        New roster list

    Raises:
        PlayerValidationError: If the player does not exist or the edit is invalid
    """
    changes.pop("id", None)
    updated: List[Player] = []
    found = False
    for player in players:
        if player.id == player_id:
            updated.append(_check(replace(player, **changes)))
            found = True
        else:
            updated.append(player)
    if not found:
        raise PlayerValidationError(f"Player '{player_id}' not found")
    return updated


def delete_player(players: Sequence[Player], rounds: Sequence[Round],
                  player_id: str) -> Tuple[List[Player], List[Round]]:
    """
    Delete a player and strip their attendance from every round.

    Returns:
        Tuple of (new roster, new rounds)
    """
    remaining = [p for p in players if p.id != player_id]
    if len(remaining) == len(players):
        logger.warning("Delete requested for unknown player %s", player_id)
    return remaining, [r.without_player(player_id) for r in rounds]


# ---------- Presence ---------- #

def ensure_presence_defaults(presence: Mapping[str, PresenceStatus],
                             players: Iterable[Player]) -> Dict[str, PresenceStatus]:
    """Give every player without a status the ABSENT default."""
    result = dict(presence)
    for player in players:
        result.setdefault(player.id, PresenceStatus.ABSENT)
    return result


def set_presence(presence: Mapping[str, PresenceStatus], player: Player,
                 status: PresenceStatus) -> Dict[str, PresenceStatus]:
    """
    Set a player's presence status.

    Raises:
        PresenceError: If the status is not allowed for the player's role
    """
    if status not in allowed_statuses(player):
        raise PresenceError(f"{player.name} cannot be marked as '{status.value}'")
    result = dict(presence)
    result[player.id] = status
    return result


# ---------- Rounds ---------- #

def build_round(players: Iterable[Player],
                tags_by_player: Mapping[str, Iterable[AttendanceTag]],
                round_date: date, round_id: Optional[str] = None) -> Round:
    """
    Record a day's attendance.

    Only non-social players are recorded, so social members never score.
    Players without tags are recorded as ABSENT.

    Args:
        players: Current roster
        tags_by_player: Tags marked by the operator, by player id
        round_date: Date of the round
        round_id: Id to keep when editing an existing round

    Returns:
        New Round
    """
    attendance = {}
    for player in players:
        if player.is_social:
            continue
        tags = normalize_tags(tags_by_player.get(player.id, ()))
        attendance[player.id] = tags or frozenset({AttendanceTag.ABSENT})
    return Round(id=round_id or str(uuid.uuid4()), date=round_date, attendance=attendance)


def save_round(rounds: Sequence[Round], new_round: Round) -> List[Round]:
    """Insert a round, replacing an existing round with the same id."""
    kept = [r for r in rounds if r.id != new_round.id]
    return kept + [new_round]


def delete_round(rounds: Sequence[Round], round_id: str) -> List[Round]:
    """Remove a round by id."""
    return [r for r in rounds if r.id != round_id]


def archive_season(rounds: Sequence[Round], year: int) -> Tuple[SeasonArchive, List[Round]]:
    """
    Close a season.

    Returns:
        Tuple of (archive of the season's rounds sorted by date, rounds of other years)
    """
    season = sorted((r for r in rounds if r.date.year == year), key=lambda r: r.date)
    remaining = [r for r in rounds if r.date.year != year]
    logger.info("Archived season %d with %d rounds", year, len(season))
    return SeasonArchive(year=year, rounds=tuple(season)), remaining
