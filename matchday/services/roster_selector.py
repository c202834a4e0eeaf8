"""
Roster selection for Matchday.

Validates a match-day presence snapshot and splits the present players into
starters and reserves.
"""
from __future__ import annotations

from typing import AbstractSet, List, Mapping, Sequence

from ..models import (
    GameConfig, InsufficientFieldPlayers, Player, PresenceStatus, RosterResult,
    SelectionOutcome, STARTING_STATUSES, WrongGoalkeeperCount, presence_of
)
from ..utils import get_logger
from ..utils.constants import REQUIRED_GOALKEEPERS
from .stats_service import rank_numbers, rank_of

logger = get_logger(__name__)


def _order_by_ranking(candidates: Sequence[Player], ranking: Sequence[Player]) -> List[Player]:
    positions = {p.id: index for index, p in enumerate(ranking)}
    # Players missing from the ranking go last, in input order
    return sorted(candidates, key=lambda p: positions.get(p.id, len(positions)))


def select_roster(
    players: Sequence[Player],
    presence: Mapping[str, PresenceStatus],
    ranking: Sequence[Player],
    game_config: GameConfig,
    overdue_ids: AbstractSet[str] = frozenset(),
) -> SelectionOutcome:
    """
    Select starters and reserves for a match day.

    Args:
        players: Current roster
        presence: Player id -> presence status (missing means absent)
        ranking: Players in ranking order (see stats_service.rank_players)
        game_config: Match size
        overdue_ids: Ids of players with overdue fees

    Returns:
        RosterResult on success, or WrongGoalkeeperCount / InsufficientFieldPlayers
    """
    candidates = [p for p in players if presence_of(presence, p.id) in STARTING_STATUSES]
    goalkeepers = [p for p in candidates if p.is_goalkeeper]
    field_candidates = [p for p in candidates if p.is_field_player]
    second_half = [p for p in players if presence_of(presence, p.id) is PresenceStatus.SECOND_HALF]

    if len(goalkeepers) != REQUIRED_GOALKEEPERS:
        logger.debug("Selection rejected: %d goalkeepers", len(goalkeepers))
        return WrongGoalkeeperCount(actual=len(goalkeepers), required=REQUIRED_GOALKEEPERS)

    needed = game_config.field_capacity
    if len(field_candidates) < needed:
        logger.debug("Selection rejected: %d of %d field players", len(field_candidates), needed)
        return InsufficientFieldPlayers(required=needed, available=len(field_candidates))

    ordered = _order_by_ranking(field_candidates, ranking)
    fee_current = [p for p in ordered if p.id not in overdue_ids]
    overdue = [p for p in ordered if p.id in overdue_ids]

    field_starters = fee_current[:needed]
    numbers = rank_numbers(ranking)
    reserves = sorted(
        second_half + fee_current[needed:] + overdue,
        key=lambda p: rank_of(numbers, p.id),
    )

    if len(field_starters) < needed:
        logger.info("Only %d fee-current field players for %d slots; %d overdue moved to reserves",
                    len(field_starters), needed, len(overdue))

    result = RosterResult(starters=tuple(goalkeepers + field_starters), reserves=tuple(reserves))
    logger.debug("Selected %d starters and %d reserves", len(result.starters), len(result.reserves))
    return result
