"""
Match-day lineup edits for Matchday.

Operators adjust the generated lineup by hand: swapping two players, removing
someone who left, or adding a reserve who arrived late. Goals are tallied on the
lineup as they happen, and the finished match is kept as a MatchRecord. Every
edit returns a new value.
"""
from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import date
from typing import Mapping, Optional, Tuple

from ..models import (
    Goal, MatchLineup, MatchRecord, PlacedPlayer, Player, PresenceStatus, SubstitutionMap,
    TeamAssignment, TEAM_A, TEAM_B
)
from ..utils import get_logger
from .substitution_planner import plan_substitutions

logger = get_logger(__name__)

RESERVES = "reserves"
_LISTS = ("team_a", "team_b", RESERVES)


class MatchLineupError(Exception):
    """Raised when a lineup edit refers to an unknown or duplicate player."""
    pass


def lineup_from_assignment(assignment: TeamAssignment, reserves: Tuple[Player, ...] = (),
                           free_play: bool = False) -> MatchLineup:
    """Start a lineup from balanced teams and the selected reserves."""
    return MatchLineup(
        team_a=assignment.team_a,
        team_b=assignment.team_b,
        reserves=tuple(reserves),
        free_play=free_play,
    )


def _locate(lineup: MatchLineup, player_id: str) -> Tuple[str, int]:
    for list_name in _LISTS:
        for index, member in enumerate(getattr(lineup, list_name)):
            if member.id == player_id:
                return list_name, index
    raise MatchLineupError(f"Player {player_id} is not part of this match")


def _as_list_member(member, list_name: str, slot: Optional[PlacedPlayer]):
    """Convert a member to the representation used by the target list."""
    player = member.player if isinstance(member, PlacedPlayer) else member
    if list_name == RESERVES:
        return player
    if slot is not None:
        return PlacedPlayer(player=player, x=slot.x, y=slot.y)
    if isinstance(member, PlacedPlayer):
        return member
    return PlacedPlayer(player=player, x=50.0, y=50.0)


def swap_players(lineup: MatchLineup, first_id: str, second_id: str) -> MatchLineup:
    """
    Swap two players.

    Within the same list the two exchange places. Across lists each moves into
    the other's list; on a team the newcomer takes over the board coordinates
    of the player it replaced.

    Args:
        lineup: Current lineup
        first_id: Id of the first player
        second_id: Id of the second player

    Returns:
        New lineup (the same one if both ids are equal)

    Raises:
        MatchLineupError: If either player is not in the lineup
    """
    if first_id == second_id:
        return lineup

    first_list, first_index = _locate(lineup, first_id)
    second_list, second_index = _locate(lineup, second_id)
    lists = {name: list(getattr(lineup, name)) for name in _LISTS}

    first = lists[first_list][first_index]
    second = lists[second_list][second_index]

    if first_list == second_list:
        if first_list == RESERVES:
            lists[first_list][first_index], lists[first_list][second_index] = second, first
        else:
            # Players trade places; coordinates stay with the slot
            lists[first_list][first_index] = _as_list_member(second, first_list, first)
            lists[first_list][second_index] = _as_list_member(first, first_list, second)
    else:
        first_slot = first if isinstance(first, PlacedPlayer) else None
        second_slot = second if isinstance(second, PlacedPlayer) else None
        lists[first_list][first_index] = _as_list_member(second, first_list, first_slot)
        lists[second_list][second_index] = _as_list_member(first, second_list, second_slot)

    logger.debug("Swapped %s (%s) with %s (%s)", first_id, first_list, second_id, second_list)
    return replace(lineup, **{name: tuple(members) for name, members in lists.items()})


def remove_player(lineup: MatchLineup, player_id: str) -> MatchLineup:
    """
    Remove a player from every list of the lineup.

    Raises:
        MatchLineupError: If the player is not in the lineup
    """
    _locate(lineup, player_id)
    return replace(
        lineup,
        team_a=tuple(p for p in lineup.team_a if p.id != player_id),
        team_b=tuple(p for p in lineup.team_b if p.id != player_id),
        reserves=tuple(p for p in lineup.reserves if p.id != player_id),
    )


def add_late_reserve(lineup: MatchLineup, player: Player) -> MatchLineup:
    """
    Append a player who arrived after selection to the reserves.

    Raises:
        MatchLineupError: If the player is already in the lineup
    """
    if player.id in lineup.all_ids():
        raise MatchLineupError(f"{player.name} is already part of this match")
    logger.debug("Late reserve added: %s", player.id)
    return replace(lineup, reserves=lineup.reserves + (player,))


def lineup_substitutions(lineup: MatchLineup, presence: Mapping[str, PresenceStatus],
                         rank_numbers: Mapping[str, int]) -> SubstitutionMap:
    """
    Plan substitutions for the current lineup.

    Free-play lineups are managed by hand and never get automatic substitutions.
    """
    if lineup.free_play:
        return {}
    return plan_substitutions(lineup.team_a, lineup.team_b, lineup.reserves,
                              presence, rank_numbers)


# ---------- Goals ---------- #

def add_goal(lineup: MatchLineup, player: Player, team: str) -> MatchLineup:
    """
    Credit a goal to a player.

    The scorer does not have to be on the credited side; own goals and
    guests are recorded as the operator enters them.

    Args:
        lineup: Current lineup
        player: Scorer
        team: Side credited with the goal ("A" or "B")

    Returns:
        New lineup with the goal appended

    Raises:
        MatchLineupError: If the side is unknown
    """
    if team not in (TEAM_A, TEAM_B):
        raise MatchLineupError(f"Unknown team side: {team}")
    goal = Goal(player_id=player.id, player_name=player.name, team=team)
    logger.debug("Goal for %s by %s", team, player.id)
    return replace(lineup, goals=lineup.goals + (goal,))


def delete_goal(lineup: MatchLineup, index: int) -> MatchLineup:
    """
    Remove the goal at ``index`` (in recording order).

    Raises:
        MatchLineupError: If there is no goal at that index
    """
    if not 0 <= index < len(lineup.goals):
        raise MatchLineupError(f"No goal at position {index}")
    return replace(lineup, goals=lineup.goals[:index] + lineup.goals[index + 1:])


def record_match(lineup: MatchLineup, played_on: date, score_a: Optional[int] = None,
                 score_b: Optional[int] = None, match_id: Optional[str] = None) -> MatchRecord:
    """Close a match: keep its final lineup, goals and score."""
    return MatchRecord(
        id=match_id or str(uuid.uuid4()),
        played_on=played_on,
        lineup=lineup,
        score_a=score_a,
        score_b=score_b,
    )
