"""
Substitution planning for Matchday.

Decides which reserve replaces which outgoing starter so the two sides stay as
balanced as possible after the changes.
"""
from __future__ import annotations

from typing import Iterable, List, Mapping, Sequence, Set, Union

from ..models import PlacedPlayer, Player, PresenceStatus, SubstitutionMap, presence_of
from ..utils import get_logger
from .stats_service import rank_of

logger = get_logger(__name__)

TeamMember = Union[Player, PlacedPlayer]


def _players(team: Iterable[TeamMember]) -> List[Player]:
    return [m.player if isinstance(m, PlacedPlayer) else m for m in team]


def _skill_sum(team: Sequence[Player]) -> int:
    return sum(p.skill_rating for p in team)


def plan_substitutions(
    team_a: Sequence[TeamMember],
    team_b: Sequence[TeamMember],
    reserves: Sequence[Player],
    presence: Mapping[str, PresenceStatus],
    rank_numbers: Mapping[str, int],
) -> SubstitutionMap:
    """
    Pair incoming reserves with outgoing starters.

    First-half-only starters always leave, best rank first. If there are more reserves than
    first-half leavers, the worst-ranked remaining outfield starters leave too.
    Reserves enter best rank first; each one goes to the only side with a
    pending leaver, or, when both sides have one, to the side that leaves the
    skill sums closer (side A on ties).

    Args:
        team_a: Side A players
        team_b: Side B players
        reserves: Players waiting to come in
        presence: Player id -> presence status
        rank_numbers: Player id -> rank number (see stats_service.rank_numbers)

    Returns:
        Dictionary of incoming reserve id -> outgoing starter id
    """
    side_a = _players(team_a)
    side_b = _players(team_b)
    reserve_ids = {p.id for p in reserves}
    starters = [p for p in side_a + side_b if not p.is_goalkeeper and p.id not in reserve_ids]

    leaving_first_half = [
        p for p in starters if presence_of(presence, p.id) is PresenceStatus.FIRST_HALF
    ]
    # Best rank first; ties keep team order
    leaving_first_half.sort(key=lambda p: rank_of(rank_numbers, p.id))
    eligible = [p for p in starters if presence_of(presence, p.id) is not PresenceStatus.FIRST_HALF]
    # Worst rank leaves first; unranked players count as worst
    eligible.sort(key=lambda p: rank_of(rank_numbers, p.id), reverse=True)

    additional_needed = max(0, len(reserves) - len(leaving_first_half))
    all_leaving = leaving_first_half + eligible[:additional_needed]

    if not all_leaving or not reserves:
        return {}

    ids_a = {p.id for p in side_a}
    leaving_a = [p for p in all_leaving if p.id in ids_a]
    leaving_b = [p for p in all_leaving if p.id not in ids_a]

    sum_a = _skill_sum(side_a)
    sum_b = _skill_sum(side_b)
    entering = sorted(reserves, key=lambda p: rank_of(rank_numbers, p.id))

    substitutions: SubstitutionMap = {}
    for reserve in entering:
        if not leaving_a and not leaving_b:
            break

        if leaving_a and leaving_b:
            rest_a = sum_a - leaving_a[0].skill_rating
            rest_b = sum_b - leaving_b[0].skill_rating
            diff_if_a = abs(rest_a + reserve.skill_rating - rest_b)
            diff_if_b = abs(rest_a - (rest_b + reserve.skill_rating))
            join_a = diff_if_a <= diff_if_b
        else:
            join_a = bool(leaving_a)

        if join_a:
            outgoing = leaving_a.pop(0)
            sum_a += reserve.skill_rating - outgoing.skill_rating
        else:
            outgoing = leaving_b.pop(0)
            sum_b += reserve.skill_rating - outgoing.skill_rating
        substitutions[reserve.id] = outgoing.id

    logger.debug("Planned %d substitutions (%d leavers, %d reserves); sums A=%d B=%d",
                 len(substitutions), len(all_leaving), len(reserves), sum_a, sum_b)
    return substitutions


def substituted_ids(substitutions: SubstitutionMap) -> Set[str]:
    """Get the ids of starters that are being replaced."""
    return set(substitutions.values())
