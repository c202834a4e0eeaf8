"""
Team balancing for Matchday.

Splits the selected starters into two sides with close skill sums and gives
every player an initial spot on the tactical board.
"""
from __future__ import annotations

import random
from typing import List, Optional, Sequence, Tuple

from ..models import PlacedPlayer, Player, TeamAssignment, TEAM_A, TEAM_B
from ..utils import get_logger
from ..utils.constants import (
    PLACEMENT_JITTER, PLACEMENT_X, PLACEMENT_X_DEFAULT, PLACEMENT_Y, REQUIRED_GOALKEEPERS
)

logger = get_logger(__name__)


def initial_placement(player: Player, side: str,
                      rng: Optional[random.Random] = None) -> Tuple[float, float]:
    """
    Compute a player's starting coordinates on the board.

    Side A attacks left to right; side B is mirrored. Without ``rng`` the
    result is deterministic; with it, a small jitter keeps tokens from stacking.

    Args:
        player: Player to place
        side: "A" or "B"
        rng: Optional random source for jitter

    Returns:
        (x, y) tuple in the 0-100 range
    """
    x = float(PLACEMENT_X.get(player.position.value, PLACEMENT_X_DEFAULT))
    y = float(PLACEMENT_Y)
    if side == TEAM_B:
        x = 100.0 - x
    if rng is not None:
        jitter = (rng.random() - 0.5) * 2 * PLACEMENT_JITTER
        x += jitter
        y += jitter
    return x, y


def _place(player: Player, side: str, rng: Optional[random.Random]) -> PlacedPlayer:
    x, y = initial_placement(player, side, rng)
    return PlacedPlayer(player=player, x=x, y=y)


def balance_teams(starters: Sequence[Player],
                  rng: Optional[random.Random] = None) -> TeamAssignment:
    """
    Split starters into two teams with close skill sums.

    The first goalkeeper seeds team A and the second seeds team B. Everyone
    else, strongest first, joins whichever team has the lower skill sum
    (team A on ties).

    Args:
        starters: Selected starters, including two goalkeepers
        rng: Optional random source for placement jitter

    Returns:
        TeamAssignment partitioning the starters

    Raises:
        ValueError: If fewer than two goalkeepers are among the starters
    """
    goalkeepers = [p for p in starters if p.is_goalkeeper]
    if len(goalkeepers) < REQUIRED_GOALKEEPERS:
        raise ValueError(
            f"Balancing needs {REQUIRED_GOALKEEPERS} goalkeepers, got {len(goalkeepers)}"
        )

    keeper_a, keeper_b = goalkeepers[0], goalkeepers[1]
    others = [p for p in starters if p.id not in (keeper_a.id, keeper_b.id)]
    others.sort(key=lambda p: p.skill_rating, reverse=True)

    team_a: List[PlacedPlayer] = [_place(keeper_a, TEAM_A, rng)]
    team_b: List[PlacedPlayer] = [_place(keeper_b, TEAM_B, rng)]
    sum_a = keeper_a.skill_rating
    sum_b = keeper_b.skill_rating

    for player in others:
        if sum_a <= sum_b:
            team_a.append(_place(player, TEAM_A, rng))
            sum_a += player.skill_rating
        else:
            team_b.append(_place(player, TEAM_B, rng))
            sum_b += player.skill_rating

    logger.debug("Balanced %d starters: A=%d (%d players), B=%d (%d players)",
                 len(starters), sum_a, len(team_a), sum_b, len(team_b))
    return TeamAssignment(team_a=tuple(team_a), team_b=tuple(team_b))
