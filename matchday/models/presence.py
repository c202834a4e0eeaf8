"""Match-day presence statuses."""

from enum import Enum
from typing import FrozenSet, Mapping

from .player import Player


class PresenceStatus(Enum):
    """What a member will do on the upcoming match day."""
    PLAYING_FULL = "full"
    FIRST_HALF = "first_half"
    SECOND_HALF = "second_half"
    DINNER_ONLY = "dinner_only"
    ABSENT = "absent"


# Statuses that make a player a candidate for a starting slot
STARTING_STATUSES: FrozenSet[PresenceStatus] = frozenset({
    PresenceStatus.PLAYING_FULL,
    PresenceStatus.FIRST_HALF,
})

_SOCIAL_STATUSES: FrozenSet[PresenceStatus] = frozenset({
    PresenceStatus.ABSENT,
    PresenceStatus.DINNER_ONLY,
})


def allowed_statuses(player: Player) -> FrozenSet[PresenceStatus]:
    """Statuses an operator may set for this player."""
    if player.is_social:
        return _SOCIAL_STATUSES
    return frozenset(PresenceStatus)


def presence_of(presence: Mapping[str, PresenceStatus], player_id: str) -> PresenceStatus:
    """Look up a player's status, defaulting to ABSENT."""
    return presence.get(player_id, PresenceStatus.ABSENT)
