"""
Matchday

Ranking, roster selection and team balancing for a weekly football group.

Given a snapshot of players, attendance rounds and match-day presence, the
engine ranks the members, picks starters and reserves, splits the starters
into two balanced teams and plans which reserve replaces which starter.
"""
from .models import (
    Player, Position, Round, AttendanceTag, PresenceStatus, GameConfig, RosterResult,
    TeamAssignment, WrongGoalkeeperCount, InsufficientFieldPlayers
)
from .services import (
    compute_stats, rank_players, rank_numbers, select_roster, balance_teams,
    plan_substitutions
)
from .utils import APP_TITLE, setup_logging

__version__ = "1.0.0"

__all__ = [
    "Player", "Position", "Round", "AttendanceTag", "PresenceStatus", "GameConfig",
    "RosterResult", "TeamAssignment", "WrongGoalkeeperCount", "InsufficientFieldPlayers",
    "compute_stats", "rank_players", "rank_numbers", "select_roster", "balance_teams",
    "plan_substitutions", "APP_TITLE", "setup_logging"
]
