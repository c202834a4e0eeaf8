"""
Models package for Matchday.

This package contains the immutable value records used throughout the application.
"""
from .player import Player, Position, ContactInfo
from .round import Round, AttendanceTag, SeasonArchive, normalize_tags, toggle_tag
from .presence import PresenceStatus, STARTING_STATUSES, allowed_statuses, presence_of
from .stats import PlayerSeasonStats, EMPTY_STATS
from .match import (
    GameConfig, RosterResult, WrongGoalkeeperCount, InsufficientFieldPlayers,
    SelectionError, SelectionOutcome, PlacedPlayer, TeamAssignment, Goal, MatchLineup,
    MatchRecord, SubstitutionMap, TEAM_A, TEAM_B
)

__all__ = [
    "Player", "Position", "ContactInfo",
    "Round", "AttendanceTag", "SeasonArchive", "normalize_tags", "toggle_tag",
    "PresenceStatus", "STARTING_STATUSES", "allowed_statuses", "presence_of",
    "PlayerSeasonStats", "EMPTY_STATS",
    "GameConfig", "RosterResult", "WrongGoalkeeperCount", "InsufficientFieldPlayers",
    "SelectionError", "SelectionOutcome", "PlacedPlayer", "TeamAssignment", "Goal",
    "MatchLineup", "MatchRecord", "SubstitutionMap", "TEAM_A", "TEAM_B"
]
