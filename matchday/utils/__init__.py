"""
Utilities package for Matchday.

Configuration constants and logging helpers used throughout the application.
"""
from .constants import (
    APP_TITLE, POINTS_PLAYED, POINTS_DINED, WEDNESDAY, DEFAULT_MATCH_WEEKDAY,
    SCORING_WINDOW_SIZE, SUPPORTED_GAME_SIZES, DEFAULT_GAME_SIZE,
    REQUIRED_GOALKEEPERS, MIN_SKILL_RATING, MAX_SKILL_RATING, UNRANKED,
    ANNOUNCEMENT_TOP_N, TOP_SCORERS_N
)
from .logging_config import setup_logging, get_logger

__all__ = [
    "APP_TITLE", "POINTS_PLAYED", "POINTS_DINED", "WEDNESDAY", "DEFAULT_MATCH_WEEKDAY",
    "SCORING_WINDOW_SIZE", "SUPPORTED_GAME_SIZES", "DEFAULT_GAME_SIZE",
    "REQUIRED_GOALKEEPERS", "MIN_SKILL_RATING", "MAX_SKILL_RATING", "UNRANKED",
    "ANNOUNCEMENT_TOP_N", "TOP_SCORERS_N", "setup_logging", "get_logger"
]
