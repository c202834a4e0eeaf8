"""
Constants for the Matchday engine.

This module contains configuration constants used throughout the application.
"""

# Application metadata
APP_TITLE = "Matchday"

# Attendance scoring
POINTS_PLAYED = 2
POINTS_DINED = 1

# The group's recurring match day (date.weekday(): Monday == 0)
WEDNESDAY = 2
DEFAULT_MATCH_WEEKDAY = WEDNESDAY

# Number of most recent match days weighted in the short-term ranking
SCORING_WINDOW_SIZE = 4

# Field players per side
MIN_GAME_SIZE = 4
MAX_GAME_SIZE = 10
DEFAULT_GAME_SIZE = 8
SUPPORTED_GAME_SIZES = list(range(MIN_GAME_SIZE, MAX_GAME_SIZE + 1))

# Each match needs one goalkeeper per side
REQUIRED_GOALKEEPERS = 2

# Skill rating bounds
MIN_SKILL_RATING = 1
MAX_SKILL_RATING = 10
DEFAULT_SKILL_RATING = 5

# Sort key for players without a rank number (goalkeepers, social members)
UNRANKED = 999

# Size of the ranking list published with the weekly call-up
ANNOUNCEMENT_TOP_N = 16

# Number of players shown on the season's top scorers list
TOP_SCORERS_N = 3

# Initial x coordinate (0-100, own goal to opponent goal) by position code
PLACEMENT_X = {
    "goalkeeper": 5,
    "defender": 20,
    "fullback": 30,
    "defensive_midfielder": 40,
    "midfielder": 45,
    "forward": 70,
}
PLACEMENT_X_DEFAULT = 50
PLACEMENT_Y = 50
PLACEMENT_JITTER = 2.0
