"""Season statistics records."""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class PlayerSeasonStats:
    """
    Aggregated attendance statistics for one player in one season.

    Attributes:
        total_points_year: Base points plus every point earned this season
        points_scoring_window: Points earned on the most recent match days
        attended_latest_match_day: Played or dined on the newest match day
        games_played: Rounds tagged as played
        dinners_attended: Rounds tagged as dined
        absences: Rounds tagged as absent
    """
    total_points_year: int = 0
    points_scoring_window: int = 0
    attended_latest_match_day: bool = False
    games_played: int = 0
    dinners_attended: int = 0
    absences: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "total_points_year": self.total_points_year,
            "points_scoring_window": self.points_scoring_window,
            "attended_latest_match_day": self.attended_latest_match_day,
            "games_played": self.games_played,
            "dinners_attended": self.dinners_attended,
            "absences": self.absences,
        }


EMPTY_STATS = PlayerSeasonStats()
