"""
Services package for Matchday.

The ranking, roster-selection, team-balancing and substitution engine, plus the
roster bookkeeping and reports built on top of it.
"""
from .stats_service import (
    compute_stats, rank_players, rank_numbers, rank_of, compute_ranking, scoring_window
)
from .roster_selector import select_roster
from .team_balancer import balance_teams, initial_placement
from .substitution_planner import plan_substitutions, substituted_ids
from .match_service import (
    MatchLineupError, lineup_from_assignment, swap_players, remove_player,
    add_late_reserve, lineup_substitutions, add_goal, delete_goal, record_match
)
from .roster_service import (
    PlayerValidationError, PresenceError, validate_player, create_player, add_player,
    update_player, delete_player, ensure_presence_defaults, set_presence, build_round,
    save_round, delete_round, archive_season
)
from .ranking_report import (
    RankingRow, RankingReport, RankingReportExporter, build_ranking_report, ScorerRow,
    top_scorers
)

__all__ = [
    "compute_stats", "rank_players", "rank_numbers", "rank_of", "compute_ranking",
    "scoring_window", "select_roster", "balance_teams", "initial_placement",
    "plan_substitutions", "substituted_ids",
    "MatchLineupError", "lineup_from_assignment", "swap_players", "remove_player",
    "add_late_reserve", "lineup_substitutions", "add_goal", "delete_goal", "record_match",
    "PlayerValidationError", "PresenceError", "validate_player", "create_player",
    "add_player", "update_player", "delete_player", "ensure_presence_defaults",
    "set_presence", "build_round", "save_round", "delete_round", "archive_season",
    "RankingRow", "RankingReport", "RankingReportExporter", "build_ranking_report",
    "ScorerRow", "top_scorers"
]
