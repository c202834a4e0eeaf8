"""
Season statistics and ranking for Matchday.

Turns round attendance history into per-player season statistics and the
ranking order used for roster selection, substitutions and reports.
"""
from __future__ import annotations

from datetime import date
from typing import Dict, List, Mapping, Sequence

from ..models import AttendanceTag, Player, PlayerSeasonStats, Round, EMPTY_STATS
from ..utils import get_logger
from ..utils.constants import (
    DEFAULT_MATCH_WEEKDAY, POINTS_DINED, POINTS_PLAYED, SCORING_WINDOW_SIZE, UNRANKED
)

logger = get_logger(__name__)


def rounds_in_year(rounds: Sequence[Round], year: int) -> List[Round]:
    """Get the rounds played in the given season."""
    return [r for r in rounds if r.date.year == year]


def scoring_window(rounds: Sequence[Round], year: int,
                   match_weekday: int = DEFAULT_MATCH_WEEKDAY) -> List[date]:
    """
    Get the most recent qualifying dates of the season, newest first.

    A qualifying date is a round date that falls on the group's match weekday.
    Several rounds on the same date count once.

    Args:
        rounds: Round history
        year: Season year
        match_weekday: Weekday of the recurring match (date.weekday() numbering)

    Returns:
        Up to SCORING_WINDOW_SIZE distinct dates, newest first
    """
    dates = {r.date for r in rounds_in_year(rounds, year) if r.date.weekday() == match_weekday}
    return sorted(dates, reverse=True)[:SCORING_WINDOW_SIZE]


def compute_stats(players: Sequence[Player], rounds: Sequence[Round], year: int,
                  match_weekday: int = DEFAULT_MATCH_WEEKDAY) -> Dict[str, PlayerSeasonStats]:
    """
    Compute season statistics for every player.

    Args:
        players: Current roster
        rounds: Round history (any season; filtered to ``year``)
        year: Season year
        match_weekday: Weekday of the recurring match

    Returns:
        Dictionary of player id -> PlayerSeasonStats
    """
    season_rounds = rounds_in_year(rounds, year)
    window = set(scoring_window(season_rounds, year, match_weekday))
    latest = max(window) if window else None

    totals = {p.id: {
        "total_points_year": p.base_points,
        "points_scoring_window": 0,
        "attended_latest_match_day": False,
        "games_played": 0,
        "dinners_attended": 0,
        "absences": 0,
    } for p in players}

    for round_ in season_rounds:
        in_window = round_.date in window
        for player_id, tags in round_.attendance.items():
            entry = totals.get(player_id)
            if entry is None:
                logger.debug("Ignoring attendance for unknown player %s on %s",
                             player_id, round_.date)
                continue

            points = 0
            attended = False
            if AttendanceTag.PLAYED in tags:
                points += POINTS_PLAYED
                attended = True
                entry["games_played"] += 1
            if AttendanceTag.DINED in tags:
                points += POINTS_DINED
                attended = True
                entry["dinners_attended"] += 1
            if AttendanceTag.ABSENT in tags:
                entry["absences"] += 1

            entry["total_points_year"] += points
            if in_window:
                entry["points_scoring_window"] += points
            if attended and round_.date == latest:
                entry["attended_latest_match_day"] = True

    logger.debug("Computed stats for %d players over %d rounds (window: %s)",
                 len(totals), len(season_rounds), sorted(window, reverse=True))
    return {player_id: PlayerSeasonStats(**values) for player_id, values in totals.items()}


def rank_players(players: Sequence[Player],
                 stats: Mapping[str, PlayerSeasonStats]) -> List[Player]:
    """
    Order players by ranking.

    Keys, all descending: scoring-window points, season points, attended the
    latest match day. The sort is stable, so ties keep their input order.

    Args:
        players: Players to rank
        stats: Statistics by player id (missing entries count as zero)

    Returns:
        New list of players, best first
    """
    def sort_key(player: Player):
        s = stats.get(player.id, EMPTY_STATS)
        return (-s.points_scoring_window, -s.total_points_year, not s.attended_latest_match_day)

    return sorted(players, key=sort_key)


def rank_numbers(ranked_players: Sequence[Player]) -> Dict[str, int]:
    """
    Number the field players of a ranked list 1..N.

    Goalkeepers and social members get no rank number.

    Args:
        ranked_players: Output of rank_players

    Returns:
        Dictionary of player id -> rank number
    """
    field_players = [p for p in ranked_players if p.is_field_player]
    return {p.id: index for index, p in enumerate(field_players, start=1)}


def rank_of(numbers: Mapping[str, int], player_id: str) -> int:
    """Get a player's rank number, or UNRANKED for sorting unranked players last."""
    return numbers.get(player_id, UNRANKED)


def compute_ranking(players: Sequence[Player], rounds: Sequence[Round], year: int,
                    match_weekday: int = DEFAULT_MATCH_WEEKDAY):
    """
    Run the whole ranking pipeline.

    Returns:
        Tuple of (stats by id, ranked players, rank numbers by id)
    """
    stats = compute_stats(players, rounds, year, match_weekday)
    ranked = rank_players(players, stats)
    return stats, ranked, rank_numbers(ranked)
