"""Ranking reports for Matchday: the season table, the weekly top-N list and top scorers."""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ..models import MatchRecord, Player, PlayerSeasonStats, Round, EMPTY_STATS
from ..utils.constants import ANNOUNCEMENT_TOP_N, DEFAULT_MATCH_WEEKDAY, TOP_SCORERS_N
from .stats_service import compute_ranking, scoring_window


@dataclass(frozen=True)
class RankingRow:
    """One line of the ranking table."""

    player_id: str
    name: str
    position: str
    rank: Optional[int]
    stats: PlayerSeasonStats

    def to_dict(self) -> Dict:
        data = {
            "player_id": self.player_id,
            "name": self.name,
            "position": self.position,
            "rank": self.rank,
        }
        data.update(self.stats.to_dict())
        return data


@dataclass(frozen=True)
class RankingReport:
    """Season ranking snapshot, rows in ranking order."""

    year: int
    window_dates: List = field(default_factory=list)
    rows: List[RankingRow] = field(default_factory=list)

    def ranked_rows(self) -> List[RankingRow]:
        """Rows of field players only, best first."""
        return [row for row in self.rows if row.rank is not None]

    def top(self, n: int = ANNOUNCEMENT_TOP_N) -> List[RankingRow]:
        """The best ``n`` field players, as published with the weekly call-up."""
        return self.ranked_rows()[:n]

    def to_dict(self) -> Dict:
        return {
            "year": self.year,
            "window_dates": [d.isoformat() for d in self.window_dates],
            "rows": [row.to_dict() for row in self.rows],
        }


def build_ranking_report(players: Sequence[Player], rounds: Sequence[Round], year: int,
                         match_weekday: int = DEFAULT_MATCH_WEEKDAY) -> RankingReport:
    """Build a :class:`RankingReport` for the given season."""

    stats, ranked, numbers = compute_ranking(players, rounds, year, match_weekday)
    rows = [
        RankingRow(
            player_id=p.id,
            name=p.name,
            position=p.position.value,
            rank=numbers.get(p.id),
            stats=stats.get(p.id, EMPTY_STATS),
        )
        for p in ranked
    ]
    return RankingReport(
        year=year,
        window_dates=scoring_window(rounds, year, match_weekday),
        rows=rows,
    )


@dataclass(frozen=True)
class ScorerRow:
    """A player and the goals they scored in a season."""

    player: Player
    goals: int

    def to_dict(self) -> Dict:
        return {"player_id": self.player.id, "name": self.player.name, "goals": self.goals}


def top_scorers(matches: Sequence[MatchRecord], players: Sequence[Player], year: int,
                n: int = TOP_SCORERS_N) -> List[ScorerRow]:
    """
    Get the season's top scorers.

    Goals of players no longer on the roster are left out. Players with the same
    tally keep the order in which they first scored.

    Args:
        matches: Match history (any season; filtered to ``year``)
        players: Current roster
        year: Season year
        n: Number of scorers to return

    Returns:
        Up to ``n`` rows, most goals first
    """
    counts: Dict[str, int] = {}
    for match in matches:
        if match.played_on.year != year:
            continue
        for goal in match.goals:
            counts[goal.player_id] = counts.get(goal.player_id, 0) + 1

    by_id = {p.id: p for p in players}
    rows = [ScorerRow(player=by_id[pid], goals=goals)
            for pid, goals in counts.items() if pid in by_id]
    rows.sort(key=lambda row: row.goals, reverse=True)
    return rows[:n]


class RankingReportExporter:
    """Exports ranking reports as CSV."""

    HEADER = [
        "Rank",
        "Name",
        "Position",
        "Points (Last Match Days)",
        "Points (Season)",
        "Attended Latest",
        "Games Played",
        "Dinners",
        "Absences",
    ]

    def export_to_csv(self, report: RankingReport, field_players_only: bool = False) -> str:
        """
        Export a ranking report to CSV format.

        Args:
            report: Report to export
            field_players_only: Leave out goalkeepers and social members

        Returns:
            CSV content as a string
        """
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")

        writer.writerow(["Ranking", report.year])
        writer.writerow(["Scoring Window", " ".join(d.isoformat() for d in report.window_dates)])
        writer.writerow([])
        writer.writerow(self.HEADER)

        rows = report.ranked_rows() if field_players_only else report.rows
        for row in rows:
            s = row.stats
            writer.writerow([
                row.rank if row.rank is not None else "-",
                row.name,
                row.position,
                s.points_scoring_window,
                s.total_points_year,
                "yes" if s.attended_latest_match_day else "no",
                s.games_played,
                s.dinners_attended,
                s.absences,
            ])

        csv_text = buffer.getvalue()
        buffer.close()
        return csv_text
