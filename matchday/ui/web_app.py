"""
Flask web application for Matchday.

A stateless JSON API: every request carries the snapshot it needs (players,
rounds, presence, configuration) and every response is a fresh computation.
Storage stays with the client.
"""
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Tuple

from flask import Flask, Response, jsonify, request

from ..models import (
    GameConfig, MatchLineup, MatchRecord, Player, PresenceStatus, RosterResult, Round,
    TEAM_A, TEAM_B
)
from ..services import (
    MatchLineupError, RankingReportExporter, add_goal, add_late_reserve, balance_teams,
    build_ranking_report, compute_ranking, delete_goal, lineup_from_assignment,
    lineup_substitutions, plan_substitutions, record_match, remove_player, select_roster,
    swap_players, top_scorers
)
from ..utils import (
    APP_TITLE, DEFAULT_GAME_SIZE, DEFAULT_MATCH_WEEKDAY, TOP_SCORERS_N, get_logger
)

logger = get_logger(__name__)


class PayloadError(ValueError):
    """Raised when a request body cannot be turned into a snapshot."""
    pass


# ---------- Payload parsing ---------- #

def _body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise PayloadError("Request body must be a JSON object")
    return data


def _parse_players(data: Mapping[str, Any]) -> List[Player]:
    try:
        return [Player.from_dict(p) for p in data.get("players", [])]
    except (KeyError, TypeError, ValueError) as e:
        raise PayloadError(f"Invalid player data: {e}")


def _parse_rounds(data: Mapping[str, Any]) -> List[Round]:
    try:
        return [Round.from_dict(r) for r in data.get("rounds", [])]
    except (KeyError, TypeError, ValueError) as e:
        raise PayloadError(f"Invalid round data: {e}")


def _parse_presence(data: Mapping[str, Any]) -> Dict[str, PresenceStatus]:
    raw = data.get("presence") or {}
    if not isinstance(raw, dict):
        raise PayloadError("presence must map player ids to statuses")
    try:
        return {str(pid): PresenceStatus(status) for pid, status in raw.items()}
    except ValueError as e:
        raise PayloadError(f"Invalid presence status: {e}")


def _parse_year(data: Mapping[str, Any]) -> int:
    try:
        return int(data.get("year", date.today().year))
    except (TypeError, ValueError):
        raise PayloadError("Year must be an integer")


def _parse_weekday(data: Mapping[str, Any]) -> int:
    try:
        weekday = int(data.get("match_weekday", DEFAULT_MATCH_WEEKDAY))
    except (TypeError, ValueError):
        raise PayloadError("match_weekday must be an integer")
    if not 0 <= weekday <= 6:
        raise PayloadError("match_weekday must be between 0 (Monday) and 6 (Sunday)")
    return weekday


def _parse_game_config(data: Mapping[str, Any]) -> GameConfig:
    try:
        return GameConfig(players_per_side=int(data.get("game_size", DEFAULT_GAME_SIZE)))
    except (TypeError, ValueError) as e:
        raise PayloadError(str(e))


def _parse_ids(data: Mapping[str, Any], key: str) -> List[str]:
    raw = data.get(key) or []
    if not isinstance(raw, list):
        raise PayloadError(f"{key} must be a list of player ids")
    return [str(pid) for pid in raw]


def _select_by_ids(players: List[Player], ids: List[str], label: str) -> List[Player]:
    by_id = {p.id: p for p in players}
    missing = [pid for pid in ids if pid not in by_id]
    if missing:
        raise PayloadError(f"Unknown {label}: {', '.join(missing)}")
    return [by_id[pid] for pid in ids]


def _parse_lineup(data: Mapping[str, Any]) -> MatchLineup:
    raw = data.get("lineup")
    if not isinstance(raw, dict):
        raise PayloadError("A lineup object is required")
    try:
        return MatchLineup.from_dict(raw)
    except (KeyError, TypeError, ValueError) as e:
        raise PayloadError(f"Invalid lineup data: {e}")


def _parse_matches(data: Mapping[str, Any]) -> List[MatchRecord]:
    try:
        return [MatchRecord.from_dict(m) for m in data.get("matches") or []]
    except (KeyError, TypeError, ValueError) as e:
        raise PayloadError(f"Invalid match data: {e}")


def _parse_score(data: Mapping[str, Any], key: str) -> Optional[int]:
    value = data.get(key)
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise PayloadError(f"{key} must be an integer")


def _ranking_payload(players: List[Player], rounds: List[Round], year: int,
                     weekday: int) -> Tuple[List[Player], Dict[str, int], Dict[str, Any]]:
    stats, ranked, numbers = compute_ranking(players, rounds, year, weekday)
    payload = {
        "stats": {pid: s.to_dict() for pid, s in stats.items()},
        "ranking": [p.id for p in ranked],
        "rank_numbers": numbers,
    }
    return ranked, numbers, payload


def _error(message: str, status: int, **extra) -> Tuple[Response, int]:
    body = {"success": False, "error": message}
    body.update(extra)
    return jsonify(body), status


def create_app() -> Flask:
    """
    Create and configure the Flask application with API endpoints.

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)

    @app.errorhandler(PayloadError)
    def handle_payload_error(e: PayloadError):
        logger.warning("Rejected request to %s: %s", request.path, e)
        return _error(str(e), 400)

    @app.errorhandler(MatchLineupError)
    def handle_lineup_error(e: MatchLineupError):
        return _error(str(e), 409)

    # ==================== API Endpoints ==================== #

    @app.route("/api/health", methods=["GET"])
    def health():
        """Report that the service is up."""
        return jsonify({"success": True, "app": APP_TITLE})

    @app.route("/api/stats", methods=["POST"])
    def stats():
        """Season statistics, ranking order and rank numbers."""
        data = _body()
        players = _parse_players(data)
        rounds = _parse_rounds(data)
        _, _, payload = _ranking_payload(players, rounds, _parse_year(data), _parse_weekday(data))
        return jsonify({"success": True, **payload})

    @app.route("/api/ranking/export", methods=["POST"])
    def export_ranking():
        """Export the season ranking as CSV."""
        data = _body()
        year = _parse_year(data)
        report = build_ranking_report(_parse_players(data), _parse_rounds(data), year,
                                      _parse_weekday(data))
        csv_content = RankingReportExporter().export_to_csv(
            report, field_players_only=bool(data.get("field_players_only", False))
        )
        return Response(
            csv_content,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename=ranking_{year}.csv"},
        )

    @app.route("/api/roster/select", methods=["POST"])
    def roster_select():
        """Select starters and reserves from the presence list."""
        data = _body()
        players = _parse_players(data)
        ranked, _, _ = _ranking_payload(players, _parse_rounds(data), _parse_year(data),
                                        _parse_weekday(data))
        outcome = select_roster(players, _parse_presence(data), ranked,
                                _parse_game_config(data),
                                frozenset(_parse_ids(data, "overdue_ids")))
        if not isinstance(outcome, RosterResult):
            logger.info("Roster selection failed: %s", outcome.message)
            return jsonify({"success": False, **outcome.to_dict()}), 422
        return jsonify({"success": True, "roster": outcome.to_dict()})

    @app.route("/api/teams/balance", methods=["POST"])
    def teams_balance():
        """Split the given starters into two balanced teams."""
        data = _body()
        starters = _select_by_ids(_parse_players(data),
                                  _parse_ids(data, "starter_ids"), "starters")
        try:
            assignment = balance_teams(starters)
        except ValueError as e:
            return _error(str(e), 422)
        return jsonify({"success": True, "teams": assignment.to_dict()})

    @app.route("/api/substitutions", methods=["POST"])
    def substitutions():
        """Plan which reserve replaces which starter."""
        data = _body()
        players = _parse_players(data)
        _, numbers, _ = _ranking_payload(players, _parse_rounds(data), _parse_year(data),
                                         _parse_weekday(data))
        team_a = _select_by_ids(players, _parse_ids(data, "team_a"), "team A players")
        team_b = _select_by_ids(players, _parse_ids(data, "team_b"), "team B players")
        reserves = _select_by_ids(players, _parse_ids(data, "reserves"), "reserves")
        plan = plan_substitutions(team_a, team_b, reserves, _parse_presence(data), numbers)
        return jsonify({"success": True, "substitutions": plan})

    @app.route("/api/matchday", methods=["POST"])
    def matchday():
        """Run the whole pipeline: ranking, selection, balancing and substitutions."""
        data = _body()
        players = _parse_players(data)
        presence = _parse_presence(data)
        ranked, numbers, ranking = _ranking_payload(players, _parse_rounds(data),
                                                    _parse_year(data), _parse_weekday(data))
        outcome = select_roster(players, presence, ranked, _parse_game_config(data),
                                frozenset(_parse_ids(data, "overdue_ids")))
        if not isinstance(outcome, RosterResult):
            logger.info("Match day aborted: %s", outcome.message)
            return jsonify({"success": False, **outcome.to_dict()}), 422

        assignment = balance_teams(outcome.starters)
        lineup = lineup_from_assignment(assignment, outcome.reserves)
        return jsonify({
            "success": True,
            "ranking": ranking,
            "roster": outcome.to_dict(),
            "teams": assignment.to_dict(),
            "substitutions": lineup_substitutions(lineup, presence, numbers),
        })

    # ---------- Lineup edits ---------- #

    def _lineup_response(data: Mapping[str, Any], lineup: MatchLineup):
        players = _parse_players(data)
        _, numbers, _ = _ranking_payload(players, _parse_rounds(data), _parse_year(data),
                                         _parse_weekday(data))
        return jsonify({
            "success": True,
            "lineup": lineup.to_dict(),
            "substitutions": lineup_substitutions(lineup, _parse_presence(data), numbers),
        })

    @app.route("/api/lineup/swap", methods=["POST"])
    def lineup_swap():
        """Swap two players of the current lineup."""
        data = _body()
        first_id, second_id = data.get("first_id"), data.get("second_id")
        if not first_id or not second_id:
            return _error("Both first_id and second_id are required", 400)
        lineup = swap_players(_parse_lineup(data), str(first_id), str(second_id))
        return _lineup_response(data, lineup)

    @app.route("/api/lineup/remove", methods=["POST"])
    def lineup_remove():
        """Remove a player from the current lineup."""
        data = _body()
        player_id = data.get("player_id")
        if not player_id:
            return _error("player_id is required", 400)
        lineup = remove_player(_parse_lineup(data), str(player_id))
        return _lineup_response(data, lineup)

    @app.route("/api/lineup/late-reserve", methods=["POST"])
    def lineup_late_reserve():
        """Add a late arrival to the reserves of the current lineup."""
        data = _body()
        player_id = data.get("player_id")
        if not player_id:
            return _error("player_id is required", 400)
        player = _select_by_ids(_parse_players(data), [str(player_id)], "player")[0]
        lineup = add_late_reserve(_parse_lineup(data), player)
        return _lineup_response(data, lineup)

    @app.route("/api/lineup/goals/add", methods=["POST"])
    def lineup_add_goal():
        """Credit a goal to a player of the current lineup."""
        data = _body()
        player_id, team = data.get("player_id"), data.get("team")
        if not player_id or team not in (TEAM_A, TEAM_B):
            return _error("player_id and a team of 'A' or 'B' are required", 400)
        player = _select_by_ids(_parse_players(data), [str(player_id)], "player")[0]
        lineup = add_goal(_parse_lineup(data), player, team)
        return _lineup_response(data, lineup)

    @app.route("/api/lineup/goals/delete", methods=["POST"])
    def lineup_delete_goal():
        """Remove a goal from the current lineup by its position."""
        data = _body()
        index = data.get("index")
        if not isinstance(index, int) or isinstance(index, bool):
            return _error("index must be an integer", 400)
        lineup = delete_goal(_parse_lineup(data), index)
        return _lineup_response(data, lineup)

    # ---------- Match history ---------- #

    @app.route("/api/matches/record", methods=["POST"])
    def matches_record():
        """Close the current match and return the record for the client to keep."""
        data = _body()
        try:
            played_on = date.fromisoformat(str(data.get("date") or date.today().isoformat())[:10])
        except ValueError:
            raise PayloadError("date must be an ISO date (YYYY-MM-DD)")
        record = record_match(_parse_lineup(data), played_on,
                              score_a=_parse_score(data, "score_a"),
                              score_b=_parse_score(data, "score_b"))
        return jsonify({"success": True, "match": record.to_dict()})

    @app.route("/api/scorers", methods=["POST"])
    def scorers():
        """Top scorers of the season."""
        data = _body()
        try:
            n = int(data.get("n", TOP_SCORERS_N))
        except (TypeError, ValueError):
            raise PayloadError("n must be an integer")
        rows = top_scorers(_parse_matches(data), _parse_players(data), _parse_year(data), n)
        return jsonify({"success": True, "scorers": [row.to_dict() for row in rows]})

    return app


def run_web_app(host: str = "127.0.0.1", port: int = 7122, debug: bool = False) -> None:
    """
    Run the web application.

    Args:
        host: Host address to bind to (default: localhost only)
        port: Port number to listen on
        debug: Enable Flask debug mode
    """
    app = create_app()
    logger.info("Starting %s API on %s:%d", APP_TITLE, host, port)
    app.run(host=host, port=port, debug=debug)


if __name__ == "__main__":
    run_web_app()
