"""Tests for substitution planning."""

import random

import pytest

from matchday.models import GameConfig, Player, Position, PresenceStatus, RosterResult
from matchday.services import (
    balance_teams, plan_substitutions, rank_numbers, select_roster, substituted_ids
)

FULL = PresenceStatus.PLAYING_FULL
FIRST_HALF = PresenceStatus.FIRST_HALF
SECOND_HALF = PresenceStatus.SECOND_HALF


def _player(pid, skill=5, position=Position.MIDFIELDER):
    return Player(id=pid, name=pid.upper(), position=position, skill_rating=skill)


def _keeper(pid, skill=5):
    return _player(pid, skill, Position.GOALKEEPER)


@pytest.fixture
def squad():
    """Two three-player sides with two reserves waiting."""
    team_a = [_keeper("a_gk"), _player("a1", 8), _player("a2", 4)]
    team_b = [_keeper("b_gk"), _player("b1", 7), _player("b2", 5)]
    reserves = [_player("r1", 6), _player("r2", 3)]
    numbers = {"a1": 1, "b1": 2, "b2": 3, "a2": 4, "r1": 5, "r2": 6}
    return team_a, team_b, reserves, numbers


def test_no_reserves_means_no_substitutions(squad):
    team_a, team_b, _, numbers = squad
    presence = {"a1": FIRST_HALF}

    assert plan_substitutions(team_a, team_b, [], presence, numbers) == {}


def test_first_half_player_is_replaced(squad):
    team_a, team_b, reserves, numbers = squad
    presence = {"b1": FIRST_HALF}

    plan = plan_substitutions(team_a, team_b, reserves[:1], presence, numbers)

    assert plan == {"r1": "b1"}


def test_worst_ranked_starters_leave_for_extra_reserves(squad):
    team_a, team_b, reserves, numbers = squad

    plan = plan_substitutions(team_a, team_b, reserves, {}, numbers)

    # a2 and b2 are the two worst-ranked starters; r1 joins B (|13-18| < |19-12|)
    assert plan == {"r1": "b2", "r2": "a2"}


def test_equal_outcome_favours_team_a():
    team_a = [_keeper("a_gk"), _player("x", 5)]
    team_b = [_keeper("b_gk"), _player("y", 5)]
    reserves = [_player("r", 5)]
    presence = {"x": FIRST_HALF, "y": FIRST_HALF}

    plan = plan_substitutions(team_a, team_b, reserves, presence, {"x": 1, "y": 2, "r": 3})

    assert plan == {"r": "x"}


def test_more_reserves_than_outfield_starters():
    team_a = [_keeper("a_gk"), _player("a1")]
    team_b = [_keeper("b_gk"), _player("b1")]
    reserves = [_player("r1"), _player("r2"), _player("r3")]
    numbers = {"a1": 1, "b1": 2, "r1": 3, "r2": 4, "r3": 5}

    plan = plan_substitutions(team_a, team_b, reserves, {}, numbers)

    assert set(plan) == {"r1", "r2"}
    assert set(plan.values()) == {"a1", "b1"}


def test_goalkeepers_never_leave():
    team_a = [_keeper("a_gk"), _player("a1")]
    team_b = [_keeper("b_gk"), _player("b1")]
    presence = {"a_gk": FIRST_HALF}

    plan = plan_substitutions(team_a, team_b, [_player("r")], presence,
                              {"a1": 1, "b1": 2, "r": 3})

    assert plan == {"r": "b1"}


def test_reserves_listed_on_a_team_are_not_leavers():
    late = _player("late", 2)
    team_a = [_keeper("a_gk"), _player("a1"), late]
    team_b = [_keeper("b_gk"), _player("b1")]

    plan = plan_substitutions(team_a, team_b, [late], {}, {"a1": 1, "b1": 2, "late": 3})

    assert "late" not in plan.values()


def test_unranked_reserve_enters_last():
    team_a = [_keeper("a_gk"), _player("a1")]
    team_b = [_keeper("b_gk"), _player("b1")]
    spare_keeper = _keeper("gk3")
    reserves = [spare_keeper, _player("r")]
    presence = {"a1": FIRST_HALF}

    plan = plan_substitutions(team_a, team_b, reserves, presence, {"a1": 1, "b1": 2, "r": 3})

    assert plan["r"] == "a1"


def test_surplus_first_half_leavers_stay_unpaired(squad):
    team_a, team_b, reserves, numbers = squad
    presence = {"a1": FIRST_HALF, "b1": FIRST_HALF}

    plan = plan_substitutions(team_a, team_b, reserves[:1], presence, numbers)

    assert len(plan) == 1
    assert plan["r1"] in {"a1", "b1"}


def test_first_half_leavers_on_one_side_go_in_rank_order():
    team_b = [_keeper("b_gk"), _player("strong", 7), _player("weak", 3)]
    team_a = [_keeper("a_gk"), _player("a1", 6)]
    presence = {"strong": FIRST_HALF, "weak": FIRST_HALF}
    numbers = {"weak": 1, "a1": 2, "strong": 3, "r": 4}

    plan = plan_substitutions(team_a, team_b, [_player("r")], presence, numbers)

    assert plan == {"r": "weak"}


def test_pipeline_replaces_best_ranked_first_half_leaver():
    keepers = [_keeper("g1"), _keeper("g2")]
    skills = {"f1": 3, "f2": 8, "f3": 6, "f4": 7, "f5": 5, "f6": 4, "f7": 2, "f8": 1}
    field = [_player(pid, skill) for pid, skill in skills.items()]
    late = _player("r", 5)
    players = keepers + field + [late]
    presence = {p.id: FULL for p in players}
    presence.update(f1=FIRST_HALF, f4=FIRST_HALF, r=SECOND_HALF)
    ranking = field + [late]

    roster = select_roster(players, presence, ranking, GameConfig(4))
    teams = balance_teams(roster.starters)
    plan = plan_substitutions(teams.team_a, teams.team_b, roster.reserves, presence,
                              rank_numbers(ranking))

    # f4 is listed ahead of f1 on side B, but f1 holds the better rank
    assert [p.id for p in teams.team_b] == ["g2", "f4", "f3", "f1", "f7"]
    assert plan == {"r": "f1"}


def test_accepts_placed_players(squad):
    team_a, team_b, reserves, numbers = squad
    teams = balance_teams(team_a + team_b)

    plan = plan_substitutions(teams.team_a, teams.team_b, reserves, {}, numbers)

    assert len(plan) == 2


def test_planning_is_deterministic(squad):
    team_a, team_b, reserves, numbers = squad
    presence = {"a1": FIRST_HALF}

    first = plan_substitutions(team_a, team_b, reserves, presence, numbers)
    second = plan_substitutions(list(team_a), list(team_b), list(reserves), dict(presence),
                                dict(numbers))

    assert first == second


@pytest.mark.parametrize("seed", range(6))
def test_full_pipeline_produces_valid_plan(seed):
    rng = random.Random(seed)
    keepers = [_keeper("gk0", rng.randint(1, 10)), _keeper("gk1", rng.randint(1, 10))]
    field = [_player(f"f{i:02d}", rng.randint(1, 10)) for i in range(22)]
    players = keepers + field
    presence = {p.id: FULL for p in players}
    for p in rng.sample(field, 6):
        presence[p.id] = rng.choice([FIRST_HALF, SECOND_HALF])
    numbers = rank_numbers(field)

    roster = select_roster(players, presence, field, GameConfig(8))
    assert isinstance(roster, RosterResult)
    teams = balance_teams(roster.starters)
    plan = plan_substitutions(teams.team_a, teams.team_b, roster.reserves, presence, numbers)

    outfield = {p.id for p in teams.players() if not p.is_goalkeeper}
    assert set(plan) <= set(roster.reserve_ids)
    assert set(plan.values()) <= outfield
    assert len(substituted_ids(plan)) == len(plan)
    assert len(plan) == min(len(roster.reserves), len(outfield))
