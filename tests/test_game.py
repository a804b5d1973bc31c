from __future__ import annotations
from datetime import datetime

import pytest

from moonlight_core import game as gc
from moonlight_core.exceptions import InvalidTransition, ValidationFailure
from moonlight_core.models import GameRules
from moonlight_core.test_helpers import quick_player, quick_roster


def _new_game(initial_offense="Moonlight", roster=None, **kw):
    roster = roster if roster is not None else quick_roster(8, 8, role="Handler")
    return gc.start_game(roster, initial_offense=initial_offense, a_gender="MMP", **kw)

def _play(game, scorer):
    """Suggest, confirm and score the current point."""
    line, _ = gc.suggest_for_current(game)
    gc.confirm_line(game, line)
    if scorer == "Moonlight":
        gc.record_own_score(game, line[0].id, line[1].id)
    else:
        gc.record_opponent_score(game)
    return game

def _play_to(game, moonlight, opponent):
    # alternate so neither side hits halftime early by accident
    while game.moonlight_score < moonlight or game.opponent_score < opponent:
        if game.moonlight_score < moonlight:
            _play(game, "Moonlight")
        if game.opponent_score < opponent:
            _play(game, "Opponent")
    return game

# -----------------------------
# Start
# -----------------------------
def test_roster_too_small_to_start():
    with pytest.raises(ValidationFailure, match="at least 7 players"):
        gc.start_game(quick_roster(3, 3))

def test_first_point_side_follows_initial_offense():
    assert _new_game("Moonlight").points[0].starting_on == "Offense"
    assert _new_game("Opponent").points[0].starting_on == "Defense"

def test_first_point_is_pending():
    g = _new_game()
    assert len(g.points) == 1
    assert g.current_point.point_number == 1
    assert g.current_point.phase == "LinePending"
    assert (g.moonlight_score, g.opponent_score) == (0, 0)

def test_opponent_name_defaults():
    assert _new_game().opponent_name == "Opponent"
    assert _new_game(opponent_name="  Rival  ").opponent_name == "Rival"

def test_roster_is_snapshotted():
    roster = quick_roster(4, 3, role="Handler")
    g = gc.start_game(roster)
    roster.pop()
    assert len(g.roster) == 7

def test_confirm_rejects_repeated_player():
    g = _new_game()
    line, _ = gc.suggest_for_current(g)
    m1 = next(p for p in line if p.gender == "MMP")
    fmps = [p for p in line if p.gender == "FMP"]
    with pytest.raises(ValidationFailure, match="more than once"):
        gc.confirm_line(g, [m1] * 4 + fmps)
    assert g.current_point.line == []

def test_confirm_rejects_player_outside_game_roster():
    g = _new_game(roster=quick_roster(4, 3, role="Handler"))
    line, _ = gc.suggest_for_current(g)
    stranger = quick_player("m9", gender="MMP", role="Handler")
    swapped = [stranger if p.id == "m1" else p for p in line]
    with pytest.raises(ValidationFailure, match="Not on the roster"):
        gc.confirm_line(g, swapped)
    assert g.current_point.phase == "LinePending"

# -----------------------------
# Sides and halftime
# -----------------------------
def test_next_side_before_halftime():
    assert gc.next_starting_side("Moonlight", "Moonlight", False) == "Defense"
    assert gc.next_starting_side("Opponent", "Moonlight", False) == "Offense"
    assert gc.next_starting_side("Moonlight", "Opponent", False) == "Defense"

def test_next_side_at_halftime():
    assert gc.next_starting_side("Moonlight", "Moonlight", True) == "Defense"
    assert gc.next_starting_side("Moonlight", "Opponent", True) == "Offense"
    assert gc.next_starting_side("Opponent", "Moonlight", True) == "Offense"
    assert gc.next_starting_side("Opponent", "Opponent", True) == "Defense"

def test_halftime_at_eight_moonlight_started_on_offense():
    g = _play_to(_new_game("Moonlight"), 7, 6)
    assert not g.is_halftime
    _play(g, "Moonlight")
    assert (g.moonlight_score, g.opponent_score) == (8, 6)
    assert g.is_halftime
    assert g.current_point.starting_on == "Defense"
    assert g.current_point.point_number == 15

def test_halftime_at_eight_opponent_started_on_offense():
    g = _play_to(_new_game("Opponent"), 7, 6)
    _play(g, "Moonlight")
    assert g.is_halftime
    assert g.current_point.starting_on == "Offense"

def test_halftime_triggered_by_opponent_score():
    g = _play_to(_new_game("Moonlight"), 6, 7)
    _play(g, "Opponent")
    assert g.is_halftime
    assert g.current_point.starting_on == "Offense"

def test_halftime_only_once():
    g = _play_to(_new_game("Moonlight"), 8, 6)
    assert g.is_halftime
    _play(g, "Moonlight")
    # back to the normal rule: Moonlight scored, so pull
    assert g.current_point.starting_on == "Defense"
    _play(g, "Opponent")
    assert g.current_point.starting_on == "Offense"

def test_manual_halftime_applies_on_next_score():
    g = _play_to(_new_game("Opponent"), 3, 2)
    gc.arm_halftime(g)
    assert g.halftime_armed and not g.is_halftime
    _play(g, "Moonlight")
    assert g.is_halftime
    assert not g.halftime_armed
    assert g.current_point.starting_on == "Offense"

def test_cannot_arm_halftime_twice():
    g = _play_to(_new_game(), 8, 0)
    with pytest.raises(InvalidTransition):
        gc.arm_halftime(g)

def test_disarm_halftime():
    g = _new_game()
    gc.arm_halftime(g)
    gc.arm_halftime(g, False)
    _play(g, "Moonlight")
    assert not g.is_halftime

# -----------------------------
# End of game
# -----------------------------
def test_fifteen_ends_the_game():
    g = _play_to(_new_game(), 14, 10)
    n_points = len(g.points)
    _play(g, "Moonlight")
    assert g.is_complete
    assert g.end_reason == "Score limit reached"
    assert (g.moonlight_score, g.opponent_score) == (15, 10)
    # no new point appended after the winning score
    assert len(g.points) == n_points
    assert g.current_point is None
    assert gc.game_result_label(g) == "W 15 - 10"

def test_opponent_reaching_cap_ends_the_game():
    g = _play_to(_new_game(), 3, 14)
    _play(g, "Opponent")
    assert g.is_complete
    assert gc.game_result_label(g) == "L 3 - 15"

def test_score_cap_comes_from_rules():
    g = _new_game(rules=GameRules(score_cap=2, halftime_score=1))
    _play(g, "Moonlight")
    assert g.is_halftime and not g.is_complete
    _play(g, "Moonlight")
    assert g.is_complete

def test_scores_match_point_log_throughout():
    g = _new_game()
    for scorer in ["Moonlight", "Opponent", "Opponent", "Moonlight", "Moonlight"]:
        _play(g, scorer)
        assert g.scores_consistent
    assert [p.point_number for p in g.points] == list(range(1, 7))

def test_manual_end_drops_only_trailing_point():
    g = _play_to(_new_game(), 3, 2)
    assert len(g.points) == 6
    gc.end_game(g, now=datetime(2026, 1, 1, 12, 0))
    assert g.is_complete
    assert g.end_reason == "Ended manually"
    assert g.end_time == datetime(2026, 1, 1, 12, 0)
    assert len(g.points) == 5
    assert all(p.outcome != "In Progress" for p in g.points)
    assert (g.moonlight_score, g.opponent_score) == (3, 2)

def test_manual_end_with_line_set_still_drops_point():
    g = _play_to(_new_game(), 1, 1)
    line, _ = gc.suggest_for_current(g)
    gc.confirm_line(g, line)
    gc.end_game(g)
    assert len(g.points) == 2

def test_end_game_twice_is_invalid():
    g = _new_game()
    gc.end_game(g)
    with pytest.raises(InvalidTransition):
        gc.end_game(g)

def test_no_scoring_after_end():
    g = _play_to(_new_game(), 1, 0)
    gc.end_game(g)
    with pytest.raises(InvalidTransition):
        gc.record_opponent_score(g)
    with pytest.raises(InvalidTransition):
        gc.suggest_for_current(g)

# -----------------------------
# Editing and swaps
# -----------------------------
def test_edit_score_on_completed_game():
    g = _play_to(_new_game(), 2, 1)
    gc.end_game(g)
    pt = next(p for p in g.points if p.outcome == "Moonlight Score")
    goal, assist = pt.line[2].id, pt.line[3].id
    gc.edit_score(g, pt.point_number, goal, assist)
    assert (g.point(pt.point_number).goal, g.point(pt.point_number).assist) == (goal, assist)
    assert (g.moonlight_score, g.opponent_score) == (2, 1)

def test_edit_score_unknown_point():
    g = _new_game()
    with pytest.raises(ValidationFailure):
        gc.edit_score(g, 99, "m1", "m2")

def test_swap_in_current_point():
    g = _new_game()
    line, _ = gc.suggest_for_current(g)
    outgoing = next(p for p in line if p.gender == "MMP")
    incoming = next(p for p in g.roster if p.gender == "MMP" and p not in line)
    new_line, check = gc.swap_in_current(g, line, outgoing.id, incoming.id)
    assert incoming in new_line and outgoing not in new_line
    assert check.level == "ok"

def test_swap_without_bench_players():
    g = gc.start_game(quick_roster(4, 3, role="Handler"))
    line, _ = gc.suggest_for_current(g)
    with pytest.raises(ValidationFailure, match="No available replacements"):
        gc.swap_in_current(g, line, line[0].id, line[1].id)
