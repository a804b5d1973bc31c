from __future__ import annotations
import pytest

from moonlight_core import state as session
from moonlight_core.exceptions import InvalidTransition, ValidationFailure
from moonlight_core.models import AppState, GameRules
from moonlight_core.test_helpers import quick_roster


def _state():
    return AppState(roster=quick_roster(8, 8, role="Handler"))

def _play_point(st, scorer):
    line, _ = session.suggest(st)
    session.set_line(st, line)
    if scorer == "Moonlight":
        return session.score_own(st, line[0].id, line[1].id)
    return session.score_opponent(st)

def test_commands_need_a_game():
    st = _state()
    with pytest.raises(InvalidTransition, match="No game in progress"):
        session.suggest(st)
    with pytest.raises(InvalidTransition):
        session.score_opponent(st)
    with pytest.raises(InvalidTransition):
        session.end_current(st)

def test_only_one_game_at_a_time():
    st = _state()
    session.start(st, "Moonlight", "MMP", "Rival")
    with pytest.raises(InvalidTransition):
        session.start(st, "Opponent", "FMP")

def test_start_requires_roster():
    st = AppState(roster=quick_roster(2, 2))
    with pytest.raises(ValidationFailure):
        session.start(st, "Moonlight", "MMP")
    assert st.current_game is None

def test_game_is_archived_when_score_cap_reached():
    st = _state()
    g = session.start(st, "Moonlight", "MMP", "Rival", rules=GameRules(score_cap=2))
    _play_point(st, "Moonlight")
    assert st.current_game is g
    _play_point(st, "Moonlight")
    assert st.current_game is None
    assert st.game_history[0].id == g.id
    assert st.game_history[0].is_complete

def test_end_current_archives_newest_first():
    st = _state()
    first = session.start(st, "Moonlight", "MMP", "First")
    _play_point(st, "Opponent")
    session.end_current(st)
    second = session.start(st, "Opponent", "MMP", "Second")
    session.end_current(st)
    assert [g.id for g in st.game_history] == [second.id, first.id]
    assert len(st.game_history[1].points) == 1
    assert st.game_history[0].points == []

def test_arm_halftime_through_session():
    st = _state()
    session.start(st, "Moonlight", "MMP")
    session.arm_halftime(st)
    g = _play_point(st, "Opponent")
    assert g.is_halftime

def test_swap_through_session():
    st = _state()
    g = session.start(st, "Moonlight", "MMP")
    line, _ = session.suggest(st)
    bench = [p for p in g.roster if p not in line and p.gender == line[0].gender]
    new_line, check = session.swap(st, line, line[0].id, bench[0].id)
    assert bench[0] in new_line
    assert not check.is_fatal

def test_edit_score_in_history():
    st = _state()
    g = session.start(st, "Moonlight", "MMP")
    _play_point(st, "Moonlight")
    session.end_current(st)
    pt = st.game_history[0].point(1)
    session.edit_score(st, g.id, 1, pt.line[4].id, pt.line[5].id)
    assert st.game_history[0].point(1).goal == pt.line[4].id

def test_edit_score_unknown_game():
    with pytest.raises(ValidationFailure):
        session.edit_score(_state(), "nope", 1, "a", "b")

def test_delete_game():
    st = _state()
    g = session.start(st, "Moonlight", "MMP")
    session.end_current(st)
    session.delete_game(st, g.id)
    assert st.game_history == []
    with pytest.raises(ValidationFailure):
        session.delete_game(st, g.id)
