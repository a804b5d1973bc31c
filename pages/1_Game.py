# FILE: pages/1_Game.py
from __future__ import annotations

import pandas as pd
import streamlit as st

from moonlight_core import state as session
from moonlight_core.constants import GENDERS, OPPONENT, TEAM_NAME, TEAMS
from moonlight_core.fairness import at_cap_mask, play_counts, uneven_genders
from moonlight_core.lines import replacement_candidates
from moonlight_core.ui_helpers import by_id, display_name
import ui_state

st.set_page_config(page_title="Game", layout="wide")
state = ui_state.ensure_state()
ss = st.session_state

st.title("Game")
ui_state.show_flash()

def _reset_line():
    ss["proposed_line"] = []
    ss["line_message"] = None

# -----------------------------
# New game
# -----------------------------
game = state.current_game
if game is None:
    st.subheader("Start a Game")
    with st.form("start_game"):
        opponent = st.text_input("Opponent", placeholder=OPPONENT)
        c1, c2 = st.columns(2)
        initial_offense = c1.radio("Starts on offense", TEAMS, horizontal=True)
        a_gender = c2.radio("A gender (majority on point 1)", GENDERS, horizontal=True)
        if st.form_submit_button("Start Game"):
            ok, _ = ui_state.run_command(session.start, state, initial_offense, a_gender,
                                         opponent, rules=ui_state.rules())
            if ok:
                _reset_line()
                st.rerun()
    st.stop()

# -----------------------------
# Scoreboard
# -----------------------------
point = game.current_point
c1, c2, c3 = st.columns(3)
c1.metric(TEAM_NAME, game.moonlight_score)
c2.metric(game.opponent_name, game.opponent_score)
if point is not None:
    c3.metric(f"Point {point.point_number}", point.abba_info.label, point.starting_on, delta_color="off")
if game.is_halftime:
    st.caption("Second half")
elif game.halftime_armed:
    st.caption("Halftime after the next score")

roster = by_id(game.roster)

# -----------------------------
# Line selection
# -----------------------------
if point is not None and point.phase == "LinePending":
    st.subheader("Line")
    if st.button("Suggest Line", key="suggest"):
        ok, res = ui_state.run_command(session.suggest, state)
        if ok:
            line, check = res
            ss["proposed_line"] = line
            ss["line_message"] = (check.level, check.message)
            st.rerun()

    line = ss["proposed_line"]
    if ss["line_message"] and ss["line_message"][1]:
        level, msg = ss["line_message"]
        (st.error if level == "fatal" else st.warning)(msg)

    if line:
        counts = play_counts(game.roster, game.points)
        ahead = at_cap_mask(counts)
        st.dataframe(
            pd.DataFrame([{
                "Name": p.name, "Gender": p.gender, "Role": p.role, "Line": p.line,
                "Played": counts[p.id], "Fairness": "⚠︎" if ahead[p.id] else "",
            } for p in line]),
            hide_index=True, use_container_width=True,
        )
        for gender in uneven_genders(game.roster, game.points):
            st.caption(f"{gender} play counts are more than one point apart; consider swapping in a bench player.")
        c1, c2, c3 = st.columns([2, 2, 1])
        out_id = c1.selectbox("Swap out", [p.id for p in line], format_func=lambda i: display_name(roster[i]))
        cands = replacement_candidates(game.roster, line, roster[out_id])
        in_id = c2.selectbox("Swap in", [p.id for p in cands], format_func=lambda i: display_name(roster[i]))
        if c3.button("Swap", key="swap"):
            ok, res = ui_state.run_command(session.swap, state, line, out_id, in_id)
            if ok:
                new_line, check = res
                ss["proposed_line"] = new_line
                ss["line_message"] = (check.level, check.message)
                st.rerun()

        override = st.checkbox("Override warning", key="override")
        if st.button("Confirm Line", key="confirm_line", type="primary"):
            ok, _ = ui_state.run_command(session.set_line, state, line, override=override)
            if ok:
                _reset_line()
                st.rerun()

# -----------------------------
# Scoring
# -----------------------------
if point is not None and point.phase == "InProgress":
    st.subheader("On the Field")
    st.write(", ".join(display_name(p) for p in point.line))
    on_line = [p.id for p in point.line]
    c1, c2 = st.columns(2)
    with c1:
        goal = st.selectbox("Goal", [""] + on_line, format_func=lambda i: display_name(roster[i]) if i else "—")
        assist = st.selectbox("Assist", [""] + on_line, format_func=lambda i: display_name(roster[i]) if i else "—")
        if st.button(f"{TEAM_NAME} Scored", key="score_own", type="primary"):
            ok, g = ui_state.run_command(session.score_own, state, goal or None, assist or None)
            if ok:
                if g.is_complete:
                    ui_state.flash("success", f"Game over: {g.moonlight_score} - {g.opponent_score}.")
                st.rerun()
    with c2:
        if st.button(f"{game.opponent_name} Scored", key="score_opp"):
            ok, g = ui_state.run_command(session.score_opponent, state)
            if ok:
                if g.is_complete:
                    ui_state.flash("success", f"Game over: {g.moonlight_score} - {g.opponent_score}.")
                st.rerun()

# -----------------------------
# Halftime / end
# -----------------------------
st.divider()
c1, c2 = st.columns(2)
with c1:
    if not game.is_halftime:
        armed = st.toggle("Halftime after next score", value=game.halftime_armed, key="arm_ht")
        if armed != game.halftime_armed:
            ok, _ = ui_state.run_command(session.arm_halftime, state, armed)
            if ok:
                st.rerun()
with c2:
    if st.button("End Game", key="end_game"):
        ok, g = ui_state.run_command(session.end_current, state)
        if ok:
            _reset_line()
            ui_state.flash("success", f"Game vs {g.opponent_name} ended {g.moonlight_score} - {g.opponent_score}.")
            st.rerun()

# -----------------------------
# Point log
# -----------------------------
with st.expander("Points"):
    rows = []
    for pt in game.points:
        rows.append({
            "Point": pt.point_number,
            "Starting On": pt.starting_on,
            "ABBA": pt.abba_info.label,
            "Outcome": pt.outcome,
            "Goal": roster[pt.goal].name if pt.goal else "",
            "Assist": roster[pt.assist].name if pt.assist else "",
        })
    st.dataframe(pd.DataFrame(rows), hide_index=True, use_container_width=True)
