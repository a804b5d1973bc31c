# FILE: pages/2_Stats.py
from __future__ import annotations

import streamlit as st

from moonlight_core import state as session
from moonlight_core.constants import ALL, GENDERS, MOONLIGHT_SCORE, ROLES, STAT_COLUMNS, STAT_HEADERS
from moonlight_core.stats import TOURNAMENT, filter_stats, next_sort, sort_stats, stats_dataframe, stats_view
from moonlight_core.game import game_result_label
from moonlight_core.ui_helpers import by_id, display_name
import ui_state

st.set_page_config(page_title="Stats", layout="wide")
state = ui_state.ensure_state()
ss = st.session_state

st.title("Stats")
ui_state.show_flash()

games = {g.id: g for g in state.game_history}
view = st.selectbox(
    "View",
    [TOURNAMENT] + list(games),
    format_func=lambda v: "Tournament" if v == TOURNAMENT else f"vs {games[v].opponent_name} ({game_result_label(games[v])})",
)
title, rows = stats_view(state, view)
st.subheader(title)

c1, c2, c3 = st.columns(3)
gender = c1.selectbox("Gender", [ALL] + GENDERS)
role = c2.selectbox("Role", [ALL] + ROLES)
sort_key = c3.selectbox("Sort by", STAT_COLUMNS, format_func=lambda c: STAT_HEADERS[c])
if c3.button("Sort", key="sort_btn"):
    ss["stats_sort"] = next_sort(ss["stats_sort"], sort_key)

rows = filter_stats(rows, gender, role)
if ss["stats_sort"]:
    rows = sort_stats(rows, [ss["stats_sort"]])
    field, direction = ss["stats_sort"]
    st.caption(f"Sorted by {STAT_HEADERS[field]} ({direction})")

if rows:
    st.dataframe(stats_dataframe(rows), hide_index=True, use_container_width=True)
else:
    st.write("No stats yet. Finish a game to see player totals.")

# -----------------------------
# Correct a goal / assist
# -----------------------------
if view != TOURNAMENT:
    game = games[view]
    scored = [pt for pt in game.points if pt.outcome == MOONLIGHT_SCORE]
    if scored:
        with st.expander("Edit Score"):
            roster = by_id(game.roster)
            num = st.selectbox("Point", [pt.point_number for pt in scored])
            pt = game.point(num)
            on_line = [p.id for p in pt.line]
            goal = st.selectbox("Goal", on_line, index=on_line.index(pt.goal) if pt.goal in on_line else 0,
                                format_func=lambda i: display_name(roster[i]), key=f"edit_goal_{num}")
            assist = st.selectbox("Assist", on_line, index=on_line.index(pt.assist) if pt.assist in on_line else 0,
                                  format_func=lambda i: display_name(roster[i]), key=f"edit_assist_{num}")
            if st.button("Save", key="edit_save"):
                ok, _ = ui_state.run_command(session.edit_score, state, game.id, num, goal, assist)
                if ok:
                    ui_state.flash("success", f"Point {num} updated.")
                    st.rerun()
