# FILE: pages/3_Reports_Exports.py
import streamlit as st

from moonlight_core.csv_io import export_played_points_csv, roster_to_csv_bytes, stats_to_csv_bytes
from moonlight_core.export_pdf import render_stats_pdf
from moonlight_core.game import game_result_label
from moonlight_core.stats import TOURNAMENT, stats_dataframe, stats_view
from moonlight_core.storage import state_to_json
import ui_state

state = ui_state.ensure_state()

st.title("Reports & Exports")
if not state.game_history:
    st.warning("No completed games yet. Play a game first.")
    st.stop()

games = {g.id: g for g in state.game_history}
view = st.selectbox(
    "Report",
    [TOURNAMENT] + list(games),
    format_func=lambda v: "Tournament" if v == TOURNAMENT else f"vs {games[v].opponent_name} ({game_result_label(games[v])})",
)
title, rows = stats_view(state, view)
df = stats_dataframe(rows)
slug = "tournament" if view == TOURNAMENT else games[view].opponent_name.lower().replace(" ", "_")

# Stats sheet
st.download_button("Download Stats CSV", data=stats_to_csv_bytes(df), file_name=f"stats_{slug}.csv")
st.download_button("Download Stat Sheet (PDF)", data=render_stats_pdf(title, df),
                   file_name=f"stats_{slug}.pdf", mime="application/pdf")

# Point log for a single game
if view != TOURNAMENT:
    st.download_button("Download Played Points CSV", data=export_played_points_csv(games[view]),
                       file_name=f"points_{slug}.csv")

st.subheader("Backup")
st.download_button("Download Roster CSV", data=roster_to_csv_bytes(state.roster), file_name="roster.csv")
st.download_button("Download All Data (JSON)", data=state_to_json(state), file_name="moonlight_state.json")
