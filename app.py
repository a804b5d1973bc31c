# app.py
from __future__ import annotations

import streamlit as st

from moonlight_core import roster as rs
from moonlight_core import state as session
from moonlight_core.constants import GENDERS, LINES, ROLES, TEAM_NAME
from moonlight_core.csv_io import build_template_csv, parse_roster_csv, roster_to_csv_bytes, roster_to_dataframe
from moonlight_core.game import game_result_label
from moonlight_core.ui_helpers import by_id, display_name
import ui_state

# ---------- Page ----------
st.set_page_config(page_title=f"{TEAM_NAME} Ultimate Stats", layout="wide")
state = ui_state.ensure_state()

st.title(f"{TEAM_NAME} Ultimate Stats")
ui_state.show_flash()

if state.current_game is not None:
    g = state.current_game
    st.info(f"Game in progress vs {g.opponent_name}: {g.moonlight_score} - {g.opponent_score}. "
            "Open the Game page to continue.")

# -----------------------------
# Roster
# -----------------------------
st.header("Roster")

c1, c2, c3 = st.columns([1, 1, 2])
with c1:
    st.download_button("Download CSV Template", data=build_template_csv(),
                       file_name="roster_template.csv", key="dl_tpl")
with c2:
    st.download_button("Export Roster CSV", data=roster_to_csv_bytes(state.roster),
                       file_name="roster.csv", key="dl_roster", disabled=not state.roster)
with c3:
    up = st.file_uploader("Import Roster CSV", type=["csv"], key="uploader_roster")
    if up is not None and st.button("Add Players From CSV", key="csv_add"):
        ok, added = ui_state.run_command(rs.add_players, state, parse_roster_csv(up))
        if ok:
            ui_state.flash("success", f"Added {len(added)} players.")
            st.rerun()

with st.expander("Add Player", expanded=not state.roster):
    with st.form("add_player", clear_on_submit=True):
        name = st.text_input("Name")
        c1, c2, c3 = st.columns(3)
        gender = c1.selectbox("Gender", GENDERS)
        line = c2.selectbox("Line", LINES)
        role = c3.selectbox("Role", ROLES)
        if st.form_submit_button("Add"):
            ok, p = ui_state.run_command(rs.add_player, state, name, gender, line, role)
            if ok:
                ui_state.flash("success", f"Added {p.name}.")
                st.rerun()

with st.expander("Quick Add"):
    st.caption("Comma-separated names per group. Names already on the roster are skipped.")
    groups = {}
    with st.form("quick_add", clear_on_submit=True):
        for line in LINES:
            st.markdown(f"**{line}**")
            cols = st.columns(len(ROLES))
            for col, role in zip(cols, ROLES):
                for gender in GENDERS:
                    groups[(line, role, gender)] = col.text_input(f"{role} {gender}", key=f"qa_{line}_{role}_{gender}")
        if st.form_submit_button("Add All"):
            ok, added = ui_state.run_command(rs.quick_add, state, groups)
            if ok:
                ui_state.flash("success", f"Added {len(added)} players.")
                st.rerun()

if state.roster:
    df = roster_to_dataframe(state.roster)
    st.dataframe(df.drop(columns=["id"]), use_container_width=True, hide_index=True)

    players = by_id(state.roster)
    pid = st.selectbox("Player", list(players), format_func=lambda i: display_name(players[i]), key="edit_pid")
    p = players[pid]
    with st.form("edit_player"):
        new_name = st.text_input("Name", value=p.name)
        c1, c2, c3 = st.columns(3)
        new_gender = c1.selectbox("Gender", GENDERS, index=GENDERS.index(p.gender))
        new_line = c2.selectbox("Line", LINES, index=LINES.index(p.line))
        new_role = c3.selectbox("Role", ROLES, index=ROLES.index(p.role))
        if st.form_submit_button("Save Changes"):
            ok, _ = ui_state.run_command(rs.edit_player, state, pid, name=new_name,
                                         gender=new_gender, line=new_line, role=new_role)
            if ok:
                st.rerun()

    c1, c2 = st.columns(2)
    with c1:
        confirm_del = st.checkbox(f"Confirm delete {p.name}", key="confirm_del")
        if st.button("Delete Player", key="del_player"):
            ok, _ = ui_state.run_command(rs.delete_player, state, pid, confirmed=confirm_del)
            if ok:
                st.rerun()
    with c2:
        confirm_clear = st.checkbox("Confirm clear roster", key="confirm_clear")
        if st.button("Clear Roster", key="clear_roster"):
            ok, _ = ui_state.run_command(rs.clear_roster, state, confirmed=confirm_clear)
            if ok:
                st.rerun()
else:
    st.write("No players yet.")

# -----------------------------
# Game history
# -----------------------------
st.header("Game History")
if not state.game_history:
    st.write("No completed games.")
for g in state.game_history:
    c1, c2 = st.columns([4, 1])
    c1.write(f"**vs {g.opponent_name}** — {game_result_label(g)} ({g.end_reason})")
    if c2.button("Delete", key=f"del_game_{g.id}"):
        ok, _ = ui_state.run_command(session.delete_game, state, g.id)
        if ok:
            st.rerun()
