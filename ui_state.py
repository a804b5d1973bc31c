# ui_state.py
"""
Streamlit session plumbing shared by app.py and the pages.

The AppState lives in st.session_state["app_state"]; every button calls one
command through run_command(), which shows domain errors and saves the state
after a successful change.
"""
from __future__ import annotations
import os
from typing import Any, Callable, Tuple

import streamlit as st

from moonlight_core.config import DEFAULT_ASSETS_DIR, RULES_FILE, ensure_assets_exist, rules_or_default
from moonlight_core.exceptions import MoonlightError, OverrideRequired
from moonlight_core.logging_config import setup_logging
from moonlight_core.models import AppState, GameRules
from moonlight_core.storage import load_state, save_state

RULES_PATH = os.path.join(DEFAULT_ASSETS_DIR, RULES_FILE)


@st.cache_resource
def _configure_process():
    # once per server process, not per rerun
    ensure_assets_exist()
    return setup_logging()

def ensure_state() -> AppState:
    _configure_process()
    ss = st.session_state
    if "app_state" not in ss:
        ss["app_state"] = load_state()
    ss.setdefault("proposed_line", [])     # List[Player] for the current point
    ss.setdefault("line_message", None)    # (level, message) of the last check
    ss.setdefault("stats_sort", None)      # (field, "asc"|"desc")
    ss.setdefault("flash", None)
    return ss["app_state"]

def app_state() -> AppState:
    return st.session_state["app_state"]

def rules() -> GameRules:
    return rules_or_default(RULES_PATH)

def persist():
    if not save_state(app_state()):
        st.session_state["flash"] = ("warning", "Could not save data. Changes are kept for this session only.")

def flash(level: str, message: str):
    st.session_state["flash"] = (level, message)

def show_flash():
    msg = st.session_state.get("flash")
    if msg:
        level, text = msg
        {"success": st.success, "warning": st.warning}.get(level, st.error)(text)
        st.session_state["flash"] = None

def run_command(fn: Callable, *args, **kwargs) -> Tuple[bool, Any]:
    """
    Call one command function. Domain errors are shown on the page and
    reported as (False, None); on success the state is saved.
    """
    try:
        result = fn(*args, **kwargs)
    except OverrideRequired as e:
        st.warning(f"{e.check.message} Tick 'Override warning' to confirm anyway.")
        return False, None
    except MoonlightError as e:
        st.error(str(e))
        return False, None
    persist()
    return True, result
