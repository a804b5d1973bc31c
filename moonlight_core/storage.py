"""
Whole-state persistence: roster, game history and the game in progress are
written as one JSON blob. Point ABBA info is dumped for readability but is
recomputed on load.
"""
from __future__ import annotations
import json
import logging
import os
from typing import Optional

from .exceptions import PersistenceError
from .models import AppState

logger = logging.getLogger(__name__)

DEFAULT_STATE_PATH = os.path.join(".data", "moonlight_state.json")


def state_to_json(state: AppState) -> str:
    return json.dumps(state.model_dump(mode="json"), ensure_ascii=False, indent=2)

def state_from_json(text: str) -> AppState:
    try:
        return AppState.model_validate(json.loads(text))
    except ValueError as e:  # JSONDecodeError and pydantic ValidationError
        raise PersistenceError(f"State blob is not valid: {e}") from e

def read_state(path: Optional[str] = None) -> AppState:
    path = path or DEFAULT_STATE_PATH
    if not os.path.exists(path):
        return AppState()
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise PersistenceError(f"Could not read {path}: {e}") from e
    return state_from_json(text)

def write_state(state: AppState, path: Optional[str] = None):
    path = path or DEFAULT_STATE_PATH
    tmp = path + ".tmp"
    try:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(tmp, "w", encoding="utf-8") as f:
            f.write(state_to_json(state))
        os.replace(tmp, path)
    except OSError as e:
        raise PersistenceError(f"Could not write {path}: {e}") from e

def load_state(path: Optional[str] = None) -> AppState:
    """Never raises: a missing or corrupt blob degrades to an empty state."""
    try:
        return read_state(path)
    except PersistenceError as e:
        logger.error("Could not load data: %s", e)
        return AppState()

def save_state(state: AppState, path: Optional[str] = None) -> bool:
    try:
        write_state(state, path)
        return True
    except PersistenceError as e:
        logger.error("Could not save data: %s", e)
        return False
