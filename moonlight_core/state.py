"""
Session-level commands. AppState is the explicit context: the roster, the
completed-game history and the one game currently being played.
"""
from __future__ import annotations
import logging
from typing import List, Optional, Tuple

from . import game as gc
from .constants import ENDED_MANUALLY
from .exceptions import InvalidTransition, ValidationFailure
from .models import AppState, Game, GameRules, LineCheck, Player

logger = logging.getLogger(__name__)


def _current(state: AppState) -> Game:
    if state.current_game is None or state.current_game.is_complete:
        raise InvalidTransition("No game in progress.")
    return state.current_game

def find_game(state: AppState, game_id: str) -> Game:
    if state.current_game is not None and state.current_game.id == game_id:
        return state.current_game
    for g in state.game_history:
        if g.id == game_id:
            return g
    raise ValidationFailure(f"Game {game_id} not found.")

def archive_game(state: AppState, game: Game):
    state.game_history = [game] + [g for g in state.game_history if g.id != game.id]
    if state.current_game is not None and state.current_game.id == game.id:
        state.current_game = None

def _archive_if_done(state: AppState, game: Game) -> Game:
    if game.is_complete:
        archive_game(state, game)
    return game

# -----------------------------
# Commands
# -----------------------------
def start(state: AppState, initial_offense: str, a_gender: str, opponent_name: str = "",
          rules: Optional[GameRules] = None) -> Game:
    if state.current_game is not None and not state.current_game.is_complete:
        raise InvalidTransition(f"A game vs {state.current_game.opponent_name} is already in progress.")
    game = gc.start_game(state.roster, initial_offense, a_gender, opponent_name, rules)
    state.current_game = game
    return game

def suggest(state: AppState) -> Tuple[List[Player], LineCheck]:
    return gc.suggest_for_current(_current(state))

def swap(state: AppState, line: List[Player], outgoing_id: str, incoming_id: str) -> Tuple[List[Player], LineCheck]:
    return gc.swap_in_current(_current(state), line, outgoing_id, incoming_id)

def set_line(state: AppState, line: List[Player], override: bool = False) -> LineCheck:
    return gc.confirm_line(_current(state), line, override=override)

def arm_halftime(state: AppState, armed: bool = True):
    gc.arm_halftime(_current(state), armed)

def score_own(state: AppState, goal_id: Optional[str], assist_id: Optional[str]) -> Game:
    game = gc.record_own_score(_current(state), goal_id, assist_id)
    return _archive_if_done(state, game)

def score_opponent(state: AppState) -> Game:
    game = gc.record_opponent_score(_current(state))
    return _archive_if_done(state, game)

def edit_score(state: AppState, game_id: str, point_number: int,
               goal_id: Optional[str], assist_id: Optional[str]):
    return gc.edit_score(find_game(state, game_id), point_number, goal_id, assist_id)

def end_current(state: AppState, reason: str = ENDED_MANUALLY) -> Game:
    game = gc.end_game(_current(state), reason)
    return _archive_if_done(state, game)

def delete_game(state: AppState, game_id: str):
    before = len(state.game_history)
    state.game_history = [g for g in state.game_history if g.id != game_id]
    if len(state.game_history) == before:
        raise ValidationFailure(f"Game {game_id} not found in history.")
    logger.info("Deleted game %s from history", game_id)
