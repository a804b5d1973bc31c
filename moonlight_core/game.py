from __future__ import annotations
import logging
from datetime import datetime
from typing import List, Optional, Tuple

from . import point as point_sm
from .constants import (
    TEAM_NAME, OPPONENT, OFFENSE, DEFENSE, IN_PROGRESS, MOONLIGHT_SCORE, OPPONENT_SCORE,
    SCORE_LIMIT_REACHED, ENDED_MANUALLY, normalize_name,
)
from .exceptions import InvalidTransition, ValidationFailure
from .lines import replacement_candidates, suggest_line, swap_player
from .models import Game, GameRules, LineCheck, Player, Point
from .ui_helpers import by_id

logger = logging.getLogger(__name__)


def _new_point(number: int, a_gender: str, starting_on: str) -> Point:
    return Point(point_number=number, a_gender=a_gender, starting_on=starting_on)

def _active_point(game: Game) -> Point:
    if game.is_complete:
        raise InvalidTransition(f"Game vs {game.opponent_name} is already complete.")
    point = game.current_point
    if point is None:
        raise InvalidTransition("Game has no point in progress.")
    return point

# -----------------------------
# Start
# -----------------------------
def start_game(
    roster: List[Player],
    initial_offense: str = TEAM_NAME,
    a_gender: str = "MMP",
    opponent_name: str = "",
    rules: Optional[GameRules] = None,
) -> Game:
    rules = rules or GameRules()
    if len(roster) < rules.min_roster:
        raise ValidationFailure(
            f"Please add at least {rules.min_roster} players to the roster before starting a game."
        )
    first_side = OFFENSE if initial_offense == TEAM_NAME else DEFENSE
    game = Game(
        roster=[p.model_copy(deep=True) for p in roster],
        initial_offense=initial_offense,
        a_gender=a_gender,
        opponent_name=normalize_name(opponent_name) or OPPONENT,
        rules=rules.model_copy(),
        points=[_new_point(1, a_gender, first_side)],
    )
    logger.info("Started game %s vs %s (%s on offense, A=%s)",
                game.id, game.opponent_name, initial_offense, a_gender)
    return game

# -----------------------------
# Line selection for the current point
# -----------------------------
def suggest_for_current(game: Game) -> Tuple[List[Player], LineCheck]:
    point = _active_point(game)
    return suggest_line(game.roster, point.starting_on, point.abba_info, game.points, game.rules)

def swap_in_current(game: Game, line: List[Player], outgoing_id: str,
                    incoming_id: str) -> Tuple[List[Player], LineCheck]:
    point = _active_point(game)
    roster_map = by_id(game.roster)
    outgoing = roster_map.get(outgoing_id)
    if outgoing is None:
        raise ValidationFailure(f"Unknown player {outgoing_id}.")
    candidates = replacement_candidates(game.roster, line, outgoing)
    if not candidates:
        raise ValidationFailure("No available replacements with matching gender.")
    incoming = roster_map.get(incoming_id)
    if incoming is None:
        raise ValidationFailure(f"Unknown player {incoming_id}.")
    return swap_player(line, outgoing_id, incoming, point.abba_info, game.rules)

def confirm_line(game: Game, line: List[Player], override: bool = False) -> LineCheck:
    point = _active_point(game)
    roster_ids = {p.id for p in game.roster}
    strangers = [p.name for p in line if p.id not in roster_ids]
    if strangers:
        raise ValidationFailure(f"Not on the roster for this game: {', '.join(strangers)}.")
    return point_sm.set_line(point, line, game.rules, override=override)

# -----------------------------
# Scoring
# -----------------------------
def arm_halftime(game: Game, armed: bool = True):
    if game.is_complete:
        raise InvalidTransition("Cannot arm halftime on a completed game.")
    if armed and game.is_halftime:
        raise InvalidTransition("Halftime has already happened.")
    game.halftime_armed = armed

def next_starting_side(scorer: str, initial_offense: str, halftime_started: bool) -> str:
    """Side the next point starts on, given who just scored."""
    if not halftime_started:
        return DEFENSE if scorer == TEAM_NAME else OFFENSE
    flipped = DEFENSE if initial_offense == TEAM_NAME else OFFENSE
    if scorer == TEAM_NAME:
        return flipped
    return OFFENSE if flipped == DEFENSE else DEFENSE

def _after_score(game: Game, scorer: str):
    rules = game.rules
    if max(game.moonlight_score, game.opponent_score) >= rules.score_cap:
        end_game(game, SCORE_LIMIT_REACHED)
        return

    halftime_started = False
    if not game.is_halftime and (
        game.moonlight_score >= rules.halftime_score
        or game.opponent_score >= rules.halftime_score
        or game.halftime_armed
    ):
        game.is_halftime = True
        game.halftime_armed = False
        halftime_started = True
        logger.info("Halftime vs %s at %d-%d", game.opponent_name, game.moonlight_score, game.opponent_score)

    side = next_starting_side(scorer, game.initial_offense, halftime_started)
    game.points.append(_new_point(len(game.points) + 1, game.a_gender, side))

def record_own_score(game: Game, goal_id: Optional[str], assist_id: Optional[str]) -> Game:
    point = _active_point(game)
    point_sm.record_own_score(point, goal_id, assist_id)
    game.moonlight_score += 1
    _after_score(game, TEAM_NAME)
    return game

def record_opponent_score(game: Game) -> Game:
    point = _active_point(game)
    point_sm.record_opponent_score(point)
    game.opponent_score += 1
    _after_score(game, OPPONENT)
    return game

def edit_score(game: Game, point_number: int, goal_id: Optional[str], assist_id: Optional[str]) -> Point:
    try:
        point = game.point(point_number)
    except KeyError as e:
        raise ValidationFailure(str(e.args[0])) from e
    point_sm.edit_outcome(point, goal_id, assist_id)
    return point

# -----------------------------
# End
# -----------------------------
def end_game(game: Game, reason: str = ENDED_MANUALLY, now: Optional[datetime] = None) -> Game:
    if game.is_complete:
        raise InvalidTransition(f"Game vs {game.opponent_name} already ended ({game.end_reason}).")
    if reason == ENDED_MANUALLY and game.points and game.points[-1].outcome == IN_PROGRESS:
        game.points = game.points[:-1]

    # trust the point log, not the running counters
    game.moonlight_score = game.outcome_count(MOONLIGHT_SCORE)
    game.opponent_score = game.outcome_count(OPPONENT_SCORE)
    game.is_complete = True
    game.halftime_armed = False
    game.end_reason = reason
    game.end_time = now or datetime.now()
    logger.info("Game %s vs %s ended %d-%d: %s",
                game.id, game.opponent_name, game.moonlight_score, game.opponent_score, reason)
    return game

def game_result_label(game: Game) -> str:
    return f"{'W' if game.won else 'L'} {game.moonlight_score} - {game.opponent_score}"
