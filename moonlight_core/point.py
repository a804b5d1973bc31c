"""
Lifecycle of a single point.

    LinePending --set_line--> InProgress --record_*_score--> Scored

``edit_outcome`` is the one post-hoc correction allowed on a Scored point.
Every other call raises InvalidTransition and leaves the point untouched.
"""
from __future__ import annotations
from typing import List, Optional

from .constants import (
    LINE_PENDING, LINE_SET, SCORED, MOONLIGHT_SCORE, OPPONENT_SCORE,
)
from .exceptions import InvalidTransition, OverrideRequired, ValidationFailure
from .lines import validate_line
from .models import GameRules, LineCheck, Player, Point


def _require_phase(point: Point, phase: str, action: str):
    if point.phase != phase:
        raise InvalidTransition(
            f"Cannot {action} on point {point.point_number}: point is {point.phase}, expected {phase}."
        )

def _check_goal_assist(point: Point, goal_id: Optional[str], assist_id: Optional[str]):
    if not goal_id or not assist_id:
        raise ValidationFailure("Please select both a Goal and an Assist.")
    if goal_id == assist_id:
        raise ValidationFailure("Goal and Assist must be different players.")
    for pid in (goal_id, assist_id):
        if not point.has_player(pid):
            raise ValidationFailure(f"Player {pid} was not on the line for point {point.point_number}.")

def set_line(point: Point, line: List[Player], rules: Optional[GameRules] = None,
             override: bool = False) -> LineCheck:
    _require_phase(point, LINE_PENDING, "set line")
    check = validate_line(line, point.abba_info, rules)
    if check.is_fatal:
        raise ValidationFailure(check.message)
    if not check.can_confirm(override):
        raise OverrideRequired(check)
    point.line = list(line)
    return check

def record_own_score(point: Point, goal_id: Optional[str], assist_id: Optional[str]):
    _require_phase(point, LINE_SET, "record a Moonlight score")
    _check_goal_assist(point, goal_id, assist_id)
    point.outcome = MOONLIGHT_SCORE
    point.goal = goal_id
    point.assist = assist_id

def record_opponent_score(point: Point):
    _require_phase(point, LINE_SET, "record an opponent score")
    point.outcome = OPPONENT_SCORE

def edit_outcome(point: Point, goal_id: Optional[str], assist_id: Optional[str]):
    _require_phase(point, SCORED, "edit the score")
    if point.outcome != MOONLIGHT_SCORE:
        raise InvalidTransition(f"Point {point.point_number} was not a Moonlight score; nothing to edit.")
    _check_goal_assist(point, goal_id, assist_id)
    point.goal = goal_id
    point.assist = assist_id
