from __future__ import annotations
from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from .constants import (
    IN_PROGRESS, MOONLIGHT_SCORE, OPPONENT_SCORE, OPPONENT, FMP, HANDLER_CAPABLE,
    LINE_PENDING, LINE_SET, SCORED, generate_id,
)

Gender = Literal["MMP", "FMP"]
Side = Literal["Offense", "Defense"]
LinePref = Literal["Offense", "Defense", "Flex"]
Role = Literal["Handler", "Cutter", "Hybrid"]
Team = Literal["Moonlight", "Opponent"]
Outcome = Literal["In Progress", "Moonlight Score", "Opponent Score"]


class GameRules(BaseModel):
    line_size: int = 7
    min_handlers: int = 3
    halftime_score: int = 8
    score_cap: int = 15
    min_roster: int = 7

    @field_validator("line_size", "halftime_score", "score_cap", "min_roster")
    @classmethod
    def _positive(cls, v):
        if v < 1:
            raise ValueError("rule values must be positive")
        return v


class Player(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=generate_id)
    name: str = Field(..., min_length=1)
    gender: Gender = "MMP"
    line: LinePref = "Offense"
    role: Role = "Handler"

    @property
    def handler_capable(self) -> bool:
        return self.role in HANDLER_CAPABLE


class AbbaInfo(BaseModel):
    label: str
    majority_gender: Gender
    required_mmp: int
    required_fmp: int

    def required(self, gender: str) -> int:
        return self.required_fmp if gender == FMP else self.required_mmp


class LineCheck(BaseModel):
    """Outcome of validating a proposed line. An empty message means the line is fine."""
    level: Literal["ok", "warning", "fatal"] = "ok"
    message: str = ""

    @property
    def is_fatal(self) -> bool:
        return self.level == "fatal"

    @property
    def is_warning(self) -> bool:
        return self.level == "warning"

    def can_confirm(self, override: bool = False) -> bool:
        if self.level == "ok":
            return True
        return self.is_warning and override


class Point(BaseModel):
    point_number: int = Field(..., ge=1)
    a_gender: Gender
    starting_on: Side
    line: List[Player] = Field(default_factory=list)
    outcome: Outcome = IN_PROGRESS
    goal: Optional[str] = None     # player id
    assist: Optional[str] = None   # player id

    @computed_field
    @property
    def abba_info(self) -> AbbaInfo:
        # always derived; a stored copy is ignored on load
        from .rotation import compute_abba_info
        return compute_abba_info(self.point_number, self.a_gender)

    @computed_field
    @property
    def phase(self) -> str:
        if self.outcome != IN_PROGRESS:
            return SCORED
        return LINE_SET if self.line else LINE_PENDING

    def has_player(self, pid: str) -> bool:
        return any(p.id == pid for p in self.line)


class Game(BaseModel):
    id: str = Field(default_factory=generate_id)
    roster: List[Player] = Field(default_factory=list)   # frozen snapshot taken at start
    initial_offense: Team = "Moonlight"
    a_gender: Gender = "MMP"
    opponent_name: str = OPPONENT
    start_time: datetime = Field(default_factory=datetime.now)
    end_time: Optional[datetime] = None
    is_complete: bool = False
    end_reason: Optional[str] = None
    is_halftime: bool = False
    halftime_armed: bool = False     # "next score triggers halftime"
    moonlight_score: int = 0
    opponent_score: int = 0
    points: List[Point] = Field(default_factory=list)
    rules: GameRules = Field(default_factory=GameRules)

    @property
    def current_point(self) -> Optional[Point]:
        if self.points and self.points[-1].outcome == IN_PROGRESS:
            return self.points[-1]
        return None

    @property
    def won(self) -> bool:
        return self.moonlight_score > self.opponent_score

    def point(self, number: int) -> Point:
        for p in self.points:
            if p.point_number == number:
                return p
        raise KeyError(f"Point {number} not found")

    def outcome_count(self, outcome: str) -> int:
        return sum(1 for p in self.points if p.outcome == outcome)

    def references(self, pid: str) -> bool:
        return any(pt.has_player(pid) or pid in (pt.goal, pt.assist) for pt in self.points)

    @property
    def scores_consistent(self) -> bool:
        return (
            self.moonlight_score == self.outcome_count(MOONLIGHT_SCORE)
            and self.opponent_score == self.outcome_count(OPPONENT_SCORE)
        )


class AppState(BaseModel):
    roster: List[Player] = Field(default_factory=list)
    game_history: List[Game] = Field(default_factory=list)  # most recent first
    current_game: Optional[Game] = None


class PlayerStats(BaseModel):
    id: str
    name: str
    gender: Gender
    role: Role
    points_played: int = 0
    goals: int = 0
    assists: int = 0
    hold_pct: float = 0.0
    break_pct: float = 0.0
