"""
moonlight_core package: domain models, ABBA rotation, line suggestion,
point/game progression, stats, persistence and import/export.
"""
from .constants import (
    TEAM_NAME, OPPONENT, OFFENSE, DEFENSE, FLEX, MMP, FMP,
    HANDLER, CUTTER, HYBRID, IN_PROGRESS, MOONLIGHT_SCORE, OPPONENT_SCORE,
    SCORE_LIMIT_REACHED, ENDED_MANUALLY,
)
from .exceptions import (
    MoonlightError, ValidationFailure, OverrideRequired, PlayerInUse,
    InvalidTransition, PersistenceError,
)
from .models import AbbaInfo, AppState, Game, GameRules, LineCheck, Player, PlayerStats, Point
from .rotation import compute_abba_info
from .lines import suggest_line, validate_line, swap_player, replacement_candidates

__all__ = [
    "models",
    "rotation",
    "fairness",
    "lines",
    "point",
    "game",
    "state",
    "roster",
    "stats",
    "storage",
    "csv_io",
    "export_pdf",
    "config",
    "logging_config",
]
