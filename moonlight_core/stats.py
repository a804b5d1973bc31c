from __future__ import annotations
from typing import Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from .constants import (
    ALL, IN_PROGRESS, MOONLIGHT_SCORE, OFFENSE, DEFENSE, STAT_COLUMNS, STAT_HEADERS,
)
from .models import AppState, Game, Player, PlayerStats, Point

TOURNAMENT = "tournament"
SORT_DIRECTIONS = ("asc", "desc")


def _pct(num: int, den: int) -> float:
    return (num / den) * 100 if den > 0 else 0.0

def _player_stats(player: Player, games: List[Game]) -> PlayerStats:
    played: List[Point] = [
        pt for g in games for pt in g.points
        if pt.outcome != IN_PROGRESS and pt.has_player(player.id)
    ]
    o_points = [pt for pt in played if pt.starting_on == OFFENSE]
    d_points = [pt for pt in played if pt.starting_on == DEFENSE]
    holds = sum(1 for pt in o_points if pt.outcome == MOONLIGHT_SCORE)
    breaks = sum(1 for pt in d_points if pt.outcome == MOONLIGHT_SCORE)
    return PlayerStats(
        id=player.id,
        name=player.name,
        gender=player.gender,
        role=player.role,
        points_played=len(played),
        goals=sum(1 for g in games for pt in g.points if pt.goal == player.id),
        assists=sum(1 for g in games for pt in g.points if pt.assist == player.id),
        hold_pct=_pct(holds, len(o_points)),
        break_pct=_pct(breaks, len(d_points)),
    )

def compute_player_stats(games: Iterable[Game], players: Iterable[Player]) -> List[PlayerStats]:
    games = list(games)
    if not games:
        return []
    return [_player_stats(p, games) for p in players]

def tournament_stats(state: AppState) -> List[PlayerStats]:
    return compute_player_stats(state.game_history, state.roster)

def game_stats(game: Game) -> List[PlayerStats]:
    return compute_player_stats([game], game.roster)

def stats_view(state: AppState, view: str = TOURNAMENT) -> Tuple[str, List[PlayerStats]]:
    """Switch between tournament totals and a single completed game."""
    if view == TOURNAMENT:
        return "Tournament Stats", tournament_stats(state)
    game = next((g for g in state.game_history if g.id == view), None)
    if game is None:
        return "Tournament Stats", tournament_stats(state)
    return f"Game vs. {game.opponent_name}", game_stats(game)

# -----------------------------
# Filter / sort
# -----------------------------
def filter_stats(rows: List[PlayerStats], gender: str = ALL, role: str = ALL) -> List[PlayerStats]:
    out = list(rows)
    if gender != ALL:
        out = [r for r in out if r.gender == gender]
    if role != ALL:
        out = [r for r in out if r.role == role]
    return out

def sort_stats(rows: List[PlayerStats], keys: Sequence[Tuple[str, str]]) -> List[PlayerStats]:
    """
    keys: [(field, "asc"|"desc"), ...], most significant first.
    Each pass is a stable sort, so equal rows keep their prior order.
    """
    out = list(rows)
    for field, direction in reversed(list(keys)):
        if field not in STAT_COLUMNS:
            raise ValueError(f"Cannot sort by {field!r}")
        if direction not in SORT_DIRECTIONS:
            raise ValueError(f"Sort direction must be one of {SORT_DIRECTIONS}, got {direction!r}")
        out.sort(key=lambda r: getattr(r, field), reverse=(direction == "desc"))
    return out

def next_sort(current: Optional[Tuple[str, str]], key: str) -> Tuple[str, str]:
    # clicking the active column flips direction, a new column starts descending
    if current and current[0] == key:
        return key, ("asc" if current[1] == "desc" else "desc")
    return key, "desc"

def stats_dataframe(rows: List[PlayerStats]) -> pd.DataFrame:
    if not rows:
        return pd.DataFrame(columns=[STAT_HEADERS[c] for c in STAT_COLUMNS])
    df = pd.DataFrame([r.model_dump() for r in rows], columns=["id"] + STAT_COLUMNS)
    df["hold_pct"] = df["hold_pct"].round(0)
    df["break_pct"] = df["break_pct"].round(0)
    return df[STAT_COLUMNS].rename(columns=STAT_HEADERS)
