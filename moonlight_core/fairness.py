from __future__ import annotations
from typing import Dict, Iterable, List

from .constants import GENDERS
from .models import Player, Point


def points_played(pid: str, points: Iterable[Point]) -> int:
    return sum(1 for pt in points if pt.has_player(pid))


def play_counts(players: Iterable[Player], points: List[Point]) -> Dict[str, int]:
    return {p.id: points_played(p.id, points) for p in players}


def least_played(players: List[Player], counts: Dict[str, int]) -> List[Player]:
    """Ascending by points played; sorted() is stable so roster order breaks ties."""
    return sorted(players, key=lambda p: counts.get(p.id, 0))


def check_evenness(counts: List[int]) -> bool:
    return not counts or (max(counts) - min(counts) <= 1)


def at_cap_mask(appearances: Dict[str, int]) -> Dict[str, bool]:
    """Players at current +1 evenness cap."""
    if not appearances:
        return {}
    vals = list(appearances.values())
    mn = min(vals)
    cap = mn + 1
    return {pid: (cnt >= cap) for pid, cnt in appearances.items()}


def uneven_genders(players: List[Player], points: List[Point]) -> List[str]:
    """Genders whose play counts are spread by more than one point."""
    counts = play_counts(players, points)
    return [
        g for g in GENDERS
        if not check_evenness([counts[p.id] for p in players if p.gender == g])
    ]
