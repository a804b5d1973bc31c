from __future__ import annotations

from .constants import ABBA_SEQUENCE, MMP, FMP
from .models import AbbaInfo


def other_gender(gender: str) -> str:
    return FMP if gender == MMP else MMP


def compute_abba_info(point_number: int, a_gender: str) -> AbbaInfo:
    """
    ABBA ratio for a point. Cycles every 4 points as A2, B1, B2, A1.
    The point's majority gender fields 4 players, the other gender 3.
    """
    if point_number < 1:
        raise ValueError(f"point_number must be positive, got {point_number}")
    letter, num = ABBA_SEQUENCE[(point_number - 1) % 4 + 1]
    gender = a_gender if letter == "A" else other_gender(a_gender)
    return AbbaInfo(
        label=f"{gender} {num}",
        majority_gender=gender,
        required_mmp=4 if gender == MMP else 3,
        required_fmp=4 if gender == FMP else 3,
    )
