from __future__ import annotations
import time
import uuid
from typing import Dict, List

# -----------------------------
# Teams / sides
# -----------------------------
TEAM_NAME = "Moonlight"
OPPONENT = "Opponent"
TEAMS: List[str] = [TEAM_NAME, OPPONENT]

OFFENSE = "Offense"
DEFENSE = "Defense"
FLEX = "Flex"
LINES: List[str] = [OFFENSE, DEFENSE, FLEX]

# -----------------------------
# Genders (A = configured majority)
# -----------------------------
MMP = "MMP"
FMP = "FMP"
GENDERS: List[str] = [MMP, FMP]

# position in 4-point cycle -> (A/B, instance number)
ABBA_SEQUENCE: Dict[int, tuple] = {
    1: ("A", 2),
    2: ("B", 1),
    3: ("B", 2),
    4: ("A", 1),
}

# ---------------------
# Roles
# ---------------------
HANDLER = "Handler"
CUTTER = "Cutter"
HYBRID = "Hybrid"
ROLES: List[str] = [HANDLER, CUTTER, HYBRID]
HANDLER_CAPABLE = {HANDLER, HYBRID}

# ---------------------
# Point outcomes / end reasons
# ---------------------
IN_PROGRESS = "In Progress"
MOONLIGHT_SCORE = "Moonlight Score"
OPPONENT_SCORE = "Opponent Score"

SCORE_LIMIT_REACHED = "Score limit reached"
ENDED_MANUALLY = "Ended manually"

# ---------------------
# Point phases
# ---------------------
LINE_PENDING = "LinePending"
LINE_SET = "InProgress"
SCORED = "Scored"

# ---------------------
# Stats
# ---------------------
ALL = "All"
STAT_COLUMNS: List[str] = ["name", "points_played", "goals", "assists", "hold_pct", "break_pct"]
STAT_HEADERS: Dict[str, str] = {
    "name": "Name",
    "points_played": "Points Played",
    "goals": "Goals",
    "assists": "Assists",
    "hold_pct": "Hold %",
    "break_pct": "Break %",
}

# ---------------------
# CSV
# ---------------------
CSV_HEADERS = ["Name", "Gender", "Line", "Role"]
HEADER_ALIASES = {
    # canonical -> set of aliases
    "Name": {"name", "player", "full name"},
    "Gender": {"gender", "matching", "gender matching"},
    "Line": {"line", "preferred line", "side"},
    "Role": {"role", "position"},
}

# ---------------------
# Normalization helpers
# ---------------------
def normalize_name(s: str) -> str:
    if s is None:
        return ""
    return " ".join(s.strip().split())

def normalize_choice(s: str, options: List[str], default: str) -> str:
    # case-insensitive match against a fixed vocabulary
    if not s:
        return default
    s = s.strip().lower()
    for opt in options:
        if opt.lower() == s:
            return opt
    return default

def generate_id() -> str:
    return f"id_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"
