from __future__ import annotations
import io
import csv
from typing import Dict, Iterable, List

import pandas as pd

from .constants import (
    CSV_HEADERS, HEADER_ALIASES, GENDERS, LINES, ROLES,
    normalize_name, normalize_choice, generate_id,
)
from .models import Game, Player
from .ui_helpers import by_id

def _header_map(cols: Iterable[str]) -> Dict[str, str]:
    """
    Build a mapping from provided column -> canonical header.
    Case-insensitive, uses HEADER_ALIASES, leaves unknown columns untouched.
    """
    canon = {c.lower(): c for c in CSV_HEADERS}
    out = {}
    for c in cols:
        lc = str(c).strip().lower()
        if lc in canon:
            out[c] = canon[lc]
            continue
        mapped = None
        for k, aliases in HEADER_ALIASES.items():
            if lc in aliases:
                mapped = k
                break
        out[c] = mapped if mapped else c
    return out

def _row_to_player(row: Dict) -> Player:
    def g(k):
        v = row.get(k, "")
        return "" if pd.isna(v) else str(v)

    return Player(
        id=generate_id(),
        name=normalize_name(g("Name")),
        gender=normalize_choice(g("Gender"), GENDERS, GENDERS[0]),
        line=normalize_choice(g("Line"), LINES, LINES[0]),
        role=normalize_choice(g("Role"), ROLES, ROLES[0]),
    )

def parse_roster_csv(file) -> List[Player]:
    """
    Parse uploaded CSV (bytes or file-like).
    Applies header aliasing; rows without a name are dropped.
    Unknown gender/line/role values fall back to MMP/Offense/Handler.
    """
    if isinstance(file, (bytes, bytearray)):
        df = pd.read_csv(io.BytesIO(file), dtype=str)
    else:
        df = pd.read_csv(file, dtype=str)

    df = df.rename(columns=_header_map(df.columns))
    for k in CSV_HEADERS:
        if k not in df.columns:
            df[k] = ""
    df = df[CSV_HEADERS].copy()

    players: List[Player] = []
    for _, r in df.iterrows():
        name = r.get("Name", "")
        if pd.isna(name) or not str(name).strip():
            continue
        players.append(_row_to_player(r.to_dict()))
    return players

def build_template_csv() -> bytes:
    example = (
        "Name,Gender,Line,Role\n"
        "Alex Quinn,MMP,Offense,Handler\n"
        "Sam Rivera,FMP,Flex,Cutter\n"
    )
    return example.encode("utf-8")

def roster_to_dataframe(players: List[Player]) -> pd.DataFrame:
    rows = [{"id": p.id, "Name": p.name, "Gender": p.gender, "Line": p.line, "Role": p.role} for p in players]
    return pd.DataFrame(rows, columns=["id"] + CSV_HEADERS)

def roster_to_csv_bytes(players: List[Player]) -> bytes:
    df = roster_to_dataframe(players)[CSV_HEADERS]
    buf = io.StringIO()
    df.to_csv(buf, index=False)
    return buf.getvalue().encode("utf-8")

def export_played_points_csv(game: Game) -> bytes:
    """
    One row per point: number, side, ABBA label, outcome, goal, assist, line names.
    """
    names = {pid: p.name for pid, p in by_id(game.roster).items()}
    buf = io.StringIO()
    w = csv.writer(buf)
    w.writerow(["Point", "Starting On", "ABBA", "Outcome", "Goal", "Assist", "Line"])
    for pt in game.points:
        w.writerow([
            pt.point_number,
            pt.starting_on,
            pt.abba_info.label,
            pt.outcome,
            names.get(pt.goal, "") if pt.goal else "",
            names.get(pt.assist, "") if pt.assist else "",
            "; ".join(p.name for p in pt.line),
        ])
    return buf.getvalue().encode("utf-8")

def stats_to_csv_bytes(df: pd.DataFrame) -> bytes:
    buf = io.StringIO()
    df.to_csv(buf, index=False)
    return buf.getvalue().encode("utf-8")
