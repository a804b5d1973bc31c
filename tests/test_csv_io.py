from __future__ import annotations
import csv
import io

from moonlight_core import game as gc
from moonlight_core.csv_io import (
    build_template_csv, export_played_points_csv, parse_roster_csv, roster_to_csv_bytes,
    roster_to_dataframe, stats_to_csv_bytes,
)
from moonlight_core.stats import game_stats, stats_dataframe
from moonlight_core.test_helpers import quick_roster


def test_parse_template():
    players = parse_roster_csv(build_template_csv())
    assert [p.name for p in players] == ["Alex Quinn", "Sam Rivera"]
    assert (players[1].gender, players[1].line, players[1].role) == ("FMP", "Flex", "Cutter")

def test_parse_aliases_and_defaults():
    data = (
        "Player,Matching,Preferred Line,Position\n"
        "  Kim  ,fmp,defense,hybrid\n"
        ",MMP,Offense,Handler\n"
        "Lou,???,,\n"
    ).encode("utf-8")
    players = parse_roster_csv(data)
    assert [p.name for p in players] == ["Kim", "Lou"]
    kim, lou = players
    assert (kim.gender, kim.line, kim.role) == ("FMP", "Defense", "Hybrid")
    assert (lou.gender, lou.line, lou.role) == ("MMP", "Offense", "Handler")
    assert kim.id != lou.id

def test_parse_file_like():
    players = parse_roster_csv(io.BytesIO(b"name,gender\nAri,FMP\n"))
    assert players[0].name == "Ari" and players[0].gender == "FMP"

def test_roster_export_round_trips_fields():
    roster = quick_roster(2, 1, line="Defense", role="Hybrid")
    assert list(roster_to_dataframe(roster).columns) == ["id", "Name", "Gender", "Line", "Role"]
    again = parse_roster_csv(roster_to_csv_bytes(roster))
    assert [(p.name, p.gender, p.line, p.role) for p in again] == [
        (p.name, p.gender, p.line, p.role) for p in roster
    ]

def test_played_points_export():
    g = gc.start_game(quick_roster(4, 3, role="Handler"), opponent_name="Rival")
    line, _ = gc.suggest_for_current(g)
    gc.confirm_line(g, line)
    gc.record_own_score(g, line[0].id, line[1].id)
    rows = list(csv.reader(io.StringIO(export_played_points_csv(g).decode("utf-8"))))
    assert rows[0] == ["Point", "Starting On", "ABBA", "Outcome", "Goal", "Assist", "Line"]
    assert rows[1][:6] == ["1", "Offense", "MMP 2", "Moonlight Score", line[0].name, line[1].name]
    assert rows[1][6].count("; ") == 6
    assert rows[2][:4] == ["2", "Defense", "FMP 1", "In Progress"]

def test_stats_csv():
    g = gc.start_game(quick_roster(4, 3))
    text = stats_to_csv_bytes(stats_dataframe(game_stats(g))).decode("utf-8")
    assert text.splitlines()[0] == "Name,Points Played,Goals,Assists,Hold %,Break %"
    assert len(text.splitlines()) == 8
