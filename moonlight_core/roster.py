from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Optional, Tuple
from pydantic import ValidationError

from .constants import GENDERS, LINES, ROLES, normalize_name, normalize_choice, generate_id
from .exceptions import PlayerInUse, ValidationFailure
from .models import AppState, Player

logger = logging.getLogger(__name__)


def find_by_name(roster: List[Player], name: str, exclude_id: Optional[str] = None) -> Optional[Player]:
    key = normalize_name(name).lower()
    for p in roster:
        if p.name.lower() == key and p.id != exclude_id:
            return p
    return None

def _require_name(name: str) -> str:
    name = normalize_name(name)
    if not name:
        raise ValidationFailure("Player name cannot be empty.")
    return name

def _build(**fields) -> Player:
    try:
        return Player(**fields)
    except ValidationError as e:
        raise ValidationFailure(f"Invalid player: {e.errors()[0]['msg']}") from e

def add_player(state: AppState, name: str, gender: str = "MMP", line: str = "Offense",
               role: str = "Handler") -> Player:
    name = _require_name(name)
    if find_by_name(state.roster, name):
        raise ValidationFailure(f'Player "{name}" already exists.')
    player = _build(id=generate_id(), name=name, gender=gender, line=line, role=role)
    state.roster = state.roster + [player]
    return player

def add_players(state: AppState, players: Iterable[Player]) -> List[Player]:
    """Bulk add; names already on the roster (or repeated in the batch) are skipped."""
    added: List[Player] = []
    for p in players:
        if not normalize_name(p.name) or find_by_name(state.roster + added, p.name):
            logger.debug("Skipping duplicate player %s", p.name)
            continue
        added.append(p)
    state.roster = state.roster + added
    return added

def parse_quick_add(groups: Dict[Tuple[str, str, str], str]) -> List[Player]:
    """
    groups: (line, role, gender) -> "Name, Name, ..."
    Keys are matched case-insensitively ("offense", "handler", "MMP").
    """
    out: List[Player] = []
    for (line, role, gender), text in groups.items():
        line = normalize_choice(line, LINES, LINES[0])
        role = normalize_choice(role, ROLES, ROLES[0])
        gender = normalize_choice(gender, GENDERS, GENDERS[0])
        for raw in (text or "").split(","):
            name = normalize_name(raw)
            if name:
                out.append(Player(id=generate_id(), name=name, gender=gender, line=line, role=role))
    return out

def quick_add(state: AppState, groups: Dict[Tuple[str, str, str], str]) -> List[Player]:
    return add_players(state, parse_quick_add(groups))

def edit_player(state: AppState, player_id: str, **changes) -> Player:
    idx = next((i for i, p in enumerate(state.roster) if p.id == player_id), None)
    if idx is None:
        raise ValidationFailure(f"Player {player_id} not found.")
    changes.pop("id", None)
    if "name" in changes:
        changes["name"] = _require_name(changes["name"])
        if find_by_name(state.roster, changes["name"], exclude_id=player_id):
            raise ValidationFailure(f'Player with name "{changes["name"]}" already exists.')
    updated = _build(**{**state.roster[idx].model_dump(), **changes})
    roster = list(state.roster)
    roster[idx] = updated
    state.roster = roster
    return updated

def _check_not_in_use(state: AppState, player: Player):
    game = state.current_game
    if game is not None and not game.is_complete and game.references(player.id):
        raise PlayerInUse(f"{player.name} has played in the game in progress and cannot be deleted.")

def delete_player(state: AppState, player_id: str, confirmed: bool = False) -> Player:
    if not confirmed:
        raise ValidationFailure("Deleting a player must be confirmed.")
    player = next((p for p in state.roster if p.id == player_id), None)
    if player is None:
        raise ValidationFailure(f"Player {player_id} not found.")
    _check_not_in_use(state, player)
    state.roster = [p for p in state.roster if p.id != player_id]
    logger.info("Deleted player %s", player.name)
    return player

def clear_roster(state: AppState, confirmed: bool = False):
    if not confirmed:
        raise ValidationFailure("Clearing the roster must be confirmed.")
    for p in state.roster:
        _check_not_in_use(state, p)
    state.roster = []
