from __future__ import annotations
import logging
from typing import List, Optional, Tuple

from .constants import FLEX, MMP, FMP, HANDLER, HYBRID, CUTTER
from .exceptions import ValidationFailure
from .fairness import least_played, play_counts
from .models import AbbaInfo, GameRules, LineCheck, Player, Point

logger = logging.getLogger(__name__)

# -----------------------
# Eligibility
# -----------------------
def is_eligible(player: Player, side: str) -> bool:
    return player.line == side or player.line == FLEX

def eligible_players(roster: List[Player], side: str) -> List[Player]:
    return [p for p in roster if is_eligible(p, side)]

def handler_count(line: List[Player]) -> int:
    return sum(1 for p in line if p.handler_capable)

def gender_count(line: List[Player], gender: str) -> int:
    return sum(1 for p in line if p.gender == gender)

# -----------------------
# Validation
# -----------------------
def validate_line(line: List[Player], abba: AbbaInfo, rules: Optional[GameRules] = None) -> LineCheck:
    rules = rules or GameRules()
    if not line:
        return LineCheck(level="fatal", message="Fatal: Roster lacks eligible players.")
    if len(line) != rules.line_size:
        return LineCheck(
            level="fatal",
            message=f"Fatal: Line must have {rules.line_size} players. Current: {len(line)}.",
        )
    seen, dupes = set(), []
    for p in line:
        if p.id in seen and p.name not in dupes:
            dupes.append(p.name)
        seen.add(p.id)
    if dupes:
        return LineCheck(
            level="fatal",
            message=f"Fatal: Line lists the same player more than once: {', '.join(dupes)}.",
        )
    mmp = gender_count(line, MMP)
    if mmp != abba.required_mmp:
        return LineCheck(
            level="fatal",
            message=f"Fatal: Gender ratio invalid. Required: {abba.required_mmp} MMPs, Found: {mmp}.",
        )
    handlers = handler_count(line)
    if handlers < rules.min_handlers:
        return LineCheck(
            level="warning",
            message=f"Warning: Line has only {handlers} handlers/hybrids. Minimum is {rules.min_handlers}.",
        )
    return LineCheck()

# -----------------------
# Suggestion
# -----------------------
def _allocate_roles(pool: List[Player], rules: GameRules) -> List[Player]:
    # greedy: handlers first, hybrids to reach the handler minimum, then cutters,
    # then whatever hybrids/handlers are left over
    handlers = [p for p in pool if p.role == HANDLER]
    hybrids = [p for p in pool if p.role == HYBRID]
    cutters = [p for p in pool if p.role == CUTTER]

    picks: List[Player] = handlers[:rules.min_handlers]
    handlers = handlers[rules.min_handlers:]
    short = rules.min_handlers - len(picks)
    if short > 0:
        picks.extend(hybrids[:short])
        hybrids = hybrids[short:]

    for leftovers in (cutters, hybrids, handlers):
        room = rules.line_size - len(picks)
        if room <= 0:
            break
        picks.extend(leftovers[:room])
    return picks

def suggest_line(
    roster: List[Player],
    starting_on: str,
    abba: AbbaInfo,
    past_points: List[Point],
    rules: Optional[GameRules] = None,
) -> Tuple[List[Player], LineCheck]:
    """
    Returns:
      line: least-played eligible players meeting the ABBA quota, or [] if the roster is short
      check: validation of that line
    """
    rules = rules or GameRules()
    eligible = eligible_players(roster, starting_on)
    counts = play_counts(eligible, past_points)
    ranked = least_played(eligible, counts)

    mmp_pool = [p for p in ranked if p.gender == MMP]
    fmp_pool = [p for p in ranked if p.gender == FMP]
    if len(mmp_pool) < abba.required_mmp or len(fmp_pool) < abba.required_fmp:
        msg = f"Fatal: Roster lacks players for {abba.required_mmp} MMPs & {abba.required_fmp} FMPs."
        logger.debug("No line for %s point: %s", starting_on, msg)
        return [], LineCheck(level="fatal", message=msg)

    pool = mmp_pool[:abba.required_mmp] + fmp_pool[:abba.required_fmp]
    line = _allocate_roles(pool, rules)
    return line, validate_line(line, abba, rules)

# -----------------------
# Manual substitution
# -----------------------
def replacement_candidates(roster: List[Player], line: List[Player], outgoing: Player) -> List[Player]:
    on_field = {p.id for p in line}
    return [p for p in roster if p.id not in on_field and p.gender == outgoing.gender]

def swap_player(
    line: List[Player],
    outgoing_id: str,
    incoming: Player,
    abba: AbbaInfo,
    rules: Optional[GameRules] = None,
) -> Tuple[List[Player], LineCheck]:
    outgoing = next((p for p in line if p.id == outgoing_id), None)
    if outgoing is None:
        raise ValidationFailure(f"Player {outgoing_id} is not on the line.")
    if any(p.id == incoming.id for p in line):
        raise ValidationFailure(f"{incoming.name} is already on the line.")
    if incoming.gender != outgoing.gender:
        raise ValidationFailure(
            f"Replacement must match gender: {outgoing.name} is {outgoing.gender}, {incoming.name} is {incoming.gender}."
        )
    new_line = [incoming if p.id == outgoing_id else p for p in line]
    return new_line, validate_line(new_line, abba, rules)
