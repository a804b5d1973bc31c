# moonlight_core/config.py
from __future__ import annotations
import logging
import os
import textwrap
from typing import Optional

import yaml

from .models import GameRules

logger = logging.getLogger(__name__)

# ===== Game rules defaults =====
DEFAULT_RULES = {
    "line_size": 7,
    "min_handlers": 3,       # handler-capable = Handler or Hybrid
    "halftime_score": 8,
    "score_cap": 15,
    "min_roster": 7,
}

DEFAULT_ASSETS_DIR = "assets"
RULES_FILE = "rules.yaml"

DEFAULT_RULES_YAML = textwrap.dedent("""\
# Game rules used when a new game starts.
line_size: 7
min_handlers: 3
halftime_score: 8
score_cap: 15
min_roster: 7
""")

def ensure_assets_exist(assets_dir: str = DEFAULT_ASSETS_DIR):
    os.makedirs(assets_dir, exist_ok=True)
    path = os.path.join(assets_dir, RULES_FILE)
    if not os.path.exists(path):
        with open(path, "w", encoding="utf-8") as f:
            f.write(DEFAULT_RULES_YAML)

def load_rules(path: Optional[str] = None) -> GameRules:
    if not path or not os.path.exists(path):
        return GameRules(**DEFAULT_RULES)
    with open(path, "r", encoding="utf-8") as f:
        obj = yaml.safe_load(f) or {}
    if not isinstance(obj, dict):
        raise ValueError(f"Rules file {path} must be a mapping of rule -> value.")
    return GameRules(**{**DEFAULT_RULES, **obj})

def rules_or_default(path: Optional[str] = None) -> GameRules:
    """Like load_rules, but a broken rules file falls back to the defaults."""
    try:
        return load_rules(path)
    except (OSError, UnicodeDecodeError, yaml.YAMLError, ValueError) as e:
        logger.error("Could not load rules from %s, using defaults: %s", path, e)
        return GameRules(**DEFAULT_RULES)

def save_rules(path: str, rules: GameRules):
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(rules.model_dump(), f, sort_keys=False)
