"""Exceptions raised by the game progression engine."""

from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import LineCheck


# ========== Base Application Exception ==========


class MoonlightError(Exception):
    """Base exception for all engine errors.

    The UI catches this to report a domain problem without crashing.
    """

    pass


# ========== User-correctable ==========


class ValidationFailure(MoonlightError):
    """Raised when user input is invalid. No state has been mutated."""

    pass


class OverrideRequired(ValidationFailure):
    """Raised when a line only has warnings and needs explicit confirmation."""

    def __init__(self, check: "LineCheck"):
        super().__init__(check.message)
        self.check = check


class PlayerInUse(ValidationFailure):
    """Raised when deleting a player the active game still references."""

    pass


# ========== Programmer / UI misuse ==========


class InvalidTransition(MoonlightError):
    """Raised when a point or game operation is called in the wrong state."""

    pass


# ========== Storage ==========


class PersistenceError(MoonlightError):
    """Raised when the state blob cannot be read or written."""

    pass
