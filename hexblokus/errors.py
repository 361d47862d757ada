"""
Error taxonomy for the rules engine.

Illegal placements are the common case and are returned as outcomes, not
raised; the exceptions here cover setup failures and API misuse.
"""

from typing import Optional


class HexBlokusError(Exception):
    """Base class for engine errors."""
    pass


class ConfigurationError(HexBlokusError):
    """Unsupported game setup, e.g. a player count without a board topology."""

    def __init__(self, message: str, player_count: Optional[int] = None):
        self.message = message
        self.player_count = player_count
        super().__init__(message)


class IllegalPlacementError(HexBlokusError):
    """A commit was requested for cells that do not form a legal placement."""

    def __init__(self, message: str, outcome=None):
        self.message = message
        self.outcome = outcome
        super().__init__(message)
