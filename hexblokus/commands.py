"""
Commands sent by the host to a game session, and the events it gets back.
"""

from dataclasses import dataclass, field
from typing import List, Tuple

from .hex import Hex, Rotation
from .placement import PlacementOutcome
from .winner import WinnerResult


class Command:
    """Base class for host commands."""


@dataclass(frozen=True)
class PickUp(Command):
    """Select a piece by handle."""
    handle: int


@dataclass(frozen=True)
class PickUpAt(Command):
    """Select the current player's free piece under a world point."""
    point: Tuple[float, float]


@dataclass(frozen=True)
class MoveTo(Command):
    """Move the selected piece so that its anchor hex sits on ``anchor``."""
    anchor: Hex


@dataclass(frozen=True)
class Rotate(Command):
    """Rotate the selected piece about its anchor hex."""
    rotation: Rotation


@dataclass(frozen=True)
class Release(Command):
    """Drop the selected piece where it is."""


@dataclass(frozen=True)
class Pass(Command):
    """End the current player's turn without placing."""


class Event:
    """Base class for session events."""


@dataclass(frozen=True)
class PiecePickedUp(Event):
    handle: int
    player: int


@dataclass(frozen=True)
class PlacementPreview(Event):
    """Validity of the dragged piece at its current position, for highlighting."""
    handle: int
    cells: List[Hex] = field(hash=False)
    outcome: PlacementOutcome


@dataclass(frozen=True)
class PiecePlaced(Event):
    handle: int
    player: int
    cells: List[Hex] = field(hash=False)
    cue: int  # index of the drop sound to play


@dataclass(frozen=True)
class PlacementRejected(Event):
    """Invalid drop; the piece went back to its pre-pickup transform."""
    handle: int
    anchor: Hex
    rotation: Rotation


@dataclass(frozen=True)
class PieceDroppedOffBoard(Event):
    handle: int
    anchor: Hex


@dataclass(frozen=True)
class TurnPassed(Event):
    player: int
    pass_count: int


@dataclass(frozen=True)
class GameEnded(Event):
    result: WinnerResult = field(hash=False)


@dataclass(frozen=True)
class CommandRejected(Event):
    command: Command
    reason: str
