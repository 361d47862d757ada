"""
Hex Blokus rules engine.

This package contains the core game logic, including:
- Hex coordinate math and pixel layout
- Board topologies for 2 to 6 players
- Piece catalog
- Placement legality
- Winner determination
- Game session state machine
"""

from .board import Board, Cell, CellKind
from .errors import ConfigurationError, HexBlokusError, IllegalPlacementError
from .game import GamePhase, GameSession
from .hex import ALL_ROTATIONS, Hex, Rotation, compose
from .pieces import ALL_PIECES, Piece, PieceGenerator, PieceRecord, PieceState
from .placement import PlacementOutcome, classify_placement, commit_placement
from .topology import build_board
from .winner import PlayerStats, WinnerOutcome, WinnerResult, determine_winner

__all__ = [
    'Hex', 'Rotation', 'ALL_ROTATIONS', 'compose',
    'Board', 'Cell', 'CellKind', 'build_board',
    'Piece', 'PieceGenerator', 'PieceRecord', 'PieceState', 'ALL_PIECES',
    'PlacementOutcome', 'classify_placement', 'commit_placement',
    'PlayerStats', 'WinnerOutcome', 'WinnerResult', 'determine_winner',
    'GamePhase', 'GameSession',
    'ConfigurationError', 'HexBlokusError', 'IllegalPlacementError',
]
