"""
Pydantic schemas for configuring a game and exposing its state.
"""

from .game_config import GameConfig
from .state_update import (
    BoardState, CellState, GameState, HexPosition,
    PieceState, PlayerState, WinnerState
)

__all__ = [
    "GameConfig",
    "BoardState",
    "CellState",
    "GameState",
    "HexPosition",
    "PieceState",
    "PlayerState",
    "WinnerState"
]
