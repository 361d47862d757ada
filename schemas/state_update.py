"""
Pydantic schemas for game state snapshots handed to the UI layer.
"""

from typing import List, Optional, Tuple

from pydantic import BaseModel, Field


class HexPosition(BaseModel):
    """Axial hex coordinate."""
    q: int
    r: int


class CellState(BaseModel):
    """State of one board hex."""
    q: int
    r: int
    kind: str = Field(description="'empty', 'disabled', 'occupied' or 'start_zone'")
    player: Optional[int] = None


class BoardState(BaseModel):
    """Current state of the game board."""
    cells: List[CellState] = Field(description="Every hex of the board")
    occupied_count: int = Field(ge=0, description="Number of occupied hexes")

    class Config:
        json_schema_extra = {
            "example": {
                "cells": [
                    {"q": 0, "r": 0, "kind": "empty", "player": None},
                    {"q": 7, "r": 7, "kind": "start_zone", "player": 0},
                    ...
                ],
                "occupied_count": 0
            }
        }


class PieceState(BaseModel):
    """State of one player's piece."""
    handle: int
    piece_id: int
    name: str
    owner: int
    size: int = Field(ge=1, le=5)
    state: str = Field(description="'free', 'dragging' or 'placed'")
    anchor: HexPosition
    rotation_degrees_cw: int
    cells: List[HexPosition]


class PlayerState(BaseModel):
    """State of a player."""
    player: int
    color: Tuple[float, float, float] = Field(description="RGB, 0..1")
    blocks_remaining: int = Field(ge=0)
    largest_piece: int = Field(ge=0)
    pieces_remaining: List[int] = Field(description="Handles of pieces not yet placed")
    is_active: bool = Field(description="Whether it's this player's turn")

    class Config:
        json_schema_extra = {
            "example": {
                "player": 0,
                "color": [1.0, 0.0, 0.0],
                "blocks_remaining": 67,
                "largest_piece": 5,
                "pieces_remaining": [0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15, 16],
                "is_active": True
            }
        }


class WinnerState(BaseModel):
    """End-of-game result."""
    outcome: str = Field(description="'winner', 'draw' or 'undecided'")
    player: Optional[int] = None
    tied_players: List[int] = Field(default_factory=list)


class GameState(BaseModel):
    """Complete game state."""
    player_count: int
    phase: str = Field(description="'game' or 'game_end'")
    current_player: int
    pass_count: int = Field(ge=0)
    board: BoardState
    players: List[PlayerState]
    pieces: List[PieceState]
    selected_piece: Optional[int] = None
    selected_outcome: Optional[str] = Field(
        default=None,
        description="Classification of the dragged piece: 'off_board', 'invalid' or 'valid'"
    )
    winner: Optional[WinnerState] = None

    class Config:
        json_schema_extra = {
            "example": {
                "player_count": 6,
                "phase": "game",
                "current_player": 0,
                "pass_count": 0,
                "board": {"cells": [...], "occupied_count": 0},
                "players": [...],
                "pieces": [...],
                "selected_piece": None,
                "selected_outcome": None,
                "winner": None
            }
        }
