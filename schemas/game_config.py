"""
Pydantic schemas for game configuration.
"""

from typing import Optional

from pydantic import BaseModel, Field


class GameConfig(BaseModel):
    """Configuration for a hex Blokus game."""
    player_count: int = Field(default=6, ge=2, le=6, description="Number of players (2-6)")
    seed: Optional[int] = Field(default=None, description="Seed for the drop sound cue picker")
    cue_count: int = Field(default=5, ge=0, le=32, description="Number of drop sound cues available to the host")
    warn_on_pass_with_moves: bool = Field(
        default=True,
        description="Log a warning when a player passes while a legal placement exists",
    )

    class Config:
        json_schema_extra = {
            "example": {
                "player_count": 6,
                "seed": 42,
                "cue_count": 5,
                "warn_on_pass_with_moves": True
            }
        }
