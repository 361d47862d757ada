"""
End-of-game ranking.

The player left holding the fewest hexes wins. Ties are broken by the
smallest largest remaining piece. A tie that survives both rules is
reported as undecided; no further rule is applied.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlayerStats:
    """Unplaced material of one player at the end of the game."""
    player: int
    blocks: int  # hexes in pieces still unplaced
    largest_piece: int  # size of the largest unplaced piece


class WinnerOutcome(Enum):
    WINNER = "winner"
    DRAW = "draw"  # nobody had pieces left to rank
    UNDECIDED = "undecided"  # tie-break rules exhausted


@dataclass
class WinnerResult:
    """Result of winner determination."""
    outcome: WinnerOutcome
    player: Optional[int] = None
    tied_players: List[int] = field(default_factory=list)

    @property
    def has_winner(self) -> bool:
        return self.outcome is WinnerOutcome.WINNER

    @classmethod
    def winner(cls, player: int) -> 'WinnerResult':
        return cls(WinnerOutcome.WINNER, player=player)

    @classmethod
    def draw(cls) -> 'WinnerResult':
        return cls(WinnerOutcome.DRAW)

    @classmethod
    def undecided(cls, players: List[int]) -> 'WinnerResult':
        return cls(WinnerOutcome.UNDECIDED, tied_players=sorted(players))


def determine_winner(stats: Iterable[PlayerStats]) -> WinnerResult:
    """
    Rank players by remaining material.

    Args:
        stats: One entry per player that still holds pieces

    Returns:
        WINNER with the player index, DRAW when ``stats`` is empty, or
        UNDECIDED with the players still tied after both rules
    """
    players_stats = list(stats)
    logger.debug(f"Players stats: {players_stats}")
    if not players_stats:
        logger.info("No players with pieces")
        return WinnerResult.draw()

    # rule 1: fewest remaining hexes
    minimum_blocks = min(s.blocks for s in players_stats)
    players_stats = [s for s in players_stats if s.blocks == minimum_blocks]
    if len(players_stats) == 1:
        return WinnerResult.winner(players_stats[0].player)

    # rule 2: smallest largest remaining piece
    smallest_largest_piece = min(s.largest_piece for s in players_stats)
    players_stats = [s for s in players_stats if s.largest_piece == smallest_largest_piece]
    if len(players_stats) == 1:
        return WinnerResult.winner(players_stats[0].player)

    # TODO: rule 3 (piece value comparison) once the scoring of piece values is defined
    tied = [s.player for s in players_stats]
    logger.warning(f"Winner undecided, players {tied} tie on both rules")
    return WinnerResult.undecided(tied)
