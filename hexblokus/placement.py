"""
Placement legality for hex pieces.

Rules, checked once every hex is known to be on the board and free:
1. A piece covering its owner's free start zone is legal
2. Pieces of the same colour must never share an edge
3. Every other piece must touch a piece of the same colour at a corner,
   and that corner must not be sealed off by two hexes of one other player
"""

import logging
from enum import Enum
from typing import Iterable, Iterator, List, Sequence, Set

from . import config
from .board import DIAGONAL_NEIGHBOURS, Board, Cell
from .errors import IllegalPlacementError
from .hex import ALL_ROTATIONS, Hex, Rotation
from .pieces import Piece

logger = logging.getLogger(__name__)


class PlacementOutcome(Enum):
    """Classification of a placement attempt."""
    OFF_BOARD = "off_board"  # dropped away from the board; the piece stays where it is
    INVALID = "invalid"  # touches the board but breaks a rule; the piece is put back
    VALID = "valid"


def is_hex_belong_to_player(board: Board, hex: Hex, player: int) -> bool:
    return board.is_occupied_by(hex, player)


def is_hexes_belong_to_different_players(board: Board, hex1: Hex, hex2: Hex) -> bool:
    """False only when both hexes are occupied by one and the same player."""
    player1 = board.get_player_at(hex1)
    player2 = board.get_player_at(hex2)
    if player1 is None or player2 is None:
        return True
    return player1 != player2


def has_corner_contact(board: Board, hex: Hex, player: int) -> bool:
    """
    Check whether ``hex`` touches one of ``player``'s hexes at a corner.

    A diagonal contact does not count when both hexes flanking the shared
    corner belong to the same other player.
    """
    return any(
        is_hex_belong_to_player(board, hex + diagonal, player)
        and is_hexes_belong_to_different_players(board, hex + near_1, hex + near_2)
        for diagonal, near_1, near_2 in DIAGONAL_NEIGHBOURS
    )


def has_edge_contact(board: Board, hex: Hex, player: int) -> bool:
    return any(is_hex_belong_to_player(board, n, player) for n in board.get_edge_adjacent_positions(hex))


def piece_can_be_placed_on_board(board: Board, cells: Sequence[Hex], player: int) -> bool:
    """
    Check if a piece can be placed at the given hexes.

    Args:
        board: Current board
        cells: Absolute hexes the piece would cover
        player: Acting player index

    Returns:
        True if the placement follows the rules
    """
    if not cells or len(set(cells)) != len(cells):
        return False

    # Every hex must exist and be free before any rule is looked at
    board_cells: List[Cell] = []
    for hex in cells:
        cell = board.get(hex)
        if cell is None or not cell.is_playable:
            return False
        board_cells.append(cell)

    # Own start zone: first piece of the game
    if any(cell.is_start_zone_of(player) for cell in board_cells):
        return True

    if any(has_edge_contact(board, hex, player) for hex in cells):
        return False

    return any(has_corner_contact(board, hex, player) for hex in cells)


def classify_placement(board: Board, cells: Sequence[Hex], player: int) -> PlacementOutcome:
    """
    Classify a placement attempt without touching the board.

    Args:
        board: Current board
        cells: Board-snapped hexes the piece currently covers
        player: Acting player index

    Returns:
        OFF_BOARD if no hex is on the board, VALID if the piece may be
        placed, INVALID otherwise (including a piece hanging partly off
        the board)
    """
    if all(hex not in board for hex in cells):
        outcome = PlacementOutcome.OFF_BOARD
    elif piece_can_be_placed_on_board(board, cells, player):
        outcome = PlacementOutcome.VALID
    else:
        outcome = PlacementOutcome.INVALID

    if config.PLACEMENT_DEBUG:
        logger.debug(f"Placement for player {player} at {list(cells)}: {outcome.value}")
    return outcome


def commit_placement(board: Board, cells: Sequence[Hex], player: int) -> Board:
    """
    Occupy ``cells`` with ``player``.

    The attempt is classified again first, so the board is never left half
    updated.

    Returns:
        The same board, mutated

    Raises:
        IllegalPlacementError: If the attempt is not VALID
    """
    outcome = classify_placement(board, cells, player)
    if outcome is not PlacementOutcome.VALID:
        raise IllegalPlacementError(
            f"Cannot place piece at {list(cells)} for player {player}: {outcome.value}",
            outcome=outcome,
        )

    occupied = Cell.occupied(player)
    for hex in cells:
        board.set_cell(hex, occupied)
    return board


def frontier(board: Board, player: int) -> Set[Hex]:
    """
    Hexes where a new piece of ``player`` could touch the board legally.

    That is the player's free start zone, or the free corner neighbours of
    the player's hexes.
    """
    hexes: Set[Hex] = set()
    for hex, cell in board.items():
        if cell.is_start_zone_of(player):
            hexes.add(hex)
        elif cell.is_occupied_by(player):
            hexes.update(
                target for target in board.get_corner_adjacent_positions(hex)
                if board.get(target).is_playable
            )
    return hexes


def iter_legal_placements(
    board: Board,
    piece: Piece,
    player: int,
    rotations: Iterable[Rotation] = ALL_ROTATIONS,
) -> Iterator[List[Hex]]:
    """
    Yield every distinct legal set of hexes for ``piece``.

    Each rotation of the piece is slid so that each of its hexes in turn sits
    on a frontier hex; legal placements must cover at least one of them.
    """
    targets = frontier(board, player)
    seen: Set[frozenset] = set()
    for rotation in rotations:
        rotated = [offset.rotate(rotation) for offset in piece.offsets]
        for target in targets:
            for block in rotated:
                cells = [target + offset - block for offset in rotated]
                key = frozenset(cells)
                if key in seen:
                    continue
                seen.add(key)
                if piece_can_be_placed_on_board(board, cells, player):
                    yield cells


def has_legal_placement(board: Board, pieces: Iterable[Piece], player: int) -> bool:
    """Whether any of ``pieces`` can be placed by ``player``."""
    return any(next(iter_legal_placements(board, piece, player), None) is not None for piece in pieces)

