"""
Board topologies for every supported player count.

All boards share one coordinate space: the full six-sector star used by the
6-player game. Smaller games disable part of it instead of leaving it out,
so a hex means the same place in every configuration.
"""

import logging
from typing import Dict, List

from .board import DISABLED, EMPTY, Board, Cell
from .errors import ConfigurationError
from .hex import ORIGIN, Hex, Rotation

logger = logging.getLogger(__name__)

# Row length per distance from the centre for one 60 degree sector
BOARD_SECTOR = [0, 11, 10, 10, 9, 9, 8, 8, 6, 4, 2]
BOARD_SECTOR_SMALL = [0, 8, 7, 7, 6, 6, 4, 2]

SECTOR_ROTATIONS = [
    Rotation.ROT_0, Rotation.ROT_60_CW, Rotation.ROT_120_CW,
    Rotation.ROT_180, Rotation.ROT_60_CCW, Rotation.ROT_120_CCW,
]

SIX_PLAYER_ANCHOR = Hex(7, 7)
SIX_PLAYER_START_ROTATIONS = [
    Rotation.ROT_0, Rotation.ROT_60_CW, Rotation.ROT_120_CW,
    Rotation.ROT_180, Rotation.ROT_120_CCW, Rotation.ROT_60_CCW,
]

THREE_PLAYER_ANCHOR = Hex(5, 5)
THREE_PLAYER_START_ROTATIONS = [Rotation.ROT_0, Rotation.ROT_120_CW, Rotation.ROT_120_CCW]

# Half extents of the 2/4 player rectangle: |q| <= W and |q + 2r| <= 2H.
# q + 2r is proportional to the y pixel coordinate, so this is an upright
# rectangle on screen. 2H + W <= 20 keeps it inside the distance-10 core.
RECT_HALF_WIDTH = 8
RECT_HALF_HEIGHT = 6

SUPPORTED_PLAYER_COUNTS = (2, 3, 4, 5, 6)


def sector_hexes(sector: List[int], rotation: Rotation) -> List[Hex]:
    """Hexes of one sector, rotated into place."""
    return [
        Hex(q, r).rotate(rotation)
        for q in range(len(sector))
        for r in range(sector[q])
    ]


def star_hexes(sector: List[int]) -> List[Hex]:
    """Origin plus six rotated copies of a sector."""
    hexes = [ORIGIN]
    for rotation in SECTOR_ROTATIONS:
        hexes.extend(sector_hexes(sector, rotation))
    return hexes


def fill_board(board: Board, sector: List[int], cell: Cell) -> None:
    for hex in star_hexes(sector):
        board.set_cell(hex, cell)


def rectangle_hexes(half_width: int = RECT_HALF_WIDTH, half_height: int = RECT_HALF_HEIGHT) -> List[Hex]:
    """Hexes of the upright rectangle |q| <= W, |q + 2r| <= 2H."""
    hexes = []
    for q in range(-half_width, half_width + 1):
        for r in range(-half_height - half_width, half_height + half_width + 1):
            if abs(q + 2 * r) <= 2 * half_height:
                hexes.append(Hex(q, r))
    return hexes


def rectangle_corners(half_width: int = RECT_HALF_WIDTH, half_height: int = RECT_HALF_HEIGHT) -> List[Hex]:
    """
    The four corners of the rectangle in cyclic order.

    Requires an even half width so that the corners fall on whole hexes.
    """
    w, h = half_width, half_height
    return [
        Hex(w, (2 * h - w) // 2),
        Hex(w, (-2 * h - w) // 2),
        Hex(-w, (w - 2 * h) // 2),
        Hex(-w, (w + 2 * h) // 2),
    ]


def six_player_setup(board: Board, player_count: int = 6) -> None:
    fill_board(board, BOARD_SECTOR, EMPTY)
    for player, rotation in enumerate(SIX_PLAYER_START_ROTATIONS[:player_count]):
        board.set_cell(SIX_PLAYER_ANCHOR.rotate(rotation), Cell.start_zone(player))


def three_player_setup(board: Board) -> None:
    fill_board(board, BOARD_SECTOR_SMALL, EMPTY)
    for player, rotation in enumerate(THREE_PLAYER_START_ROTATIONS):
        board.set_cell(THREE_PLAYER_ANCHOR.rotate(rotation), Cell.start_zone(player))


def rectangle_setup(board: Board, player_count: int) -> None:
    for hex in rectangle_hexes():
        board.set_cell(hex, EMPTY)
    corners = rectangle_corners()
    # Two players sit in opposite corners
    starts = corners if player_count == 4 else [corners[0], corners[2]]
    for player, hex in enumerate(starts):
        board.set_cell(hex, Cell.start_zone(player))


def build_board(player_count: int) -> Board:
    """
    Build the board for a game.

    Args:
        player_count: Number of players (2 to 6)

    Returns:
        Board with every hex of the full star present, the unused part
        DISABLED and one start zone per player

    Raises:
        ConfigurationError: If there is no topology for ``player_count``
    """
    if player_count not in SUPPORTED_PLAYER_COUNTS:
        raise ConfigurationError(
            f"Unsupported player count {player_count}; expected one of {SUPPORTED_PLAYER_COUNTS}",
            player_count=player_count,
        )

    board = Board()
    fill_board(board, BOARD_SECTOR, DISABLED)

    if player_count in (5, 6):
        six_player_setup(board, player_count)
    elif player_count == 3:
        three_player_setup(board)
    else:
        rectangle_setup(board, player_count)

    logger.debug(f"Built board for {player_count} players: {len(board)} hexes, start zones {board.start_zones()}")
    return board


def start_zones(board: Board) -> Dict[int, Hex]:
    """Free start zone per player."""
    return board.start_zones()
