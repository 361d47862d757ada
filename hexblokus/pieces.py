"""
Hex piece catalog and the per-piece state kept by a game session.

Every player owns one copy of each of the 18 polyhexes below (sizes 1-5,
72 hexes in total).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from .hex import Hex, Rotation
from .layout import HEX_WIDTH, pixel_to_hex

# Shapes as laid out in a player's tray; the first hex of each shape is its
# anchor, so offsets are taken relative to it.
PIECE_SHAPES: List[Sequence[Tuple[int, int]]] = [
    # 5 hexes
    [(0, 0), (0, 1), (0, 2), (0, 3), (0, 4)],
    [(2, -1), (2, 0), (3, 0), (4, 0), (4, 1)],
    [(4, -2), (5, -2), (6, -2), (6, -1), (6, 0)],
    [(8, -4), (9, -4), (10, -5), (9, -3), (8, -2)],
    [(12, -6), (13, -6), (13, -5), (14, -5), (14, -4)],
    [(2, 2), (2, 3), (2, 4), (1, 5), (3, 4)],
    [(5, 2), (6, 2), (7, 1), (8, 1), (9, 1)],
    [(9, -1), (10, -2), (10, -1), (11, -3), (11, -1)],
    # 4 hexes
    [(0, 7), (0, 8), (0, 9), (0, 10)],
    [(2, 6), (2, 7), (3, 7), (3, 8)],
    [(4, 5), (5, 4), (5, 5), (6, 4)],
    [(5, 7), (6, 6), (7, 6), (7, 7)],
    [(13, -2), (13, -1), (14, -1), (12, 0)],
    # 3 hexes
    [(8, 3), (9, 3), (8, 4)],
    [(11, 2), (11, 3), (10, 4)],
    [(14, 1), (14, 2), (14, 3)],
    # 2 and 1 hexes
    [(11, 5), (12, 4)],
    [(9, 6)],
]

SIZE_NAMES = {1: "mono", 2: "di", 3: "tri", 4: "tetra", 5: "penta"}

# World position of each player's tray, in hex widths
TRAY_ORIGINS: List[Tuple[float, float]] = [
    (10.0, -7.0),
    (-20.0, -7.0),
    (-25.0, 4.0),
    (-20.0, 15.0),
    (10.0, 15.0),
    (15.0, 4.0),
]


@dataclass(frozen=True)
class Piece:
    """A polyhex shape. ``offsets[0]`` is always the origin hex."""
    id: int
    name: str
    offsets: Tuple[Hex, ...]
    tray_position: Hex

    def __post_init__(self):
        """Validate piece after initialization."""
        if not self.offsets or self.offsets[0] != Hex(0, 0):
            raise ValueError("Piece offsets must start at the origin hex")
        if len(set(self.offsets)) != len(self.offsets):
            raise ValueError("Piece offsets must be distinct")

    @property
    def size(self) -> int:
        return len(self.offsets)

    def cells_at(self, anchor: Hex, rotation: Rotation = Rotation.ROT_0) -> List[Hex]:
        """Absolute hexes covered when the anchor sits on ``anchor``."""
        return [anchor + offset.rotate(rotation) for offset in self.offsets]


class PieceGenerator:
    """Builds the piece catalog."""

    @staticmethod
    def get_all_pieces() -> List[Piece]:
        pieces = []
        counts: Dict[int, int] = {}
        for piece_id, shape in enumerate(PIECE_SHAPES):
            base = Hex(*shape[0])
            offsets = tuple(Hex(q, r) - base for q, r in shape)
            counts[len(offsets)] = counts.get(len(offsets), 0) + 1
            name = f"{SIZE_NAMES[len(offsets)]}-{counts[len(offsets)]}"
            pieces.append(Piece(id=piece_id, name=name, offsets=offsets, tray_position=base))
        return pieces


ALL_PIECES = PieceGenerator.get_all_pieces()
BLOCKS_PER_PLAYER = sum(p.size for p in ALL_PIECES)


class PieceState(Enum):
    FREE = "free"
    DRAGGING = "dragging"
    PLACED = "placed"


@dataclass
class PieceRecord:
    """
    One player's copy of a piece.

    ``handle`` is the record's index in the session's piece list.
    """
    handle: int
    owner: int
    piece: Piece
    anchor: Hex
    rotation: Rotation = Rotation.ROT_0
    state: PieceState = PieceState.FREE
    # Transform to restore when a drag ends in an invalid placement
    saved_anchor: Optional[Hex] = None
    saved_rotation: Rotation = Rotation.ROT_0

    @property
    def size(self) -> int:
        return self.piece.size

    def cells(self) -> List[Hex]:
        return self.piece.cells_at(self.anchor, self.rotation)

    def save_transform(self) -> None:
        self.saved_anchor = self.anchor
        self.saved_rotation = self.rotation

    def restore_transform(self) -> None:
        self.anchor = self.saved_anchor
        self.rotation = self.saved_rotation


def tray_anchor(player: int) -> Hex:
    """Hex under the origin of a player's tray."""
    x, y = TRAY_ORIGINS[player % len(TRAY_ORIGINS)]
    return pixel_to_hex(x * HEX_WIDTH, y * HEX_WIDTH)


def spawn_pieces(player_count: int) -> List[PieceRecord]:
    """One full set of pieces per player, laid out in the players' trays."""
    records = []
    for player in range(player_count):
        origin = tray_anchor(player)
        for piece in ALL_PIECES:
            records.append(PieceRecord(
                handle=len(records),
                owner=player,
                piece=piece,
                anchor=origin + piece.tray_position,
            ))
    return records
