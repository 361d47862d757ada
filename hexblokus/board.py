"""
Hex board: a mapping of hex coordinates to cell states.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from .hex import HEX_DIRECTIONS, Hex


class CellKind(Enum):
    """Kind of a board cell."""
    EMPTY = "empty"
    DISABLED = "disabled"
    OCCUPIED = "occupied"
    START_ZONE = "start_zone"


@dataclass(frozen=True)
class Cell:
    """
    State of one board hex.

    ``player`` is set for OCCUPIED and START_ZONE cells only.
    """
    kind: CellKind
    player: Optional[int] = None

    def __post_init__(self):
        needs_player = self.kind in (CellKind.OCCUPIED, CellKind.START_ZONE)
        if needs_player != (self.player is not None):
            raise ValueError(f"Cell kind {self.kind.value} does not match player={self.player}")

    @classmethod
    def disabled(cls) -> 'Cell':
        return DISABLED

    @classmethod
    def occupied(cls, player: int) -> 'Cell':
        return cls(CellKind.OCCUPIED, player)

    @classmethod
    def start_zone(cls, player: int) -> 'Cell':
        return cls(CellKind.START_ZONE, player)

    @property
    def is_playable(self) -> bool:
        """Empty or a start zone: a piece may cover it."""
        return self.kind in (CellKind.EMPTY, CellKind.START_ZONE)

    def is_occupied_by(self, player: int) -> bool:
        return self.kind is CellKind.OCCUPIED and self.player == player

    def is_start_zone_of(self, player: int) -> bool:
        return self.kind is CellKind.START_ZONE and self.player == player

    def __str__(self) -> str:
        if self.kind is CellKind.EMPTY:
            return "."
        if self.kind is CellKind.DISABLED:
            return "#"
        if self.kind is CellKind.START_ZONE:
            return chr(ord("a") + self.player)
        return str(self.player)


EMPTY = Cell(CellKind.EMPTY)
DISABLED = Cell(CellKind.DISABLED)

# Direct (edge-sharing) neighbours
NEIGHBOURS: List[Hex] = HEX_DIRECTIONS

# (diagonal, flank 1, flank 2): the two direct neighbours on either side of
# the corner shared with the diagonal hex
DIAGONAL_NEIGHBOURS: List[Tuple[Hex, Hex, Hex]] = [
    (Hex(1, 1), Hex(1, 0), Hex(0, 1)),
    (Hex(-1, 2), Hex(0, 1), Hex(-1, 1)),
    (Hex(-2, 1), Hex(-1, 1), Hex(-1, 0)),
    (Hex(-1, -1), Hex(-1, 0), Hex(0, -1)),
    (Hex(1, -2), Hex(0, -1), Hex(1, -1)),
    (Hex(2, -1), Hex(1, -1), Hex(1, 0)),
]


class Board:
    """
    Blokus hex board.

    Hexes missing from the mapping are off-board. That is different from a
    DISABLED cell, which exists but is never playable.
    """

    def __init__(self, cells: Optional[Dict[Hex, Cell]] = None):
        self.cells: Dict[Hex, Cell] = dict(cells) if cells else {}

    def __contains__(self, hex: Hex) -> bool:
        return hex in self.cells

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Hex]:
        return iter(self.cells)

    def items(self):
        return self.cells.items()

    def get(self, hex: Hex) -> Optional[Cell]:
        """Get the cell at a hex, or None if the hex is off-board."""
        return self.cells.get(hex)

    def set_cell(self, hex: Hex, cell: Cell) -> None:
        self.cells[hex] = cell

    def get_player_at(self, hex: Hex) -> Optional[int]:
        """Player occupying a hex, or None."""
        cell = self.cells.get(hex)
        if cell is None or cell.kind is not CellKind.OCCUPIED:
            return None
        return cell.player

    def is_occupied_by(self, hex: Hex, player: int) -> bool:
        cell = self.cells.get(hex)
        return cell is not None and cell.is_occupied_by(player)

    def get_edge_adjacent_positions(self, hex: Hex) -> List[Hex]:
        """On-board hexes sharing an edge with ``hex``."""
        return [hex + n for n in NEIGHBOURS if hex + n in self.cells]

    def get_corner_adjacent_positions(self, hex: Hex) -> List[Hex]:
        """On-board hexes touching ``hex`` only at a corner."""
        return [hex + d for d, _, _ in DIAGONAL_NEIGHBOURS if hex + d in self.cells]

    def cells_of(self, player: int) -> List[Hex]:
        """Hexes occupied by a player."""
        return [h for h, c in self.cells.items() if c.is_occupied_by(player)]

    def start_zones(self) -> Dict[int, Hex]:
        """Start zone hex of every player whose start zone is still free."""
        return {c.player: h for h, c in self.cells.items() if c.kind is CellKind.START_ZONE}

    def count(self, kind: CellKind) -> int:
        return sum(1 for c in self.cells.values() if c.kind is kind)

    def copy(self) -> 'Board':
        return Board(self.cells)

    def __eq__(self, other) -> bool:
        return isinstance(other, Board) and self.cells == other.cells

    def __str__(self) -> str:
        """Rows of constant r, one character per cell, blank for off-board."""
        if not self.cells:
            return ""
        qs = [h.q for h in self.cells]
        rs = [h.r for h in self.cells]
        rows = []
        for r in range(min(rs), max(rs) + 1):
            row = " " * (r - min(rs))
            for q in range(min(qs), max(qs) + 1):
                cell = self.cells.get(Hex(q, r))
                row += (str(cell) if cell else " ") + " "
            rows.append(row.rstrip())
        return "\n".join(rows)
