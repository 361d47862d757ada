"""
Axial hex coordinates and the cube-coordinate math behind rotations.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple


class Rotation(Enum):
    """
    Rotation about the origin hex.

    The value is the number of 60 degree clockwise steps, so rotations
    compose by adding values modulo 6.
    """
    ROT_0 = 0
    ROT_60_CW = 1
    ROT_120_CW = 2
    ROT_180 = 3
    ROT_120_CCW = 4
    ROT_60_CCW = 5

    @property
    def degrees_cw(self) -> int:
        return self.value * 60

    def inverse(self) -> 'Rotation':
        return Rotation((6 - self.value) % 6)

    def then(self, other: 'Rotation') -> 'Rotation':
        """Rotation equal to applying ``self`` first and ``other`` second."""
        return Rotation((self.value + other.value) % 6)


ALL_ROTATIONS = list(Rotation)


def _round_half_away(value: float) -> int:
    # round() would send exact halves to the even neighbour
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def compose(first: Rotation, second: Rotation) -> Rotation:
    """Single rotation equivalent to ``first`` followed by ``second``."""
    return first.then(second)


@dataclass(frozen=True)
class Hex:
    """
    Immutable axial coordinate of one hex cell.

    The third cube coordinate ``s`` is derived and never stored.
    """
    q: int
    r: int

    @property
    def s(self) -> int:
        return -self.q - self.r

    def cube(self) -> Tuple[int, int, int]:
        return self.q, self.r, self.s

    def __add__(self, other: 'Hex') -> 'Hex':
        return Hex(self.q + other.q, self.r + other.r)

    def __sub__(self, other: 'Hex') -> 'Hex':
        return Hex(self.q - other.q, self.r - other.r)

    def __neg__(self) -> 'Hex':
        return Hex(-self.q, -self.r)

    def rotate(self, rotation: Rotation) -> 'Hex':
        """
        Rotate this hex about the origin.

        Converts to cube form, permutes/negates the three components and
        drops ``s`` again.
        """
        q, r, s = self.cube()
        if rotation is Rotation.ROT_0:
            return Hex(q, r)
        if rotation is Rotation.ROT_60_CW:
            return Hex(-r, -s)
        if rotation is Rotation.ROT_60_CCW:
            return Hex(-s, -q)
        if rotation is Rotation.ROT_120_CW:
            return Hex(s, q)
        if rotation is Rotation.ROT_120_CCW:
            return Hex(r, s)
        return Hex(-q, -r)

    def length(self) -> int:
        """Distance from the origin in hex steps."""
        return max(abs(self.q), abs(self.r), abs(self.s))

    def distance(self, other: 'Hex') -> int:
        return (self - other).length()

    def neighbours(self) -> List['Hex']:
        """The six hexes sharing an edge with this one."""
        return [self + direction for direction in HEX_DIRECTIONS]

    @classmethod
    def from_fraction(cls, q: float, r: float) -> 'Hex':
        """
        Round a fractional axial coordinate to the nearest hex.

        q, r and s are rounded independently (halves away from zero); the
        component with the largest rounding error is then rebuilt from the
        other two so that q + r + s == 0 still holds.
        """
        s = -q - r
        rq, rr, rs = _round_half_away(q), _round_half_away(r), _round_half_away(s)

        q_diff = abs(rq - q)
        r_diff = abs(rr - r)
        s_diff = abs(rs - s)

        if q_diff > r_diff and q_diff > s_diff:
            rq = -rr - rs
        elif r_diff > s_diff:
            rr = -rq - rs

        return cls(int(rq), int(rr))

    def __repr__(self) -> str:
        return f"Hex({self.q}, {self.r})"


ORIGIN = Hex(0, 0)

HEX_DIRECTIONS = [
    Hex(0, 1), Hex(1, 0), Hex(0, -1),
    Hex(-1, 0), Hex(1, -1), Hex(-1, 1),
]


def add(a: Hex, b: Hex) -> Hex:
    return a + b


def sub(a: Hex, b: Hex) -> Hex:
    return a - b


def rotate(hex: Hex, rotation: Rotation) -> Hex:
    return hex.rotate(rotation)


def from_fraction(q: float, r: float) -> Hex:
    return Hex.from_fraction(q, r)
