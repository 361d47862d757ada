"""
Pixel layout of the board and player colours.

Flat-topped hexes in a y-up world, matching the sprite scale of the host:
a 128 px hex texture drawn at 0.25 scale.
"""

import colorsys
from typing import Tuple

import numpy as np

from .hex import Hex

MAX_PLAYERS = 6

HEX_SCALE = 0.25
HEX_REAL_WIDTH_IN_PIXELS = 128.0
HEX_WIDTH = HEX_REAL_WIDTH_IN_PIXELS * HEX_SCALE
HEX_RADIUS = HEX_WIDTH / 2.0

SQRT_3 = np.sqrt(3.0)

# (q, r) -> (x, y) for a unit radius; y is negated for the y-up world
HEX_TO_PIXEL = np.array([
    [3.0 / 2.0, 0.0],
    [-SQRT_3 / 2.0, -SQRT_3],
])
PIXEL_TO_HEX = np.linalg.inv(HEX_TO_PIXEL)


def hex_to_pixel(hex: Hex, radius: float = HEX_RADIUS) -> Tuple[float, float]:
    """Centre of a hex in world coordinates."""
    x, y = radius * (HEX_TO_PIXEL @ np.array([hex.q, hex.r], dtype=float))
    return float(x), float(y)


def pixel_to_fractional_hex(x: float, y: float, radius: float = HEX_RADIUS) -> Tuple[float, float]:
    """Fractional axial coordinate of a world point."""
    q, r = (PIXEL_TO_HEX @ np.array([x, y], dtype=float)) / radius
    return float(q), float(r)


def pixel_to_hex(x: float, y: float, radius: float = HEX_RADIUS) -> Hex:
    """Hex containing a world point."""
    return Hex.from_fraction(*pixel_to_fractional_hex(x, y, radius))


def point_in_hex(point: Tuple[float, float], hex: Hex, radius: float = HEX_RADIUS) -> bool:
    """
    Pointer hit test used when picking up a piece.

    Uses the circumscribed circle of the hex, like the host's sprite picking.
    """
    cx, cy = hex_to_pixel(hex, radius)
    dx, dy = point[0] - cx, point[1] - cy
    return dx * dx + dy * dy <= radius * radius


def player_hue(player_index: int) -> float:
    """Hue in degrees: index / MAX_PLAYERS * 360."""
    return player_index / MAX_PLAYERS * 360.0


def _hsl_to_rgb(hue: float, saturation: float, lightness: float) -> Tuple[float, float, float]:
    # colorsys works in HLS order with hue in [0, 1)
    return colorsys.hls_to_rgb((hue % 360.0) / 360.0, lightness, saturation)


def player_color(player_index: int) -> Tuple[float, float, float]:
    """RGB colour (0..1 floats) of a player's pieces."""
    return _hsl_to_rgb(player_hue(player_index), 1.0, 0.5)


def player_color_dark(player_index: int) -> Tuple[float, float, float]:
    """Darker RGB colour used for a player's start zone."""
    return _hsl_to_rgb(player_hue(player_index), 0.9, 0.4)
