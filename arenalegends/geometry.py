"""Screen and map geometry: points, block/pixel conversion, angles and sides."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum

BLOCK_SIZE = 50
_BORDER_BLOCKS = 2
_FLOAT_TEXT_LIMIT = 9


@dataclass
class Point:
    """A 2D point or vector in pixel or block coordinates."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> Point:
        return Point(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def magnitude(self) -> float:
        """Euclidean length of the vector."""
        return math.hypot(self.x, self.y)


class Side(IntEnum):
    """Which half of the arena a position lies in."""

    BLUE = 0
    BRIDGE = 1
    RED = 2


def float_to_str(num: float) -> str:
    """Format a number with one decimal, limited to nine characters."""
    return f"{num:.1f}"[:_FLOAT_TEXT_LIMIT]


def px_to_block(px: Point) -> Point:
    """Convert a pixel position into the block that contains it."""
    return Point(
        int(px.x / BLOCK_SIZE) - _BORDER_BLOCKS,
        int(px.y / BLOCK_SIZE) - _BORDER_BLOCKS,
    )


def block_to_px(block: Point) -> Point:
    """Pixel position of a block's top-left corner."""
    return Point(
        (block.x + _BORDER_BLOCKS) * BLOCK_SIZE,
        (block.y + _BORDER_BLOCKS) * BLOCK_SIZE,
    )


def block_to_middle_px(block: Point) -> Point:
    """Pixel position of a block's centre."""
    return Point(
        (block.x + _BORDER_BLOCKS + 0.5) * BLOCK_SIZE,
        (block.y + _BORDER_BLOCKS + 0.5) * BLOCK_SIZE,
    )


def _trunc_divmod(value: int, divisor: int) -> tuple[int, int]:
    quotient = abs(value) // divisor
    if value < 0:
        quotient = -quotient
    return quotient, value - quotient * divisor


def time_string(sec: float) -> str:
    """Render a countdown as 'M : SS'."""
    minutes, seconds = _trunc_divmod(int(sec), 60)
    if seconds < 10:
        return f"{minutes} : 0{seconds}"
    return f"{minutes} : {seconds}"


def find_angle(center: Point, point: Point) -> float:
    """Angle in radians from center to point, y axis pointing up, in [0, 2*pi]."""
    distance = (center - point).magnitude()
    if distance == 0:
        return 0.0
    if center.y >= point.y:
        ratio = (point.x - center.x) / distance
        return math.acos(max(-1.0, min(1.0, ratio)))
    ratio = (center.x - point.x) / distance
    return math.acos(max(-1.0, min(1.0, ratio))) + math.pi


def which_side(pos: Point) -> Side:
    """Side of the arena that a pixel position lies in."""
    block = px_to_block(pos)
    if block.x > 16:
        return Side.BLUE
    if block.x < 15:
        return Side.RED
    return Side.BRIDGE