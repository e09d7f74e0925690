"""The arena map: tile layout, walking directions and deployment rules."""

from __future__ import annotations

import math
from enum import Enum, IntEnum

from arenalegends.geometry import Point

MAP_BLOCK_WIDTH = 32
MAP_BLOCK_HEIGHT = 18
CARD_SET_HEIGHT = 6
MAP_DIFF = 100
ELIXIR_PROCESS_WIDTH = 800
BLUE_DEPLOY_MIN_X = 17


class Tile(IntEnum):
    """Kinds of map tile."""

    GRASS1 = 0
    GRASS2 = 1
    BRIDGE = 2
    ROAD = 3
    RIVER = 4
    TOWER = 5
    ROCK = 6
    CARD = 7


TILE_COLORS: dict[Tile, tuple[int, int, int]] = {
    Tile.GRASS1: (40, 180, 99),
    Tile.GRASS2: (39, 174, 96),
    Tile.BRIDGE: (230, 160, 80),
    Tile.ROAD: (250, 190, 130),
    Tile.RIVER: (70, 210, 240),
    Tile.TOWER: (170, 170, 170),
    Tile.ROCK: (140, 140, 130),
    Tile.CARD: (190, 160, 140),
}

MAP_TILES: tuple[str, ...] = (
    "01010101010101044010101010101010",
    "10101010101010144101010101010101",
    "01010555010101044010101055501010",
    "10133555333333322333333355533101",
    "01030555010101044010101055503010",
    "10131010101010144101010101013101",
    "01030101010101044010101010103010",
    "15555010101010144101010101055551",
    "05555101010101044010101010155550",
    "15555010101010144101010101055551",
    "05555101010101044010101010155550",
    "10131010101010144101010101013101",
    "01030101010101044010101010103010",
    "10131555101010144101010155513101",
    "01033555333333322333333355533010",
    "10101555101010144101010155510101",
    "01010101010101044010101010101010",
    "10101010101010144101010101010101",
)

_DIAGONAL = math.cos(math.pi / 4)


class Direction(Enum):
    """Walking direction stored for each map block."""

    U = "U"
    D = "D"
    L = "L"
    R = "R"
    UL = "UL"
    UR = "UR"
    DL = "DL"
    DR = "DR"
    NON = "NON"

    @property
    def vector(self) -> tuple[float, float]:
        """Unit step in screen coordinates (y grows downwards)."""
        return _VECTORS[self]

    @property
    def angle(self) -> float | None:
        """Heading in radians with the y axis up, or None when not moving."""
        return _ANGLES[self]


_VECTORS: dict[Direction, tuple[float, float]] = {
    Direction.U: (0.0, -1.0),
    Direction.D: (0.0, 1.0),
    Direction.L: (-1.0, 0.0),
    Direction.R: (1.0, 0.0),
    Direction.UL: (-_DIAGONAL, -_DIAGONAL),
    Direction.UR: (_DIAGONAL, -_DIAGONAL),
    Direction.DL: (-_DIAGONAL, _DIAGONAL),
    Direction.DR: (_DIAGONAL, _DIAGONAL),
    Direction.NON: (0.0, 0.0),
}

_ANGLES: dict[Direction, float | None] = {
    Direction.U: math.pi / 2,
    Direction.D: math.pi * 3 / 2,
    Direction.L: math.pi,
    Direction.R: 0.0,
    Direction.UL: math.pi * 3 / 4,
    Direction.UR: math.pi / 4,
    Direction.DL: math.pi * 5 / 4,
    Direction.DR: math.pi * 7 / 4,
    Direction.NON: None,
}

_DIRECTION_ROWS = (
    "DR DR DR D D D DL DL DL DL DL DL DL DL DL DL DR D D D DL DL DL DL DL DL DL DL L L L L",
    "DR DR DR D D DL DL DL DL DL DL DL DL DL DL DL DR D D DL DL DL DL DL L L L L L L L L",
    "DR DR DR D DL DL DL DL DL DL DL DL DL DL DL DL DR D DL DL DL DL DL DL DL UL UL UL L L L L",
    "DR DR DR D L L L L L L L L L L L L L L L L L L L L L L R U L L L L",
    "DR DR DR D L UL UL UL UL UL UL UL UL UL UL UL UR U UL UL UL UL UL UL UL DL DL DL L L L L",
    "DR DR DR D L L DL UL UL UL UL UL UL UL UL UL UR U U UL UL UL UL UL L L L L L L L L",
    "DR DR DR D L L L UL UL UL UL UL UL UL UL UL UR U U U UL UL UL UL UL UL UL UL L L L L",
    "R DR DR D L L L L UL UL UL UL UL UL UL UL UR U U U U UL UL UL UL UL UL L U U U U",
    "R DR DR D L L L L L UL UL UL UL UL UL UL UR U U U U U UL UL UL UL UL L U U U U",
    "R UR UR U L L L L L DL DL DL DL DL DL DL DR D D D D D DL DL DL DL DL L D D D D",
    "R UR UR U L L L L DL DL DL DL DL DL DL DL DR D D D D DL DL DL DL DL DL L D D D D",
    "UR UR UR U L L L DL DL DL DL DL DL DL DL DL DR D D D DL DL DL DL DL DL DL DL L L L L",
    "UR UR UR U L L UL DL DL DL DL DL DL DL DL DL DR D D DL DL DL DL DL L L L L L L L L",
    "UR UR UR U L DL DL DL DL DL DL DL DL DL DL DL DR D DL DL DL DL DL DL DL UL UL UL L L L L",
    "UR UR UR U L L L L L L L L L L L L L L L L L L L L L L R D L L L L",
    "UR UR UR U UL UL UL UL UL UL UL UL UL UL UL UL UR U UL UL UL UL UL UL UL DL DL DL L L L L",
    "UR UR UR U U UL UL UL UL UL UL UL UL UL UL UL UR U U UL UL UL UL UL L L L L L L L L",
    "UR UR UR U U U UL UL UL UL UL UL UL UL UL UL UR U U U UL UL UL UL UL UL UL UL L L L L",
)

DIRECTION_MAP: tuple[tuple[Direction, ...], ...] = tuple(
    tuple(Direction[name] for name in row.split()) for row in _DIRECTION_ROWS
)


def _check_bounds(x: int, y: int) -> None:
    if not (0 <= x < MAP_BLOCK_WIDTH and 0 <= y < MAP_BLOCK_HEIGHT):
        raise ValueError(f"block ({x}, {y}) is outside the arena")


def tile_at(x: int, y: int) -> Tile:
    """Tile kind of the block at column x, row y."""
    x, y = int(x), int(y)
    _check_bounds(x, y)
    return Tile(int(MAP_TILES[y][x]))


def direction_at(x: int, y: int, mirror: bool = False) -> Direction:
    """Walking direction of a block; mirror reads the column reflected left to right."""
    x, y = int(x), int(y)
    _check_bounds(x, y)
    column = MAP_BLOCK_WIDTH - 1 - x if mirror else x
    return DIRECTION_MAP[y][column]


def is_in_play(block: Point) -> bool:
    """Whether a block lies on the playing field."""
    return 0 <= block.x <= MAP_BLOCK_WIDTH - 1 and 0 <= block.y <= MAP_BLOCK_HEIGHT - 1


def is_valid_deploy(block: Point) -> bool:
    """Whether the blue player may place a unit on this block."""
    if not is_in_play(block):
        return False
    if tile_at(block.x, block.y) == Tile.TOWER:
        return False
    return block.x >= BLUE_DEPLOY_MIN_X