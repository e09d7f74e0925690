import math

import pytest

from arenalegends.arena import (
    DIRECTION_MAP,
    MAP_BLOCK_HEIGHT,
    MAP_BLOCK_WIDTH,
    MAP_TILES,
    Direction,
    Tile,
    direction_at,
    is_in_play,
    is_valid_deploy,
    tile_at,
)
from arenalegends.geometry import Point


def test_map_dimensions():
    assert len(MAP_TILES) == MAP_BLOCK_HEIGHT
    assert len(DIRECTION_MAP) == MAP_BLOCK_HEIGHT
    for y in range(MAP_BLOCK_HEIGHT):
        for x in range(MAP_BLOCK_WIDTH):
            assert tile_at(x, y) in set(Tile)
            assert direction_at(x, y, False) in set(Direction)
        with pytest.raises(ValueError):
            tile_at(MAP_BLOCK_WIDTH, y)
    with pytest.raises(ValueError):
        tile_at(0, MAP_BLOCK_HEIGHT)


def test_pinned_tiles():
    assert tile_at(16, 3) == Tile.BRIDGE
    assert tile_at(0, 0) == Tile.GRASS1
    assert tile_at(15, 0) == Tile.RIVER


def test_tile_map_is_left_right_symmetric_for_towers():
    for y in range(MAP_BLOCK_HEIGHT):
        for x in range(MAP_BLOCK_WIDTH):
            is_tower = tile_at(x, y) == Tile.TOWER
            assert is_tower == (tile_at(MAP_BLOCK_WIDTH - 1 - x, y) == Tile.TOWER)


@pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (32, 0), (0, 18)])
def test_tile_at_out_of_bounds(x, y):
    with pytest.raises(ValueError):
        tile_at(x, y)
    with pytest.raises(ValueError):
        direction_at(x, y, False)


def test_direction_pinned():
    assert direction_at(0, 0, False) == Direction.DR


def test_mirror_reads_reflected_column():
    for y in range(MAP_BLOCK_HEIGHT):
        for x in range(MAP_BLOCK_WIDTH):
            assert direction_at(x, y, True) == direction_at(MAP_BLOCK_WIDTH - 1 - x, y, False)


def test_direction_vectors_are_unit_length():
    for y in range(MAP_BLOCK_HEIGHT):
        for x in range(MAP_BLOCK_WIDTH):
            direction = direction_at(x, y, False)
            dx, dy = direction.vector
            if direction is Direction.NON:
                assert (dx, dy) == (0.0, 0.0)
                assert direction.angle is None
            else:
                assert math.hypot(dx, dy) == pytest.approx(1.0)
                assert math.cos(direction.angle) == pytest.approx(dx)
                assert -math.sin(direction.angle) == pytest.approx(dy)


def test_is_in_play_bounds():
    assert is_in_play(Point(0, 0))
    assert is_in_play(Point(MAP_BLOCK_WIDTH - 1, MAP_BLOCK_HEIGHT - 1))
    assert not is_in_play(Point(-1, 5))
    assert not is_in_play(Point(MAP_BLOCK_WIDTH, 5))
    assert not is_in_play(Point(5, MAP_BLOCK_HEIGHT))


def test_is_valid_deploy():
    assert is_valid_deploy(Point(20, 5))
    assert not is_valid_deploy(Point(25, 2))
    assert not is_valid_deploy(Point(10, 5))
    assert not is_valid_deploy(Point(40, 5))


def test_valid_deploy_never_on_tower_or_left_half():
    for y in range(MAP_BLOCK_HEIGHT):
        for x in range(MAP_BLOCK_WIDTH):
            if is_valid_deploy(Point(x, y)):
                assert tile_at(x, y) != Tile.TOWER
                assert x > MAP_BLOCK_WIDTH // 2