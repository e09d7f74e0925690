import math
import re

import pytest

from arenalegends.geometry import (
    BLOCK_SIZE,
    Point,
    Side,
    block_to_middle_px,
    block_to_px,
    find_angle,
    float_to_str,
    px_to_block,
    time_string,
    which_side,
)


@pytest.mark.parametrize("x", [0.0, 7.5, -12.0, 1234.5])
def test_magnitude_of_axis_vector_is_absolute_value(x):
    assert Point(x, 0).magnitude() == pytest.approx(abs(x))
    assert Point(0, x).magnitude() == pytest.approx(abs(x))


def test_point_arithmetic_round_trip():
    a = Point(3.5, -2.0)
    b = Point(10.0, 4.25)
    assert (a + b) - b == a
    assert a * 2 == a + a


@pytest.mark.parametrize("bx, by", [(0, 0), (5, 9), (31, 17), (16, 3)])
def test_block_px_round_trip(bx, by):
    block = Point(bx, by)
    assert px_to_block(block_to_px(block)) == block
    assert px_to_block(block_to_middle_px(block)) == block


def test_middle_is_half_block_from_corner():
    block = Point(4, 7)
    diff = block_to_middle_px(block) - block_to_px(block)
    assert diff == Point(BLOCK_SIZE / 2, BLOCK_SIZE / 2)


def test_px_to_block_truncates_inside_block():
    corner = block_to_px(Point(6, 2))
    inside = corner + Point(BLOCK_SIZE - 1, BLOCK_SIZE - 1)
    assert px_to_block(inside) == Point(6, 2)


def test_time_string_pinned():
    assert time_string(180) == "3 : 00"


@pytest.mark.parametrize("sec", [0, 5.9, 59.99, 60, 61, 119.5, 184, 600.2])
def test_time_string_round_trip(sec):
    text = time_string(sec)
    match = re.fullmatch(r"(\d+) : (\d\d)", text)
    assert match is not None
    minutes, seconds = int(match.group(1)), int(match.group(2))
    assert seconds < 60
    assert minutes * 60 + seconds == int(sec)


def test_float_to_str_short_value():
    assert float_to_str(3.0) == "3.0"


def test_float_to_str_truncates_long_output():
    result = float_to_str(1e12)
    assert len(result) == 9
    assert "1000000000000.0".startswith(result)


def test_find_angle_same_point_is_zero():
    assert find_angle(Point(10, 10), Point(10, 10)) == 0.0


def test_find_angle_straight_up():
    assert find_angle(Point(0, 100), Point(0, 0)) == pytest.approx(math.pi / 2)


@pytest.mark.parametrize("theta", [0.0, 0.1, 0.5, 1.0, 1.5, 2.0, 3.0, 3.5, 4.0, 5.0, 6.0])
def test_find_angle_round_trip(theta):
    center = Point(500, 500)
    point = Point(500 + 100 * math.cos(theta), 500 - 100 * math.sin(theta))
    assert find_angle(center, point) == pytest.approx(theta, abs=1e-9)


def test_which_side():
    assert which_side(block_to_middle_px(Point(20, 5))) == Side.BLUE
    assert which_side(block_to_middle_px(Point(15, 5))) == Side.BRIDGE
    assert which_side(block_to_middle_px(Point(16, 5))) == Side.BRIDGE
    assert which_side(block_to_middle_px(Point(3, 5))) == Side.RED