import math

import pytest

from btcarpad.joypad import (
    Direction,
    Joypad,
    clamp_offset,
    direction_from_angle,
    dominant_direction,
)


@pytest.mark.parametrize(
    "angle, expected",
    [
        (90, Direction.UP),
        (45, Direction.UP),
        (0, Direction.RIGHT),
        (315, Direction.RIGHT),
        (180, Direction.LEFT),
        (135, Direction.LEFT),
        (270, Direction.DOWN),
        (225, Direction.DOWN),
    ],
)
def test_direction_from_angle(angle, expected):
    assert direction_from_angle(angle) is expected


@pytest.mark.parametrize(
    "dx, dy, expected",
    [
        (5, 1, Direction.RIGHT),
        (-5, 1, Direction.LEFT),
        (1, 5, Direction.DOWN),
        (1, -5, Direction.UP),
        (0, 0, Direction.UP),
    ],
)
def test_dominant_direction(dx, dy, expected):
    assert dominant_direction(dx, dy) is expected


def test_direction_codes():
    codes = [direction_from_angle(angle).value for angle in (90, 270, 180, 0)]
    assert codes == ["U", "D", "L", "R"]
    pad = Joypad()
    pad.press(190, 100, 200, 200)
    assert pad.release().value == "S"


def test_clamp_offset_inside_unchanged():
    assert clamp_offset(3, 4, 10) == (3.0, 4.0)


def test_clamp_offset_outside_scaled():
    dx, dy = clamp_offset(30, 40, 10)
    assert math.hypot(dx, dy) == pytest.approx(10)
    assert dy / dx == pytest.approx(40 / 30)


def test_press_in_dead_zone_emits_nothing():
    pad = Joypad()
    seen = []
    pad.subscribe(seen.append)
    assert pad.press(105, 100, 200, 200) is None
    assert pad.held is True
    assert seen == []
    assert pad.pressed_direction is None


@pytest.mark.parametrize(
    "x, y, expected",
    [
        (100, 10, Direction.UP),
        (100, 190, Direction.DOWN),
        (10, 100, Direction.LEFT),
        (190, 100, Direction.RIGHT),
    ],
)
def test_press_direction_and_highlight(x, y, expected):
    pad = Joypad()
    seen = []
    pad.subscribe(seen.append)
    assert pad.press(x, y, 200, 200) is expected
    assert seen == [expected]
    assert pad.pressed_direction is expected
    pad.clear_highlight()
    assert pad.pressed_direction is None


def test_press_clamps_offset():
    pad = Joypad()
    pad.press(200, 200, 200, 200)
    assert math.hypot(*pad.offset) == pytest.approx(200 // 2 * 0.6)


def test_move_ignored_when_not_held():
    pad = Joypad()
    seen = []
    pad.subscribe(seen.append)
    assert pad.move(0, 100, 200, 200) is None
    assert seen == []
    assert pad.offset == (0.0, 0.0)


def test_move_while_held_emits_dominant():
    pad = Joypad()
    seen = []
    pad.subscribe(seen.append)
    pad.press(100, 100, 200, 200)
    assert pad.move(20, 110, 200, 200) is Direction.LEFT
    assert pad.move(110, 180, 200, 200) is Direction.DOWN
    assert seen == [Direction.LEFT, Direction.DOWN]
    assert math.hypot(*pad.offset) <= 200 // 2 * 0.6 + 1e-9


def test_release_recentres_and_stops():
    pad = Joypad()
    seen = []
    pad.subscribe(seen.append)
    pad.press(190, 100, 200, 200)
    assert pad.release() is Direction.STOP
    assert pad.held is False
    assert pad.offset == (0.0, 0.0)
    assert seen[-1] is Direction.STOP
    assert pad.move(190, 100, 200, 200) is None