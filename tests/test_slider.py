import math

import pytest

from btcarpad.slider import (
    DEFAULT_PROGRESS_COLOR,
    MAX_VALUE,
    CircularSlider,
    value_from_point,
)


def test_defaults():
    slider = CircularSlider()
    assert slider.value == 0
    assert slider.progress_color == (255, 64, 86)
    assert slider.progress_color == DEFAULT_PROGRESS_COLOR


def test_custom_color():
    slider = CircularSlider((0, 0, 255))
    assert slider.progress_color == (0, 0, 255)


@pytest.mark.parametrize("given, stored", [(300, 255), (-5, 0), (100, 100), (255, 255)])
def test_set_value_clamps(given, stored):
    slider = CircularSlider()
    slider.set_value(given)
    assert slider.value == stored


def test_callback_only_on_change():
    slider = CircularSlider()
    seen = []
    slider.subscribe(seen.append)
    slider.set_value(10)
    slider.set_value(10)
    slider.set_value(0)
    slider.set_value(-3)
    assert seen == [10, 0]


def test_top_of_dial_is_zero():
    assert value_from_point(100, 0, 201, 201) == 0


def test_bottom_of_dial_is_half():
    assert value_from_point(100, 200, 201, 201) == 128


def test_value_grows_clockwise():
    size = 201
    values = []
    for deg in range(5, 360, 15):
        rad = math.radians(90 - deg)
        x = 100 + 80 * math.cos(rad)
        y = 100 - 80 * math.sin(rad)
        values.append(value_from_point(x, y, size, size))
    assert values == sorted(values)
    assert all(0 <= v <= MAX_VALUE for v in values)


def test_drag_to_sets_value_and_notifies():
    slider = CircularSlider()
    seen = []
    slider.subscribe(seen.append)
    result = slider.drag_to(100, 200, 201, 201)
    assert result == slider.value
    assert seen == [slider.value]


def test_sweep_angle_extremes():
    slider = CircularSlider()
    assert slider.sweep_angle() == 0.0
    slider.set_value(255)
    assert slider.sweep_angle() == pytest.approx(360.0)


@pytest.mark.parametrize("value", [0, 17, 100, 200, 254])
def test_knob_on_circle(value):
    slider = CircularSlider()
    slider.set_value(value)
    x, y = slider.knob_position(300, 250)
    assert math.hypot(x - 150, y - 125) == pytest.approx(250 / 2.5)


def test_knob_at_zero_is_on_top():
    slider = CircularSlider()
    x, y = slider.knob_position(300, 300)
    assert x == pytest.approx(150)
    assert y < 150


@pytest.mark.parametrize("value", range(0, 255, 7))
def test_knob_round_trip(value):
    slider = CircularSlider()
    slider.set_value(value)
    x, y = slider.knob_position(301, 301)
    assert value_from_point(x, y, 301, 301) == value