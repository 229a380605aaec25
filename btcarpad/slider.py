"""Circular speed slider model: a value in 0..255 chosen by dragging around a dial."""

from __future__ import annotations

import math
from typing import Callable

MIN_VALUE = 0
MAX_VALUE = 255
DEFAULT_PROGRESS_COLOR: tuple[int, int, int] = (255, 64, 86)
MIN_SIZE = (150, 150)

ValueCallback = Callable[[int], None]


def _round_half_away(x: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return math.floor(x + 0.5) if x >= 0 else -math.floor(-x + 0.5)


def _rect_center(width: int, height: int) -> tuple[int, int]:
    """Centre of a widget rectangle whose right/bottom edges are width-1/height-1."""
    return (width - 1) // 2, (height - 1) // 2


def value_from_point(x: float, y: float, width: int, height: int) -> int:
    """Map a point in a widget of the given size to a slider value.

    The value grows clockwise from the top of the dial and is clamped to 0..255.
    """
    cx, cy = _rect_center(width, height)
    dx = x - cx
    dy = y - cy
    angle = math.degrees(math.atan2(-dy, dx))
    angle = 90 - angle
    if angle < 0:
        angle += 360
    value = _round_half_away(angle / 360.0 * MAX_VALUE)
    return max(MIN_VALUE, min(MAX_VALUE, value))


class CircularSlider:
    """A dial-shaped slider holding an integer value from 0 to 255."""

    def __init__(self, progress_color: tuple[int, int, int] = DEFAULT_PROGRESS_COLOR):
        self.progress_color = tuple(progress_color)
        self._value = MIN_VALUE
        self._callbacks: list[ValueCallback] = []

    @property
    def value(self) -> int:
        return self._value

    def subscribe(self, callback: ValueCallback) -> None:
        """Register a callback that receives every new value."""
        self._callbacks.append(callback)

    def set_value(self, new_value: int) -> None:
        """Clamp and store a value, notifying subscribers if it changed."""
        new_value = max(MIN_VALUE, min(MAX_VALUE, int(new_value)))
        if new_value == self._value:
            return
        self._value = new_value
        for callback in list(self._callbacks):
            callback(new_value)

    def drag_to(self, x: float, y: float, width: int, height: int) -> int:
        """Handle a press or drag at (x, y) and return the resulting value."""
        self.set_value(value_from_point(x, y, width, height))
        return self._value

    def sweep_angle(self) -> float:
        """Degrees of the dial covered by the progress arc."""
        return self._value / float(MAX_VALUE) * 360.0

    def knob_position(self, width: int, height: int) -> tuple[float, float]:
        """Position of the knob on the dial for a widget of the given size."""
        radius = min(width, height) / 2.5
        rad = math.radians(90 - self.sweep_angle())
        x = width // 2 + radius * math.cos(rad)
        y = height // 2 - radius * math.sin(rad)
        return x, y