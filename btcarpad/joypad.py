"""On-screen joystick model that turns pointer gestures into driving directions."""

from __future__ import annotations

import enum
import math
from typing import Callable, Optional

MIN_SIZE = (200, 200)
DEAD_ZONE = 20
HIGHLIGHT_MS = 200
TRAVEL_FRACTION = 0.6


class Direction(str, enum.Enum):
    """Direction codes emitted by the joypad."""

    UP = "U"
    DOWN = "D"
    LEFT = "L"
    RIGHT = "R"
    STOP = "S"


DirectionCallback = Callable[[Direction], None]


def direction_from_angle(angle: float) -> Direction:
    """Classify an angle in degrees (counter-clockwise, 0 = right) into a direction."""
    if 45 <= angle < 135:
        return Direction.UP
    if 135 <= angle < 225:
        return Direction.LEFT
    if 225 <= angle < 315:
        return Direction.DOWN
    return Direction.RIGHT


def dominant_direction(dx: float, dy: float) -> Direction:
    """Pick the direction of the larger screen-space component (y grows downwards)."""
    if abs(dx) > abs(dy):
        return Direction.RIGHT if dx > 0 else Direction.LEFT
    return Direction.DOWN if dy > 0 else Direction.UP


def clamp_offset(dx: float, dy: float, max_offset: float) -> tuple[float, float]:
    """Scale (dx, dy) down so its length does not exceed max_offset."""
    length = math.hypot(dx, dy)
    if length > max_offset:
        return dx / length * max_offset, dy / length * max_offset
    return float(dx), float(dy)


def _screen_angle(dx: float, dy: float) -> float:
    """Angle of a screen vector in degrees, counter-clockwise, in [0, 360)."""
    angle = math.degrees(math.atan2(-dy, dx))
    if angle < 0:
        angle += 360.0
    return angle


def _max_offset(width: int, height: int) -> float:
    return min(width, height) // 2 * TRAVEL_FRACTION


class Joypad:
    """State of the joystick: knob offset, held state and highlighted direction."""

    def __init__(self) -> None:
        self.offset: tuple[float, float] = (0.0, 0.0)
        self.held = False
        self.pressed_direction: Optional[Direction] = None
        self._callbacks: list[DirectionCallback] = []

    def subscribe(self, callback: DirectionCallback) -> None:
        """Register a callback that receives every emitted direction."""
        self._callbacks.append(callback)

    def _emit(self, direction: Direction) -> None:
        for callback in list(self._callbacks):
            callback(direction)

    def press(self, x: float, y: float, width: int, height: int) -> Optional[Direction]:
        """Handle a press; returns the emitted direction, or None inside the dead zone.

        A returned direction is highlighted until clear_highlight() is called,
        which the caller is expected to do after HIGHLIGHT_MS milliseconds.
        """
        self.held = True
        cx, cy = width // 2, height // 2
        dx, dy = x - cx, y - cy
        self.offset = clamp_offset(dx, dy, _max_offset(width, height))

        if math.hypot(dx, dy) < DEAD_ZONE:
            return None
        direction = direction_from_angle(_screen_angle(dx, dy))
        self.pressed_direction = direction
        self._emit(direction)
        return direction

    def move(self, x: float, y: float, width: int, height: int) -> Optional[Direction]:
        """Handle a drag; returns the emitted direction, or None when not held."""
        if not self.held:
            return None
        dx, dy = x - width // 2, y - height // 2
        self.offset = clamp_offset(dx, dy, _max_offset(width, height))
        direction = dominant_direction(*self.offset)
        self._emit(direction)
        return direction

    def release(self) -> Direction:
        """Handle a release: recentre the knob and emit a stop."""
        self.held = False
        self.offset = (0.0, 0.0)
        self._emit(Direction.STOP)
        return Direction.STOP

    def clear_highlight(self) -> None:
        """Remove the highlighted direction."""
        self.pressed_direction = None