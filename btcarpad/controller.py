"""Car command logic: turns directions and speeds into the wire protocol."""

from __future__ import annotations

import logging
from typing import Optional, Protocol, Union

from btcarpad.joypad import Direction

log = logging.getLogger(__name__)

STOP_COMMAND = b"S\n"
NORMAL_SPEED_PREFIX = "N"
TURN_SPEED_PREFIX = "T"

_DIRECTION_COMMANDS = {
    Direction.UP: b"F\n",
    Direction.DOWN: b"B\n",
    Direction.LEFT: b"L\n",
    Direction.RIGHT: b"R\n",
}


class Transport(Protocol):
    """Byte channel to the car."""

    def is_open(self) -> bool: ...

    def write(self, data: bytes) -> None: ...

    def close(self) -> None: ...


def _as_direction(direction: Union[Direction, str]) -> Optional[Direction]:
    try:
        return Direction(direction)
    except ValueError:
        return None


def encode_direction(direction: Union[Direction, str]) -> bytes:
    """Command bytes for a joypad direction; anything unrecognised means stop."""
    parsed = _as_direction(direction)
    if parsed is None:
        return STOP_COMMAND
    return _DIRECTION_COMMANDS.get(parsed, STOP_COMMAND)


def encode_speed(prefix: str, value: int) -> bytes:
    """Command bytes setting a speed, e.g. prefix "N" and 120 give b"N120\\n"."""
    return f"{prefix}{int(value)}\n".encode("utf-8")


class CarController:
    """Sends driving and speed commands to the car over a transport.

    Speed changes are suppressed while a direction is being held.
    """

    def __init__(self, transport: Optional[Transport] = None) -> None:
        self.transport = transport
        self.controlling = False

    def attach(self, transport: Transport) -> None:
        """Use a new transport for subsequent commands."""
        self.transport = transport

    def is_connected(self) -> bool:
        return self.transport is not None and self.transport.is_open()

    def _send(self, data: bytes) -> None:
        assert self.transport is not None
        self.transport.write(data)

    def press(self, direction: Union[Direction, str]) -> bool:
        """A direction button went down; returns whether a command was sent."""
        if not self.is_connected():
            return False
        command = encode_direction(direction)
        self.controlling = command != STOP_COMMAND
        self._send(command)
        log.debug("sent %r", command)
        return True

    def release(self) -> bool:
        """A direction button came up; sends stop when connected."""
        if not self.is_connected():
            return False
        self.controlling = False
        self._send(STOP_COMMAND)
        log.debug("sent %r", STOP_COMMAND)
        return True

    def handle_direction(self, direction: Union[Direction, str]) -> bool:
        """Forward a joypad direction to the car; returns whether it was sent."""
        if not self.is_connected():
            log.error("bluetooth socket is not open")
            return False
        command = encode_direction(direction)
        self.controlling = command != STOP_COMMAND
        self._send(command)
        log.debug("joypad command sent: %r", command)
        return True

    def _handle_speed(self, prefix: str, value: int) -> bool:
        if self.controlling:
            return False
        if not self.is_connected():
            log.error("bluetooth socket is missing or not open")
            return False
        self._send(encode_speed(prefix, value))
        return True

    def handle_normal_speed(self, value: int) -> bool:
        """Send the straight-line speed unless a direction is held."""
        return self._handle_speed(NORMAL_SPEED_PREFIX, value)

    def handle_turn_speed(self, value: int) -> bool:
        """Send the turning speed unless a direction is held."""
        return self._handle_speed(TURN_SPEED_PREFIX, value)

    def disconnect(self) -> bool:
        """Close the connection; returns False when there was none."""
        if self.is_connected():
            assert self.transport is not None
            self.transport.close()
            log.info("bluetooth connection closed by user")
            return True
        log.info("already disconnected")
        return False