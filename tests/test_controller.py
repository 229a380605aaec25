import pytest

from btcarpad.controller import (
    STOP_COMMAND,
    CarController,
    encode_direction,
    encode_speed,
)
from btcarpad.joypad import Direction


class FakeTransport:
    def __init__(self, open_=True):
        self.open = open_
        self.sent = []

    def is_open(self):
        return self.open

    def write(self, data):
        self.sent.append(data)

    def close(self):
        self.open = False


@pytest.mark.parametrize(
    "direction, expected",
    [
        (Direction.UP, b"F\n"),
        (Direction.DOWN, b"B\n"),
        (Direction.LEFT, b"L\n"),
        (Direction.RIGHT, b"R\n"),
        (Direction.STOP, b"S\n"),
        ("U", b"F\n"),
        ("X", b"S\n"),
    ],
)
def test_encode_direction(direction, expected):
    assert encode_direction(direction) == expected


def test_encode_speed():
    assert encode_speed("N", 42) == b"N42\n"
    assert encode_speed("T", 0) == b"T0\n"


def test_handle_direction_writes_and_sets_controlling():
    t = FakeTransport()
    c = CarController(t)
    assert c.handle_direction(Direction.UP) is True
    assert t.sent == [b"F\n"]
    assert c.controlling is True
    c.handle_direction(Direction.STOP)
    assert c.controlling is False
    assert t.sent[-1] == STOP_COMMAND


def test_handle_direction_without_connection():
    c = CarController()
    assert c.handle_direction(Direction.UP) is False
    t = FakeTransport(open_=False)
    c.attach(t)
    assert c.handle_direction(Direction.UP) is False
    assert t.sent == []


def test_press_and_release():
    t = FakeTransport()
    c = CarController(t)
    assert c.press(Direction.LEFT) is True
    assert c.controlling is True
    assert c.release() is True
    assert c.controlling is False
    assert t.sent == [b"L\n", b"S\n"]


def test_press_ignored_when_closed():
    t = FakeTransport(open_=False)
    c = CarController(t)
    assert c.press(Direction.RIGHT) is False
    assert c.release() is False
    assert t.sent == []


def test_speed_suppressed_while_controlling():
    t = FakeTransport()
    c = CarController(t)
    c.press(Direction.UP)
    assert c.handle_normal_speed(100) is False
    assert c.handle_turn_speed(100) is False
    assert t.sent == [b"F\n"]
    c.release()
    assert c.handle_normal_speed(100) is True
    assert c.handle_turn_speed(50) is True
    assert t.sent[-2:] == [b"N100\n", b"T50\n"]


def test_speed_without_connection():
    c = CarController()
    assert c.handle_normal_speed(10) is False


def test_disconnect():
    t = FakeTransport()
    c = CarController(t)
    assert c.is_connected() is True
    assert c.disconnect() is True
    assert c.is_connected() is False
    assert c.disconnect() is False