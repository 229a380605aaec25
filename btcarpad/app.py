"""Interactive console front end for driving the car over Bluetooth."""

from __future__ import annotations

import argparse
import configparser
import logging
import sys
from pathlib import Path
from typing import Callable, Iterable, Optional, TextIO

from btcarpad.bluetooth import (
    DEFAULT_CHANNEL,
    DeviceInfo,
    DeviceList,
    RfcommTransport,
    is_valid_address,
)
from btcarpad.controller import CarController
from btcarpad.joypad import MIN_SIZE as JOYPAD_SIZE
from btcarpad.joypad import Direction, Joypad
from btcarpad.slider import CircularSlider

log = logging.getLogger(__name__)

DEFAULT_BLUETOOTH_DIR = Path("/var/lib/bluetooth")
TURN_COLOR = (0, 0, 255)
PROMPT = "> "

PAGE_CONTROL = "control"
PAGE_DEVICES = "devices"

NOT_CONNECTED = "Not connected."
DISCONNECTED = "Disconnected."
CONNECT_FAILED = "Could not connect"
NOT_A_DEVICE = "is not a device"
NO_SUCH_ENTRY = "No such entry"
UNKNOWN_COMMAND = "Unknown command"
WRITE_FAILED = "Write failed"
DEAD_ZONE_TEXT = "Inside the dead zone."

MIN_CHANNEL = 1
MAX_CHANNEL = 30

HELP_TEXT = """\
Commands:
  scan               list paired devices
  list               show the device list again
  connect N          connect to entry N of the device list
  disconnect         close the connection
  control            switch to the control page
  forward | f        drive forward
  back | b           drive backward
  left | l           turn left
  right | r          turn right
  stop | s           stop (also releases the joypad)
  pad X Y            press the joypad at X Y (200x200 pad)
  drag X Y           drag the held joypad to X Y
  speed V            set the normal speed (0-255)
  turn V             set the turning speed (0-255)
  status             show connection and speeds
  help               show this text
  quit | exit        leave"""


def _read_name(info_path: Path) -> str:
    parser = configparser.ConfigParser(interpolation=None, strict=False)
    try:
        parser.read(info_path, encoding="utf-8")
    except (OSError, configparser.Error, UnicodeDecodeError):
        return ""
    return parser.get("General", "Name", fallback="")


def _paired_devices(base: Path) -> list[DeviceInfo]:
    """Devices paired with any local adapter, as recorded under base."""
    found: dict[str, str] = {}
    try:
        adapters = sorted(base.iterdir())
    except OSError:
        return []
    for adapter in adapters:
        if not is_valid_address(adapter.name):
            continue
        try:
            entries = sorted(adapter.iterdir())
        except OSError:
            continue
        for entry in entries:
            if is_valid_address(entry.name):
                found.setdefault(entry.name.upper(), _read_name(entry / "info"))
    return [DeviceInfo(name, address) for address, name in found.items()]


class _Terminal:
    def __init__(self, stdin: TextIO, stdout: TextIO) -> None:
        self._stdin = stdin
        self._stdout = stdout

    def readline(self) -> str:
        return self._stdin.readline()

    def write(self, text: str) -> None:
        self._stdout.write(text)
        self._stdout.flush()


class ControllerApp:
    """Command loop over a terminal that drives the car.

    root is the terminal: any object with readline() and write(text).
    """

    def __init__(
        self,
        root,
        controller: Optional[CarController] = None,
        devices: Optional[DeviceList] = None,
    ) -> None:
        self.root = root
        self.controller = controller if controller is not None else CarController()
        self.devices = devices if devices is not None else DeviceList()
        self.joypad = Joypad()
        self.normal_slider = CircularSlider()
        self.turn_slider = CircularSlider(TURN_COLOR)
        self.page = PAGE_CONTROL
        self.discover: Callable[[], Iterable[DeviceInfo]] = lambda: _paired_devices(
            DEFAULT_BLUETOOTH_DIR
        )
        self.transport_factory: Callable[[str], object] = RfcommTransport

        self.joypad.subscribe(self._on_joypad)
        self.normal_slider.subscribe(self._on_normal_speed)
        self.turn_slider.subscribe(self._on_turn_speed)

        drive = {
            Direction.UP: ("forward", "f"),
            Direction.DOWN: ("back", "b"),
            Direction.LEFT: ("left", "l"),
            Direction.RIGHT: ("right", "r"),
        }
        self._commands: dict[str, Callable[[list[str]], None]] = {
            "help": self._cmd_help,
            "scan": self._cmd_scan,
            "list": self._cmd_list,
            "connect": self._cmd_connect,
            "disconnect": self._cmd_disconnect,
            "control": self._cmd_control,
            "stop": self._cmd_stop,
            "s": self._cmd_stop,
            "pad": self._cmd_pad,
            "drag": self._cmd_drag,
            "speed": self._cmd_speed,
            "turn": self._cmd_turn,
            "status": self._cmd_status,
        }
        for direction, names in drive.items():
            for name in names:
                self._commands[name] = self._drive_command(direction)

    def _say(self, text: str) -> None:
        self.root.write(text + "\n")

    def _guarded(self, action: Callable[..., bool], *args) -> bool:
        try:
            return action(*args)
        except OSError as exc:
            self._say(f"{WRITE_FAILED}: {exc}")
            return False

    def run(self) -> int:
        """Read and execute commands until quit or end of input."""
        self._say("Type 'help' for commands.")
        while True:
            self.root.write(PROMPT)
            line = self.root.readline()
            if not line:
                break
            words = line.split()
            if not words:
                continue
            name, args = words[0].lower(), words[1:]
            if name in ("quit", "exit"):
                break
            handler = self._commands.get(name)
            if handler is None:
                self._say(f"{UNKNOWN_COMMAND}: {name}")
                continue
            handler(args)
        if self.controller.is_connected():
            self.controller.disconnect()
        return 0

    # signal handlers

    def _on_joypad(self, direction: Direction) -> None:
        if not self.controller.is_connected():
            self._say(NOT_CONNECTED)
            return
        self._guarded(self.controller.handle_direction, direction)

    def _send_speed(self, action: Callable[[int], bool], value: int) -> None:
        if self.controller.controlling:
            return
        if not self.controller.is_connected():
            self._say(NOT_CONNECTED)
            return
        self._guarded(action, value)

    def _on_normal_speed(self, value: int) -> None:
        self._send_speed(self.controller.handle_normal_speed, value)

    def _on_turn_speed(self, value: int) -> None:
        self._send_speed(self.controller.handle_turn_speed, value)

    # commands

    def _cmd_help(self, args: list[str]) -> None:
        self._say(HELP_TEXT)

    def _cmd_scan(self, args: list[str]) -> None:
        if self.page == PAGE_CONTROL:
            self.page = PAGE_DEVICES
        self.devices.start_scan()
        self._say(next(iter(self.devices)))
        try:
            discovered = list(self.discover())
        except OSError as exc:
            self._say(f"Scan failed: {exc}")
            discovered = []
        for device in discovered:
            self.devices.add_device(device)
        self.devices.finish_scan()
        self._cmd_list([])

    def _cmd_list(self, args: list[str]) -> None:
        if len(self.devices) == 0:
            self._say("The device list is empty; run 'scan'.")
            return
        for number, label in enumerate(self.devices, start=1):
            self._say(f"{number}. {label}")

    def _cmd_connect(self, args: list[str]) -> None:
        if len(args) != 1 or not args[0].isdigit():
            self._say("Usage: connect N")
            return
        number = int(args[0])
        if not 1 <= number <= len(self.devices):
            self._say(f"{NO_SUCH_ENTRY}: {number}")
            return
        address = self.devices.address_at(number - 1)
        if not address:
            self._say(f"Entry {number} {NOT_A_DEVICE}.")
            return
        if self.controller.is_connected():
            self.controller.disconnect()
        try:
            transport = self.transport_factory(address)
            transport.connect()
        except (OSError, ValueError) as exc:
            self._say(f"{CONNECT_FAILED} to {address}: {exc}")
            return
        self.controller.attach(transport)
        self._say(f"Connected to {address}.")

    def _cmd_disconnect(self, args: list[str]) -> None:
        if self.controller.disconnect():
            self._say(DISCONNECTED)
        else:
            self._say(NOT_CONNECTED)

    def _cmd_control(self, args: list[str]) -> None:
        self.page = PAGE_CONTROL
        self._say("Control page.")

    def _drive_command(self, direction: Direction) -> Callable[[list[str]], None]:
        def command(args: list[str]) -> None:
            if not self.controller.is_connected():
                self._say(NOT_CONNECTED)
                return
            self._guarded(self.controller.press, direction)

        return command

    def _cmd_stop(self, args: list[str]) -> None:
        if self.joypad.held:
            self.joypad.release()
            return
        if not self.controller.is_connected():
            self._say(NOT_CONNECTED)
            return
        self._guarded(self.controller.release)

    def _point(self, args: list[str], usage: str) -> Optional[tuple[float, float]]:
        try:
            x, y = (float(arg) for arg in args)
        except ValueError:
            self._say(f"Usage: {usage}")
            return None
        return x, y

    def _cmd_pad(self, args: list[str]) -> None:
        point = self._point(args, "pad X Y")
        if point is None:
            return
        width, height = JOYPAD_SIZE
        direction = self.joypad.press(point[0], point[1], width, height)
        self.joypad.clear_highlight()
        if direction is None:
            self._say(DEAD_ZONE_TEXT)

    def _cmd_drag(self, args: list[str]) -> None:
        point = self._point(args, "drag X Y")
        if point is None:
            return
        width, height = JOYPAD_SIZE
        if self.joypad.move(point[0], point[1], width, height) is None:
            self._say("The joypad is not held; use 'pad X Y' first.")

    def _set_slider(self, slider: CircularSlider, args: list[str], usage: str, label: str) -> None:
        try:
            (value,) = (int(arg) for arg in args)
        except ValueError:
            self._say(f"Usage: {usage}")
            return
        slider.set_value(value)
        self._say(f"{label} speed {slider.value}.")

    def _cmd_speed(self, args: list[str]) -> None:
        self._set_slider(self.normal_slider, args, "speed V", "Normal")

    def _cmd_turn(self, args: list[str]) -> None:
        self._set_slider(self.turn_slider, args, "turn V", "Turning")

    def _cmd_status(self, args: list[str]) -> None:
        state = "connected" if self.controller.is_connected() else "disconnected"
        self._say(f"Connection: {state}")
        self._say(f"Page: {self.page}")
        self._say(f"Normal speed: {self.normal_slider.value}")
        self._say(f"Turning speed: {self.turn_slider.value}")


def _channel(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {text!r}") from None
    if not MIN_CHANNEL <= value <= MAX_CHANNEL:
        raise argparse.ArgumentTypeError(
            f"channel must be between {MIN_CHANNEL} and {MAX_CHANNEL}"
        )
    return value


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line options."""
    parser = argparse.ArgumentParser(
        prog="btcarpad", description="Drive a Bluetooth car from the terminal."
    )
    parser.add_argument(
        "--channel",
        type=_channel,
        default=DEFAULT_CHANNEL,
        help="RFCOMM channel of the car (default: %(default)s)",
    )
    parser.add_argument(
        "--bluetooth-dir",
        type=Path,
        default=DEFAULT_BLUETOOTH_DIR,
        help="directory holding the paired-device records (default: %(default)s)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="log every command sent"
    )
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    """Run the console controller."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING, stream=sys.stderr
    )
    app = ControllerApp(_Terminal(sys.stdin, sys.stdout), CarController(), DeviceList())
    bluetooth_dir = args.bluetooth_dir
    channel = args.channel
    app.discover = lambda: _paired_devices(bluetooth_dir)
    app.transport_factory = lambda address: RfcommTransport(address, channel)
    return app.run()


if __name__ == "__main__":
    sys.exit(main())