"""Terminal remote control for a Bluetooth RFCOMM car: joypad, speed dials and command protocol."""

__version__ = "0.1.0"