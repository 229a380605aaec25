"""Bluetooth device list handling and an RFCOMM byte transport."""

from __future__ import annotations

import logging
import re
import socket
from dataclasses import dataclass
from typing import Optional

log = logging.getLogger(__name__)

SCANNING_TEXT = "Scanning for devices..."
NO_DEVICES_TEXT = "No paired devices found."
UNKNOWN_DEVICE_NAME = "Unknown Device"
DEFAULT_CHANNEL = 1

_ADDRESS_RE = re.compile(r"^[0-9A-Fa-f]{2}(:[0-9A-Fa-f]{2}){5}$")
_NULL_ADDRESS = "00:00:00:00:00:00"


def is_valid_address(address: str) -> bool:
    """True for a non-null address of the form XX:XX:XX:XX:XX:XX."""
    return bool(_ADDRESS_RE.match(address or "")) and address != _NULL_ADDRESS


@dataclass(frozen=True)
class DeviceInfo:
    """A discovered device."""

    name: str
    address: str

    @property
    def is_valid(self) -> bool:
        return is_valid_address(self.address)

    @property
    def display_name(self) -> str:
        return self.name or UNKNOWN_DEVICE_NAME

    @property
    def label(self) -> str:
        return f"{self.display_name} [{self.address}]"


@dataclass(frozen=True)
class _Entry:
    text: str
    address: Optional[str] = None


class DeviceList:
    """The list shown while scanning: device rows plus status messages."""

    def __init__(self) -> None:
        self._entries: list[_Entry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return (entry.text for entry in self._entries)

    @property
    def labels(self) -> list[str]:
        return list(self)

    def start_scan(self) -> None:
        """Clear the list and show the scanning message."""
        self._entries = [_Entry(SCANNING_TEXT)]

    def add_device(self, device: DeviceInfo) -> bool:
        """Add a discovered device; invalid devices are ignored."""
        if not device.is_valid:
            return False
        self._entries.append(_Entry(device.label, device.address))
        return True

    def finish_scan(self) -> None:
        """Drop the scanning message and note when nothing was found."""
        if self._entries and self._entries[0].text == SCANNING_TEXT and self._entries[0].address is None:
            del self._entries[0]
        if not self._entries:
            self._entries.append(_Entry(NO_DEVICES_TEXT))

    def address_at(self, index: int) -> Optional[str]:
        """Address of the row at index, or None for a status message."""
        return self._entries[index].address


class RfcommTransport:
    """A byte stream to a device over an RFCOMM channel."""

    def __init__(self, address: str, channel: int = DEFAULT_CHANNEL) -> None:
        if not is_valid_address(address):
            raise ValueError(f"invalid bluetooth address: {address!r}")
        self.address = address.upper()
        self.channel = channel
        self._sock: Optional[socket.socket] = None

    def connect(self) -> None:
        """Open the connection; raises OSError when it cannot be made."""
        if self._sock is not None:
            return
        family = getattr(socket, "AF_BLUETOOTH", None)
        proto = getattr(socket, "BTPROTO_RFCOMM", None)
        if family is None or proto is None:
            raise OSError("RFCOMM sockets are not supported on this platform")
        sock = socket.socket(family, socket.SOCK_STREAM, proto)
        try:
            sock.connect((self.address, self.channel))
        except OSError:
            sock.close()
            raise
        self._sock = sock
        log.debug("connected to %s channel %d", self.address, self.channel)

    def is_open(self) -> bool:
        return self._sock is not None

    def write(self, data: bytes) -> None:
        """Send all of data; raises OSError when the connection is closed."""
        if self._sock is None:
            raise OSError("transport is not open")
        self._sock.sendall(data)

    def close(self) -> None:
        """Close the connection; closing twice is harmless."""
        if self._sock is not None:
            sock, self._sock = self._sock, None
            sock.close()
            log.debug("disconnected from %s", self.address)

    def __enter__(self) -> "RfcommTransport":
        self.connect()
        return self

    def __exit__(self, *exc) -> None:
        self.close()