# btcarpad

A terminal remote control for a Bluetooth car. It lists the devices
paired with the computer, opens an RFCOMM connection to the one you
pick, and sends one short text command per line as you drive with the
joypad or change the two speed dials.

## Installing

```
pip install .
```

The package uses only the standard library. The Bluetooth connection
uses the RFCOMM sockets the operating system provides (Linux with
BlueZ).

## Running

```
btcarpad
```

Options:

- `--channel N` – RFCOMM channel of the car, 1 to 30 (default 1).
- `--bluetooth-dir PATH` – directory holding the paired-device records
  (default `/var/lib/bluetooth`).
- `-v`, `--verbose` – log every command sent to standard error.

At the `> ` prompt, type `help` for the list of commands:

| Command            | Effect                                          |
|--------------------|-------------------------------------------------|
| `scan`             | list paired devices                             |
| `list`             | show the device list again                      |
| `connect N`        | connect to entry N of the device list           |
| `disconnect`       | close the connection                            |
| `control`          | switch to the control page                      |
| `forward`, `f`     | drive forward                                   |
| `back`, `b`        | drive backward                                  |
| `left`, `l`        | turn left                                       |
| `right`, `r`       | turn right                                      |
| `stop`, `s`        | stop (also releases the joypad)                 |
| `pad X Y`          | press the joypad at X Y (200×200 pad)           |
| `drag X Y`         | drag the held joypad to X Y                     |
| `speed V`          | set the normal speed (0–255)                    |
| `turn V`           | set the turning speed (0–255)                   |
| `status`           | show connection, page and speeds                |
| `quit`, `exit`     | leave (the connection is closed)                |

A scan shows unnamed devices as `Unknown Device`, and says
`No paired devices found.` when there are none.

The joypad: a press more than 20 units from the centre picks a
direction from its angle; closer presses are in the dead zone and send
nothing. A drag follows whichever axis moved further. `stop` releases
the joypad, which sends a stop.

Speeds are clamped to 0–255 and sent only when the value changes and
no direction is being held; `stop` ends the hold.

## What it does not do

- There is no graphical window; the program is driven from the
  terminal.
- `scan` does not search the air for devices. It reads the paired
  devices recorded under the Bluetooth directory, so pair the car with
  the system first.
- It does not look up the car's services; it connects to the RFCOMM
  channel given with `--channel`.

## Protocol

Each command is ASCII text followed by a newline:

| Command    | Meaning                  |
|------------|--------------------------|
| `F`        | forward                  |
| `B`        | backward                 |
| `L`        | left                     |
| `R`        | right                    |
| `S`        | stop                     |
| `N<0-255>` | set normal driving speed |
| `T<0-255>` | set turning speed        |

Joypad directions map as up to `F`, down to `B`, left to `L`, right to
`R`, and anything else to `S`.

## Using it from Python

`btcarpad.controller.CarController` turns directions and speeds into
commands and writes them to any transport with `is_open()`,
`write(data)` and `close()`. `btcarpad.bluetooth.RfcommTransport` is
such a transport over an RFCOMM socket; it can also be used as a
context manager.

```python
from btcarpad.bluetooth import RfcommTransport
from btcarpad.controller import CarController

transport = RfcommTransport("00:00:00:00:00:01", 1)
transport.connect()

controller = CarController(transport)
controller.handle_normal_speed(180)   # sends N180
controller.handle_direction("U")      # sends F
controller.handle_direction("S")      # sends S
controller.disconnect()
```

When no transport is open, nothing is sent and these methods return
`False`. `encode_direction` and `encode_speed` give the command bytes
on their own.

`btcarpad.slider.CircularSlider` and `btcarpad.joypad.Joypad` hold the
state of the two inputs. Pass a callback to `subscribe` and it is
called with each new value or `Direction`. `value_from_point` turns a
point on a dial of a given size into a value from 0 to 255, measured
clockwise from the top; `direction_from_angle`, `dominant_direction`
and `clamp_offset` are the joypad's geometry.

`btcarpad.bluetooth.DeviceList` holds the device list with its status
messages, and `is_valid_address` checks a `XX:XX:XX:XX:XX:XX` address.

## Tests

```
pip install .[test]
pytest
```