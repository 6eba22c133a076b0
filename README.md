# deskkit

A handful of small desktop utilities in one package:

- `deskkit.wallpaper`: downloads the Bing image of the day and stores it
  under a folder per year.
- `deskkit.recordlog`: receives GB2312-encoded run records from a serial
  device and keeps each one as a timestamped text file.
- `deskkit.protocol`: builds and parses `0xA5 0xA5`-framed GET, SET and
  heartbeat messages.
- `deskkit.environment`: the environment variables a Qt Quick application
  is started with.
- `deskkit.cube`: vertex data, transform matrix and viewport for a spinning
  textured cube.

## Installation

```
pip install .
```

For the tests:

```
pip install .[test]
pytest
```

## Commands

### deskkit-wallpaper

```
deskkit-wallpaper [--dir DIR] [--interval SECONDS]
```

Every `--interval` seconds (default 2) it tries to read the image archive,
until one attempt succeeds. It prints status messages, then the path of the
saved image, which is
`DIR/BingDesk_QT_img/<year>/<month>-<day>-<caption>.jpg` (DIR defaults to
the current directory). In the caption, `/`, `(` and `)` become `-`.

### deskkit-recordlog

```
deskkit-recordlog --list
deskkit-recordlog --port PORT [--baudrate 9600] [--databits 8]
                  [--parity none|even|odd|mark|space] [--stopbits 1|1.5|2]
                  [--flow none|rtscts|xonxoff] [--dir OperatingLogs]
```

`--list` prints the available serial ports. Without `--port` it prints them
too and exits with status 1. With a port, it reads until interrupted; when
the received text contains the record marker `润达医疗`, the record is shown
with its lines in reverse order and written to `--dir` as
`<date>-<run count>-(<YYYYmmdd_HHMMSS>).txt`, the date and run count being
taken from the record's `日期：` and `运行次数：` lines.

## Library use

### Message protocol

```python
from deskkit.protocol import MessageProcessor

proc = MessageProcessor()
get_frame = proc.pack_get(b"\x01")
set_frame = proc.pack_set(b"\x01\x02")
beat = proc.pack_heartbeat()

message = proc.feed(incoming_bytes)   # a Message, or None
```

Each frame ends with an 8-bit sum of the bytes before it. `feed` collects
bytes across calls and returns a `Message` (`cmd`, `ver`, `data`) once a
frame with a valid checksum is complete; payload bytes are kept only for
commands `0x03` and `0x10`. Frames announcing more than 200 payload bytes
are dropped.

### Wallpaper

```python
from deskkit.wallpaper import WallpaperManager, parse_archive, wallpaper_path

image = parse_archive(xml_text)        # BingImage(url=..., caption=...)

manager = WallpaperManager("images", set_wallpaper=my_setter)
manager.status_listeners.append(print)
path = manager.fetch_wallpaper()       # raises OSError on network failure
```

`poll()` makes one attempt unless one has already succeeded, and `run()`
repeats it on a timer. The downloader, the clock and the wallpaper setter
can all be passed in.

### Record logs

```python
from deskkit.recordlog import LogStore, RecordReceiver, parse_record

store = LogStore("OperatingLogs")
receiver = RecordReceiver(store)
record = receiver.feed(chunk)          # a Record once the marker has arrived

for title, name in store.list_logs():  # newest name first
    text = store.load(name)
```

`decode_record(data)` decodes bytes and parses them when the marker is
present. `port_descriptions(ports)` turns pyserial port entries into
`(label, fields)` pairs with `N/A` for missing values, and
`toggle_language(current)` switches between `en_US` and `zh_CN`.

### Environment

```python
import os
from deskkit.environment import apply_qt_environment, qt_environment

print(qt_environment())
apply_qt_environment(os.environ)
```

### Cube

```python
from deskkit.cube import CubeView, face_vertices

vertices = face_vertices()             # 24 (x, y, z, u, v) tuples
view = CubeView()
view.rotate()                          # one degree, wrapping after 360
matrix = view.projection(640, 480)     # row-major 4x4
x, y, w, h = view.viewport(640, 480)
```

## What it does not do

- There are no windows or screens; both commands run in a terminal.
- `deskkit-wallpaper` only saves the image. Changing the desktop background
  happens only through a `set_wallpaper` callable passed to
  `WallpaperManager`, and the package ships none.
- `deskkit-recordlog` only receives; it sends nothing to the device, and the
  message protocol is not used by it.
- `deskkit.cube` computes geometry only and draws nothing.