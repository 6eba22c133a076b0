"""Receive run records from an instrument over a serial line and keep them as log files."""

from __future__ import annotations

import argparse
import datetime as _dt
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Optional

MARKER = "润达医疗"
DATE_KEY = "日期"
RUN_COUNT_KEY = "运行次数"
FIELD_SEPARATOR = "："
ENCODING = "gb2312"
BLANK = "N/A"
LOG_DIR = "OperatingLogs"
LANGUAGES = ("en_US", "zh_CN")

_BLANK_CHARS = re.compile(r"[\s\u3000]")


@dataclass(frozen=True)
class Record:
    """A complete record: the received text, its display form and its file name prefix."""

    raw: str
    text: str
    prefix: str


def _field_value(line: str) -> Optional[str]:
    parts = line.split(FIELD_SEPARATOR)
    if len(parts) < 2:
        return None
    return _BLANK_CHARS.sub("", parts[1])


def parse_record(text: str) -> Record:
    """Build the display text (lines newest first) and the log file name prefix."""
    lines = text.split("\n")
    display = "".join(f"{line}\n" for line in reversed(lines))
    prefix = ""
    for line in lines:
        if DATE_KEY in line or RUN_COUNT_KEY in line:
            value = _field_value(line)
            if value is not None:
                prefix += value + "-"
    return Record(raw=text, text=display, prefix=prefix + "(")


def decode_record(data: bytes) -> Optional[Record]:
    """Decode received bytes; return a record once the text carries the record marker."""
    text = bytes(data).decode(ENCODING, errors="replace")
    if MARKER not in text:
        return None
    return parse_record(text)


def _text_or_blank(value) -> str:
    return value if value else BLANK


def _hex_or_blank(value) -> str:
    return format(value, "x") if value else BLANK


def port_descriptions(ports: Iterable) -> list[tuple[str, tuple[str, ...]]]:
    """Describe serial ports as (label, fields) pairs.

    Each port is expected to offer name, description, manufacturer,
    serial_number, device, vid and pid, as pyserial's port info does.
    """
    result = []
    for port in ports:
        fields = (
            port.name,
            _text_or_blank(port.description),
            _text_or_blank(port.manufacturer),
            _text_or_blank(port.serial_number),
            port.device,
            _hex_or_blank(port.vid),
            _hex_or_blank(port.pid),
        )
        result.append((f"{fields[0]}({fields[1]})", fields))
    return result


def toggle_language(current: str) -> str:
    """The language that a press on the language button switches to.

    The known languages are cycled in order; an unknown one falls back to the first.
    """
    try:
        position = LANGUAGES.index(current)
    except ValueError:
        return LANGUAGES[0]
    return LANGUAGES[(position + 1) % len(LANGUAGES)]


class LogStore:
    """A directory of saved records, one text file per record."""

    def __init__(self, directory=LOG_DIR) -> None:
        self.directory = Path(directory)

    def save(self, text: str, prefix: str, now: Optional[_dt.datetime] = None) -> Optional[Path]:
        """Write text to a new log file; empty text is not saved and gives None."""
        if not text:
            return None
        when = now or _dt.datetime.now()
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / f"{prefix}{when:%Y%m%d_%H%M%S}).txt"
        path.write_text(text, encoding="utf-8")
        return path

    def list_logs(self) -> list[tuple[str, str]]:
        """(title, file name) of each log, by name in descending order."""
        if not self.directory.is_dir():
            return []
        names = sorted(
            (entry.name for entry in self.directory.glob("*.txt") if entry.is_file()),
            reverse=True,
        )
        return [(name.split(".", 1)[0], name) for name in names]

    def load(self, name: str) -> str:
        """Read a saved log; a missing or unreadable file raises OSError."""
        return (self.directory / name).read_text(encoding="utf-8")


class RecordReceiver:
    """Accumulates serial data until a record is complete, then saves it."""

    def __init__(
        self,
        store: Optional[LogStore] = None,
        clock: Callable[[], _dt.datetime] = _dt.datetime.now,
    ) -> None:
        self.store = store
        self._clock = clock
        self._buffer = bytearray()
        self.last_saved: Optional[Path] = None

    def feed(self, data: bytes) -> Optional[Record]:
        """Add received bytes; return the record when one is complete."""
        self._buffer += data
        record = decode_record(self._buffer)
        if record is None:
            return None
        self._buffer.clear()
        if self.store is not None:
            self.last_saved = self.store.save(record.text, record.prefix, self._clock())
        return record


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Read run records from a serial port.")
    parser.add_argument("--port", help="serial port to open")
    parser.add_argument("--list", action="store_true", help="list serial ports and exit")
    parser.add_argument("--baudrate", type=int, default=9600)
    parser.add_argument("--databits", type=int, choices=(5, 6, 7, 8), default=8)
    parser.add_argument(
        "--parity", choices=("none", "even", "odd", "mark", "space"), default="none"
    )
    parser.add_argument("--stopbits", type=float, choices=(1, 1.5, 2), default=1)
    parser.add_argument(
        "--flow", choices=("none", "rtscts", "xonxoff"), default="none"
    )
    parser.add_argument("--dir", default=LOG_DIR, help="directory for log files")
    return parser


def main(argv=None) -> int:
    args = _build_parser().parse_args(argv)

    import serial
    from serial.tools import list_ports

    if args.list or not args.port:
        descriptions = port_descriptions(list_ports.comports())
        for label, _fields in descriptions:
            print(label)
        if args.list:
            return 0
        print("no device available")
        return 1

    parity = {
        "none": serial.PARITY_NONE,
        "even": serial.PARITY_EVEN,
        "odd": serial.PARITY_ODD,
        "mark": serial.PARITY_MARK,
        "space": serial.PARITY_SPACE,
    }[args.parity]
    stopbits = {
        1: serial.STOPBITS_ONE,
        1.5: serial.STOPBITS_ONE_POINT_FIVE,
        2: serial.STOPBITS_TWO,
    }[args.stopbits]

    receiver = RecordReceiver(LogStore(args.dir))
    try:
        with serial.Serial(
            args.port,
            baudrate=args.baudrate,
            bytesize=args.databits,
            parity=parity,
            stopbits=stopbits,
            rtscts=args.flow == "rtscts",
            xonxoff=args.flow == "xonxoff",
            timeout=1,
        ) as port:
            while True:
                chunk = port.read(port.in_waiting or 1)
                if not chunk:
                    continue
                record = receiver.feed(chunk)
                if record is not None:
                    print(record.text)
                    if receiver.last_saved is not None:
                        print(receiver.last_saved)
    except serial.SerialException as exc:
        print(f"error: {exc}")
        return 1
    except KeyboardInterrupt:
        return 0