"""Framing for the serial instrument protocol: packing requests and parsing replies."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

HEADER = 0xA5
FRAME_MARK = 0x03
CMD_SET = 0x01
CMD_GET = 0x03
CMD_HEARTBEAT = 0x20
MAX_PAYLOAD_LENGTH = 200

_DATA_COMMANDS = frozenset({0x03, 0x10})


@dataclass(frozen=True)
class Message:
    """A reply decoded from the instrument."""

    cmd: int
    ver: str
    data: bytes = b""


def _checksum(data: Iterable[int]) -> int:
    return sum(data) & 0xFF


def _frame(cmd: int, length: int, payload: bytes = b"") -> bytes:
    body = bytes([HEADER, HEADER, FRAME_MARK, cmd, 0x00, length & 0xFF, 0x00]) + bytes(payload)
    return body + bytes([_checksum(body)])


class MessageProcessor:
    """Builds outgoing frames and reassembles incoming ones from a byte stream."""

    def __init__(self) -> None:
        self._buffer = bytearray()
        self._count = 0
        self._complete = False

    def pack_get(self, attr_id: bytes) -> bytes:
        """Frame a GET request for the given attribute id bytes."""
        attr_id = bytes(attr_id)
        return _frame(CMD_GET, len(attr_id) + 1, attr_id)

    def pack_set(self, value: bytes) -> bytes:
        """Frame a SET request; the length field holds only one byte."""
        value = bytes(value)
        return _frame(CMD_SET, len(value) + 1, value)

    def pack_heartbeat(self) -> bytes:
        """Frame a heartbeat with an empty payload."""
        return _frame(CMD_HEARTBEAT, 0)

    def feed(self, data: bytes) -> Message | None:
        """Consume received bytes; return a message when a valid frame completes.

        Bytes following a completed frame in the same chunk are discarded, as
        are frames with a bad checksum.
        """
        buf = self._buffer
        for byte in bytes(data):
            buf.append(byte)
            if buf[0] == HEADER:
                if self._count > 7 and self._count >= buf[7] + 8:
                    self._complete = True
                else:
                    self._count = (self._count + 1) & 0xFF
                bad_second = self._count > 1 and buf[1] != HEADER
                too_long = self._count > 7 and buf[7] > MAX_PAYLOAD_LENGTH
                if bad_second or too_long:
                    self._count = 0
                    for index in (0, 1, 7):
                        if index < len(buf):
                            buf[index] = 0
            else:
                self._count = 0
                buf.clear()

        if not self._complete:
            return None
        self._complete = False

        count = self._count
        message = None
        if len(buf) > count and _checksum(buf[:count]) == buf[count]:
            cmd = buf[5]
            payload = b""
            if cmd in _DATA_COMMANDS:
                payload = bytes(buf[9 : 9 + buf[7] - 1])
            ver = f"{buf[2]}年{buf[3]}月{buf[4]}日"
            message = Message(cmd=cmd, ver=ver, data=payload)
        self._count = 0
        buf.clear()
        return message