import pytest

from deskkit.protocol import Message, MessageProcessor


def incoming(cmd, payload=b"", version=(24, 5, 1), msg_id=0):
    body = bytes([0xA5, 0xA5, *version, cmd, 0x00, len(payload) + 1, msg_id]) + payload
    return body + bytes([sum(body) & 0xFF])


def test_heartbeat_bytes():
    assert MessageProcessor().pack_heartbeat() == b"\xa5\xa5\x03\x20\x00\x00\x00\x6d"


@pytest.mark.parametrize("method,cmd", [("pack_get", 0x03), ("pack_set", 0x01)])
def test_request_layout(method, cmd):
    payload = b"\x10\x20\x30"
    frame = getattr(MessageProcessor(), method)(payload)
    assert frame[:7] == bytes([0xA5, 0xA5, 0x03, cmd, 0x00, len(payload) + 1, 0x00])
    assert frame[7:-1] == payload
    assert frame[-1] == sum(frame[:-1]) & 0xFF


def test_length_field_truncated_to_one_byte():
    frame = MessageProcessor().pack_set(bytes(255))
    assert frame[5] == 0
    assert frame[-1] == sum(frame[:-1]) & 0xFF


def test_feed_complete_frame():
    proc = MessageProcessor()
    msg = proc.feed(incoming(0x03, b"\x01\x02\x03"))
    assert msg == Message(cmd=0x03, ver="24年5月1日", data=b"\x01\x02\x03")


def test_feed_split_chunks():
    proc = MessageProcessor()
    frame = incoming(0x10, b"abc")
    results = [proc.feed(frame[i : i + 1]) for i in range(len(frame))]
    assert results[:-1] == [None] * (len(frame) - 1)
    assert results[-1].data == b"abc"
    assert results[-1].cmd == 0x10


def test_other_commands_carry_no_data():
    msg = MessageProcessor().feed(incoming(0x05, b"xyz"))
    assert msg.cmd == 0x05
    assert msg.data == b""


def test_bad_checksum_then_recovery():
    proc = MessageProcessor()
    frame = bytearray(incoming(0x03, b"\x09"))
    frame[-1] = (frame[-1] + 1) & 0xFF
    assert proc.feed(bytes(frame)) is None
    good = proc.feed(incoming(0x03, b"\x09"))
    assert good.data == b"\x09"


def test_leading_garbage_skipped():
    msg = MessageProcessor().feed(b"\x00\x17" + incoming(0x03, b"\x04"))
    assert msg.data == b"\x04"


def test_trailing_bytes_discarded():
    proc = MessageProcessor()
    msg = proc.feed(incoming(0x03, b"\x07") + b"\xa5\xa5\x01")
    assert msg.data == b"\x07"
    assert proc.feed(incoming(0x03, b"\x08")).data == b"\x08"


def test_oversized_length_rejected():
    body = bytes([0xA5, 0xA5, 1, 1, 1, 0x03, 0x00, 201, 0x00]) + bytes(200)
    proc = MessageProcessor()
    assert proc.feed(body + bytes([sum(body) & 0xFF])) is None
    proc.feed(b"\x00")
    assert proc.feed(incoming(0x03, b"\x02")).data == b"\x02"


def test_bad_second_header_byte_rejected():
    proc = MessageProcessor()
    assert proc.feed(b"\xa5\x00") is None
    proc.feed(b"\x00")
    assert proc.feed(incoming(0x03, b"\x02")).data == b"\x02"


def test_zero_length_frame():
    body = bytes([0xA5, 0xA5, 24, 5, 1, 0x03, 0x00, 0x00, 0x00])
    msg = MessageProcessor().feed(body[:8] + bytes([sum(body[:8]) & 0xFF]))
    assert msg.cmd == 0x03
    assert msg.data == b""