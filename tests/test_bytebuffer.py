import math
import uuid

import pytest

from celerity.bytebuffer import BufferUnderflowError, ByteBuffer
from celerity.nbt.tags import TagType


def test_varint_wire_bytes():
    buf = ByteBuffer()
    buf.write_varint(300)
    assert bytes(buf) == b"\xac\x02"


def test_negative_varint_takes_five_bytes():
    buf = ByteBuffer()
    buf.write_varint(-1)
    assert bytes(buf) == b"\xff\xff\xff\xff\x0f"
    assert buf.read_varint() == -1
    assert len(buf) == 0


def test_peek_varint_leaves_buffer_intact():
    buf = ByteBuffer()
    buf.write_varint(300)
    buf.write_byte(7)
    assert buf.peek_varint() == (300, 2)
    assert len(buf) == 3
    assert buf.read_varint() == 300


def test_peek_varint_incomplete_is_none():
    assert ByteBuffer(b"\x80\x80").peek_varint() is None
    assert ByteBuffer().peek_varint() is None


def test_varlong_round_trip():
    buf = ByteBuffer()
    for value in (0, 1, -1, 2**63 - 1, -(2**63)):
        buf.write_varlong(value)
    assert [buf.read_varlong() for _ in range(5)] == [0, 1, -1, 2**63 - 1, -(2**63)]


def test_big_endian_int_layout():
    buf = ByteBuffer()
    buf.write_int(1, big_endian=True)
    buf.write_int(1)
    assert bytes(buf) == b"\x00\x00\x00\x01\x01\x00\x00\x00"


@pytest.mark.parametrize("big_endian", [False, True])
@pytest.mark.parametrize(
    "writer,reader,value",
    [
        ("write_short", "read_short", -12345),
        ("write_ushort", "read_ushort", 65535),
        ("write_int", "read_int", -(2**31)),
        ("write_uint", "read_uint", 2**32 - 1),
        ("write_long", "read_long", -(2**63)),
        ("write_ulong", "read_ulong", 2**64 - 1),
        ("write_double", "read_double", math.pi),
        ("write_float", "read_float", 0.5),
    ],
)
def test_number_round_trip(big_endian, writer, reader, value):
    buf = ByteBuffer()
    getattr(buf, writer)(value, big_endian=big_endian)
    assert getattr(buf, reader)(big_endian=big_endian) == value
    assert len(buf) == 0


def test_out_of_range_write_raises():
    with pytest.raises(ValueError):
        ByteBuffer().write_short(1 << 15)
    with pytest.raises(ValueError):
        ByteBuffer().write_ubyte(256)


def test_read_underflow():
    buf = ByteBuffer(b"\x01\x02")
    with pytest.raises(BufferUnderflowError):
        buf.read_int()
    assert len(buf) == 2


def test_bool_and_signed_bytes():
    buf = ByteBuffer()
    buf.write_bool(True)
    buf.write_bool(False)
    buf.write_bytes([-1, 5])
    assert bytes(buf) == b"\x01\x00\xff\x05"
    assert buf.read_bool() is True
    assert buf.read_bool() is False
    assert buf.peek_bytes(2) == [-1, 5]
    assert buf.read_bytes(2) == [-1, 5]


def test_peek_byte_offset_and_errors():
    buf = ByteBuffer(b"\x10\x80")
    assert buf.peek_byte(1) == -128
    assert buf.peek_ubyte(1) == 128
    with pytest.raises(BufferUnderflowError):
        buf.peek_byte(2)
    with pytest.raises(BufferUnderflowError):
        buf.peek_bytes(3)


def test_peek_ubytes_is_clamped():
    buf = ByteBuffer(b"abc")
    assert buf.peek_ubytes(10) == b"abc"
    assert len(buf) == 3


def test_write_ubyte_at_offset_grows():
    buf = ByteBuffer(b"\x01")
    buf.write_ubyte(9, 3)
    assert bytes(buf) == b"\x01\x00\x00\x09"
    buf.write_ubyte(7, 0)
    assert buf.read_ubytes(4) == b"\x07\x00\x00\x09"


def test_string_round_trip_and_prefix():
    buf = ByteBuffer()
    buf.write_string("héllo")
    assert buf.peek_varint() == (len("héllo".encode()), 1)
    assert buf.read_string() == "héllo"


def test_modified_utf8_null_encoding():
    buf = ByteBuffer()
    buf.write_modified_utf8("a\x00")
    assert bytes(buf) == b"\x00\x03a\xc0\x80"


@pytest.mark.parametrize("text", ["", "hello", "é€", "a\x00b", "emoji \U0001F600"])
def test_modified_utf8_round_trip(text):
    buf = ByteBuffer()
    buf.write_modified_utf8(text)
    assert buf.read_modified_utf8() == text
    assert len(buf) == 0


def test_modified_utf8_rejects_continuation_first_byte():
    with pytest.raises(ValueError):
        ByteBuffer(b"\x00\x01\x80").read_modified_utf8()


def test_modified_utf8_rejects_truncated_group():
    with pytest.raises(ValueError):
        ByteBuffer(b"\x00\x02\xe2\x82").read_modified_utf8()


def test_uuid_round_trip_keeps_byte_order():
    unique_id = uuid.uuid4()
    buf = ByteBuffer()
    buf.write_uuid(unique_id)
    assert bytes(buf) == unique_id.bytes
    assert buf.read_uuid() == unique_id


def test_read_tag_type():
    buf = ByteBuffer(b"\x0a\x0d")
    assert buf.read_tag_type() is TagType.COMPOUND
    with pytest.raises(ValueError):
        buf.read_tag_type()


def test_hex_string_format():
    assert ByteBuffer(b"\x0a\xff").hex_string() == "0A FF "


def test_append_replace_clear_drop():
    buf = ByteBuffer(b"ab")
    buf.append(ByteBuffer(b"cd"))
    assert bytes(buf) == b"abcd"
    buf.drop(1)
    assert bytes(buf) == b"bcd"
    with pytest.raises(BufferUnderflowError):
        buf.drop(4)
    buf.replace(b"xy")
    assert bytes(buf) == b"xy"
    buf.clear()
    assert len(buf) == 0