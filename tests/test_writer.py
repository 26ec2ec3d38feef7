import pytest

from celerity.bytebuffer import ByteBuffer
from celerity.nbt.tags import (
    NamedTag,
    TagByte,
    TagCompound,
    TagEnd,
    TagInt,
    TagList,
    TagLongArray,
    TagString,
    TagType,
)
from celerity.nbt.writer import NBTWriter

HELLO_WORLD = b"\x0a\x00\x0bhello world\x08\x00\x04name\x00\x09Bananrama\x00"


def _write(tag, name=None) -> bytes:
    buffer = ByteBuffer()
    NBTWriter(buffer).write_tag(tag, name)
    return bytes(buffer)


def test_writes_hello_world_example():
    compound = TagCompound()
    compound.add("name", TagString("Bananrama"))
    buffer = ByteBuffer()
    NBTWriter(buffer).write_named_tag(NamedTag("hello world", compound))
    assert bytes(buffer) == HELLO_WORLD


def test_nameless_tag_has_no_name_field():
    assert _write(TagByte(5)) == b"\x01\x05"


def test_named_tag_carries_name():
    assert _write(TagByte(5), "a") == b"\x01\x00\x01a\x05"


def test_list_writes_child_type_and_big_endian_length():
    data = _write(TagList(TagType.INT, [TagInt(1)]))
    assert data == b"\x09\x03\x00\x00\x00\x01\x00\x00\x00\x01"


def test_long_array_layout():
    data = _write(TagLongArray((1,)))
    assert data[0] == TagType.LONG_ARRAY
    assert data[1:5] == (1).to_bytes(4, "big")
    assert data[5:] == (1).to_bytes(8, "big")


def test_empty_compound_ends_with_end_byte():
    assert _write(TagCompound()) == b"\x0a\x00"


def test_top_level_end_is_rejected():
    with pytest.raises(ValueError):
        _write(TagEnd())


def test_named_tag_without_tag_writes_nothing():
    buffer = ByteBuffer()
    NBTWriter(buffer).write_named_tag(NamedTag("missing", None))
    assert len(buffer) == 0


def test_writes_append_to_existing_contents():
    buffer = ByteBuffer(b"\xff")
    NBTWriter(buffer).write_tag(TagByte(1))
    assert bytes(buffer) == b"\xff\x01\x01"