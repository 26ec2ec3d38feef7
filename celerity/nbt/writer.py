"""Encoding of NBT tags into a byte buffer."""

from __future__ import annotations

import logging

from celerity.bytebuffer import ByteBuffer
from celerity.nbt.tags import (
    NamedTag,
    Tag,
    TagByte,
    TagByteArray,
    TagCompound,
    TagDouble,
    TagFloat,
    TagInt,
    TagIntArray,
    TagList,
    TagLong,
    TagLongArray,
    TagShort,
    TagString,
    TagType,
    downcast,
)

_log = logging.getLogger(__name__)


class NBTWriter:
    """Writes NBT tags, big-endian, to the back of a :class:`ByteBuffer`."""

    def __init__(self, buffer: ByteBuffer) -> None:
        self._buffer = buffer

    def write_named_tag(self, named_tag: NamedTag) -> None:
        """Write a named tag; a named tag with no inner tag is skipped."""
        if named_tag.tag is None:
            _log.warning("Tried to write named tag with null inner tag")
            return
        self.write_tag(named_tag.tag, named_tag.name)

    def write_tag(self, tag: Tag, name: str | None = None) -> None:
        """Write a type id, the name if one is given, then the payload."""
        if tag.type == TagType.END:
            raise ValueError("Cannot write a top-level Tag_END")
        self._buffer.write_ubyte(int(tag.type))
        if name is not None:
            self._buffer.write_modified_utf8(name)
        self._write_payload(tag)

    def _write_payload(self, tag: Tag) -> None:
        buffer = self._buffer
        match tag.type:
            case TagType.END:
                buffer.write_ubyte(0)
            case TagType.BYTE:
                buffer.write_byte(downcast(tag, TagByte).value)
            case TagType.SHORT:
                buffer.write_short(downcast(tag, TagShort).value, big_endian=True)
            case TagType.INT:
                buffer.write_int(downcast(tag, TagInt).value, big_endian=True)
            case TagType.LONG:
                buffer.write_long(downcast(tag, TagLong).value, big_endian=True)
            case TagType.FLOAT:
                buffer.write_float(downcast(tag, TagFloat).value, big_endian=True)
            case TagType.DOUBLE:
                buffer.write_double(downcast(tag, TagDouble).value, big_endian=True)
            case TagType.BYTE_ARRAY:
                values = downcast(tag, TagByteArray).values
                buffer.write_int(len(values), big_endian=True)
                buffer.write_bytes(values)
            case TagType.STRING:
                buffer.write_modified_utf8(downcast(tag, TagString).value)
            case TagType.LIST:
                tag_list = downcast(tag, TagList)
                buffer.write_ubyte(int(tag_list.child_type))
                buffer.write_int(len(tag_list.items), big_endian=True)
                for item in tag_list.items:
                    if item is not None:
                        self._write_payload(item)
            case TagType.COMPOUND:
                for named_tag in downcast(tag, TagCompound).tags:
                    self.write_named_tag(named_tag)
                buffer.write_ubyte(0)
            case TagType.INT_ARRAY:
                values = downcast(tag, TagIntArray).values
                buffer.write_int(len(values), big_endian=True)
                for value in values:
                    buffer.write_int(value, big_endian=True)
            case TagType.LONG_ARRAY:
                values = downcast(tag, TagLongArray).values
                buffer.write_int(len(values), big_endian=True)
                for value in values:
                    buffer.write_long(value, big_endian=True)
            case _:
                raise ValueError("Attempted to write unknown tag type")