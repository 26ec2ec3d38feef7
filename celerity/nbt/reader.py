"""Decoding of NBT tags from a byte buffer."""

from __future__ import annotations

from celerity.bytebuffer import ByteBuffer
from celerity.nbt.tags import (
    NamedTag,
    Tag,
    TagByte,
    TagByteArray,
    TagCompound,
    TagDouble,
    TagEnd,
    TagFloat,
    TagInt,
    TagIntArray,
    TagList,
    TagLong,
    TagLongArray,
    TagShort,
    TagString,
    TagType,
)


class NBTReader:
    """Reads NBT tags, big-endian, from the front of a :class:`ByteBuffer`."""

    def __init__(self, buffer: ByteBuffer) -> None:
        self._buffer = buffer

    def read_tag(self) -> NamedTag:
        """Read a type id, a name (unless the tag is an end tag) and a payload."""
        tag_type = self._buffer.read_tag_type()
        name = "" if tag_type == TagType.END else self._buffer.read_modified_utf8()
        return NamedTag(name, self._read_payload(tag_type))

    def read_network_tag(self) -> Tag:
        """Read a nameless tag: a type id followed directly by its payload."""
        return self._read_payload(self._buffer.read_tag_type())

    def _read_array_length(self) -> int:
        length = self._buffer.read_int(big_endian=True)
        if length < 0:
            raise ValueError(f"negative NBT array length {length}")
        return length

    def _read_payload(self, tag_type: TagType) -> Tag:
        buffer = self._buffer
        match tag_type:
            case TagType.END:
                return TagEnd()
            case TagType.BYTE:
                return TagByte(buffer.read_byte())
            case TagType.SHORT:
                return TagShort(buffer.read_short(big_endian=True))
            case TagType.INT:
                return TagInt(buffer.read_int(big_endian=True))
            case TagType.LONG:
                return TagLong(buffer.read_long(big_endian=True))
            case TagType.FLOAT:
                return TagFloat(buffer.read_float(big_endian=True))
            case TagType.DOUBLE:
                return TagDouble(buffer.read_double(big_endian=True))
            case TagType.BYTE_ARRAY:
                return TagByteArray(tuple(buffer.read_bytes(self._read_array_length())))
            case TagType.STRING:
                return TagString(buffer.read_modified_utf8())
            case TagType.LIST:
                child_type = buffer.read_tag_type()
                length = buffer.read_int(big_endian=True)
                if child_type == TagType.END and length > 0:
                    raise ValueError("TAG_List with length > 0 may not contain TAG_End")
                tag_list = TagList(child_type)
                for _ in range(length):
                    tag_list.add(self._read_payload(child_type))
                return tag_list
            case TagType.COMPOUND:
                compound = TagCompound()
                while True:
                    named_tag = self.read_tag()
                    if named_tag.tag.type == TagType.END:
                        return compound
                    compound.add_named(named_tag)
            case TagType.INT_ARRAY:
                length = self._read_array_length()
                return TagIntArray(tuple(buffer.read_int(big_endian=True) for _ in range(length)))
            case TagType.LONG_ARRAY:
                length = self._read_array_length()
                return TagLongArray(tuple(buffer.read_long(big_endian=True) for _ in range(length)))
        raise ValueError("Requested to read unknown NBT tag")