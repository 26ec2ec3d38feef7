"""Conversion of JSON documents into NBT tags."""

from __future__ import annotations

import json
import math
import os
import struct
from typing import Any

from celerity.nbt.builders import TagCompoundBuilder
from celerity.nbt.tags import (
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
)

_INTEGER_TAGS: tuple[tuple[int, type[Tag]], ...] = (
    (8, TagByte),
    (16, TagShort),
    (32, TagInt),
)

_ARRAY_TAGS: dict[TagType, type[Tag]] = {
    TagType.BYTE: TagByteArray,
    TagType.INT: TagIntArray,
    TagType.LONG: TagLongArray,
}


def _convert_integer(number: int) -> Tag:
    if 1 << 63 <= number < 1 << 64:
        number -= 1 << 64
    elif not -(1 << 63) <= number < 1 << 63:
        raise ValueError(f"Integer {number} is too large to convert to NBT")
    for bits, tag_class in _INTEGER_TAGS:
        if -(1 << (bits - 1)) <= number < 1 << (bits - 1):
            return tag_class(number)
    return TagLong(number)


def _convert_float(number: float) -> Tag:
    if math.isnan(number) or math.isinf(number):
        raise ValueError(f"Can't convert floating point to NBT representation: {number}")
    try:
        single = struct.unpack("<f", struct.pack("<f", number))[0]
    except OverflowError:
        return TagDouble(number)
    return TagFloat(number) if single == number else TagDouble(number)


def _convert_array(values: list[Any]) -> Tag:
    items = [json_to_tag(value) for value in values]
    if not items:
        return TagList(TagType.END)
    first_type = items[0].type
    if any(item.type != first_type for item in items):
        raise ValueError("Cannot convert non-homogenous JSON Array to NBT")
    array_class = _ARRAY_TAGS.get(first_type)
    if array_class is not None:
        return array_class(tuple(item.value for item in items))
    return TagList(first_type, items)


def _convert_object(value: dict[str, Any]) -> TagCompound:
    builder = TagCompoundBuilder()
    for name in sorted(value):
        builder.add(name, json_to_tag(value[name]))
    return builder.build_compound()


def json_to_tag(value: Any) -> Tag:
    """Convert a decoded JSON value into the narrowest fitting NBT tag.

    Integers become the smallest integer tag that holds them, floats a float
    tag when exact and a double otherwise, booleans bytes, homogenous arrays
    of bytes, ints or longs the matching array tag, other arrays lists, and
    objects compounds with their keys in sorted order.
    """
    if value is None:
        raise ValueError("Cannot convert JsonNull to NBT")
    if isinstance(value, bool):
        return TagByte(1 if value else 0)
    if isinstance(value, int):
        return _convert_integer(value)
    if isinstance(value, float):
        return _convert_float(value)
    if isinstance(value, str):
        return TagString(value)
    if isinstance(value, list):
        return _convert_array(value)
    if isinstance(value, dict):
        return _convert_object(value)
    raise ValueError("Unknown JSON type cannot be converted to NBT")


class JsonNBTReader:
    """Loads a JSON object from a file and converts it to a compound tag."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        with open(path, "rb") as stream:
            try:
                document = json.load(stream)
            except (json.JSONDecodeError, UnicodeDecodeError) as err:
                raise ValueError(f"Error parsing JSON file {os.fspath(path)}: {err}") from err
        if not isinstance(document, dict):
            raise ValueError("JSON object expected")
        self._document = document

    def to_nbt(self, name: str | None = None) -> TagCompound:
        """Return the document as a compound tag."""
        builder = TagCompoundBuilder(name)
        for member in sorted(self._document):
            builder.add(member, json_to_tag(self._document[member]))
        return builder.build_compound()