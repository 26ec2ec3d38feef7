"""NBT tag types and the tag values built from them."""

from __future__ import annotations

import struct
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar, TypeVar


class TagType(IntEnum):
    """The thirteen NBT tag types, valued by their wire id."""

    END = 0
    BYTE = 1
    SHORT = 2
    INT = 3
    LONG = 4
    FLOAT = 5
    DOUBLE = 6
    BYTE_ARRAY = 7
    STRING = 8
    LIST = 9
    COMPOUND = 10
    INT_ARRAY = 11
    LONG_ARRAY = 12

    @classmethod
    def from_id(cls, type_id: int) -> TagType:
        """Return the tag type with the given wire id."""
        if not 0 <= type_id <= 12:
            raise ValueError("Tried to get Tag Type with Tag Type ID > 12.")
        return cls(type_id)

    @property
    def type_name(self) -> str:
        """The conventional name, such as ``TAG_Compound``."""
        return _TYPE_NAMES[self]


_TYPE_NAMES = {
    TagType.END: "TAG_End",
    TagType.BYTE: "TAG_Byte",
    TagType.SHORT: "TAG_Short",
    TagType.INT: "TAG_Int",
    TagType.LONG: "TAG_Long",
    TagType.FLOAT: "TAG_Float",
    TagType.DOUBLE: "TAG_Double",
    TagType.BYTE_ARRAY: "TAG_ByteArray",
    TagType.STRING: "TAG_String",
    TagType.LIST: "TAG_List",
    TagType.COMPOUND: "TAG_Compound",
    TagType.INT_ARRAY: "TAG_IntArray",
    TagType.LONG_ARRAY: "TAG_LongArray",
}


def _require_signed(value: int, bits: int, type_name: str) -> int:
    limit = 1 << (bits - 1)
    if not -limit <= value < limit:
        raise ValueError(f"{type_name} value {value} is out of range")
    return value


class Tag:
    """Base of every NBT tag."""

    tag_type: ClassVar[TagType]

    @property
    def type(self) -> TagType:
        return self.tag_type


@dataclass(frozen=True)
class TagEnd(Tag):
    """Marks the end of a compound."""

    tag_type = TagType.END


@dataclass(frozen=True)
class _IntegerTag(Tag):
    value: int
    bits: ClassVar[int] = 64

    def __post_init__(self) -> None:
        _require_signed(self.value, self.bits, self.tag_type.type_name)


@dataclass(frozen=True)
class TagByte(_IntegerTag):
    tag_type = TagType.BYTE
    bits = 8


@dataclass(frozen=True)
class TagShort(_IntegerTag):
    tag_type = TagType.SHORT
    bits = 16


@dataclass(frozen=True)
class TagInt(_IntegerTag):
    tag_type = TagType.INT
    bits = 32


@dataclass(frozen=True)
class TagLong(_IntegerTag):
    tag_type = TagType.LONG
    bits = 64


@dataclass(frozen=True)
class TagFloat(Tag):
    """A single-precision float; the value is rounded to 32 bits."""

    value: float
    tag_type = TagType.FLOAT

    def __post_init__(self) -> None:
        try:
            rounded = struct.unpack("<f", struct.pack("<f", float(self.value)))[0]
        except OverflowError as err:
            raise ValueError(f"{self.value} does not fit in a 32-bit float") from err
        object.__setattr__(self, "value", rounded)


@dataclass(frozen=True)
class TagDouble(Tag):
    value: float
    tag_type = TagType.DOUBLE

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", float(self.value))


@dataclass(frozen=True)
class TagString(Tag):
    value: str
    tag_type = TagType.STRING


@dataclass(frozen=True)
class _ArrayTag(Tag):
    values: tuple[int, ...] = ()
    bits: ClassVar[int] = 64

    def __post_init__(self) -> None:
        values = tuple(self.values)
        for value in values:
            _require_signed(value, self.bits, self.tag_type.type_name)
        object.__setattr__(self, "values", values)

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[int]:
        return iter(self.values)


@dataclass(frozen=True)
class TagByteArray(_ArrayTag):
    tag_type = TagType.BYTE_ARRAY
    bits = 8


@dataclass(frozen=True)
class TagIntArray(_ArrayTag):
    tag_type = TagType.INT_ARRAY
    bits = 32


@dataclass(frozen=True)
class TagLongArray(_ArrayTag):
    tag_type = TagType.LONG_ARRAY
    bits = 64


@dataclass
class TagList(Tag):
    """A list of tags that all share ``child_type``."""

    child_type: TagType
    items: list[Tag] = field(default_factory=list)
    tag_type = TagType.LIST

    def __post_init__(self) -> None:
        self.child_type = TagType(self.child_type)
        self.items = list(self.items)
        for item in self.items:
            if item.type != self.child_type:
                raise ValueError(
                    "Cannot build a TagList with non-homogenous inner list of Tags "
                    f"({self.child_type.type_name} != {item.type.type_name})"
                )

    def add(self, tag: Tag) -> None:
        """Append a tag of the list's child type."""
        if tag.type != self.child_type:
            raise ValueError(
                f"Cannot add {tag.type.type_name} to TagList of inner type "
                f"{self.child_type.type_name}"
            )
        self.items.append(tag)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Tag]:
        return iter(self.items)


@dataclass
class NamedTag:
    """A tag together with its name."""

    name: str
    tag: Tag


@dataclass
class TagCompound(Tag):
    """An ordered collection of named tags."""

    tags: list[NamedTag] = field(default_factory=list)
    tag_type = TagType.COMPOUND

    def __post_init__(self) -> None:
        self.tags = list(self.tags)

    def add(self, name: str, value: Tag) -> None:
        """Append ``value`` under ``name``."""
        self.tags.append(NamedTag(name, value))

    def add_named(self, named_tag: NamedTag) -> None:
        """Append an already named tag."""
        self.tags.append(named_tag)

    def __len__(self) -> int:
        return len(self.tags)

    def __iter__(self) -> Iterator[NamedTag]:
        return iter(self.tags)


TagT = TypeVar("TagT", bound=Tag)


def downcast(tag: Tag | None, tag_class: type[TagT]) -> TagT:
    """Return ``tag`` as ``tag_class``, raising TypeError if it is not one."""
    if not isinstance(tag, tag_class):
        raise TypeError(
            "Attempted to downcast tag, but did not get expected type. Malformed NBT?"
        )
    return tag


def _all_tag_classes() -> Iterable[type[Tag]]:
    return (
        TagEnd, TagByte, TagShort, TagInt, TagLong, TagFloat, TagDouble,
        TagByteArray, TagString, TagList, TagCompound, TagIntArray, TagLongArray,
    )