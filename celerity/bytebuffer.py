"""A growable byte buffer with typed reads and writes for the wire format."""

from __future__ import annotations

import struct
import uuid
from collections.abc import Iterable

from celerity.nbt.tags import TagType
from celerity.varint import (
    VarIntTooBigError,
    decode_varint,
    decode_varlong,
    encode_varint,
    encode_varlong,
)

_MAX_VARINT_BYTES = 5
_MAX_MODIFIED_UTF8_LENGTH = 0xFFFF


class BufferUnderflowError(EOFError):
    """Raised when a read or peek asks for more bytes than the buffer holds."""


class ByteBuffer:
    """A FIFO of bytes: writes append at the back, reads consume from the front.

    Multi-byte numbers are little-endian unless ``big_endian`` is set.
    """

    def __init__(self, data: bytes | bytearray | Iterable[int] = b"") -> None:
        self._data = bytearray(data)

    def __len__(self) -> int:
        return len(self._data)

    def __bytes__(self) -> bytes:
        return bytes(self._data)

    def __repr__(self) -> str:
        return f"ByteBuffer({bytes(self._data)!r})"

    # -- internal helpers -------------------------------------------------

    def _require(self, count: int, offset: int = 0) -> None:
        if count < 0 or offset < 0:
            raise ValueError("byte counts and offsets must not be negative")
        if len(self._data) < offset + count:
            raise BufferUnderflowError("Buffer too small")

    def _take(self, count: int) -> bytes:
        self._require(count)
        chunk = bytes(self._data[:count])
        del self._data[:count]
        return chunk

    def _write_struct(self, fmt: str, value: int | float, big_endian: bool) -> None:
        order = ">" if big_endian else "<"
        try:
            self._data += struct.pack(order + fmt, value)
        except (struct.error, OverflowError) as err:
            raise ValueError(f"{value!r} cannot be written as '{fmt}': {err}") from err

    def _read_struct(self, fmt: str, big_endian: bool) -> int | float:
        order = ">" if big_endian else "<"
        return struct.unpack(order + fmt, self._take(struct.calcsize(fmt)))[0]

    # -- booleans and single bytes -----------------------------------------

    def write_bool(self, value: bool) -> None:
        self.write_byte(1 if value else 0)

    def read_bool(self) -> bool:
        return self.read_byte() == 1

    def write_byte(self, value: int) -> None:
        self._write_struct("b", value, False)

    def read_byte(self) -> int:
        return self._read_struct("b", False)

    def peek_byte(self, offset: int = 0) -> int:
        self._require(1, offset)
        return struct.unpack_from("<b", self._data, offset)[0]

    def write_bytes(self, values: Iterable[int]) -> None:
        for value in values:
            self.write_byte(value)

    def read_bytes(self, count: int) -> list[int]:
        return list(struct.unpack(f"<{count}b", self._take(count)))

    def peek_bytes(self, count: int) -> list[int]:
        self._require(count)
        return list(struct.unpack_from(f"<{count}b", self._data, 0))

    def write_ubyte(self, value: int, offset: int | None = None) -> None:
        """Append an unsigned byte, or overwrite the byte at ``offset``.

        Writing past the end grows the buffer, filling the gap with zeros.
        """
        if not 0 <= value <= 0xFF:
            raise ValueError(f"{value} does not fit in an unsigned byte")
        if offset is None:
            self._data.append(value)
            return
        if offset < 0:
            raise ValueError("offset must not be negative")
        if len(self._data) < offset + 1:
            self._data.extend(bytes(offset + 1 - len(self._data)))
        self._data[offset] = value

    def read_ubyte(self) -> int:
        return self._take(1)[0]

    def peek_ubyte(self, offset: int = 0) -> int:
        self._require(1, offset)
        return self._data[offset]

    def write_ubytes(self, values: bytes | bytearray | Iterable[int]) -> None:
        for value in values:
            self.write_ubyte(value)

    def read_ubytes(self, count: int) -> bytes:
        return self._take(count)

    def peek_ubytes(self, count: int) -> bytes:
        """Return up to ``count`` bytes from the front without consuming them."""
        if count < 0:
            raise ValueError("byte counts must not be negative")
        return bytes(self._data[:count])

    # -- fixed-width numbers -----------------------------------------------

    def write_short(self, value: int, big_endian: bool = False) -> None:
        self._write_struct("h", value, big_endian)

    def read_short(self, big_endian: bool = False) -> int:
        return self._read_struct("h", big_endian)

    def write_ushort(self, value: int, big_endian: bool = False) -> None:
        self._write_struct("H", value, big_endian)

    def read_ushort(self, big_endian: bool = False) -> int:
        return self._read_struct("H", big_endian)

    def write_int(self, value: int, big_endian: bool = False) -> None:
        self._write_struct("i", value, big_endian)

    def read_int(self, big_endian: bool = False) -> int:
        return self._read_struct("i", big_endian)

    def write_uint(self, value: int, big_endian: bool = False) -> None:
        self._write_struct("I", value, big_endian)

    def read_uint(self, big_endian: bool = False) -> int:
        return self._read_struct("I", big_endian)

    def write_long(self, value: int, big_endian: bool = False) -> None:
        self._write_struct("q", value, big_endian)

    def read_long(self, big_endian: bool = False) -> int:
        return self._read_struct("q", big_endian)

    def write_ulong(self, value: int, big_endian: bool = False) -> None:
        self._write_struct("Q", value, big_endian)

    def read_ulong(self, big_endian: bool = False) -> int:
        return self._read_struct("Q", big_endian)

    def write_float(self, value: float, big_endian: bool = False) -> None:
        self._write_struct("f", value, big_endian)

    def read_float(self, big_endian: bool = False) -> float:
        return self._read_struct("f", big_endian)

    def write_double(self, value: float, big_endian: bool = False) -> None:
        self._write_struct("d", value, big_endian)

    def read_double(self, big_endian: bool = False) -> float:
        return self._read_struct("d", big_endian)

    # -- strings -----------------------------------------------------------

    def write_string(self, text: str) -> None:
        """Write a VarInt byte length followed by the UTF-8 bytes of ``text``."""
        encoded = text.encode("utf-8")
        self.write_varint(len(encoded))
        self._data += encoded

    def read_string(self) -> str:
        length = self.read_varint()
        if length < 0:
            raise ValueError(f"negative string length {length}")
        return self._take(length).decode("utf-8")

    def write_modified_utf8(self, text: str) -> None:
        """Write ``text`` as a big-endian u16 byte length and modified UTF-8."""
        units = text.encode("utf-16-be", "surrogatepass")
        encoded = bytearray()
        for (unit,) in struct.iter_unpack(">H", units):
            if 0x0001 <= unit <= 0x007F:
                encoded.append(unit)
            elif unit <= 0x07FF:
                encoded += bytes((0xC0 | (unit >> 6), 0x80 | (unit & 0x3F)))
            else:
                encoded += bytes(
                    (
                        0xE0 | (unit >> 12),
                        0x80 | ((unit >> 6) & 0x3F),
                        0x80 | (unit & 0x3F),
                    )
                )
        if len(encoded) > _MAX_MODIFIED_UTF8_LENGTH:
            raise ValueError("modified UTF-8 string is longer than 65535 bytes")
        self.write_ushort(len(encoded), big_endian=True)
        self._data += encoded

    def read_modified_utf8(self) -> str:
        length = self.read_ushort(big_endian=True)
        data = iter(self._take(length))
        units: list[int] = []
        for first in data:
            if first >> 4 == 0b1111 or first >> 6 == 0b10:
                raise ValueError(
                    "First byte in modified UTF-8 group did not match expected pattern."
                )
            if first >> 4 == 0b1110:
                second = next(data, None)
                if second is None:
                    raise ValueError(
                        "Expected 2nd byte in 3-byte modified UTF-8 group, found only 1."
                    )
                third = next(data, None)
                if third is None:
                    raise ValueError(
                        "Expected 3rd byte in 3-byte modified UTF-8 group, found only 2."
                    )
                if second >> 6 != 0b10 or third >> 6 != 0b10:
                    raise ValueError(
                        "2nd or 3rd byte in 3-byte modified UTF-8 group did not match "
                        "expected pattern."
                    )
                units.append(((first & 0x0F) << 12) | ((second & 0x3F) << 6) | (third & 0x3F))
            elif first >> 5 == 0b110:
                second = next(data, None)
                if second is None:
                    raise ValueError(
                        "Expected 2nd byte in 2-byte modified UTF-8 group, found only 1."
                    )
                if second >> 6 != 0b10:
                    raise ValueError(
                        "2nd byte in 2-byte modified UTF-8 group did not match expected "
                        "pattern."
                    )
                units.append(((first & 0x1F) << 6) | (second & 0x3F))
            else:
                units.append(first)
        raw = struct.pack(f">{len(units)}H", *units)
        return raw.decode("utf-16-be", "surrogatepass")

    # -- variable-length integers ------------------------------------------

    def write_varint(self, value: int) -> None:
        self._data += encode_varint(value)

    def read_varint(self) -> int:
        return decode_varint(self.read_ubyte)

    def peek_varint(self) -> tuple[int, int] | None:
        """Return ``(value, encoded_length)`` of the leading VarInt, or None.

        The buffer is left untouched. None means no complete VarInt is present.
        """
        scratch = ByteBuffer(self.peek_ubytes(_MAX_VARINT_BYTES))
        before = len(scratch)
        try:
            value = scratch.read_varint()
        except (BufferUnderflowError, VarIntTooBigError):
            return None
        return value, before - len(scratch)

    def write_varlong(self, value: int) -> None:
        self._data += encode_varlong(value)

    def read_varlong(self) -> int:
        return decode_varlong(self.read_ubyte)

    # -- composite values --------------------------------------------------

    def read_tag_type(self) -> TagType:
        return TagType.from_id(self.read_ubyte())

    def write_uuid(self, unique_id: uuid.UUID) -> None:
        self._data += unique_id.bytes

    def read_uuid(self) -> uuid.UUID:
        return uuid.UUID(bytes=self._take(16))

    # -- whole-buffer operations -------------------------------------------

    def append(self, other: ByteBuffer | bytes | bytearray) -> None:
        """Append the contents of another buffer or byte string."""
        self._data += bytes(other)

    def replace(self, data: bytes | bytearray | Iterable[int]) -> None:
        """Discard the current contents and hold ``data`` instead."""
        self._data = bytearray(data)

    def clear(self) -> None:
        self._data.clear()

    def hex_string(self) -> str:
        """Upper-case hex bytes, each followed by a space."""
        return "".join(f"{byte:02X} " for byte in self._data)

    def drop(self, count: int) -> None:
        """Discard ``count`` bytes from the front."""
        self._require(count)
        del self._data[:count]