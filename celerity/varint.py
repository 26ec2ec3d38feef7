"""Variable-length integer encoding used by the network protocol."""

from collections.abc import Callable

SEGMENT_BITS = 0x7F
CONTINUE_BIT = 0x80

VARINT_BITS = 32
VARLONG_BITS = 64


class VarIntTooBigError(ValueError):
    """Raised when an encoded variable-length integer runs past its maximum size."""


def _check_signed(value: int, bits: int) -> None:
    limit = 1 << (bits - 1)
    if not -limit <= value < limit:
        raise ValueError(f"{value} does not fit in a signed {bits}-bit integer")


def _encode(value: int, bits: int) -> bytes:
    _check_signed(value, bits)
    value &= (1 << bits) - 1
    encoded = bytearray()
    while True:
        segment = value & SEGMENT_BITS
        value >>= 7
        if value == 0:
            encoded.append(segment)
            return bytes(encoded)
        encoded.append(segment | CONTINUE_BIT)


def _decode(read_byte: Callable[[], int], bits: int, kind: str) -> int:
    value = 0
    position = 0
    while True:
        byte = read_byte() & 0xFF
        value |= (byte & SEGMENT_BITS) << position
        if not byte & CONTINUE_BIT:
            break
        position += 7
        if position >= bits:
            raise VarIntTooBigError(f"{kind} is too big")
    value &= (1 << bits) - 1
    if value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def encode_varint(value: int) -> bytes:
    """Encode a signed 32-bit integer as a VarInt."""
    return _encode(value, VARINT_BITS)


def decode_varint(read_byte: Callable[[], int]) -> int:
    """Decode a VarInt, pulling one byte at a time from ``read_byte``."""
    return _decode(read_byte, VARINT_BITS, "VarInt")


def encode_varlong(value: int) -> bytes:
    """Encode a signed 64-bit integer as a VarLong."""
    return _encode(value, VARLONG_BITS)


def decode_varlong(read_byte: Callable[[], int]) -> int:
    """Decode a VarLong, pulling one byte at a time from ``read_byte``."""
    return _decode(read_byte, VARLONG_BITS, "VarLong")


def encoding_length(value: int) -> int:
    """Return how many bytes the variable-length encoding of ``value`` takes."""
    _check_signed(value, VARLONG_BITS)
    value &= (1 << VARLONG_BITS) - 1
    length = 1
    while value & ~SEGMENT_BITS:
        value >>= 7
        length += 1
    return length