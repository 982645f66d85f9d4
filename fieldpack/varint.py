"""Variable-length integer encoding used for 32- and 64-bit integer fields.

Unsigned values use 7-bit groups, least significant first, with the high bit
of each byte marking that another byte follows.

Signed values start with a header byte: bit 7 is the sign, bit 6 says that
more bytes follow, and bits 0-5 hold the low six bits of the magnitude.  When
the magnitude does not fit in six bits, the whole magnitude follows as an
unsigned varint.
"""

from __future__ import annotations

_GROUP_BITS = 7
_PAYLOAD = 0x7F
_CONTINUE = 0x80

_SIGN = 0x80
_FIRST_CONTINUE = 0x40
_FIRST_PAYLOAD = 0x3F


def encode_unsigned(value: int) -> bytes:
    """Encode a non-negative integer as 7-bit groups."""
    if value < 0:
        raise ValueError(f"cannot encode negative value {value} as unsigned")
    out = bytearray()
    while value > _PAYLOAD:
        out.append((value & _PAYLOAD) | _CONTINUE)
        value >>= _GROUP_BITS
    out.append(value)
    return bytes(out)


def decode_unsigned(data: bytes, offset: int = 0, width: int = 8) -> tuple[int, int]:
    """Decode an unsigned varint at ``offset`` for an integer of ``width`` bytes.

    Returns the value, truncated to ``width`` bytes, and the offset just past it.
    """
    max_bytes = -(-width * 8 // _GROUP_BITS)
    mask = (1 << (width * 8)) - 1
    result = 0
    for count in range(max_bytes):
        position = offset + count
        if position >= len(data):
            raise ValueError("truncated varint")
        byte = data[position]
        result |= (byte & _PAYLOAD) << (_GROUP_BITS * count)
        if not byte & _CONTINUE:
            return result & mask, position + 1
    raise ValueError(f"varint longer than {max_bytes} bytes")


def encode_signed(value: int) -> bytes:
    """Encode a signed integer with the sign-and-six-bits header byte."""
    magnitude = abs(value)
    first = (magnitude & _FIRST_PAYLOAD) | (_SIGN if value < 0 else 0)
    if magnitude > _FIRST_PAYLOAD:
        return bytes([first | _FIRST_CONTINUE]) + encode_unsigned(magnitude)
    return bytes([first])


def decode_signed(data: bytes, offset: int = 0, width: int = 8) -> tuple[int, int]:
    """Decode a signed varint at ``offset``; returns the value and the next offset."""
    if offset >= len(data):
        raise ValueError("truncated varint")
    first = data[offset]
    magnitude = first & _FIRST_PAYLOAD
    offset += 1
    if first & _FIRST_CONTINUE:
        rest, offset = decode_unsigned(data, offset, width)
        magnitude |= rest
    return (-magnitude if first & _SIGN else magnitude), offset