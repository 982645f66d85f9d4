"""Scalar values on the wire: options, byte order and the byte reader."""

from __future__ import annotations

import struct
from enum import Enum, IntFlag

from fieldpack.varint import decode_signed, decode_unsigned, encode_signed, encode_unsigned


class Options(IntFlag):
    """Flags that change how values are written and read."""

    NONE = 0
    BIG_ENDIAN = 1
    FIXED_LENGTH_ENCODING = 2
    WITH_VERSION = 4
    WITH_CHECKSUM = 8


class ByteOrder(Enum):
    LITTLE_ENDIAN = "<"
    BIG_ENDIAN = ">"


class ErrorKind(Enum):
    """Why decoding failed."""

    MESSAGE_SIZE = "message_size"
    VALUE_TOO_LARGE = "value_too_large"
    ILLEGAL_BYTE_SEQUENCE = "illegal_byte_sequence"
    INVALID_ARGUMENT = "invalid_argument"
    BAD_MESSAGE = "bad_message"


class DecodeError(ValueError):
    """Raised when bytes cannot be decoded; ``kind`` tells why."""

    def __init__(self, kind: ErrorKind, message: str | None = None) -> None:
        super().__init__(message or kind.value.replace("_", " "))
        self.kind = kind


class ScalarKind(Enum):
    """Fixed-size scalar types: struct code and whether varints may be used."""

    BOOL = ("bool", "?", False)
    CHAR = ("char", "B", False)
    CHAR16 = ("char16", "H", False)
    CHAR32 = ("char32", "I", False)
    WCHAR = ("wchar", "I", False)
    UINT8 = ("uint8", "B", False)
    UINT16 = ("uint16", "H", False)
    UINT32 = ("uint32", "I", True)
    UINT64 = ("uint64", "Q", True)
    SIZE = ("size", "Q", True)
    INT8 = ("int8", "b", False)
    INT16 = ("int16", "h", False)
    INT32 = ("int32", "i", True)
    INT64 = ("int64", "q", True)
    FLOAT32 = ("float32", "f", False)
    FLOAT64 = ("float64", "d", False)

    def __init__(self, label: str, code: str, variable_length: bool) -> None:
        self.label = label
        self.code = code
        self.variable_length = variable_length

    @property
    def size(self) -> int:
        return struct.calcsize(self.code)

    @property
    def signed(self) -> bool:
        return self.code in "bhiq"

    @property
    def is_float(self) -> bool:
        return self.code in "fd"

    @property
    def is_character(self) -> bool:
        return self in _CHARACTER_KINDS

    @property
    def bounds(self) -> tuple[int, int]:
        bits = self.size * 8
        if self.signed:
            return -(1 << (bits - 1)), (1 << (bits - 1)) - 1
        return 0, (1 << bits) - 1

    @property
    def default(self) -> bool | str | int | float:
        if self is ScalarKind.BOOL:
            return False
        if self.is_character:
            return "\x00"
        if self.is_float:
            return 0.0
        return 0


_CHARACTER_KINDS = frozenset(
    {ScalarKind.CHAR, ScalarKind.CHAR16, ScalarKind.CHAR32, ScalarKind.WCHAR}
)


def byte_order(options: Options = Options.NONE) -> ByteOrder:
    """Byte order requested by ``options``; little endian unless asked otherwise."""
    if options & Options.BIG_ENDIAN:
        return ByteOrder.BIG_ENDIAN
    return ByteOrder.LITTLE_ENDIAN


def uses_fixed_length(options: Options = Options.NONE) -> bool:
    """Whether 32- and 64-bit integers are written at full width."""
    return bool(options & (Options.BIG_ENDIAN | Options.FIXED_LENGTH_ENCODING))


def _wrap(value: int, kind: ScalarKind) -> int:
    bits = kind.size * 8
    full = 1 << bits
    if kind.signed:
        half = full >> 1
        return ((value + half) % full) - half
    return value % full


def _to_integer(value: int | str, kind: ScalarKind) -> int:
    if kind.is_character and isinstance(value, str):
        if len(value) != 1:
            raise ValueError(f"expected a single character for {kind.label}, got {value!r}")
        value = ord(value)
    number = int(value)
    if kind is ScalarKind.CHAR:
        if not -128 <= number <= 255:
            raise OverflowError(f"{number} out of range for {kind.label}")
        return number & 0xFF
    low, high = kind.bounds
    if not low <= number <= high:
        raise OverflowError(f"{number} out of range for {kind.label}")
    return number


def write_scalar(
    out: bytearray,
    value: bool | int | float | str,
    kind: ScalarKind,
    options: Options = Options.NONE,
) -> int:
    """Append ``value`` encoded as ``kind`` to ``out``; return the bytes written."""
    order = byte_order(options).value
    if kind is ScalarKind.BOOL:
        packed = b"\x01" if value else b"\x00"
    elif kind.is_float:
        packed = struct.pack(order + kind.code, float(value))
    else:
        number = _to_integer(value, kind)
        if kind.variable_length and not uses_fixed_length(options):
            packed = encode_signed(number) if kind.signed else encode_unsigned(number)
        else:
            packed = struct.pack(order + kind.code, number)
    out.extend(packed)
    return len(packed)


class Reader:
    """Reads values from a byte buffer, keeping the current position."""

    def __init__(self, data: bytes, options: Options = Options.NONE) -> None:
        self.data = bytes(data)
        self.options = options
        self.position = 0

    def at_end(self) -> bool:
        return self.position >= len(self.data)

    def remaining(self) -> int:
        return max(len(self.data) - self.position, 0)

    def peek(self) -> int:
        """The next byte, without moving past it."""
        if self.at_end():
            raise DecodeError(ErrorKind.MESSAGE_SIZE, "no bytes left to read")
        return self.data[self.position]

    def take(self, count: int) -> bytes:
        """Return the next ``count`` bytes and move past them."""
        if count < 0:
            raise ValueError("count must not be negative")
        if count > self.remaining():
            raise DecodeError(
                ErrorKind.MESSAGE_SIZE,
                f"needed {count} bytes, only {self.remaining()} left",
            )
        chunk = self.data[self.position : self.position + count]
        self.position += count
        return chunk

    def read_scalar(self, kind: ScalarKind) -> bool | int | float | str:
        """Read one scalar; at the end of input the type's default is returned."""
        if self.at_end():
            return kind.default
        order = byte_order(self.options).value
        if kind is ScalarKind.BOOL:
            return self.take(1)[0] != 0
        if kind.is_float:
            return struct.unpack(order + kind.code, self.take(kind.size))[0]
        if kind.variable_length and not uses_fixed_length(self.options):
            decode = decode_signed if kind.signed else decode_unsigned
            try:
                number, self.position = decode(self.data, self.position, kind.size)
            except ValueError as exc:
                raise DecodeError(ErrorKind.MESSAGE_SIZE, str(exc)) from None
            number = _wrap(number, kind)
        else:
            number = struct.unpack(order + kind.code, self.take(kind.size))[0]
        if kind.is_character:
            try:
                return chr(number)
            except ValueError:
                raise DecodeError(
                    ErrorKind.ILLEGAL_BYTE_SEQUENCE, f"{number} is not a character"
                ) from None
        return number