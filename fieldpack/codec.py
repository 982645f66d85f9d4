"""Top-level encoding of whole values, with optional version and checksum."""

from __future__ import annotations

import struct
import zlib
from typing import Any, BinaryIO

from fieldpack.primitives import DecodeError, ErrorKind, Options, Reader, byte_order
from fieldpack.types import Spec

_WORD = 4


def type_info(spec: Spec) -> bytes:
    """The type identifiers describing the layout of ``spec``."""
    return bytes(spec.type_ids({}))


def _version(spec: Spec) -> int:
    return zlib.crc32(type_info(spec))


def _pack_word(value: int, options: Options) -> bytes:
    return struct.pack(byte_order(options).value + "I", value)


def _unpack_word(data: bytes, options: Options) -> int:
    return struct.unpack(byte_order(options).value + "I", data)[0]


def serialize(value: Any, spec: Spec, options: Options = Options.NONE) -> bytes:
    """Encode ``value`` as described by ``spec``."""
    out = bytearray()
    if options & Options.WITH_VERSION:
        out.extend(_pack_word(_version(spec), options))
    spec.encode(value, out, options)
    if options & Options.WITH_CHECKSUM:
        out.extend(_pack_word(zlib.crc32(out), options))
    return bytes(out)


def deserialize(data: bytes, spec: Spec, options: Options = Options.NONE) -> Any:
    """Decode a value described by ``spec``; raises ``DecodeError`` on bad input."""
    payload = bytes(data)
    if options & Options.WITH_CHECKSUM:
        if len(payload) < _WORD:
            raise DecodeError(ErrorKind.INVALID_ARGUMENT, "too few bytes for a checksum")
        payload, trailer = payload[:-_WORD], payload[-_WORD:]
        if zlib.crc32(payload) != _unpack_word(trailer, options):
            raise DecodeError(ErrorKind.BAD_MESSAGE, "checksum mismatch")
    if options & Options.WITH_VERSION:
        if len(payload) < _WORD:
            raise DecodeError(ErrorKind.INVALID_ARGUMENT, "too few bytes for a version")
        if _unpack_word(payload[:_WORD], options) != _version(spec):
            raise DecodeError(ErrorKind.INVALID_ARGUMENT, "type layout does not match")
        payload = payload[_WORD:]
    if not payload:
        raise DecodeError(ErrorKind.MESSAGE_SIZE, "no bytes to decode")
    return spec.decode(Reader(payload, options))


def dump(value: Any, spec: Spec, fp: BinaryIO, options: Options = Options.NONE) -> int:
    """Write the encoding of ``value`` to a binary file; return the bytes written."""
    data = serialize(value, spec, options)
    fp.write(data)
    return len(data)


def load(fp: BinaryIO, spec: Spec, options: Options = Options.NONE) -> Any:
    """Read a whole binary file and decode one value from it."""
    return deserialize(fp.read(), spec, options)