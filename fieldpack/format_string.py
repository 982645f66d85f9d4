"""Serialize loosely typed values from a compact format string.

Each character of the format describes one argument:

``?`` bool, ``c`` char, ``b``/``B`` 8-bit, ``h``/``H`` 16-bit, ``i``/``I``
32-bit, ``q``/``Q`` 64-bit integers (lower case signed), ``f`` float,
``d`` double, ``N`` size, ``s`` string.

Containers nest:

``[t]`` is a length-prefixed vector of ``t``.
``[Nt]`` is an array of exactly ``N`` values of ``t``, with no length prefix.
``{k:v}`` is a dictionary and ``{t}`` a set.
``(tu...)`` is a tuple of the listed types.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from functools import lru_cache
from typing import Any

from fieldpack.composite import TupleSpec
from fieldpack.primitives import ScalarKind
from fieldpack.types import Array, Scalar, Spec, String, UnorderedMap, UnorderedSet, Vector

_SCALARS = {
    "?": ScalarKind.BOOL,
    "c": ScalarKind.CHAR,
    "b": ScalarKind.INT8,
    "B": ScalarKind.UINT8,
    "h": ScalarKind.INT16,
    "H": ScalarKind.UINT16,
    "i": ScalarKind.INT32,
    "I": ScalarKind.UINT32,
    "q": ScalarKind.INT64,
    "Q": ScalarKind.UINT64,
    "f": ScalarKind.FLOAT32,
    "d": ScalarKind.FLOAT64,
    "N": ScalarKind.SIZE,
}

_CLOSERS = {"[": "]", "{": "}", "(": ")"}

_LEADING_DIGITS = re.compile(r"[0-9]*")


def _enclosed(fmt: str, start: int) -> tuple[str, int]:
    """Return the text inside the group opened at ``start`` and the position after it."""
    opener = fmt[start]
    closer = _CLOSERS[opener]
    depth = 0
    for pos, char in enumerate(fmt[start:], start):
        if char == opener:
            depth += 1
        elif char == closer:
            depth -= 1
            if depth == 0:
                inner = fmt[start + 1 : pos]
                if not inner:
                    raise ValueError(f"Expected type, instead got {closer!r}")
                return inner, pos + 1
    raise ValueError(f"unbalanced {opener!r} in format {fmt!r}")


def _single(fmt: str) -> Spec:
    specs = _parse(fmt)
    if len(specs) != 1:
        raise ValueError(f"expected exactly one type, got {fmt!r}")
    return specs[0]


def _parse_brackets(inner: str) -> Spec:
    digits = _LEADING_DIGITS.match(inner).group()
    if not digits:
        return Vector(_single(inner))
    rest = inner[len(digits) :]
    if not rest:
        raise ValueError("Expected type, instead got ']'")
    return Array(_single(rest), int(digits))


def _parse_braces(inner: str) -> Spec:
    colon = inner.find(":")
    curly = inner.find("{")
    if colon != -1 and (curly == -1 or colon < curly):
        return UnorderedMap(_single(inner[:colon]), _single(inner[colon + 1 :]))
    return UnorderedSet(_single(inner))


def _parse_one(fmt: str, pos: int) -> tuple[Spec, int]:
    char = fmt[pos]
    if char in _SCALARS:
        return Scalar(_SCALARS[char]), pos + 1
    if char == "s":
        return String(), pos + 1
    if char in _CLOSERS:
        inner, end = _enclosed(fmt, pos)
        if char == "[":
            return _parse_brackets(inner), end
        if char == "{":
            return _parse_braces(inner), end
        return TupleSpec(*_parse(inner)), end
    raise ValueError(f"unknown format character {char!r} at position {pos}")


@lru_cache(maxsize=256)
def _parse(fmt: str) -> tuple[Spec, ...]:
    specs: list[Spec] = []
    pos = 0
    while pos < len(fmt):
        spec, pos = _parse_one(fmt, pos)
        specs.append(spec)
    return tuple(specs)


def serialize(format: str, args: Iterable[Any]) -> bytes:
    """Encode ``args`` one after another as described by ``format``."""
    specs = _parse(format)
    values = list(args)
    if len(values) > len(specs):
        raise ValueError(
            f"format {format!r} describes {len(specs)} values, got {len(values)}"
        )
    out = bytearray()
    for spec, value in zip(specs, values):
        spec.encode(value, out)
    return bytes(out)


def serialize_list(format: str, args: Iterable[Any]) -> list[int]:
    """Like :func:`serialize`, but return the bytes as a list of integers."""
    return list(serialize(format, args))