"""Specifications for pairs, tuples, variants and owning pointers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from fieldpack.primitives import (
    DecodeError,
    ErrorKind,
    Options,
    Reader,
    ScalarKind,
    write_scalar,
)
from fieldpack.types import FieldType, Spec


@dataclass(frozen=True)
class Pair(Spec):
    """Two values written one after the other; read back as a 2-tuple."""

    first: Spec
    second: Spec

    def encode(self, value: Any, out: bytearray, options: Options = Options.NONE) -> None:
        first, second = value
        self.first.encode(first, out, options)
        self.second.encode(second, out, options)

    def decode(self, reader: Reader) -> tuple[Any, Any]:
        if reader.at_end():
            return self.default()
        first = self.first.decode(reader)
        return first, self.second.decode(reader)

    def type_ids(self, seen: dict[str, int]) -> list[int]:
        return [FieldType.PAIR, *self.first.type_ids(seen), *self.second.type_ids(seen)]

    def default(self) -> tuple[Any, Any]:
        return self.first.default(), self.second.default()


@dataclass(frozen=True, init=False)
class TupleSpec(Spec):
    """A fixed sequence of differently typed values, with no length prefix."""

    elements: tuple[Spec, ...]

    def __init__(self, *elements: Spec) -> None:
        object.__setattr__(self, "elements", tuple(elements))

    def encode(self, value: Any, out: bytearray, options: Options = Options.NONE) -> None:
        items = tuple(value)
        if len(items) != len(self.elements):
            raise ValueError(f"expected {len(self.elements)} values, got {len(items)}")
        for spec, item in zip(self.elements, items):
            spec.encode(item, out, options)

    def decode(self, reader: Reader) -> tuple[Any, ...]:
        return tuple(spec.decode(reader) for spec in self.elements)

    def type_ids(self, seen: dict[str, int]) -> list[int]:
        ids: list[int] = [FieldType.TUPLE]
        for spec in self.elements:
            ids.extend(spec.type_ids(seen))
        return ids

    def default(self) -> tuple[Any, ...]:
        return tuple(spec.default() for spec in self.elements)


@dataclass(frozen=True, init=False)
class Variant(Spec):
    """One of several alternatives, written as its index and then its value.

    Values are ``(index, value)`` pairs, both when encoding and when decoding.
    """

    alternatives: tuple[Spec, ...]

    def __init__(self, *alternatives: Spec) -> None:
        if not alternatives:
            raise ValueError("a variant needs at least one alternative")
        object.__setattr__(self, "alternatives", tuple(alternatives))

    def encode(self, value: Any, out: bytearray, options: Options = Options.NONE) -> None:
        index, item = value
        if not 0 <= index < len(self.alternatives):
            raise ValueError(
                f"variant index {index} out of range for {len(self.alternatives)} alternatives"
            )
        write_scalar(out, index, ScalarKind.SIZE, options)
        self.alternatives[index].encode(item, out, options)

    def decode(self, reader: Reader) -> tuple[int, Any]:
        if reader.at_end():
            return self.default()
        index = reader.read_scalar(ScalarKind.SIZE)
        if index >= len(self.alternatives):
            raise DecodeError(
                ErrorKind.ILLEGAL_BYTE_SEQUENCE,
                f"variant index {index} out of range for {len(self.alternatives)} alternatives",
            )
        return index, self.alternatives[index].decode(reader)

    def type_ids(self, seen: dict[str, int]) -> list[int]:
        ids: list[int] = [FieldType.VARIANT]
        for spec in self.alternatives:
            ids.extend(spec.type_ids(seen))
        return ids

    def default(self) -> tuple[int, Any]:
        return 0, self.alternatives[0].default()


@dataclass(frozen=True)
class UniquePtr(Spec):
    """An owned value that may be missing: a presence flag, then the value."""

    element: Spec

    def encode(self, value: Any, out: bytearray, options: Options = Options.NONE) -> None:
        write_scalar(out, value is not None, ScalarKind.BOOL, options)
        if value is not None:
            self.element.encode(value, out, options)

    def decode(self, reader: Reader) -> Any:
        if reader.at_end():
            return None
        flag = reader.peek()
        if flag not in (0, 1):
            raise DecodeError(
                ErrorKind.ILLEGAL_BYTE_SEQUENCE, f"presence flag must be 0 or 1, got {flag}"
            )
        reader.take(1)
        return self.element.decode(reader) if flag else None

    def type_ids(self, seen: dict[str, int]) -> list[int]:
        return [FieldType.UNIQUE_PTR, *self.element.type_ids(seen)]

    def default(self) -> None:
        return None