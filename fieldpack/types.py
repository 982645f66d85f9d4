"""Field specifications: how each kind of value is written and read."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum, IntEnum
from typing import Any, ClassVar

from fieldpack.primitives import (
    DecodeError,
    ErrorKind,
    Options,
    Reader,
    ScalarKind,
    write_scalar,
)


class FieldType(IntEnum):
    """Type identifiers used to describe a layout."""

    BOOL = 0
    CHAR = 1
    UINT8 = 2
    UINT16 = 3
    UINT32 = 4
    UINT64 = 5
    INT8 = 6
    INT16 = 7
    INT32 = 8
    INT64 = 9
    FLOAT32 = 10
    FLOAT64 = 11
    ENUM_CLASS = 12
    STRING = 13
    ARRAY = 14
    VECTOR = 15
    MAP = 16
    UNORDERED_MAP = 17
    SET = 18
    UNORDERED_SET = 19
    OPTIONAL = 20
    PAIR = 21
    TUPLE = 22
    VARIANT = 23
    UNIQUE_PTR = 24
    STRUCT = 25
    CHRONO_DURATION = 26
    LIST = 27
    DEQUE = 28


_SCALAR_IDS = {
    ScalarKind.BOOL: FieldType.BOOL,
    ScalarKind.CHAR: FieldType.CHAR,
    ScalarKind.CHAR16: FieldType.CHAR,
    ScalarKind.CHAR32: FieldType.CHAR,
    ScalarKind.WCHAR: FieldType.CHAR,
    ScalarKind.UINT8: FieldType.UINT8,
    ScalarKind.UINT16: FieldType.UINT16,
    ScalarKind.UINT32: FieldType.UINT32,
    ScalarKind.UINT64: FieldType.UINT64,
    ScalarKind.SIZE: FieldType.UINT64,
    ScalarKind.INT8: FieldType.INT8,
    ScalarKind.INT16: FieldType.INT16,
    ScalarKind.INT32: FieldType.INT32,
    ScalarKind.INT64: FieldType.INT64,
    ScalarKind.FLOAT32: FieldType.FLOAT32,
    ScalarKind.FLOAT64: FieldType.FLOAT64,
}


class Spec(ABC):
    """Describes one field type: how to encode, decode and identify it."""

    @abstractmethod
    def encode(self, value: Any, out: bytearray, options: Options = Options.NONE) -> None:
        """Append the encoding of ``value`` to ``out``."""

    @abstractmethod
    def decode(self, reader: Reader) -> Any:
        """Read one value; at the end of input the default is returned."""

    @abstractmethod
    def type_ids(self, seen: dict[str, int]) -> list[int]:
        """Type identifiers of this field; ``seen`` counts visited structs."""

    @abstractmethod
    def default(self) -> Any:
        """The value a missing field takes."""


def _write_length(out: bytearray, length: int, options: Options) -> None:
    write_scalar(out, length, ScalarKind.SIZE, options)


def _read_length(reader: Reader) -> int:
    length = reader.read_scalar(ScalarKind.SIZE)
    if length > reader.remaining():
        raise DecodeError(
            ErrorKind.VALUE_TOO_LARGE,
            f"length {length} exceeds the {reader.remaining()} bytes left",
        )
    return length


@dataclass(frozen=True)
class Scalar(Spec):
    """A bool, character, integer or floating-point value."""

    kind: ScalarKind

    def encode(self, value: Any, out: bytearray, options: Options = Options.NONE) -> None:
        write_scalar(out, value, self.kind, options)

    def decode(self, reader: Reader) -> Any:
        return reader.read_scalar(self.kind)

    def type_ids(self, seen: dict[str, int]) -> list[int]:
        return [_SCALAR_IDS[self.kind]]

    def default(self) -> Any:
        return self.kind.default


@dataclass(frozen=True)
class String(Spec):
    """A length-prefixed string; narrow strings are stored as UTF-8."""

    char: ScalarKind = ScalarKind.CHAR

    def encode(self, value: str, out: bytearray, options: Options = Options.NONE) -> None:
        if self.char is ScalarKind.CHAR:
            raw = value.encode("utf-8")
            _write_length(out, len(raw), options)
            out.extend(raw)
            return
        _write_length(out, len(value), options)
        for character in value:
            write_scalar(out, character, self.char, options)

    def decode(self, reader: Reader) -> str:
        if reader.at_end():
            return self.default()
        length = _read_length(reader)
        if self.char is ScalarKind.CHAR:
            raw = reader.take(length)
            try:
                return raw.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise DecodeError(ErrorKind.ILLEGAL_BYTE_SEQUENCE, str(exc)) from None
        return "".join(reader.read_scalar(self.char) for _ in range(length))

    def type_ids(self, seen: dict[str, int]) -> list[int]:
        return [FieldType.STRING]

    def default(self) -> str:
        return ""


@dataclass(frozen=True)
class _Sequence(Spec):
    element: Spec
    field_type: ClassVar[FieldType] = FieldType.VECTOR

    def _build(self, items: Iterable[Any]) -> Any:
        return list(items)

    def encode(self, value: Any, out: bytearray, options: Options = Options.NONE) -> None:
        items = list(value)
        _write_length(out, len(items), options)
        for item in items:
            self.element.encode(item, out, options)

    def decode(self, reader: Reader) -> Any:
        if reader.at_end():
            return self.default()
        count = _read_length(reader)
        return self._build(self.element.decode(reader) for _ in range(count))

    def type_ids(self, seen: dict[str, int]) -> list[int]:
        return [self.field_type, *self.element.type_ids(seen)]

    def default(self) -> Any:
        return self._build(())


@dataclass(frozen=True)
class Vector(_Sequence):
    """A length-prefixed sequence, read back as a list."""

    field_type: ClassVar[FieldType] = FieldType.VECTOR


@dataclass(frozen=True)
class ListSpec(_Sequence):
    """A linked list on the wire; read back as a list."""

    field_type: ClassVar[FieldType] = FieldType.LIST


@dataclass(frozen=True)
class Deque(_Sequence):
    """A double-ended queue, read back as ``collections.deque``."""

    field_type: ClassVar[FieldType] = FieldType.DEQUE

    def _build(self, items: Iterable[Any]) -> deque:
        return deque(items)


@dataclass(frozen=True)
class Array(Spec):
    """A fixed number of elements with no length prefix."""

    element: Spec
    size: int

    def encode(self, value: Any, out: bytearray, options: Options = Options.NONE) -> None:
        items = list(value)
        if len(items) != self.size:
            raise ValueError(f"expected {self.size} elements, got {len(items)}")
        for item in items:
            self.element.encode(item, out, options)

    def decode(self, reader: Reader) -> list[Any]:
        return [self.element.decode(reader) for _ in range(self.size)]

    def type_ids(self, seen: dict[str, int]) -> list[int]:
        return [FieldType.ARRAY, *self.element.type_ids(seen)]

    def default(self) -> list[Any]:
        return [self.element.default() for _ in range(self.size)]


@dataclass(frozen=True)
class Map(Spec):
    """Key/value pairs, written in key order; read back as a dict."""

    key: Spec
    value: Spec
    field_type: ClassVar[FieldType] = FieldType.MAP
    ordered: ClassVar[bool] = True

    def encode(self, value: Mapping, out: bytearray, options: Options = Options.NONE) -> None:
        items = list(value.items())
        if self.ordered:
            items.sort(key=lambda pair: pair[0])
        _write_length(out, len(items), options)
        for key, item in items:
            self.key.encode(key, out, options)
            self.value.encode(item, out, options)

    def decode(self, reader: Reader) -> dict:
        if reader.at_end():
            return {}
        count = _read_length(reader)
        result = {}
        for _ in range(count):
            key = self.key.decode(reader)
            result[key] = self.value.decode(reader)
        return result

    def type_ids(self, seen: dict[str, int]) -> list[int]:
        return [self.field_type, *self.key.type_ids(seen), *self.value.type_ids(seen)]

    def default(self) -> dict:
        return {}


@dataclass(frozen=True)
class UnorderedMap(Map):
    """Key/value pairs written in iteration order."""

    field_type: ClassVar[FieldType] = FieldType.UNORDERED_MAP
    ordered: ClassVar[bool] = False


@dataclass(frozen=True)
class Set(Spec):
    """Distinct elements, written in sorted order; read back as a set."""

    element: Spec
    field_type: ClassVar[FieldType] = FieldType.SET
    ordered: ClassVar[bool] = True

    def encode(self, value: Iterable, out: bytearray, options: Options = Options.NONE) -> None:
        items = sorted(set(value)) if self.ordered else list(set(value))
        _write_length(out, len(items), options)
        for item in items:
            self.element.encode(item, out, options)

    def decode(self, reader: Reader) -> set:
        if reader.at_end():
            return set()
        count = _read_length(reader)
        return {self.element.decode(reader) for _ in range(count)}

    def type_ids(self, seen: dict[str, int]) -> list[int]:
        return [self.field_type, *self.element.type_ids(seen)]

    def default(self) -> set:
        return set()


@dataclass(frozen=True)
class UnorderedSet(Set):
    """Distinct elements written in iteration order."""

    field_type: ClassVar[FieldType] = FieldType.UNORDERED_SET
    ordered: ClassVar[bool] = False


@dataclass(frozen=True)
class OptionalSpec(Spec):
    """A presence flag followed by the value when present; ``None`` when absent."""

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
        return [FieldType.OPTIONAL, *self.element.type_ids(seen)]

    def default(self) -> None:
        return None


@dataclass(frozen=True)
class EnumSpec(Spec):
    """An enumeration stored as its underlying integer value."""

    enum: type[Enum]
    underlying: ScalarKind = ScalarKind.INT32

    def encode(self, value: Enum, out: bytearray, options: Options = Options.NONE) -> None:
        write_scalar(out, self.enum(value).value, self.underlying, options)

    def decode(self, reader: Reader) -> Enum:
        if reader.at_end():
            return self.default()
        number = reader.read_scalar(self.underlying)
        try:
            return self.enum(number)
        except ValueError:
            raise DecodeError(
                ErrorKind.ILLEGAL_BYTE_SEQUENCE,
                f"{number} is not a member of {self.enum.__name__}",
            ) from None

    def type_ids(self, seen: dict[str, int]) -> list[int]:
        return [FieldType.ENUM_CLASS]

    def default(self) -> Enum:
        try:
            return self.enum(0)
        except ValueError:
            return next(iter(self.enum))


@dataclass(frozen=True)
class Duration(Spec):
    """A time span stored as a whole number of ``unit`` ticks."""

    unit: timedelta = timedelta(milliseconds=1)
    rep: ScalarKind = ScalarKind.INT64

    def encode(
        self, value: timedelta | int, out: bytearray, options: Options = Options.NONE
    ) -> None:
        count = value // self.unit if isinstance(value, timedelta) else int(value)
        write_scalar(out, count, self.rep, options)

    def decode(self, reader: Reader) -> timedelta:
        return self.unit * reader.read_scalar(self.rep)

    def type_ids(self, seen: dict[str, int]) -> list[int]:
        return [FieldType.CHRONO_DURATION, *Scalar(self.rep).type_ids(seen)]

    def default(self) -> timedelta:
        return timedelta(0)


class Struct(Spec):
    """Named fields written one after another.

    Values may be mappings or objects with matching attributes.  Decoded
    values are built by ``factory(**fields)``, or returned as a dict when no
    factory is given.  ``fields`` is a list, so a struct may refer to itself.
    """

    def __init__(
        self,
        name: str,
        fields: Iterable[tuple[str, Spec]] = (),
        factory: Callable[..., Any] | None = None,
    ) -> None:
        self.name = name
        self.fields: list[tuple[str, Spec]] = list(fields)
        self.factory = factory

    def __repr__(self) -> str:
        return f"Struct({self.name!r}, fields={[n for n, _ in self.fields]!r})"

    def _build(self, values: dict[str, Any]) -> Any:
        return self.factory(**values) if self.factory is not None else values

    def encode(self, value: Any, out: bytearray, options: Options = Options.NONE) -> None:
        for name, spec in self.fields:
            item = value[name] if isinstance(value, Mapping) else getattr(value, name)
            spec.encode(item, out, options)

    def decode(self, reader: Reader) -> Any:
        return self._build({name: spec.decode(reader) for name, spec in self.fields})

    def type_ids(self, seen: dict[str, int]) -> list[int]:
        visits = seen.get(self.name, 0)
        seen[self.name] = visits + 1
        ids: list[int] = [FieldType.STRUCT]
        if visits == 0:
            for _, spec in self.fields:
                ids.extend(spec.type_ids(seen))
        return ids

    def default(self) -> Any:
        return self._build({name: spec.default() for name, spec in self.fields})