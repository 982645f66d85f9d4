from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pytest

from fieldpack.composite import Pair, TupleSpec, UniquePtr, Variant
from fieldpack.primitives import DecodeError, ErrorKind, Reader, ScalarKind
from fieldpack.types import FieldType, Map, Scalar, String, Struct, Vector

INT = Scalar(ScalarKind.INT32)
FLOAT = Scalar(ScalarKind.FLOAT32)
DOUBLE = Scalar(ScalarKind.FLOAT64)
BOOL = Scalar(ScalarKind.BOOL)
CHAR = Scalar(ScalarKind.CHAR)
UINT16 = Scalar(ScalarKind.UINT16)


def _encode(spec, value) -> bytes:
    out = bytearray()
    spec.encode(value, out)
    return bytes(out)


def _round_trip(spec, value):
    data = _encode(spec, value)
    return data, spec.decode(Reader(data))


@dataclass
class Node:
    data: int
    left: Optional["Node"] = None
    right: Optional["Node"] = None


NODE = Struct("Node", factory=Node)
NODE.fields.extend(
    [("data", INT), ("left", UniquePtr(NODE)), ("right", UniquePtr(NODE))]
)


def test_pair_int_double():
    _, decoded = _round_trip(Pair(INT, DOUBLE), (5, 3.14))
    assert decoded == (5, 3.14)


def test_pair_of_vectors():
    spec = Pair(Vector(INT), Vector(FLOAT))
    _, decoded = _round_trip(spec, ([1, 2, 3], [1.1, 2.2, 3.3]))
    assert decoded[0] == [1, 2, 3]
    assert decoded[1] == pytest.approx([1.1, 2.2, 3.3], rel=1e-6)


def test_pair_with_trailing_bytes_in_buffer():
    data = _encode(Pair(INT, DOUBLE), (5, 3.14)) + bytes(10)
    assert Pair(INT, DOUBLE).decode(Reader(data)) == (5, 3.14)


def test_pair_at_end_of_input_is_default():
    assert Pair(INT, DOUBLE).decode(Reader(b"")) == (0, 0.0)


def test_pair_type_ids():
    assert Pair(INT, DOUBLE).type_ids({}) == [
        FieldType.PAIR,
        FieldType.INT32,
        FieldType.FLOAT64,
    ]


def test_tuple_bytes():
    spec = TupleSpec(INT, FLOAT, BOOL, String(), CHAR)
    data = _encode(spec, (5, 3.14, True, "Hello", "i"))
    assert len(data) == 13
    assert data == b"\x05" + b"\xc3\xf5\x48\x40" + b"\x01" + b"\x05Hello" + b"i"


def test_tuple_round_trip():
    spec = TupleSpec(INT, FLOAT, BOOL, String(), CHAR)
    _, decoded = _round_trip(spec, (5, 3.14, True, "Hello", "i"))
    assert decoded[0] == 5
    assert decoded[1] == pytest.approx(3.14, rel=1e-6)
    assert decoded[2:] == (True, "Hello", "i")


def test_tuple_wrong_length_raises():
    with pytest.raises(ValueError):
        _encode(TupleSpec(INT, BOOL), (1,))


def test_tuple_type_ids():
    assert TupleSpec(INT, BOOL).type_ids({}) == [
        FieldType.TUPLE,
        FieldType.INT32,
        FieldType.BOOL,
    ]


def test_variant_int_alternative():
    spec = Variant(INT, String())
    data, decoded = _round_trip(spec, (0, 5))
    assert data == b"\x00\x05"
    assert decoded == (0, 5)


def test_variant_string_alternative():
    spec = Variant(INT, String())
    data, decoded = _round_trip(spec, (1, "Hello"))
    assert data == b"\x01\x05Hello"
    assert decoded == (1, "Hello")


def test_map_of_variants():
    spec = Map(String(), Variant(UINT16, String(), BOOL, Vector(String())))
    config = {
        "keepalive": (2, True),
        "port": (0, 8080),
        "ip_address": (1, "192.168.8.1"),
        "subscriptions": (3, ["motor_state", "battery_state"]),
    }
    data, decoded = _round_trip(spec, config)
    assert len(data) == 87
    assert len(decoded) == 4
    assert decoded["keepalive"] == (2, True)
    assert decoded["port"] == (0, 8080)
    assert decoded["ip_address"] == (1, "192.168.8.1")
    assert decoded["subscriptions"] == (3, ["motor_state", "battery_state"])


def test_variant_index_out_of_range_on_decode():
    with pytest.raises(DecodeError) as info:
        Variant(INT, String()).decode(Reader(b"\x05\x01"))
    assert info.value.kind is ErrorKind.ILLEGAL_BYTE_SEQUENCE


def test_variant_index_out_of_range_on_encode():
    with pytest.raises(ValueError):
        _encode(Variant(INT), (3, 1))


def test_variant_without_alternatives_raises():
    with pytest.raises(ValueError):
        Variant()


def test_variant_default_and_type_ids():
    spec = Variant(INT, String())
    assert spec.decode(Reader(b"")) == (0, 0)
    assert spec.type_ids({}) == [FieldType.VARIANT, FieldType.INT32, FieldType.STRING]


def _tree() -> Node:
    return Node(5, Node(3, Node(1), Node(2)), Node(4))


def test_unique_ptr_tree_bytes():
    data = _encode(NODE, _tree())
    assert len(data) == 15
    assert data == bytes([5, 1, 3, 1, 1, 0, 0, 1, 2, 0, 0, 1, 4, 0, 0])


def test_unique_ptr_tree_round_trip():
    _, decoded = _round_trip(NODE, _tree())
    assert decoded == _tree()
    assert decoded.left.left.data == 1
    assert decoded.right.left is None


def test_unique_ptr_tree_in_larger_buffer():
    data = _encode(NODE, _tree()) + bytes(5)
    assert NODE.decode(Reader(data)) == _tree()


def test_unique_ptr_illegal_flag():
    with pytest.raises(DecodeError) as info:
        UniquePtr(INT).decode(Reader(b"\x02\x05"))
    assert info.value.kind is ErrorKind.ILLEGAL_BYTE_SEQUENCE


def test_unique_ptr_empty_and_end_of_input():
    assert _encode(UniquePtr(INT), None) == b"\x00"
    assert UniquePtr(INT).decode(Reader(b"\x00")) is None
    assert UniquePtr(INT).decode(Reader(b"")) is None


def test_recursive_type_ids_terminate():
    assert NODE.type_ids({}) == [
        FieldType.STRUCT,
        FieldType.INT32,
        FieldType.UNIQUE_PTR,
        FieldType.STRUCT,
        FieldType.UNIQUE_PTR,
        FieldType.STRUCT,
    ]