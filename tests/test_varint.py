import pytest

from fieldpack.varint import decode_signed, decode_unsigned, encode_signed, encode_unsigned


def test_unsigned_wire_bytes_for_500():
    assert encode_unsigned(500) == b"\xf4\x03"


def test_signed_small_negative_is_single_byte():
    assert encode_signed(-15) == bytes([0b10001111])


def test_signed_multibyte_repeats_magnitude():
    assert encode_signed(500) == b"\x74\xf4\x03"


@pytest.mark.parametrize(
    "value, length",
    [(5, 1), (1600, 2), (75535, 3), (12345678, 4), (5294967295, 5)],
)
def test_unsigned_lengths(value, length):
    assert len(encode_unsigned(value)) == length


@pytest.mark.parametrize(
    "value", [0, 1, 127, 128, 500, 75535, 5294967295, 2**63, 2**64 - 1]
)
def test_unsigned_round_trip(value):
    encoded = encode_unsigned(value)
    assert decode_unsigned(encoded, 0, 8) == (value, len(encoded))


@pytest.mark.parametrize(
    "value",
    [0, 5, -5, 63, -63, 64, -64, 12345, -12345678, 12345678910111314, -12345678910111314],
)
def test_signed_round_trip(value):
    encoded = encode_signed(value)
    assert decode_signed(encoded, 0, 8) == (value, len(encoded))


def test_decode_from_offset_returns_next_offset():
    data = b"\xaa\xbb" + encode_unsigned(75535) + b"\xcc"
    value, offset = decode_unsigned(data, 2, 4)
    assert value == 75535
    assert data[offset:] == b"\xcc"


def test_consecutive_signed_values():
    data = encode_signed(-5) + encode_signed(5294967295)
    first, offset = decode_signed(data, 0, 8)
    second, end = decode_signed(data, offset, 8)
    assert (first, second) == (-5, 5294967295)
    assert end == len(data)


def test_encode_unsigned_rejects_negative():
    with pytest.raises(ValueError):
        encode_unsigned(-1)


def test_truncated_unsigned_raises():
    with pytest.raises(ValueError):
        decode_unsigned(encode_unsigned(75535)[:-1], 0, 4)


def test_truncated_signed_raises():
    with pytest.raises(ValueError):
        decode_signed(encode_signed(-75535)[:-1], 0, 4)


def test_empty_signed_raises():
    with pytest.raises(ValueError):
        decode_signed(b"", 0, 4)


def test_overlong_unsigned_raises():
    with pytest.raises(ValueError):
        decode_unsigned(b"\x80" * 5 + b"\x00", 0, 4)