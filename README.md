# fieldpack

fieldpack turns typed records into compact bytes and reads them back. It
needs nothing outside the standard library.

You describe the layout of a record with spec objects. The encoder then
writes each field in that order:

- Integers of 32 and 64 bits are written as variable-length integers, so
  small values take one byte. Signed values use a first byte that carries
  the sign and six bits of the value.
- 8- and 16-bit integers, floats, doubles, chars and bools are written at
  their fixed width, little endian by default.
- Strings and containers are written with their length first.
- Optional values and owning pointers start with a presence byte. Variants
  start with the index of the alternative.

You can ask for big-endian or fixed-length output instead. A CRC32 checksum
and a hash of the type layout can be added to protect the data.

## Installation

```
pip install fieldpack
```

## Describing a record

A `Struct` has a name and a list of `(field name, spec)` pairs. It can
encode mappings, or objects that have matching attributes. It decodes to a
dict, or to `factory(**fields)` when you give it a `factory`.

```python
from fieldpack.primitives import ScalarKind, Options
from fieldpack.types import Scalar, String, Vector, Map, Array, Struct
from fieldpack.codec import serialize, deserialize

game_state = Struct("GameState", [
    ("a", Scalar(ScalarKind.INT32)),
    ("b", Scalar(ScalarKind.BOOL)),
    ("c", Scalar(ScalarKind.CHAR)),
    ("d", String()),
    ("e", Vector(Scalar(ScalarKind.UINT64))),
    ("f", Map(String(), Array(Scalar(ScalarKind.UINT8), 3))),
])

state = {
    "a": 5, "b": True, "c": "a", "d": "Hello World",
    "e": [6, 5, 4, 3, 2, 1],
    "f": {"abc": [1, 2, 3], "def": [4, 5, 6]},
}

data = serialize(state, game_state)
assert len(data) == 37
assert deserialize(data, game_state) == state
```

The field list is an ordinary list. A struct can therefore refer to itself,
for example through `UniquePtr` to build a tree.

If the input ends early, the remaining fields get their defaults. This means
you can read data written with an older, shorter layout using a newer one.

## Options

`Options` is a flag type, so you can combine its members with `|`:

```python
opts = Options.WITH_VERSION | Options.WITH_CHECKSUM
record = Struct("Record", [("value", Scalar(ScalarKind.INT32))])
data = serialize({"value": 5}, record, opts)
assert len(data) == 9
```

- `Options.BIG_ENDIAN` writes multi-byte values big endian. It also writes
  32- and 64-bit integers at full width.
- `Options.FIXED_LENGTH_ENCODING` writes 32- and 64-bit integers at full
  width, with no variable-length encoding.
- `Options.WITH_VERSION` puts a CRC32 of the record's type identifiers
  (see `codec.type_info`) before the data. Decoding with a different layout
  fails.
- `Options.WITH_CHECKSUM` appends a CRC32 of everything written before it.
  Decoding fails if the bytes were damaged or cut short.

When decoding fails, `fieldpack.primitives.DecodeError` (a `ValueError`) is
raised. Its `kind` is an `ErrorKind`: `MESSAGE_SIZE`, `VALUE_TOO_LARGE`,
`ILLEGAL_BYTE_SEQUENCE`, `INVALID_ARGUMENT` or `BAD_MESSAGE`.

## Available specs

- `fieldpack.types`:
  - `Scalar(kind)`
  - `String()`
  - `Vector`, `ListSpec` and `Deque`, which decodes to `collections.deque`
  - `Array(element, size)`
  - `Map` and `UnorderedMap`, which decode to `dict`
  - `Set` and `UnorderedSet`
  - `OptionalSpec`, where `None` means absent
  - `EnumSpec(enum_type)`
  - `Duration`, which decodes to `timedelta` and counts milliseconds by
    default
  - `Struct`
- `fieldpack.composite`:
  - `Pair`
  - `TupleSpec(*specs)`
  - `Variant(*alternatives)`, whose values are `(index, value)` pairs
  - `UniquePtr`
- `fieldpack.varint` gives the low-level integer codec:
  `encode_unsigned`, `decode_unsigned`, `encode_signed` and `decode_signed`.

## Files

`dump` and `load` write and read a record through a binary file object:

```python
from fieldpack.codec import dump, load

with open("savefile.bin", "wb") as fp:
    dump(state, game_state, fp)
with open("savefile.bin", "rb") as fp:
    assert load(fp, game_state) == state
```

## Format strings

`fieldpack.format_string.serialize` encodes a list of values described by a
compact format string and returns `bytes`. `serialize_list` does the same
but returns a list of ints.

- Scalars: `?` bool, `c` char, `b`/`B` 8-bit, `h`/`H` 16-bit, `i`/`I`
  32-bit, `q`/`Q` 64-bit (lower case is signed), `N` size, `f` float,
  `d` double, `s` string.
- Containers: `[T]` vector, `[nT]` array of exactly `n` values, `{K:V}`
  dict, `{T}` set, `(...)` tuple.

```python
from fieldpack.format_string import serialize
serialize("i[i]s", [5, [1, 2, 3], "hi"])
```

Format strings only encode. To read the data back, describe it with specs
instead.

## Sample data

`fieldpack.benchmark_data` builds random records that you can use to
measure encoding speed. It provides:

- `generate_logs`, which makes 10,000 log entries.
- `generate_player`, which makes a game save with entities, items and a
  recipe book.

Every generator takes an optional `random.Random`, so results can be
reproduced.

## What it does not do

- fieldpack is a library only. It has no command-line tool.
- It does not detect record layouts by itself. Every record needs a spec.