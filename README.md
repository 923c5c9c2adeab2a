# ctfread

Pure-Python building blocks for reading traces in the Common Trace
Format (CTF 2): a bit-level reader for packed binary data, integer
range sets and named mappings, an augmented interval tree, an
open-addressing hash map, a JSON-to-field converter for metadata
attributes, extensions and environments, and the timestamp and
command-line option parsing used by a trace-reading front end.

The package has no run-time dependencies and needs Python 3.10 or later.

## Modules

### `ctfread.bitreader`

`BitReader(data, byte_order)` reads bit fields from a `bytes`,
`bytearray` or `memoryview` buffer, little or big endian
(`ctfread.types.ByteOrder`).

- `read_bits(count)` reads up to 56 bits as an unsigned integer;
  `read_bit()` reads one. Reading past the end raises `CtfError` with
  `ErrorCode.NOT_ENOUGH_BITS`.
- `read_bytes(count)` returns a `memoryview` of whole bytes; the reader
  must be byte aligned.
- `align(alignment)` skips to a multiple of a power-of-two bit
  alignment; `consume_checked(count)` skips bits, stopping at the end
  of the buffer.
- `seek(offset, whence)` moves to a byte offset (`SeekFrom.SET`,
  `SeekFrom.CUR`, `SeekFrom.END`), clamped to the end of the buffer.
- `set_byte_order(byte_order)` switches byte order mid-stream.
- `bits_remaining()`, `has_bits_remaining()`, `bytes_remaining()`,
  `byte_aligned()`, `peek_bytes()` and the `bit_position` property
  report where the reader stands.
- Lower-level `refill()`, `peek(count)` and `consume(count)` work on
  the staged lookahead bits directly.

Helpers `bswap16`, `bswap32`, `bswap64` and `saturating_add_u64` are
included.

### `ctfread.ivaltree`

`Interval(lower, upper, value=None)` is a closed interval with an
optional payload; `contains(point)` and `intersects(other)` test it.

`IntervalTree` is a red-black tree of intervals ordered by lower bound,
each node tracking the largest upper bound in its subtree. Intervals
are held by identity: `insert(interval)` raises `ValueError` if the
interval already sits in a tree, and `delete(interval)` needs the same
object that was inserted.

- `intersect(query, last_match=None)` returns one overlapping interval
  or `None`; passing the previous result continues the search.
- `intersect_point(point, last_match=None)` does the same for a point.
- `iter_intersecting(query)` yields every overlapping interval once.
- `validate()` checks every tree invariant and raises `ValueError` on
  the first violation; `to_dot()` renders the tree as Graphviz DOT.
- `len(tree)` and iteration (in lower-bound order) are supported.

### `ctfread.hashmap`

`OpenHashMap(hash_func, capacity=8)` is a power-of-two sized map with
linear probing, doubling when half full, and backward-shift deletion.
The capacity must be a power of two. `insert(key, value)` always adds
an entry (inserting an existing key again adds a second one, and
`find` returns the first), `find(key)` returns the value or `None`,
`delete(key)` raises `KeyError` when the key is absent. `in`, `len`,
iteration over keys and `items()` are supported.

Hash functions: `hash_identity`, `hash_murmur64` (the MurmurHash3
64-bit finaliser) and `hash_fnv` (64-bit FNV-1a of a string or bytes).
`next_pow2` and `is_pow2` are also exported.

### `ctfread.rng`

- `Range(lower, upper)` – a closed range; `lower > upper` raises
  `ValueError`.
- `RangeSet(ranges, signed=False)` – ranges (or `(lower, upper)`
  tuples) within the signed or unsigned 64-bit domain.
  `intersects_uint(value)`, `intersects_sint(value)` and
  `intersects_range_set(other)` test membership and overlap.
- `Mappings(mappings, signed=False)` – named range sets, given as a
  mapping or as `(name, ranges)` pairs. `find(value)` returns the
  names holding a value in definition order; `find_first(value)`
  returns the first or `None`.

### `ctfread.types`

`ErrorCode` (an `IntEnum` of result codes, each with a `description`),
`CtfError` (an exception carrying an `ErrorCode` in `code`),
`ByteOrder`, `BitOrder`, `Encoding` (with the matching Python `codec`
name), `Base` and `Uuid` (exactly 16 bytes, `Uuid.from_bytes(data)`;
any other length raises `CtfError` with `ErrorCode.INVALID_UUID`).

### `ctfread.fields`

`FieldClass`, `StructMemberClass` and `Field` describe decoded values
and their classes, with `FieldType` and `FieldClassType` naming their
kinds. Structure fields offer `struct_len()`, `struct_field(index)`,
`struct_field_name(index)` and `struct_field_by_name(name)`; string
fields offer `as_str()`, which decodes in the class's encoding and
stops at the first NUL. Asking a field for the wrong kind raises
`CtfError` with `ErrorCode.WRONG_FLD_TYPE`.

### `ctfread.ctfjson`

Turns any JSON value into a field class (its schema) and a matching
field tree:

| JSON        | field class                            | field  |
|-------------|----------------------------------------|--------|
| null        | nil                                    | NIL    |
| boolean     | fixed-length boolean, 1 bit            | BOOL   |
| float       | fixed-length float, 64 bits            | REAL   |
| int >= 0    | fixed-length unsigned integer, 64 bits | UINT   |
| int < 0     | fixed-length signed integer, 64 bits   | SINT   |
| object      | structure                              | STRUCT |
| array       | structure with members "0", "1", ...   | STRUCT |
| string      | null-terminated UTF-8 string           | STR    |

`ctfjson_from_text(text)` parses JSON text, `ctfjson_from_json(value)`
takes an already decoded value; both return a `CtfJson` with
`field_class` and `root`. `field_class_from_json` and `field_from_json`
expose the two steps. Failures raise `CtfJsonError`.

### `ctfread.tstamp`

`parse_timestamp_ns(text, utc=False)` returns `(nanoseconds, has_date)`
for:

- `yyyy-mm-dd hh:ii[:ss[.nano]]` – local time, or UTC with `utc=True`;
- `hh:ii[:ss[.nano]]` – a time of day resolved against the local date
  1970-01-01, with `has_date` False;
- `[-]sec[.nano]` – seconds from the clock origin.

The `nano` part counts nanoseconds, so `"12.5"` is twelve seconds and
five nanoseconds. Invalid input raises `ValueError`.
`utc_to_epoch(...)` and `is_leap_year(year)` are also available.

### `ctfread.options`

`parse_options(argv=None)` parses the trace reader's command line
(`sys.argv[1:]` by default) into `Options`: the trace paths, `quiet`,
`printer_flags` (`PrintFlags`), a `filter_range` (`TimeRange`) from
`-b`/`-e`, `has_filter_range`, and `show_help` for `-h`. When no `-p`
property is selected, all are. Bad arguments raise `OptionsError`,
whose `show_usage` says whether `usage()` text should be shown.
`parse_print_opts(text)` parses the `-p` list on its own.

## Examples

```python
from ctfread.bitreader import BitReader
from ctfread.types import ByteOrder

reader = BitReader(bytes([0xAB, 0xCD]), ByteOrder.LITTLE)
low_nibble = reader.read_bits(4)   # 0xB
reader.align(8)
rest = bytes(reader.read_bytes(1))  # b"\xcd"
```

```python
from ctfread.rng import Range, RangeSet

ranges = RangeSet([Range(1, 200), Range(150, 300)], False)
ranges.intersects_uint(250)   # True
ranges.intersects_uint(301)   # False
```

```python
from ctfread.ivaltree import Interval, IntervalTree

tree = IntervalTree()
for lower, upper in [(20, 45), (12, 34), (70, 80), (30, 30), (5, 10)]:
    tree.insert(Interval(lower, upper))

hits = list(tree.iter_intersecting(Interval(30, 30)))  # three intervals
```

```python
from ctfread.ctfjson import ctfjson_from_text

doc = ctfjson_from_text('{"my.tracer": {"max-count": 45, "module": "sys"}}')
tracer = doc.root.struct_field_by_name("my.tracer")
tracer.struct_field_by_name("module").as_str()   # "sys"
```

## What this package does not do

It does not open trace directories, read metadata streams, decode
packets or events, merge streams, filter events by time, or print
them. There is no command-line program: `parse_options` only turns
arguments into an `Options` value for a caller to act on.

## Tests

The test suite uses pytest and hypothesis, available through the
`test` extra.