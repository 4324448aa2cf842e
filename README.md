# fastmap

`fastmap` is an in-memory hash map built from an extensible directory of
fixed-size tables. Each table holds 256 groups of 8 slots, and each group
keeps an 8-bit top hash per slot packed into a 64-bit header. Deleting an item
leaves a tombstone, and items never move inside a table. A table that has
passed 90% usage (items plus tombstones) is split in two by one more hash bit,
and the directory doubles when the table was already as deep as the
directory. A table whose tombstones pass 15% of its slots is rebuilt without
them.

Keys are hashed with a seeded 64-bit hash. The seed is random unless you give
one, so the layout differs from one run to the next.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Using the caches

Two ready-made caches are provided: `StringCache` for `str` keys and
`IntCache` for integer keys that fit in a signed 64-bit value. Values may be
any Python object.

```python
from fastmap.cache import StringCache, IntCache

cache = StringCache()

cache.add("alpha", 1)      # None: the key was new
cache.add("alpha", 2)      # 1: the old value, now replaced by 2

cache["alpha"]             # 2
"alpha" in cache           # True
cache.get("beta")          # None
cache.get("beta", -1)      # -1
len(cache)                 # 1
cache.capacity()           # number of item slots addressed by the directory

cache.discard("alpha")     # removes the key; does nothing if it is absent
len(cache)                 # 0

numbers = IntCache(seed=12345)   # a fixed seed gives reproducible hashing
for i in range(10_000):
    numbers.add(i, i * i)
numbers[99]                # 9801
```

`cache[key]` raises `KeyError` for a missing key. `add` returns `None` for a
new key, so when `None` is itself stored as a value, use `in` to tell the two
cases apart. An `IntCache` key outside the signed 64-bit range raises
`OverflowError`.

`Cache` takes your own hash function, `hasher(key, seed) -> int`, which must
return a 64-bit unsigned value:

```python
from fastmap.cache import Cache
from fastmap.hashing import hash_string

cache = Cache(hash_string, seed=42)
```

## Lower-level pieces

- `fastmap.hashing`: `make_seed` (a random 64-bit seed from `secrets`),
  `hash_uint64` and `hash_uint32` (seeded integer mixers), `hash_string`
  (keyed BLAKE2b cut to 64 bits) and `hash_int` (signed 64-bit keys, wrapped
  as two's complement). Out-of-range values or seeds raise `ValueError`.
- `fastmap.header`: `Header`, a packed group header of eight top-hash bytes
  with `has_free_slots`, `find`, `find_zeros`, `find_unused`, `find_used`,
  `first_free`, `with_slot` and `check`; and the helpers `make_pattern`, `h1`
  and `h2`.
- `fastmap.bitset`: `SlotSet`, a set of slots with the byte `0x80` marking a
  member (iterable, with `len`, `pos`, `next`, `check` and `pack`), and
  `PackedSet`, the same set with one bit per slot.
- `fastmap.table`: `Table`, a single table of groups with `get`, `swap`,
  `add`, `delete`, `items`, `split`, `rehash` and `occupancy`. `get`, `swap`
  and `delete` raise `KeyError` for a missing key; `add` returns `False` when
  the table is full.

## What it does not do

The caches live in memory only; nothing is saved to disk. A `Cache` cannot be
iterated and has no `del cache[key]` or `cache[key] = value`; use `discard`
and `add`. There is no locking, so sharing one cache between threads is up to
the caller.