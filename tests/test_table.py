import random

import pytest

from fastmap.hashing import hash_int, hash_string
from fastmap.table import (
    MAX_TOMBSTONES,
    MAX_USED,
    TABLE_HASH_BITS,
    TABLE_ITEMS,
    Table,
)

SEED = 0x1234_5678_9ABC_DEF0


def str_key(i):
    return f"{i:7d} "


def string_hasher(key):
    return hash_string(key, SEED)


def int_hasher(key):
    return hash_int(key, SEED)


def fill(table, keys, hasher):
    added = []
    for i, key in enumerate(keys):
        if not table.add(key, i, hasher(key)):
            break
        added.append(key)
    return added


@pytest.mark.parametrize(
    "make_key, hasher",
    [(str_key, string_hasher), (lambda i: i, int_hasher)],
)
def test_table_add_get_until_full(make_key, hasher):
    table = Table(0)
    added = fill(table, [make_key(i) for i in range(8192)], hasher)
    assert len(added) == MAX_USED + 1
    assert len(table) == MAX_USED + 1
    assert table.occupancy() == 90
    assert [table.get(key, hasher(key)) for key in added] == list(range(len(added)))
    values = [v for _, v in table.items()]
    assert len(values) == len(table)
    assert len(set(values)) == len(table)


@pytest.mark.parametrize(
    "make_key, hasher",
    [(str_key, string_hasher), (lambda i: i, int_hasher)],
)
def test_table_add_del(make_key, hasher):
    table = Table(0)
    keys = fill(table, [make_key(i) for i in range(TABLE_ITEMS)], hasher)
    random.Random(7).shuffle(keys)
    for key in keys:
        if table.delete(key, hasher(key)):
            table = table.rehash(hasher)
    assert len(table) == 0
    assert list(table.items()) == []


def test_get_missing_raises_key_error():
    table = Table(0)
    fill(table, [str_key(i) for i in range(50)], string_hasher)
    with pytest.raises(KeyError):
        table.get("absent", string_hasher("absent"))


def test_swap_returns_old_value():
    table = Table(0)
    key = str_key(3)
    table.add(key, 10, string_hasher(key))
    assert table.swap(key, 20, string_hasher(key)) == 10
    assert table.get(key, string_hasher(key)) == 20
    assert len(table) == 1


def test_swap_missing_raises_key_error():
    with pytest.raises(KeyError):
        Table(0).swap("nope", 1, string_hasher("nope"))


def test_delete_missing_raises_key_error():
    table = Table(0)
    table.add("a", 1, string_hasher("a"))
    with pytest.raises(KeyError):
        table.delete("b", string_hasher("b"))


def test_delete_then_get_fails_and_tombstone_reused():
    table = Table(0)
    keys = fill(table, [str_key(i) for i in range(200)], string_hasher)
    victim = keys[17]
    assert table.delete(victim, string_hasher(victim)) is False
    with pytest.raises(KeyError):
        table.get(victim, string_hasher(victim))
    assert len(table) == 199
    assert table.add(victim, 99, string_hasher(victim)) is True
    assert table.get(victim, string_hasher(victim)) == 99


def test_rehash_signalled_past_tombstone_limit():
    table = Table(3)
    keys = fill(table, [str_key(i) for i in range(400)], string_hasher)
    flags = [table.delete(key, string_hasher(key)) for key in keys[: MAX_TOMBSTONES + 1]]
    assert flags[:-1] == [False] * MAX_TOMBSTONES
    assert flags[-1] is True
    fresh = table.rehash(string_hasher)
    assert fresh.depth == 3
    assert sorted(fresh.items()) == sorted(table.items())
    assert len(fresh) == 400 - (MAX_TOMBSTONES + 1)


def test_full_table_refuses_items():
    table = Table(0)
    fill(table, [str_key(i) for i in range(TABLE_ITEMS)], string_hasher)
    assert table.add("extra", 0, string_hasher("extra")) is False


def test_split_partitions_by_directory_bit():
    table = Table(0)
    fill(table, [str_key(i) for i in range(1000)], string_hasher)
    low, high = table.split(1, string_hasher)
    bit = 1 << TABLE_HASH_BITS
    assert low.depth == 1 and high.depth == 1
    assert all(string_hasher(k) & bit == 0 for k, _ in low.items())
    assert all(string_hasher(k) & bit for k, _ in high.items())
    assert sorted(list(low.items()) + list(high.items())) == sorted(table.items())
    assert len(low) + len(high) == 1000