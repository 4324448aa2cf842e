"""Hash map built from an extensible directory of fixed-size tables."""

from __future__ import annotations

from typing import Any, Callable, Hashable

from fastmap.hashing import hash_int, hash_string, make_seed
from fastmap.table import TABLE_HASH_BITS, TABLE_ITEMS, Table

__all__ = ["Cache", "StringCache", "IntCache"]

_MISSING = object()


class Cache:
    """Map whose full tables are split in two, doubling the directory as needed."""

    def __init__(self, hasher: Callable[[Any, int], int], seed: int | None = None) -> None:
        self._hasher = hasher
        self._seed = make_seed() if seed is None else seed
        self._tables: list[Table] = [Table(0)]
        self._depth = 0
        self._count = 0

    def _hash(self, key: Hashable) -> int:
        return self._hasher(key, self._seed)

    def _table_index(self, hash_value: int) -> int:
        return (hash_value >> TABLE_HASH_BITS) & (len(self._tables) - 1)

    def __len__(self) -> int:
        return self._count

    def __contains__(self, key: Hashable) -> bool:
        return self.get(key, _MISSING) is not _MISSING

    def __getitem__(self, key: Hashable) -> Any:
        hash_value = self._hash(key)
        return self._tables[self._table_index(hash_value)].get(key, hash_value)

    def get(self, key: Hashable, default: Any = None) -> Any:
        """Return the value stored for key, or default if it is absent."""
        try:
            return self[key]
        except KeyError:
            return default

    def add(self, key: Hashable, value: Any) -> Any:
        """Store value under key; return the replaced value, or None for a new key."""
        hash_value = self._hash(key)
        table = self._tables[self._table_index(hash_value)]
        try:
            return table.swap(key, value, hash_value)
        except KeyError:
            pass
        while not table.add(key, value, hash_value):
            self._split(table, hash_value)
            table = self._tables[self._table_index(hash_value)]
        self._count += 1
        return None

    def _split(self, table: Table, hash_value: int) -> None:
        if table.depth == self._depth:
            self._tables = self._tables + self._tables
            self._depth += 1
        size = len(self._tables)
        step = 1 << table.depth
        first = (hash_value >> TABLE_HASH_BITS) & (step - 1)
        low, high = table.split(step, self._hash)
        for index in range(first, size, 2 * step):
            self._tables[index] = low
            self._tables[index + step] = high

    def discard(self, key: Hashable) -> None:
        """Remove key if it is present."""
        hash_value = self._hash(key)
        table = self._tables[self._table_index(hash_value)]
        try:
            needs_rehash = table.delete(key, hash_value)
        except KeyError:
            return
        self._count -= 1
        if needs_rehash:
            fresh = table.rehash(self._hash)
            step = 1 << table.depth
            first = (hash_value >> TABLE_HASH_BITS) & (step - 1)
            for index in range(first, len(self._tables), step):
                self._tables[index] = fresh

    def capacity(self) -> int:
        """Return the number of item slots addressed by the directory."""
        return len(self._tables) * TABLE_ITEMS


class StringCache(Cache):
    """Cache keyed by strings."""

    def __init__(self, seed: int | None = None) -> None:
        super().__init__(hash_string, seed)


class IntCache(Cache):
    """Cache keyed by signed 64-bit integers."""

    def __init__(self, seed: int | None = None) -> None:
        super().__init__(hash_int, seed)