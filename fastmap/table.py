"""Fixed-size open-addressing table of 256 groups of eight slots."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Hashable, Iterator

from fastmap.bitset import SLOTS
from fastmap.header import TOMBSTONE, TOP_HASH_BITS, Header, h1, h2, make_pattern

__all__ = [
    "TABLE_SIZE_LOG2",
    "TABLE_SIZE",
    "TABLE_ITEMS",
    "TABLE_HASH_BITS",
    "MAX_USED",
    "MAX_TOMBSTONES",
    "Table",
]

TABLE_SIZE_LOG2 = 8
TABLE_SIZE = 1 << TABLE_SIZE_LOG2
TABLE_ITEMS = TABLE_SIZE * SLOTS
# Number of hash bits consumed by a table; the rest select the table.
TABLE_HASH_BITS = TOP_HASH_BITS + TABLE_SIZE_LOG2
# A table refuses new items once items plus tombstones exceed this.
MAX_USED = (TABLE_ITEMS * 90) // 100
# A table should be rehashed once its tombstones exceed this.
MAX_TOMBSTONES = (TABLE_ITEMS * 15) // 100

Hasher = Callable[[Any], int]


@dataclass
class _Group:
    header: Header = field(default_factory=Header)
    slots: list = field(default_factory=lambda: [None] * SLOTS)


class Table:
    """A table of groups probed triangularly; items never move once stored."""

    def __init__(self, depth: int = 0) -> None:
        self.depth = depth
        self._groups = [_Group() for _ in range(TABLE_SIZE)]
        self._n_items = 0
        self._n_tombstones = 0

    def __len__(self) -> int:
        return self._n_items

    def __repr__(self) -> str:
        return (
            f"Table(depth={self.depth}, items={self._n_items}, "
            f"tombstones={self._n_tombstones})"
        )

    def occupancy(self) -> int:
        """Return the percentage of slots holding an item."""
        return (self._n_items * 100) // TABLE_ITEMS

    def _probe(self, hash_value: int) -> Iterator[_Group]:
        index = h1(hash_value) & (TABLE_SIZE - 1)
        for step in range(1, TABLE_SIZE + 1):
            yield self._groups[index]
            index = (index + step) % TABLE_SIZE

    def _locate(self, key: Hashable, hash_value: int) -> tuple[_Group, int] | None:
        pattern = make_pattern(h2(hash_value))
        for group in self._probe(hash_value):
            for i in group.header.find(pattern):
                entry = group.slots[i]
                if entry is not None and entry[0] == key:
                    return group, i
            if group.header.has_free_slots():
                return None
        return None

    def get(self, key: Hashable, hash_value: int) -> Any:
        """Return the value stored for key; raise KeyError if it is absent."""
        found = self._locate(key, hash_value)
        if found is None:
            raise KeyError(key)
        group, i = found
        return group.slots[i][1]

    def swap(self, key: Hashable, value: Any, hash_value: int) -> Any:
        """Replace the value stored for key and return the old one.

        Raise KeyError if the key is absent.
        """
        found = self._locate(key, hash_value)
        if found is None:
            raise KeyError(key)
        group, i = found
        old = group.slots[i][1]
        group.slots[i] = (key, value)
        return old

    def add(self, key: Hashable, value: Any, hash_value: int) -> bool:
        """Store a key known to be absent; return False if the table is full."""
        if self._n_items + self._n_tombstones > MAX_USED:
            return False
        top = h2(hash_value)
        for group in self._probe(hash_value):
            unused = group.header.find_unused()
            if unused:
                i = unused.pos()
                group.header = group.header.with_slot(i, top)
                group.slots[i] = (key, value)
                self._n_items += 1
                return True
        return False

    def items(self) -> Iterator[tuple[Any, Any]]:
        """Yield the stored (key, value) pairs in slot order."""
        for group in self._groups:
            for i in group.header.find_used():
                yield group.slots[i]

    def split(self, bit: int, hasher: Hasher) -> tuple[Table, Table]:
        """Distribute the items over two deeper tables by the given directory bit."""
        mask = bit << TABLE_HASH_BITS
        low, high = Table(self.depth + 1), Table(self.depth + 1)
        for key, value in self.items():
            hash_value = hasher(key)
            target = high if hash_value & mask else low
            if not target.add(key, value, hash_value):
                raise RuntimeError("failed to split")
        return low, high

    def rehash(self, hasher: Hasher) -> Table:
        """Return a copy of the table without tombstones."""
        fresh = Table(self.depth)
        for key, value in self.items():
            if not fresh.add(key, value, hasher(key)):
                raise RuntimeError("failed rehashing")
        return fresh

    def delete(self, key: Hashable, hash_value: int) -> bool:
        """Remove key, leaving a tombstone; return True if a rehash is due.

        Raise KeyError if the key is absent.
        """
        found = self._locate(key, hash_value)
        if found is None:
            raise KeyError(key)
        group, i = found
        group.slots[i] = None
        group.header = group.header.with_slot(i, TOMBSTONE)
        self._n_tombstones += 1
        self._n_items -= 1
        return self._n_tombstones > MAX_TOMBSTONES