"""Byte-per-slot sets over a 64-bit word of eight slots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

__all__ = ["SLOTS", "SlotSet", "PackedSet"]

SLOTS = 8
_MASK64 = (1 << 64) - 1
_NON_MEMBER_BITS = 0x7F7F_7F7F_7F7F_7F7F
_GATHER = 0x0102040810204080


def _trailing_zeros(v: int, width: int) -> int:
    if v == 0:
        return width
    return (v & -v).bit_length() - 1


@dataclass(frozen=True)
class SlotSet:
    """Set of slots where byte i is 0x80 when slot i is a member, else 0x00."""

    bits: int = 0

    def __bool__(self) -> bool:
        return self.bits != 0

    def __len__(self) -> int:
        return bin(self.bits).count("1")

    def __iter__(self) -> Iterator[int]:
        current = self
        while current:
            yield current.pos()
            current = current.next()

    def next(self) -> SlotSet:
        """Return the set without its first member."""
        return SlotSet(self.bits & (self.bits - 1) & _MASK64)

    def pos(self) -> int:
        """Return the index of the first member, or SLOTS if the set is empty."""
        return _trailing_zeros(self.bits, 64) >> 3

    def check(self) -> None:
        """Raise ValueError if a byte holds anything other than 0x00 or 0x80."""
        if self.bits & _NON_MEMBER_BITS or not 0 <= self.bits <= _MASK64:
            raise ValueError(f"invalid set {self.bits:016x}")

    def pack(self) -> PackedSet:
        """Return the set with one bit per slot."""
        normalized = self.bits >> 7
        gathered = (normalized * _GATHER) & _MASK64
        return PackedSet(gathered >> 56)


@dataclass(frozen=True)
class PackedSet:
    """Set of slots where bit i is set when slot i is a member."""

    bits: int = 0

    def __bool__(self) -> bool:
        return self.bits != 0

    def pos(self) -> int:
        """Return the index of the first member, or SLOTS if the set is empty."""
        return _trailing_zeros(self.bits & 0xFF, SLOTS)

    def next(self) -> PackedSet:
        """Return the set without its first member."""
        return PackedSet(self.bits & (self.bits - 1) & 0xFF)