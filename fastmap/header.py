"""Group headers packing eight one-byte top hashes into a 64-bit word.

A zero byte marks a free slot and 0x80 a tombstone. Items are inserted
into the first unused slot, so free slots stay packed at the end of a
header and a header with a free slot ends a probe sequence.
"""

from __future__ import annotations

from dataclasses import dataclass

from fastmap.bitset import SLOTS, SlotSet

__all__ = [
    "TOP_HASH_BITS",
    "FREE_SLOT",
    "TOMBSTONE",
    "Header",
    "make_pattern",
    "h1",
    "h2",
]

TOP_HASH_BITS = 8
FREE_SLOT = 0x00
TOMBSTONE = 0x80

_MASK64 = (1 << 64) - 1
_LOW7 = 0x7F7F_7F7F_7F7F_7F7F
_HIGH = 0x8080_8080_8080_8080
_ONES = 0x0101_0101_0101_0101


def make_pattern(b: int) -> int:
    """Return a word with every byte set to b, for use with Header.find."""
    if not 0 <= b <= 0xFF:
        raise ValueError(f"byte {b!r} is out of range")
    return b * _ONES


def h1(hash_value: int) -> int:
    """Return the part of the hash that selects the group."""
    return hash_value >> TOP_HASH_BITS


def h2(hash_value: int) -> int:
    """Return the top hash byte stored in the header; never free or a tombstone."""
    b = hash_value & 0xFF
    if b & 0x7F == 0:
        b |= 0x01
    return b


@dataclass(frozen=True)
class Header:
    """Eight top hash bytes, byte i (from the least significant) for slot i."""

    bits: int = 0

    def has_free_slots(self) -> bool:
        """Return True if the header has at least one free slot."""
        return self.bits >> 56 == 0

    def find(self, pattern: int) -> SlotSet:
        """Return the slots whose byte equals the pattern byte."""
        return Header((self.bits ^ pattern) & _MASK64).find_zeros()

    def find_zeros(self) -> SlotSet:
        """Return the slots holding a zero byte."""
        v = ((self.bits & _LOW7) + _LOW7) & _MASK64
        v |= self.bits | _LOW7
        return SlotSet(~v & _MASK64)

    def find_unused(self) -> SlotSet:
        """Return the free slots and tombstones."""
        v = ((self.bits & _LOW7) + _LOW7) & _MASK64
        v |= _LOW7
        return SlotSet(~v & _MASK64)

    def find_used(self) -> SlotSet:
        """Return the slots holding an item."""
        v = ((self.bits & _LOW7) + _LOW7) & _MASK64
        return SlotSet(v & _HIGH)

    def first_free(self) -> int:
        """Return the index of the first free slot, or SLOTS if there is none."""
        leading_zeros = 64 - self.bits.bit_length()
        return SLOTS - (leading_zeros >> 3)

    def with_slot(self, i: int, b: int) -> Header:
        """Return a header with byte i replaced by b."""
        if not 0 <= i < SLOTS:
            raise IndexError(f"slot {i!r} is out of range")
        if not 0 <= b <= 0xFF:
            raise ValueError(f"byte {b!r} is out of range")
        shift = i * 8
        b ^= (self.bits >> shift) & 0xFF
        return Header(self.bits ^ (b << shift))

    def check(self) -> None:
        """Raise ValueError if a free slot precedes a used one."""
        zeros = self.find_zeros().bits
        shift = 64 if zeros == 0 else (zeros & -zeros).bit_length() - 1
        expected = (_ONES << shift) & _MASK64
        if expected != zeros:
            raise ValueError(f"header {self.bits:016x} has non terminal free slots")