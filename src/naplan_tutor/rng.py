"""Deterministic, seedable random streams for question generation."""
from typing import Sequence, TypeVar

T = TypeVar("T")

_MASK = 0xFFFFFFFF


def seed_from_string(key: str) -> int:
    """FNV-1a hash of a string key, as an unsigned 32-bit int."""
    h = 2166136261
    for ch in key:
        h ^= ord(ch)
        h = (h * 16777619) & _MASK
    return h


class SeededRandom:
    """Mulberry32 stream seeded from a string key.

    Two instances built from the same key produce the same sequence.
    Nothing is shared between instances.
    """

    def __init__(self, key: str):
        self.key = key
        self._state = seed_from_string(key)

    def next(self) -> float:
        """Next float in [0, 1)."""
        self._state = (self._state + 0x6D2B79F5) & _MASK
        a = self._state
        t = ((a ^ (a >> 15)) * (1 | a)) & _MASK
        t = ((t + (((t ^ (t >> 7)) * (61 | t)) & _MASK)) & _MASK) ^ t
        return ((t ^ (t >> 14)) & _MASK) / 4294967296

    def rand_int(self, low: int, high: int) -> int:
        """Integer in [low, high], both ends inclusive."""
        return int(self.next() * (high - low + 1)) + low

    def pick(self, items: Sequence[T]) -> T:
        return items[self.rand_int(0, len(items) - 1)]

    def shuffle(self, items: Sequence[T]) -> list[T]:
        """Fisher-Yates shuffle of a copy of items."""
        out = list(items)
        for i in range(len(out) - 1, 0, -1):
            j = self.rand_int(0, i)
            out[i], out[j] = out[j], out[i]
        return out
