"""Open-addressed hash table keyed by 32-bit hashes, one entry per slot."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

PRIME_TABLE = (
    2, 5, 11, 17, 23, 31, 53, 97, 193, 389, 769,
    1543, 3079, 6151, 12289, 24593, 49157,
)


@dataclass
class _Node:
    hash: int = 0
    value: Any = None


def _next_prime(current: int) -> int | None:
    position = PRIME_TABLE.index(current)
    return PRIME_TABLE[position + 1] if position + 1 < len(PRIME_TABLE) else None


class HashTable:
    """A table mapping nonzero 32-bit hashes to values.

    Each hash lives in slot ``hash % mod``. When a new hash collides with a
    different one the table grows to the next prime size that holds every
    entry without a collision; a hash of zero marks an empty slot.
    """

    def __init__(self, size_hint: int = 0) -> None:
        for prime in PRIME_TABLE:
            if size_hint < prime:
                break
        else:
            raise ValueError(f"size hint {size_hint} is too large")
        self._mod = prime
        self._slots = [_Node() for _ in range(prime)]

    def _slot(self, key_hash: int) -> _Node:
        return self._slots[key_hash % self._mod]

    def get(self, key_hash: int) -> Any:
        """Return the value stored under ``key_hash``, or None."""
        node = self._slot(key_hash)
        return node.value if node.hash == key_hash else None

    def set(self, key_hash: int, value: Any) -> bool:
        """Store ``value`` under ``key_hash``; False if the table cannot grow."""
        node = self._slot(key_hash)
        if node.hash in (0, key_hash):
            node.hash = key_hash
            node.value = value
            return True

        new_mod = self._mod
        while True:
            new_mod = _next_prime(new_mod)
            if new_mod is None:
                return False
            new_slots = self._rehash(new_mod)
            if new_slots is not None:
                self._mod = new_mod
                self._slots = new_slots
                return self.set(key_hash, value)

    def _rehash(self, mod: int) -> list[_Node] | None:
        slots = [_Node() for _ in range(mod)]
        for node in self._slots:
            if not node.hash:
                continue
            target = slots[node.hash % mod]
            if target.hash:
                return None
            target.hash = node.hash
            target.value = node.value
        return slots

    def remove(self, key_hash: int) -> None:
        """Drop the entry for ``key_hash`` if it is present."""
        node = self._slot(key_hash)
        if node.hash == key_hash:
            node.hash = 0
            node.value = None

    def clear(self) -> None:
        """Remove every entry and shrink to the smallest size."""
        self._mod = PRIME_TABLE[0]
        self._slots = [_Node() for _ in range(self._mod)]

    def __contains__(self, key_hash: object) -> bool:
        if not isinstance(key_hash, int) or key_hash == 0:
            return False
        return self._slot(key_hash).hash == key_hash

    def __len__(self) -> int:
        return sum(1 for node in self._slots if node.hash)