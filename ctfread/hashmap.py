"""Open-addressing hash map with linear probing and a few hash functions.

The table size is always a power of two so that wrapping a probe is a
mask operation. The table doubles once it is half full, and deletion
shifts later entries back so that no tombstones are needed.
"""

from __future__ import annotations

from typing import Callable, Generic, Hashable, Iterator, List, Optional, Tuple, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

_U64 = (1 << 64) - 1
_U32 = (1 << 32) - 1
# Hash value reserved to mark an empty slot; real hashes equal to it are
# moved down by one.
_NOENT = _U64

_FNV_OFFSET_BASIS = 14695981039346656037
_FNV_PRIME = 1099511628211


def hash_identity(value: int) -> int:
    """Use the integer itself, truncated to 64 bits, as its hash."""
    return value & _U64


def hash_murmur64(value: int) -> int:
    """MurmurHash3 64-bit finaliser."""
    v = value & _U64
    v ^= v >> 33
    v = (v * 0xFF51AFD7ED558CCD) & _U64
    v ^= v >> 33
    v = (v * 0xC4CEB9FE1A85EC53) & _U64
    v ^= v >> 33
    return v


def hash_fnv(text: str | bytes) -> int:
    """64-bit FNV-1a hash of a string (encoded as UTF-8) or of raw bytes."""
    data = text.encode("utf-8") if isinstance(text, str) else bytes(text)
    h = _FNV_OFFSET_BASIS
    for byte in data:
        h ^= byte
        h = (h * _FNV_PRIME) & _U64
    return h


def next_pow2(value: int) -> int:
    """Round a 32-bit value up to a power of two; zero and overflow give 1."""
    v = ((value & _U32) - 1) & _U32
    for shift in (1, 2, 4, 8, 16):
        v |= v >> shift
    v = (v + 1) & _U32
    return v or 1


def is_pow2(value: int) -> bool:
    """Return True if ``value`` is a positive power of two."""
    return value > 0 and (value & (value - 1)) == 0


_Slot = Tuple[int, object, object]


class OpenHashMap(Generic[K, V]):
    """Hash map keyed through a caller-supplied integer hash function.

    Keys are compared with ``==``. Inserting a key that is already present
    adds a second entry; :meth:`find` then returns the value stored first.
    """

    def __init__(self, hash_func: Callable[[K], int], capacity: int = 8) -> None:
        if not is_pow2(capacity):
            raise ValueError(f"capacity must be a power of two, got {capacity}")
        self._hash_func = hash_func
        self._slots: List[Optional[_Slot]] = [None] * capacity
        self._len = 0

    @property
    def capacity(self) -> int:
        """Number of slots in the table."""
        return len(self._slots)

    def _hash(self, key: K) -> int:
        h = self._hash_func(key) & _U64
        return h - 1 if h == _NOENT else h

    def _place(self, h: int, key: K, value: V) -> None:
        mask = len(self._slots) - 1
        index = h & mask
        while self._slots[index] is not None:
            index = (index + 1) & mask
        self._slots[index] = (h, key, value)

    def _grow(self) -> None:
        old = self._slots
        self._slots = [None] * (len(old) * 2)
        for slot in old:
            if slot is not None:
                self._place(*slot)

    def _locate(self, key: K) -> Optional[int]:
        mask = len(self._slots) - 1
        start = self._hash(key) & mask
        for step in range(len(self._slots)):
            index = (start + step) & mask
            slot = self._slots[index]
            if slot is None:
                return None
            if slot[1] == key:
                return index
        return None

    def insert(self, key: K, value: V) -> None:
        """Add ``key`` with ``value``, growing the table when half full."""
        self._place(self._hash(key), key, value)
        self._len += 1
        if self._len >= len(self._slots) >> 1:
            self._grow()

    def find(self, key: K) -> Optional[V]:
        """Return the value stored for ``key``, or None if it is absent."""
        index = self._locate(key)
        if index is None:
            return None
        return self._slots[index][2]  # type: ignore[index,return-value]

    def delete(self, key: K) -> None:
        """Remove ``key``; raise KeyError if it is absent."""
        hole = self._locate(key)
        if hole is None:
            raise KeyError(key)
        slots = self._slots
        mask = len(slots) - 1
        slots[hole] = None
        index = hole
        while True:
            index = (index + 1) & mask
            slot = slots[index]
            if slot is None:
                break
            home = slot[0] & mask
            # The entry may stay if its home lies cyclically in (hole, index].
            if hole <= index:
                stays = hole < home <= index
            else:
                stays = home > hole or home <= index
            if not stays:
                slots[hole] = slot
                slots[index] = None
                hole = index
        self._len -= 1

    def __contains__(self, key: object) -> bool:
        return self._locate(key) is not None  # type: ignore[arg-type]

    def __len__(self) -> int:
        return self._len

    def __iter__(self) -> Iterator[K]:
        for key, _ in self.items():
            yield key

    def items(self) -> Iterator[Tuple[K, V]]:
        """Yield every ``(key, value)`` pair in table order."""
        for slot in list(self._slots):
            if slot is not None:
                yield slot[1], slot[2]  # type: ignore[misc]