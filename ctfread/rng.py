"""Integer ranges, range sets and named mappings of range sets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Mapping as _MappingABC, Optional, Tuple, Union

from ctfread.ivaltree import Interval, IntervalTree

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
UINT64_MAX = (1 << 64) - 1


@dataclass(frozen=True)
class Range:
    """A closed integer range ``[lower, upper]``."""

    lower: int
    upper: int

    def __post_init__(self) -> None:
        if self.lower > self.upper:
            raise ValueError(f"range lower bound {self.lower} exceeds upper bound {self.upper}")

    def contains(self, value: int) -> bool:
        """Return True if ``value`` lies within the range."""
        return self.lower <= value <= self.upper

    def intersects(self, other: "Range") -> bool:
        """Return True if the two ranges share at least one value."""
        return self.lower <= other.upper and other.lower <= self.upper


RangeLike = Union[Range, Tuple[int, int]]


def _to_range(item: RangeLike) -> Range:
    if isinstance(item, Range):
        return item
    lower, upper = item
    return Range(lower, upper)


class RangeSet:
    """A set of signed (int64) or unsigned (uint64) ranges."""

    def __init__(self, ranges: Iterable[RangeLike], signed: bool = False) -> None:
        self.signed = signed
        lo, hi = (INT64_MIN, INT64_MAX) if signed else (0, UINT64_MAX)
        self._ranges: List[Range] = []
        for item in ranges:
            rng = _to_range(item)
            if rng.lower < lo or rng.upper > hi:
                kind = "signed" if signed else "unsigned"
                raise ValueError(f"{rng} is outside the {kind} 64-bit domain")
            self._ranges.append(rng)

    @property
    def ranges(self) -> Tuple[Range, ...]:
        return tuple(self._ranges)

    def intersects_uint(self, value: int) -> bool:
        """Return True if the unsigned 64-bit ``value`` is in any range."""
        if not 0 <= value <= UINT64_MAX:
            raise ValueError(f"{value} is not an unsigned 64-bit integer")
        return any(r.contains(value) for r in self._ranges)

    def intersects_sint(self, value: int) -> bool:
        """Return True if the signed 64-bit ``value`` is in any range."""
        if not INT64_MIN <= value <= INT64_MAX:
            raise ValueError(f"{value} is not a signed 64-bit integer")
        return any(r.contains(value) for r in self._ranges)

    def intersects_range_set(self, other: "RangeSet") -> bool:
        """Return True if any range of ``self`` overlaps any range of ``other``."""
        return any(a.intersects(b) for a in self._ranges for b in other._ranges)

    def __len__(self) -> int:
        return len(self._ranges)

    def __iter__(self) -> Iterator[Range]:
        return iter(self._ranges)

    def __repr__(self) -> str:
        return f"RangeSet({self._ranges!r}, signed={self.signed})"


class Mappings:
    """Named range sets, queried for the names whose ranges hold a value.

    ``mappings`` is a mapping or an iterable of ``(name, ranges)`` pairs,
    where ``ranges`` is a :class:`RangeSet` or an iterable of ranges.
    """

    def __init__(
        self,
        mappings: Union[_MappingABC, Iterable[Tuple[str, Union[RangeSet, Iterable[RangeLike]]]]],
        signed: bool = False,
    ) -> None:
        self.signed = signed
        self._names: List[str] = []
        self._range_sets: List[RangeSet] = []
        self._tree = IntervalTree()
        pairs = mappings.items() if isinstance(mappings, _MappingABC) else mappings
        for index, (name, ranges) in enumerate(pairs):
            rs = ranges if isinstance(ranges, RangeSet) else RangeSet(ranges, signed)
            if rs.signed != signed:
                raise ValueError(f"mapping {name!r} has a range set of the wrong signedness")
            self._names.append(name)
            self._range_sets.append(rs)
            for rng in rs:
                self._tree.insert(Interval(rng.lower, rng.upper, index))

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(self._names)

    def items(self) -> Iterator[Tuple[str, RangeSet]]:
        """Yield every ``(name, range set)`` pair in definition order."""
        return zip(self._names, self._range_sets)

    def find(self, value: int) -> List[str]:
        """Return the names of all mappings holding ``value``, in definition order."""
        hits = {iv.value for iv in self._tree.iter_intersecting(Interval(value, value))}
        return [self._names[i] for i in sorted(hits)]

    def find_first(self, value: int) -> Optional[str]:
        """Return the first mapping name holding ``value``, or None."""
        found = self.find(value)
        return found[0] if found else None

    def __len__(self) -> int:
        return len(self._names)