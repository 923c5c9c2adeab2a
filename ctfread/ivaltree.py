"""Augmented red-black interval tree.

Intervals are closed (``upper`` is inclusive) and ordered by their lower
bound. Every node keeps the largest upper bound found in its subtree,
which lets intersection queries skip subtrees that cannot match.
"""

from __future__ import annotations

from typing import Any, Iterator, List, Optional

_LEFT = 0
_RIGHT = 1


class Interval:
    """A closed integer interval ``[lower, upper]`` with an optional payload."""

    __slots__ = ("lower", "upper", "value", "_c", "_parent", "_red", "_link_max", "_tree")

    def __init__(self, lower: int, upper: int, value: Any = None) -> None:
        self.lower = lower
        self.upper = upper
        self.value = value
        self._c: List[Optional[Interval]] = [None, None]
        self._parent: Optional[Interval] = None
        self._red = False
        self._link_max = upper
        self._tree: Optional[IntervalTree] = None

    def contains(self, point: int) -> bool:
        """Return True if ``point`` lies within the interval."""
        return self.lower <= point <= self.upper

    def intersects(self, other: "Interval") -> bool:
        """Return True if the two intervals share at least one point."""
        return self.lower <= other.upper and other.lower <= self.upper

    def __repr__(self) -> str:
        if self.value is None:
            return f"Interval({self.lower}, {self.upper})"
        return f"Interval({self.lower}, {self.upper}, {self.value!r})"


class IntervalTree:
    """A red-black tree of :class:`Interval` objects supporting overlap queries.

    Intervals are stored by identity: the same object that was inserted
    must be passed to :meth:`delete`.
    """

    def __init__(self) -> None:
        nil = Interval(0, 0)
        nil._c = [nil, nil]
        nil._parent = nil
        self._nil = nil
        self._root = nil
        self._size = 0

    # ----- augmentation -------------------------------------------------

    def _update(self, x: Interval) -> None:
        if x is self._nil:
            return
        best = x.upper
        for child in x._c:
            if child is not self._nil and child._link_max > best:
                best = child._link_max
        x._link_max = best

    # ----- structural primitives -----------------------------------------

    def _rotate(self, x: Interval, d: int) -> None:
        """Rotate ``x`` towards direction ``d`` (left rotation for _LEFT)."""
        nil = self._nil
        f = 1 - d
        y = x._c[f]
        x._c[f] = y._c[d]
        if x._c[f] is not nil:
            x._c[f]._parent = x
        y._parent = x._parent
        p = x._parent
        if p is nil:
            self._root = y
        elif p._c[d] is x:
            p._c[d] = y
        else:
            p._c[f] = y
        y._c[d] = x
        x._parent = y
        self._update(x)
        self._update(y)

    def _insert_rebalance(self, x: Interval) -> None:
        while x._parent._red:
            p = x._parent
            g = p._parent
            d = _LEFT if p is g._c[_LEFT] else _RIGHT
            uncle = g._c[1 - d]
            if uncle._red:
                p._red = False
                uncle._red = False
                g._red = True
                x = g
            else:
                if x is p._c[1 - d]:
                    x = p
                    self._rotate(x, d)
                x._parent._red = False
                x._parent._parent._red = True
                self._rotate(x._parent._parent, 1 - d)
        self._root._red = False

    def _replace(self, x: Interval, y: Interval) -> None:
        p = x._parent
        if p is self._nil:
            self._root = y
        elif p._c[_RIGHT] is x:
            p._c[_RIGHT] = y
        else:
            p._c[_LEFT] = y
        y._parent = p

    def _min(self, x: Interval) -> Interval:
        while x._c[_LEFT] is not self._nil:
            x = x._c[_LEFT]
        return x

    def _rebalance_delete(self, x: Interval) -> Interval:
        """Restore red-black properties; return the deepest node needing an update."""
        while self._root is not x and not x._red:
            p = x._parent
            d = _LEFT if x is p._c[_LEFT] else _RIGHT
            f = 1 - d
            s = p._c[f]
            if s._red:
                p._red = True
                s._red = False
                self._rotate(p, d)
                s = x._parent._c[f]
            if not s._c[_LEFT]._red and not s._c[_RIGHT]._red:
                s._red = True
                self._update(x)
                x = x._parent
            else:
                if not s._c[f]._red:
                    s._red = True
                    s._c[d]._red = False
                    self._rotate(s, f)
                    s = x._parent._c[f]
                s._red = x._parent._red
                x._parent._red = False
                s._c[f]._red = False
                self._rotate(x._parent, d)
                self._root._red = False
                return x
        x._red = False
        return x

    # ----- public API ----------------------------------------------------

    def insert(self, interval: Interval) -> None:
        """Insert ``interval`` into the tree."""
        if interval._tree is not None:
            raise ValueError(f"{interval!r} is already in a tree")
        nil = self._nil
        interval._link_max = interval.upper
        interval._c = [nil, nil]
        interval._tree = self
        self._size += 1

        if self._root is nil:
            interval._parent = nil
            interval._red = False
            self._root = interval
            self._update(interval)
            return

        cur = self._root
        par = nil
        side = _LEFT
        while cur is not nil:
            if interval.upper > cur._link_max:
                cur._link_max = interval.upper
            par = cur
            side = _LEFT if interval.lower < cur.lower else _RIGHT
            cur = cur._c[side]
        interval._parent = par
        interval._red = True
        par._c[side] = interval
        self._insert_rebalance(interval)

    def delete(self, interval: Interval) -> None:
        """Remove ``interval`` (by identity) from the tree."""
        if interval._tree is not self:
            raise ValueError(f"{interval!r} is not in this tree")
        nil = self._nil
        x = interval
        deleted_red = x._red
        if x._c[_LEFT] is nil:
            y = x._c[_RIGHT]
            self._replace(x, y)
        elif x._c[_RIGHT] is nil:
            y = x._c[_LEFT]
            self._replace(x, y)
        else:
            m = self._min(x._c[_RIGHT])
            deleted_red = m._red
            y = m._c[_RIGHT]
            if m._parent is x:
                y._parent = m
            else:
                self._replace(m, m._c[_RIGHT])
                m._c[_RIGHT] = x._c[_RIGHT]
                m._c[_RIGHT]._parent = m
            self._replace(x, m)
            m._c[_LEFT] = x._c[_LEFT]
            m._c[_LEFT]._parent = m
            m._red = x._red

        if not deleted_red:
            y = self._rebalance_delete(y)
        else:
            y = y._parent
        while True:
            self._update(y)
            y = y._parent
            if y is nil:
                break

        x._c = [None, None]
        x._parent = None
        x._red = False
        x._link_max = x.upper
        x._tree = None
        self._size -= 1

    def intersect(self, query: Interval, last_match: Optional[Interval] = None) -> Optional[Interval]:
        """Return an interval overlapping ``query``, or None.

        Passing the previous result as ``last_match`` continues the search
        and yields the next overlapping interval, until None is returned.
        """
        nil = self._nil
        if last_match is not None and last_match._tree is not self:
            raise ValueError(f"{last_match!r} is not in this tree")
        cur = last_match if last_match is not None else self._root
        while cur is not nil:
            if cur is not last_match and cur.intersects(query):
                return cur
            p = cur
            left = cur._c[_LEFT]
            if left is not nil and left._link_max >= query.lower:
                cur = left
            else:
                cur = cur._c[_RIGHT]
            if cur is nil and last_match is not None:
                while p is not nil:
                    right = p._c[_RIGHT]
                    if (
                        cur is p._c[_LEFT]
                        and right is not nil
                        and right._link_max >= query.lower
                        and p.lower <= query.upper
                    ):
                        cur = right
                        break
                    cur = p
                    p = p._parent
                if cur is self._root:
                    break
        return None

    def intersect_point(self, point: int, last_match: Optional[Interval] = None) -> Optional[Interval]:
        """Like :meth:`intersect` for the single point ``point``."""
        return self.intersect(Interval(point, point), last_match)

    def iter_intersecting(self, query: Interval) -> Iterator[Interval]:
        """Yield every interval overlapping ``query`` exactly once."""
        match = self.intersect(query)
        while match is not None:
            yield match
            match = self.intersect(query, match)

    def validate(self) -> None:
        """Check every tree invariant; raise ValueError on the first violation."""
        nil = self._nil
        if nil._red:
            raise ValueError("sentinel is red")
        root = self._root
        if root is nil:
            if self._size:
                raise ValueError("empty tree with non-zero size")
            return
        if root._red:
            raise ValueError("root is red")
        if root._parent is not nil:
            raise ValueError("root has a parent")

        def check(n: Interval) -> tuple:
            """Return (black height, node count, max upper) of subtree n."""
            if n is nil:
                return 1, 0, None
            best = n.upper
            heights = []
            count = 1
            for d, child in enumerate(n._c):
                if child is not nil:
                    if child._parent is not n:
                        raise ValueError(f"{child!r} has wrong parent")
                    if n._red and child._red:
                        raise ValueError(f"red {n!r} has red child {child!r}")
                    if d == _LEFT and child.lower > n.lower:
                        raise ValueError(f"left child {child!r} sorts after {n!r}")
                    if d == _RIGHT and child.lower < n.lower:
                        raise ValueError(f"right child {child!r} sorts before {n!r}")
                h, c, m = check(child)
                heights.append(h)
                count += c
                if m is not None and m > best:
                    best = m
            if heights[0] != heights[1]:
                raise ValueError(f"unequal black heights below {n!r}")
            if n._link_max != best:
                raise ValueError(f"{n!r} has stale subtree maximum")
            return heights[0] + (0 if n._red else 1), count, best

        _, count, _ = check(root)
        if count != self._size:
            raise ValueError("node count does not match size")

    def to_dot(self) -> str:
        """Render the tree as a Graphviz DOT graph."""
        nil = self._nil

        def nid(n: Interval) -> str:
            return "nil" if n is nil else f"{id(n):#x}"

        lines = [
            "graph {",
            '    label="<lower> | <upper> | <linkmax> | <left> | <right>"',
            "    node [shape=record];",
        ]
        stack = [self._root] if self._root is not nil else []
        while stack:
            n = stack.pop()
            color = "red" if n._red else "black"
            lines.append(
                f'    "{nid(n)}" [color={color}, label="<lower> {n.lower} |<upper> {n.upper} '
                f'|<linkmax> {n._link_max} |<left> {nid(n._c[_LEFT])} |<right> {nid(n._c[_RIGHT])}"]'
            )
            p = n._parent
            if p is not nil:
                side = "left" if p._c[_LEFT] is n else "right"
                lines.append(f'    "{nid(p)}":{side} -- "{nid(n)}"')
            for child in (n._c[_RIGHT], n._c[_LEFT]):
                if child is not nil:
                    stack.append(child)
        lines.append("}")
        return "\n".join(lines) + "\n"

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Interval]:
        nil = self._nil
        stack: List[Interval] = []
        cur = self._root
        while stack or cur is not nil:
            while cur is not nil:
                stack.append(cur)
                cur = cur._c[_LEFT]
            cur = stack.pop()
            yield cur
            cur = cur._c[_RIGHT]