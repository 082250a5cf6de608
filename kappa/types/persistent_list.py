"""Immutable singly linked list used for list values and code forms.

`cons` never copies: the new cell points at the existing list, so many lists
may share one tail. Nothing in the class mutates a cell after construction.
"""

from __future__ import annotations

from collections.abc import Sequence
from itertools import islice
from typing import Iterable, Iterator

from kappa import LispValue


class PersistentList(Sequence):
    __slots__ = ("_first", "_rest", "_count")

    def __init__(self, first: LispValue = None, rest: PersistentList | None = None, count: int = 0):
        self._first = first
        self._rest = rest
        self._count = count

    @classmethod
    def from_iterable(cls, items: Iterable[LispValue]) -> PersistentList:
        result = EMPTY_LIST
        for item in reversed(list(items)):
            result = result.cons(item)
        return result

    def cons(self, value: LispValue) -> PersistentList:
        return PersistentList(value, self, self._count + 1)

    @property
    def first(self) -> LispValue:
        """Head of the list; None for the empty list."""
        return self._first

    @property
    def rest(self) -> PersistentList:
        """Tail of the list; the empty list is its own rest."""
        return self._rest if self._rest is not None else EMPTY_LIST

    def is_empty(self) -> bool:
        return self._count == 0

    def __len__(self) -> int:
        return self._count

    def __bool__(self) -> bool:
        return self._count > 0

    def __iter__(self) -> Iterator[LispValue]:
        node = self
        while node._count:
            yield node._first
            node = node._rest

    def __getitem__(self, index):
        if isinstance(index, slice):
            start, stop, step = index.indices(self._count)
            if step == 1:
                node = self
                for _ in range(start):
                    node = node._rest
                if stop >= self._count:
                    # Shares the tail with the original list
                    return node
                return PersistentList.from_iterable(islice(node, max(stop - start, 0)))
            return PersistentList.from_iterable(list(self)[index])
        if index < 0:
            index += self._count
        if not 0 <= index < self._count:
            raise IndexError("PersistentList index out of range")
        node = self
        for _ in range(index):
            node = node._rest
        return node._first

    def __eq__(self, other) -> bool:
        if not isinstance(other, PersistentList):
            return NotImplemented
        if self._count != other._count:
            return False
        a, b = self, other
        while a._count:
            if a is b:
                return True
            if not _same_value(a._first, b._first):
                return False
            a, b = a._rest, b._rest
        return True

    def __hash__(self) -> int:
        return hash(("PersistentList", tuple(self)))

    def __repr__(self) -> str:
        return f"plist({', '.join(repr(x) for x in self)})"

    def __str__(self) -> str:
        return "(" + " ".join(str(x) for x in self) + ")"


def _same_value(a: LispValue, b: LispValue) -> bool:
    # Keep true/1 and false/0 apart, Python's == does not.
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    return a == b


EMPTY_LIST = PersistentList()


def plist(*items: LispValue) -> PersistentList:
    """Build a list from positional items: plist(1, 2, 3) -> (1 2 3)."""
    return PersistentList.from_iterable(items)
