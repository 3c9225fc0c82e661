# orbiter/engine/partition.py
"""
"Self vs. rest" access over one list without copying it.

`split_at(items, i)` hands out the element at `i` together with a `Rest`
covering every other element in list order (everything before `i`,
then everything after). The center is never produced by the traversal, so a
caller may mutate it freely while reading the others.
"""
from itertools import chain
from typing import Callable, Generic, Iterator, List, Optional, Tuple, TypeVar

T = TypeVar("T")


class SliceView(Generic[T]):
    """Window [start, stop) over a list. Holds a reference, never a copy."""

    __slots__ = ("_seq", "start", "stop")

    def __init__(self, seq: List[T], start: int, stop: int):
        if not 0 <= start <= stop <= len(seq):
            raise IndexError(f"invalid window [{start}, {stop}) over {len(seq)} items")
        self._seq = seq
        self.start = start
        self.stop = stop

    def __len__(self) -> int:
        return self.stop - self.start

    def __iter__(self) -> Iterator[T]:
        seq = self._seq
        for k in range(self.start, self.stop):
            yield seq[k]

    def __getitem__(self, k: int) -> T:
        n = len(self)
        if k < 0:
            k += n
        if not 0 <= k < n:
            raise IndexError("SliceView index out of range")
        return self._seq[self.start + k]


class Rest(Generic[T]):
    """Two disjoint views traversed as one: `before` then `after`."""

    __slots__ = ("before", "after")

    def __init__(self, before: SliceView[T], after: SliceView[T]):
        self.before = before
        self.after = after

    def __len__(self) -> int:
        return len(self.before) + len(self.after)

    def __iter__(self) -> Iterator[T]:
        return chain(self.before, self.after)

    def find(self, predicate: Callable[[T], bool]) -> Optional[T]:
        for item in self:
            if predicate(item):
                return item
        return None


def split_at(items: List[T], i: int) -> Tuple[T, Rest[T]]:
    n = len(items)
    if not 0 <= i < n:
        raise IndexError(f"split index {i} out of range for {n} items")
    return items[i], Rest(SliceView(items, 0, i), SliceView(items, i + 1, n))


def for_each_split(items: List[T], fn: Callable[[T, Rest[T]], None]) -> None:
    """Apply fn(center, rest) for every element, in list order."""
    for i in range(len(items)):
        center, rest = split_at(items, i)
        fn(center, rest)
