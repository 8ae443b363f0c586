from __future__ import annotations
from typing import Dict, Generic, Hashable, Iterable, Iterator, List, NamedTuple, Optional, Tuple, TypeVar

T = TypeVar("T", bound=Hashable)


class IndexedHeapError(Exception):
    """Base class for misuse of an :class:`IndexedMinHeap`."""


class DuplicateItemError(IndexedHeapError, ValueError):
    """Raised when inserting an item that is already queued."""


class EmptyHeapError(IndexedHeapError, IndexError):
    """Raised when reading the minimum of an empty heap."""


class MissingItemError(IndexedHeapError, KeyError):
    """Raised when mutating or removing an item that is not queued."""


class _Entry(NamedTuple):
    item: Hashable
    priority: float


class IndexedMinHeap(Generic[T]):
    """A binary min-heap of unique items with externally supplied priorities.

    Each item carries its own float priority, which can be changed after
    insertion. A position index maps every item to its array slot, so
    membership is O(1) and insert / extract / change_priority / remove are
    all O(log n).

    Entries are immutable ``(item, priority)`` records; a priority change
    replaces the record in its slot. All movement of entries goes through
    :meth:`_swap`, which keeps the array and the index in step.
    """

    __slots__ = ("_data", "_index")

    def __init__(self, it: Optional[Iterable[Tuple[T, float]]] = None) -> None:
        self._data: List[_Entry] = []
        self._index: Dict[T, int] = {}
        if it:
            entries = [_Entry(item, float(priority)) for item, priority in it]
            index: Dict[T, int] = {}
            for pos, entry in enumerate(entries):
                if entry.item in index:
                    raise DuplicateItemError(entry.item)
                index[entry.item] = pos
            self._data = entries
            self._index = index
            self._heapify()  # Bulk build in O(n) instead of repeated inserts

    # -----------------------------
    # Internal helpers
    # -----------------------------
    def _swap(self, i: int, j: int) -> None:
        data = self._data
        data[i], data[j] = data[j], data[i]
        self._index[data[i].item] = i
        self._index[data[j].item] = j

    def _sift_up(self, idx: int) -> None:
        data = self._data
        while idx > 0:
            parent = (idx - 1) // 2
            if data[parent].priority <= data[idx].priority:
                break
            self._swap(parent, idx)
            idx = parent

    def _sift_down(self, idx: int) -> None:
        data = self._data
        n = len(data)
        while True:
            left = 2 * idx + 1
            right = 2 * idx + 2
            smallest = idx
            if left < n and data[left].priority < data[smallest].priority:
                smallest = left
            if right < n and data[right].priority < data[smallest].priority:
                smallest = right
            if smallest == idx:
                break
            self._swap(idx, smallest)
            idx = smallest

    def _heapify(self) -> None:
        """Transform the current array into a heap in-place in O(n) time."""
        n = len(self._data)
        for i in reversed(range(n // 2)):
            self._sift_down(i)

    def _pop_last(self) -> _Entry:
        entry = self._data.pop()
        del self._index[entry.item]
        return entry

    # -----------------------------
    # Public API
    # -----------------------------
    def insert(self, item: T, priority: float) -> None:
        """Queue *item* with *priority* (O(log n)).

        Raises DuplicateItemError if the item is already queued.
        """
        if item in self._index:
            raise DuplicateItemError(item)
        self._data.append(_Entry(item, float(priority)))
        self._index[item] = len(self._data) - 1
        self._sift_up(len(self._data) - 1)

    def contains(self, item: T) -> bool:
        """Return True if *item* is queued (O(1))."""
        if not self._data:
            return False
        return item in self._index

    def peek_min(self) -> T:
        """Return the item with the smallest priority without removing it."""
        if not self._data:
            raise EmptyHeapError("peek on empty heap")
        return self._data[0].item  # type: ignore[return-value]

    def peek_min_priority(self) -> float:
        if not self._data:
            raise EmptyHeapError("peek on empty heap")
        return self._data[0].priority

    def extract_min(self) -> T:
        """Remove and return the item with the smallest priority (O(log n))."""
        if not self._data:
            raise EmptyHeapError("extract from empty heap")
        top = self._data[0]
        last = self._data.pop()
        del self._index[top.item]
        if self._data:
            self._data[0] = last
            self._index[last.item] = 0
            self._sift_down(0)
        return top.item  # type: ignore[return-value]

    def change_priority(self, item: T, priority: float) -> None:
        """Set a new priority for a queued *item* and restore heap order.

        An entry only moves towards the leaves when its priority grows and
        towards the root when it shrinks, so a single sift is enough. Equal
        priorities take the sift-down branch, which leaves the array alone.
        """
        if not self.contains(item):
            raise MissingItemError(item)
        idx = self._index[item]
        old = self._data[idx]
        priority = float(priority)
        self._data[idx] = old._replace(priority=priority)
        if priority >= old.priority:
            self._sift_down(idx)
        else:
            self._sift_up(idx)

    def priority(self, item: T) -> float:
        """Return the current priority of a queued *item*."""
        if not self.contains(item):
            raise MissingItemError(item)
        return self._data[self._index[item]].priority

    def remove(self, item: T) -> float:
        """Remove an arbitrary queued *item* and return its priority (O(log n))."""
        if not self.contains(item):
            raise MissingItemError(item)
        idx = self._index[item]
        last = len(self._data) - 1
        if idx != last:
            self._swap(idx, last)
        removed = self._pop_last()
        if idx < len(self._data):
            # The entry moved into idx came from a leaf and may belong either way.
            self._sift_down(idx)
            self._sift_up(idx)
        return removed.priority

    def size(self) -> int:
        return len(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, item: object) -> bool:
        return self.contains(item)  # type: ignore[arg-type]

    def __bool__(self) -> bool:  # pragma: no cover - trivial
        return bool(self._data)

    def __iter__(self) -> Iterator[Tuple[T, float]]:  # pragma: no cover - simple
        # Iterate over the internal array (heap order, not sorted order)
        return ((e.item, e.priority) for e in self._data)  # type: ignore[misc]

    def __repr__(self) -> str:  # pragma: no cover - trivial
        pairs = ", ".join(f"({e.item!r}, {e.priority!r})" for e in self._data)
        return f"IndexedMinHeap([{pairs}])"
