from .indexed_heap import (
    DuplicateItemError,
    EmptyHeapError,
    IndexedHeapError,
    IndexedMinHeap,
    MissingItemError,
)
from .kd_tree import KDTree, Point
from .trie import TrieSet

__all__ = [
    "IndexedMinHeap",
    "IndexedHeapError",
    "DuplicateItemError",
    "EmptyHeapError",
    "MissingItemError",
    "KDTree",
    "Point",
    "TrieSet",
]
