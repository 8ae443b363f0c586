from __future__ import annotations
from typing import Dict, Iterable, Iterator, List, Optional


class _TrieNode:
    """One character edge target; ``is_key`` marks the end of a stored key."""

    __slots__ = ("children", "is_key")

    def __init__(self) -> None:
        self.children: Dict[str, _TrieNode] = {}
        self.is_key = False


class TrieSet:
    """A set of strings stored as a character trie.

    Supports membership, insertion, prefix enumeration and longest-prefix
    lookup. Empty strings are never stored.
    """

    __slots__ = ("_root", "_size")

    def __init__(self, it: Optional[Iterable[str]] = None) -> None:
        self._root = _TrieNode()
        self._size = 0
        if it is not None:
            for key in it:
                self.insert(key)

    # -----------------------------
    # Internal helpers
    # -----------------------------
    def _find(self, key: str) -> Optional[_TrieNode]:
        """Return the node reached by walking *key*, or None if it falls off."""
        node = self._root
        for c in key:
            node = node.children.get(c)
            if node is None:
                return None
        return node

    def _collect(self, node: _TrieNode, word: str, out: List[str]) -> None:
        stack = [(node, word)]
        while stack:
            node, word = stack.pop()
            if node.is_key:
                out.append(word)
            # Reversed so branches come off the stack in insertion order.
            for c, child in reversed(list(node.children.items())):
                stack.append((child, word + c))

    # -----------------------------
    # Public API
    # -----------------------------
    def insert(self, key: str) -> None:
        """Add *key* to the set (no-op for empty or already-present keys)."""
        if not key:
            return
        node = self._root
        for c in key:
            nxt = node.children.get(c)
            if nxt is None:
                nxt = node.children[c] = _TrieNode()
            node = nxt
        if not node.is_key:
            node.is_key = True
            self._size += 1

    def contains(self, key: str) -> bool:
        if not key:
            return False
        node = self._find(key)
        return node is not None and node.is_key

    def keys_with_prefix(self, prefix: str) -> List[str]:
        """Return every stored key that starts with *prefix*.

        The prefix itself is included when it is a stored key. An empty
        prefix returns all keys.
        """
        out: List[str] = []
        node = self._find(prefix)
        if node is not None:
            self._collect(node, prefix, out)
        return out

    def longest_prefix_of(self, key: str) -> Optional[str]:
        """Return the longest stored key that is a prefix of *key*, or None."""
        best: Optional[str] = None
        node = self._root
        for i, c in enumerate(key):
            node = node.children.get(c)
            if node is None:
                break
            if node.is_key:
                best = key[: i + 1]
        return best

    def clear(self) -> None:
        self._root = _TrieNode()
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.contains(key)

    def __iter__(self) -> Iterator[str]:  # pragma: no cover - simple
        return iter(self.keys_with_prefix(""))

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"TrieSet({self.keys_with_prefix('')!r})"
