from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from .normalize import fold


@dataclass(slots=True)
class _Node:
    children: Dict[str, "_Node"] = field(default_factory=dict)
    spellings: Optional[List[str]] = None   # set when an entry ends here


class PrefixIndex:
    """
    Character trie over folded entries.
    Build-time: insert() every entry once at startup (single-threaded).
    Query-time: read-only, so concurrent readers need no locking.

    Each end-marked node keeps the original spellings that folded to its key,
    so search_prefix() can hand back names in the casing they were loaded with.

    Sibling order during enumeration follows dict insertion order of the
    children. It is NOT alphabetical and callers must not rely on any order.
    """
    def __init__(self) -> None:
        self._root = _Node()
        self._keys: int = 0

    # -------- Build-time API --------
    def insert(self, entry: str) -> None:
        node = self._root
        for ch in fold(entry):
            child = node.children.get(ch)
            if child is None:
                child = node.children[ch] = _Node()
            node = child
        if node.spellings is None:
            node.spellings = []
            self._keys += 1
        if entry not in node.spellings:
            node.spellings.append(entry)

    # -------- Query API --------
    def search_prefix(self, prefix: str) -> List[str]:
        """Every loaded entry whose folded form starts with the folded prefix."""
        start = self._find(fold(prefix))
        if start is None:
            return []
        out: List[str] = []
        for _, node in self._walk(start, ""):
            out.extend(node.spellings)  # type: ignore[arg-type]
        return out

    def keys_with_prefix(self, prefix: str) -> List[str]:
        """Folded keys spelled by the trie below prefix (prefix + path-so-far)."""
        p = fold(prefix)
        start = self._find(p)
        if start is None:
            return []
        return [key for key, _ in self._walk(start, p)]

    def __contains__(self, entry: object) -> bool:
        if not isinstance(entry, str):
            return False
        node = self._find(fold(entry))
        return node is not None and node.spellings is not None

    def __len__(self) -> int:
        return self._keys

    # -------- internals --------
    def _find(self, key: str) -> Optional[_Node]:
        node = self._root
        for ch in key:
            node = node.children.get(ch)
            if node is None:
                return None
        return node

    @staticmethod
    def _walk(start: _Node, key: str) -> Iterator[Tuple[str, _Node]]:
        # explicit stack: long shared prefixes must not hit the recursion limit
        stack: List[Tuple[_Node, str]] = [(start, key)]
        while stack:
            node, spelled = stack.pop()
            if node.spellings is not None:
                yield spelled, node
            # reversed so siblings pop in child-insertion order
            for ch, child in reversed(list(node.children.items())):
                stack.append((child, spelled + ch))
