from __future__ import annotations
from typing import Iterator, Set

from .normalize import fold


class NameSet:
    """Flat set of every loaded name (original casing), used for substring scans."""
    def __init__(self) -> None:
        self._names: Set[str] = set()

    def add(self, entry: str) -> None:
        self._names.add(entry)

    @staticmethod
    def contains_substring(entry: str, needle: str) -> bool:
        return fold(needle) in fold(entry)

    def __contains__(self, entry: object) -> bool:
        return entry in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)
