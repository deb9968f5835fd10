from __future__ import annotations
import logging
from typing import List

from .models import RankedName, RankedResult
from .nameset import NameSet
from .normalize import fold
from .trie import PrefixIndex

log = logging.getLogger(__name__)


def _substring_key(name: str) -> tuple[int, str, str]:
    # shorter first, then case-insensitive alphabetical; raw name keeps ties stable
    return (len(name), fold(name), name)


class RankedSearch:
    """
    Two-tier ranking over a loaded PrefixIndex + NameSet:
      1) prefix matches, in the order the trie enumerates them;
      2) substring matches that do not start with the query, sorted by
         (length, folded name).
    Ranks run 1..N across both tiers.

    Expects an already validated query (see engine.validate_query).
    """
    def __init__(self, prefix_index: PrefixIndex, names: NameSet) -> None:
        self._prefix_index = prefix_index
        self._names = names

    def prefix_matches(self, query: str) -> List[str]:
        return self._prefix_index.search_prefix(query)

    def substring_matches(self, query: str) -> List[str]:
        q = fold(query)
        hits = []
        for name in self._names:
            # prefix hits already came from the trie
            if self._names.contains_substring(name, q) and not fold(name).startswith(q):
                hits.append(name)
        hits.sort(key=_substring_key)
        return hits

    def search(self, query: str) -> RankedResult:
        head = self.prefix_matches(query)
        tail = self.substring_matches(query)
        log.debug("search %r: prefix=%d substring=%d", query, len(head), len(tail))
        return tuple(
            RankedName(name=name, rank=rank)
            for rank, name in enumerate(head + tail, start=1)
        )
