# src/instant_search/cache.py
"""
Per-query memoization of search answers.

The cache is keyed by the raw query string (no trimming or case folding) and
is split into lock stripes so concurrent requests for different queries do not
serialize on one lock. compute() always runs outside the stripe lock: two
callers that miss on the same key at the same time will both compute and the
last store wins. Values are immutable tuples, so a reader sees either no entry
or a complete one.

Growth is unbounded by default. The dataset is static, so entries never go
stale, but every distinct query string stays resident for the process
lifetime. Pass max_entries to cap it (oldest-inserted entry of the stripe
being written is evicted first).
"""

from __future__ import annotations
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from . import config as CFG
from .models import RankedResult

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CacheStats:
    hits: int
    misses: int
    size: int


class _Stripe:
    __slots__ = ("lock", "rows", "hits", "misses")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.rows: Dict[str, RankedResult] = {}
        self.hits = 0
        self.misses = 0


class QueryCache:
    def __init__(self, stripes: int = CFG.CACHE_STRIPES,
                 max_entries: Optional[int] = CFG.CACHE_MAX_ENTRIES) -> None:
        if stripes < 1:
            raise ValueError("QueryCache(): stripes must be >= 1")
        if max_entries is not None and max_entries < 1:
            raise ValueError("QueryCache(): max_entries must be >= 1 or None")
        self._stripes: List[_Stripe] = [_Stripe() for _ in range(stripes)]
        # per-stripe share of the bound (rounded up, at least one row per stripe)
        self._per_stripe: Optional[int] = (
            None if max_entries is None else max(1, -(-max_entries // stripes))
        )

    def _stripe(self, query: str) -> _Stripe:
        return self._stripes[hash(query) % len(self._stripes)]

    # ---- Query ----
    def get_or_compute(self, query: str, compute: Callable[[], RankedResult]) -> RankedResult:
        st = self._stripe(query)
        with st.lock:
            hit = st.rows.get(query)
            if hit is not None:
                st.hits += 1
                log.debug("cache hit %r", query)
                return hit
            st.misses += 1
        log.debug("cache miss %r", query)

        result = tuple(compute())
        with st.lock:
            st.rows[query] = result
            if self._per_stripe is not None:
                while len(st.rows) > self._per_stripe:
                    oldest = next(iter(st.rows))
                    del st.rows[oldest]
        return result

    # ---- Getters ----
    def __contains__(self, query: object) -> bool:
        if not isinstance(query, str):
            return False
        st = self._stripe(query)
        with st.lock:
            return query in st.rows

    def __len__(self) -> int:
        n = 0
        for st in self._stripes:
            with st.lock:
                n += len(st.rows)
        return n

    def stats(self) -> CacheStats:
        hits = misses = size = 0
        for st in self._stripes:
            with st.lock:
                hits += st.hits
                misses += st.misses
                size += len(st.rows)
        return CacheStats(hits=hits, misses=misses, size=size)

    # ---- Teardown ----
    def clear(self) -> None:
        for st in self._stripes:
            with st.lock:
                st.rows.clear()
