# src/instant_search/engine.py
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Optional

from . import config as CFG
from .cache import QueryCache
from .loader import read_names
from .models import RankedResult
from .nameset import NameSet
from .search import RankedSearch
from .trie import PrefixIndex

log = logging.getLogger(__name__)


def validate_query(raw: Optional[str]) -> str:
    """Trim a user query and enforce the minimum length. Raises ValueError."""
    q = (raw or "").strip()
    if len(q) < CFG.MIN_QUERY_LENGTH:
        raise ValueError(f"Query term must be at least {CFG.MIN_QUERY_LENGTH} characters")
    return q


class Engine:
    """
    Thin orchestration layer that glues together:
      - PrefixIndex + NameSet (built once by load()),
      - RankedSearch (two-tier ranking),
      - QueryCache (injected; every search goes through it).

    Public API (used by CLI/Flask):
      * load(entries):   index a sequence of names, publish atomically
      * load_file(path): read a names file, then load()
      * search(query):   ranked answer for an already validated query
      * shutdown():      drop index and cached answers

    The dataset is static: a second load() is refused rather than silently
    leaving answers from the old dataset in the cache.
    """

    # ------------- lifecycle -------------

    def __init__(self, cache: Optional[QueryCache] = None) -> None:
        self._cache = cache if cache is not None else QueryCache()
        self._ranked: Optional[RankedSearch] = None
        self._size: int = 0

    # /* ~~~ Build the index from names and publish it only once complete ~~~ */
    def load(self, entries: Iterable[str], *, verbose: bool = False) -> None:
        if verbose:
            logging.basicConfig(level=logging.INFO)
            os.environ["INSTANT_SEARCH_VERBOSE"] = "1"
        if self._ranked is not None:
            raise RuntimeError("Engine already loaded; the dataset is static once loaded")

        trie = PrefixIndex()
        names = NameSet()
        # an exception while iterating leaves the engine unloaded
        for entry in entries:
            trie.insert(entry)
            names.add(entry)

        # Commit engine state
        self._ranked = RankedSearch(trie, names)
        self._size = len(names)
        log.info("Engine load() complete: names=%d keys=%d", len(names), len(trie))

    def load_file(self, path: str | Path = CFG.DATA_FILE, *, verbose: bool = False) -> None:
        if verbose:
            logging.basicConfig(level=logging.INFO)
            os.environ["INSTANT_SEARCH_VERBOSE"] = "1"
        log.info("Loading names from %s", path)
        try:
            entries = read_names(path)
        except (OSError, UnicodeDecodeError) as exc:
            raise RuntimeError(f"Failed to load data file: {path}") from exc
        self.load(entries, verbose=verbose)

    # ------------- query -------------

    # /* ~~~ Ranked answer for a query, memoized per raw query string ~~~ */
    def search(self, query: str) -> RankedResult:
        ranked = self._ranked
        if ranked is None:
            raise RuntimeError("Engine not initialized. Call load() or load_file() first.")
        return self._cache.get_or_compute(query, lambda: ranked.search(query))

    # ------------- getters -------------

    @property
    def cache(self) -> QueryCache:
        return self._cache

    @property
    def loaded(self) -> bool:
        return self._ranked is not None

    @property
    def size(self) -> int:
        return self._size

    # ------------- teardown -------------

    def shutdown(self) -> None:
        try:
            self._cache.clear()
        finally:
            self._ranked = None
            self._size = 0
            log.info("Engine shutdown complete")
