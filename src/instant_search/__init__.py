"""
Instant name search.

In-memory autocomplete over a static list of names: a character trie answers
prefix queries, a flat name set answers substring queries, and results are
ranked prefix-first and memoized per query string.

Example Usage:
    from instant_search import Engine, validate_query

    eng = Engine()
    eng.load_file("data/Names.csv")
    for row in eng.search(validate_query("ann")):
        print(row.rank, row.name)
"""

# src/instant_search/__init__.py
from .cache import QueryCache
from .engine import Engine, validate_query  # re-export
from .models import RankedName, RankedResult

__version__ = "1.0.0"
__all__ = ["Engine", "QueryCache", "RankedName", "RankedResult", "validate_query"]
