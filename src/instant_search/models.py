# src/instant_search/models.py
"""
Data models for the search engine.

- RankedName: one row of a search answer (display name + 1-based rank).
- RankedResult: the full ordered answer for a query.

Rank is positional: it is the row's place in the combined prefix-then-substring
ordering, not a similarity score.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, slots=True)
class RankedName:
    """
    Attributes
    ----------
    name : str
        The entry exactly as it was loaded (original casing).
    rank : int
        1-based position in the final result list. Ranks within one result
        are dense: 1..N with no gaps or duplicates.
    """
    name: str
    rank: int


# Tuples keep cached answers immutable once published.
RankedResult = Tuple[RankedName, ...]
