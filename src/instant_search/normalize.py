from __future__ import annotations


def fold(text: str) -> str:
    """
    Case-insensitive comparison key shared by the trie, the name set and the ranker.
    Entries and queries must go through the same routine or prefix/substring
    tiers stop agreeing on what "starts with" means.
    """
    return text.casefold()
