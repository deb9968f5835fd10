from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Iterator, List

from .config import ENCODING, PROGRESS_EVERY_NAMES

log = logging.getLogger(__name__)


def _verbose() -> bool:
    # Progress logging (set INSTANT_SEARCH_VERBOSE=1 to enable)
    return os.environ.get("INSTANT_SEARCH_VERBOSE") == "1"


def iter_names(path: str | Path, encoding: str = ENCODING) -> Iterator[str]:
    """Yield trimmed, non-blank lines of a names file. OSError propagates."""
    with open(path, "r", encoding=encoding) as f:
        for raw in f:
            name = raw.strip()
            if name:
                yield name


def read_names(path: str | Path, encoding: str = ENCODING) -> List[str]:
    """
    Read a line-delimited names file (one name per line, e.g. Names.csv).
    Materialized eagerly so a read error surfaces before anything is indexed.
    """
    verbose = _verbose()
    names: List[str] = []
    for name in iter_names(path, encoding=encoding):
        names.append(name)
        if verbose and len(names) % PROGRESS_EVERY_NAMES == 0:
            log.info("[read] names=%s", f"{len(names):,}")
    log.info("Read %d names from %s", len(names), path)
    return names
