from __future__ import annotations
import os
from pathlib import Path

# project root: the directory holding src/ and data/
PROJECT_ROOT = Path(__file__).resolve().parents[2]

# names file, one entry per line
DATA_FILE: Path = Path(os.environ.get("INSTANT_SEARCH_DATA", PROJECT_ROOT / "data" / "Names.csv"))
ENCODING: str = "utf-8"

# queries shorter than this are rejected before reaching the engine
MIN_QUERY_LENGTH: int = 3

# /* ~~~ query cache: lock stripes and optional size bound (None = unbounded) ~~~ */
CACHE_STRIPES: int = 16
CACHE_MAX_ENTRIES: int | None = None

# Progress logging (set INSTANT_SEARCH_VERBOSE=1 to enable)
PROGRESS_EVERY_NAMES: int = 10_000

# web server defaults
HOST: str = "127.0.0.1"
PORT: int = 8000
