from pathlib import Path
import logging
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from instant_search import Engine, QueryCache, validate_query

NAMES = ["Anna", "Anastasia", "Banana", "Ann"]


def _seed(tmp: Path) -> Path:
    data = tmp / "Names.csv"
    data.write_text("Anna\n  Anastasia  \n\nBanana\nAnn\n", encoding="utf-8")
    return data


@pytest.mark.e2e
def test_load_file_then_search(tmp_path: Path):
    eng = Engine()
    try:
        eng.load_file(_seed(tmp_path))
        assert eng.loaded and eng.size == 4
        rows = eng.search("an")
        assert [r.rank for r in rows] == [1, 2, 3, 4]
        assert {r.name for r in rows[:3]} == {"Anna", "Anastasia", "Ann"}
        assert rows[-1].name == "Banana"
        assert eng.search("xyz") == ()
    finally:
        eng.shutdown()


@pytest.mark.e2e
def test_search_goes_through_injected_cache():
    cache = QueryCache()
    eng = Engine(cache=cache)
    eng.load(NAMES)
    first = eng.search("ann")
    assert "ann" in cache
    assert eng.search("ann") is first
    assert cache.stats().hits == 1


@pytest.mark.e2e
def test_concurrent_first_queries_agree(tmp_path: Path):
    eng = Engine()
    eng.load_file(_seed(tmp_path))
    start = threading.Barrier(8, timeout=5)

    def run(_):
        start.wait()
        return eng.search("an")

    with ThreadPoolExecutor(max_workers=8) as ex:
        results = list(ex.map(run, range(8)))

    contents = {tuple((r.name, r.rank) for r in rows) for rows in results}
    assert all(len(rows) == 4 for rows in results)
    assert len(eng.cache) == 1
    # every answer carries the same names; only prefix order is unspecified
    assert {frozenset(name for name, _ in c) for c in contents} == {frozenset(NAMES)}


@pytest.mark.e2e
def test_unreadable_file_leaves_engine_unloaded(tmp_path: Path):
    eng = Engine()
    with pytest.raises(RuntimeError, match="Failed to load data file"):
        eng.load_file(tmp_path / "missing.csv")
    assert not eng.loaded
    with pytest.raises(RuntimeError, match="not initialized"):
        eng.search("ann")


@pytest.mark.e2e
def test_undecodable_file_is_a_load_failure(tmp_path: Path):
    data = tmp_path / "Names.csv"
    data.write_bytes(b"Anna\n\xff\xfeBad\n")
    eng = Engine()
    with pytest.raises(RuntimeError, match="Failed to load data file") as info:
        eng.load_file(data)
    assert isinstance(info.value.__cause__, UnicodeDecodeError)
    assert not eng.loaded


@pytest.mark.e2e
def test_verbose_load_logs_progress(tmp_path: Path, monkeypatch, caplog):
    import instant_search.loader as loader_mod
    monkeypatch.delenv("INSTANT_SEARCH_VERBOSE", raising=False)
    monkeypatch.setattr(loader_mod, "PROGRESS_EVERY_NAMES", 2)
    caplog.set_level(logging.INFO, logger="instant_search.loader")

    eng = Engine()
    eng.load_file(_seed(tmp_path), verbose=True)
    assert any("[read] names=2" in rec.getMessage() for rec in caplog.records)
    assert any("[read] names=4" in rec.getMessage() for rec in caplog.records)


@pytest.mark.e2e
def test_failing_source_never_exposes_partial_index():
    def broken():
        yield "Anna"
        raise OSError("disk gone")

    eng = Engine()
    with pytest.raises(OSError):
        eng.load(broken())
    assert not eng.loaded and eng.size == 0


@pytest.mark.e2e
def test_second_load_is_refused():
    eng = Engine()
    eng.load(NAMES)
    with pytest.raises(RuntimeError, match="already loaded"):
        eng.load(["Zed"])
    assert eng.search("zed") == ()


def test_validate_query_trims_and_enforces_minimum():
    assert validate_query("  ann ") == "ann"
    for bad in (None, "", "  ", "an", " an "):
        with pytest.raises(ValueError, match="at least 3 characters"):
            validate_query(bad)
