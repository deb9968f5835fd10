from pathlib import Path
import pytest
from instant_search.engine import Engine
from instant_search_web.web import create_app


def _seed(tmp: Path) -> str:
    data = tmp / "Names.csv"
    data.write_text("Anna\nAnastasia\nBanana\nAnn\nHannah\n", encoding="utf-8")
    return str(data)


@pytest.mark.e2e
def test_api_search_json(tmp_path: Path):
    eng = Engine(); eng.load_file(_seed(tmp_path))
    client = create_app(eng).test_client()

    rv = client.get("/api/search?q=ann")
    assert rv.status_code == 200
    data = rv.get_json()
    assert data["query"] == "ann"
    assert data["size"] == len(data["results"]) == 3
    assert {r["name"] for r in data["results"][:2]} == {"Anna", "Ann"}
    assert data["results"][2] == {"name": "Hannah", "rank": 3}
    assert isinstance(data["response_time_ms"], (int, float))

    # trimmed query is what gets cached
    client.get("/api/search?q=%20ann%20")
    assert len(eng.cache) == 1

    eng.shutdown()


@pytest.mark.e2e
def test_api_search_short_query_is_400(tmp_path: Path):
    eng = Engine(); eng.load_file(_seed(tmp_path))
    client = create_app(eng).test_client()
    rv = client.get("/api/search?q=an")
    assert rv.status_code == 400
    assert rv.get_json() == {"error": "Query term must be at least 3 characters"}
    assert len(eng.cache) == 0
    eng.shutdown()


@pytest.mark.e2e
def test_health(tmp_path: Path):
    eng = Engine(); eng.load_file(_seed(tmp_path))
    client = create_app(eng).test_client()
    client.get("/api/search?q=ann")
    data = client.get("/health").get_json()
    assert data == {"ok": True, "names": 5, "cached_queries": 1}
    eng.shutdown()
