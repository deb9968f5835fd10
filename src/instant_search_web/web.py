from __future__ import annotations
import argparse
import logging
import sys
import time
from dataclasses import asdict

from flask import Flask, current_app, jsonify, render_template_string, request

from instant_search import config as CFG
from instant_search.engine import Engine, validate_query

log = logging.getLogger(__name__)

_EXT = "instant_search"


def _engine() -> Engine:
    return current_app.extensions[_EXT]


def _timed_search(raw: str | None):
    """Validate + search; returns (query, rows, elapsed_ms). ValueError propagates."""
    t0 = time.perf_counter()
    q = validate_query(raw)
    rows = _engine().search(q)
    return q, rows, (time.perf_counter() - t0) * 1000.0


# ---------- UI ----------
_PAGE = r"""
<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>Instant Search</title>
<style>
:root{ --bg:#0b0f14; --panel:#0f141b; --ink:#cfd8e3; --muted:#8a94a6; --accent:#6ee7ff; --border:#1c2530; }
*{box-sizing:border-box}
body{ margin:0; background:var(--bg); color:var(--ink); font:16px/1.45 system-ui,-apple-system,Segoe UI,Roboto,Arial; }
.container{ max-width:760px; margin:24px auto; padding:0 16px; }
.card{ background:var(--panel); border:1px solid var(--border); border-radius:16px; padding:18px; }
h1{ font-size:20px; margin:0 0 8px 0; }
form{ display:flex; gap:12px; }
input[type=text]{ flex:1; padding:12px 14px; border-radius:12px; border:1px solid var(--border);
  background:#0b1117; color:var(--ink); font-size:16px; outline:none; }
input[type=text]:focus{ border-color:var(--accent) }
button{ padding:10px 14px; border-radius:10px; border:1px solid var(--border); background:#0b1117; color:var(--ink); }
.meta{ color:var(--muted); font-size:13px; margin-top:8px; }
.err{ margin-top:12px; padding:10px 12px; border-radius:10px; background:rgba(255,93,93,.12);
  border:1px solid rgba(255,93,93,.35); color:#ffb0b0; }
.row{ display:grid; grid-template-columns:4rem 1fr; padding:10px 14px; border-top:1px solid var(--border); }
.head{ font-weight:600; color:var(--muted) }
.empty{ padding:24px; text-align:center; color:var(--muted); }
</style>
</head>
<body>
  <div class="container">
    <div class="card">
      <h1>Instant Search</h1>
      <form action="/search" method="get">
        <input id="q" type="text" name="q" value="{{ query or '' }}" placeholder="Type at least {{ min_len }} characters…" autocomplete="off" autofocus />
        <button type="submit">Search</button>
      </form>
      {% if error %}<div class="err">{{ error }}</div>{% endif %}
      {% if results is not none %}
      <div class="meta">Results: {{ size }} • {{ '%.1f' % response_time }} ms</div>
      <div class="results">
        <div class="row head"><div>Rank</div><div>Name</div></div>
        {% for r in results %}
        <div class="row"><div>{{ r.rank }}</div><div>{{ r.name }}</div></div>
        {% else %}
        <div class="empty">No matches.</div>
        {% endfor %}
      </div>
      {% endif %}
      <div id="live"></div>
    </div>
  </div>
<script>
const MIN_LEN = {{ min_len }};
const q = document.querySelector("#q"), live = document.querySelector("#live");
let t; // debounce timer
function esc(s){ return String(s).replace(/[&<>"]/g, (c)=>({"&":"&amp;","<":"&lt;",">":"&gt;",'"':"&quot;"}[c])); }

async function liveSearch(){
  const query = q.value.trim();
  if(query.length < MIN_LEN){ live.innerHTML = ""; return; }
  try{
    const resp = await fetch(`/api/search?q=${encodeURIComponent(query)}`);
    const data = await resp.json();
    if(!resp.ok){ live.innerHTML = `<div class="err">${esc(data.error)}</div>`; return; }
    const rows = data.results.map((r)=>`<div class="row"><div>${r.rank}</div><div>${esc(r.name)}</div></div>`).join("");
    live.innerHTML = `<div class="meta">Results: ${data.size} • ${data.response_time_ms} ms</div>`
      + `<div class="results"><div class="row head"><div>Rank</div><div>Name</div></div>`
      + (rows || `<div class="empty">No matches.</div>`) + `</div>`;
  }catch(e){
    live.innerHTML = `<div class="err">Error: ${esc(e.message ?? e)}</div>`;
  }
}

q.addEventListener("input", ()=>{ clearTimeout(t); t = setTimeout(liveSearch, 150); });
</script>
</body>
</html>
"""


def create_app(engine: Engine) -> Flask:
    """Flask app bound to a loaded Engine (the engine owns the query cache)."""
    app = Flask(__name__)
    app.extensions[_EXT] = engine

    @app.get("/")
    def home():
        return render_template_string(_PAGE, query="", error=None, results=None,
                                      min_len=CFG.MIN_QUERY_LENGTH)

    @app.get("/search")
    def search_page():
        raw = request.args.get("q", type=str)
        try:
            q, rows, ms = _timed_search(raw)
        except ValueError as exc:
            return render_template_string(_PAGE, query=raw, error=str(exc), results=None,
                                          min_len=CFG.MIN_QUERY_LENGTH)
        return render_template_string(_PAGE, query=q, error=None, results=rows,
                                      size=len(rows), response_time=ms,
                                      min_len=CFG.MIN_QUERY_LENGTH)

    # ---------- API ----------
    @app.get("/api/search")
    def api_search():
        try:
            q, rows, ms = _timed_search(request.args.get("q", type=str))
        except ValueError as exc:
            return jsonify({"error": str(exc)}), 400
        return jsonify({
            "query": q,
            "results": [asdict(r) for r in rows],
            "size": len(rows),
            "response_time_ms": round(ms, 3),
        })

    @app.get("/health")
    def health():
        eng = _engine()
        return jsonify({"ok": eng.loaded, "names": eng.size, "cached_queries": len(eng.cache)})

    return app


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run the instant search web UI")
    ap.add_argument("--data", default=str(CFG.DATA_FILE), help="Names file, one name per line")
    ap.add_argument("--host", default=CFG.HOST)
    ap.add_argument("--port", type=int, default=CFG.PORT)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    engine = Engine()
    try:
        engine.load_file(args.data, verbose=args.verbose)
    except RuntimeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    app = create_app(engine)
    try:
        app.run(host=args.host, port=args.port, debug=args.verbose, use_reloader=False, threaded=True)
    finally:
        engine.shutdown()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
