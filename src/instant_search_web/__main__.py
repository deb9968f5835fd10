from __future__ import annotations
import argparse, json, sys
from dataclasses import asdict

from instant_search import config as CFG
from instant_search.engine import Engine, validate_query


def _print_table(rows) -> None:
    if not rows:
        print("(no matches)"); return
    print("Rank  Name")
    for r in rows:
        print(f"{r.rank:<5} {r.name}")


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Instant search CLI (Engine-backed)")
    p.add_argument("--data", default=str(CFG.DATA_FILE), help="Names file, one name per line")
    p.add_argument("--q", default=None, help="Single query to run once")
    p.add_argument("--repl", action="store_true", help="Interactive loop after load")
    p.add_argument("--json", action="store_true", help="Emit JSON rows")
    p.add_argument("--verbose", action="store_true")
    args = p.parse_args(argv)

    eng = Engine()
    try:
        eng.load_file(args.data, verbose=args.verbose)
    except RuntimeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    def run_query(raw: str) -> None:
        try:
            q = validate_query(raw)
        except ValueError as exc:
            print(f"error: {exc}"); return
        rows = eng.search(q)
        if args.json:
            print(json.dumps([asdict(r) for r in rows], ensure_ascii=False, indent=2))
        else:
            _print_table(rows)

    try:
        if args.q is not None:
            run_query(args.q)

        if args.repl:
            print("Type a name (empty line to exit).")
            while True:
                try:
                    raw = input("> ")
                except (EOFError, KeyboardInterrupt):
                    break
                if not raw.strip():
                    break
                run_query(raw)
        return 0
    finally:
        eng.shutdown()


if __name__ == "__main__":
    raise SystemExit(main())
