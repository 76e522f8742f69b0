from __future__ import annotations
import argparse, json
from .engine import Engine
from .models import Empty, Matched, Partial, Rejected

# control characters accepted by --type / --repl
_BACKSPACE = "<"
_ESCAPE = "!"


def _describe(outcome) -> str:
    if isinstance(outcome, Matched):
        return f"matched   {outcome.entity_id!r} ({outcome.binding})"
    if isinstance(outcome, Partial):
        return f"partial   {outcome.buffer}"
    if isinstance(outcome, Rejected):
        return f"rejected  {outcome.char!r} (buffer {outcome.buffer!r})"
    if isinstance(outcome, Empty):
        return "empty"
    raise TypeError(f"unknown outcome: {outcome!r}")


def _print_table(eng: Engine) -> None:
    keys = eng.keybindings()
    uncovered = eng.uncovered()
    print("Keys        Id          Name")
    for e in eng.entities():
        k = keys.get(e.id) or f"-  ({uncovered.get(e.id, 'unbound')})"
        print(f"{k:<11} {e.id!s:<11} {e.name}")


def _run_keys(eng: Engine, keys: str) -> None:
    session = eng.session()
    for ch in keys:
        if ch == _BACKSPACE:
            outcome = session.backspace()
        elif ch == _ESCAPE:
            outcome = session.cancel()
        else:
            outcome = session.press(ch)
        print(f"{ch!r:<5} {_describe(outcome)}")


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Album keybindings CLI (Engine-backed)")
    p.add_argument("--entities", default=None, help="JSON or text file with entity names")
    p.add_argument("--db", default=None, help='Entity store DSN: "sqlite:///path" or "memory://"')
    p.add_argument("--json", action="store_true", help="Emit JSON rows")
    p.add_argument("--type", dest="keys", default=None,
                   help=f"Keys to feed a selection session ({_BACKSPACE} = backspace, {_ESCAPE} = escape)")
    p.add_argument("--repl", action="store_true", help="Interactive loop after init")
    p.add_argument("--verbose", action="store_true")

    args = p.parse_args(argv)
    if not args.entities and not args.db:
        p.error("one of --entities or --db is required")

    eng = Engine()
    try:
        if args.entities:
            eng.build(source=args.entities, db_dsn=args.db, verbose=args.verbose)
        else:
            eng.load(db_dsn=args.db, verbose=args.verbose)

        if args.json:
            keys = eng.keybindings()
            rows = [{"id": e.id, "name": e.name, "keys": keys.get(e.id)} for e in eng.entities()]
            print(json.dumps(rows, ensure_ascii=False, indent=2))
        else:
            _print_table(eng)

        if args.keys:
            _run_keys(eng, args.keys)

        if args.repl:
            print("Type keys (empty line to exit).")
            while True:
                try:
                    line = input("> ").strip()
                except (EOFError, KeyboardInterrupt):
                    break
                if not line:
                    break
                _run_keys(eng, line)

        return 0
    finally:
        eng.shutdown()

if __name__ == "__main__":
    raise SystemExit(main())
