from __future__ import annotations
import argparse
from flask import Flask, request, jsonify, Response
from keybinds import config as CFG
from keybinds.engine import Engine
from keybinds.matcher import KeybindingSession
from keybinds.models import Empty, Matched, Partial, Rejected

app = Flask(__name__)
_engine: Engine | None = None


def _require_engine() -> Engine:
    if _engine is None or _engine.result is None:
        raise RuntimeError("engine not initialized")
    return _engine


@app.errorhandler(ValueError)
def _bad_request(e: ValueError):
    return jsonify({"error": str(e)}), 400


@app.errorhandler(RuntimeError)
def _unavailable(e: RuntimeError):
    return jsonify({"error": str(e)}), 503


# ---------- API ----------
@app.get("/api/keybindings")
def api_keybindings():
    eng = _require_engine()
    keys = eng.keybindings()
    return jsonify([{"id": e.id, "name": e.name, "keys": keys.get(e.id)} for e in eng.entities()])


@app.post("/api/keypress")
def api_keypress():
    """
    Stateless step of the matcher: the caller sends its buffer and one key,
    and gets back the new state. "Backspace" and "Escape" are control keys.
    """
    eng = _require_engine()
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ValueError('expected a JSON object {"buffer": str, "key": str}')
    buffer = body.get("buffer", "")
    key = body.get("key")
    if not isinstance(buffer, str) or not isinstance(key, str) or not key:
        raise ValueError('expected {"buffer": str, "key": str}')

    session = KeybindingSession.resume(eng.keybindings(), buffer)
    outcome = session.press(key)

    out = {"state": "", "buffer": session.buffer, "warning": session.warning, "id": None, "next": []}
    if isinstance(outcome, Matched):
        out.update(state="matched", id=outcome.entity_id)
    elif isinstance(outcome, Partial):
        out.update(state="partial", next=session.next_keys())
    elif isinstance(outcome, Rejected):
        out.update(state="rejected", next=session.next_keys())
    elif isinstance(outcome, Empty):
        out.update(state="empty")
    return jsonify(out)


@app.get("/health")
def health():
    eng = _require_engine()
    return jsonify({"ok": True, "entities": len(eng.entities()), "bound": len(eng.keybindings())})


# ---------- UI ----------
@app.get("/")
def home():
    # A tiny page: shortcut list + keydown handler, no external deps.
    html = r"""
<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<title>Album keybindings</title>
<style>
body{ margin:24px; background:#0b0f14; color:#cfd8e3; font:16px/1.45 system-ui,sans-serif }
kbd{ background:#111825; border:1px solid #1c2530; padding:1px 6px; border-radius:6px }
.hit kbd{ border-color:#6ee7ff }
.warn{ color:#ff5d5d; min-height:1.4em }
li.done{ color:#45d483 }
</style>
</head>
<body>
<h1>Album keybindings</h1>
<div>Typed: <kbd id="buf"></kbd></div>
<div class="warn" id="warn"></div>
<ul id="list"></ul>
<script>
let buffer = "";
const list = document.getElementById("list");

async function load(){
  const rows = await (await fetch("/api/keybindings")).json();
  list.replaceChildren(...rows.map(r => {
    // names are user text: always set via textContent
    const li = document.createElement("li");
    li.dataset.id = String(r.id);
    li.dataset.keys = r.keys ?? "";
    const kbd = document.createElement("kbd");
    kbd.textContent = r.keys ?? "-";
    li.append(kbd, " " + r.name);
    return li;
  }));
}

function render(res){
  document.getElementById("buf").textContent = buffer;
  document.getElementById("warn").textContent = res.warning ? `no shortcut continues with "${res.warning}"` : "";
  for(const li of list.children){
    li.classList.toggle("hit", buffer !== "" && li.dataset.keys.startsWith(buffer));
    li.classList.toggle("done", res.state === "matched" && li.dataset.id === String(res.id));
  }
}

window.addEventListener("keydown", async (ev)=>{
  if(ev.key.length !== 1 && ev.key !== "Backspace" && ev.key !== "Escape") return;
  const r = await fetch("/api/keypress", {
    method: "POST", headers: {"Content-Type": "application/json"},
    body: JSON.stringify({buffer, key: ev.key}),
  });
  const res = await r.json();
  buffer = res.buffer ?? "";
  render(res);
});

load();
</script>
</body>
</html>
"""
    return Response(html, mimetype="text/html")


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run Flask UI on top of Engine")
    ap.add_argument("--entities", default=None, help="JSON or text file with entity names")
    ap.add_argument("--db", dest="db", default=None)  # DSN: "sqlite:///path" or "memory://"
    ap.add_argument("--host", default=CFG.DEFAULT_HOST)
    ap.add_argument("--port", type=int, default=CFG.DEFAULT_PORT)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)
    if not args.entities and not args.db:
        ap.error("one of --entities or --db is required")

    global _engine
    _engine = Engine()
    if args.entities:
        _engine.build(source=args.entities, db_dsn=args.db, verbose=args.verbose)
    else:
        _engine.load(db_dsn=args.db, verbose=args.verbose)

    try:
        app.run(host=args.host, port=args.port, debug=args.verbose)
    finally:
        _engine.shutdown()
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
