import json, logging, platform, time, uuid

from strassen_lib.config import LOG_LEVEL


def get_logger(name: str = "strassen") -> logging.Logger:
    # handler lives on the package logger; "strassen.*" children propagate to it
    root = logging.getLogger("strassen")
    if not root.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(message)s"))
        h.setLevel(LOG_LEVEL)
        root.addHandler(h)
        root.setLevel(LOG_LEVEL)
    return logging.getLogger(name)


def new_run_id() -> str:
    return f"run_{uuid.uuid4().hex[:8]}"


# ---------- structured run logging ----------
def jlog(rec: dict) -> str:
    """Emit one JSON line describing a run; returns the line."""
    base = {
        "ts": time.time(),
        "run_id": rec.get("run_id") or new_run_id(),
        "op": rec.get("op", "strassen"),
        "host_arch": platform.machine(),
    }
    base.update(rec)
    if "dur_ms" in base and "duration_ms" not in base:
        base["duration_ms"] = base.pop("dur_ms")
    base.setdefault("success", True)

    line = json.dumps(base, ensure_ascii=False)
    get_logger("strassen.run").info(line)
    return line
