import os
import json
import tempfile


def ensure_dir(path: str) -> None:
    if path:
        os.makedirs(path, exist_ok=True)


def format_minutes(minutes: int) -> str:
    minutes = max(0, int(minutes))
    hours, mins = divmod(minutes, 60)
    if hours > 0:
        return f"{hours}h {mins}m"
    return f"{mins}m"


def parse_positive_int(value) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, str):
        text = value.strip()
        if not text.isdecimal():
            return None
        try:
            number = int(text)
        except ValueError:
            return None
        return number if number > 0 else None
    return None


def write_json_atomic(path: str, data) -> None:
    ensure_dir(os.path.dirname(path))
    fd, tmp_path = tempfile.mkstemp(suffix=".tmp", prefix=os.path.basename(path) + ".", dir=os.path.dirname(path) or ".")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        os.replace(tmp_path, path)
    except OSError:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise
