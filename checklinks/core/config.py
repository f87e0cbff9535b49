import os
from pathlib import Path
from dotenv import dotenv_values

ROOT = Path(__file__).resolve().parents[2]
ENV = dotenv_values(ROOT / ".env") if (ROOT / ".env").exists() else {}
ENV.update({k: v for k, v in os.environ.items() if k.startswith("CHECKLINKS_")})

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def get(key: str, default=None):
    return ENV.get(key, default)


def get_int(key: str, default: int) -> int:
    raw = get(key)
    return int(raw) if raw not in (None, "") else default


def get_float(key: str, default: float) -> float:
    raw = get(key)
    return float(raw) if raw not in (None, "") else default


def get_bool(key: str, default: bool) -> bool:
    raw = get(key)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{key}: expected a boolean, got {raw!r}")
