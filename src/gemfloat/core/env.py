"""Environment variable access.

Reads go through a snapshot of ``os.environ`` taken on first use so tests
can set and remove values without touching the real process environment.
"""

import os
from typing import Dict

_env_state: Dict[str, str] = {}
_initialized = False


def _ensure_initialized() -> None:
    global _initialized, _env_state
    if not _initialized:
        _env_state = dict(os.environ)
        _initialized = True


def get(key: str) -> str | None:
    """Return the value of ``key`` or None when unset."""
    _ensure_initialized()
    return _env_state.get(key)


def set(key: str, value: str) -> None:
    _ensure_initialized()
    _env_state[key] = value


def remove(key: str) -> None:
    _ensure_initialized()
    _env_state.pop(key, None)


def reset() -> None:
    """Drop the snapshot; the next read copies ``os.environ`` again."""
    global _initialized
    _env_state.clear()
    _initialized = False


class Env:
    """Namespace class for environment variable operations."""

    get = staticmethod(get)
    set = staticmethod(set)
    remove = staticmethod(remove)
    reset = staticmethod(reset)
