"""Global debug switch.

Debug mode starts enabled when ``QDUMP_DEBUG`` is set to 1, true, yes or
on. Engines consult it before each enumeration.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator

_DEBUG_ENV_VAR = "QDUMP_DEBUG"
_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in _TRUTHY


_debug_enabled: bool = _env_flag(_DEBUG_ENV_VAR)


def is_debug_enabled() -> bool:
    return _debug_enabled


def set_debug_enabled(enabled: bool) -> None:
    """Turn debug mode on or off for the whole process."""
    global _debug_enabled
    _debug_enabled = bool(enabled)


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Set debug mode for the duration of a ``with`` block.

    >>> with debug_context(False):
    ...     is_debug_enabled()
    False
    """
    previous = is_debug_enabled()
    set_debug_enabled(enabled)
    try:
        yield
    finally:
        set_debug_enabled(previous)
