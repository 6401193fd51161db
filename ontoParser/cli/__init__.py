from __future__ import annotations

"""CLI entrypoint exposing ``main`` and ``cli`` for console_scripts."""

from typing import Any

__all__ = ["main", "cli"]


def __getattr__(name: str) -> Any:  # pragma: no cover - simple delegation
    if name in ("cli", "main"):
        from . import __main__ as entry

        return getattr(entry, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
