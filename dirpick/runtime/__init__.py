"""Public runtime orchestration entry points.

This package groups the interactive session bootstrap (`run_picker`) and the
lower-level event loop and loader used by tests and composition code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .loop import PickerOptions, PickResult


def run_picker(*args, **kwargs):
    """Lazily import session entrypoint so ``import dirpick.runtime`` stays light."""
    from .loop import run_picker as _run_picker

    return _run_picker(*args, **kwargs)


def run_event_loop(*args, **kwargs):
    """Lazily import loop runner to avoid package-import cycles."""
    from .loop import run_event_loop as _run_event_loop

    return _run_event_loop(*args, **kwargs)


def __getattr__(name: str):
    if name in {"PickerOptions", "PickResult"}:
        from . import loop as _loop

        return getattr(_loop, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "run_picker",
    "run_event_loop",
    "PickerOptions",
    "PickResult",
]
