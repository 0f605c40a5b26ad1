"""Domain datatypes for directory listings and navigation snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


@dataclass(frozen=True)
class DirEntry:
    """One direct child of a listed directory."""

    name: str
    is_dir: bool
    size: int = 0
    mode: str = ""


@dataclass(frozen=True)
class ViewState:
    """Cursor index plus inclusive ``[start, end]`` window into the entries."""

    cursor: int = 0
    start: int = 0
    end: int = 0


class Status(Enum):
    BROWSING = "browsing"
    SELECTED = "selected"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class NavigationContext:
    """Immutable snapshot of a picker session.

    ``history`` is a stack of views saved on descend (top at the end).
    ``pending_load`` names the directory whose listing is awaited; entries stay
    empty until it arrives.
    """

    current_path: Path
    entries: tuple[DirEntry, ...] = ()
    view: ViewState = ViewState()
    history: tuple[ViewState, ...] = ()
    height: int = 1
    status: Status = Status.BROWSING
    result: Path | None = None
    pending_load: Path | None = None
    error: str | None = None

    @property
    def finished(self) -> bool:
        return self.status is not Status.BROWSING

    def entry_at_cursor(self) -> DirEntry | None:
        """Return the highlighted entry, or ``None`` for an empty listing."""
        if not self.entries:
            return None
        idx = self.view.cursor
        if idx < 0 or idx >= len(self.entries):
            return None
        return self.entries[idx]


__all__ = [
    "DirEntry",
    "ViewState",
    "Status",
    "NavigationContext",
]
