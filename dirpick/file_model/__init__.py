"""Domain model for the directory picker.

This package contains the non-UI pieces:
- directory entry and view-snapshot datatypes
- one-level filesystem listing
- the navigation state machine
"""

from __future__ import annotations

from .types import DirEntry, NavigationContext, Status, ViewState
from .fs import read_directory, sort_entries
from .navigation import (
    Action,
    DirectoryLoaded,
    DirectoryLoadFailed,
    Event,
    Resize,
    fit_view,
    initial_context,
    is_filesystem_root,
    top_view,
    transition,
)

__all__ = [
    "DirEntry",
    "NavigationContext",
    "Status",
    "ViewState",
    "read_directory",
    "sort_entries",
    "Action",
    "DirectoryLoaded",
    "DirectoryLoadFailed",
    "Event",
    "Resize",
    "fit_view",
    "initial_context",
    "is_filesystem_root",
    "top_view",
    "transition",
]
