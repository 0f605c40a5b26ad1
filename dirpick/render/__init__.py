"""Rendering for the picker: visible rows and full-screen frames."""

from __future__ import annotations

from .rows import (
    DEFAULT_CURSOR,
    EMPTY_MESSAGE,
    LOADING_MESSAGE,
    SIZE_COLUMN_WIDTH,
    format_entry_row,
    format_size,
    render_rows,
)
from .screen import MARGIN_BOTTOM, build_frame, footer_hint, frame_lines, write_frame

__all__ = [
    "DEFAULT_CURSOR",
    "EMPTY_MESSAGE",
    "LOADING_MESSAGE",
    "SIZE_COLUMN_WIDTH",
    "format_entry_row",
    "format_size",
    "render_rows",
    "footer_hint",
    "MARGIN_BOTTOM",
    "build_frame",
    "frame_lines",
    "write_frame",
]
