"""Row rendering for the visible window of a directory listing.

Everything here is a pure function of a ``NavigationContext`` snapshot, so the
same snapshot always renders to the same lines.
"""

from __future__ import annotations

from ..file_model import DirEntry, NavigationContext
from ..ui_theme import DEFAULT_THEME, UITheme
from .ansi import display_width

DEFAULT_CURSOR = ">"
SIZE_COLUMN_WIDTH = 8
EMPTY_MESSAGE = "No files found."
LOADING_MESSAGE = "Loading…"

_SIZE_UNITS: tuple[str, ...] = ("KiB", "MiB", "GiB", "TiB", "PiB", "EiB")


def format_size(size: int) -> str:
    """Return a 1024-based human-readable size such as ``4.0 KiB``.

    The unit and precision are chosen from the rounded value, so ``1048575``
    reads ``1.0 MiB`` rather than ``1024 KiB``.
    """
    if size < 1024:
        return f"{max(0, size)} B"
    value = float(size)
    for unit in _SIZE_UNITS:
        value /= 1024.0
        if round(value, 1) < 10.0:
            return f"{value:.1f} {unit}"
        if round(value) < 1024 or unit == _SIZE_UNITS[-1]:
            break
    return f"{value:.0f} {unit}"


def format_entry_row(
    entry: DirEntry,
    *,
    is_cursor: bool,
    cursor_marker: str = DEFAULT_CURSOR,
    theme: UITheme | None = None,
    size_width: int = SIZE_COLUMN_WIDTH,
) -> str:
    """Render one entry as ``<marker> <mode> <size> <name>``.

    The cursor row is drawn in the theme's selected style as a whole; other
    rows color each column separately, with directories distinguished from
    files.
    """
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    size = format_size(entry.size).rjust(size_width)
    name = entry.name + ("/" if entry.is_dir else "")

    if is_cursor:
        body = f" {entry.mode} {size} {name}"
        return f"{active_theme.cursor}{cursor_marker}{reset}{active_theme.selected}{body}{reset}"

    padding = " " * display_width(cursor_marker)
    name_color = active_theme.directory if entry.is_dir else active_theme.file
    return (
        f"{padding} {active_theme.permissions}{entry.mode}{reset}"
        f" {active_theme.size}{size}{reset}"
        f" {name_color}{name}{reset}"
    )


def render_rows(
    ctx: NavigationContext,
    *,
    theme: UITheme | None = None,
    cursor_marker: str = DEFAULT_CURSOR,
    size_width: int = SIZE_COLUMN_WIDTH,
) -> list[str]:
    """Return one display line per entry index in ``[view.start, view.end]``.

    An empty listing renders a single indicator line instead: a loading notice
    while a read is pending, otherwise the "no files found" message.
    """
    active_theme = theme or DEFAULT_THEME
    if not ctx.entries:
        message = LOADING_MESSAGE if ctx.pending_load is not None else EMPTY_MESSAGE
        return [f"{active_theme.empty}{message}{active_theme.reset}"]

    view = ctx.view
    first = max(0, view.start)
    last = min(view.end, len(ctx.entries) - 1)
    return [
        format_entry_row(
            ctx.entries[idx],
            is_cursor=idx == view.cursor,
            cursor_marker=cursor_marker,
            theme=active_theme,
            size_width=size_width,
        )
        for idx in range(first, last + 1)
    ]


__all__ = [
    "DEFAULT_CURSOR",
    "SIZE_COLUMN_WIDTH",
    "EMPTY_MESSAGE",
    "LOADING_MESSAGE",
    "format_size",
    "format_entry_row",
    "render_rows",
]
