"""Full-frame composition for the picker screen.

A frame is the header (current directory), the visible rows, and a key hint
footer. The chrome stays within ``MARGIN_BOTTOM`` rows so the row window can
use the rest of the terminal.
"""

from __future__ import annotations

import os

from ..file_model import Action, NavigationContext
from ..keymap import Keymap
from ..ui_theme import DEFAULT_THEME, UITheme
from .ansi import clip_ansi_line
from .rows import DEFAULT_CURSOR, render_rows

MARGIN_BOTTOM = 5
HINT_KEYS_PER_ACTION = 2

_HINT_ACTIONS: tuple[tuple[Action, str], ...] = (
    (Action.MOVE_UP, "up"),
    (Action.MOVE_DOWN, "down"),
    (Action.JUMP_TOP, "top"),
    (Action.JUMP_BOTTOM, "bottom"),
    (Action.ASCEND, "back"),
    (Action.DESCEND, "open"),
    (Action.OPEN, "select"),
    (Action.CONFIRM, "select file"),
    (Action.CANCEL, "quit"),
)

_KEY_LABELS = {
    "UP": "↑",
    "DOWN": "↓",
    "LEFT": "←",
    "RIGHT": "→",
    "HOME": "home",
    "END": "end",
    "ENTER": "enter",
    "ESC": "esc",
    "TAB": "tab",
    "BACKSPACE": "backspace",
    "CTRL_C": "ctrl+c",
    "CTRL_D": "ctrl+d",
}


def footer_hint(keymap: Keymap) -> str:
    """Describe the active bindings, e.g. ``k/↑ up · j/↓ down · q/esc quit``.

    Mouse tokens are left out and unbound actions are skipped, so the hint
    follows user key overrides.
    """
    parts: list[str] = []
    for action, label in _HINT_ACTIONS:
        keys = [key for key in keymap.keys_for(action) if not key.startswith("MOUSE_")]
        if not keys:
            continue
        shown = "/".join(_KEY_LABELS.get(key, key) for key in keys[:HINT_KEYS_PER_ACTION])
        parts.append(f"{shown} {label}")
    return " · ".join(parts)


def frame_lines(
    ctx: NavigationContext,
    *,
    theme: UITheme | None = None,
    cursor_marker: str = DEFAULT_CURSOR,
    keymap: Keymap | None = None,
) -> list[str]:
    """Return unclipped frame lines for ``ctx``; the footer describes ``keymap``."""
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    lines = [f"{active_theme.header}{ctx.current_path}{reset}", ""]
    lines.extend(render_rows(ctx, theme=active_theme, cursor_marker=cursor_marker))
    lines.append("")
    lines.append(f"{active_theme.hint}{footer_hint(keymap or Keymap.default())}{reset}")
    return lines


def build_frame(
    ctx: NavigationContext,
    width: int,
    *,
    theme: UITheme | None = None,
    cursor_marker: str = DEFAULT_CURSOR,
    keymap: Keymap | None = None,
) -> str:
    """Return the escape-sequence payload that repaints the whole screen."""
    out: list[str] = ["\033[H"]
    for line in frame_lines(ctx, theme=theme, cursor_marker=cursor_marker, keymap=keymap):
        clipped = clip_ansi_line(line, width)
        out.append(clipped)
        if "\033" in clipped:
            out.append("\033[0m")
        # Erase leftovers from a longer previous frame.
        out.append("\033[K\r\n")
    out.append("\033[J")
    return "".join(out)


def write_frame(fd: int, frame: str) -> None:
    os.write(fd, frame.encode("utf-8", errors="replace"))


__all__ = [
    "MARGIN_BOTTOM",
    "HINT_KEYS_PER_ACTION",
    "footer_hint",
    "frame_lines",
    "build_frame",
    "write_frame",
]
