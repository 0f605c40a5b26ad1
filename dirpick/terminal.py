"""Terminal control helpers for the picker session.

The picker reads keys from stdin but draws on a separate output descriptor
(stderr by default), so raw mode, screen switching and size queries are all
bound to explicit file descriptors rather than to stdout.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

FALLBACK_SIZE = os.terminal_size((80, 24))

# Alternate screen, hidden cursor, SGR mouse reporting (wheel scrolling).
ENTER_TUI_SEQUENCE = b"\x1b[?1049h\x1b[?25l\x1b[?1000h\x1b[?1006h"
EXIT_TUI_SEQUENCE = b"\x1b[?1000l\x1b[?1006l\x1b[?25h\x1b[?1049l"


def measure_terminal(fd: int, fallback: os.terminal_size = FALLBACK_SIZE) -> os.terminal_size:
    """Return the size of the terminal behind ``fd``, or ``fallback``.

    Zero dimensions reported by some pseudo terminals count as unknown.
    """
    try:
        size = os.get_terminal_size(fd)
    except (OSError, ValueError):
        return fallback
    columns = size.columns or fallback.columns
    lines = size.lines or fallback.lines
    return os.terminal_size((columns, lines))


class TerminalController:
    """Manage terminal mode transitions for one picker session."""

    def __init__(self, stdin_fd: int, output_fd: int) -> None:
        """Capture tty state of ``stdin_fd``; escape commands go to ``output_fd``."""
        self.stdin_fd = stdin_fd
        self.output_fd = output_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.output_fd, ENTER_TUI_SEQUENCE)

    def disable_tui_mode(self) -> None:
        """Leave the alternate screen and restore the saved tty attributes."""
        os.write(self.output_fd, EXIT_TUI_SEQUENCE)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
