"""Main interactive event loop for the picker.

One thread runs every state transition. Each iteration re-measures the
viewport, folds in finished directory loads, repaints when needed, and then
waits briefly for a key. Directory reads happen on the loader's worker thread
and only ever come back as events.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from ..file_model import Action, NavigationContext, Resize, Status, initial_context, transition
from ..input import read_key
from ..keymap import Keymap
from ..render import DEFAULT_CURSOR, MARGIN_BOTTOM, build_frame, write_frame
from ..terminal import TerminalController, measure_terminal
from ..ui_theme import DEFAULT_THEME, UITheme
from .loader import DirectoryLoadScheduler

logger = logging.getLogger(__name__)

KEY_POLL_TIMEOUT_MS = 50


@dataclass(frozen=True)
class PickerOptions:
    """Presentation and input settings for one session.

    ``height`` fixes the viewport height; ``None`` follows the terminal height
    minus ``MARGIN_BOTTOM``.
    """

    height: int | None = None
    cursor_marker: str = DEFAULT_CURSOR
    theme: UITheme = DEFAULT_THEME
    keymap: Keymap = field(default_factory=Keymap.default)


@dataclass(frozen=True)
class PickResult:
    """Outcome of a session: a chosen file, or nothing (with a reason on read failure)."""

    path: Path | None = None
    error: str | None = None

    @property
    def selected(self) -> bool:
        return self.path is not None

    @classmethod
    def from_context(cls, ctx: NavigationContext) -> PickResult:
        if ctx.status is Status.SELECTED:
            return cls(path=ctx.result)
        return cls(error=ctx.error)


def viewport_height(options: PickerOptions, terminal_lines: int) -> int:
    """Return rows available to the entry window."""
    if options.height is not None:
        return max(1, options.height)
    return max(1, terminal_lines - MARGIN_BOTTOM)


def run_event_loop(
    ctx: NavigationContext,
    terminal: TerminalController,
    stdin_fd: int,
    output_fd: int,
    scheduler: DirectoryLoadScheduler,
    options: PickerOptions,
    *,
    read: Callable[..., str] = read_key,
    terminal_size: Callable[[int], os.terminal_size] = measure_terminal,
) -> NavigationContext:
    """Process events until the session is selected or cancelled."""
    scheduled: Path | None = None
    dirty = True
    skip_next_lf = False

    with terminal.raw_mode():
        while not ctx.finished:
            term = terminal_size(output_fd)
            height = viewport_height(options, term.lines)
            if height != ctx.height:
                ctx = transition(ctx, Resize(height))
                dirty = True

            if ctx.pending_load is None:
                scheduled = None
            elif ctx.pending_load != scheduled:
                scheduled = ctx.pending_load
                scheduler.schedule(scheduled)

            for event in scheduler.drain_events():
                before = ctx
                ctx = transition(ctx, event)
                if ctx is before:
                    logger.debug("discarded stale load event for %s", event.path)
                dirty = True
            if ctx.finished:
                break

            if dirty:
                write_frame(
                    output_fd,
                    build_frame(
                        ctx,
                        term.columns,
                        theme=options.theme,
                        cursor_marker=options.cursor_marker,
                        keymap=options.keymap,
                    ),
                )
                dirty = False

            try:
                key = read(stdin_fd, timeout_ms=KEY_POLL_TIMEOUT_MS)
            except KeyboardInterrupt:
                ctx = transition(ctx, Action.CANCEL)
                break
            if key == "":
                continue
            if skip_next_lf and key == "ENTER_LF":
                skip_next_lf = False
                continue
            if key == "ENTER_CR":
                key = "ENTER"
                skip_next_lf = True
            else:
                if key == "ENTER_LF":
                    key = "ENTER"
                skip_next_lf = False

            action = options.keymap.lookup(key)
            if action is None:
                continue
            ctx = transition(ctx, action)
            dirty = True

    return ctx


def run_picker(
    start: Path,
    options: PickerOptions | None = None,
    *,
    stdin_fd: int | None = None,
    output_fd: int | None = None,
) -> PickResult:
    """Run an interactive session rooted at ``start`` and return its outcome.

    The screen is drawn on ``output_fd`` (stderr by default) so stdout stays
    free for the chosen path.
    """
    options = options or PickerOptions()
    if stdin_fd is None:
        stdin_fd = sys.stdin.fileno()
    if output_fd is None:
        output_fd = sys.stderr.fileno()

    terminal = TerminalController(stdin_fd, output_fd)
    scheduler = DirectoryLoadScheduler()
    term = measure_terminal(output_fd)
    ctx = initial_context(start, viewport_height(options, term.lines))
    logger.info("picker session started in %s", start)

    final = run_event_loop(ctx, terminal, stdin_fd, output_fd, scheduler, options)
    result = PickResult.from_context(final)
    logger.info("picker session ended: status=%s path=%s", final.status.value, result.path)
    return result


__all__ = [
    "KEY_POLL_TIMEOUT_MS",
    "PickerOptions",
    "PickResult",
    "viewport_height",
    "run_event_loop",
    "run_picker",
]
