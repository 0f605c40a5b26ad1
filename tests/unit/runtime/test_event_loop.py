"""Integration tests for the picker event loop with scripted keys.

The terminal, key source, and loader are replaced with in-memory fakes so the
loop runs deterministically without a tty.
"""

from __future__ import annotations

import os
import unittest
from contextlib import contextmanager
from pathlib import Path
from unittest import mock

from dirpick.file_model import (
    DirEntry,
    DirectoryLoaded,
    DirectoryLoadFailed,
    NavigationContext,
    Status,
    initial_context,
)
from dirpick.input import UNKNOWN_KEY
from dirpick.keymap import Keymap
from dirpick.render import MARGIN_BOTTOM
from dirpick.runtime.loop import PickerOptions, PickResult, run_event_loop, viewport_height


class _FakeTerminal:
    def __init__(self) -> None:
        self.entered = 0
        self.exited = 0

    @contextmanager
    def raw_mode(self):
        self.entered += 1
        try:
            yield
        finally:
            self.exited += 1


class _SyncScheduler:
    """Completes each load immediately from a fixed table of listings."""

    def __init__(self, listings: dict[Path, tuple[DirEntry, ...] | str]) -> None:
        self.listings = listings
        self.scheduled: list[Path] = []
        self._events: list = []

    def schedule(self, path: Path) -> None:
        self.scheduled.append(path)
        listing = self.listings[path]
        if isinstance(listing, str):
            self._events.append(DirectoryLoadFailed(path=path, reason=listing))
        else:
            self._events.append(DirectoryLoaded(path=path, entries=listing))

    def drain_events(self) -> list:
        out = self._events
        self._events = []
        return out


def _scripted_keys(*keys: str):
    pending = list(keys)

    def read(_fd: int, timeout_ms: int | None = None) -> str:
        if not pending:
            raise AssertionError("event loop asked for more keys than scripted")
        key = pending.pop(0)
        if isinstance(key, BaseException):
            raise key
        return key

    return read


def _terminal_size(lines: int = 10, columns: int = 80):
    return lambda *_args: os.terminal_size((columns, lines))


ROOT = Path("/srv/files")
LISTINGS = {
    ROOT: (
        DirEntry(name="sub", is_dir=True, size=4096, mode="drwxr-xr-x"),
        DirEntry(name="a.txt", is_dir=False, size=3, mode="-rw-r--r--"),
        DirEntry(name="b.txt", is_dir=False, size=5, mode="-rw-r--r--"),
    ),
    ROOT / "sub": (DirEntry(name="inner.log", is_dir=False, size=7, mode="-rw-r--r--"),),
    ROOT.parent: (DirEntry(name="files", is_dir=True, size=4096, mode="drwxr-xr-x"),),
}


class EventLoopTests(unittest.TestCase):
    def _run(self, *keys, listings=None, options=None, lines: int = 10, initial_height: int | None = None):
        terminal = _FakeTerminal()
        scheduler = _SyncScheduler(listings or LISTINGS)
        if initial_height is None:
            initial_height = viewport_height(options or PickerOptions(), lines)
        ctx = initial_context(ROOT, initial_height)
        with mock.patch("dirpick.runtime.loop.write_frame") as write_mock:
            final = run_event_loop(
                ctx,
                terminal,
                0,
                2,
                scheduler,
                options or PickerOptions(),
                read=_scripted_keys(*keys),
                terminal_size=_terminal_size(lines),
            )
        return final, terminal, scheduler, write_mock

    def test_enter_on_file_selects_it(self) -> None:
        final, terminal, scheduler, write_mock = self._run("j", "ENTER_CR")

        self.assertEqual(final.status, Status.SELECTED)
        self.assertEqual(final.result, ROOT / "a.txt")
        self.assertEqual(scheduler.scheduled, [ROOT])
        self.assertEqual((terminal.entered, terminal.exited), (1, 1))
        self.assertGreaterEqual(write_mock.call_count, 2)

    def test_descend_then_select_in_child_directory(self) -> None:
        final, _terminal, scheduler, _write = self._run("l", "ENTER_CR")

        self.assertEqual(final.result, ROOT / "sub" / "inner.log")
        self.assertEqual(scheduler.scheduled, [ROOT, ROOT / "sub"])

    def test_ascend_above_launch_directory_and_back(self) -> None:
        final, _terminal, scheduler, _write = self._run("h", "l", "j", "j", "ENTER_CR")

        self.assertEqual(scheduler.scheduled, [ROOT, ROOT.parent, ROOT])
        self.assertEqual(final.result, ROOT / "b.txt")

    def test_line_feed_after_carriage_return_is_ignored(self) -> None:
        final, *_rest = self._run("ENTER_CR", "ENTER_LF", "q")

        self.assertEqual(final.status, Status.CANCELLED)
        self.assertEqual(final.current_path, ROOT / "sub")

    def test_quit_key_cancels_session(self) -> None:
        final, terminal, *_rest = self._run("j", "q")

        self.assertEqual(final.status, Status.CANCELLED)
        self.assertIsNone(final.result)
        self.assertEqual(terminal.exited, 1)

    def test_keyboard_interrupt_cancels_session(self) -> None:
        final, *_rest = self._run(KeyboardInterrupt())
        self.assertEqual(final.status, Status.CANCELLED)

    def test_unbound_keys_and_timeouts_are_ignored(self) -> None:
        final, *_rest = self._run("", "x", "MOUSE_WHEEL_DOWN:3:4", "ENTER_LF")
        self.assertEqual(final.result, ROOT / "a.txt")

    def test_unrecognized_escape_sequence_keeps_session_open(self) -> None:
        final, *_rest = self._run(UNKNOWN_KEY, "j", "ENTER_CR")

        self.assertEqual(final.status, Status.SELECTED)
        self.assertEqual(final.result, ROOT / "a.txt")

    def test_load_failure_ends_session_before_reading_keys(self) -> None:
        final, *_rest = self._run(listings={ROOT: "cannot read /srv/files: Permission denied"})

        self.assertEqual(final.status, Status.CANCELLED)
        self.assertEqual(final.error, "cannot read /srv/files: Permission denied")
        self.assertFalse(PickResult.from_context(final).selected)

    def test_fixed_height_option_overrides_terminal_height(self) -> None:
        final, *_rest = self._run("q", options=PickerOptions(height=2), lines=40)
        self.assertEqual(final.height, 2)

    def test_terminal_resize_updates_viewport(self) -> None:
        final, *_rest = self._run("G", "q", lines=30, initial_height=2)

        self.assertEqual(final.height, 30 - MARGIN_BOTTOM)
        self.assertEqual((final.view.cursor, final.view.start, final.view.end), (2, 0, 2))

    def test_fixed_height_ignores_terminal_size(self) -> None:
        final, *_rest = self._run("q", options=PickerOptions(height=4), lines=30, initial_height=9)
        self.assertEqual(final.height, 4)

    def test_terminal_height_drives_viewport(self) -> None:
        final, *_rest = self._run("q", lines=30)
        self.assertEqual(final.height, 30 - MARGIN_BOTTOM)

    def test_viewport_is_measured_on_output_descriptor(self) -> None:
        measured: list[int] = []

        def terminal_size(fd: int) -> os.terminal_size:
            measured.append(fd)
            return os.terminal_size((120, 50)) if fd == 7 else os.terminal_size((80, 24))

        ctx = initial_context(ROOT, 3)
        with mock.patch("dirpick.runtime.loop.write_frame"):
            final = run_event_loop(
                ctx,
                _FakeTerminal(),
                0,
                7,
                _SyncScheduler(LISTINGS),
                PickerOptions(),
                read=_scripted_keys("q"),
                terminal_size=terminal_size,
            )

        self.assertEqual(set(measured), {7})
        self.assertEqual(final.height, 50 - MARGIN_BOTTOM)

    def test_keymap_overrides_are_used(self) -> None:
        keymap = Keymap.default().apply_overrides({"x": "confirm", "ENTER": None})
        final, *_rest = self._run("j", "ENTER_CR", "x", options=PickerOptions(keymap=keymap))
        self.assertEqual(final.result, ROOT / "a.txt")


class PickResultTests(unittest.TestCase):
    def test_selected_context_maps_to_path(self) -> None:
        ctx = NavigationContext(current_path=ROOT, status=Status.SELECTED, result=ROOT / "a.txt")
        result = PickResult.from_context(ctx)
        self.assertTrue(result.selected)
        self.assertEqual(result.path, ROOT / "a.txt")

    def test_cancelled_context_maps_to_no_selection(self) -> None:
        ctx = NavigationContext(current_path=ROOT, status=Status.CANCELLED)
        result = PickResult.from_context(ctx)
        self.assertFalse(result.selected)
        self.assertIsNone(result.error)


class ViewportHeightTests(unittest.TestCase):
    def test_auto_height_reserves_bottom_margin(self) -> None:
        self.assertEqual(viewport_height(PickerOptions(), 24), 24 - MARGIN_BOTTOM)

    def test_auto_height_never_drops_below_one(self) -> None:
        self.assertEqual(viewport_height(PickerOptions(), 3), 1)

    def test_fixed_height_wins(self) -> None:
        self.assertEqual(viewport_height(PickerOptions(height=7), 100), 7)


if __name__ == "__main__":
    unittest.main()
