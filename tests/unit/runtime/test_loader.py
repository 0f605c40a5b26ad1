"""Tests for the background directory loader."""

from __future__ import annotations

import tempfile
import threading
import time
import unittest
from pathlib import Path

from dirpick.errors import DirectoryReadError
from dirpick.file_model import DirEntry, DirectoryLoaded, DirectoryLoadFailed
from dirpick.runtime.loader import DirectoryLoadScheduler


def _wait_for_events(
    scheduler: DirectoryLoadScheduler,
    *,
    expected_count: int,
    timeout_seconds: float = 1.0,
) -> list:
    deadline = time.monotonic() + timeout_seconds
    out: list = []
    while time.monotonic() < deadline:
        out.extend(scheduler.drain_events())
        if len(out) >= expected_count:
            break
        time.sleep(0.01)
    return out


class DirectoryLoadSchedulerTests(unittest.TestCase):
    def test_schedule_reads_real_directory_in_background(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "one.txt").write_text("1", encoding="utf-8")
            (root / "sub").mkdir()

            scheduler = DirectoryLoadScheduler()
            scheduler.schedule(root)
            events = _wait_for_events(scheduler, expected_count=1)

        self.assertEqual(len(events), 1)
        self.assertIsInstance(events[0], DirectoryLoaded)
        self.assertEqual(events[0].path, root)
        self.assertEqual([entry.name for entry in events[0].entries], ["sub", "one.txt"])

    def test_read_failure_becomes_failed_event(self) -> None:
        def read(path: Path):
            raise DirectoryReadError(path, "Permission denied")

        scheduler = DirectoryLoadScheduler(read=read)
        scheduler.schedule(Path("/locked"))
        events = _wait_for_events(scheduler, expected_count=1)

        self.assertEqual(len(events), 1)
        self.assertIsInstance(events[0], DirectoryLoadFailed)
        self.assertEqual(events[0].path, Path("/locked"))
        self.assertIn("Permission denied", events[0].reason)

    def test_pending_requests_collapse_to_latest(self) -> None:
        calls: list[Path] = []
        first_started = threading.Event()
        allow_first_finish = threading.Event()

        def read(path: Path):
            if path == Path("/first"):
                first_started.set()
                allow_first_finish.wait(timeout=1.0)
            calls.append(path)
            return (DirEntry(name=path.name, is_dir=False),)

        scheduler = DirectoryLoadScheduler(read=read)
        scheduler.schedule(Path("/first"))
        self.assertTrue(first_started.wait(timeout=1.0))
        scheduler.schedule(Path("/second"))
        scheduler.schedule(Path("/third"))
        allow_first_finish.set()

        events = _wait_for_events(scheduler, expected_count=2)

        self.assertEqual(calls, [Path("/first"), Path("/third")])
        self.assertEqual([event.path for event in events], [Path("/first"), Path("/third")])


if __name__ == "__main__":
    unittest.main()
