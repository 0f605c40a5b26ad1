"""Background directory loads delivered back to the loop as events."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from pathlib import Path
from queue import Empty, Queue

from ..errors import DirectoryReadError
from ..file_model import DirEntry, DirectoryLoaded, DirectoryLoadFailed, read_directory

logger = logging.getLogger(__name__)

LoadEvent = DirectoryLoaded | DirectoryLoadFailed


class DirectoryLoadScheduler:
    """Single-worker latest-request-wins directory loader.

    ``schedule`` never blocks. The worker reads the directory and queues a
    ``DirectoryLoaded`` or ``DirectoryLoadFailed`` event; the loop thread picks
    those up with ``drain_events`` and feeds them to the state machine.
    """

    def __init__(self, read: Callable[[Path], tuple[DirEntry, ...]] = read_directory) -> None:
        self._read = read
        self._lock = threading.Lock()
        self._pending: Path | None = None
        self._running = False
        self._events: Queue[LoadEvent] = Queue()

    def _load(self, path: Path) -> LoadEvent:
        try:
            entries = self._read(path)
        except DirectoryReadError as exc:
            logger.warning("directory load failed: %s", exc)
            return DirectoryLoadFailed(path=path, reason=str(exc))
        except OSError as exc:
            logger.warning("directory load failed: %s: %s", path, exc)
            return DirectoryLoadFailed(path=path, reason=f"cannot read {path}: {exc.strerror or exc}")
        logger.debug("loaded %d entries from %s", len(entries), path)
        return DirectoryLoaded(path=path, entries=tuple(entries))

    def _worker(self) -> None:
        while True:
            with self._lock:
                path = self._pending
                self._pending = None
                if path is None:
                    self._running = False
                    return
            self._events.put(self._load(path))

    def schedule(self, path: Path) -> None:
        """Queue a load of ``path``, replacing any load that has not started."""
        logger.debug("scheduling load of %s", path)
        with self._lock:
            self._pending = path
            if self._running:
                return
            self._running = True

        worker = threading.Thread(
            target=self._worker,
            name="dirpick-directory-loader",
            daemon=True,
        )
        worker.start()

    def drain_events(self) -> list[LoadEvent]:
        """Drain all completed load events."""
        out: list[LoadEvent] = []
        while True:
            try:
                out.append(self._events.get_nowait())
            except Empty:
                break
        return out


__all__ = [
    "LoadEvent",
    "DirectoryLoadScheduler",
]
