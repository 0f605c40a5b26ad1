"""Exception types raised by dirpick."""

from __future__ import annotations

from pathlib import Path


class DirpickError(Exception):
    """Base exception for dirpick errors."""


class DirectoryReadError(DirpickError):
    """Raised when a directory listing cannot be read."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"cannot read {path}: {reason}")


__all__ = [
    "DirpickError",
    "DirectoryReadError",
]
