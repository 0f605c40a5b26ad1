"""Filesystem listing for the picker: one directory level, sorted."""

from __future__ import annotations

import os
import stat
from pathlib import Path

from ..errors import DirectoryReadError
from .types import DirEntry


def sort_entries(entries: list[DirEntry]) -> list[DirEntry]:
    """Order directories before files, each group by name in code-point order."""
    return sorted(entries, key=lambda item: (not item.is_dir, item.name))


def read_directory(directory: Path) -> tuple[DirEntry, ...]:
    """List direct children of ``directory`` with size and mode metadata.

    Children are not followed through symlinks; a symlink to a directory is
    listed as a plain entry with an ``l`` mode string. Children that vanish
    between listing and ``lstat`` are skipped. Failure to open or iterate the
    directory itself raises ``DirectoryReadError``.
    """
    entries: list[DirEntry] = []
    try:
        with os.scandir(directory) as children:
            for child in children:
                try:
                    info = child.stat(follow_symlinks=False)
                except FileNotFoundError:
                    continue
                except OSError:
                    entries.append(DirEntry(name=child.name, is_dir=False, size=0, mode="?---------"))
                    continue
                entries.append(
                    DirEntry(
                        name=child.name,
                        is_dir=stat.S_ISDIR(info.st_mode),
                        size=max(0, int(info.st_size)),
                        mode=stat.filemode(info.st_mode),
                    )
                )
    except OSError as exc:
        raise DirectoryReadError(directory, exc.strerror or str(exc)) from exc

    return tuple(sort_entries(entries))


__all__ = [
    "sort_entries",
    "read_directory",
]
