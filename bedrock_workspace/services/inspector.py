from __future__ import annotations

import logging
import time
from collections.abc import Iterator
from datetime import timedelta
from pathlib import Path

from bedrock_workspace.services.fs import DEFAULT_FS, FileSystem

logger = logging.getLogger(__name__)


def path_exists(path: Path, fs: FileSystem = DEFAULT_FS) -> bool:
    return fs.exists(path)


def path_size(path: Path, fs: FileSystem = DEFAULT_FS) -> int:
    """Total bytes of the file or directory tree at *path*.

    Missing paths and unreadable entries count as 0.  Symlinks are followed;
    a directory that is already on the current descent stack is counted as
    0 when reached again, so link cycles terminate.
    """
    return _size(path, fs, set())


def _size(path: Path, fs: FileSystem, active: set[tuple[int, int]]) -> int:
    try:
        st = fs.stat(path)
    except OSError:
        return 0
    if not st.is_dir:
        return st.size

    key = (st.dev, st.ino)
    if key in active:
        logger.debug("Symlink cycle at %s, counted as 0", path)
        return 0
    active.add(key)
    try:
        total = 0
        for name in fs.listdir(path):
            total += _size(path / name, fs, active)
        return total
    except OSError as exc:
        logger.debug("Size of %s unavailable: %s", path, exc)
        return 0
    finally:
        active.discard(key)


def path_age(path: Path, fs: FileSystem = DEFAULT_FS, now: float | None = None) -> timedelta | None:
    """Time since *path* was created (modification time where creation is not reported)."""
    try:
        st = fs.stat(path)
    except OSError:
        return None
    current = time.time() if now is None else now
    return timedelta(seconds=max(0.0, current - st.created))


def path_mtime(path: Path, fs: FileSystem = DEFAULT_FS) -> float | None:
    try:
        return fs.stat(path).mtime
    except OSError:
        return None


def iter_files(
    path: Path,
    fs: FileSystem = DEFAULT_FS,
    skip: frozenset[str] = frozenset(),
    follow_links: bool = True,
) -> Iterator[Path]:
    """Depth-first iteration over regular files below *path*.

    Directory names in *skip* are not descended into.  Uses the same
    cycle guard as :func:`path_size`.  With ``follow_links=False`` symbolic
    links below *path* are neither descended into nor yielded.
    """
    active: set[tuple[int, int]] = set()

    def _walk(current: Path) -> Iterator[Path]:
        if not follow_links and current != path and fs.is_symlink(current):
            return
        try:
            st = fs.stat(current)
        except OSError:
            return
        if not st.is_dir:
            yield current
            return
        key = (st.dev, st.ino)
        if key in active:
            return
        active.add(key)
        try:
            names = sorted(fs.listdir(current))
        except OSError:
            names = []
        for name in names:
            if name in skip:
                continue
            yield from _walk(current / name)
        active.discard(key)

    yield from _walk(path)
