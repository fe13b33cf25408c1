from __future__ import annotations

import os
import shutil
import stat as statmod
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


@dataclass(slots=True, frozen=True)
class StatResult:
    size: int
    is_dir: bool
    mtime: float
    created: float
    dev: int
    ino: int


class FileSystem(Protocol):
    """Filesystem operations used by the workspace services.

    ``stat`` follows symlinks; callers that walk trees are responsible for
    guarding against link cycles.
    """

    def exists(self, path: Path) -> bool: ...

    def is_dir(self, path: Path) -> bool: ...

    def is_symlink(self, path: Path) -> bool: ...

    def stat(self, path: Path) -> StatResult: ...

    def listdir(self, path: Path) -> list[str]: ...

    def read_text(self, path: Path) -> str: ...

    def remove(self, path: Path) -> None: ...

    def copy_tree(self, src: Path, dst: Path) -> None: ...


class OsFileSystem:
    def exists(self, path: Path) -> bool:
        return os.path.exists(path)

    def is_dir(self, path: Path) -> bool:
        return os.path.isdir(path)

    def is_symlink(self, path: Path) -> bool:
        return os.path.islink(path)

    def stat(self, path: Path) -> StatResult:
        st = os.stat(path)
        # st_birthtime is only reported on some platforms.
        created = getattr(st, "st_birthtime", None) or st.st_mtime
        return StatResult(
            size=st.st_size,
            is_dir=statmod.S_ISDIR(st.st_mode),
            mtime=st.st_mtime,
            created=created,
            dev=st.st_dev,
            ino=st.st_ino,
        )

    def listdir(self, path: Path) -> list[str]:
        return os.listdir(path)

    def read_text(self, path: Path) -> str:
        return Path(path).read_text(encoding="utf-8")

    def remove(self, path: Path) -> None:
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        else:
            os.unlink(path)

    def copy_tree(self, src: Path, dst: Path) -> None:
        shutil.copytree(src, dst, symlinks=True)


DEFAULT_FS: FileSystem = OsFileSystem()
