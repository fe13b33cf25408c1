from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import Any

from result import Result

from bedrock_workspace.models.enums import ReadErrorCode, WorkspaceState


@dataclass(slots=True, frozen=True)
class ReadError:
    code: ReadErrorCode
    path: str
    message: str


type ReadResult[T] = Result[T, ReadError]


@dataclass(slots=True, frozen=True)
class VcsStatus:
    branch: str | None
    modified: tuple[str, ...] = ()
    untracked: tuple[str, ...] = ()
    staged: tuple[str, ...] = ()

    @property
    def modified_count(self) -> int:
        return len(self.modified)

    @property
    def untracked_count(self) -> int:
        return len(self.untracked)

    @property
    def staged_count(self) -> int:
        return len(self.staged)

    @property
    def is_clean(self) -> bool:
        return not (self.modified or self.untracked or self.staged)


@dataclass(slots=True, frozen=True)
class CommitInfo:
    sha: str
    message: str
    date: str

    @property
    def day(self) -> str:
        return self.date[:10]


@dataclass(slots=True, frozen=True)
class RemoteDelta:
    ahead_count: int
    behind_count: int
    commits: tuple[CommitInfo, ...] = ()


@dataclass(slots=True, frozen=True)
class PackageInfo:
    name: str | None = None
    version: str | None = None
    description: str | None = None
    author: str | None = None
    dependencies: dict[str, str] = field(default_factory=dict)
    dev_dependencies: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> PackageInfo:
        def _text(key: str) -> str | None:
            value = payload.get(key)
            if value is None:
                return None
            if isinstance(value, dict):
                # npm allows "author": {"name": ..., "email": ...}
                value = value.get("name")
            return str(value) if value is not None else None

        def _deps(key: str) -> dict[str, str]:
            raw = payload.get(key) or {}
            if not isinstance(raw, dict):
                return {}
            return {str(k): str(v) for k, v in raw.items()}

        return cls(
            name=_text("name"),
            version=_text("version"),
            description=_text("description"),
            author=_text("author"),
            dependencies=_deps("dependencies"),
            dev_dependencies=_deps("devDependencies"),
        )

    @property
    def minecraft_dependencies(self) -> dict[str, str]:
        return {name: ver for name, ver in self.dependencies.items() if "minecraft" in name}


@dataclass(slots=True, frozen=True)
class ProjectInfo:
    name: str
    path: Path
    is_template: bool = False
    is_built: bool = False
    manifest_version: tuple[int, int, int] | None = None

    @property
    def version_label(self) -> str | None:
        if self.manifest_version is None:
            return None
        return ".".join(str(part) for part in self.manifest_version)


@dataclass(slots=True, frozen=True)
class LibraryInfo:
    name: str
    path: Path
    has_js: bool = False
    has_types: bool = False

    @property
    def status(self) -> str:
        if self.has_js and self.has_types:
            return "compiled"
        if self.has_types:
            return "types only"
        return ""


@dataclass(slots=True, frozen=True)
class WorkspaceSnapshot:
    root_path: Path
    state: WorkspaceState
    vcs_status: VcsStatus | None = None
    vcs_error: str | None = None
    remote_delta: RemoteDelta | None = None
    remote_error: str | None = None
    package: PackageInfo | None = None
    dependencies_installed: bool = False
    lock_file_stale: bool = False
    has_projects_dir: bool = False
    projects: tuple[ProjectInfo, ...] = ()
    has_libraries_dir: bool = False
    libraries: tuple[LibraryInfo, ...] = ()
    disk_usage: dict[str, int] = field(default_factory=dict)
    total_size: int = 0
    # Excluded from equality: it moves with the wall clock.
    age: timedelta | None = field(default=None, compare=False)

    @property
    def exists(self) -> bool:
        return self.state is not WorkspaceState.MISSING

    @property
    def vcs_tracked(self) -> bool:
        return self.state.is_tracked

    @property
    def user_projects(self) -> tuple[ProjectInfo, ...]:
        return tuple(p for p in self.projects if not p.is_template)

    @property
    def has_template(self) -> bool:
        return any(p.is_template for p in self.projects)
