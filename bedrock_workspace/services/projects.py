from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from bedrock_workspace.models.layout import TEMPLATE_PROJECT, WorkspaceLayout
from bedrock_workspace.models.workspace import LibraryInfo, ProjectInfo
from bedrock_workspace.services.fs import DEFAULT_FS, FileSystem
from bedrock_workspace.services.inspector import iter_files
from bedrock_workspace.services.packages import manifest_version_or_none

DEFAULT_COMPILED_EXTENSIONS: tuple[str, ...] = (".js",)


def list_subdirectories(path: Path, fs: FileSystem = DEFAULT_FS) -> list[str]:
    """Names of the immediate subdirectories of *path*, sorted.

    A missing or unreadable *path* yields an empty list.
    """
    try:
        names = fs.listdir(path)
    except OSError:
        return []
    return sorted(name for name in names if fs.is_dir(path / name))


def is_built(scripts_dir: Path, extensions: Sequence[str], fs: FileSystem = DEFAULT_FS) -> bool:
    if not fs.is_dir(scripts_dir):
        return False
    suffixes = tuple(ext.lower() for ext in extensions)
    return any(f.name.lower().endswith(suffixes) for f in iter_files(scripts_dir, fs))


def list_projects(
    layout: WorkspaceLayout,
    compiled_extensions: Sequence[str] = DEFAULT_COMPILED_EXTENSIONS,
    fs: FileSystem = DEFAULT_FS,
) -> list[ProjectInfo]:
    """Every project directory under ``projects/``, template included, sorted by name."""
    projects: list[ProjectInfo] = []
    for name in list_subdirectories(layout.projects_dir, fs):
        projects.append(
            ProjectInfo(
                name=name,
                path=layout.project_dir(name),
                is_template=name == TEMPLATE_PROJECT,
                is_built=is_built(layout.scripts_dir(name), compiled_extensions, fs),
                manifest_version=manifest_version_or_none(layout.manifest_path(name), fs),
            )
        )
    return projects


def list_libraries(layout: WorkspaceLayout, fs: FileSystem = DEFAULT_FS) -> list[LibraryInfo]:
    libraries: list[LibraryInfo] = []
    for name in list_subdirectories(layout.libraries_dir, fs):
        path = layout.libraries_dir / name
        libraries.append(
            LibraryInfo(
                name=name,
                path=path,
                has_js=fs.exists(path / "index.js"),
                has_types=fs.exists(path / "index.d.ts"),
            )
        )
    return libraries
