from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from bedrock_workspace.models.layout import WorkspaceLayout
from bedrock_workspace.models.workspace import CommitInfo, VcsStatus

PACKAGE: dict[str, Any] = {
    "name": "bedrock-workspace-template",
    "version": "1.0.0",
    "description": "Minecraft Bedrock add-on workspace",
    "author": {"name": "Ackinari", "email": "dev@example.com"},
    "dependencies": {"@minecraft/server": "1.9.0", "@minecraft/server-ui": "1.1.0", "lodash": "4.17.21"},
    "devDependencies": {"typescript": "5.4.0"},
}


def write_file(path: Path, size: int = 0) -> Path:
    """Create *path* (and parents) with an apparent size of *size* bytes."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as fh:
        fh.truncate(size)
    return path


def write_json(path: Path, payload: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def make_workspace(base: Path, tracked: bool = True, package: dict[str, Any] | None = PACKAGE) -> WorkspaceLayout:
    layout = WorkspaceLayout.under(base, "workspace")
    layout.root.mkdir(parents=True)
    if tracked:
        layout.vcs_dir.mkdir()
    if package is not None:
        write_json(layout.package_json, package)
    return layout


def add_project(
    layout: WorkspaceLayout,
    name: str,
    version: list[int] | None = None,
    scripts: dict[str, int] | None = None,
    dist: dict[str, int] | None = None,
) -> Path:
    project = layout.project_dir(name)
    project.mkdir(parents=True, exist_ok=True)
    if version is not None:
        write_json(layout.manifest_path(name), {"format_version": 2, "header": {"name": name, "version": version}})
    for filename, size in (scripts or {}).items():
        write_file(layout.scripts_dir(name) / filename, size)
    for filename, size in (dist or {}).items():
        write_file(layout.dist_dir(name) / filename, size)
    return project


def add_library(layout: WorkspaceLayout, name: str, js: bool = False, types: bool = False) -> Path:
    library = layout.libraries_dir / name
    library.mkdir(parents=True, exist_ok=True)
    if js:
        write_file(library / "index.js", 10)
    if types:
        write_file(library / "index.d.ts", 10)
    return library


def clean_status(branch: str = "main") -> VcsStatus:
    return VcsStatus(branch=branch)


def dirty_status(branch: str = "main") -> VcsStatus:
    return VcsStatus(branch=branch, modified=("scripts/main.ts",), untracked=("notes.txt",))


def make_commits(count: int) -> list[CommitInfo]:
    return [
        CommitInfo(sha=f"{n:040x}", message=f"Template change {n}", date=f"2024-03-{n % 28 + 1:02d}T10:00:00+00:00")
        for n in range(1, count + 1)
    ]
