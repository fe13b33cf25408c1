from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

TEMPLATE_PROJECT = "template"

# Relative locations inside a workspace root.
PACKAGE_JSON = "package.json"
LOCK_FILE = "package-lock.json"
DEPENDENCY_DIR = "node_modules"
VCS_DIR = ".git"
EDITOR_DIR = ".vscode"
PROJECTS_DIR = "projects"
LIBRARIES_DIR = "libraries"


@dataclass(slots=True, frozen=True)
class WorkspaceLayout:
    """Fixed paths of a workspace, all derived from an explicit root."""

    root: Path

    @classmethod
    def under(cls, base: str | Path, workspace_dir: str) -> WorkspaceLayout:
        return cls(root=Path(base).expanduser().absolute() / workspace_dir)

    @property
    def package_json(self) -> Path:
        return self.root / PACKAGE_JSON

    @property
    def lock_file(self) -> Path:
        return self.root / LOCK_FILE

    @property
    def dependency_dir(self) -> Path:
        return self.root / DEPENDENCY_DIR

    @property
    def vcs_dir(self) -> Path:
        return self.root / VCS_DIR

    @property
    def editor_dir(self) -> Path:
        return self.root / EDITOR_DIR

    @property
    def projects_dir(self) -> Path:
        return self.root / PROJECTS_DIR

    @property
    def libraries_dir(self) -> Path:
        return self.root / LIBRARIES_DIR

    def project_dir(self, name: str) -> Path:
        return self.projects_dir / name

    def manifest_path(self, project: str) -> Path:
        return self.project_dir(project) / "behavior_pack" / "manifest.json"

    def scripts_dir(self, project: str) -> Path:
        return self.project_dir(project) / "behavior_pack" / "scripts"

    def dist_dir(self, project: str) -> Path:
        return self.project_dir(project) / "dist"

    def backup_path(self, stamp_ms: int) -> Path:
        return self.root.with_name(f"{self.root.name}_backup_{stamp_ms}")
