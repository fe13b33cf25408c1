from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from bedrock_workspace.models.enums import InitOutcome, UpdateOutcome
from bedrock_workspace.models.workspace import CommitInfo


@dataclass(slots=True)
class InitReport:
    outcome: InitOutcome
    root: Path
    dependencies_installed: bool = False
    libraries_attached: bool = False
    editor_opened: bool = False


@dataclass(slots=True)
class UpdateReport:
    outcome: UpdateOutcome
    pending: list[CommitInfo] = field(default_factory=list)
    stashed: bool = False
    dependencies_updated: bool | None = None
    backup_path: Path | None = None
