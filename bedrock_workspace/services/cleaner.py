from __future__ import annotations

import logging
from collections.abc import Sequence
from fnmatch import fnmatch
from pathlib import Path

from rich.console import Console

from bedrock_workspace.models.clean import CleanableItem, CleanFailure, CleanReport, CleanTarget
from bedrock_workspace.models.layout import DEPENDENCY_DIR, VCS_DIR, WorkspaceLayout
from bedrock_workspace.services.fs import DEFAULT_FS, FileSystem
from bedrock_workspace.services.inspector import iter_files, path_size
from bedrock_workspace.services.projects import list_subdirectories
from bedrock_workspace.services.prompts import Choice, Prompter
from bedrock_workspace.ui.views import item_label, render_catalog, render_clean_report, render_missing

logger = logging.getLogger(__name__)

NODE_MODULES = "Node modules"
LOCK_FILE = "Package lock file"
BUILD_OUTPUTS = "Build outputs"
TEMP_FILES = "Temporary files"
EDITOR_SETTINGS = "VS Code settings"

# Removing either of these means dependencies must be installed again.
REINSTALL_ITEMS = frozenset({NODE_MODULES, LOCK_FILE})

_TEMP_SKIP_DIRS = frozenset({DEPENDENCY_DIR, VCS_DIR})


def _direct(name: str, description: str, path: Path, fs: FileSystem) -> CleanableItem | None:
    if not fs.exists(path):
        return None
    return CleanableItem.direct(name, description, path, path_size(path, fs))


def build_output_targets(layout: WorkspaceLayout, fs: FileSystem = DEFAULT_FS) -> list[CleanTarget]:
    targets: list[CleanTarget] = []
    for project in list_subdirectories(layout.projects_dir, fs):
        for path in (layout.scripts_dir(project), layout.dist_dir(project)):
            if fs.exists(path):
                targets.append(CleanTarget(path, path_size(path, fs)))
    return targets


def temp_file_targets(
    layout: WorkspaceLayout,
    patterns: Sequence[str],
    fs: FileSystem = DEFAULT_FS,
) -> list[CleanTarget]:
    """Files below the root whose names match one of *patterns*.

    Symbolic links are skipped, and a match that resolves outside the
    workspace is dropped, so cleaning never removes files the workspace
    does not own.
    """
    root = layout.root.resolve()
    targets: list[CleanTarget] = []
    for path in iter_files(layout.root, fs, skip=_TEMP_SKIP_DIRS, follow_links=False):
        if not any(fnmatch(path.name, pattern) for pattern in patterns):
            continue
        if not path.resolve().is_relative_to(root):
            logger.warning("Skipping %s: resolves outside the workspace", path)
            continue
        targets.append(CleanTarget(path, path_size(path, fs)))
    return targets


def build_catalog(
    layout: WorkspaceLayout,
    temp_patterns: Sequence[str] = (),
    fs: FileSystem = DEFAULT_FS,
) -> list[CleanableItem]:
    """Every category that currently has something to remove, sizes included.

    Sizes are measured here, once, before anything is deleted.  A direct
    category is listed when its path exists; a pattern category when it
    adds up to more than zero bytes.
    """
    catalog: list[CleanableItem] = []

    for item in (
        _direct(NODE_MODULES, "Dependencies cache (restored by installing dependencies)", layout.dependency_dir, fs),
        _direct(LOCK_FILE, "Dependency lock file (will be regenerated)", layout.lock_file, fs),
    ):
        if item is not None:
            catalog.append(item)

    build = CleanableItem.pattern(
        BUILD_OUTPUTS, "Compiled JavaScript files in all projects", build_output_targets(layout, fs)
    )
    if build.size_bytes > 0:
        catalog.append(build)

    temp = CleanableItem.pattern(TEMP_FILES, "Temporary and cache files", temp_file_targets(layout, temp_patterns, fs))
    if temp.size_bytes > 0:
        catalog.append(temp)

    editor = _direct(EDITOR_SETTINGS, "VS Code workspace settings (will reset to defaults)", layout.editor_dir, fs)
    if editor is not None:
        catalog.append(editor)
    return catalog


def clean_items(items: Sequence[CleanableItem], fs: FileSystem = DEFAULT_FS) -> CleanReport:
    """Remove every target of *items*, continuing past individual failures.

    Reclaimed bytes are the catalog sizes of the targets that were actually
    removed; nothing is re-measured.
    """
    report = CleanReport()
    for item in items:
        if item.name in REINSTALL_ITEMS:
            report.needs_reinstall = True
        failed = False
        for target in item.targets:
            if not fs.exists(target.path):
                # Removed with an earlier target; its bytes were counted there.
                continue
            try:
                logger.debug("Removing %s", target.path)
                fs.remove(target.path)
            except OSError as exc:
                failed = True
                report.failures.append(CleanFailure(item=item.name, path=target.path, message=str(exc)))
                continue
            report.bytes_reclaimed += target.size_bytes
        if not failed:
            report.cleaned.append(item.name)
    return report


def run_clean(
    layout: WorkspaceLayout,
    prompter: Prompter,
    console: Console,
    temp_patterns: Sequence[str] = (),
    fs: FileSystem = DEFAULT_FS,
) -> CleanReport | None:
    """Interactive clean.  Returns None when nothing was removed."""
    console.print("[blue]Cleaning Bedrock Workspace...[/blue]")
    console.print()
    if not fs.exists(layout.root):
        render_missing(console, layout.root)
        return None

    catalog = build_catalog(layout, temp_patterns, fs)
    if not catalog:
        console.print("[green]Workspace is already clean![/green]")
        return None

    render_catalog(console, catalog)
    selected = prompter.multi_select(
        "Select items to clean:",
        [Choice(item_label(item), item) for item in catalog],
    )
    if not selected:
        console.print("[dim]No items selected for cleaning.[/dim]")
        return None
    if not prompter.confirm(f"Are you sure you want to clean {len(selected)} item(s)?", default=False):
        console.print("[dim]Cleaning cancelled.[/dim]")
        return None

    console.print()
    console.print("[blue]Cleaning workspace...[/blue]")
    report = clean_items(selected, fs)
    render_clean_report(console, report)
    return report
