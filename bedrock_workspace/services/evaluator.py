from __future__ import annotations

import logging
from collections.abc import Sequence

from bedrock_workspace.errors import VcsError
from bedrock_workspace.models.enums import WorkspaceState
from bedrock_workspace.models.layout import DEPENDENCY_DIR, LIBRARIES_DIR, PROJECTS_DIR, VCS_DIR, WorkspaceLayout
from bedrock_workspace.models.workspace import RemoteDelta, VcsStatus, WorkspaceSnapshot
from bedrock_workspace.services.fs import DEFAULT_FS, FileSystem
from bedrock_workspace.services.inspector import path_age, path_mtime, path_size
from bedrock_workspace.services.packages import read_package_info
from bedrock_workspace.services.projects import DEFAULT_COMPILED_EXTENSIONS, list_libraries, list_projects
from bedrock_workspace.services.vcs import VcsClient

logger = logging.getLogger(__name__)

DISK_CATEGORIES: tuple[str, ...] = (DEPENDENCY_DIR, PROJECTS_DIR, LIBRARIES_DIR, VCS_DIR)


def classify(layout: WorkspaceLayout, status: VcsStatus | None, fs: FileSystem = DEFAULT_FS) -> WorkspaceState:
    """Map what is on disk to one of the four workspace states.

    A tracked workspace whose status could not be read (*status* is None)
    is treated as dirty.
    """
    if not fs.exists(layout.root):
        return WorkspaceState.MISSING
    if not fs.exists(layout.vcs_dir):
        return WorkspaceState.NOT_TRACKED
    if status is not None and status.is_clean:
        return WorkspaceState.CLEAN
    return WorkspaceState.DIRTY


def tracked_state(layout: WorkspaceLayout, fs: FileSystem = DEFAULT_FS) -> WorkspaceState | None:
    """MISSING / NOT_TRACKED without touching git, or None when git metadata is present."""
    if not fs.exists(layout.root):
        return WorkspaceState.MISSING
    if not fs.exists(layout.vcs_dir):
        return WorkspaceState.NOT_TRACKED
    return None


def remote_delta(vcs: VcsClient, remote: str, branch: str) -> RemoteDelta:
    """Compare HEAD with ``<remote>/<branch>`` after a dry-run fetch."""
    vcs.fetch(remote, branch, dry_run=True)
    remote_ref = f"{remote}/{branch}"
    incoming = vcs.log(f"HEAD..{remote_ref}")
    outgoing = vcs.log(f"{remote_ref}..HEAD")
    return RemoteDelta(ahead_count=len(outgoing), behind_count=len(incoming), commits=tuple(incoming))


def lock_file_stale(layout: WorkspaceLayout, fs: FileSystem = DEFAULT_FS) -> bool:
    lock_mtime = path_mtime(layout.lock_file, fs)
    manifest_mtime = path_mtime(layout.package_json, fs)
    if lock_mtime is None or manifest_mtime is None:
        return False
    return lock_mtime < manifest_mtime


def disk_usage(layout: WorkspaceLayout, fs: FileSystem = DEFAULT_FS) -> dict[str, int]:
    usage: dict[str, int] = {}
    for name in DISK_CATEGORIES:
        path = layout.root / name
        if fs.exists(path):
            usage[name] = path_size(path, fs)
    return usage


def evaluate_workspace(
    layout: WorkspaceLayout,
    vcs: VcsClient,
    remote: str,
    branch: str,
    check_remote: bool = True,
    compiled_extensions: Sequence[str] = DEFAULT_COMPILED_EXTENSIONS,
    fs: FileSystem = DEFAULT_FS,
) -> WorkspaceSnapshot:
    """Build a read-only snapshot of the workspace at ``layout.root``.

    Nothing here mutates the workspace: the remote comparison uses a dry-run
    fetch, and every failure (git, JSON, filesystem) is recorded on the
    snapshot rather than raised.
    """
    early = tracked_state(layout, fs)
    if early is WorkspaceState.MISSING:
        return WorkspaceSnapshot(root_path=layout.root, state=early)

    vcs_status: VcsStatus | None = None
    vcs_error: str | None = None
    delta: RemoteDelta | None = None
    remote_error: str | None = None
    if early is None:
        try:
            vcs_status = vcs.status()
        except VcsError as exc:
            logger.debug("git status failed: %s", exc)
            vcs_error = str(exc)
        if vcs_status is not None and check_remote:
            try:
                delta = remote_delta(vcs, remote, branch)
            except VcsError as exc:
                logger.debug("Remote comparison failed: %s", exc)
                remote_error = str(exc)

    return WorkspaceSnapshot(
        root_path=layout.root,
        state=classify(layout, vcs_status, fs),
        vcs_status=vcs_status,
        vcs_error=vcs_error,
        remote_delta=delta,
        remote_error=remote_error,
        package=read_package_info(layout.package_json, fs).ok(),
        dependencies_installed=fs.exists(layout.dependency_dir),
        lock_file_stale=lock_file_stale(layout, fs),
        has_projects_dir=fs.is_dir(layout.projects_dir),
        projects=tuple(list_projects(layout, compiled_extensions, fs)),
        has_libraries_dir=fs.is_dir(layout.libraries_dir),
        libraries=tuple(list_libraries(layout, fs)),
        disk_usage=disk_usage(layout, fs),
        total_size=path_size(layout.root, fs),
        age=path_age(layout.root, fs),
    )
