from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Protocol

from bedrock_workspace.errors import VcsError
from bedrock_workspace.models.workspace import CommitInfo, VcsStatus

logger = logging.getLogger(__name__)

# Unit separator between fields of one log record.
_FIELD_SEP = "\x1f"
_LOG_FORMAT = f"--format=%H{_FIELD_SEP}%s{_FIELD_SEP}%aI"


class VcsClient(Protocol):
    """Version-control operations against one working tree.

    Every method raises :class:`VcsError` on failure.
    """

    def clone(self, url: str, dest: Path) -> None: ...

    def status(self) -> VcsStatus: ...

    def current_branch(self) -> str | None: ...

    def fetch(self, remote: str, branch: str, dry_run: bool = False) -> None: ...

    def log(self, rev_range: str) -> list[CommitInfo]: ...

    def pull(self, remote: str, branch: str) -> None: ...

    def stash(self) -> None: ...

    def reset(self, mode: str) -> None: ...

    def clean(self, flags: Sequence[str]) -> None: ...

    def submodule_add(self, url: str, path: str) -> None: ...

    def submodule_update(self) -> None: ...

    def revparse(self, ref: str) -> str: ...


type VcsFactory = Callable[[Path], VcsClient]


def parse_porcelain(output: str, branch: str | None) -> VcsStatus:
    """Build a VcsStatus from ``git status --porcelain=v1`` output.

    ``??`` entries are untracked; a non-blank index column marks an entry as
    staged and a non-blank worktree column marks it as modified (an entry can
    be both).
    """
    modified: list[str] = []
    untracked: list[str] = []
    staged: list[str] = []
    for line in output.splitlines():
        if len(line) < 4:
            continue
        code, path = line[:2], line[3:]
        if code == "??":
            untracked.append(path)
            continue
        if code[0] not in " ?!":
            staged.append(path)
        if code[1] not in " ?!":
            modified.append(path)
    return VcsStatus(branch=branch, modified=tuple(modified), untracked=tuple(untracked), staged=tuple(staged))


def parse_log(output: str) -> list[CommitInfo]:
    commits: list[CommitInfo] = []
    for line in output.splitlines():
        parts = line.split(_FIELD_SEP)
        if len(parts) != 3:
            continue
        sha, message, date = parts
        commits.append(CommitInfo(sha=sha, message=message, date=date))
    return commits


class GitCli:
    """VcsClient backed by the ``git`` executable."""

    def __init__(self, root: Path, timeout: float = 120, executable: str = "git") -> None:
        self._root = root
        self._timeout = timeout
        self._executable = executable

    def _run(self, *args: str, cwd: Path | None = None) -> str:
        command = (self._executable, *args)
        workdir = cwd or self._root
        logger.debug("Running %s in %s", " ".join(command), workdir)
        try:
            proc = subprocess.run(
                command,
                cwd=workdir,
                capture_output=True,
                text=True,
                timeout=self._timeout,
                check=False,
            )
        except FileNotFoundError as exc:
            raise VcsError(f"git executable not found: {exc}", command) from exc
        except subprocess.TimeoutExpired as exc:
            raise VcsError(f"{' '.join(command)} timed out after {self._timeout}s", command) from exc
        if proc.returncode != 0:
            # Conflict markers are printed on stdout by merge/pull.
            detail = "\n".join(part.strip() for part in (proc.stdout, proc.stderr) if part.strip())
            raise VcsError(detail or f"{' '.join(command)} exited with {proc.returncode}", command)
        return proc.stdout

    def clone(self, url: str, dest: Path) -> None:
        dest.parent.mkdir(parents=True, exist_ok=True)
        self._run("clone", url, str(dest), cwd=dest.parent)

    def status(self) -> VcsStatus:
        output = self._run("status", "--porcelain=v1", "--untracked-files=all")
        return parse_porcelain(output, self.current_branch())

    def current_branch(self) -> str | None:
        # Empty on a detached HEAD.
        return self._run("branch", "--show-current").strip() or None

    def fetch(self, remote: str, branch: str, dry_run: bool = False) -> None:
        args = ["fetch", remote, branch]
        if dry_run:
            args.append("--dry-run")
        self._run(*args)

    def log(self, rev_range: str) -> list[CommitInfo]:
        return parse_log(self._run("log", _LOG_FORMAT, rev_range))

    def pull(self, remote: str, branch: str) -> None:
        self._run("pull", remote, branch)

    def stash(self) -> None:
        self._run("stash", "push", "--include-untracked")

    def reset(self, mode: str) -> None:
        self._run("reset", f"--{mode}")

    def clean(self, flags: Sequence[str]) -> None:
        self._run("clean", *flags)

    def submodule_add(self, url: str, path: str) -> None:
        self._run("submodule", "add", url, path)

    def submodule_update(self) -> None:
        self._run("submodule", "update", "--init", "--recursive")

    def revparse(self, ref: str) -> str:
        return self._run("rev-parse", ref).strip()


def git_factory(timeout: float = 120) -> VcsFactory:
    def _make(root: Path) -> VcsClient:
        return GitCli(root, timeout=timeout)

    return _make
