from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from result import Err, Ok, Result

logger = logging.getLogger(__name__)


class Installer(Protocol):
    def run(self, command: Sequence[str], cwd: Path) -> Result[None, str]: ...


def run_command(
    command: Sequence[str],
    cwd: Path,
    timeout: float | None = None,
    quiet: bool = False,
) -> Result[None, str]:
    """Run an external command to completion.

    Output goes to the terminal unless *quiet*.  A missing executable,
    non-zero exit, or timeout is returned as ``Err`` with a short message.
    """
    logger.debug("Running %s in %s", " ".join(command), cwd)
    stream = subprocess.DEVNULL if quiet else None
    try:
        proc = subprocess.run(list(command), cwd=cwd, stdout=stream, stderr=stream, timeout=timeout, check=False)
    except FileNotFoundError:
        return Err(f"{command[0]} is not installed or not on PATH")
    except subprocess.TimeoutExpired:
        return Err(f"{' '.join(command)} did not finish within {timeout}s")
    except OSError as exc:
        return Err(f"Failed to start {command[0]}: {exc}")
    if proc.returncode != 0:
        return Err(f"{' '.join(command)} exited with status {proc.returncode}")
    return Ok(None)


class SubprocessInstaller:
    """Installs dependencies by running the package manager in the workspace."""

    def run(self, command: Sequence[str], cwd: Path) -> Result[None, str]:
        return run_command(command, cwd)


def launch_editor(command: Sequence[str], path: Path, timeout: float) -> Result[None, str]:
    return run_command([*command, str(path)], cwd=path, timeout=timeout, quiet=True)


def tool_available(name: str) -> bool:
    return shutil.which(name) is not None
