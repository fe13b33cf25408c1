from __future__ import annotations


class WorkspaceError(Exception):
    """Base class for failures surfaced to the operator."""


class VcsError(WorkspaceError):
    """A git invocation failed or timed out."""

    def __init__(self, message: str, command: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.command = command

    @property
    def is_conflict(self) -> bool:
        # git reports merge conflicts as "CONFLICT (content): ..."
        return "CONFLICT" in str(self)
