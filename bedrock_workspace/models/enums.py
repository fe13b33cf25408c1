from __future__ import annotations

from enum import Enum


class WorkspaceState(str, Enum):
    MISSING = "missing"
    NOT_TRACKED = "not_tracked"
    CLEAN = "clean"
    DIRTY = "dirty"

    @property
    def is_tracked(self) -> bool:
        return self in (WorkspaceState.CLEAN, WorkspaceState.DIRTY)


class DirtyResolution(str, Enum):
    STASH = "stash"
    DISCARD = "discard"
    CANCEL = "cancel"


class UpdateOutcome(str, Enum):
    MISSING = "missing"
    CANCELLED = "cancelled"
    REINITIALIZED = "reinitialized"
    UP_TO_DATE = "up_to_date"
    DECLINED = "declined"
    UPDATED = "updated"


class InitOutcome(str, Enum):
    CANCELLED = "cancelled"
    CREATED = "created"


class CleanKind(str, Enum):
    DIRECT = "direct"
    PATTERN = "pattern"


class ReadErrorCode(str, Enum):
    NOT_FOUND = "not_found"
    PARSE_ERROR = "parse_error"
