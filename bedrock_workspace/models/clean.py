from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from bedrock_workspace.models.enums import CleanKind


@dataclass(slots=True, frozen=True)
class CleanTarget:
    path: Path
    size_bytes: int


@dataclass(slots=True, frozen=True)
class CleanableItem:
    """One selectable category in the clean catalog.

    ``size_bytes`` is fixed when the catalog is built and is never
    re-measured, so a partial clean cannot count the same bytes twice.
    """

    name: str
    kind: CleanKind
    description: str
    targets: tuple[CleanTarget, ...]
    size_bytes: int
    path: Path | None = None

    @property
    def is_pattern(self) -> bool:
        return self.kind is CleanKind.PATTERN

    @classmethod
    def direct(cls, name: str, description: str, path: Path, size_bytes: int) -> CleanableItem:
        return cls(
            name=name,
            kind=CleanKind.DIRECT,
            description=description,
            targets=(CleanTarget(path, size_bytes),),
            size_bytes=size_bytes,
            path=path,
        )

    @classmethod
    def pattern(cls, name: str, description: str, targets: list[CleanTarget]) -> CleanableItem:
        return cls(
            name=name,
            kind=CleanKind.PATTERN,
            description=description,
            targets=tuple(targets),
            size_bytes=sum(t.size_bytes for t in targets),
        )


@dataclass(slots=True, frozen=True)
class CleanFailure:
    item: str
    path: Path
    message: str


@dataclass(slots=True)
class CleanReport:
    cleaned: list[str] = field(default_factory=list)
    bytes_reclaimed: int = 0
    failures: list[CleanFailure] = field(default_factory=list)
    needs_reinstall: bool = False

    @property
    def items_cleaned(self) -> int:
        return len(self.cleaned)
