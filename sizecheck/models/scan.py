from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from result import Result

from sizecheck.models.enums import NodeKind


ProgressCallback = Callable[[str, int, int], None]


@dataclass(slots=True)
class ScanNode:
    path: str
    name: str
    kind: NodeKind
    size_bytes: int
    children: list[ScanNode] = field(default_factory=list)

    @property
    def is_dir(self) -> bool:
        return self.kind is NodeKind.DIRECTORY

    @property
    def is_dir_like(self) -> bool:
        """A directory, or a symlink that resolves to one."""
        return self.kind is not NodeKind.FILE

    @classmethod
    def file(cls, path: str, name: str, size_bytes: int, kind: NodeKind = NodeKind.FILE) -> ScanNode:
        # Import here to avoid circular import at module level.
        from sizecheck.services.tree import LEAF_CHILDREN

        return cls(
            path=path,
            name=name,
            kind=kind,
            size_bytes=size_bytes,
            children=LEAF_CHILDREN,
        )

    @classmethod
    def directory(cls, path: str, name: str) -> ScanNode:
        return cls(
            path=path,
            name=name,
            kind=NodeKind.DIRECTORY,
            size_bytes=0,
            children=[],
        )


@dataclass(slots=True)
class ScanStats:
    files: int = 0
    directories: int = 0
    access_errors: int = 0


@dataclass(slots=True)
class ScanOptions:
    # Levels below the root that get their own ScanNode.  Anything deeper is
    # folded into the nearest materialized ancestor.  None keeps the full tree.
    collapse_depth: int | None = None
    # Absolute paths left out of the walk entirely.
    exclude: frozenset[str] = frozenset()


@dataclass(slots=True, frozen=True)
class ScanSnapshot:
    root: ScanNode
    stats: ScanStats


class ScanErrorCode(str, Enum):
    NOT_FOUND = "not_found"
    NOT_DIRECTORY = "not_directory"
    ROOT_STAT_FAILED = "root_stat_failed"


@dataclass(slots=True, frozen=True)
class ScanError:
    code: ScanErrorCode
    path: str
    message: str


ScanResult = Result[ScanSnapshot, ScanError]
