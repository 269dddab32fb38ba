# Sequential directory scanner.
#
# Architecture:
#   Scanner walks a tree with an explicit stack (no recursion) and builds
#   ScanNode children for the first ``ScanOptions.collapse_depth`` levels.
#   Entries below that depth are not materialized; their sizes are folded
#   into the nearest materialized ancestor, so measuring a large dependency
#   directory costs one node per package rather than one per file.
#
# Lifecycle (scan method):
#   1. Validate root path -> create root ScanNode -> push it.
#   2. Pop a directory, read it, push child directories with their owner node.
#   3. Unreadable directories and un-stat'able entries bump access_errors.
#      Paths in ScanOptions.exclude are skipped; directory symlinks become
#      DIR_LINK leaves sized by the link itself.
#   4. finalize_sizes aggregates child sizes bottom-up and sorts children.
#   5. Return a frozen ScanSnapshot wrapping the completed tree.

from __future__ import annotations

import logging
from dataclasses import dataclass

from result import Err, Ok

from sizecheck.models.enums import NodeKind
from sizecheck.models.scan import (
    ProgressCallback,
    ScanError,
    ScanErrorCode,
    ScanNode,
    ScanOptions,
    ScanResult,
    ScanSnapshot,
    ScanStats,
)
from sizecheck.services.fs import DEFAULT_FS, FileSystem
from sizecheck.services.tree import finalize_sizes

logger = logging.getLogger(__name__)

_PROGRESS_EVERY = 1000


@dataclass(slots=True, frozen=True)
class _Task:
    """Work item: a directory to read, the node its content is credited to, and its depth."""

    path: str
    owner: ScanNode
    depth: int


def resolve_root(path: str, fs: FileSystem) -> str | ScanError:
    """Validate and resolve a scan root path.

    Returns the resolved absolute path, or a ``ScanError`` on failure.
    """
    expanded = fs.expanduser(path)
    if not fs.exists(expanded):
        return ScanError(
            code=ScanErrorCode.NOT_FOUND,
            path=expanded,
            message="Path does not exist",
        )

    resolved = fs.absolute(expanded)
    try:
        root_stat = fs.stat(resolved)
    except OSError as exc:
        return ScanError(
            code=ScanErrorCode.ROOT_STAT_FAILED,
            path=resolved,
            message=f"Cannot stat root: {exc}",
        )
    if not root_stat.is_dir:
        return ScanError(
            code=ScanErrorCode.NOT_DIRECTORY,
            path=resolved,
            message="Path is not a directory",
        )
    return resolved


class Scanner:
    """Single-threaded directory walker producing a size-annotated ScanNode tree."""

    def __init__(self, fs: FileSystem = DEFAULT_FS) -> None:
        self._fs = fs

    def scan(
        self,
        path: str,
        options: ScanOptions,
        progress_callback: ProgressCallback | None = None,
    ) -> ScanResult:
        resolved = resolve_root(path, self._fs)
        if isinstance(resolved, ScanError):
            return Err(resolved)
        resolved_root = resolved

        root_name = resolved_root.rstrip("/").rsplit("/", 1)[-1] or resolved_root
        root_node = ScanNode.directory(resolved_root, root_name)
        stats = ScanStats(files=0, directories=1, access_errors=0)
        collapse_depth = options.collapse_depth
        excluded = frozenset(self._fs.absolute(p) for p in options.exclude)

        pending: list[_Task] = [_Task(resolved_root, root_node, 0)]
        while pending:
            task = pending.pop()
            try:
                entries = self._fs.scandir(task.path)
            except OSError as exc:
                logger.debug("Cannot read %s: %s", task.path, exc)
                stats.access_errors += 1
                continue

            prev_files = stats.files
            materialize = collapse_depth is None or task.depth < collapse_depth
            for entry in entries:
                if entry.path in excluded:
                    continue
                st = entry.stat
                if st is None:
                    stats.access_errors += 1
                    continue
                if st.is_dir:
                    stats.directories += 1
                    owner = task.owner
                    if materialize:
                        owner = ScanNode.directory(entry.path, entry.name)
                        task.owner.children.append(owner)
                    pending.append(_Task(entry.path, owner, task.depth + 1))
                    continue

                stats.files += 1
                if materialize:
                    kind = NodeKind.DIR_LINK if st.links_to_dir else NodeKind.FILE
                    task.owner.children.append(ScanNode.file(entry.path, entry.name, st.size, kind))
                else:
                    task.owner.size_bytes += st.size

            # Fires when the file count crosses a _PROGRESS_EVERY boundary.
            if progress_callback is not None and stats.files // _PROGRESS_EVERY > prev_files // _PROGRESS_EVERY:
                progress_callback(task.path, stats.files, stats.directories)

        finalize_sizes(root_node)
        return Ok(ScanSnapshot(root=root_node, stats=stats))
