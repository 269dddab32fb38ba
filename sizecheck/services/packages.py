from __future__ import annotations

import heapq
from collections.abc import Mapping

from sizecheck.models.report import PackageEntry, PackageStats
from sizecheck.models.scan import ScanNode, ScanSnapshot


class PackageCatalog:
    """Name -> purpose lookup with a generic fallback for unknown packages."""

    __slots__ = ("_descriptions", "_default")

    def __init__(self, descriptions: Mapping[str, str], default: str) -> None:
        self._descriptions = dict(descriptions)
        self._default = default

    def describe(self, name: str) -> str:
        return self._descriptions.get(name, self._default)

    def __contains__(self, name: object) -> bool:
        return name in self._descriptions


def _visible(node: ScanNode) -> bool:
    # Mirrors the shell glob ``dir/*``, which skips dotfiles such as ``.bin``.
    return not node.name.startswith(".")


def rank_packages(root: ScanNode, catalog: PackageCatalog, top_n: int = 10) -> list[PackageEntry]:
    """Return the *top_n* largest immediate children of *root*, largest first."""
    largest = heapq.nsmallest(
        top_n,
        (child for child in root.children if _visible(child)),
        key=lambda node: (-node.size_bytes, node.name),
    )
    return [
        PackageEntry(name=node.name, size_bytes=node.size_bytes, description=catalog.describe(node.name))
        for node in largest
    ]


def installed_sizes(root: ScanNode) -> dict[str, int]:
    """Installed package sizes by name; symlinked packages count with the size of the link."""
    return {child.name: child.size_bytes for child in root.children if child.is_dir_like}


def package_stats(snapshot: ScanSnapshot) -> PackageStats:
    """Immediate child directories count as packages; files are counted recursively."""
    return PackageStats(
        total_packages=sum(1 for child in snapshot.root.children if child.is_dir),
        total_files=snapshot.stats.files,
        access_errors=snapshot.stats.access_errors,
    )
