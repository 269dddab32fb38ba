from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from sizecheck.models.enums import Priority


@dataclass(slots=True, frozen=True)
class DirectoryMeasurement:
    label: str
    path: str
    description: str
    # None when the directory is missing or unreadable.
    size_bytes: int | None

    @property
    def available(self) -> bool:
        return self.size_bytes is not None


@dataclass(slots=True, frozen=True)
class PackageEntry:
    name: str
    size_bytes: int
    description: str


@dataclass(slots=True, frozen=True)
class PackageStats:
    total_packages: int
    total_files: int
    access_errors: int = 0


@dataclass(slots=True, frozen=True)
class ManifestSummary:
    dependencies: int
    dev_dependencies: int
    names: frozenset[str] = frozenset()
    # False when the manifest could not be parsed and the count is a line-based estimate.
    exact: bool = True

    @property
    def total(self) -> int:
        return self.dependencies + self.dev_dependencies


@dataclass(slots=True, frozen=True)
class HeavyPackage:
    name: str
    size_bytes: int | None


@dataclass(slots=True, frozen=True)
class Recommendation:
    priority: Priority
    title: str
    details: tuple[str, ...] = ()
    size_bytes: int | None = None


@dataclass(slots=True, frozen=True)
class TrendRow:
    date: str
    total_size: str
    dependency_size: str
    notes: str


@dataclass(slots=True)
class ProjectReport:
    generated_at: datetime
    root: DirectoryMeasurement
    dependency: DirectoryMeasurement
    measurements: list[DirectoryMeasurement]
    dependency_percentage: int | None
    packages: list[PackageEntry] = field(default_factory=list)
    package_stats: PackageStats | None = None
    manifest: ManifestSummary | None = None
    recommendations: dict[Priority, list[Recommendation]] = field(default_factory=dict)
    improvements: list[str] = field(default_factory=list)
    heavy_packages: list[HeavyPackage] = field(default_factory=list)
    trend_rows: list[TrendRow] = field(default_factory=list)
    gitignore_covers_dependencies: bool = False

    @property
    def declared_dependencies(self) -> int:
        return self.manifest.total if self.manifest is not None else 0
