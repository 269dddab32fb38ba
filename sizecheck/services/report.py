from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable, Sequence
from dataclasses import replace
from datetime import datetime

from result import Ok

from sizecheck.config.schema import ROOT_PATH, AppConfig, DirectoryRule
from sizecheck.models.report import DirectoryMeasurement, ProjectReport, TrendRow
from sizecheck.models.scan import ScanOptions
from sizecheck.scan import Scanner, dependency_percentage, measure_directory, measurement_from_result
from sizecheck.services.formatting import format_bytes, format_percentage
from sizecheck.services.fs import DEFAULT_FS, FileSystem
from sizecheck.services.manifest import read_manifest
from sizecheck.services.packages import PackageCatalog, installed_sizes, package_stats, rank_packages
from sizecheck.services.recommendations import build_recommendations, heavy_packages

logger = logging.getLogger(__name__)

Notify = Callable[[str], None]

TREND_NOTE = "Analysis run"


def _noop(_: str) -> None:
    return None


def _find_rule(rules: Sequence[DirectoryRule], path: str, label: str) -> DirectoryRule:
    for rule in rules:
        if os.path.normpath(rule.path) == os.path.normpath(path):
            return rule
    return DirectoryRule(label=label, path=path)


def gitignore_covers(root: str, name: str, fs: FileSystem = DEFAULT_FS) -> bool:
    """True when ``.gitignore`` in *root* has a line ignoring the top-level *name*."""
    path = os.path.join(root, ".gitignore")
    if not fs.exists(path):
        return False
    try:
        text = fs.read_text(path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Cannot read %s: %s", path, exc)
        return False
    for line in text.splitlines():
        entry = line.strip().strip("/")
        if entry in (name, f"{name}/**", f"**/{name}"):
            return True
    return False


def build_report(
    root: str,
    config: AppConfig,
    history: Sequence[TrendRow] = (),
    now: datetime | None = None,
    fs: FileSystem = DEFAULT_FS,
    notify: Notify = _noop,
    exclude: Iterable[str] = (),
) -> ProjectReport:
    """Measure *root* and assemble a ProjectReport.

    Every measurement failure degrades to an unavailable value; this function
    does not raise for missing directories or a missing manifest.  Paths in
    *exclude* (the report files themselves) are left out of every measurement
    so that repeated runs see the same tree.
    """
    now = now or datetime.now()
    scanner = Scanner(fs)
    excluded = frozenset(exclude)

    def _progress(_path: str, files: int, _directories: int) -> None:
        notify(f"   ... {files:,} files scanned")

    dependency_dir = config.dependency_dir
    dependency_path = os.path.join(root, dependency_dir)

    notify(f"🔍 Checking {dependency_dir} size...")
    dependency_rule = _find_rule(config.directories, dependency_dir, dependency_dir)
    dependency_scan = scanner.scan(dependency_path, ScanOptions(collapse_depth=1, exclude=excluded), _progress)
    dependency = measurement_from_result(
        dependency_rule.label, dependency_rule.path, dependency_rule.description, dependency_scan
    )
    logger.info("%s: %s", dependency_dir, format_bytes(dependency.size_bytes))

    root_rule = _find_rule(config.directories, ROOT_PATH, "Project Root")
    sized: list[tuple[DirectoryRule, DirectoryMeasurement]] = []
    if not any(rule is dependency_rule for rule in config.directories):
        sized.append((dependency_rule, dependency))
    for rule in config.directories:
        if rule is dependency_rule:
            sized.append((rule, dependency))
            continue
        notify(f"📂 Measuring {rule.label}...")
        path = os.path.join(root, rule.path)
        sized.append((rule, measure_directory(scanner, rule.label, path, rule.description, excluded, _progress)))

    root_measurement = next((m for rule, m in sized if rule is root_rule), None)
    if root_measurement is None:
        root_measurement = measure_directory(
            scanner, root_rule.label, root, root_rule.description, excluded, _progress
        )

    percentage = dependency_percentage(dependency.size_bytes, root_measurement.size_bytes)
    percentage_label = format_percentage(percentage, config.fallback_percentage)

    def _fill(m: DirectoryMeasurement) -> DirectoryMeasurement:
        return replace(m, description=m.description.replace("{percentage}", percentage_label))

    measurements = [_fill(m) for _, m in sized]
    dependency = _fill(dependency)
    root_measurement = _fill(root_measurement)

    report = ProjectReport(
        generated_at=now,
        root=root_measurement,
        dependency=dependency,
        measurements=measurements,
        dependency_percentage=percentage,
    )

    installed: dict[str, int] = {}
    if isinstance(dependency_scan, Ok):
        snapshot = dependency_scan.unwrap()
        catalog = PackageCatalog(config.package_descriptions, config.default_description)
        report.packages = rank_packages(snapshot.root, catalog, config.top_count)
        report.package_stats = package_stats(snapshot)
        installed = installed_sizes(snapshot.root)
        if snapshot.stats.access_errors:
            logger.warning("%d entries under %s could not be read", snapshot.stats.access_errors, dependency_path)

    notify(f"📋 Reading {config.manifest_file}...")
    report.manifest = read_manifest(os.path.join(root, config.manifest_file), fs)

    notify("🔍 Checking for common heavy packages...")
    report.recommendations, report.improvements = build_recommendations(installed, config.recommendations)
    report.heavy_packages = heavy_packages(report.manifest, installed, config.heavy_packages)
    report.gitignore_covers_dependencies = gitignore_covers(root, dependency_dir, fs)

    current = TrendRow(
        date=now.strftime("%Y-%m-%d"),
        total_size=format_bytes(root_measurement.size_bytes),
        dependency_size=format_bytes(dependency.size_bytes),
        notes=TREND_NOTE,
    )
    report.trend_rows = [current, *history[: config.trend_history]]
    return report
