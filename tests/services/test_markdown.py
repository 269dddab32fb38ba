from __future__ import annotations

from datetime import datetime

from sizecheck.config.defaults import default_config
from sizecheck.models.enums import Priority
from sizecheck.models.report import (
    DirectoryMeasurement,
    ManifestSummary,
    PackageEntry,
    PackageStats,
    ProjectReport,
    Recommendation,
    TrendRow,
)
from sizecheck.services.markdown import render_markdown
from sizecheck.services.store import parse_trend_rows

_SECTIONS = [
    "# 📊 Project Size Analysis Report",
    "## 📁 Directory Sizes Overview",
    "## 📦 node_modules Analysis",
    "### 📊 Package Statistics",
    "## 🎯 Optimization Recommendations",
    "## 🧹 Maintenance Commands",
    "## 📈 Size Trends",
    "## 💡 Best Practices Applied",
]


def _report(**overrides: object) -> ProjectReport:
    root = DirectoryMeasurement("Project Root", ".", "Total project size including all files", 10 * 1024 * 1024)
    dep = DirectoryMeasurement("node_modules", "node_modules", "NPM dependencies (80% of project size)", 8 * 1024 * 1024)
    report = ProjectReport(
        generated_at=datetime(2026, 10, 17, 9, 30, 0),
        root=root,
        dependency=dep,
        measurements=[root, dep, DirectoryMeasurement(".git", ".git", "Git repository metadata", None)],
        dependency_percentage=80,
        packages=[PackageEntry("moment", 5 * 1024 * 1024, "Date/time manipulation library")],
        package_stats=PackageStats(total_packages=12, total_files=3456),
        manifest=ManifestSummary(dependencies=2, dev_dependencies=1, names=frozenset({"moment"})),
        recommendations={
            Priority.HIGH: [Recommendation(Priority.HIGH, "None at this time")],
            Priority.MEDIUM: [
                Recommendation(Priority.MEDIUM, "Consider replacing Moment.js", ("Use dayjs",), 5 * 1024 * 1024)
            ],
            Priority.LOW: [],
        },
        improvements=["Consider modernizing date handling (replace Moment.js)"],
        trend_rows=[TrendRow("2026-10-17", "10M", "8.0M", "Analysis run")],
        gitignore_covers_dependencies=True,
    )
    for key, value in overrides.items():
        setattr(report, key, value)
    return report


class TestRenderMarkdown:
    def test_sections_in_fixed_order(self) -> None:
        text = render_markdown(_report(), default_config())

        positions = [text.index(section) for section in _SECTIONS]
        assert positions == sorted(positions)

    def test_header_timestamp(self) -> None:
        text = render_markdown(_report(), default_config())

        assert "> **Generated on:** October 17, 2026 at 09:30:00" in text

    def test_directory_rows(self) -> None:
        text = render_markdown(_report(), default_config())

        assert "| **Project Root** | 10M | Total project size including all files |" in text
        assert "| **.git** | N/A | Git repository metadata |" in text

    def test_package_rows_and_stats(self) -> None:
        text = render_markdown(_report(), default_config())

        assert "| **moment** | 5.0M | Date/time manipulation library |" in text
        assert "- **Total Packages:** 12 installed packages" in text
        assert "- **Total Files:** 3,456 files in node_modules" in text
        assert "- **Dependencies in package.json:** 3 direct dependencies" in text
        assert "- **node_modules to project ratio:** 80% of total project size" in text

    def test_no_packages_message(self) -> None:
        text = render_markdown(_report(packages=[], package_stats=None), default_config())

        assert "No dependency analysis available" in text
        assert "Total Packages" not in text

    def test_fallback_percentage(self) -> None:
        text = render_markdown(_report(dependency_percentage=None), default_config())

        assert "~92% of total project size" in text

    def test_approximate_manifest_flagged(self) -> None:
        manifest = ManifestSummary(dependencies=14, dev_dependencies=0, exact=False)

        text = render_markdown(_report(manifest=manifest), default_config())

        assert "~14 (approximate" in text

    def test_recommendation_tiers(self) -> None:
        text = render_markdown(_report(), default_config())

        assert text.index("### 🔴 High Priority") < text.index("### 🟡 Medium Priority")
        assert "- None at this time" in text
        assert "- **Consider replacing Moment.js** (5.0M):" in text
        assert "  - Use dayjs" in text
        assert "### 🟢 Low Priority" not in text

    def test_trend_rows_parse_back(self) -> None:
        text = render_markdown(_report(), default_config())

        assert parse_trend_rows(text) == [TrendRow("2026-10-17", "10M", "8.0M", "Analysis run")]

    def test_best_practices(self) -> None:
        text = render_markdown(_report(), default_config())

        assert "- Using `.gitignore` to exclude `node_modules` from version control" in text
        assert "- Reasonable dependency count (3 direct dependencies)" in text
        assert "- Development dependencies properly separated" in text
        assert "- Consider modernizing date handling (replace Moment.js)" in text

    def test_gitignore_missing_is_improvement(self) -> None:
        text = render_markdown(_report(gitignore_covers_dependencies=False, improvements=[]), default_config())

        assert "- Add `node_modules` to `.gitignore`" in text
