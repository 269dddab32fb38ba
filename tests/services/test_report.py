from __future__ import annotations

import json
from datetime import datetime

from sizecheck.config.defaults import default_config
from sizecheck.models.enums import Priority
from sizecheck.models.report import TrendRow
from sizecheck.services.report import build_report, gitignore_covers
from tests.fs_mock import MemoryFileSystem

_NOW = datetime(2026, 10, 17, 9, 30, 0)


def _project() -> MemoryFileSystem:
    fs = MemoryFileSystem()
    fs.add_file("/p/src/app.js", size=1000)
    fs.add_file("/p/node_modules/express/index.js", size=3000)
    fs.add_file("/p/node_modules/qs/index.js", size=1000)
    fs.add_file("/p/package.json", text=json.dumps({"dependencies": {"express": "^4"}}))
    return fs


class TestBuildReport:
    def test_measurements_in_configured_order(self) -> None:
        report = build_report("/p", default_config(), now=_NOW, fs=_project())

        labels = [m.label for m in report.measurements]
        assert labels == ["Project Root", "node_modules", ".git", "logs", "src", "dist", "build", "coverage"]

    def test_missing_directories_unavailable(self) -> None:
        report = build_report("/p", default_config(), now=_NOW, fs=_project())

        by_label = {m.label: m for m in report.measurements}
        assert by_label[".git"].size_bytes is None
        assert by_label["coverage"].size_bytes is None
        assert by_label["src"].size_bytes == 1000

    def test_percentage_from_root_and_dependency(self) -> None:
        report = build_report("/p", default_config(), now=_NOW, fs=_project())

        root_size = report.root.size_bytes
        assert report.dependency.size_bytes == 4000
        assert report.dependency_percentage == 4000 * 100 // root_size
        assert f"({report.dependency_percentage}% of project size)" in report.dependency.description

    def test_missing_dependency_dir_uses_fallback(self) -> None:
        fs = MemoryFileSystem()
        fs.add_file("/p/src/app.js", size=10)

        report = build_report("/p", default_config(), now=_NOW, fs=fs)

        assert report.dependency_percentage is None
        assert report.packages == []
        assert report.package_stats is None
        assert "~92%" in report.dependency.description
        assert report.manifest is None
        assert report.declared_dependencies == 0

    def test_missing_root_still_builds(self) -> None:
        report = build_report("/gone", default_config(), now=_NOW, fs=MemoryFileSystem())

        assert all(m.size_bytes is None for m in report.measurements)
        assert report.trend_rows[0] == TrendRow("2026-10-17", "N/A", "N/A", "Analysis run")

    def test_trend_rows_carry_bounded_history(self) -> None:
        history = [TrendRow(f"2026-10-0{i}", "1M", "1M", "Analysis run") for i in range(9, 3, -1)]

        report = build_report("/p", default_config(), history=history, now=_NOW, fs=_project())

        assert len(report.trend_rows) == 5
        assert report.trend_rows[0].date == "2026-10-17"
        assert report.trend_rows[1].date == "2026-10-09"

    def test_recommendations_default_when_nothing_heavy(self) -> None:
        report = build_report("/p", default_config(), now=_NOW, fs=_project())

        titles = [r.title for r in report.recommendations[Priority.MEDIUM]]
        assert titles == ["No immediate optimizations needed"]

    def test_notify_receives_progress(self) -> None:
        messages: list[str] = []

        build_report("/p", default_config(), now=_NOW, fs=_project(), notify=messages.append)

        assert messages[0] == "🔍 Checking node_modules size..."
        assert any("package.json" in m for m in messages)

    def test_notify_receives_scan_progress(self) -> None:
        fs = _project()
        for idx in range(1100):
            fs.add_file(f"/p/node_modules/big/f{idx}.js", size=1)
        messages: list[str] = []

        build_report("/p", default_config(), now=_NOW, fs=fs, notify=messages.append)

        assert "   ... 1,102 files scanned" in messages

    def test_excluded_report_files_not_measured(self) -> None:
        fs = _project()
        fs.add_file("/p/CHECKSIZE.md", size=9000)
        fs.add_file("/p/CHECKSIZE.md.bak", size=8000)

        report = build_report(
            "/p", default_config(), now=_NOW, fs=fs, exclude=("/p/CHECKSIZE.md", "/p/CHECKSIZE.md.bak")
        )

        assert report.root.size_bytes == 5000 + len(fs.read_text("/p/package.json").encode("utf-8"))

    def test_symlinked_package_fires_recommendation(self) -> None:
        fs = _project()
        fs.add_dir_link("/p/node_modules/moment", size=40)

        report = build_report("/p", default_config(), now=_NOW, fs=fs)

        titles = [r.title for r in report.recommendations[Priority.MEDIUM]]
        assert titles == ["Consider replacing Moment.js"]
        assert "moment" in [p.name for p in report.packages]
        assert report.package_stats is not None
        assert report.package_stats.total_packages == 2

    def test_custom_dependency_dir_not_in_directories(self) -> None:
        config = default_config()
        config.dependency_dir = "vendor"
        fs = _project()
        fs.add_file("/p/vendor/lib/a.php", size=50)

        report = build_report("/p", config, now=_NOW, fs=fs)

        assert report.measurements[0].label == "vendor"
        assert report.dependency.size_bytes == 50
        assert [p.name for p in report.packages] == ["lib"]


class TestGitignoreCovers:
    def test_listed(self) -> None:
        fs = MemoryFileSystem()
        fs.add_file("/p/.gitignore", text="dist\n/node_modules/\n")
        assert gitignore_covers("/p", "node_modules", fs)

    def test_not_listed(self) -> None:
        fs = MemoryFileSystem()
        fs.add_file("/p/.gitignore", text="dist\n")
        assert not gitignore_covers("/p", "node_modules", fs)

    def test_no_gitignore(self) -> None:
        assert not gitignore_covers("/p", "node_modules", MemoryFileSystem())
