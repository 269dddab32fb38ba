from __future__ import annotations

from sizecheck.config.schema import AppConfig
from sizecheck.models.enums import Priority
from sizecheck.models.report import ProjectReport, Recommendation
from sizecheck.services.formatting import format_bytes, format_count, format_percentage
from sizecheck.services.store import format_trend_row

_MAINTENANCE_COMMANDS = """\
```bash
# Remove unused packages
npm prune

# View top-level dependencies only
npm ls --depth=0

# Clear npm cache (if experiencing issues)
npm cache clean --force

# Complete fresh install
rm -rf node_modules package-lock.json && npm install

# Use npm ci in CI/CD environments
npm ci
```"""


def _table(header: tuple[str, ...], rows: list[tuple[str, ...]]) -> list[str]:
    lines = [
        "| " + " | ".join(header) + " |",
        "|" + "|".join("-" * (len(cell) + 2) for cell in header) + "|",
    ]
    lines.extend("| " + " | ".join(row) + " |" for row in rows)
    return lines


def _recommendation_lines(item: Recommendation) -> list[str]:
    if not item.details and item.size_bytes is None:
        return [f"- {item.title}"]
    size = f" ({format_bytes(item.size_bytes)})" if item.size_bytes is not None else ""
    return [f"- **{item.title}**{size}:", *(f"  - {detail}" for detail in item.details)]


def _directory_section(report: ProjectReport) -> list[str]:
    rows = [(f"**{m.label}**", format_bytes(m.size_bytes), m.description) for m in report.measurements]
    return ["## 📁 Directory Sizes Overview", "", *_table(("Directory", "Size", "Description"), rows), ""]


def _packages_section(report: ProjectReport, config: AppConfig) -> list[str]:
    dep = config.dependency_dir
    lines = [f"## 📦 {report.dependency.label} Analysis", ""]
    if report.packages:
        rows = [(f"**{p.name}**", format_bytes(p.size_bytes), p.description) for p in report.packages]
        lines += [
            f"### 📈 Largest Dependencies (Top {config.top_count})",
            "",
            *_table(("Package", "Size", "Purpose"), rows),
            "",
        ]
    else:
        lines += [f"_No dependency analysis available: `{dep}` is missing or empty._", ""]

    lines += ["### 📊 Package Statistics", ""]
    stats = report.package_stats
    if stats is not None:
        lines.append(f"- **Total Packages:** {format_count(stats.total_packages)} installed packages")
        lines.append(f"- **Total Files:** {format_count(stats.total_files)} files in {dep}")
    manifest = report.manifest
    count = str(report.declared_dependencies)
    if manifest is not None and not manifest.exact:
        count = f"~{count} (approximate, manifest could not be parsed)"
    lines.append(f"- **Dependencies in {config.manifest_file}:** {count} direct dependencies")
    if manifest is not None and manifest.exact and manifest.dev_dependencies:
        lines.append(
            f"  - {manifest.dependencies} runtime, {manifest.dev_dependencies} development"
        )
    ratio = format_percentage(report.dependency_percentage, config.fallback_percentage)
    lines += [f"- **{dep} to project ratio:** {ratio} of total project size", ""]
    return lines


def _recommendations_section(report: ProjectReport) -> list[str]:
    lines = ["## 🎯 Optimization Recommendations", ""]
    for priority in Priority:
        items = report.recommendations.get(priority, [])
        if not items:
            continue
        lines.append(f"### {priority.icon} {priority.label}")
        for item in items:
            lines.extend(_recommendation_lines(item))
        lines.append("")
    return lines


def _trends_section(report: ProjectReport) -> list[str]:
    lines = [
        "## 📈 Size Trends",
        "",
        f"| Date | Total Size | {report.dependency.label} | Notes |",
        "|------|------------|--------------|-------|",
    ]
    lines.extend(format_trend_row(row) for row in report.trend_rows)
    lines.append("")
    return lines


def _best_practices_section(report: ProjectReport, config: AppConfig) -> list[str]:
    dep = config.dependency_dir
    good: list[str] = []
    improvements = list(report.improvements)
    if report.gitignore_covers_dependencies:
        good.append(f"Using `.gitignore` to exclude `{dep}` from version control")
    else:
        improvements.insert(0, f"Add `{dep}` to `.gitignore`")
    if report.manifest is not None:
        good.append(f"Reasonable dependency count ({report.declared_dependencies} direct dependencies)")
        if report.manifest.exact and report.manifest.dev_dependencies:
            good.append("Development dependencies properly separated")

    lines = ["## 💡 Best Practices Applied", "", "✅ **Good practices in this project:**"]
    lines.extend(f"- {item}" for item in good or ["None detected yet"])
    lines += ["", "🔄 **Areas for improvement:**"]
    lines.extend(f"- {item}" for item in improvements or ["None identified"])
    lines.append("")
    return lines


def render_markdown(report: ProjectReport, config: AppConfig) -> str:
    """Render the full report document; section order is fixed."""
    generated = report.generated_at.strftime("%B %d, %Y at %H:%M:%S")
    lines = ["# 📊 Project Size Analysis Report", "", f"> **Generated on:** {generated}", ""]
    lines += _directory_section(report)
    lines += _packages_section(report, config)
    lines += _recommendations_section(report)
    lines += ["## 🧹 Maintenance Commands", "", _MAINTENANCE_COMMANDS, ""]
    lines += _trends_section(report)
    lines += _best_practices_section(report, config)
    lines += [
        "---",
        "",
        "**Next Analysis:** Run `sizecheck` again to update this report",
        "**Auto-generated:** This file is automatically generated by sizecheck",
        "",
    ]
    return "\n".join(lines)
