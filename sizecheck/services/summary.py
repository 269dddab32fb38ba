from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from sizecheck.config.schema import AppConfig
from sizecheck.models.report import ProjectReport
from sizecheck.services.formatting import format_bytes, format_count, format_percentage

TIPS: tuple[str, ...] = (
    "Run 'npm prune' to remove unused packages",
    "Use 'npm ls --depth=0' to see top-level packages",
    "Consider using 'npm ci' instead of 'npm install' in CI/CD",
    "Add unnecessary files to .gitignore",
    "Use 'npx' for one-time package usage instead of global installs",
)

CLEANUP_COMMANDS: tuple[tuple[str, str], ...] = (
    ("Remove node_modules", "rm -rf node_modules"),
    ("Clear npm cache", "npm cache clean --force"),
    ("Remove package-lock", "rm package-lock.json"),
    ("Fresh install", "rm -rf node_modules package-lock.json && npm install"),
)


def _directories_table(report: ProjectReport) -> Table:
    table = Table(title="Directory Sizes", header_style="bold cyan")
    table.add_column("Directory")
    table.add_column("Size", justify="right")
    for m in report.measurements:
        table.add_row(m.label, format_bytes(m.size_bytes))
    return table


def _packages_table(report: ProjectReport, top_n: int) -> Table:
    table = Table(title=f"Top {top_n} largest packages in {report.dependency.label}", header_style="bold yellow")
    table.add_column("Package")
    table.add_column("Size", justify="right")
    table.add_column("Purpose")
    for entry in report.packages:
        table.add_row(entry.name, format_bytes(entry.size_bytes), entry.description)
    return table


def _stats_panel(report: ProjectReport, config: AppConfig) -> Panel:
    lines: list[str] = []
    if report.package_stats is not None:
        lines.append(f"Total packages: [bold]{format_count(report.package_stats.total_packages)}[/bold]")
        lines.append(f"Total files: [bold]{format_count(report.package_stats.total_files)}[/bold]")
    lines.append(f"Dependencies in {config.manifest_file}: [bold]{report.declared_dependencies}[/bold]")
    ratio = format_percentage(report.dependency_percentage, config.fallback_percentage)
    lines.append(f"{config.dependency_dir} share of project: [bold]{ratio}[/bold]")
    return Panel("\n".join(lines), title="Package Statistics", border_style="blue")


def _heavy_table(report: ProjectReport) -> Table:
    table = Table(title="Heavy packages declared in manifest", header_style="bold magenta")
    table.add_column("Package")
    table.add_column("Size", justify="right")
    for item in report.heavy_packages:
        table.add_row(item.name, format_bytes(item.size_bytes))
    return table


def render_summary(console: Console, report: ProjectReport, config: AppConfig) -> None:
    console.print(_directories_table(report))
    if report.packages:
        console.print(_packages_table(report, config.top_count))
    else:
        console.print(f"[yellow]No {config.dependency_dir} directory to analyze.[/yellow]")
    console.print(_stats_panel(report, config))
    if report.heavy_packages:
        console.print(_heavy_table(report))


def render_tips(console: Console) -> None:
    tips = "\n".join(f"• {tip}" for tip in TIPS)
    console.print(Panel(tips, title="💡 Tips", border_style="green"))
    commands = "\n".join(f"• {label}: [bold]{command}[/bold]" for label, command in CLEANUP_COMMANDS)
    console.print(Panel(commands, title="🧹 Cleanup commands", border_style="green"))
