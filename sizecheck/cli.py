"""Command-line interface for sizecheck."""

import logging
from pathlib import Path
from typing import Optional

import typer
from result import Err
from rich.console import Console
from rich.logging import RichHandler

from sizecheck.config.loader import load_config, sample_config_json
from sizecheck.services.markdown import render_markdown
from sizecheck.services.report import build_report
from sizecheck.services.store import ReportStore
from sizecheck.services.summary import render_summary, render_tips

app = typer.Typer(
    name="sizecheck",
    help="Measure project and dependency directory sizes and write a Markdown report.",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)


def setup_logging(level: str) -> None:
    """Route log records through rich on stderr."""
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise typer.BadParameter(f"Invalid log level: {level}")
    logging.basicConfig(
        level=numeric_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.command()
def main(
    root: Path = typer.Option(Path("."), "--root", "-r", help="Project directory to analyze."),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to a JSON configuration file."),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Report file name inside the project."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print errors."),
    sample_config: bool = typer.Option(False, "--sample-config", help="Print the default configuration and exit."),
    log_level: str = typer.Option("WARNING", "--log-level", help="DEBUG, INFO, WARNING or ERROR."),
) -> None:
    """Generate the size report for ROOT and print a condensed summary."""
    if sample_config:
        typer.echo(sample_config_json())
        raise typer.Exit()

    setup_logging(log_level)
    root_dir = str(root)

    loaded = load_config(str(config_path) if config_path else None, root=root_dir)
    if isinstance(loaded, Err):
        err_console.print(f"[red]Error:[/red] {loaded.unwrap_err()}")
        raise typer.Exit(1)
    config = loaded.unwrap()
    if output:
        config.output_file = output

    out = Console(quiet=True) if quiet else console
    out.print("📁 [bold]Folder Size Checker[/bold]")
    out.rule()
    out.print(f"📝 Generating comprehensive report: {config.output_file}")

    store = ReportStore(root_dir, config.output_file, config.backup_file)
    report = build_report(
        root_dir,
        config,
        store.history(config.trend_history),
        notify=out.print,
        exclude=store.paths,
    )

    render_summary(out, report, config)
    render_tips(out)

    saved = store.save(render_markdown(report, config))
    if isinstance(saved, Err):
        err_console.print(f"[red]Error:[/red] {saved.unwrap_err()}")
        raise typer.Exit(1)

    out.print(f"✅ Report generated: {saved.unwrap()}")
    out.print(f"📊 View the comprehensive analysis in {config.output_file}")


if __name__ == "__main__":
    app()
