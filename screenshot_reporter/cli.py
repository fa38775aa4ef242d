"""
Command-line interface for Screenshot Reporter.

This module provides a subcommand-based CLI using Typer for locating,
inspecting and clearing report.yml.
"""

import sys
from pathlib import Path
from typing import Optional

import typer

from screenshot_reporter.core.config import Config
from screenshot_reporter.core.errors import ScreenshotReporterError
from screenshot_reporter.core.logging import setup_logger
from screenshot_reporter.reporting.document import load_report
from screenshot_reporter.reporting.storage import DirectoryContext, ReportFileGateway, StaticOutputPolicy

app = typer.Typer(
    name="screenshot_reporter",
    help="Screenshot test reporting - locate, inspect and clear report.yml",
    add_completion=False,
)


def get_config(
    verbosity: Optional[int] = None,
    **kwargs
) -> Config:
    """Create and configure Config object."""
    init_kwargs = {}
    for key, value in kwargs.items():
        if key in Config.__dataclass_fields__ and value is not None:
            init_kwargs[key] = value
    config = Config(**init_kwargs)
    if verbosity is not None:
        if not 0 <= verbosity <= 3:
            raise typer.BadParameter(f"verbosity must be between 0 and 3, got {verbosity}")
        config.verbosity = verbosity
    setup_logger(verbosity=config.verbosity)
    return config


def get_gateway(config: Config) -> ReportFileGateway:
    context = DirectoryContext(data_dir=config.data_dir, external_dir=config.external_dir)
    return ReportFileGateway(context, StaticOutputPolicy(sd_card=config.use_sd_card))


def resolve_report_file(config: Config, report_file: Optional[Path]) -> Path:
    if report_file:
        return Path(report_file)
    return get_gateway(config).report_file()


@app.command()
def path(
    sd_card: Optional[bool] = typer.Option(None, "--sd-card/--app-dir", help="Use external storage"),
    data_dir: Optional[Path] = typer.Option(None, help="Application data directory"),
    external_dir: Optional[Path] = typer.Option(None, help="External storage directory"),
    verbosity: Optional[int] = typer.Option(None, "--verbosity", "-v", help="Verbosity level (0-3)"),
):
    """Print where report.yml is written."""
    config = get_config(verbosity=verbosity, use_sd_card=sd_card, data_dir=data_dir, external_dir=external_dir)
    typer.echo(str(get_gateway(config).report_file()))


@app.command()
def show(
    report_file: Optional[Path] = typer.Option(None, "--file", help="Report file (default: resolved from config)"),
    sd_card: Optional[bool] = typer.Option(None, "--sd-card/--app-dir", help="Use external storage"),
    data_dir: Optional[Path] = typer.Option(None, help="Application data directory"),
    external_dir: Optional[Path] = typer.Option(None, help="External storage directory"),
    verbosity: Optional[int] = typer.Option(None, "--verbosity", "-v", help="Verbosity level (0-3)"),
):
    """Summarize a report: session, counts and one line per test."""
    config = get_config(verbosity=verbosity, use_sd_card=sd_card, data_dir=data_dir, external_dir=external_dir)
    file_path = resolve_report_file(config, report_file)
    if not file_path.is_file():
        typer.echo(f"✗ No report at {file_path}", err=True)
        sys.exit(1)

    try:
        report = load_report("\n".join(get_gateway(config).read_lines(file_path)))
    except ScreenshotReporterError as e:
        typer.echo(f"✗ Could not read {file_path}: {e}", err=True)
        sys.exit(1)

    typer.echo(f"Session: {report['session']} ({report.get('date', 'unknown date')})")
    typer.echo(f"Tests: {report['total']} total, {report['passed']} passed, {report['failed']} failed")
    for test in report["tests"]:
        status = test.get("status", "PENDING")
        mark = "✓" if status == "PASS" else "✗"
        line = f"  {mark} {test.get('class', '?')}.{test.get('name', '?')} [{status}]"
        if status == "FAIL":
            line += f" {test.get('cause', 'UNKNOWN')}: {test.get('description', '')}"
        typer.echo(line)

    sys.exit(1 if report["failed"] else 0)


@app.command()
def clear(
    report_file: Optional[Path] = typer.Option(None, "--file", help="Report file (default: resolved from config)"),
    sd_card: Optional[bool] = typer.Option(None, "--sd-card/--app-dir", help="Use external storage"),
    data_dir: Optional[Path] = typer.Option(None, help="Application data directory"),
    external_dir: Optional[Path] = typer.Option(None, help="External storage directory"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be done"),
    verbosity: Optional[int] = typer.Option(None, "--verbosity", "-v", help="Verbosity level (0-3)"),
):
    """Truncate report.yml so the next test starts a fresh report."""
    config = get_config(verbosity=verbosity, use_sd_card=sd_card, data_dir=data_dir, external_dir=external_dir)
    file_path = resolve_report_file(config, report_file)
    if not file_path.exists():
        typer.echo(f"No report at {file_path}")
        sys.exit(0)
    if dry_run:
        typer.echo(f"DRY RUN: Would clear {file_path}")
        sys.exit(0)

    try:
        get_gateway(config).clear(file_path)
    except ScreenshotReporterError as e:
        typer.echo(f"✗ {e}", err=True)
        sys.exit(1)
    typer.echo(f"✓ Cleared {file_path}")


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
