"""Command line interface for the translator browser suite."""

import os
from pathlib import Path
from typing import List, Optional

import pytest
import typer
from rich.console import Console
from rich.table import Table

from .config import get_config, reload_config
from .logging_config import setup_logging
from .runner import build_pytest_args
from .scenarios import load_scenarios

console = Console()
app = typer.Typer(help="Run the Singlish-to-Sinhala translator browser tests.")


def _export(name: str, value) -> None:
    # pytest-xdist workers read their settings from the environment
    os.environ[f"SINGLISH_E2E_{name}"] = str(value)


@app.command()
def run(
    grep: Optional[str] = typer.Option(
        None, "--grep", "-g", help="Only run tests matching this -k expression (scenario id or name)."
    ),
    headed: bool = typer.Option(False, "--headed", help="Show the browser window."),
    inspect: bool = typer.Option(
        False, "--inspect", help="Headed, slowed down, one worker, with the Playwright Inspector."
    ),
    browser: Optional[str] = typer.Option(None, "--browser", help="chromium, firefox or webkit."),
    ci: Optional[bool] = typer.Option(
        None, "--ci/--local", help="Force the CI or local profile (default: from environment)."
    ),
    report: Path = typer.Option(
        Path("playwright-report/index.html"), "--report", help="HTML report location."
    ),
    tests_dir: Path = typer.Option(Path("tests"), "--tests-dir", help="Directory holding the suite."),
    pytest_args: Optional[List[str]] = typer.Argument(None, help="Extra arguments for pytest."),
) -> None:
    """Run the scenarios against the live translator."""
    if ci is not None:
        _export("CI", str(ci).lower())
    if headed or inspect:
        _export("HEADLESS", "false")
    if browser:
        _export("BROWSER_TYPE", browser)
    if inspect:
        _export("SLOW_MO", 500)
        _export("WORKERS", 1)
        os.environ["PWDEBUG"] = "1"

    config = reload_config()
    # Keep live evidence out of the session's test output directory
    _export("SCREENSHOT_DIR", config.screenshot_dir.resolve())
    setup_logging()

    profile = config.profile
    console.print(
        f"[bold]Profile:[/bold] {profile.name} "
        f"(workers={profile.workers}, retries={profile.retries}, forbid_only={profile.forbid_only})"
    )

    args = build_pytest_args(
        profile,
        tests_dir=tests_dir,
        grep=grep,
        html_report=report,
        extra=pytest_args or []
    )
    console.print(f"[dim]pytest {' '.join(args)}[/dim]")

    exit_code = pytest.main(args)
    raise typer.Exit(code=int(exit_code))


@app.command()
def scenarios(
    file: Optional[Path] = typer.Option(
        None, "--file", "-f", exists=True, dir_okay=False, help="JSON scenario file instead of the built-in table."
    ),
) -> None:
    """List the scenarios the suite will run."""
    table = Table(title="Translator scenarios")
    table.add_column("ID", style="cyan", no_wrap=True, min_width=12)
    table.add_column("Name")
    table.add_column("Input")
    table.add_column("Expected")
    table.add_column("Intent")

    for scenario in load_scenarios(file or get_config().scenarios_file):
        intent = "[green]pass[/green]" if scenario.should_pass else "[yellow]fail[/yellow]"
        table.add_row(scenario.id, scenario.name, scenario.input, scenario.expected, intent)

    console.print(table)


if __name__ == "__main__":
    app()
