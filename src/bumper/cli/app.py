"""Command-line interface for bumper."""

from __future__ import annotations

import logging
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from bumper import __version__

app = typer.Typer(
    name="bumper",
    help="🚀 Release management from conventional commits",
    add_completion=False,
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

PathOption = typer.Option(None, "--path", "-p", help="Project directory (defaults to cwd)")
RangeOption = typer.Option(None, "--range", "-r", help="Git commit range, e.g. HEAD~50..HEAD")


class ReleaseChoice(StrEnum):
    patch = "patch"
    minor = "minor"
    major = "major"
    auto = "auto"


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=verbose, rich_tracebacks=True)],
        force=True,
    )


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"bumper {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Preview changelogs, validate commits and cut releases."""
    configure_logging(verbose)


@app.command()
def preview(path: Optional[str] = PathOption) -> None:
    """Preview the changelog entry for the next release."""
    from bumper.cli.commands.changelog import run_changelog

    run_changelog(path, preview=True, console=console, err_console=err_console)


@app.command()
def generate(path: Optional[str] = PathOption) -> None:
    """Append the next release's entry to the changelog."""
    from bumper.cli.commands.changelog import run_changelog

    run_changelog(path, preview=False, console=console, err_console=err_console)


@app.command()
def validate(
    path: Optional[str] = PathOption,
    revision_range: Optional[str] = RangeOption,
) -> None:
    """Validate commit messages since the last release."""
    from bumper.cli.commands.validate import run_validate

    run_validate(path, revision_range, console=console, err_console=err_console)


@app.command()
def release(
    release_type: ReleaseChoice = typer.Argument(
        ReleaseChoice.auto, help="Release type: patch, minor, major or auto"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Preview release without making changes"),
    path: Optional[str] = PathOption,
) -> None:
    """Create a new release."""
    from bumper.cli.commands.release import run_release

    run_release(path, release_type.value, dry_run, console=console, err_console=err_console)


@app.command()
def suggest(message: str = typer.Argument(..., help="The commit message to format")) -> None:
    """Suggest a conventional commit format for a message."""
    from bumper.cli.commands.suggest import run_suggest

    run_suggest(message, console=console)


@app.command("format")
def format_message(
    message: str = typer.Argument(..., help="Description of the change"),
    commit_type: Optional[str] = typer.Option(None, "--type", "-t", help="Commit type"),
    scope: Optional[str] = typer.Option(None, "--scope", "-s", help="Commit scope"),
    breaking: bool = typer.Option(False, "--breaking", "-b", help="Mark as a breaking change"),
    body: Optional[str] = typer.Option(None, "--body", help="Longer description"),
) -> None:
    """Print a conventional commit message built from free text."""
    from bumper.cli.commands.suggest import run_format

    run_format(message, commit_type, scope, breaking, body, console=console)


@app.command("analyze-legacy")
def analyze_legacy(
    revision_range: Optional[str] = RangeOption,
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write analysis JSON here"),
    path: Optional[str] = PathOption,
) -> None:
    """Analyze legacy commit patterns and suggest a migration strategy."""
    from bumper.cli.commands.legacy import run_analyze_legacy

    run_analyze_legacy(path, revision_range, output, console=console, err_console=err_console)


@app.command("bulk-format")
def bulk_format(
    revision_range: Optional[str] = RangeOption,
    execute: bool = typer.Option(
        False, "--execute/--dry-run", help="Rewrite history (default is a dry run)"
    ),
    min_count: int = typer.Option(
        5, "--min-count", min=0, help="Patterns need more than this many commits to get a rule"
    ),
    path: Optional[str] = PathOption,
) -> None:
    """Bulk format legacy commits to conventional format."""
    from bumper.cli.commands.legacy import run_bulk_format

    run_bulk_format(
        path, revision_range, execute, min_count, console=console, err_console=err_console
    )


def main() -> None:
    app()
