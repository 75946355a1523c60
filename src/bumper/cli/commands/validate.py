"""Implementation of the 'validate' command."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape

from bumper.cli.commands.common import open_project, range_commits, unreleased_commits
from bumper.core.validation import validate_commits

if TYPE_CHECKING:
    from rich.console import Console


def run_validate(
    path: str | None,
    revision_range: str | None,
    console: Console,
    err_console: Console,
) -> None:
    """Validate commit messages since the last release (or in a range).

    Exits with status 1 when any commit has errors.
    """
    _, config, repo = open_project(path, err_console)

    console.print("[blue]🔍 Validating commit messages...[/]")
    if revision_range:
        commits = range_commits(repo, revision_range, err_console)
    else:
        _, commits = unreleased_commits(repo, config, err_console)

    if not commits:
        console.print("[yellow]⚠️ No commits found to validate.[/]")
        return

    console.print(f"[green]📝 Validating {len(commits)} commits...[/]")
    report = validate_commits(commits, max_length=config.commits.max_subject_length)

    for item in report.results:
        header = escape(f"{item.commit.hash}: {item.commit.message}")
        if item.result.errors:
            console.print(f"[red]❌ {header}[/]", highlight=False)
            for error in item.result.errors:
                console.print(f"[red]   - {error}[/]")
        elif item.result.warnings:
            console.print(f"[yellow]⚠️ {header}[/]", highlight=False)
            for warning in item.result.warnings:
                console.print(f"[yellow]   - {warning}[/]")
        else:
            console.print(f"[green]✅ {header}[/]", highlight=False)

    console.print("\n📊 Validation Summary:")
    console.print(f"Total commits: [blue]{report.total}[/]")
    console.print(f"Valid commits: [green]{report.valid_count}[/]")
    console.print(f"Invalid commits: [red]{report.invalid_count}[/]")
    console.print(f"Total errors: [red]{report.error_count}[/]")
    console.print(f"Total warnings: [yellow]{report.warning_count}[/]")

    if report.error_count:
        console.print("\n[red]❌ Validation failed! Please fix the errors above.[/]")
        console.print('[blue]💡 Tip: Use "git commit --amend" to fix recent commits[/]')
        raise SystemExit(1)
    if report.warning_count:
        console.print("\n[yellow]⚠️ Validation passed with warnings.[/]")
    else:
        console.print("\n[green]✅ All commits are valid![/]")
