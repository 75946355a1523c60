"""Implementation of the 'preview' and 'generate' commands."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from bumper.cli.commands.common import open_project, unreleased_commits
from bumper.core.changelog import append_to_changelog, build_release, render_changelog
from bumper.exceptions import BumperError
from bumper.project.pyproject import get_pyproject_version

if TYPE_CHECKING:
    from rich.console import Console

    from bumper.core.changelog import ReleaseInfo


def run_changelog(
    path: str | None,
    preview: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Render the next changelog entry and either show it or append it.

    Args:
        path: Optional path to project directory
        preview: Only print the entry, do not write the changelog
        console: Console for standard output
        err_console: Console for error output
    """
    project_path, config, repo = open_project(path, err_console)

    console.print("[blue]🔍 Analyzing commits...[/]")
    _, commits = unreleased_commits(repo, config, err_console)

    if not commits:
        console.print("[yellow]⚠️ No new commits found since last release.[/]")
        return

    console.print(f"[green]📝 Found {len(commits)} commits since last release[/]")

    try:
        current_version = get_pyproject_version(project_path)
    except BumperError as e:
        err_console.print(f"[red]Error getting version:[/] {e}")
        raise SystemExit(1) from e

    release = build_release(commits, current_version, release_date=date.today())
    entry = render_changelog(release)

    if preview:
        console.print(Panel(escape(entry.rstrip()), title="[blue]📋 Changelog Preview[/]", expand=False))
        console.print(f"\n🎯 Release Type: [cyan]{release.release_type.value.upper()}[/]")
        console.print(f"📦 Version: [yellow]{current_version}[/] → [green]{release.version}[/]")
        console.print(_summary_table(release))
        return

    changelog_path = project_path / config.effective_changelog_path
    existing = changelog_path.read_text(encoding="utf-8") if changelog_path.exists() else None
    changelog_path.write_text(append_to_changelog(existing, entry), encoding="utf-8")

    console.print(f"[green]✅ Updated {config.effective_changelog_path}[/]")
    console.print(f"📦 Next version will be: [green]{release.version}[/]")
    console.print(f"🎯 Release type: [cyan]{release.release_type.value.upper()}[/]")


def _summary_table(release: ReleaseInfo) -> Table:
    table = Table(title="📊 Commit Summary", show_header=True)
    table.add_column("Section")
    table.add_column("Commits", justify="right", style="blue")
    for section in release.sections:
        table.add_row(section.title, str(len(section.commits)))
    return table
