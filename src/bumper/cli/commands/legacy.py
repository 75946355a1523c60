"""Implementation of the 'analyze-legacy' and 'bulk-format' commands."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

import typer
from rich.markup import escape
from rich.table import Table

from bumper.cli.commands.common import open_project, range_commits
from bumper.core.commits import split_conventional
from bumper.core.legacy import (
    analyze_history,
    analyze_patterns,
    build_mapping_rules,
    plan_bulk_format,
    render_msg_filter,
)
from bumper.exceptions import BumperError

if TYPE_CHECKING:
    from rich.console import Console

    from bumper.core.legacy import MigrationAnalysis

TOP_PATTERNS = 10
PREVIEW_LIMIT = 10


def run_analyze_legacy(
    path: str | None,
    revision_range: str | None,
    output: Path | None,
    console: Console,
    err_console: Console,
) -> None:
    """Analyze legacy commit patterns and recommend a migration strategy."""
    _, _, repo = open_project(path, err_console)
    commits = range_commits(repo, revision_range, err_console)
    analysis = analyze_history(commits)

    _print_analysis(analysis, console)

    if output:
        output.write_text(analysis.to_json(), encoding="utf-8")
        console.print(f"\n💾 Analysis saved to [blue]{output}[/]")


def _print_analysis(analysis: MigrationAnalysis, console: Console) -> None:
    console.print("\n[blue]📊 Legacy Commit Analysis[/]")
    console.print("[bright_black]" + "=" * 50 + "[/]")

    console.print("\n📈 Commit Statistics:")
    console.print(f"   Total commits: [blue]{analysis.total_commits}[/]")
    console.print(f"   Conventional commits: [green]{analysis.conventional_commits}[/]")
    console.print(f"   Legacy commits: [yellow]{analysis.legacy_commits}[/]")
    console.print(f"   Migration rate: [blue]{analysis.migration_rate:.1f}%[/]")

    console.print(f"\n🎯 Migration Strategy: [blue]{analysis.migration_strategy.value.upper()}[/]")

    if analysis.patterns:
        table = Table(title="📋 Top Commit Patterns")
        table.add_column("#", justify="right")
        table.add_column("Pattern")
        table.add_column("Commits", justify="right")
        table.add_column("Suggested", style="green")
        table.add_column("Examples", style="bright_black")
        for index, pattern in enumerate(analysis.patterns[:TOP_PATTERNS], start=1):
            table.add_row(
                str(index),
                escape(pattern.pattern),
                str(pattern.count),
                pattern.suggested_type,
                escape("\n".join(pattern.examples)),
            )
        console.print(table)

    if analysis.recommendations:
        console.print("\n💡 Recommendations:")
        for index, recommendation in enumerate(analysis.recommendations, start=1):
            console.print(f"   {index}. {recommendation}")


def run_bulk_format(
    path: str | None,
    revision_range: str | None,
    execute: bool,
    min_count: int,
    console: Console,
    err_console: Console,
) -> None:
    """Propose conventional messages for legacy commits and optionally rewrite history.

    Rewriting is delegated to ``git filter-branch``.
    """
    _, _, repo = open_project(path, err_console)
    commits = range_commits(repo, revision_range, err_console)
    _, legacy = split_conventional(commits)

    if not legacy:
        console.print("[green]✅ No legacy commits found to format[/]")
        return

    console.print(f"\n📊 Found [blue]{len(legacy)}[/] legacy commits to format")

    rules = build_mapping_rules(analyze_patterns(legacy), min_count=min_count)
    console.print("\n📋 Using mapping rules:")
    for word, commit_type in rules.items():
        console.print(f'   "{escape(word)}" → [green]{commit_type}[/]')

    plan = plan_bulk_format(legacy, rules)

    console.print("\n📝 Preview of formatted commits:")
    for item in plan[:PREVIEW_LIMIT]:
        console.print(
            f"   [bright_black]{item.commit.hash}[/]: [yellow]{escape(item.commit.message)}[/]"
        )
        console.print(f"   [bright_black]    →[/] [green]{escape(item.formatted)}[/]")
    if len(plan) > PREVIEW_LIMIT:
        console.print(f"   [bright_black]... and {len(plan) - PREVIEW_LIMIT} more[/]")

    if not execute:
        console.print("\n[blue]🔍 Dry run completed. No changes made.[/]")
        return

    console.print(
        "\n[yellow]⚠️  Warning: This will rewrite git history. "
        "Make sure to backup your repository first.[/]"
    )
    if not typer.confirm(f"Rewrite {len(plan)} commit messages?", default=False):
        console.print("[bright_black]History rewrite cancelled.[/]")
        return

    with tempfile.TemporaryDirectory() as tmp:
        script = Path(tmp) / "msg-filter.sh"
        script.write_text(render_msg_filter(plan), encoding="utf-8")
        script.chmod(0o755)
        try:
            repo.rewrite_messages(script, revision_range)
        except BumperError as e:
            err_console.print(f"[red]❌ Failed to rewrite git history:[/] {e}")
            raise SystemExit(1) from e

    console.print("\n[green]✅ Git history rewritten successfully![/]")
    console.print("[blue]\n📝 Next steps:[/]")
    console.print('   1. Review the changes with "git log --oneline"')
    console.print('   2. Force push to remote: "git push --force-with-lease"')
    console.print("   3. Inform your team about the history rewrite")
