"""Implementation of the 'release' command.

The release command bumps the version, appends the changelog, commits,
tags, pushes, publishes and creates a GitHub release.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.panel import Panel

from bumper.cli.commands.common import open_project, unreleased_commits
from bumper.exceptions import BumperError
from bumper.project.pyproject import get_pyproject_version
from bumper.release import ReleaseRunner, describe_steps, plan_release

if TYPE_CHECKING:
    from rich.console import Console

AUTO = "auto"


def run_release(
    path: str | None,
    release_type: str,
    dry_run: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Run the release command.

    Args:
        path: Optional path to project directory
        release_type: "major", "minor", "patch", or "auto" to infer it from commits
        dry_run: Only show what would happen
        console: Console for standard output
        err_console: Console for error output
    """
    project_path, config, repo = open_project(path, err_console)
    runner = ReleaseRunner(
        repo,
        config,
        project_path,
        on_step=lambda message: console.print(f"  [green]✓[/] {message}"),
    )

    console.print(f"[blue]🚀 Starting {'DRY RUN ' if dry_run else ''}release process...[/]")

    if not dry_run:
        try:
            runner.check_working_tree()
        except BumperError as e:
            err_console.print(f"[red]❌ {e}[/]")
            raise SystemExit(1) from e

    try:
        current_version = get_pyproject_version(project_path)
    except BumperError as e:
        err_console.print(f"[red]Error getting version:[/] {e}")
        raise SystemExit(1) from e

    _, commits = unreleased_commits(repo, config, err_console)

    if release_type == AUTO and not commits:
        console.print("[yellow]No commits found since last release. Nothing to do.[/]")
        return

    plan = plan_release(
        commits,
        current_version,
        config,
        release_type=None if release_type == AUTO else release_type,
    )

    console.print(f"[cyan]📦 Version: {current_version} → {plan.version}[/]")
    console.print(f"[cyan]🎯 Release Type: {plan.release_type.value.upper()}[/]")

    if dry_run:
        steps = "\n".join(
            f"  {i}. {step}" for i, step in enumerate(describe_steps(plan, config), start=1)
        )
        console.print(
            Panel(
                f"[bold]Would make the following changes:[/]\n\n{steps}",
                title="[yellow]Dry Run Preview[/]",
                border_style="yellow",
            )
        )
        console.print("\n📝 Release notes preview:")
        console.print(plan.changelog_entry, markup=False)
        return

    try:
        runner.run(plan)
    except BumperError as e:
        err_console.print(f"[red]Release failed:[/] {e}")
        raise SystemExit(1) from e

    console.print(
        Panel(
            f"[green]🎉 Release completed successfully![/]\n\n"
            f"📦 Version: {plan.version}\n"
            f"🏷️ Tag: {plan.tag}",
            title="[green]Release Complete[/]",
            border_style="green",
        )
    )
