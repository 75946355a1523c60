"""Implementation of the 'suggest' and 'format' commands.

Neither command touches the repository.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape

from bumper.core.formatter import format_commit_message, suggest_commit_format

if TYPE_CHECKING:
    from rich.console import Console


def run_suggest(message: str, console: Console) -> None:
    """Show a conventional rewrite of ``message`` and improvement hints."""
    suggestion = suggest_commit_format(message)

    console.print("[blue]💡 Commit Message Suggestions[/]\n")
    console.print(f"[bright_black]Original:[/] {escape(suggestion.original)}")
    console.print(f"[green]Suggested:[/] {escape(suggestion.suggested)}")

    if suggestion.improvements:
        console.print("\n[yellow]Improvements:[/]")
        for improvement in suggestion.improvements:
            console.print(f"[yellow]  • {improvement}[/]")

    console.print(f"\n[blue]Type:[/] {suggestion.type}")
    if suggestion.scope:
        console.print(f"[blue]Scope:[/] {escape(suggestion.scope)}")
    if suggestion.breaking:
        console.print("[red]Breaking:[/] Yes")


def run_format(
    message: str,
    commit_type: str | None,
    scope: str | None,
    breaking: bool,
    body: str | None,
    console: Console,
) -> None:
    """Print a ready-to-use conventional commit message."""
    formatted = format_commit_message(message, commit_type, scope, breaking)
    if body and body.strip():
        formatted += f"\n\n{body.strip()}"
    console.print(formatted, markup=False, highlight=False)
