# pactverify/cli/ui.py
"""
Shared UI helpers for CLI commands.

Usage:
    from pactverify.cli.ui import ui

    ui.header("Verifying Event API")
    ui.success("3 interaction(s) verified")
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from pactverify.core.outcome import VerificationOutcome

console = Console()


class UI:
    """Rich-backed output helpers used by every command."""

    def __init__(self, out: Console = console):
        self.console = out

    def header(self, title: str, subtitle: str = "") -> None:
        content = f"[bold]{title}[/bold]"
        if subtitle:
            content = f"{content}\n[dim]{subtitle}[/dim]"
        self.console.print(Panel.fit(content, border_style="blue"))

    def success(self, msg: str) -> None:
        self.console.print(f"[green]✓[/green] {msg}")

    def error(self, msg: str) -> None:
        self.console.print(f"[red]✗[/red] {msg}")

    def info(self, msg: str) -> None:
        self.console.print(f"[dim]{msg}[/dim]")

    def outcome(self, outcome: VerificationOutcome) -> None:
        """Print one row per interaction, then one row per mismatch of the failures."""
        table = Table(title=escape(f"{outcome.consumer} → {outcome.provider}"), show_lines=False)
        table.add_column("Interaction")
        table.add_column("Provider state", style="dim")
        table.add_column("Result")

        for result in outcome.results:
            verdict = "[green]OK[/green]" if result.success else "[red]FAILED[/red]"
            table.add_row(escape(result.description), escape(", ".join(result.provider_states)), verdict)
        self.console.print(table)

        if outcome.success:
            return

        failures = Table(title="Mismatches", show_lines=True)
        failures.add_column("Interaction")
        failures.add_column("Kind")
        failures.add_column("Path")
        failures.add_column("Detail")
        for mismatch in outcome.mismatches:
            failures.add_row(
                escape(mismatch.interaction), mismatch.kind, escape(mismatch.path), escape(mismatch.message)
            )
        self.console.print(failures)


ui = UI()
