"""Console rendering of scaffold runs.

The engine knows nothing about the terminal; these helpers are what the
CLI plugs in as the engine's reporter and prints afterwards.
"""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dsinit.core.entry import Action, EntryKind, EntryOutcome, RunResult
from dsinit.core.errors import CollaboratorError, ScaffoldError
from dsinit.ui.theme import ACTION_SYMBOLS, Symbols


class OutcomePrinter:
    """Reporter that prints one colored status line per entry."""

    def __init__(self, console: Console, show_skipped: bool = True):
        self.console = console
        self.show_skipped = show_skipped

    def __call__(self, outcome: EntryOutcome) -> None:
        if outcome.action == Action.SKIPPED and not self.show_skipped:
            return
        style = f"action.{outcome.action.value}"
        suffix = "/" if outcome.kind == EntryKind.DIRECTORY else ""
        line = f"  [{style}]{ACTION_SYMBOLS[outcome.action]} {outcome.action.value:<11}[/] {escape(outcome.path)}{suffix}"
        if outcome.backup is not None:
            line += f"  [action.backup]{Symbols.BACKUP} {escape(outcome.backup.name)}[/]"
        self.console.print(line, highlight=False)


def print_summary(console: Console, result: RunResult) -> None:
    """Print totals and any backups made."""
    table = Table(title="Scaffold summary", title_style="title")
    table.add_column("Outcome")
    table.add_column("Count", justify="right")
    table.add_row("[action.created]Created[/]", str(result.created))
    table.add_row("[action.skipped]Skipped[/]", str(result.skipped))
    table.add_row("[action.overwritten]Overwritten[/]", str(result.overwritten))
    table.add_row("[action.backup]Backed up[/]", str(result.backed_up))
    console.print()
    console.print(table)

    if result.backups:
        console.print("\n[bold]Backups:[/]")
        for record in result.backups:
            console.print(f"  {Symbols.BACKUP} [path]{escape(str(record.backup))}[/]")


def print_error(console: Console, error: ScaffoldError) -> None:
    """One-line diagnostic for a fatal error."""
    console.print(f"\n[status.error]{Symbols.FAILED} Error:[/] {escape(error.describe())}")
    if error.result is not None and error.result.total:
        console.print(
            f"  [text.dim]{error.result.total} entries were applied before the failure "
            "and were left in place; re-running is safe.[/]"
        )


def print_warning(console: Console, what: str, error: CollaboratorError) -> None:
    """Collaborator failures are reported, not fatal."""
    status = f" (exit status {error.returncode})" if error.returncode is not None else ""
    console.print(f"[status.warn]{Symbols.WARN} Warning:[/] {what} failed{status}: {escape(str(error))}")
    if error.output:
        for line in error.output.splitlines()[-10:]:
            console.print(f"    {line}", style="text.dim", highlight=False, markup=False)
