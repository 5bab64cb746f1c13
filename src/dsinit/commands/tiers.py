"""dsinit tiers - List the available scaffold tiers."""

import click
from rich.table import Table

from dsinit.core.entry import ProjectContext
from dsinit.templates import TIERS
from dsinit.ui import make_console

console = make_console()


@click.command()
def tiers_cmd():
    """Show available tiers and what each one creates."""
    sample = ProjectContext(name="example")

    table = Table(title="Available Tiers", title_style="title")
    table.add_column("Tier", style="path")
    table.add_column("Description")
    table.add_column("Directories", justify="right")
    table.add_column("Files", justify="right")

    for tier in TIERS.values():
        entries = tier.entries(sample)
        dirs = sum(1 for e in entries if e.is_directory)
        table.add_row(tier.name, tier.description, str(dirs), str(len(entries) - dirs))

    console.print(table)

    console.print("\n[bold]Usage:[/]")
    console.print("  dsinit new my-analysis --tier minimal")
    console.print("  dsinit new churn-model -t full --python 3.12")
