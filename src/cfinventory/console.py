"""Rich console output for analysis runs."""

import logging
from typing import Optional
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .models import AnalysisResult


def configure_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """Route log records through rich; DEBUG when verbose, INFO otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console or Console(stderr=True), show_path=False)],
        force=True,
    )


def summary_table(result: AnalysisResult) -> Table:
    """Build a two-column table of element counts."""
    table = Table(title="Inventory Summary", show_header=True, header_style="bold cyan")
    table.add_column("Element")
    table.add_column("Count", justify="right")

    for element, count in result.summary().items():
        table.add_row(element.capitalize(), str(count))

    return table


def print_summary(result: AnalysisResult, console: Optional[Console] = None) -> None:
    """Display the run summary and the most used declarations."""
    console = console or Console()
    console.print(Panel(result.root, title="Analysis root", border_style="green"))
    console.print(summary_table(result))

    unused = [f.name for f in result.functions if f.name and not f.used_in]
    if unused:
        console.print(f"[bold yellow]⚠ {len(unused)} function(s) never referenced[/bold yellow]")
