"""CLI display helpers."""

from typing import Any, Dict, List

from rich.console import Console
from rich.table import Table

console = Console()


def display_run_summary(results: Dict[str, dict]):
    """Display per-suite pytest results in a table."""
    table = Table(title="Test Run Summary")
    table.add_column("Suite", style="cyan")
    table.add_column("Status", justify="center")
    table.add_column("Passed", justify="right", style="green")
    table.add_column("Failed", justify="right", style="red")
    table.add_column("Skipped", justify="right", style="yellow")
    table.add_column("Errors", justify="right", style="red")
    table.add_column("Time", justify="right")

    for suite, result in results.items():
        status = "[green]✓[/green]" if result["success"] else "[red]✗[/red]"
        table.add_row(
            suite,
            status,
            str(result.get("passed", 0)),
            str(result.get("failed", 0)),
            str(result.get("skipped", 0)),
            str(result.get("errors", 0)),
            f"{result.get('duration', 0.0):.2f}s",
        )

    console.print(table)


def display_records(title: str, rows: List[Dict[str, Any]]):
    """Display generated records; columns come from the first row."""
    if not rows:
        console.print(f"[yellow]No {title.lower()} generated[/yellow]")
        return

    table = Table(title=title)
    for column in rows[0]:
        table.add_column(column.replace("_", " ").title(), style="white")
    for row in rows:
        table.add_row(*(str(value) for value in row.values()))
    console.print(table)
