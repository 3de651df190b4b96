"""Rich console output helpers."""

from rich.console import Console
from rich.table import Table

console = Console()


def ok(msg: str):
    """Print success message."""
    console.print(f"  [green]✓[/green] {msg}")


def fail(msg: str):
    """Print failure message."""
    console.print(f"  [red]✗[/red] {msg}")


def dim(msg: str):
    """Print dimmed message."""
    console.print(f"  [dim]{msg}[/dim]")


def header(msg: str):
    """Print bold header."""
    console.print(f"\n[bold]{msg}[/bold]")


def metrics_table(metrics: dict, title: str = "Run metrics") -> Table:
    """Build a two-column table of metric names and values."""
    table = Table(title=title)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    for name, value in metrics.items():
        if isinstance(value, float):
            table.add_row(name, f"{value:.6g}")
        else:
            table.add_row(name, str(value))
    return table


def print_summary(metrics: dict, title: str = "Run metrics"):
    """Print a metrics table, flagging a run that produced non-finite values."""
    console.print(metrics_table(metrics, title=title))
    if metrics.get("finite", True):
        ok("All fields finite")
    else:
        fail("Run stopped on non-finite field values")
