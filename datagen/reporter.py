from __future__ import annotations

from typing import Any, Mapping, Optional

from rich import box
from rich.console import Console
from rich.table import Table


def _format_bytes(value: Optional[int]) -> str:
    if not value:
        return "N/A"
    if value >= 1024**3:
        return f"{value / 1024**3:.2f} GB"
    if value >= 1024**2:
        return f"{value / 1024**2:.2f} MB"
    if value >= 1024:
        return f"{value / 1024:.1f} KB"
    return f"{value} B"


def build_summary_table(result: Mapping[str, Any]) -> Table:
    """
    Build a two-column rich table describing one generation run.
    """
    table = Table(
        title=f"Generated {result.get('table', 'Unknown')}",
        box=box.ROUNDED,
        show_header=False,
    )
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Value", justify="right", style="green")

    cpu = result.get("cpu_percent")
    table.add_row("Output", str(result.get("output_path", "")))
    table.add_row("Rows", f"{result.get('rows', 0):,}")
    table.add_row("Columns", str(result.get("columns", 0)))
    table.add_row("Batch groups", f"{result.get('groups', 0):,}")
    table.add_row("File size", _format_bytes(result.get("bytes_written")))
    table.add_row("Duration (s)", f"{result.get('duration_seconds', 0.0):.2f}")
    table.add_row("Throughput (rows/s)", f"{result.get('throughput_rows_per_sec', 0.0):,.2f}")
    table.add_row("Peak memory", _format_bytes(result.get("peak_rss_bytes")))
    table.add_row("CPU %", f"{cpu:.1f}" if cpu is not None else "N/A")
    return table


def print_summary(result: Mapping[str, Any], console: Optional[Console] = None) -> None:
    """
    Render a generation summary as a rich table.
    """
    console = console or Console()
    if not result:
        console.print("[yellow]Nothing was generated.[/yellow]")
        return
    console.print(build_summary_table(result))
