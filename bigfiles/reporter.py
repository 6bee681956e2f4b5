from __future__ import annotations

from typing import Any, Dict, List, Optional

from rich import box
from rich.console import Console
from rich.table import Table

_SIZE_UNITS = ["Bytes", "KB", "MB", "GB", "TB"]


def format_bytes(size: Optional[int]) -> str:
    """
    Human readable file size, e.g. 1536 -> "1.5 KB".
    """
    if not size:
        return "0 Bytes"
    value = float(size)
    index = 0
    while value >= 1024 and index < len(_SIZE_UNITS) - 1:
        value /= 1024
        index += 1
    return f"{round(value, 2):g} {_SIZE_UNITS[index]}"


def print_results(results: List[Dict[str, Any]], console: Optional[Console] = None) -> None:
    """
    Render pipeline run results as a rich table, in execution order.
    """
    console = console or Console()

    if not results:
        console.print("[yellow]No results to display.[/yellow]")
        return

    table = Table(title="BigFiles CSV Processor Results", box=box.ROUNDED)
    table.add_column("Pipeline", style="cyan", no_wrap=True)
    table.add_column("Rows", justify="right", style="magenta")
    table.add_column("Duration (s)", justify="right", style="green")
    table.add_column("Throughput (rows/s)", justify="right", style="bold green")
    table.add_column("Peak Memory (MB)", justify="right", style="yellow")
    table.add_column("CPU %", justify="right", style="red")
    table.add_column("Output", style="blue")
    table.add_column("Size", justify="right")

    for res in results:
        mem_bytes = res.get("peak_rss_bytes") or 0
        cpu = res.get("cpu_percent") or 0.0
        table.add_row(
            res.get("pipeline", "Unknown"),
            f"{res.get('rows', 0):,}",
            f"{res.get('duration_seconds', 0.0):.2f}",
            f"{res.get('throughput_rows_per_sec', 0.0):,.0f}",
            f"{mem_bytes / (1024 * 1024):.2f}",
            f"{cpu:.1f}",
            res.get("output_path", ""),
            format_bytes(res.get("output_size_bytes")),
        )

    console.print(table)


def print_sample(rows: List[Dict[str, Any]], console: Optional[Console] = None) -> None:
    """
    Render the first monthly summaries of a report for a quick sanity check.
    """
    console = console or Console()
    if not rows:
        return

    table = Table(title=f"Sample Results (first {len(rows)} entries)", box=box.SIMPLE)
    table.add_column("Month", style="cyan", no_wrap=True)
    table.add_column("Orders", justify="right", style="magenta")
    table.add_column("Min", justify="right")
    table.add_column("Max", justify="right")
    table.add_column("Avg", justify="right", style="bold green")
    table.add_column("StdDev", justify="right", style="yellow")

    for row in rows:
        table.add_row(
            f"{row['year']}-{row['month']:02d} ({row['month_name']})",
            f"{row['number_of_orders']:,}",
            f"${row['min_amount']:.2f}",
            f"${row['max_amount']:.2f}",
            f"${row['sales_average']:.2f}",
            f"${row['standard_deviation']:.2f}",
        )

    console.print(table)
