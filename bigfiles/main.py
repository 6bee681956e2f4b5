from __future__ import annotations

import sys
from typing import Optional

import typer

from bigfiles.config import get_settings
from bigfiles.errors import PipelineError
from bigfiles.orchestrator import RunConfig, run_pipelines
from bigfiles.reporter import print_results, print_sample
from bigfiles.utils.logging import configure_logging

app = typer.Typer(help="BigFiles CSV Processor CLI.")

SalesOption = typer.Option(None, "--sales", help="Sales store path (default from settings).")
ReportOption = typer.Option(None, "--report", help="Report store path (default from settings).")
RowsOption = typer.Option(
    None, "--rows", "-r", min=1, help="Number of records to generate (default from settings)."
)
BatchOption = typer.Option(
    None, "--batch-size", "-b", min=1, help="Records per flushed batch (default from settings)."
)
SeedOption = typer.Option(None, "--seed", help="Deterministic RNG seed.")


def _run(command: str, config: RunConfig) -> None:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    try:
        results = run_pipelines(command, config)
    except PipelineError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)

    print_results(results)
    for result in results:
        sample = result.get("extra", {}).get("sample")
        if sample:
            print_sample(sample)


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"sales={settings.sales_path} report={settings.report_path} | "
        f"rows={settings.total_records} batch={settings.batch_size} "
        f"seed={settings.seed} progress_interval={settings.progress_interval}"
    )


@app.command()
def generate(
    sales: Optional[str] = SalesOption,
    rows: Optional[int] = RowsOption,
    batch_size: Optional[int] = BatchOption,
    seed: Optional[int] = SeedOption,
) -> None:
    """
    Generate the synthetic sales store.
    """
    _run("generate", RunConfig(sales_path=sales, total_records=rows, batch_size=batch_size, seed=seed))


@app.command()
def process(
    sales: Optional[str] = SalesOption,
    report: Optional[str] = ReportOption,
) -> None:
    """
    Aggregate the sales store into the monthly report.
    """
    _run("process", RunConfig(sales_path=sales, report_path=report))


@app.command("all")
def run_all(
    sales: Optional[str] = SalesOption,
    report: Optional[str] = ReportOption,
    rows: Optional[int] = RowsOption,
    batch_size: Optional[int] = BatchOption,
    seed: Optional[int] = SeedOption,
) -> None:
    """
    Generate the sales store, then aggregate it.
    """
    _run(
        "all",
        RunConfig(
            sales_path=sales,
            report_path=report,
            total_records=rows,
            batch_size=batch_size,
            seed=seed,
        ),
    )


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
