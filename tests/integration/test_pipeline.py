"""
End-to-end tests: generate a sales store, aggregate it, inspect the report.

These run entirely on temporary files and need no external services.
"""

from __future__ import annotations

import csv
from pathlib import Path

import pytest
from typer.testing import CliRunner

from bigfiles.main import app
from bigfiles.pipelines.aggregator import SalesProcessor
from bigfiles.pipelines.generator import SalesDataGenerator

TOTAL_RECORDS = 1_000
BATCH_SIZE = 100
MAX_BUCKETS = 6 * 12

runner = CliRunner()


@pytest.fixture
def pipeline_run(tmp_path: Path):
    sales = tmp_path / "test_data" / "test_sales.csv"
    report = tmp_path / "test_data" / "test_report.csv"
    SalesDataGenerator(sales, total_records=TOTAL_RECORDS, batch_size=BATCH_SIZE, seed=2024).generate()
    processor = SalesProcessor(sales, report)
    processor.process()
    return sales, report, processor


def _report_rows(path: Path) -> list[dict[str, str]]:
    with path.open("r", newline="", encoding="utf-8") as f:
        return list(csv.DictReader(f))


class TestGenerateThenProcess:
    def test_every_record_lands_in_a_bucket(self, pipeline_run):
        _, report, processor = pipeline_run
        rows = _report_rows(report)

        assert 1 <= len(rows) <= MAX_BUCKETS
        assert sum(int(row["number_of_orders"]) for row in rows) == TOTAL_RECORDS
        assert processor.get_stats()["total_records_processed"] == TOTAL_RECORDS
        assert processor.get_stats()["records_skipped"] == 0

    def test_report_rows_are_internally_consistent(self, pipeline_run):
        _, report, _ = pipeline_run
        for row in _report_rows(report):
            assert 2020 <= int(row["year"]) <= 2025
            assert 1 <= int(row["month"]) <= 12
            assert float(row["min_amount"]) <= float(row["sales_average"]) <= float(row["max_amount"])
            assert 500 <= float(row["min_amount"])
            assert float(row["max_amount"]) <= 1800
            assert float(row["standard_deviation"]) >= 0
            for field in ("max_amount", "min_amount", "sales_average", "standard_deviation"):
                assert len(row[field].split(".")[1]) == 2

    def test_reprocessing_is_byte_identical(self, pipeline_run, tmp_path: Path):
        sales, report, _ = pipeline_run
        again = tmp_path / "again.csv"
        SalesProcessor(sales, again).process()
        assert again.read_bytes() == report.read_bytes()


class TestCli:
    def test_all_command_writes_both_stores(self, tmp_path: Path):
        sales = tmp_path / "sales.csv"
        report = tmp_path / "report.csv"

        result = runner.invoke(
            app,
            [
                "all",
                "--sales",
                str(sales),
                "--report",
                str(report),
                "--rows",
                "200",
                "--batch-size",
                "50",
                "--seed",
                "1",
            ],
        )

        assert result.exit_code == 0, result.output
        assert len(sales.read_text(encoding="utf-8").splitlines()) == 201
        assert sum(int(row["number_of_orders"]) for row in _report_rows(report)) == 200

    def test_process_missing_input_exits_non_zero(self, tmp_path: Path):
        report = tmp_path / "report.csv"

        result = runner.invoke(
            app, ["process", "--sales", str(tmp_path / "nope.csv"), "--report", str(report)]
        )

        assert result.exit_code == 1
        assert "Input file not found" in result.output
        assert not report.exists()

    def test_info_shows_configuration(self):
        result = runner.invoke(app, ["info"])
        assert result.exit_code == 0
        assert "sales=sales.csv" in result.output
