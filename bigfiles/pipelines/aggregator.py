"""
Monthly sales aggregator.

Streams the sales store one row at a time and folds each row into a running
bucket keyed by (year, month). Buckets keep exact integer-cent power sums
(count, sum, sum of squares) instead of the list of amounts, so memory is
bounded by the number of months and the result does not depend on row order.
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple, TypedDict

from bigfiles.config import get_settings
from bigfiles.domain.models import SalesRecord, SalesReportRecord, month_name
from bigfiles.errors import MalformedRecordFailure, NotFoundFailure
from bigfiles.infrastructure.csv_store import decode_sales_row, iter_sales_rows, write_report
from bigfiles.pipelines.abstract import AbstractPipeline, PipelineResult
from bigfiles.utils.logging import get_logger
from bigfiles.utils.progress import ProgressObserver

log = get_logger(__name__)

BucketKey = Tuple[int, int]


class ProcessorStats(TypedDict):
    total_buckets: int
    year_range: str
    total_records_processed: int
    records_skipped: int


@dataclass
class MonthlyBucketStats:
    """
    Running statistics for one (year, month). Amounts are held in cents.
    """

    year: int
    month: int
    number_of_orders: int = 0
    max_cents: int = 0
    min_cents: int = 0
    total_cents: int = 0
    sum_squares: int = 0

    def add(self, cents: int) -> None:
        if self.number_of_orders == 0:
            self.max_cents = self.min_cents = cents
        else:
            self.max_cents = max(self.max_cents, cents)
            self.min_cents = min(self.min_cents, cents)
        self.number_of_orders += 1
        self.total_cents += cents
        self.sum_squares += cents * cents

    @property
    def sales_average(self) -> float:
        return self.total_cents / self.number_of_orders / 100

    @property
    def standard_deviation(self) -> float:
        """Sample standard deviation (n - 1 denominator); 0 for a single order."""
        n = self.number_of_orders
        if n <= 1:
            return 0.0
        # n * sum(x^2) - sum(x)^2 == n * sum((x - mean)^2), exact in integers
        spread = n * self.sum_squares - self.total_cents * self.total_cents
        return math.sqrt(spread / (n * (n - 1))) / 100

    def finalize(self) -> SalesReportRecord:
        return SalesReportRecord(
            year=self.year,
            month=self.month,
            month_name=month_name(self.month),
            number_of_orders=self.number_of_orders,
            max_amount=self.max_cents / 100,
            min_amount=self.min_cents / 100,
            sales_average=self.sales_average,
            standard_deviation=self.standard_deviation,
        )


class SalesProcessor(AbstractPipeline):
    """
    Build the monthly report for `input_path` and write it to `output_path`.
    """

    name: str = "process"
    description: str = "Stream the sales store into monthly order statistics."

    def __init__(
        self,
        input_path: Path | str | None = None,
        output_path: Path | str | None = None,
        progress_interval: int | None = None,
        progress: Optional[ProgressObserver] = None,
    ) -> None:
        settings = get_settings()
        self.input_path = Path(input_path or settings.sales_path)
        self.output_path = Path(output_path or settings.report_path)
        self.progress_interval = progress_interval or settings.progress_interval
        self._progress = progress
        self._buckets: Dict[BucketKey, MonthlyBucketStats] = {}
        self._report: List[SalesReportRecord] = []
        self.records_skipped = 0

    def fold(self, record: SalesRecord) -> None:
        key = record.bucket_key
        bucket = self._buckets.get(key)
        if bucket is None:
            bucket = self._buckets[key] = MonthlyBucketStats(year=key[0], month=key[1])
        bucket.add(record.total_cents)

    def finalize(self) -> List[SalesReportRecord]:
        return [self._buckets[key].finalize() for key in sorted(self._buckets)]

    def process(self) -> List[SalesReportRecord]:
        """
        Run the single streamed pass and write the report.

        Raises `NotFoundFailure` when the input is missing (no report is
        written) and `IOFailure` when either store cannot be read or written.
        Malformed rows are logged and skipped.
        """
        if not self.input_path.is_file():
            raise NotFoundFailure(str(self.input_path))

        log.info(
            f"Processing sales data from {self.input_path} -> {self.output_path}",
            extra={"input": str(self.input_path), "output": str(self.output_path)},
        )
        self._buckets = {}
        self._report = []
        self.records_skipped = 0
        folded = 0
        start = time.perf_counter()

        for line, raw in iter_sales_rows(self.input_path):
            try:
                record = decode_sales_row(raw, line=line)
            except MalformedRecordFailure as exc:
                self.records_skipped += 1
                log.warning(f"Skipping malformed record at {exc.detail}", extra={"line": line})
                continue

            self.fold(record)
            folded += 1
            if self._progress and folded % self.progress_interval == 0:
                self._progress(folded, time.perf_counter() - start)

        if self._progress and (folded == 0 or folded % self.progress_interval):
            self._progress(folded, time.perf_counter() - start)

        report = self.finalize()
        write_report(self.output_path, report)
        self._report = report

        log.info(
            f"Report written with {len(report)} monthly summaries",
            extra={"rows": folded, "skipped": self.records_skipped, "buckets": len(report)},
        )
        return report

    def get_stats(self) -> ProcessorStats:
        if not self._buckets:
            return ProcessorStats(
                total_buckets=0,
                year_range="",
                total_records_processed=0,
                records_skipped=self.records_skipped,
            )

        years = [year for year, _ in self._buckets]
        min_year, max_year = min(years), max(years)
        return ProcessorStats(
            total_buckets=len(self._buckets),
            year_range=f"{min_year}" if min_year == max_year else f"{min_year}-{max_year}",
            total_records_processed=sum(b.number_of_orders for b in self._buckets.values()),
            records_skipped=self.records_skipped,
        )

    def sample_results(self, limit: int = 5) -> List[SalesReportRecord]:
        return self._report[:limit]

    def execute(self) -> PipelineResult:
        start = time.perf_counter()
        self.process()
        duration = time.perf_counter() - start
        stats = self.get_stats()
        rows = stats["total_records_processed"]
        return PipelineResult(
            rows=rows,
            duration_seconds=duration,
            throughput_rows_per_sec=rows / duration if duration > 0 else 0.0,
            output_path=str(self.output_path),
            notes=f"{stats['total_buckets']} monthly summaries, {stats['records_skipped']} skipped",
            extra={
                "summary": dict(stats),
                "sample": [record.model_dump() for record in self.sample_results()],
            },
        )


__all__ = ["MonthlyBucketStats", "ProcessorStats", "SalesProcessor"]
