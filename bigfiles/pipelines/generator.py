"""
Sales data generator.

Synthesizes `SalesRecord`s and appends them to the sales store one batch at a
time. Each batch is flushed before the next is built, so memory stays bounded
by `batch_size` regardless of `total_records`.
"""

from __future__ import annotations

import calendar
import random
import time
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import List, Optional

from bigfiles.config import get_settings
from bigfiles.domain.models import SalesRecord
from bigfiles.infrastructure.csv_store import open_sales_writer
from bigfiles.pipelines.abstract import AbstractPipeline, PipelineResult
from bigfiles.utils.logging import get_logger
from bigfiles.utils.progress import ProgressObserver

log = get_logger(__name__)

ORDER_ID_RANGE = (100_000, 999_999)
CUSTOMER_ID_RANGE = (1, 50_000)
TOTAL_RANGE = (Decimal("500.00"), Decimal("1800.00"))
YEAR_RANGE = (2020, 2025)

_CENTS = Decimal("0.01")


class SalesDataGenerator(AbstractPipeline):
    """
    Write `total_records` synthetic sales rows to `output_path`.

    Ids run from 1 to `total_records` in emission order. Pass `seed` for a
    reproducible store.
    """

    name: str = "generate"
    description: str = "Synthesize sales records into the sales store in flushed batches."

    def __init__(
        self,
        output_path: Path | str | None = None,
        total_records: int | None = None,
        batch_size: int | None = None,
        seed: Optional[int] = None,
        progress: Optional[ProgressObserver] = None,
    ) -> None:
        settings = get_settings()
        self.output_path = Path(output_path or settings.sales_path)
        self.total_records = settings.total_records if total_records is None else total_records
        self.batch_size = settings.batch_size if batch_size is None else batch_size
        if self.total_records <= 0:
            raise ValueError(f"total_records must be positive, got {self.total_records}")
        if self.batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {self.batch_size}")
        self.seed = seed if seed is not None else settings.seed
        self._rng = random.Random(self.seed)
        self._progress = progress

    def random_int(self, low: int, high: int) -> int:
        """Uniform integer in [low, high] inclusive."""
        return self._rng.randint(low, high)

    def random_amount(self, low: Decimal, high: Decimal) -> Decimal:
        """Uniform amount in [low, high], rounded half away from zero to cents."""
        value = self._rng.uniform(float(low), float(high))
        amount = Decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP)
        return min(max(amount, low), high)

    def random_date(self) -> datetime:
        """Uniform calendar date and time of day within YEAR_RANGE, in UTC."""
        year = self.random_int(*YEAR_RANGE)
        month = self.random_int(1, 12)
        day = self.random_int(1, calendar.monthrange(year, month)[1])
        return datetime(
            year,
            month,
            day,
            self.random_int(0, 23),
            self.random_int(0, 59),
            self.random_int(0, 59),
            tzinfo=timezone.utc,
        )

    def generate_batch(self, start_id: int, count: int) -> List[SalesRecord]:
        return [
            SalesRecord(
                id=start_id + offset,
                order_id=self.random_int(*ORDER_ID_RANGE),
                customer_id=self.random_int(*CUSTOMER_ID_RANGE),
                total=self.random_amount(*TOTAL_RANGE),
                date=self.random_date(),
            )
            for offset in range(count)
        ]

    def generate(self) -> int:
        """
        Create (or overwrite) the sales store and fill it.

        Returns the number of data rows written. Raises `IOFailure` if any write
        fails; the file left behind is then incomplete.
        """
        log.info(
            f"Generating {self.total_records:,} records -> {self.output_path} "
            f"(batch={self.batch_size:,})",
            extra={"rows": self.total_records, "batch_size": self.batch_size, "seed": self.seed},
        )
        report_every = self.batch_size * 10
        processed = 0
        start = time.perf_counter()

        with open_sales_writer(self.output_path) as writer:
            writer.write_header()
            while processed < self.total_records:
                current_batch_size = min(self.batch_size, self.total_records - processed)
                batch = self.generate_batch(processed + 1, current_batch_size)
                writer.write_batch(batch)
                processed += current_batch_size

                if self._progress and (
                    processed % report_every == 0 or processed == self.total_records
                ):
                    self._progress(processed, time.perf_counter() - start)

        log.info(
            f"Generation completed: {processed:,} records",
            extra={"rows": processed, "duration": time.perf_counter() - start},
        )
        return processed

    def execute(self) -> PipelineResult:
        start = time.perf_counter()
        rows = self.generate()
        duration = time.perf_counter() - start
        return PipelineResult(
            rows=rows,
            duration_seconds=duration,
            throughput_rows_per_sec=rows / duration if duration > 0 else 0.0,
            output_path=str(self.output_path),
            notes=f"batch_size={self.batch_size}, seed={self.seed}",
        )


__all__ = ["SalesDataGenerator"]
