from __future__ import annotations

import csv
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

import pytest

from bigfiles.domain.models import SALES_HEADER
from bigfiles.errors import IOFailure
from bigfiles.pipelines.generator import SalesDataGenerator

TOTAL_RECORDS = 1_000
BATCH_SIZE = 100
SEED = 123


def _read(path: Path) -> list[list[str]]:
    with path.open("r", newline="", encoding="utf-8") as f:
        return list(csv.reader(f))


@pytest.fixture
def generated(tmp_path: Path) -> Path:
    path = tmp_path / "sales.csv"
    SalesDataGenerator(path, total_records=TOTAL_RECORDS, batch_size=BATCH_SIZE, seed=SEED).generate()
    return path


def test_generate_writes_header_and_every_row(generated: Path):
    rows = _read(generated)
    assert rows[0] == SALES_HEADER
    assert len(rows) == TOTAL_RECORDS + 1
    assert [int(row[0]) for row in rows[1:]] == list(range(1, TOTAL_RECORDS + 1))


def test_generated_fields_respect_ranges(generated: Path):
    for row in _read(generated)[1:]:
        _, order_id, customer_id, total, date = row
        assert 100_000 <= int(order_id) <= 999_999
        assert 1 <= int(customer_id) <= 50_000
        assert Decimal("500.00") <= Decimal(total) <= Decimal("1800.00")
        assert len(total.split(".")[1]) == 2
        parsed = datetime.fromisoformat(date)
        assert parsed.utcoffset().total_seconds() == 0
        assert 2020 <= parsed.year <= 2025


def test_generate_uses_unix_line_endings(generated: Path):
    assert b"\r\n" not in generated.read_bytes()


def test_last_batch_may_be_partial(tmp_path: Path):
    path = tmp_path / "sales.csv"
    written = SalesDataGenerator(path, total_records=250, batch_size=100, seed=SEED).generate()
    assert written == 250
    assert len(_read(path)) == 251


def test_batch_larger_than_total(tmp_path: Path):
    path = tmp_path / "sales.csv"
    SalesDataGenerator(path, total_records=3, batch_size=10_000, seed=SEED).generate()
    assert [row[0] for row in _read(path)[1:]] == ["1", "2", "3"]


def test_same_seed_produces_same_store(tmp_path: Path):
    first = tmp_path / "a.csv"
    second = tmp_path / "b.csv"
    SalesDataGenerator(first, total_records=50, batch_size=7, seed=SEED).generate()
    SalesDataGenerator(second, total_records=50, batch_size=7, seed=SEED).generate()
    assert first.read_bytes() == second.read_bytes()


def test_generate_overwrites_existing_store(tmp_path: Path):
    path = tmp_path / "sales.csv"
    path.write_text("stale content\n" * 100, encoding="utf-8")
    SalesDataGenerator(path, total_records=5, batch_size=2, seed=SEED).generate()
    rows = _read(path)
    assert rows[0] == SALES_HEADER
    assert len(rows) == 6


def test_generate_creates_parent_directories(tmp_path: Path):
    path = tmp_path / "nested" / "deeper" / "sales.csv"
    SalesDataGenerator(path, total_records=5, batch_size=5, seed=SEED).generate()
    assert path.is_file()


def test_unwritable_target_raises_io_failure(tmp_path: Path):
    target = tmp_path / "is_a_directory"
    target.mkdir()
    with pytest.raises(IOFailure):
        SalesDataGenerator(target, total_records=5, batch_size=5, seed=SEED).generate()


@pytest.mark.parametrize("total_records, batch_size", [(0, 10), (-1, 10), (10, 0)])
def test_rejects_non_positive_sizes(tmp_path: Path, total_records: int, batch_size: int):
    with pytest.raises(ValueError):
        SalesDataGenerator(tmp_path / "s.csv", total_records=total_records, batch_size=batch_size)


def test_progress_observer_called_every_ten_batches_and_at_end(tmp_path: Path):
    calls: list[int] = []
    SalesDataGenerator(
        tmp_path / "sales.csv",
        total_records=2_050,
        batch_size=100,
        seed=SEED,
        progress=lambda processed, elapsed: calls.append(processed),
    ).generate()
    assert calls == [1_000, 2_000, 2_050]


def test_random_date_has_valid_days_for_leap_years():
    generator = SalesDataGenerator("unused.csv", total_records=1, batch_size=1, seed=SEED)
    dates = [generator.random_date() for _ in range(20_000)]
    assert all(d.tzinfo == timezone.utc for d in dates)
    feb_29 = [d for d in dates if d.month == 2 and d.day == 29]
    assert feb_29
    assert {d.year for d in feb_29} <= {2020, 2024}


def test_random_amount_is_rounded_to_cents():
    generator = SalesDataGenerator("unused.csv", total_records=1, batch_size=1, seed=SEED)
    for _ in range(1_000):
        amount = generator.random_amount(Decimal("500.00"), Decimal("1800.00"))
        assert amount == amount.quantize(Decimal("0.01"))
        assert Decimal("500.00") <= amount <= Decimal("1800.00")


def test_execute_reports_rows_and_output(tmp_path: Path):
    path = tmp_path / "sales.csv"
    result = SalesDataGenerator(path, total_records=20, batch_size=5, seed=SEED).execute()
    assert result["rows"] == 20
    assert result["output_path"] == str(path)
    assert result["duration_seconds"] >= 0
