"""
Pytest configuration for the BigFiles CSV Processor.

Provides fixtures for:
- Settings isolation (the cached Settings instance is reset per test)
- Small hand-written sales stores
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Generator, Iterable, List, Sequence

import pytest

from bigfiles.config import Settings, get_settings
from bigfiles.domain.models import SALES_HEADER


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """
    Drop the cached Settings so env overrides from one test never leak into another.
    """
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_settings() -> Settings:
    """
    Settings fixture with small, fast defaults.
    """
    return Settings(
        total_records=1_000,
        batch_size=100,
        progress_interval=250,
        seed=42,
        log_level="DEBUG",
    )


@pytest.fixture
def sales_row() -> Callable[..., List[str]]:
    """
    Build one sales store row; only the fields a test cares about need passing.
    """

    def _row(
        id: int = 1,
        total: str = "1000.00",
        date: str = "2021-03-15T10:30:00+00:00",
        order_id: int = 123456,
        customer_id: int = 42,
    ) -> List[str]:
        return [str(id), str(order_id), str(customer_id), total, date]

    return _row


@pytest.fixture
def write_sales_store(tmp_path: Path) -> Callable[[Iterable[Sequence[str]]], Path]:
    """
    Write raw rows (already split into fields) under the standard header.
    """

    def _write(rows: Iterable[Sequence[str]], name: str = "sales.csv") -> Path:
        path = tmp_path / name
        lines = [",".join(SALES_HEADER)] + [",".join(row) for row in rows]
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write
