from time import sleep

import pytest

from bigfiles import config
from bigfiles.domain.models import MONTH_NAMES, month_name
from bigfiles.orchestrator import available_pipelines
from bigfiles.reporter import format_bytes
from bigfiles.utils import profiler

EXPECTED_ROWS = 1_000_000
EXPECTED_BATCH_SIZE = 10_000


def test_get_settings_defaults():
    settings = config.get_settings()
    assert settings.sales_path == "sales.csv"
    assert settings.report_path == "sales_report.csv"
    assert settings.total_records == EXPECTED_ROWS
    assert settings.batch_size == EXPECTED_BATCH_SIZE
    assert settings.progress_interval > 0
    assert settings.seed is None


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("TOTAL_RECORDS", "500")
    monkeypatch.setenv("GENERATOR_SEED", "7")
    settings = config.get_settings()
    assert settings.total_records == 500
    assert settings.seed == 7


def test_profile_block_measures_time():
    with profiler.profile_block("sleep") as stats:
        sleep(0.05)
    assert stats.duration_seconds >= 0.05
    assert stats.peak_rss_bytes is not None and stats.peak_rss_bytes > 0
    assert isinstance(stats.cpu_percent, float)


def test_available_pipelines_in_execution_order():
    assert available_pipelines() == ["generate", "process"]


def test_month_names_are_one_indexed_english():
    assert len(MONTH_NAMES) == 12
    assert month_name(1) == "January"
    assert month_name(3) == "March"
    assert month_name(12) == "December"
    with pytest.raises(ValueError):
        month_name(13)


@pytest.mark.parametrize(
    "size, expected",
    [(0, "0 Bytes"), (512, "512 Bytes"), (1536, "1.5 KB"), (5 * 1024**2, "5 MB")],
)
def test_format_bytes(size, expected):
    assert format_bytes(size) == expected
