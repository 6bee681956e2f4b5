"""
Progress observers for the streaming pipelines.

Pipelines only call an observer with `(processed_count, elapsed_seconds)`;
turning that into log lines is kept here, away from the core loops.
"""

from __future__ import annotations

from typing import Callable, Optional

from bigfiles.utils.logging import get_logger

ProgressObserver = Callable[[int, float], None]

log = get_logger(__name__)


def logging_observer(label: str, total: Optional[int] = None) -> ProgressObserver:
    """
    Build an observer that logs throughput, and a percentage when `total` is known.
    """

    def _observe(processed: int, elapsed: float) -> None:
        rate = processed / elapsed if elapsed > 0 else 0.0
        if total:
            percent = processed / total * 100
            log.info(
                f"[{label}] {percent:.1f}% ({processed:,}/{total:,}) - {rate:,.0f} records/sec",
                extra={"pipeline": label, "processed": processed, "total": total},
            )
        else:
            log.info(
                f"[{label}] {processed:,} records - {rate:,.0f} records/sec",
                extra={"pipeline": label, "processed": processed},
            )

    return _observe


__all__ = ["ProgressObserver", "logging_observer"]
