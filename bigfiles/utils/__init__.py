"""
Utilities package for the BigFiles CSV Processor.

Exports shared helpers for logging, progress reporting and profiling.
Keep this package lightweight and free of domain-specific logic.
"""

from bigfiles.utils.logging import configure_logging, get_logger
from bigfiles.utils.profiler import ProfileStats, profile_block
from bigfiles.utils.progress import ProgressObserver, logging_observer

__all__ = [
    "configure_logging",
    "get_logger",
    "ProfileStats",
    "profile_block",
    "ProgressObserver",
    "logging_observer",
]
