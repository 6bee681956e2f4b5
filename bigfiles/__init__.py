"""
BigFiles CSV Processor - streaming sales data generation and monthly reporting.

The package provides two pipelines connected only through a CSV file:

- A generator that writes synthetic sales records in bounded-memory batches
- An aggregator that streams those records into per-month order statistics

Both run single-threaded with constant memory regardless of file size.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from bigfiles.config import Settings, get_settings
from bigfiles.domain.models import SalesRecord, SalesReportRecord
from bigfiles.errors import IOFailure, MalformedRecordFailure, NotFoundFailure, PipelineError
from bigfiles.orchestrator import RunConfig, available_pipelines, run_pipelines
from bigfiles.pipelines.abstract import AbstractPipeline, Pipeline, PipelineResult
from bigfiles.pipelines.aggregator import SalesProcessor
from bigfiles.pipelines.generator import SalesDataGenerator
from bigfiles.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "SalesRecord",
    "SalesReportRecord",
    # Errors
    "PipelineError",
    "IOFailure",
    "NotFoundFailure",
    "MalformedRecordFailure",
    # Orchestration
    "RunConfig",
    "available_pipelines",
    "run_pipelines",
    # Pipelines
    "Pipeline",
    "AbstractPipeline",
    "PipelineResult",
    "SalesDataGenerator",
    "SalesProcessor",
    # Logging
    "configure_logging",
    "get_logger",
]
