"""
Pipelines package for the BigFiles CSV Processor.

Re-exports the pipeline interfaces and the two concrete pipelines so
downstream code can import from `bigfiles.pipelines` directly.
"""

from bigfiles.pipelines.abstract import (
    AbstractPipeline,
    Pipeline,
    PipelineResult,
)
from bigfiles.pipelines.aggregator import MonthlyBucketStats, ProcessorStats, SalesProcessor
from bigfiles.pipelines.generator import SalesDataGenerator

__all__ = [
    # Abstracts
    "AbstractPipeline",
    "Pipeline",
    "PipelineResult",
    # Concrete pipelines
    "MonthlyBucketStats",
    "ProcessorStats",
    "SalesDataGenerator",
    "SalesProcessor",
]
