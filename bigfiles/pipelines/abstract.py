"""
Pipeline interfaces and result contracts for the BigFiles CSV Processor.

Concrete pipelines (the sales generator and the monthly aggregator) implement
the Pipeline protocol and return a PipelineResult TypedDict so the orchestrator
and reporter can treat them uniformly.
"""

from __future__ import annotations

import abc
from typing import Any, Dict, Optional, Protocol, TypedDict, runtime_checkable


class PipelineResult(TypedDict, total=False):
    """
    Metrics contract returned by pipelines.

    Fields are optional; the orchestrator fills timing and resource figures
    from its profiler when a pipeline leaves them out.
    """

    rows: int
    duration_seconds: float
    throughput_rows_per_sec: float
    peak_rss_bytes: Optional[int]
    cpu_percent: Optional[float]
    output_path: str
    notes: Optional[str]
    extra: Dict[str, Any]


@runtime_checkable
class Pipeline(Protocol):
    """
    Common interface for both pipelines.

    Attributes
    ----------
    name : str
        A short machine-friendly identifier, also used as the CLI command.
    description : str
        A human-friendly summary.
    """

    name: str
    description: str

    def execute(self) -> PipelineResult:
        """
        Run the pipeline to completion and return metrics.

        Raises
        ------
        PipelineError
            On any fatal failure. Outputs left on disk must not be trusted.
        """
        ...


class AbstractPipeline(abc.ABC):
    """
    ABC helper for class-based implementations.

    Subclasses set `name` and `description` and implement `execute`.
    """

    name: str
    description: str

    @abc.abstractmethod
    def execute(self) -> PipelineResult:  # pragma: no cover - interface only
        """Run the pipeline and return metrics."""
        raise NotImplementedError


__all__ = [
    "PipelineResult",
    "Pipeline",
    "AbstractPipeline",
]
