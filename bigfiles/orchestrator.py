"""
Orchestrator for running the pipelines under the profiler.

Usage (example from CLI):
    from bigfiles.orchestrator import RunConfig, run_pipelines

    results = run_pipelines("all", RunConfig(total_records=10_000))
    print(results)

`all` runs the generator and then the aggregator on the same sales store; the
aggregator only starts once generation has finished.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional

from bigfiles.config import Settings, get_settings
from bigfiles.pipelines.abstract import Pipeline, PipelineResult
from bigfiles.pipelines.aggregator import SalesProcessor
from bigfiles.pipelines.generator import SalesDataGenerator
from bigfiles.utils.logging import get_logger
from bigfiles.utils.profiler import ProfileStats, profile_block
from bigfiles.utils.progress import logging_observer

log = get_logger(__name__)

ALL_PIPELINES = "all"


@dataclass
class RunConfig:
    """Per-run overrides; unset fields fall back to Settings."""

    sales_path: Optional[str] = None
    report_path: Optional[str] = None
    total_records: Optional[int] = None
    batch_size: Optional[int] = None
    seed: Optional[int] = None
    progress_interval: Optional[int] = None
    report_progress: bool = True

    def resolved(self, settings: Settings) -> "RunConfig":
        return RunConfig(
            sales_path=self.sales_path or settings.sales_path,
            report_path=self.report_path or settings.report_path,
            total_records=self.total_records or settings.total_records,
            batch_size=self.batch_size or settings.batch_size,
            seed=self.seed if self.seed is not None else settings.seed,
            progress_interval=self.progress_interval or settings.progress_interval,
            report_progress=self.report_progress,
        )


def _round_float(value: float, decimals: int = 2) -> float:
    """Round a float to specified decimal places for human-readable output."""
    return round(value, decimals)


def _pipeline_factories(config: RunConfig) -> Dict[str, Callable[[], Pipeline]]:
    """Registry of available pipelines, in execution order."""
    return {
        "generate": lambda: SalesDataGenerator(
            output_path=config.sales_path,
            total_records=config.total_records,
            batch_size=config.batch_size,
            seed=config.seed,
            progress=(
                logging_observer("generate", total=config.total_records)
                if config.report_progress
                else None
            ),
        ),
        "process": lambda: SalesProcessor(
            input_path=config.sales_path,
            output_path=config.report_path,
            progress_interval=config.progress_interval,
            progress=logging_observer("process") if config.report_progress else None,
        ),
    }


def available_pipelines() -> List[str]:
    """List available pipeline names, in execution order."""
    return list(_pipeline_factories(RunConfig()).keys())


def _resolve_names(command: str) -> List[str]:
    names = available_pipelines()
    if command == ALL_PIPELINES:
        return names
    if command not in names:
        raise ValueError(
            f"Unknown pipeline '{command}'. Available: {', '.join(names + [ALL_PIPELINES])}"
        )
    return [command]


def _profiled_execute(pipeline: Pipeline) -> dict:
    log.info(f"[PIPELINE START] {pipeline.name}", extra={"pipeline": pipeline.name})
    with profile_block(pipeline.name) as stats:
        try:
            result = pipeline.execute()
        except Exception:
            log.exception(f"[PIPELINE FAILED] {pipeline.name}", extra={"pipeline": pipeline.name})
            raise
    log.info(
        f"[PIPELINE SUCCESS] {pipeline.name}",
        extra={"pipeline": pipeline.name, "rows": result.get("rows")},
    )
    return _merge_result(result, stats)


def _merge_result(result: PipelineResult, stats: ProfileStats) -> dict:
    """Merge a pipeline result with profiler stats, rounding floats for readability."""
    merged = dict(result)
    merged.setdefault("rows", 0)
    # Profiler timing covers the whole execute call, so it wins over the pipeline's own
    merged["duration_seconds"] = _round_float(stats.duration_seconds)
    merged["throughput_rows_per_sec"] = (
        _round_float(merged["rows"] / stats.duration_seconds) if stats.duration_seconds else 0.0
    )
    if merged.get("peak_rss_bytes") is None:
        merged["peak_rss_bytes"] = stats.peak_rss_bytes
    if merged.get("cpu_percent") is None:
        merged["cpu_percent"] = (
            _round_float(stats.cpu_percent, 1) if stats.cpu_percent is not None else None
        )
    output_path = merged.get("output_path")
    if output_path and Path(output_path).is_file():
        merged["output_size_bytes"] = Path(output_path).stat().st_size
    return merged


def run_pipelines(command: str = ALL_PIPELINES, config: Optional[RunConfig] = None) -> List[dict]:
    """
    Run one pipeline, or both in order for `all`.

    Parameters
    ----------
    command : str
        `generate`, `process` or `all`.
    config : RunConfig | None
        Per-run overrides of Settings.

    Returns
    -------
    List[dict]
        One merged result per executed pipeline.

    Raises
    ------
    PipelineError
        Propagated from the first failing pipeline; later pipelines do not run.
    """
    effective = (config or RunConfig()).resolved(get_settings())
    names = _resolve_names(command)
    factories = _pipeline_factories(effective)

    results: List[dict] = []
    for index, name in enumerate(names, start=1):
        log.info(f"{'=' * 60}")
        log.info(f"[PIPELINE {index}/{len(names)}] {name.upper()}", extra={"pipeline": name})
        log.info(f"{'=' * 60}")
        result = _profiled_execute(factories[name]())
        result["pipeline"] = name
        results.append(result)

    log.info(
        f"[ORCHESTRATOR COMPLETE] {len(names)} pipeline(s) executed successfully",
        extra={"pipelines": names},
    )
    return results


__all__ = [
    "ALL_PIPELINES",
    "RunConfig",
    "available_pipelines",
    "run_pipelines",
]
