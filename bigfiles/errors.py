"""Failure taxonomy shared by the generator and aggregator pipelines."""

from __future__ import annotations

from typing import Optional


class PipelineError(Exception):
    """Base class for pipeline failures."""

    def __init__(self, detail: str = "Pipeline failed"):
        super().__init__(detail)
        self.detail = detail


class IOFailure(PipelineError):
    """A store could not be read or written; the whole operation is aborted."""

    def __init__(self, detail: str = "Store is unreadable or unwritable"):
        super().__init__(detail)


class NotFoundFailure(PipelineError):
    """The input store is absent before processing starts."""

    def __init__(self, path: str):
        super().__init__(f"Input file not found: {path}")
        self.path = path


class MalformedRecordFailure(PipelineError):
    """A single row could not be decoded. Recovered locally by skipping the row."""

    def __init__(self, detail: str = "Malformed record", line: Optional[int] = None):
        if line is not None:
            detail = f"line {line}: {detail}"
        super().__init__(detail)
        self.line = line


__all__ = [
    "PipelineError",
    "IOFailure",
    "NotFoundFailure",
    "MalformedRecordFailure",
]
