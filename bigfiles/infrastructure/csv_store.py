"""
Flat CSV stores used between the generator and the aggregator.

The sales store is written batch by batch and read back one row at a time so
neither side ever needs the whole file in memory. `OSError` raised by the file
layer is surfaced as `IOFailure`; a row that cannot be decoded raises
`MalformedRecordFailure` and leaves the reader positioned on the next row.
"""

from __future__ import annotations

import csv
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Generator, Iterable, Iterator, List, Optional, Tuple

from pydantic import ValidationError

from bigfiles.domain.models import (
    REPORT_HEADER,
    SALES_HEADER,
    SalesRecord,
    SalesReportRecord,
)
from bigfiles.errors import IOFailure, MalformedRecordFailure, NotFoundFailure

LINE_TERMINATOR = "\n"

# No field ever contains the delimiter, so quotes are plain characters
CSV_FORMAT = {"quoting": csv.QUOTE_NONE, "lineterminator": LINE_TERMINATOR}


def _ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


class SalesStoreWriter:
    """
    Append-only writer for the sales store.

    Each `write_batch` call is flushed before returning, so at most one batch
    is buffered between the caller and the file.
    """

    def __init__(self, handle) -> None:
        self._handle = handle
        self._writer = csv.writer(handle, **CSV_FORMAT)
        self.rows_written = 0

    def write_header(self) -> None:
        self._write([SALES_HEADER])

    def write_batch(self, records: Iterable[SalesRecord]) -> int:
        rows = [record.to_row() for record in records]
        self._write(rows)
        self.rows_written += len(rows)
        return len(rows)

    def _write(self, rows: List[List[str]]) -> None:
        try:
            self._writer.writerows(rows)
            self._handle.flush()
        except OSError as exc:
            raise IOFailure(f"Failed writing to {self._handle.name}: {exc}") from exc


@contextmanager
def open_sales_writer(path: Path | str) -> Generator[SalesStoreWriter, None, None]:
    """
    Create (or truncate) the sales store, creating parent directories as needed.
    """
    target = Path(path)
    try:
        _ensure_parent(target)
        handle = target.open("w", newline="", encoding="utf-8")
    except OSError as exc:
        raise IOFailure(f"Cannot open {target} for writing: {exc}") from exc

    try:
        with handle:
            yield SalesStoreWriter(handle)
    except OSError as exc:
        raise IOFailure(f"Failed writing {target}: {exc}") from exc


def decode_sales_row(raw: Dict[Optional[str], object], line: Optional[int] = None) -> SalesRecord:
    """
    Decode one `csv.DictReader` row into a `SalesRecord`.
    """
    if None in raw:
        raise MalformedRecordFailure("unexpected extra fields", line=line)
    missing = [name for name in SALES_HEADER if raw.get(name) in (None, "")]
    if missing:
        raise MalformedRecordFailure(f"missing fields: {', '.join(missing)}", line=line)
    try:
        return SalesRecord.model_validate({name: raw[name] for name in SALES_HEADER})
    except ValidationError as exc:
        fields = ", ".join(str(err["loc"][0]) for err in exc.errors() if err.get("loc"))
        raise MalformedRecordFailure(f"invalid fields: {fields}", line=line) from exc


def iter_sales_rows(
    path: Path | str,
) -> Iterator[Tuple[int, Dict[Optional[str], object]]]:
    """
    Yield `(line_number, raw_row)` pairs from the sales store without buffering it.

    Header names are stripped of surrounding whitespace and a leading BOM.
    Undecodable bytes become U+FFFD, so only the row holding them fails to
    decode. Raises `NotFoundFailure` when the store does not exist and
    `IOFailure` on read errors.
    """
    source = Path(path)
    if not source.is_file():
        raise NotFoundFailure(str(source))

    try:
        with source.open("r", newline="", encoding="utf-8-sig", errors="replace") as f:
            reader = csv.reader(f, **CSV_FORMAT)
            header = next(reader, None)
            if header is None:
                return
            fields = [name.strip() for name in header]
            width = len(fields)
            for row in reader:
                if not row:
                    continue
                raw: Dict[Optional[str], object] = dict(zip(fields, row))
                if len(row) > width:
                    raw[None] = row[width:]
                yield reader.line_num, raw
    except OSError as exc:
        raise IOFailure(f"Failed reading {source}: {exc}") from exc
    except csv.Error as exc:
        raise IOFailure(f"Unreadable store {source}: {exc}") from exc


def write_report(path: Path | str, records: Iterable[SalesReportRecord]) -> int:
    """
    Write the monthly report in one pass. Returns the number of data rows.
    """
    target = Path(path)
    rows = [record.to_row() for record in records]
    try:
        _ensure_parent(target)
        with target.open("w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f, **CSV_FORMAT)
            writer.writerow(REPORT_HEADER)
            writer.writerows(rows)
    except OSError as exc:
        raise IOFailure(f"Failed writing report {target}: {exc}") from exc
    return len(rows)


__all__ = [
    "SalesStoreWriter",
    "decode_sales_row",
    "iter_sales_rows",
    "open_sales_writer",
    "write_report",
]
