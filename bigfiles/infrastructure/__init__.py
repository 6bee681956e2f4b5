"""
Infrastructure package for the BigFiles CSV Processor.

Centralizes file store concerns (streamed reads, batched appends, report
output). Keep this layer focused on I/O, decoupled from pipeline logic.
"""

from bigfiles.infrastructure.csv_store import (
    SalesStoreWriter,
    decode_sales_row,
    iter_sales_rows,
    open_sales_writer,
    write_report,
)

__all__ = [
    "SalesStoreWriter",
    "decode_sales_row",
    "iter_sales_rows",
    "open_sales_writer",
    "write_report",
]
