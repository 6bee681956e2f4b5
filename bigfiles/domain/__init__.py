"""
Domain package for the BigFiles CSV Processor.

Exports the record schemas shared by the generator, the aggregator and the
CSV store layer.
"""

from bigfiles.domain.models import (
    MONTH_NAMES,
    REPORT_HEADER,
    SALES_HEADER,
    SalesRecord,
    SalesReportRecord,
    month_name,
)

__all__ = [
    "MONTH_NAMES",
    "REPORT_HEADER",
    "SALES_HEADER",
    "SalesRecord",
    "SalesReportRecord",
    "month_name",
]
