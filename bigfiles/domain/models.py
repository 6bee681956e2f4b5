"""
Domain models for the BigFiles CSV Processor.

`SalesRecord` is one row of the sales store; `SalesReportRecord` is one row of
the monthly report. Both are frozen once built.
"""
from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import List

from pydantic import BaseModel, Field, field_validator

SALES_HEADER: List[str] = ["id", "order_id", "customer_id", "total", "date"]
REPORT_HEADER: List[str] = [
    "year",
    "month",
    "month_name",
    "number_of_orders",
    "max_amount",
    "min_amount",
    "sales_average",
    "standard_deviation",
]

# Fixed English names; calendar.month_name follows the process locale.
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def month_name(month: int) -> str:
    """Map a 1-indexed month number to its English name."""
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be in 1..12, got {month}")
    return MONTH_NAMES[month - 1]


def _to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class SalesRecord(BaseModel):
    """
    A single synthesized sales transaction.
    """

    id: int = Field(..., description="Sequential identifier, 1..N in emission order.")
    order_id: int = Field(..., description="Order number, not unique.")
    customer_id: int = Field(..., description="Customer number.")
    total: Decimal = Field(..., decimal_places=2, description="Order total, two decimals.")
    date: datetime = Field(..., description="Order timestamp.")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "arbitrary_types_allowed": False,
    }

    @field_validator("date", mode="before")
    @classmethod
    def parse_iso_timestamp(cls, value: object) -> datetime:
        """Accept datetimes and ISO 8601 text only; bare numbers are not epoch seconds here."""
        if isinstance(value, datetime):
            return value
        if not isinstance(value, str) or value.strip().lstrip("+-").isdigit():
            raise ValueError("expected an ISO 8601 timestamp")
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError as exc:
            raise ValueError(f"expected an ISO 8601 timestamp: {exc}") from exc

    @property
    def bucket_key(self) -> tuple[int, int]:
        """(year, month) of the order, on the UTC calendar."""
        utc = _to_utc(self.date)
        return utc.year, utc.month

    @property
    def total_cents(self) -> int:
        return int(self.total * 100)

    def to_row(self) -> List[str]:
        return [
            str(self.id),
            str(self.order_id),
            str(self.customer_id),
            f"{self.total:.2f}",
            _to_utc(self.date).isoformat(),
        ]


class SalesReportRecord(BaseModel):
    """
    Finalized statistics for one (year, month) bucket.
    """

    year: int
    month: int = Field(..., ge=1, le=12)
    month_name: str
    number_of_orders: int = Field(..., gt=0)
    max_amount: float
    min_amount: float
    sales_average: float
    standard_deviation: float = Field(..., ge=0.0)

    model_config = {"frozen": True}

    def to_row(self) -> List[str]:
        return [
            str(self.year),
            str(self.month),
            self.month_name,
            str(self.number_of_orders),
            f"{self.max_amount:.2f}",
            f"{self.min_amount:.2f}",
            f"{self.sales_average:.2f}",
            f"{self.standard_deviation:.2f}",
        ]


__all__ = [
    "MONTH_NAMES",
    "REPORT_HEADER",
    "SALES_HEADER",
    "SalesRecord",
    "SalesReportRecord",
    "month_name",
]
