"""General utilities for Paydown

Contents
--------
- Rate conversions (annual percent → periodic)
- Money rounding
- Calendar helpers (first-of-month index, month labels)
- Formatting helpers (format_currency)
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

import pandas as pd

from .constants import MONEY_DECIMALS, MONTH_LABEL_FORMAT, MONTHS_PER_YEAR, PERCENT

__all__ = [
    # Rates
    "periodic_rate",
    # Money
    "round_money",
    # Calendar
    "first_of_month",
    "month_index",
    "month_labels",
    # Formatting
    "format_currency",
]

# ---------------------------------------------------------------------------
# Rate conversions
# ---------------------------------------------------------------------------

def periodic_rate(annual_rate_percent: float) -> float:
    """Convert a nominal annual rate in percent to a monthly decimal rate.

    Uses simple division (no compounding): 6.0 → 0.06 / 12 = 0.005.
    """
    return annual_rate_percent / PERCENT / MONTHS_PER_YEAR


# ---------------------------------------------------------------------------
# Money
# ---------------------------------------------------------------------------

def round_money(value: float) -> float:
    """Round a monetary amount to cents."""
    return round(float(value), MONEY_DECIMALS)


# ---------------------------------------------------------------------------
# Calendar helpers
# ---------------------------------------------------------------------------

def first_of_month(start: Optional[date] = None) -> date:
    """Return the first day of *start*'s month, or of the current month."""
    if start is None:
        start = date.today()
    return start.replace(day=1)


def month_index(start: Optional[date], months: int) -> pd.DatetimeIndex:
    """Construct a first-of-month DatetimeIndex for *months* periods.

    If *start* is None, uses the current month as the first period.
    """
    if months <= 0:
        return pd.DatetimeIndex([], dtype="datetime64[ns]")
    first = first_of_month(start)
    return pd.date_range(start=pd.Timestamp(first), periods=months, freq="MS")


def month_labels(start: Optional[date], months: int) -> List[str]:
    """Labels ("YYYY-MM") for *months* consecutive months starting at *start*."""
    return list(month_index(start, months).strftime(MONTH_LABEL_FORMAT))


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

def format_currency(value: float, decimals: int = 2, symbol: str = "$") -> str:
    """
    Format a monetary amount for tables and messages.

    Examples
    --------
    >>> format_currency(1234.5)
    '$1,234.50'
    >>> format_currency(-20, decimals=0)
    '-$20'
    """
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.{decimals}f}"
