"""
Single-loan amortization for Paydown.

Purpose
-------
Closed-form periodic payment (PMT) and the period-by-period expansion of a
fixed payment into a full schedule for one obligation. The multi-loan
simulator in `simulator.py` applies the same interest/payment step to many
obligations at once.

Mathematical Model
------------------
With periodic rate r = annual_rate_percent / 100 / 12 and n periods:

    PMT = P · r(1+r)^n / ((1+r)^n − 1)        (r > 0)
    PMT = P / n                               (r = 0)

Each schedule period:

    interest_t  = B_{t-1} · r
    principal_t = min(PMT − interest_t, B_{t-1})
    B_t         = B_{t-1} − principal_t

Example
-------
>>> from paydown.amortization import compute_periodic_payment, generate_schedule
>>> compute_periodic_payment(200_000, 6.0, 360)
1199.1010503...
>>> sched = generate_schedule(10_000, 5.0, 36)
>>> sched.rows[-1].balance
0.0
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple

import pandas as pd

from .constants import BALANCE_EPSILON
from .utils import first_of_month, month_labels, periodic_rate

__all__ = [
    "compute_periodic_payment",
    "generate_schedule",
    "AmortizationRow",
    "AmortizationSchedule",
]


def compute_periodic_payment(
    principal: float,
    annual_rate_percent: float,
    term_periods: int,
) -> float:
    """
    Periodic payment that amortizes *principal* over *term_periods* months.

    Parameters
    ----------
    principal : float
        Amount borrowed.
    annual_rate_percent : float
        Nominal annual rate in percent (6.5 for 6.5%).
    term_periods : int
        Number of monthly payments. ``term_periods <= 0`` means the full
        principal is due immediately and is returned unchanged.

    Returns
    -------
    float
        Unrounded payment amount. Inputs are not validated.
    """
    if term_periods <= 0:
        return principal
    r = periodic_rate(annual_rate_percent)
    if r == 0:
        return principal / term_periods
    factor = (1 + r) ** term_periods
    return principal * (r * factor / (factor - 1))


@dataclass(frozen=True)
class AmortizationRow:
    """One period of a single-loan schedule (period is 1-based)."""
    period: int
    label: str
    payment: float
    principal: float
    interest: float
    balance: float
    cumulative_interest: float
    cumulative_principal: float


@dataclass(frozen=True)
class AmortizationSchedule:
    """
    Full schedule for one obligation paying a fixed amount each period.

    Attributes
    ----------
    rows : tuple of AmortizationRow
        Period-by-period breakdown, ascending.
    payment : float
        Scheduled payment per period.
    start_label : str
        Label of the first scheduled month.
    """
    rows: Tuple[AmortizationRow, ...]
    payment: float
    start_label: str

    @property
    def total_interest(self) -> float:
        return self.rows[-1].cumulative_interest if self.rows else 0.0

    @property
    def total_principal(self) -> float:
        return self.rows[-1].cumulative_principal if self.rows else 0.0

    @property
    def total_payments(self) -> float:
        return self.total_interest + self.total_principal

    @property
    def payoff_label(self) -> str:
        """Label of the final row; the start label when nothing was scheduled."""
        return self.rows[-1].label if self.rows else self.start_label

    @property
    def periods(self) -> int:
        return len(self.rows)

    def to_frame(self) -> pd.DataFrame:
        """Return the schedule as a DataFrame indexed by period."""
        columns = [
            "label", "payment", "principal", "interest", "balance",
            "cumulative_interest", "cumulative_principal",
        ]
        if not self.rows:
            return pd.DataFrame(columns=columns, index=pd.Index([], name="period"))
        df = pd.DataFrame(
            [
                {
                    "period": row.period,
                    "label": row.label,
                    "payment": row.payment,
                    "principal": row.principal,
                    "interest": row.interest,
                    "balance": row.balance,
                    "cumulative_interest": row.cumulative_interest,
                    "cumulative_principal": row.cumulative_principal,
                }
                for row in self.rows
            ]
        )
        return df.set_index("period")


def generate_schedule(
    principal: float,
    annual_rate_percent: float,
    term_periods: int,
    *,
    payment: Optional[float] = None,
    start: Optional[date] = None,
) -> AmortizationSchedule:
    """
    Expand a fixed periodic payment into a full amortization schedule.

    Parameters
    ----------
    principal : float
        Opening balance.
    annual_rate_percent : float
        Nominal annual rate in percent.
    term_periods : int
        Maximum number of periods to schedule.
    payment : float, optional
        Amount paid each period. Defaults to the PMT for the given terms.
        A payment larger than the PMT retires the loan early; one smaller
        than the PMT leaves a balance after ``term_periods``.
    start : date, optional
        Month of the first payment. Defaults to the current month.

    Returns
    -------
    AmortizationSchedule
        Rows stop early once the balance reaches zero.
    """
    first = first_of_month(start)
    if payment is None:
        payment = compute_periodic_payment(principal, annual_rate_percent, term_periods)
    r = periodic_rate(annual_rate_percent)
    labels = month_labels(first, max(term_periods, 1))

    rows = []
    balance = principal
    cumulative_interest = 0.0
    cumulative_principal = 0.0

    for period in range(1, term_periods + 1):
        if balance <= BALANCE_EPSILON:
            break
        interest = balance * r
        principal_part = min(payment - interest, balance)
        balance -= principal_part
        cumulative_interest += interest
        cumulative_principal += principal_part
        rows.append(
            AmortizationRow(
                period=period,
                label=labels[period - 1],
                payment=principal_part + interest,
                principal=principal_part,
                interest=interest,
                balance=max(0.0, balance),
                cumulative_interest=cumulative_interest,
                cumulative_principal=cumulative_principal,
            )
        )

    return AmortizationSchedule(
        rows=tuple(rows),
        payment=payment,
        start_label=labels[0],
    )
