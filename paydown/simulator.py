"""
Multi-obligation payoff simulator for Paydown.

Purpose
-------
Simulates several obligations being paid down in parallel, month by
month, under one ordering strategy. Every active obligation accrues
interest and receives its contractual minimum; the remaining payment
capacity is then cascaded down the strategy's priority list. Capacity
freed by an obligation that retires mid-period flows to the next
obligation in the same period.

Per-period algorithm
--------------------
1. Interest: B_i += B_i · r_i for every active obligation i
2. Minimums: pay min(m_i, B_i); a retiring obligation returns its unused
   minimum to the period's pool
3. Cascade: walk the priority order, each active obligation takes
   min(pool, B_i); one retired here returns its full minimum m_i to the pool
4. Record retirements (priority order within a period)
5. Snapshot balances

Each period the pool starts again at the extra budget, so a freed minimum
only cascades within the period its obligation retires. Passing
``carry_freed_minimums=True`` also adds the minimums of obligations retired
in earlier periods.

The loop ends when every balance is <= BALANCE_EPSILON, or after
`max_periods` months (SAFETY_CEILING_PERIODS by default). A run stopped by
the ceiling has ``converged=False``; unretired obligations are reported
with ``retirement_period == max_periods`` and ``retired=False``.

Example
-------
>>> from paydown.obligations import Obligation
>>> from paydown.simulator import simulate_payoff
>>> loans = [
...     Obligation("a", "Card", "credit_card", 10_000, 20.0, 300),
...     Obligation("b", "Car", "auto", 5_000, 5.0, 150),
... ]
>>> outcome = simulate_payoff(loans, extra_payment=200, strategy="avalanche")
>>> outcome.retirement_order
('a', 'b')
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from functools import reduce
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from .constants import (
    BALANCE_EPSILON,
    DEFAULT_EXTRA_PAYMENT,
    SAFETY_CEILING_PERIODS,
)
from .obligations import Obligation
from .strategies import PayoffStrategy, order_obligations
from .utils import first_of_month, month_labels, periodic_rate, round_money

__all__ = [
    "SimulationState",
    "ObligationResult",
    "PayoffOutcome",
    "CascadeResult",
    "cascade_extra",
    "simulate_payoff",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SimulationState:
    """
    Balances at the end of one period.

    Attributes
    ----------
    period : int
        0-based period index; 0 is the starting position.
    label : str
        Calendar month of the period ("YYYY-MM").
    total_balance : float
        Sum of all obligation balances.
    balances : Mapping[str, float]
        Balance per obligation id.
    interest : float
        Interest charged across all obligations during the period.
    payment : float
        Amount paid across all obligations during the period.
    """
    period: int
    label: str
    total_balance: float
    balances: Mapping[str, float]
    interest: float = 0.0
    payment: float = 0.0


@dataclass(frozen=True)
class ObligationResult:
    """Per-obligation payoff summary."""
    retirement_period: int
    total_interest: float
    retired: bool = True


@dataclass(frozen=True)
class PayoffOutcome:
    """
    Result of one payoff simulation.

    Attributes
    ----------
    strategy : PayoffStrategy
        Ordering used.
    schedule : tuple of SimulationState
        Period 0 followed by one state per simulated month. Empty when
        there were no obligations.
    total_periods : int
        Months simulated.
    total_interest : float
        Interest across all obligations, rounded to cents.
    total_paid : float
        Principal plus interest paid, rounded to cents.
    retirement_order : tuple of str
        Obligation ids in the order they reached zero.
    per_obligation : Mapping[str, ObligationResult]
        Retirement period and interest per obligation id.
    converged : bool
        True when every obligation retired within ``max_periods``.
    max_periods : int
        Safety ceiling in effect for the run.
    obligation_ids : tuple of str
        Obligation ids in input order.
    """
    strategy: PayoffStrategy
    schedule: Tuple[SimulationState, ...]
    total_periods: int
    total_interest: float
    total_paid: float
    retirement_order: Tuple[str, ...]
    per_obligation: Mapping[str, ObligationResult]
    converged: bool
    max_periods: int = SAFETY_CEILING_PERIODS
    obligation_ids: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def unretired(self) -> Tuple[str, ...]:
        """Ids of obligations still owing when the run stopped."""
        return tuple(
            oid for oid in self.obligation_ids
            if not self.per_obligation[oid].retired
        )

    @property
    def payoff_label(self) -> Optional[str]:
        """Month of the final payment, or None if the run did not converge."""
        if not self.converged or not self.schedule:
            return None
        return self.schedule[-1].label

    def balance_matrix(self) -> np.ndarray:
        """Balances as an array of shape (periods + 1, n_obligations)."""
        if not self.schedule:
            return np.zeros((0, len(self.obligation_ids)))
        return np.array(
            [[s.balances[oid] for oid in self.obligation_ids] for s in self.schedule],
            dtype=float,
        )

    def to_frame(self) -> pd.DataFrame:
        """
        Schedule as a DataFrame indexed by period.

        Columns: ``label``, one balance column per obligation id,
        ``total``, ``interest``, ``payment``.
        """
        columns = ["label", *self.obligation_ids, "total", "interest", "payment"]
        if not self.schedule:
            return pd.DataFrame(columns=columns, index=pd.Index([], name="period"))
        rows = []
        for state in self.schedule:
            row = {"period": state.period, "label": state.label}
            row.update(state.balances)
            row["total"] = state.total_balance
            row["interest"] = state.interest
            row["payment"] = state.payment
            rows.append(row)
        return pd.DataFrame(rows, columns=["period", *columns]).set_index("period")


# ---------------------------------------------------------------------------
# Cascade
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CascadeResult:
    """Balances after the cascade, what each obligation received, and the leftover pool."""
    balances: Dict[str, float]
    payments: Dict[str, float]
    pool: float


def cascade_extra(
    priority: Sequence[str],
    balances: Mapping[str, float],
    minimums: Mapping[str, float],
    pool: float,
    *,
    epsilon: float = BALANCE_EPSILON,
) -> CascadeResult:
    """
    Apply an extra-payment pool down a priority list.

    Folds over *priority* carrying (balances, payments, pool). Each active
    obligation takes as much of the pool as its balance needs; an obligation
    retired by the cascade returns its full minimum to the pool for the
    obligations after it. Inputs are not modified.

    Parameters
    ----------
    priority : sequence of str
        Obligation ids, highest priority first.
    balances : Mapping[str, float]
        Balances after minimum payments.
    minimums : Mapping[str, float]
        Contractual minimum payment per id.
    pool : float
        Extra capacity available this period.
    epsilon : float
        Balances at or below this are treated as paid off.

    Returns
    -------
    CascadeResult
    """
    def step(carry, oid):
        bal_map, paid_map, remaining = carry
        balance = bal_map[oid]
        if balance <= epsilon or remaining <= 0:
            return carry
        payment = min(remaining, balance)
        if balance - payment <= epsilon:
            # sweep sub-epsilon residue into the payment
            payment = balance
        remaining -= payment
        new_balance = balance - payment
        if new_balance <= epsilon:
            new_balance = 0.0
            remaining += minimums[oid]
        return (
            {**bal_map, oid: new_balance},
            {**paid_map, oid: paid_map.get(oid, 0.0) + payment},
            remaining,
        )

    final_balances, payments, leftover = reduce(step, priority, (dict(balances), {}, pool))
    return CascadeResult(balances=final_balances, payments=payments, pool=leftover)


# ---------------------------------------------------------------------------
# Simulation
# ---------------------------------------------------------------------------

def _snapshot(
    period: int,
    label: str,
    balances: Mapping[str, float],
    ids: Sequence[str],
    interest: float = 0.0,
    payment: float = 0.0,
) -> SimulationState:
    current = {oid: balances[oid] for oid in ids}
    return SimulationState(
        period=period,
        label=label,
        total_balance=sum(max(b, 0.0) for b in current.values()),
        balances=current,
        interest=interest,
        payment=payment,
    )


def simulate_payoff(
    obligations: Iterable[Obligation],
    extra_payment: float = DEFAULT_EXTRA_PAYMENT,
    strategy: Union[str, PayoffStrategy] = PayoffStrategy.AVALANCHE,
    *,
    start: Optional[date] = None,
    max_periods: int = SAFETY_CEILING_PERIODS,
    carry_freed_minimums: bool = False,
) -> PayoffOutcome:
    """
    Simulate paying down *obligations* under one ordering strategy.

    Parameters
    ----------
    obligations : iterable of Obligation
        Point-in-time snapshot of the debts. Ids must be unique.
    extra_payment : float, default 0.0
        Monthly amount available on top of all minimums.
    strategy : {"avalanche", "snowball"} or PayoffStrategy
        Priority ordering for the extra payment.
    start : date, optional
        Month of period 0. Defaults to the current month.
    max_periods : int, default SAFETY_CEILING_PERIODS
        Safety ceiling on simulated months.
    carry_freed_minimums : bool, default False
        When False, the pool starts every period at ``extra_payment`` and
        freed minimums only cascade within the period of retirement. When
        True, minimums of obligations retired in earlier periods keep
        flowing into each later period's pool.

    Returns
    -------
    PayoffOutcome
        Totals are rounded to cents; schedule balances are unrounded.

    Notes
    -----
    Inputs are not validated. An obligation whose minimum never covers its
    interest does not raise: the run stops at ``max_periods`` with
    ``converged=False``.
    """
    strategy = PayoffStrategy.parse(strategy)
    obligations = list(obligations)

    if not obligations:
        return PayoffOutcome(
            strategy=strategy,
            schedule=(),
            total_periods=0,
            total_interest=0.0,
            total_paid=0.0,
            retirement_order=(),
            per_obligation={},
            converged=True,
            max_periods=max_periods,
            obligation_ids=(),
        )

    labels = month_labels(first_of_month(start), max_periods + 1)
    input_ids = [o.id for o in obligations]
    priority = [o.id for o in order_obligations(obligations, strategy)]

    balances: Dict[str, float] = {o.id: float(o.balance) for o in obligations}
    rates = {o.id: periodic_rate(o.annual_rate) for o in obligations}
    minimums = {o.id: float(o.minimum_payment) for o in obligations}
    interest_paid = {oid: 0.0 for oid in input_ids}

    retired_at: Dict[str, int] = {}
    retirement_order: List[str] = []
    for oid in priority:
        if balances[oid] <= BALANCE_EPSILON:
            retired_at[oid] = 0
            retirement_order.append(oid)

    schedule = [_snapshot(0, labels[0], balances, input_ids)]
    total_paid = 0.0
    period = 0

    while period < max_periods:
        active = [oid for oid in priority if balances[oid] > BALANCE_EPSILON]
        if not active:
            break
        period += 1

        # 1. Interest accrual
        period_interest = 0.0
        for oid in active:
            interest = balances[oid] * rates[oid]
            balances[oid] += interest
            interest_paid[oid] += interest
            period_interest += interest

        # 2. Minimum payments
        pool = float(extra_payment)
        if carry_freed_minimums:
            pool += sum(minimums[oid] for oid, p in retired_at.items() if 0 < p < period)

        period_payment = 0.0
        for oid in active:
            balance = balances[oid]
            payment = min(minimums[oid], balance)
            if balance - payment <= BALANCE_EPSILON:
                payment = balance
                balances[oid] = 0.0
                pool += minimums[oid] - payment
            else:
                balances[oid] = balance - payment
            period_payment += payment

        # 3. Cascade the pool down the priority list
        cascade = cascade_extra(priority, balances, minimums, pool)
        balances = cascade.balances
        period_payment += sum(cascade.payments.values())
        total_paid += period_payment

        # 4. Retirements, in priority order
        for oid in priority:
            if oid not in retired_at and balances[oid] <= BALANCE_EPSILON:
                retired_at[oid] = period
                retirement_order.append(oid)

        # 5. Snapshot
        schedule.append(
            _snapshot(period, labels[period], balances, input_ids, period_interest, period_payment)
        )

    converged = len(retired_at) == len(balances)
    per_obligation = {
        oid: ObligationResult(
            retirement_period=retired_at.get(oid, max_periods),
            total_interest=round_money(interest_paid[oid]),
            retired=oid in retired_at,
        )
        for oid in input_ids
    }
    total_interest = sum(interest_paid.values())

    if converged:
        logger.debug(
            "%s payoff of %d obligations finished in %d periods (interest %.2f)",
            strategy.value, len(input_ids), period, total_interest,
        )
    else:
        logger.info(
            "%s payoff stopped at the %d-period ceiling; still owing: %s",
            strategy.value, max_periods,
            ", ".join(oid for oid in input_ids if oid not in retired_at),
        )

    return PayoffOutcome(
        strategy=strategy,
        schedule=tuple(schedule),
        total_periods=period,
        total_interest=round_money(total_interest),
        total_paid=round_money(total_paid),
        retirement_order=tuple(retirement_order),
        per_obligation=per_obligation,
        converged=converged,
        max_periods=max_periods,
        obligation_ids=tuple(input_ids),
    )
