"""
Type definitions for Paydown.

Purpose
-------
TypedDict definitions for the dictionary shapes produced and consumed by
`paydown.serialization`. They document the JSON layout of plan and result
files and give IDE completion on loaded data.

Type Definitions
----------------
ObligationDict
    One obligation in a plan file.

SimulationStateDict
    One period of a serialized payoff schedule.

ObligationResultDict
    Per-obligation retirement summary.

PayoffOutcomeDict
    Serialized PayoffOutcome.

StrategyComparisonDict
    Serialized StrategyComparison.
"""

from typing import Dict, List, Optional
from typing_extensions import TypedDict, NotRequired

__all__ = [
    "ObligationDict",
    "SimulationStateDict",
    "ObligationResultDict",
    "PayoffOutcomeDict",
    "StrategyComparisonDict",
]


class ObligationDict(TypedDict):
    """
    Obligation as stored in a plan file.

    Examples
    --------
    >>> ob: ObligationDict = {
    ...     "id": "card", "name": "Visa", "category": "credit_card",
    ...     "balance": 4200.0, "annual_rate": 22.9, "minimum_payment": 120.0,
    ... }
    """

    id: str
    name: str
    category: str
    balance: float
    annual_rate: float
    minimum_payment: float


class SimulationStateDict(TypedDict):
    """One schedule period. Balances are rounded to cents on export."""

    period: int
    label: str
    total_balance: float
    balances: Dict[str, float]
    interest: float
    payment: float


class ObligationResultDict(TypedDict):
    retirement_period: int
    total_interest: float
    retired: bool


class PayoffOutcomeDict(TypedDict):
    """
    Serialized payoff outcome.

    ``schedule`` is omitted when exported with ``include_schedule=False``.
    ``payoff_label`` is None when the run did not converge.
    """

    strategy: str
    total_periods: int
    total_interest: float
    total_paid: float
    converged: bool
    max_periods: int
    payoff_label: Optional[str]
    retirement_order: List[str]
    per_obligation: Dict[str, ObligationResultDict]
    schedule: NotRequired[List[SimulationStateDict]]


class StrategyComparisonDict(TypedDict):
    avalanche: PayoffOutcomeDict
    snowball: PayoffOutcomeDict
    interest_differential: float
    period_differential: int
