"""
Global constants for Paydown.

Purpose
-------
Centralizes the named numeric bounds used by the payoff engine. The
simulator's safety ceiling and balance epsilon live here so that no
module hardcodes them.

Usage
-----
>>> from paydown.constants import SAFETY_CEILING_PERIODS, BALANCE_EPSILON
>>>
>>> outcome = simulate_payoff(obligations, max_periods=SAFETY_CEILING_PERIODS)

Categories
----------
- Simulation: safety ceiling, balance epsilon
- Money: rounding precision
- Time: months per year, label format
- Strategies: default strategy and extra payment
"""

__all__ = [
    # Simulation
    "SAFETY_CEILING_PERIODS",
    "BALANCE_EPSILON",
    # Money
    "MONEY_DECIMALS",
    # Time
    "MONTHS_PER_YEAR",
    "PERCENT",
    "MONTH_LABEL_FORMAT",
    # Strategies
    "DEFAULT_STRATEGY",
    "DEFAULT_EXTRA_PAYMENT",
]


# =============================================================================
# Simulation Bounds
# =============================================================================

SAFETY_CEILING_PERIODS: int = 600
"""Maximum simulated months before a payoff run is forced to stop (50 years)."""

BALANCE_EPSILON: float = 0.01
"""Balances at or below this amount count as fully paid."""


# =============================================================================
# Money
# =============================================================================

MONEY_DECIMALS: int = 2
"""Decimal places for packaged monetary totals (cents)."""


# =============================================================================
# Time
# =============================================================================

MONTHS_PER_YEAR: int = 12
"""Compounding periods per year for nominal annual rates."""

PERCENT: float = 100.0
"""Rates are quoted in percent (6.5 means 6.5%)."""

MONTH_LABEL_FORMAT: str = "%Y-%m"
"""strftime format for period labels."""


# =============================================================================
# Strategy Defaults
# =============================================================================

DEFAULT_STRATEGY: str = "avalanche"
"""Default payoff ordering."""

DEFAULT_EXTRA_PAYMENT: float = 0.0
"""Default monthly amount paid on top of all minimums."""
