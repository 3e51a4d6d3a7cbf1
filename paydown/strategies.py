"""
Payoff ordering strategies.

Both strategies share every step of the monthly simulation and differ
only in the key used to rank obligations:

- AVALANCHE: highest annual rate first
- SNOWBALL: lowest balance first

Ranking is a stable sort, so obligations with equal keys keep their input
order.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Iterable, List, Union

from .exceptions import ConfigurationError
from .obligations import Obligation

__all__ = [
    "PayoffStrategy",
    "priority_key",
    "order_obligations",
]


class PayoffStrategy(str, Enum):
    """Closed set of payoff orderings."""

    AVALANCHE = "avalanche"
    SNOWBALL = "snowball"

    @classmethod
    def parse(cls, value: Union[str, "PayoffStrategy"]) -> "PayoffStrategy":
        """Resolve a strategy from its name (case-insensitive)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(s.value for s in cls)
            raise ConfigurationError(
                f"Unknown payoff strategy {value!r}. Expected one of: {choices}."
            ) from None


def priority_key(strategy: PayoffStrategy) -> Callable[[Obligation], float]:
    """Sort key for *strategy*; lower keys are paid first."""
    if strategy is PayoffStrategy.AVALANCHE:
        return lambda o: -o.annual_rate
    return lambda o: o.balance


def order_obligations(
    obligations: Iterable[Obligation],
    strategy: Union[str, PayoffStrategy],
) -> List[Obligation]:
    """Return obligations in payoff priority order for *strategy*."""
    strategy = PayoffStrategy.parse(strategy)
    return sorted(obligations, key=priority_key(strategy))
