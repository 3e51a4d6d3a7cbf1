"""
Obligation inputs for Paydown.

Purpose
-------
An Obligation is a point-in-time snapshot of one debt being paid down:
its outstanding balance, nominal annual rate, and contractual minimum
monthly payment. Obligations are immutable; the simulator copies the
values it needs into private tracking maps.

Example
-------
>>> from paydown.obligations import Obligation
>>> card = Obligation(
...     id="card", name="Visa", category="credit_card",
...     balance=4_200.0, annual_rate=22.9, minimum_payment=120.0,
... )
>>> Obligation.from_dict({"id": "car", "currentBalance": 9000,
...                       "interestRate": 4.5, "monthlyPayment": 310})
Obligation(id='car', name='car', category='loan', balance=9000.0, ...)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping

from .constants import BALANCE_EPSILON

__all__ = [
    "Obligation",
    "canonical_fields",
    "filter_outstanding",
]


# Accepted alternate spellings for mapping keys
_KEY_ALIASES = {
    "balance": ("balance", "current_balance", "currentBalance"),
    "annual_rate": ("annual_rate", "interest_rate", "interestRate", "apr"),
    "minimum_payment": ("minimum_payment", "monthly_payment", "monthlyPayment"),
    "category": ("category", "type"),
}


def canonical_fields(data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Map alias keys onto the snake_case field names, leaving values as given.

    Keys that are neither a field nor an alias are dropped; missing fields
    are left out so a validator can report them.
    """
    fields: Dict[str, Any] = {}
    if "id" in data:
        fields["id"] = str(data["id"])
    if "name" in data:
        fields["name"] = data["name"]
    for field, aliases in _KEY_ALIASES.items():
        for key in aliases:
            if key in data:
                fields[field] = data[key]
                break
    return fields


@dataclass(frozen=True)
class Obligation:
    """
    A debt tracked for payoff.

    Parameters
    ----------
    id : str
        Opaque identifier, unique within one simulation.
    name : str
        Display name.
    category : str
        Free-form tag (e.g. "credit_card", "student_loan", "auto").
    balance : float
        Current outstanding balance.
    annual_rate : float
        Nominal annual interest rate in percent (6.5 for 6.5%).
    minimum_payment : float
        Contractual minimum monthly payment.

    Notes
    -----
    Values are not validated here; plan files are checked by
    `paydown.config.ObligationConfig` before they become Obligations.
    """
    id: str
    name: str
    category: str
    balance: float
    annual_rate: float
    minimum_payment: float

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Obligation":
        """Build an Obligation from a mapping (snake_case or camelCase keys)."""
        fields = canonical_fields(data)
        oid = str(data["id"])
        return cls(
            id=oid,
            name=str(fields.get("name") or oid),
            category=str(fields.get("category", "loan")),
            balance=float(fields.get("balance", 0.0)),
            annual_rate=float(fields.get("annual_rate", 0.0)),
            minimum_payment=float(fields.get("minimum_payment", 0.0)),
        )


def filter_outstanding(
    obligations: Iterable[Obligation],
    epsilon: float = BALANCE_EPSILON,
) -> List[Obligation]:
    """Keep obligations that still carry a balance above *epsilon*, in order."""
    return [o for o in obligations if o.balance > epsilon]
