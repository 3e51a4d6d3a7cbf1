"""
Serialization module for Paydown plans and results.

Purpose
-------
JSON persistence for payoff plans (obligations + budget + strategy) and
for simulation/comparison results, so plans can be versioned and results
handed to reporting tools.

Supports serialization of:
- Obligation
- PayoffPlanConfig (plan files)
- PayoffOutcome
- StrategyComparison

Design Principles
-----------------
- Type-safe: Plan files are validated with Pydantic configs
- Human-readable: Indented JSON for easy editing
- Versioned: Every document carries ``schema_version``

Example
-------
>>> from pathlib import Path
>>> from paydown.serialization import load_plan, save_comparison
>>> from paydown.comparison import compare_strategies
>>>
>>> plan = load_plan(Path("plan.json"))
>>> cmp = compare_strategies(plan.to_obligations(), plan.extra_payment,
...                          start=plan.start_date)
>>> save_comparison(cmp, Path("results/comparison.json"))
"""

from __future__ import annotations
from typing import Any, Dict, Mapping, TYPE_CHECKING
from pathlib import Path
import json
import logging
import warnings

import pydantic

from .config import ObligationConfig, PayoffPlanConfig
from .exceptions import DuplicateObligationError, ValidationError
from .obligations import Obligation, canonical_fields
from .utils import round_money

if TYPE_CHECKING:
    from .comparison import StrategyComparison
    from .simulator import PayoffOutcome
    from .types import ObligationDict, PayoffOutcomeDict, StrategyComparisonDict

__all__ = [
    "SCHEMA_VERSION",
    "obligation_to_dict",
    "obligation_from_dict",
    "plan_from_dict",
    "load_plan",
    "save_plan",
    "outcome_to_dict",
    "comparison_to_dict",
    "save_outcome",
    "save_comparison",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Schema Version
# ---------------------------------------------------------------------------

SCHEMA_VERSION = "0.1.0"


def _check_schema_version(data: Mapping[str, Any], source: object) -> None:
    schema_version = data.get("schema_version", "0.0.0")
    if schema_version != SCHEMA_VERSION:
        warnings.warn(
            f"{source}: schema version {schema_version} differs from current "
            f"version {SCHEMA_VERSION}. May encounter compatibility issues.",
            UserWarning,
        )


def _write_json(data: Mapping[str, Any], path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(data, f, indent=2)
    logger.debug("Wrote %s", path)


# ---------------------------------------------------------------------------
# Obligation Serialization
# ---------------------------------------------------------------------------

def obligation_to_dict(obligation: Obligation) -> ObligationDict:
    """
    Convert an Obligation to its plan-file representation.

    Parameters
    ----------
    obligation : Obligation
        Obligation to serialize

    Returns
    -------
    dict
        Dictionary with obligation fields
    """
    return {
        "id": obligation.id,
        "name": obligation.name,
        "category": obligation.category,
        "balance": obligation.balance,
        "annual_rate": obligation.annual_rate,
        "minimum_payment": obligation.minimum_payment,
    }


def obligation_from_dict(data: Mapping[str, Any]) -> Obligation:
    """
    Create a validated Obligation from a dictionary.

    Accepts the same camelCase aliases as `Obligation.from_dict`.

    Raises
    ------
    ValidationError
        If the data violates `ObligationConfig` constraints.
    """
    try:
        config = ObligationConfig.model_validate(canonical_fields(data))
    except pydantic.ValidationError as e:
        raise ValidationError(f"Invalid obligation {data.get('id')!r}: {_describe(e)}") from e
    return config.to_obligation()


# ---------------------------------------------------------------------------
# Plan Serialization
# ---------------------------------------------------------------------------

def _describe(error: pydantic.ValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err["loc"])
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


def plan_from_dict(data: Mapping[str, Any], *, source: object = "plan") -> PayoffPlanConfig:
    """
    Validate a plan mapping.

    ``schema_version`` is checked and stripped before validation.

    Raises
    ------
    DuplicateObligationError
        If two obligations share an id.
    ValidationError
        For any other schema violation.
    """
    _check_schema_version(data, source)
    payload = {k: v for k, v in data.items() if k != "schema_version"}
    try:
        return PayoffPlanConfig.model_validate(payload)
    except pydantic.ValidationError as e:
        message = _describe(e)
        if "Duplicate obligation ids" in message:
            raise DuplicateObligationError(f"Invalid {source}: {message}") from e
        raise ValidationError(f"Invalid {source}: {message}") from e


def load_plan(path: Path) -> PayoffPlanConfig:
    """
    Load a payoff plan from a JSON file.

    Parameters
    ----------
    path : Path
        Input file path

    Returns
    -------
    PayoffPlanConfig
        Validated plan

    Raises
    ------
    ValidationError
        If the file is not valid JSON or fails validation.

    Examples
    --------
    >>> plan = load_plan(Path("plan.json"))
    >>> outcome = simulate_payoff(plan.to_obligations(), plan.extra_payment,
    ...                           plan.strategy, start=plan.start_date)
    """
    path = Path(path)
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Plan file {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ValidationError(f"Plan file {path} must contain a JSON object")

    plan = plan_from_dict(data, source=f"plan file {path}")
    logger.debug("Loaded plan %s with %d obligations", path, len(plan.obligations))
    return plan


def save_plan(plan: PayoffPlanConfig, path: Path) -> None:
    """
    Save a payoff plan to a JSON file.

    Examples
    --------
    >>> save_plan(plan, Path("plan.json"))
    """
    data = {"schema_version": SCHEMA_VERSION}
    data.update(plan.model_dump(mode="json"))
    _write_json(data, Path(path))


# ---------------------------------------------------------------------------
# Result Serialization
# ---------------------------------------------------------------------------

def outcome_to_dict(outcome: PayoffOutcome, *, include_schedule: bool = True) -> PayoffOutcomeDict:
    """
    Convert a PayoffOutcome to a JSON-ready dictionary.

    Parameters
    ----------
    outcome : PayoffOutcome
        Simulation result
    include_schedule : bool
        Whether to include the per-period schedule (balances rounded to cents)

    Returns
    -------
    dict
    """
    result: Dict[str, Any] = {
        "strategy": outcome.strategy.value,
        "total_periods": outcome.total_periods,
        "total_interest": outcome.total_interest,
        "total_paid": outcome.total_paid,
        "converged": outcome.converged,
        "max_periods": outcome.max_periods,
        "payoff_label": outcome.payoff_label,
        "retirement_order": list(outcome.retirement_order),
        "per_obligation": {
            oid: {
                "retirement_period": res.retirement_period,
                "total_interest": res.total_interest,
                "retired": res.retired,
            }
            for oid, res in outcome.per_obligation.items()
        },
    }
    if include_schedule:
        result["schedule"] = [
            {
                "period": s.period,
                "label": s.label,
                "total_balance": round_money(s.total_balance),
                "balances": {oid: round_money(b) for oid, b in s.balances.items()},
                "interest": round_money(s.interest),
                "payment": round_money(s.payment),
            }
            for s in outcome.schedule
        ]
    return result


def comparison_to_dict(
    comparison: StrategyComparison,
    *,
    include_schedule: bool = True,
) -> StrategyComparisonDict:
    """Convert a StrategyComparison to a JSON-ready dictionary."""
    return {
        "avalanche": outcome_to_dict(comparison.avalanche, include_schedule=include_schedule),
        "snowball": outcome_to_dict(comparison.snowball, include_schedule=include_schedule),
        "interest_differential": comparison.interest_differential,
        "period_differential": comparison.period_differential,
    }


def save_outcome(outcome: PayoffOutcome, path: Path, include_schedule: bool = True) -> None:
    """Save a PayoffOutcome to a JSON file."""
    data: Dict[str, Any] = {"schema_version": SCHEMA_VERSION}
    data.update(outcome_to_dict(outcome, include_schedule=include_schedule))
    _write_json(data, Path(path))


def save_comparison(
    comparison: StrategyComparison,
    path: Path,
    include_schedule: bool = True,
) -> None:
    """Save a StrategyComparison to a JSON file."""
    data: Dict[str, Any] = {"schema_version": SCHEMA_VERSION}
    data.update(comparison_to_dict(comparison, include_schedule=include_schedule))
    _write_json(data, Path(path))
