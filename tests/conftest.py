"""
Pytest configuration and fixtures for the Paydown test suite.

Fixtures provide small, hand-checkable obligation sets so that expected
periods and balances can be worked out on paper.
"""

import json
import logging
from datetime import date
from typing import List

import pytest

from paydown.obligations import Obligation


@pytest.fixture(autouse=True)
def reset_paydown_logger():
    """Drop handlers the CLI attaches so later tests log through caplog only."""
    yield
    logger = logging.getLogger("paydown")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


# ---------------------------------------------------------------------------
# Date Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def start_date() -> date:
    """Standard start month for tests."""
    return date(2025, 1, 1)


# ---------------------------------------------------------------------------
# Obligation Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def high_rate_loan() -> Obligation:
    """
    Large, expensive debt.

    Balance: 10,000
    Rate: 20% annually
    Minimum: 300/month
    """
    return Obligation(
        id="a", name="Credit card", category="credit_card",
        balance=10_000.0, annual_rate=20.0, minimum_payment=300.0,
    )


@pytest.fixture
def low_balance_loan() -> Obligation:
    """
    Smaller, cheap debt.

    Balance: 5,000
    Rate: 5% annually
    Minimum: 150/month
    """
    return Obligation(
        id="b", name="Car loan", category="auto",
        balance=5_000.0, annual_rate=5.0, minimum_payment=150.0,
    )


@pytest.fixture
def two_loans(high_rate_loan, low_balance_loan) -> List[Obligation]:
    """Avalanche targets 'a' first, snowball targets 'b' first."""
    return [high_rate_loan, low_balance_loan]


@pytest.fixture
def interest_free_loan() -> Obligation:
    """1,200 at 0% with a 100 minimum: retires in exactly 12 months."""
    return Obligation(
        id="x", name="Furniture", category="store_credit",
        balance=1_200.0, annual_rate=0.0, minimum_payment=100.0,
    )


@pytest.fixture
def non_amortizing_loan() -> Obligation:
    """Minimum (50) is far below the first month's interest (2,000)."""
    return Obligation(
        id="p", name="Payday", category="personal",
        balance=100_000.0, annual_rate=24.0, minimum_payment=50.0,
    )


@pytest.fixture
def household_debts() -> List[Obligation]:
    """Mixed household debts used for property checks."""
    return [
        Obligation("card", "Visa", "credit_card", 4_200.0, 22.9, 120.0),
        Obligation("car", "Car loan", "auto", 9_000.0, 4.5, 310.0),
        Obligation("student", "Student loan", "student_loan", 18_000.0, 6.8, 210.0),
        Obligation("store", "Store card", "credit_card", 850.0, 26.0, 35.0),
    ]


# ---------------------------------------------------------------------------
# Plan File Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def plan_data() -> dict:
    """Plan file contents for the two-loan scenario."""
    return {
        "schema_version": "0.1.0",
        "extra_payment": 200.0,
        "strategy": "avalanche",
        "start_date": "2025-01-01",
        "obligations": [
            {"id": "a", "name": "Credit card", "category": "credit_card",
             "balance": 10000.0, "annual_rate": 20.0, "minimum_payment": 300.0},
            {"id": "b", "name": "Car loan", "category": "auto",
             "balance": 5000.0, "annual_rate": 5.0, "minimum_payment": 150.0},
        ],
    }


@pytest.fixture
def plan_file(tmp_path, plan_data):
    """Plan file written to a temporary directory."""
    path = tmp_path / "plan.json"
    with open(path, "w") as f:
        json.dump(plan_data, f)
    return path
