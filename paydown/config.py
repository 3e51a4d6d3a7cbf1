"""
Configuration management module for Paydown.

Purpose
-------
Pydantic models for type-safe validation of payoff plans and calculator
inputs before they reach the engine, plus environment-driven application
settings. The engine trusts its inputs; these models are where negative
balances, out-of-range rates and duplicate ids are rejected.

Design Principles
-----------------
- Type-safe: Pydantic enforces types and validates ranges
- Immutable: Frozen models prevent accidental mutation
- Serializable: Easy conversion to/from JSON for plan files
- Environment-aware: Supports .env files for application settings

Example
-------
>>> from paydown.config import ObligationConfig, PayoffPlanConfig
>>> plan = PayoffPlanConfig(
...     extra_payment=200,
...     obligations=[
...         ObligationConfig(id="card", name="Visa", balance=4_200,
...                          annual_rate=22.9, minimum_payment=120),
...     ],
... )
>>> obligations = plan.to_obligations()
>>>
>>> # Serialize to dict/JSON
>>> plan_json = plan.model_dump_json()
>>> loaded = PayoffPlanConfig.model_validate_json(plan_json)
"""

from __future__ import annotations
from typing import Optional, Literal, List
import datetime

from pydantic import BaseModel, Field, field_validator, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DEFAULT_EXTRA_PAYMENT, DEFAULT_STRATEGY, SAFETY_CEILING_PERIODS
from .obligations import Obligation

__all__ = [
    "ObligationConfig",
    "PayoffPlanConfig",
    "AmortizationConfig",
    "AppSettings",
]


# ---------------------------------------------------------------------------
# Obligation Configuration
# ---------------------------------------------------------------------------

class ObligationConfig(BaseModel):
    """
    Validated description of one debt.

    Attributes
    ----------
    id : str
        Unique identifier within a plan.
    name : str
        Display name (defaults to the id).
    category : str
        Free-form tag such as "credit_card" or "student_loan".
    balance : float
        Outstanding balance (>= 0).
    annual_rate : float
        Nominal annual rate in percent (0-100).
    minimum_payment : float
        Contractual minimum monthly payment (>= 0).

    Examples
    --------
    >>> cfg = ObligationConfig(id="car", balance=9_000, annual_rate=4.5,
    ...                        minimum_payment=310)
    >>> cfg.name
    'car'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(
        min_length=1,
        max_length=100,
        description="Obligation identifier"
    )
    name: str = Field(
        default="",
        max_length=100,
        validate_default=True,
        description="Display name"
    )
    category: str = Field(
        default="loan",
        max_length=50,
        description="Obligation category tag"
    )
    balance: float = Field(
        ge=0,
        description="Outstanding balance"
    )
    annual_rate: float = Field(
        ge=0,
        le=100,
        description="Nominal annual interest rate in percent"
    )
    minimum_payment: float = Field(
        ge=0,
        description="Contractual minimum monthly payment"
    )

    @field_validator("name")
    @classmethod
    def default_name(cls, v, info):
        """Fall back to the id when no name is given."""
        return v or info.data.get("id", "")

    def to_obligation(self) -> Obligation:
        return Obligation(
            id=self.id,
            name=self.name or self.id,
            category=self.category,
            balance=self.balance,
            annual_rate=self.annual_rate,
            minimum_payment=self.minimum_payment,
        )


# ---------------------------------------------------------------------------
# Plan Configuration
# ---------------------------------------------------------------------------

class PayoffPlanConfig(BaseModel):
    """
    A complete payoff plan: obligations, extra budget and strategy.

    Attributes
    ----------
    obligations : list of ObligationConfig
        Debts to pay off. Ids must be unique.
    extra_payment : float
        Monthly amount on top of minimums (>= 0).
    strategy : {"avalanche", "snowball"}
        Ordering for the extra payment.
    start_date : date, optional
        Month of period 0. Defaults to the current month at run time.

    Examples
    --------
    >>> plan = PayoffPlanConfig(obligations=[], extra_payment=100)
    >>> plan.strategy
    'avalanche'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    obligations: List[ObligationConfig] = Field(
        default_factory=list,
        description="Obligations in the plan"
    )
    extra_payment: float = Field(
        default=DEFAULT_EXTRA_PAYMENT,
        ge=0,
        description="Extra monthly payment budget"
    )
    strategy: Literal["avalanche", "snowball"] = Field(
        default=DEFAULT_STRATEGY,
        description="Payoff ordering strategy"
    )
    start_date: Optional[datetime.date] = Field(
        default=None,
        description="Month of the starting snapshot"
    )

    @field_validator("strategy", mode="before")
    @classmethod
    def normalize_strategy(cls, v):
        """Accept strategy names in any case."""
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("obligations")
    @classmethod
    def validate_unique_ids(cls, v):
        """Ensure obligation ids are unique."""
        seen = set()
        duplicates = []
        for ob in v:
            if ob.id in seen and ob.id not in duplicates:
                duplicates.append(ob.id)
            seen.add(ob.id)
        if duplicates:
            raise ValueError(f"Duplicate obligation ids: {duplicates}")
        return v

    def to_obligations(self) -> List[Obligation]:
        """Convert to engine inputs, preserving order."""
        return [ob.to_obligation() for ob in self.obligations]


# ---------------------------------------------------------------------------
# Amortization Configuration
# ---------------------------------------------------------------------------

class AmortizationConfig(BaseModel):
    """Inputs of the single-loan PMT / schedule calculator."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    principal: float = Field(
        ge=0,
        description="Loan principal"
    )
    annual_rate: float = Field(
        ge=0,
        le=100,
        description="Nominal annual interest rate in percent"
    )
    term_periods: int = Field(
        ge=0,
        le=1200,
        description="Loan term in months"
    )
    payment: Optional[float] = Field(
        default=None,
        gt=0,
        description="Fixed monthly payment (defaults to PMT)"
    )


# ---------------------------------------------------------------------------
# Application Settings (Environment Variables)
# ---------------------------------------------------------------------------

class AppSettings(BaseSettings):
    """
    Global application settings loaded from environment variables.

    Environment variables are prefixed with PAYDOWN_ (e.g.
    PAYDOWN_LOG_LEVEL=DEBUG). A local .env file is read when present.

    Attributes
    ----------
    debug : bool
        Enable debug mode (forces DEBUG logging).
    log_level : str
        Logging level: "DEBUG", "INFO", "WARNING", "ERROR".
    max_periods : int
        Safety ceiling used by the CLI (1-1200 months).
    currency_symbol : str
        Symbol used when formatting amounts in CLI output.

    Examples
    --------
    >>> settings = AppSettings()
    >>> settings.max_periods
    600
    """

    model_config = SettingsConfigDict(
        env_prefix="PAYDOWN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging level"
    )
    max_periods: int = Field(
        default=SAFETY_CEILING_PERIODS,
        ge=1,
        le=1200,
        description="Safety ceiling on simulated months"
    )
    currency_symbol: str = Field(
        default="$",
        max_length=5,
        description="Currency symbol for CLI output"
    )

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level
