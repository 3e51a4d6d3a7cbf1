"""
Custom exceptions for Paydown.

Purpose
-------
Provides a unified exception hierarchy for the layers that surround the
payoff engine (plan files, configuration, CLI). The engine itself is a
total function over well-formed input and raises none of these.

Exception Hierarchy
-------------------
PaydownError (base)
├── ConfigurationError - Invalid settings or strategy names
└── ValidationError - Malformed plan data
    └── DuplicateObligationError - Repeated obligation id in a plan

Usage
-----
>>> from paydown.exceptions import PaydownError, ValidationError
>>>
>>> try:
...     plan = load_plan(Path("plan.json"))
... except ValidationError as e:
...     print(f"Bad plan file: {e}")
"""


class PaydownError(Exception):
    """
    Base exception for all Paydown errors.

    Examples
    --------
    >>> try:
    ...     plan = load_plan(path)
    ... except PaydownError as e:
    ...     logger.error("Could not load plan: %s", e)
    """
    pass


class ConfigurationError(PaydownError):
    """
    Invalid configuration or parameters.

    Raised when:
    - A strategy name is not one of the known orderings
    - Application settings are out of range

    Examples
    --------
    >>> raise ConfigurationError(
    ...     "Unknown payoff strategy 'fastest'. "
    ...     "Expected one of: avalanche, snowball."
    ... )
    """
    pass


class ValidationError(PaydownError):
    """
    Plan data validation failures.

    Raised when a plan file or plan mapping fails schema checks, such as:
    - Negative balances or minimum payments
    - Rates outside [0, 100]
    - Files that are not valid JSON

    Examples
    --------
    >>> raise ValidationError(
    ...     "Invalid plan file plan.json: obligations.0.balance "
    ...     "Input should be greater than or equal to 0"
    ... )
    """
    pass


class DuplicateObligationError(ValidationError):
    """
    Obligation ids are not unique.

    The simulator keys balances by id, so two obligations with the same id
    would share a balance. Plans reject this up front.

    Examples
    --------
    >>> raise DuplicateObligationError("Duplicate obligation ids: ['card']")
    """
    pass
