"""
Paydown - Debt Payoff Planner

Deterministic month-by-month simulation of paying down several debts
under the avalanche or snowball strategy, with single-loan amortization
helpers.

Modules
-------
- amortization : Periodic payment (PMT) and single-loan schedules
- obligations  : Obligation inputs
- strategies   : Avalanche / snowball ordering
- simulator    : Multi-obligation payoff simulation
- comparison   : Avalanche vs. snowball comparison
- config       : Pydantic validation for plans and settings
- serialization: JSON plan and result files

"""

__version__ = "0.1.0"

from .amortization import compute_periodic_payment, generate_schedule
from .obligations import Obligation
from .strategies import PayoffStrategy
from .simulator import PayoffOutcome, simulate_payoff
from .comparison import StrategyComparison, compare_strategies
