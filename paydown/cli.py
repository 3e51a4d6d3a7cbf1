"""
Command-Line Interface for Paydown.

Purpose
-------
Runs payoff simulations, strategy comparisons and single-loan
amortization calculations from plan files or arguments, and prints the
results as Rich tables.

Commands
--------
- simulate: Run one payoff strategy over a plan file
- compare: Compare avalanche and snowball over a plan file
- payment: Monthly payment (PMT) for a loan
- schedule: Full amortization schedule for a loan
- plan: Validate or create plan files
- info: Show version and dependency information

Example Usage
-------------
    # Simulate the plan's strategy with a larger extra payment
    $ paydown simulate --plan plan.json --extra 300

    # Compare strategies and save the result
    $ paydown compare -p plan.json -o results/comparison.json

    # Monthly payment on a 30-year mortgage
    $ paydown payment 300000 6.5 360

    # Create a starter plan
    $ paydown plan create plan.json --template sample
"""

from __future__ import annotations

import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Optional

import click
import pydantic
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .config import AmortizationConfig, AppSettings
from .exceptions import PaydownError, ValidationError
from .logging_config import configure_logging
from .utils import format_currency


def _fail(message: str) -> None:
    click.echo(message, err=True)
    sys.exit(1)


def _money(ctx: click.Context, value: float) -> str:
    settings: AppSettings = ctx.obj["settings"]
    return format_currency(value, symbol=settings.currency_symbol)


def _periods(outcome) -> str:
    if not outcome.converged:
        return f"not paid off within {outcome.max_periods} months"
    return f"{outcome.total_periods} months"


def _load_plan_or_exit(plan_path: Path):
    from .serialization import load_plan

    try:
        return load_plan(plan_path)
    except PaydownError as e:
        _fail(f"Error loading plan: {e}")


@click.group()
@click.version_option(version=__version__, prog_name="paydown")
@click.option("--quiet", "-q", is_flag=True, help="Plain output without tables")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, quiet: bool, verbose: bool) -> None:
    """
    Paydown - Debt payoff planner.

    Simulates paying down several debts month by month under the
    avalanche (highest rate first) or snowball (lowest balance first)
    strategy, and compares the two.

    Use 'paydown COMMAND --help' for command-specific help.
    """
    try:
        settings = AppSettings()
    except pydantic.ValidationError as e:
        _fail(f"Invalid PAYDOWN_ environment settings: {e}")
    configure_logging("DEBUG" if verbose else settings.effective_log_level)

    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["settings"] = settings
    ctx.obj["console"] = Console()


# ---------------------------------------------------------------------------
# simulate
# ---------------------------------------------------------------------------

@main.command()
@click.option(
    "--plan", "-p", "plan_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="Path to payoff plan file (JSON)"
)
@click.option(
    "--extra", "-e",
    type=click.FloatRange(min=0),
    default=None,
    help="Extra monthly payment (overrides the plan)"
)
@click.option(
    "--strategy", "-s",
    type=click.Choice(["avalanche", "snowball"], case_sensitive=False),
    default=None,
    help="Payoff strategy (overrides the plan)"
)
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the outcome to this JSON file"
)
@click.option(
    "--no-schedule",
    is_flag=True,
    help="Omit the per-month schedule from the JSON output"
)
@click.pass_context
def simulate(
    ctx: click.Context,
    plan_path: Path,
    extra: Optional[float],
    strategy: Optional[str],
    output: Optional[Path],
    no_schedule: bool,
) -> None:
    """
    Simulate paying off a plan with one strategy.

    Example:
        paydown simulate -p plan.json --strategy snowball --extra 250
    """
    console: Console = ctx.obj["console"]
    quiet = ctx.obj["quiet"]
    settings: AppSettings = ctx.obj["settings"]

    from .obligations import filter_outstanding
    from .serialization import save_outcome
    from .simulator import simulate_payoff

    plan = _load_plan_or_exit(plan_path)
    extra_payment = plan.extra_payment if extra is None else extra
    chosen = strategy.lower() if strategy else plan.strategy
    obligations = plan.to_obligations()

    outcome = simulate_payoff(
        obligations,
        extra_payment,
        chosen,
        start=plan.start_date,
        max_periods=settings.max_periods,
    )
    names = {ob.id: ob.name for ob in plan.obligations}

    if quiet:
        click.echo(f"Strategy: {outcome.strategy.value}")
        click.echo(f"Duration: {_periods(outcome)}")
        click.echo(f"Total interest: {_money(ctx, outcome.total_interest)}")
        click.echo(f"Total paid: {_money(ctx, outcome.total_paid)}")
        click.echo(f"Payoff order: {', '.join(outcome.retirement_order) or '-'}")
    else:
        table = Table(title=f"Payoff Plan ({outcome.strategy.value})", show_header=True)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="green", justify="right")
        table.add_row(
            "Obligations",
            f"{len(obligations)} ({len(filter_outstanding(obligations))} outstanding)",
        )
        table.add_row("Extra Payment", _money(ctx, extra_payment))
        table.add_row("Duration", _periods(outcome))
        table.add_row("Debt-free", outcome.payoff_label or "-")
        table.add_row("Total Interest", _money(ctx, outcome.total_interest))
        table.add_row("Total Paid", _money(ctx, outcome.total_paid))
        console.print(table)

        detail = Table(title="Per Obligation", show_header=True)
        detail.add_column("Obligation", style="cyan")
        detail.add_column("Paid Off", justify="right")
        detail.add_column("Interest", justify="right")
        for oid in outcome.obligation_ids:
            res = outcome.per_obligation[oid]
            when = f"month {res.retirement_period}" if res.retired else "never"
            detail.add_row(names.get(oid, oid), when, _money(ctx, res.total_interest))
        console.print(detail)

    if not outcome.converged:
        click.echo(
            f"Warning: {', '.join(outcome.unretired)} will not be paid off "
            f"within {outcome.max_periods} months",
            err=True,
        )

    if output:
        save_outcome(outcome, output, include_schedule=not no_schedule)
        if not quiet:
            click.echo(f"Outcome saved to {output}")


# ---------------------------------------------------------------------------
# compare
# ---------------------------------------------------------------------------

@main.command()
@click.option(
    "--plan", "-p", "plan_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="Path to payoff plan file (JSON)"
)
@click.option(
    "--extra", "-e",
    type=click.FloatRange(min=0),
    default=None,
    help="Extra monthly payment (overrides the plan)"
)
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the comparison to this JSON file"
)
@click.pass_context
def compare(
    ctx: click.Context,
    plan_path: Path,
    extra: Optional[float],
    output: Optional[Path],
) -> None:
    """
    Compare avalanche and snowball for a plan.

    Example:
        paydown compare -p plan.json --extra 200
    """
    console: Console = ctx.obj["console"]
    quiet = ctx.obj["quiet"]
    settings: AppSettings = ctx.obj["settings"]

    from .comparison import compare_strategies
    from .serialization import save_comparison

    plan = _load_plan_or_exit(plan_path)
    extra_payment = plan.extra_payment if extra is None else extra

    result = compare_strategies(
        plan.to_obligations(),
        extra_payment,
        start=plan.start_date,
        max_periods=settings.max_periods,
    )
    names = {ob.id: ob.name for ob in plan.obligations}

    if quiet:
        for outcome in (result.avalanche, result.snowball):
            click.echo(
                f"{outcome.strategy.value}: {_periods(outcome)}, "
                f"interest {_money(ctx, outcome.total_interest)}"
            )
        click.echo(f"Interest saved by avalanche: {_money(ctx, result.interest_differential)}")
        click.echo(f"Months saved by avalanche: {result.period_differential}")
    else:
        table = Table(title="Strategy Comparison", show_header=True)
        table.add_column("Metric", style="cyan")
        table.add_column("Avalanche", justify="right")
        table.add_column("Snowball", justify="right")
        table.add_row("Duration", _periods(result.avalanche), _periods(result.snowball))
        table.add_row(
            "Total Interest",
            _money(ctx, result.avalanche.total_interest),
            _money(ctx, result.snowball.total_interest),
        )
        table.add_row(
            "Total Paid",
            _money(ctx, result.avalanche.total_paid),
            _money(ctx, result.snowball.total_paid),
        )
        table.add_row(
            "Payoff Order",
            "\n".join(names.get(i, i) for i in result.avalanche.retirement_order) or "-",
            "\n".join(names.get(i, i) for i in result.snowball.retirement_order) or "-",
        )
        console.print(table)
        console.print(
            Panel(
                f"Avalanche saves [bold]{_money(ctx, result.interest_differential)}[/bold] "
                f"in interest and [bold]{result.period_differential}[/bold] months.",
                title=f"Preferred: {result.preferred.value}",
                border_style="green",
            )
        )

    if output:
        save_comparison(result, output)
        if not quiet:
            click.echo(f"Comparison saved to {output}")


# ---------------------------------------------------------------------------
# payment / schedule
# ---------------------------------------------------------------------------

def _amortization_inputs(principal, rate, term, payment=None) -> AmortizationConfig:
    try:
        return AmortizationConfig(
            principal=principal, annual_rate=rate, term_periods=term, payment=payment
        )
    except pydantic.ValidationError as e:
        raise ValidationError(str(e)) from e


@main.command()
@click.argument("principal", type=float)
@click.argument("rate", type=float)
@click.argument("term", type=int)
@click.pass_context
def payment(ctx: click.Context, principal: float, rate: float, term: int) -> None:
    """
    Monthly payment for a loan.

    RATE is the annual rate in percent; TERM is in months.

    Example:
        paydown payment 300000 6.5 360
    """
    from .amortization import compute_periodic_payment

    try:
        cfg = _amortization_inputs(principal, rate, term)
    except ValidationError as e:
        _fail(f"Invalid loan terms: {e}")

    amount = compute_periodic_payment(cfg.principal, cfg.annual_rate, cfg.term_periods)
    if ctx.obj["quiet"]:
        click.echo(f"{amount:.2f}")
    else:
        click.echo(f"Monthly payment: {_money(ctx, amount)}")


@main.command()
@click.argument("principal", type=float)
@click.argument("rate", type=float)
@click.argument("term", type=int)
@click.option("--payment", "fixed_payment", type=float, default=None,
              help="Fixed monthly payment (defaults to the computed payment)")
@click.option("--rows", type=int, default=12, show_default=True,
              help="Rows to display (0 for all)")
@click.option("--csv", "csv_path", type=click.Path(dir_okay=False, path_type=Path),
              default=None, help="Write the full schedule to a CSV file")
@click.pass_context
def schedule(
    ctx: click.Context,
    principal: float,
    rate: float,
    term: int,
    fixed_payment: Optional[float],
    rows: int,
    csv_path: Optional[Path],
) -> None:
    """
    Amortization schedule for a loan.

    Example:
        paydown schedule 25000 7.2 60 --payment 600 --csv car.csv
    """
    console: Console = ctx.obj["console"]
    quiet = ctx.obj["quiet"]

    from .amortization import generate_schedule

    try:
        cfg = _amortization_inputs(principal, rate, term, fixed_payment)
    except ValidationError as e:
        _fail(f"Invalid loan terms: {e}")

    sched = generate_schedule(
        cfg.principal, cfg.annual_rate, cfg.term_periods, payment=cfg.payment
    )
    shown = sched.rows if rows <= 0 else sched.rows[:rows]

    if quiet:
        for row in shown:
            click.echo(
                f"{row.period}\t{row.label}\t{row.payment:.2f}\t"
                f"{row.principal:.2f}\t{row.interest:.2f}\t{row.balance:.2f}"
            )
    else:
        table = Table(title=f"Amortization ({sched.periods} payments)", show_header=True)
        for col in ("Month", "Date", "Payment", "Principal", "Interest", "Balance"):
            table.add_column(col, justify="right")
        for row in shown:
            table.add_row(
                str(row.period), row.label, _money(ctx, row.payment),
                _money(ctx, row.principal), _money(ctx, row.interest), _money(ctx, row.balance),
            )
        console.print(table)
        console.print(
            f"Total interest: {_money(ctx, sched.total_interest)}  "
            f"Total paid: {_money(ctx, sched.total_payments)}  "
            f"Payoff: {sched.payoff_label}"
        )

    if csv_path:
        csv_path.parent.mkdir(parents=True, exist_ok=True)
        sched.to_frame().to_csv(csv_path)
        if not quiet:
            click.echo(f"Schedule saved to {csv_path}")


# ---------------------------------------------------------------------------
# plan files
# ---------------------------------------------------------------------------

@main.group()
def plan() -> None:
    """
    Plan file commands.

    Validate and create payoff plan files.
    """
    pass


@plan.command("validate")
@click.argument("plan_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def plan_validate(ctx: click.Context, plan_file: Path) -> None:
    """
    Validate a plan file.

    Example:
        paydown plan validate plan.json
    """
    console: Console = ctx.obj["console"]
    quiet = ctx.obj["quiet"]

    from .serialization import load_plan

    try:
        loaded = load_plan(plan_file)
    except PaydownError as e:
        _fail(f"Plan validation failed: {e}")

    if quiet:
        click.echo("Plan is valid")
        click.echo(f"Obligations: {len(loaded.obligations)}")
        return

    table = Table(title="Obligations", show_header=True)
    table.add_column("Id", style="cyan")
    table.add_column("Name")
    table.add_column("Balance", justify="right")
    table.add_column("Rate", justify="right")
    table.add_column("Minimum", justify="right")
    for ob in loaded.obligations:
        table.add_row(
            ob.id, ob.name, _money(ctx, ob.balance),
            f"{ob.annual_rate:.2f}%", _money(ctx, ob.minimum_payment),
        )
    console.print(Panel(
        f"Strategy: {loaded.strategy}\nExtra payment: {_money(ctx, loaded.extra_payment)}",
        title="Plan Valid",
        border_style="green",
    ))
    console.print(table)


_TEMPLATES = {
    "basic": {
        "extra_payment": 0.0,
        "strategy": "avalanche",
        "obligations": [],
    },
    "sample": {
        "extra_payment": 200.0,
        "strategy": "avalanche",
        "obligations": [
            {"id": "card", "name": "Credit card", "category": "credit_card",
             "balance": 4200.0, "annual_rate": 22.9, "minimum_payment": 120.0},
            {"id": "car", "name": "Car loan", "category": "auto",
             "balance": 9000.0, "annual_rate": 4.5, "minimum_payment": 310.0},
            {"id": "student", "name": "Student loan", "category": "student_loan",
             "balance": 18000.0, "annual_rate": 6.8, "minimum_payment": 210.0},
        ],
    },
}


@plan.command("create")
@click.argument("output_file", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--template", "-t", type=click.Choice(sorted(_TEMPLATES)), default="basic")
@click.pass_context
def plan_create(ctx: click.Context, output_file: Path, template: str) -> None:
    """
    Create a plan file from a template.

    Example:
        paydown plan create plan.json --template sample
    """
    from .serialization import plan_from_dict, save_plan, SCHEMA_VERSION

    data = dict(_TEMPLATES[template], schema_version=SCHEMA_VERSION)
    save_plan(plan_from_dict(data, source=f"{template} template"), output_file)

    if not ctx.obj["quiet"]:
        click.echo(f"Created plan file: {output_file}")


# ---------------------------------------------------------------------------
# info
# ---------------------------------------------------------------------------

@main.command()
@click.pass_context
def info(ctx: click.Context) -> None:
    """
    Display version, settings and dependency information.
    """
    console: Console = ctx.obj["console"]
    settings: AppSettings = ctx.obj["settings"]

    info_lines = [
        f"Paydown Version: {__version__}",
        f"Python: {sys.version.split()[0]}",
        f"Safety ceiling: {settings.max_periods} months",
        f"Log level: {settings.effective_log_level}",
    ]

    for name in ("numpy", "pandas", "pydantic", "pydantic-settings", "click", "rich"):
        try:
            info_lines.append(f"{name}: {version(name)}")
        except PackageNotFoundError:
            info_lines.append(f"{name}: not installed")

    if ctx.obj["quiet"]:
        for line in info_lines:
            click.echo(line)
    else:
        console.print(Panel("\n".join(info_lines), title="System Information"))


if __name__ == "__main__":
    main()
