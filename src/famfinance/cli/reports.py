#!/usr/bin/env python3
"""
Report CLI - Financial statements and derived reports.

Series-shaped reports (net worth, cashflow, outflows) can be exported as
CSV with --format csv; everything else prints JSON.
"""

from datetime import date, datetime

import click

from ..analysis.frames import monthly_cashflow_to_dataframe, net_worth_to_dataframe, outflows_to_dataframe
from ..analysis.reports import ReportBuilder
from ..core.exceptions import FinanceEngineError
from ..core.period import Granularity
from ..operations import build_overview, compute_balance_sheet, compute_income_statement
from .options import DATE_TYPE, emit, family_option, get_cli_config, open_datastore, resolve_period, to_date

FORMAT_OPTION = click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "csv"]),
    default="json",
    help="Output format (default: json)",
)
OUTPUT_OPTION = click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write to file instead of stdout")


@click.group()
def report() -> None:
    """Income statement, balance sheet and report commands."""
    pass


@report.command()
@family_option
@click.option("--start", type=DATE_TYPE, help="Start date (YYYY-MM-DD), defaults to first of the end month")
@click.option("--end", type=DATE_TYPE, help="End date (YYYY-MM-DD), defaults to today")
@OUTPUT_OPTION
@click.pass_context
def income(ctx: click.Context, family: str, start: datetime | None, end: datetime | None, output: str | None) -> None:
    """
    Income and expense totals with category breakdowns.

    Examples:
      famfinance report income --family smiths --start 2024-03-01 --end 2024-03-31
    """
    config = get_cli_config(ctx)
    store = open_datastore(ctx, family)
    try:
        result = compute_income_statement(store, store, family, resolve_period(start, end), config.currency)
    except (FinanceEngineError, FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e)) from e
    emit(result.to_dict(), "json", output)


@report.command("balance-sheet")
@family_option
@click.option("--as-of", type=DATE_TYPE, help="Balance date (YYYY-MM-DD), defaults to today")
@OUTPUT_OPTION
@click.pass_context
def balance_sheet(ctx: click.Context, family: str, as_of: datetime | None, output: str | None) -> None:
    """Assets, liabilities and net worth as of a date."""
    config = get_cli_config(ctx)
    store = open_datastore(ctx, family)
    try:
        snapshot = compute_balance_sheet(store, family, to_date(as_of), config.currency)
    except (FinanceEngineError, FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e)) from e
    emit(snapshot.to_dict(), "json", output)


@report.command("net-worth")
@family_option
@click.option("--start", type=DATE_TYPE, help="Start date (YYYY-MM-DD); overrides --months")
@click.option("--end", type=DATE_TYPE, help="End date (YYYY-MM-DD), defaults to today")
@click.option("--months", type=int, help="Trailing months to cover (max 6, default from config)")
@click.option(
    "--granularity",
    type=click.Choice([g.value for g in Granularity]),
    default=Granularity.MONTHLY.value,
    help="Point spacing (default: monthly)",
)
@FORMAT_OPTION
@OUTPUT_OPTION
@click.pass_context
def net_worth(
    ctx: click.Context,
    family: str,
    start: datetime | None,
    end: datetime | None,
    months: int | None,
    granularity: str,
    output_format: str,
    output: str | None,
) -> None:
    """
    Net worth at the end of each month (or quarter, or year).

    Examples:
      famfinance report net-worth --family smiths
      famfinance report net-worth -f smiths --start 2024-01-01 --end 2024-06-15 --format csv
    """
    config = get_cli_config(ctx)
    store = open_datastore(ctx, family)
    builder = ReportBuilder(store, store, store, config.currency)
    try:
        if start is not None:
            end_date = to_date(end) or date.today()
            points = builder.net_worth_series(family, to_date(start), end_date, granularity)
        else:
            window = months if months is not None else config.reports.net_worth_months
            points = builder.trailing_net_worth(family, window, to_date(end), granularity)
    except (FinanceEngineError, FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    data = points if output_format == "csv" else [p.to_dict() for p in points]
    emit(data, output_format, output, net_worth_to_dataframe)


@report.command()
@family_option
@click.option("--start", type=DATE_TYPE, help="Start date (YYYY-MM-DD), defaults to first of the end month")
@click.option("--end", type=DATE_TYPE, help="End date (YYYY-MM-DD), defaults to today")
@FORMAT_OPTION
@OUTPUT_OPTION
@click.pass_context
def cashflow(
    ctx: click.Context,
    family: str,
    start: datetime | None,
    end: datetime | None,
    output_format: str,
    output: str | None,
) -> None:
    """
    Cash-flow totals, category breakdown and monthly breakdown.

    CSV output contains the monthly breakdown.
    """
    config = get_cli_config(ctx)
    store = open_datastore(ctx, family)
    builder = ReportBuilder(store, store, store, config.currency)
    try:
        result = builder.cashflow(family, resolve_period(start, end))
    except (FinanceEngineError, FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    if output_format == "csv":
        emit(list(result.monthly_breakdown), "csv", output, monthly_cashflow_to_dataframe)
    else:
        emit(result.to_dict(), "json", output)


@report.command()
@family_option
@click.option("--start", type=DATE_TYPE, help="Start date (YYYY-MM-DD), defaults to first of the end month")
@click.option("--end", type=DATE_TYPE, help="End date (YYYY-MM-DD), defaults to today")
@click.option("--limit", type=int, help="Number of categories (default from config, capped at max outflows)")
@FORMAT_OPTION
@OUTPUT_OPTION
@click.pass_context
def outflows(
    ctx: click.Context,
    family: str,
    start: datetime | None,
    end: datetime | None,
    limit: int | None,
    output_format: str,
    output: str | None,
) -> None:
    """
    Largest top-level expense categories and their share of spending.

    Examples:
      famfinance report outflows --family smiths --limit 5
    """
    config = get_cli_config(ctx)
    store = open_datastore(ctx, family)
    builder = ReportBuilder(store, store, store, config.currency)
    limit = min(limit if limit is not None else config.reports.top_outflows_limit, config.reports.max_outflows)
    try:
        ranking = builder.top_outflows(family, resolve_period(start, end), limit)
    except (FinanceEngineError, FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    data = ranking if output_format == "csv" else [o.to_dict() for o in ranking]
    emit(data, output_format, output, outflows_to_dataframe)


@report.command()
@family_option
@click.option(
    "--period-type",
    type=click.Choice(["monthly", "quarterly", "ytd"]),
    default="monthly",
    help="Period covered by the totals (default: monthly)",
)
@click.option("--as-of", type=DATE_TYPE, help="Reference date (YYYY-MM-DD), defaults to today")
@OUTPUT_OPTION
@click.pass_context
def overview(
    ctx: click.Context, family: str, period_type: str, as_of: datetime | None, output: str | None
) -> None:
    """Net worth, period totals and the current month's budget."""
    config = get_cli_config(ctx)
    store = open_datastore(ctx, family)
    try:
        result = build_overview(
            store,
            store,
            store,
            store.budget_store(family),
            family,
            period_type=period_type,
            as_of=to_date(as_of),
            currency=config.currency,
        )
    except (FinanceEngineError, FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e)) from e
    emit(result.to_dict(), "json", output)
