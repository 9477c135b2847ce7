#!/usr/bin/env python3
"""
Budget CLI - Monthly budget commands.

Budgets are stored in <data_dir>/<family>/budgets.json.
"""

from datetime import date

import click

from ..budgets.engine import date_to_param
from ..budgets.models import BudgetSummary
from ..core.currency import parse_amount
from ..core.exceptions import FinanceEngineError
from ..operations import find_budget, get_or_bootstrap_budget, update_budget
from .options import emit, family_option, get_cli_config, open_datastore


def _print_summary(summary: BudgetSummary) -> None:
    budget = summary.budget
    click.echo(f"Budget {budget.month_param} ({budget.start_date} to {budget.end_date})")
    click.echo(f"  Budgeted spending:   {summary.budgeted_spending.format():>14}")
    click.echo(f"  Actual spending:     {summary.actual_spending.format():>14}")
    click.echo(f"  Available to spend:  {summary.available_to_spend.format():>14}")
    click.echo(f"  Percent spent:       {summary.percent_of_budget_spent:>13}%")
    click.echo(f"  Allocated spending:  {summary.allocated_spending.format():>14}")
    click.echo(f"  Expected income:     {summary.expected_income.format():>14}")
    click.echo(f"  Actual income:       {summary.actual_income.format():>14}")

    if summary.categories:
        click.echo()
        click.echo(f"  {'Category':<24} {'Budgeted':>12} {'Spent':>12} {'Remaining':>12} {'%':>7}")
        for category in summary.categories:
            click.echo(
                f"  {category.category.name:<24} {category.budgeted_spending.format():>12} "
                f"{category.actual_spending.format():>12} {category.available_to_spend.format():>12} "
                f"{category.percent_of_budget_spent:>7}"
            )


def _parse_category_amounts(values: tuple[str, ...]) -> dict[str, str]:
    amounts: dict[str, str] = {}
    for value in values:
        category_id, sep, amount = value.partition("=")
        if not sep or not category_id:
            raise click.BadParameter(f"Expected CATEGORY_ID=AMOUNT, got {value!r}", param_hint="--category")
        try:
            amounts[category_id] = str(parse_amount(amount))
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--category") from e
    return amounts


@click.group()
def budget() -> None:
    """Monthly budget commands."""
    pass


@budget.command()
@family_option
@click.option("--month", "-m", help="Month as YYYY-MM (default: current month)")
@click.option("--no-bootstrap", is_flag=True, help="Fail instead of creating a missing budget")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]), default="text", help="Output format")
@click.pass_context
def show(ctx: click.Context, family: str, month: str | None, no_bootstrap: bool, output_format: str) -> None:
    """
    Show a month's budget, creating it on first read.

    Examples:
      famfinance budget show --family smiths
      famfinance budget show --family smiths --month 2024-03 --format json
    """
    config = get_cli_config(ctx)
    store = open_datastore(ctx, family)
    month = month or date_to_param(date.today())

    lookup = find_budget if no_bootstrap else get_or_bootstrap_budget
    try:
        summary = lookup(store.budget_store(family), store, store, family, month, currency=config.currency)
    except (FinanceEngineError, FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    if output_format == "json":
        emit(summary.to_dict(), "json", None)
    else:
        _print_summary(summary)


@budget.command()
@family_option
@click.option("--month", "-m", required=True, help="Month as YYYY-MM")
@click.option("--budgeted-spending", help="New spending target")
@click.option("--expected-income", help="New expected income")
@click.option("--category", "categories", multiple=True, help="Category amount as CATEGORY_ID=AMOUNT (repeatable)")
@click.option("--strict", is_flag=True, help="Fail on categories not in the budget instead of skipping them")
@click.pass_context
def update(
    ctx: click.Context,
    family: str,
    month: str,
    budgeted_spending: str | None,
    expected_income: str | None,
    categories: tuple[str, ...],
    strict: bool,
) -> None:
    """
    Update an existing budget's totals and category amounts in one save.

    Examples:
      famfinance budget update -f smiths -m 2024-03 --budgeted-spending 2500
      famfinance budget update -f smiths -m 2024-03 --category groceries=600 --category dining=200
    """
    config = get_cli_config(ctx)
    store = open_datastore(ctx, family)
    category_amounts = _parse_category_amounts(categories)

    try:
        summary = update_budget(
            store.budget_store(family),
            store,
            store,
            family,
            month,
            budgeted_spending=parse_amount(budgeted_spending) if budgeted_spending else None,
            expected_income=parse_amount(expected_income) if expected_income else None,
            category_amounts=category_amounts,
            strict=strict,
            currency=config.currency,
        )
    except (FinanceEngineError, FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Updated budget {summary.budget.month_param} for {family}")
    _print_summary(summary)
