#!/usr/bin/env python3
"""
Engine Operations

The engine's entry points as plain functions. Each call takes its
collaborators, the family and primitive parameters explicitly and
computes a fresh result; nothing is kept between calls.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from typing import Any

from .analysis.reports import (
    DEFAULT_OUTFLOWS_LIMIT,
    CashflowItem,
    CashflowReport,
    NetWorthPoint,
    OutflowEntry,
    ReportBuilder,
)
from .budgets.engine import BudgetEngine
from .budgets.models import BudgetSummary
from .budgets.store import BudgetStore
from .core.categories import CategoryTree
from .core.currency import DEFAULT_CURRENCY, AmountLike
from .core.models import CategoryId, Classification, IncomeStatementTotals
from .core.money import Money
from .core.period import Granularity, Period
from .core.sources import AccountBalanceSource, CategorySource, LedgerSource
from .statements.balance_sheet import BalanceSheet, BalanceSheetSnapshot
from .statements.income_statement import IncomeStatement

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IncomeStatementResult:
    """Income and expense totals for one period."""

    period: Period
    income: IncomeStatementTotals
    expenses: IncomeStatementTotals

    @property
    def net_savings(self) -> Money:
        return self.income.total - self.expenses.total

    def to_dict(self) -> dict[str, Any]:
        return {
            "start_date": self.period.start_date.isoformat(),
            "end_date": self.period.end_date.isoformat(),
            "income": self.income.to_dict(),
            "expenses": self.expenses.to_dict(),
            "net_savings": self.net_savings.format(),
        }


@dataclass(frozen=True)
class Overview:
    """Headline figures for one family over a period, plus this month's budget."""

    period_type: str
    period: Period
    as_of: date
    net_worth: Money
    transaction_count: int
    income: Money
    expenses: Money
    budget: BudgetSummary

    @property
    def net_savings(self) -> Money:
        return self.income - self.expenses

    def to_dict(self) -> dict[str, Any]:
        return {
            "period_type": self.period_type,
            "start_date": self.period.start_date.isoformat(),
            "end_date": self.period.end_date.isoformat(),
            "net_worth": self.net_worth.format(),
            "transactions_count": self.transaction_count,
            "income": self.income.format(),
            "expenses": self.expenses.format(),
            "net_savings": self.net_savings.format(),
            "budget": self.budget.to_dict(),
        }


def _income_statement(
    ledger: LedgerSource, categories: CategorySource, family_id: str, currency: str
) -> IncomeStatement:
    tree = CategoryTree(categories.categories(family_id))
    return IncomeStatement(ledger, tree, family_id, currency)


def _budget_engine(
    store: BudgetStore, ledger: LedgerSource, categories: CategorySource, family_id: str, currency: str
) -> BudgetEngine:
    return BudgetEngine(store, _income_statement(ledger, categories, family_id, currency))


def compute_income_statement(
    ledger: LedgerSource,
    categories: CategorySource,
    family_id: str,
    period: Period,
    currency: str = DEFAULT_CURRENCY,
) -> IncomeStatementResult:
    """
    Income and expense totals for a family over a period.

    Raises:
        InvalidCategoryTree: If the family's categories nest too deeply
        CurrencyMismatch: If an entry is not in currency
    """
    statement = _income_statement(ledger, categories, family_id, currency)
    entries = statement.entries(period)
    return IncomeStatementResult(
        period=period,
        income=statement.totals_for(Classification.INCOME, period, entries),
        expenses=statement.totals_for(Classification.EXPENSE, period, entries),
    )


def compute_balance_sheet(
    balances: AccountBalanceSource,
    family_id: str,
    as_of: date | None = None,
    currency: str = DEFAULT_CURRENCY,
) -> BalanceSheetSnapshot:
    """Assets, liabilities and net worth as of a date (default today)."""
    return BalanceSheet(balances, family_id, currency, as_of=as_of).snapshot()


def get_or_bootstrap_budget(
    store: BudgetStore,
    ledger: LedgerSource,
    categories: CategorySource,
    family_id: str,
    month: date | str,
    currency: str = DEFAULT_CURRENCY,
) -> BudgetSummary:
    """
    Budget summary for a month, creating the budget on first read.

    Raises:
        InvalidMonthFormat: If month is a malformed YYYY-MM string
    """
    engine = _budget_engine(store, ledger, categories, family_id, currency)
    return engine.summarize(engine.get_or_bootstrap(month))


def find_budget(
    store: BudgetStore,
    ledger: LedgerSource,
    categories: CategorySource,
    family_id: str,
    month: date | str,
    currency: str = DEFAULT_CURRENCY,
) -> BudgetSummary:
    """
    Budget summary for a month that must already exist.

    Raises:
        BudgetNotFound: If the month has no budget
    """
    engine = _budget_engine(store, ledger, categories, family_id, currency)
    return engine.summarize(engine.find(month))


def update_budget(
    store: BudgetStore,
    ledger: LedgerSource,
    categories: CategorySource,
    family_id: str,
    month: date | str,
    budgeted_spending: Money | AmountLike | None = None,
    expected_income: Money | AmountLike | None = None,
    category_amounts: Mapping[CategoryId, Money | AmountLike] | None = None,
    strict: bool = False,
    currency: str = DEFAULT_CURRENCY,
) -> BudgetSummary:
    """
    Apply a batch of changes to an existing budget and return its new summary.

    All changes are validated before the single save; on failure the stored
    budget is unchanged.

    Raises:
        BudgetNotFound: If the month has no budget
        CategoryNotInBudget: In strict mode, for category ids not in the budget
        CurrencyMismatch: If a Money value is in another currency
    """
    engine = _budget_engine(store, ledger, categories, family_id, currency)
    budget = engine.update(
        engine.find(month),
        budgeted_spending=budgeted_spending,
        expected_income=expected_income,
        categories=category_amounts,
        strict=strict,
    )
    return engine.summarize(budget)


def build_net_worth_series(
    balances: AccountBalanceSource,
    family_id: str,
    start_date: date,
    end_date: date,
    granularity: Granularity | str = Granularity.MONTHLY,
    currency: str = DEFAULT_CURRENCY,
) -> list[NetWorthPoint]:
    """
    Net worth at the end of each sub-period between two dates.

    Raises:
        InvalidPeriod: If end_date is before start_date
    """
    builder = ReportBuilder(balances=balances, currency=currency)
    return builder.net_worth_series(family_id, start_date, end_date, granularity)


def build_cashflow_breakdown(
    ledger: LedgerSource,
    categories: CategorySource,
    family_id: str,
    period: Period,
    currency: str = DEFAULT_CURRENCY,
) -> list[CashflowItem]:
    builder = ReportBuilder(ledger=ledger, categories=categories, currency=currency)
    return builder.cashflow_breakdown(family_id, period)


def build_cashflow_report(
    ledger: LedgerSource,
    categories: CategorySource,
    family_id: str,
    period: Period,
    currency: str = DEFAULT_CURRENCY,
) -> CashflowReport:
    """Totals, ranked category breakdown and monthly breakdown for a period."""
    builder = ReportBuilder(ledger=ledger, categories=categories, currency=currency)
    return builder.cashflow(family_id, period)


def build_top_outflows(
    ledger: LedgerSource,
    categories: CategorySource,
    family_id: str,
    period: Period,
    limit: int = DEFAULT_OUTFLOWS_LIMIT,
    currency: str = DEFAULT_CURRENCY,
) -> list[OutflowEntry]:
    builder = ReportBuilder(ledger=ledger, categories=categories, currency=currency)
    return builder.top_outflows(family_id, period, limit)


def build_overview(
    ledger: LedgerSource,
    balances: AccountBalanceSource,
    categories: CategorySource,
    store: BudgetStore,
    family_id: str,
    period_type: str = "monthly",
    as_of: date | None = None,
    currency: str = DEFAULT_CURRENCY,
) -> Overview:
    """
    Headline figures for a period chosen by type relative to as_of.

    period_type is "monthly", "quarterly" or "ytd"; anything else means
    monthly. The budget is always the one for as_of's month and is
    bootstrapped if it does not exist yet.
    """
    as_of = as_of or date.today()
    period = Period.for_type(period_type, as_of)

    statement = _income_statement(ledger, categories, family_id, currency)
    entries = statement.entries(period)
    income = statement.totals_for(Classification.INCOME, period, entries)
    expenses = statement.totals_for(Classification.EXPENSE, period, entries)

    engine = BudgetEngine(store, statement)
    budget = engine.summarize(engine.get_or_bootstrap(as_of))

    logger.debug("Built %s overview for %s over %s", period_type, family_id, period)
    return Overview(
        period_type=period_type,
        period=period,
        as_of=as_of,
        net_worth=BalanceSheet(balances, family_id, currency, as_of=as_of).net_worth(),
        transaction_count=len(entries),
        income=income.total,
        expenses=expenses.total,
        budget=budget,
    )
