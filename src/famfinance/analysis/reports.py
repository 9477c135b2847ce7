#!/usr/bin/env python3
"""
Report Builder

Derived reports composed from Period, IncomeStatement, BalanceSheet:
net-worth series, cash-flow breakdowns and top-outflow rankings.

Every report is computed from the collaborators' snapshots at call time.
"""

import logging
from collections import Counter
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any

from ..core.categories import CategoryTree
from ..core.currency import DEFAULT_CURRENCY
from ..core.models import UNCATEGORIZED_ID, Category, CategoryTotal, Classification, Entry
from ..core.money import Money
from ..core.period import Granularity, Period
from ..core.sources import AccountBalanceSource, CategorySource, LedgerSource
from ..statements.balance_sheet import BalanceSheet
from ..statements.income_statement import IncomeStatement

logger = logging.getLogger(__name__)

DEFAULT_OUTFLOWS_LIMIT = 10
MAX_OUTFLOWS_LIMIT = 50
MAX_NET_WORTH_MONTHS = 6


@dataclass(frozen=True)
class NetWorthPoint:
    """Balance sheet totals as of one date in a series."""

    date: date
    assets: Money
    liabilities: Money
    net_worth: Money

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "assets": self.assets.format(),
            "liabilities": self.liabilities.format(),
            "net_worth": self.net_worth.format(),
        }


@dataclass(frozen=True)
class CashflowItem:
    """One category's total in the merged income/expense breakdown."""

    category: Category
    type: Classification
    total: Money

    def to_dict(self) -> dict[str, Any]:
        return {
            "category_id": self.category.id,
            "name": self.category.name,
            "type": self.type.value,
            "total": self.total.format(),
        }


@dataclass(frozen=True)
class MonthlyCashflow:
    """Income, expenses and net for one calendar month of a period."""

    period: Period
    label: str
    income: Money
    expenses: Money

    @property
    def net(self) -> Money:
        return self.income - self.expenses

    def to_dict(self) -> dict[str, Any]:
        return {
            "month": self.label,
            "start_date": self.period.start_date.isoformat(),
            "end_date": self.period.end_date.isoformat(),
            "income": self.income.format(),
            "expenses": self.expenses.format(),
            "net": self.net.format(),
        }


@dataclass(frozen=True)
class CashflowReport:
    """Totals, category breakdown and monthly breakdown for a period."""

    period: Period
    income: Money
    expenses: Money
    by_category: tuple[CashflowItem, ...]
    monthly_breakdown: tuple[MonthlyCashflow, ...]

    @property
    def net_savings(self) -> Money:
        return self.income - self.expenses

    def to_dict(self) -> dict[str, Any]:
        return {
            "start_date": self.period.start_date.isoformat(),
            "end_date": self.period.end_date.isoformat(),
            "income": self.income.format(),
            "expenses": self.expenses.format(),
            "net_savings": self.net_savings.format(),
            "by_category": [item.to_dict() for item in self.by_category],
            "monthly_breakdown": [row.to_dict() for row in self.monthly_breakdown],
        }


@dataclass(frozen=True)
class OutflowEntry:
    """One top-level expense category in a top-outflows ranking."""

    category: Category
    amount: Money
    percentage: Decimal
    transaction_count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "category_id": self.category.id,
            "category": self.category.name,
            "amount": self.amount.format(),
            "percentage": float(self.percentage),
            "transaction_count": self.transaction_count,
        }


def _breakdown_key(item: CashflowItem) -> tuple[int, Decimal]:
    # Income first by descending total; expenses share one key and keep their order
    if item.type == Classification.INCOME:
        return (0, -item.total.amount)
    return (1, Decimal(0))


class ReportBuilder:
    """
    Builds reports for any family from shared collaborators.

    Only the collaborators a report reads are required: the net-worth series
    needs balances, every other report needs the ledger and categories.

    Example:
        >>> builder = ReportBuilder(ledger, balances, categories)
        >>> q1 = Period.custom(date(2024, 1, 1), date(2024, 3, 31))
        >>> [o.category.name for o in builder.top_outflows("smiths", q1, limit=3)]
        ['Rent', 'Food', 'Transport']
    """

    def __init__(
        self,
        ledger: LedgerSource | None = None,
        balances: AccountBalanceSource | None = None,
        categories: CategorySource | None = None,
        currency: str = DEFAULT_CURRENCY,
    ):
        self.ledger = ledger
        self.balances = balances
        self.categories = categories
        self.currency = currency

    def category_tree(self, family_id: str) -> CategoryTree:
        return CategoryTree(self.categories.categories(family_id))

    def income_statement(self, family_id: str) -> IncomeStatement:
        return IncomeStatement(self.ledger, self.category_tree(family_id), family_id, self.currency)

    def balance_sheet(self, family_id: str, as_of: date | None = None) -> BalanceSheet:
        return BalanceSheet(self.balances, family_id, self.currency, as_of=as_of)

    def net_worth_series(
        self,
        family_id: str,
        start_date: date,
        end_date: date,
        granularity: Granularity | str = Granularity.MONTHLY,
    ) -> list[NetWorthPoint]:
        """
        One balance sheet point per sub-period between two dates.

        Each point is evaluated as of its sub-period's end, which is clamped
        to end_date for the final partial sub-period.

        Raises:
            InvalidPeriod: If end_date is before start_date
        """
        period = Period.custom(start_date, end_date)
        if not getattr(self.balances, "supports_history", True):
            logger.warning(
                "Balance source for %s has no history; every net worth point uses current balances",
                family_id,
            )

        sheet = self.balance_sheet(family_id)
        points = []
        for sub_period in period.subdivide(granularity):
            snapshot = sheet.snapshot(sub_period.end_date)
            points.append(
                NetWorthPoint(
                    date=sub_period.end_date,
                    assets=snapshot.assets.total,
                    liabilities=snapshot.liabilities.total,
                    net_worth=snapshot.net_worth,
                )
            )
        return points

    def trailing_net_worth(
        self,
        family_id: str,
        months: int = MAX_NET_WORTH_MONTHS,
        as_of: date | None = None,
        granularity: Granularity | str = Granularity.MONTHLY,
    ) -> list[NetWorthPoint]:
        """
        Net-worth series from the start of the month `months` months before
        as_of (default today) through as_of.

        months is clamped to 0..6.
        """
        months = max(0, min(months, MAX_NET_WORTH_MONTHS))
        as_of = as_of or date.today()
        start_date = Period.trailing_months(months, as_of).start_date
        return self.net_worth_series(family_id, start_date, as_of, granularity)

    def cashflow_breakdown(self, family_id: str, period: Period) -> list[CashflowItem]:
        """
        Income and expense category totals merged into one ranked list.

        Income items come first by descending total; expense items follow in
        the order the expense statement ranked them.
        """
        statement = self.income_statement(family_id)
        entries = statement.entries(period)
        income = statement.totals_for(Classification.INCOME, period, entries)
        expenses = statement.totals_for(Classification.EXPENSE, period, entries)
        return self._merge_breakdown(income.category_totals, expenses.category_totals)

    @staticmethod
    def _merge_breakdown(
        income_totals: tuple[CategoryTotal, ...], expense_totals: tuple[CategoryTotal, ...]
    ) -> list[CashflowItem]:
        items = [CashflowItem(ct.category, Classification.INCOME, ct.total) for ct in income_totals]
        items += [CashflowItem(ct.category, Classification.EXPENSE, ct.total) for ct in expense_totals]
        return sorted(items, key=_breakdown_key)

    def monthly_breakdown(self, family_id: str, period: Period) -> list[MonthlyCashflow]:
        """Income, expenses and net for each calendar month of period."""
        statement = self.income_statement(family_id)
        return self._monthly_rows(statement, period, statement.entries(period))

    @staticmethod
    def _monthly_rows(statement: IncomeStatement, period: Period, entries: list[Entry]) -> list[MonthlyCashflow]:
        rows = []
        for month in period.months():
            income = statement.totals_for(Classification.INCOME, month, entries)
            expenses = statement.totals_for(Classification.EXPENSE, month, entries)
            rows.append(MonthlyCashflow(period=month, label=month.label(), income=income.total, expenses=expenses.total))
        return rows

    def cashflow(self, family_id: str, period: Period) -> CashflowReport:
        """Full cash-flow report: totals, category breakdown and monthly breakdown."""
        statement = self.income_statement(family_id)
        entries = statement.entries(period)
        income = statement.totals_for(Classification.INCOME, period, entries)
        expenses = statement.totals_for(Classification.EXPENSE, period, entries)

        return CashflowReport(
            period=period,
            income=income.total,
            expenses=expenses.total,
            by_category=tuple(self._merge_breakdown(income.category_totals, expenses.category_totals)),
            monthly_breakdown=tuple(self._monthly_rows(statement, period, entries)),
        )

    def top_outflows(self, family_id: str, period: Period, limit: int = DEFAULT_OUTFLOWS_LIMIT) -> list[OutflowEntry]:
        """
        Largest top-level expense categories with their share of all expenses.

        Subcategories are left out since their parents already include them.
        limit is clamped to 0..50. Transaction counts cover each category and
        its subcategories.
        """
        limit = max(0, min(limit, MAX_OUTFLOWS_LIMIT))

        statement = self.income_statement(family_id)
        entries = statement.entries(period)
        expenses = statement.totals_for(Classification.EXPENSE, period, entries)
        total_expenses = expenses.total

        expense_tree = statement.categories.filter(Classification.EXPENSE)
        counts: Counter[str] = Counter()
        for entry in entries:
            if entry.classification != Classification.EXPENSE:
                continue
            if entry.category_id is not None and entry.category_id in expense_tree:
                counts[expense_tree.root_of(entry.category_id).id] += 1
            else:
                counts[UNCATEGORIZED_ID] += 1

        ranked = sorted(expenses.root_totals(), key=lambda ct: -ct.total.amount)[:limit]
        outflows = [
            OutflowEntry(
                category=ct.category,
                amount=ct.total,
                percentage=ct.total.percent_of(total_expenses),
                transaction_count=counts[ct.category.id],
            )
            for ct in ranked
        ]
        logger.debug("Top %d outflows for %s in %s", len(outflows), family_id, period)
        return outflows
