#!/usr/bin/env python3
"""
Income Statement

Income and expense totals for a family over a period, with per-category
breakdowns rolled up the category tree.

Totals are recomputed from the ledger on every call; nothing is cached.
"""

import logging
from collections.abc import Iterable

from ..core.categories import CategoryTree
from ..core.currency import DEFAULT_CURRENCY
from ..core.models import (
    UNCATEGORIZED_ID,
    Category,
    CategoryId,
    CategoryTotal,
    Classification,
    Entry,
    IncomeStatementTotals,
)
from ..core.money import Money
from ..core.period import Period
from ..core.sources import LedgerSource

logger = logging.getLogger(__name__)


def _ranking_key(category_total: CategoryTotal) -> tuple:
    # Descending total, then name ascending
    return (-category_total.total.amount, category_total.category.name)


class IncomeStatement:
    """
    Computes income and expense totals for one family.

    Entries are partitioned by their own classification; the ledger's sign
    convention is kept as-is. Entries whose category is missing or belongs
    to the other classification are totalled under "Uncategorized".

    Example:
        >>> statement = IncomeStatement(ledger, tree, family_id="smiths")
        >>> march = Period.month_of(date(2024, 3, 1))
        >>> expenses = statement.expense_totals(march)
        >>> [(ct.category.name, ct.total.format()) for ct in expenses.category_totals]
        [('Groceries', '$120.00'), ('Dining', '$80.00')]
    """

    def __init__(
        self,
        ledger: LedgerSource,
        categories: CategoryTree,
        family_id: str,
        currency: str = DEFAULT_CURRENCY,
    ):
        self.ledger = ledger
        self.categories = categories
        self.family_id = family_id
        self.currency = currency

    def entries(self, period: Period) -> list[Entry]:
        """Ledger entries dated within period."""
        entries = [e for e in self.ledger.entries(self.family_id, period) if period.contains(e.date)]
        logger.debug("Loaded %d entries for %s in %s", len(entries), self.family_id, period)
        return entries

    def income_totals(self, period: Period) -> IncomeStatementTotals:
        """Income total and category breakdown for period."""
        return self.totals_for(Classification.INCOME, period)

    def expense_totals(self, period: Period) -> IncomeStatementTotals:
        """Expense total and category breakdown for period."""
        return self.totals_for(Classification.EXPENSE, period)

    def net_savings(self, period: Period) -> Money:
        """Income minus expenses for period."""
        entries = self.entries(period)
        income = self.totals_for(Classification.INCOME, period, entries)
        expenses = self.totals_for(Classification.EXPENSE, period, entries)
        return income.total - expenses.total

    def totals_for(
        self,
        classification: Classification,
        period: Period,
        entries: Iterable[Entry] | None = None,
    ) -> IncomeStatementTotals:
        """
        Aggregate one classification of entries.

        Args:
            classification: Income or expense
            period: Period to aggregate
            entries: Pre-fetched entries for period, to avoid a second ledger query

        Returns:
            IncomeStatementTotals with total, ranked category_totals and full rollup

        Raises:
            CurrencyMismatch: If an entry is not in the statement currency
        """
        if entries is None:
            entries = self.entries(period)
        selected = [e for e in entries if e.classification == classification and period.contains(e.date)]

        tree = self.categories.filter(classification)
        leaf_totals: dict[CategoryId, Money] = {}
        uncategorized = Money.zero(self.currency)
        has_uncategorized = False

        for entry in selected:
            category_id = entry.category_id
            if category_id is None or category_id not in tree:
                if category_id is not None:
                    logger.debug("Entry category %r is not a %s category", category_id, classification.value)
                uncategorized = uncategorized.add(entry.amount)
                has_uncategorized = True
                continue
            leaf_totals[category_id] = leaf_totals.get(category_id, Money.zero(self.currency)).add(entry.amount)

        total = Money.sum((e.amount for e in selected), self.currency)
        rollup = tree.rollup(leaf_totals, self.currency)

        touched: set[CategoryId] = set()
        for category_id in leaf_totals:
            touched.add(category_id)
            touched.add(tree.root_of(category_id).id)

        category_totals = [CategoryTotal(category=tree.get(cid), total=rollup[cid]) for cid in touched]

        if has_uncategorized:
            rollup[UNCATEGORIZED_ID] = uncategorized
            category_totals.append(
                CategoryTotal(category=Category.uncategorized(classification), total=uncategorized)
            )

        category_totals.sort(key=_ranking_key)

        return IncomeStatementTotals(
            classification=classification,
            total=total,
            category_totals=tuple(category_totals),
            rollup=rollup,
        )

    def transaction_count(
        self,
        period: Period,
        category_ids: Iterable[CategoryId] | None = None,
        classification: Classification | None = None,
    ) -> int:
        """
        Count entries in period, optionally limited to categories or a classification.

        Args:
            period: Period to count within
            category_ids: Only count entries in these categories
            classification: Only count entries with this classification
        """
        wanted = set(category_ids) if category_ids is not None else None
        count = 0
        for entry in self.entries(period):
            if classification is not None and entry.classification != classification:
                continue
            if wanted is not None and (entry.category_id or UNCATEGORIZED_ID) not in wanted:
                continue
            count += 1
        return count
