#!/usr/bin/env python3
"""
Budget Engine

Month-long budgets per family: budgeted vs actual vs remaining spending,
per category and in aggregate.

Lifecycle per (family, month):
- Absent: the first read bootstraps a budget with month-boundary dates, the
  family currency, no totals set and one zero BudgetCategory per expense
  category.
- Active: totals and category amounts change through update(), which
  validates everything before a single save.

Budgets are never deleted here.
"""

import logging
import re
import uuid
from collections.abc import Mapping
from datetime import date
from decimal import Decimal

from ..core.currency import AmountLike
from ..core.exceptions import BudgetNotFound, CategoryNotInBudget, CurrencyMismatch, InvalidMonthFormat
from ..core.models import CategoryId, Classification
from ..core.money import Money
from ..core.period import beginning_of_month
from ..statements.income_statement import IncomeStatement
from .models import Budget, BudgetCategory, BudgetCategorySummary, BudgetSummary
from .store import BudgetStore

logger = logging.getLogger(__name__)

_MONTH_PARAM = re.compile(r"^(\d{4})-(\d{2})$")


def param_to_date(value: str | None) -> date | None:
    """
    Map a "YYYY-MM" string to the first day of that month.

    Args:
        value: Month parameter

    Returns:
        First day of the month, or None for anything not in YYYY-MM form

    Examples:
        param_to_date("2024-03") -> date(2024, 3, 1)
        param_to_date("2024-13") -> None
        param_to_date("March") -> None
    """
    if not isinstance(value, str):
        return None
    match = _MONTH_PARAM.match(value.strip())
    if not match:
        return None
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12 or year < 1:
        return None
    return date(year, month, 1)


def date_to_param(day: date) -> str:
    """Format a date's month as YYYY-MM."""
    return day.strftime("%Y-%m")


def parse_month(value: date | str) -> date:
    """
    Resolve a month given as a date or a "YYYY-MM" string.

    Raises:
        InvalidMonthFormat: If a string is not in YYYY-MM form
    """
    if isinstance(value, date):
        return beginning_of_month(value)
    parsed = param_to_date(value)
    if parsed is None:
        raise InvalidMonthFormat(f"Invalid month format {value!r}. Use YYYY-MM.")
    return parsed


class BudgetEngine:
    """
    Reads, bootstraps, updates and summarizes one family's budgets.

    The family, its categories and its ledger come from the IncomeStatement
    the engine is given, so actual spending always uses the same snapshot.
    """

    def __init__(self, store: BudgetStore, income_statement: IncomeStatement):
        self.store = store
        self.income_statement = income_statement

    @property
    def family_id(self) -> str:
        return self.income_statement.family_id

    @property
    def currency(self) -> str:
        return self.income_statement.currency

    def find(self, month: date | str) -> Budget:
        """
        Get the budget for a month without creating one.

        Raises:
            InvalidMonthFormat: If month is a malformed string
            BudgetNotFound: If no budget exists for the month
        """
        start = parse_month(month)
        budget = self.store.find(self.family_id, start)
        if budget is None:
            raise BudgetNotFound(self.family_id, date_to_param(start))
        return budget

    def get_or_bootstrap(self, month: date | str) -> Budget:
        """
        Get the budget for a month, creating it on first read.

        Calling this twice for the same month returns the same budget.
        """
        return self.bootstrap(month)

    def bootstrap(self, month: date | str) -> Budget:
        """
        Create and save the default budget for a month.

        A month that already has a budget keeps it: the stored budget is
        returned unchanged and nothing is saved.
        """
        start = parse_month(month)
        existing = self.store.find(self.family_id, start)
        if existing is not None:
            logger.debug("Budget %s already exists for %s %s", existing.id, self.family_id, existing.month_param)
            return existing

        expense_tree = self.income_statement.categories.filter(Classification.EXPENSE)

        categories: list[BudgetCategory] = []
        for root in expense_tree.roots():
            for category in [root, *expense_tree.children_of(root.id)]:
                categories.append(
                    BudgetCategory(category_id=category.id, budgeted_spending=Money.zero(self.currency))
                )

        budget = Budget.for_month(
            budget_id=str(uuid.uuid4()),
            family_id=self.family_id,
            month=start,
            currency=self.currency,
            categories=tuple(categories),
        )
        logger.info(
            "Bootstrapped budget %s for %s %s with %d categories",
            budget.id,
            self.family_id,
            budget.month_param,
            len(categories),
        )
        return self.store.save(budget)

    def _to_money(self, budget: Budget, value: Money | AmountLike) -> Money:
        if isinstance(value, Money):
            if value.currency != budget.currency:
                raise CurrencyMismatch(value.currency, budget.currency, "budget")
            return value
        return Money.of(value, budget.currency)

    def update(
        self,
        budget: Budget,
        budgeted_spending: Money | AmountLike | None = None,
        expected_income: Money | AmountLike | None = None,
        categories: Mapping[CategoryId, Money | AmountLike] | None = None,
        strict: bool = False,
    ) -> Budget:
        """
        Apply a batch of changes and save once.

        Only supplied fields change. Every value is validated before
        anything is saved, so a failure leaves the stored budget untouched.

        Args:
            budget: Budget to change
            budgeted_spending: New spending target
            expected_income: New expected income
            categories: Category id to new budgeted spending
            strict: Raise for categories not in the budget instead of skipping them

        Returns:
            The saved Budget (same id)

        Raises:
            CategoryNotInBudget: In strict mode, for unknown category ids
            CurrencyMismatch: If a Money value is in another currency
        """
        new_spending = self._to_money(budget, budgeted_spending) if budgeted_spending is not None else None
        new_income = self._to_money(budget, expected_income) if expected_income is not None else None

        known = set(budget.category_ids)
        category_amounts: dict[CategoryId, Money] = {}
        for category_id, amount in (categories or {}).items():
            if category_id not in known:
                if strict:
                    raise CategoryNotInBudget(category_id)
                logger.warning("Ignoring update for category %r not in budget %s", category_id, budget.id)
                continue
            category_amounts[category_id] = self._to_money(budget, amount)

        updated = budget.with_changes(
            budgeted_spending=new_spending,
            expected_income=new_income,
            category_amounts=category_amounts,
        )
        if updated == budget:
            return budget

        logger.info("Updating budget %s (%d category changes)", budget.id, len(category_amounts))
        return self.store.save(updated)

    def update_totals(
        self,
        budget: Budget,
        budgeted_spending: Money | AmountLike | None = None,
        expected_income: Money | AmountLike | None = None,
    ) -> Budget:
        """Change the budget-level spending target and/or expected income."""
        return self.update(budget, budgeted_spending=budgeted_spending, expected_income=expected_income)

    def update_category(
        self,
        budget: Budget,
        category_id: CategoryId,
        budgeted_spending: Money | AmountLike,
        strict: bool = False,
    ) -> Budget:
        """Change one category's budgeted spending; unknown ids are ignored unless strict."""
        return self.update(budget, categories={category_id: budgeted_spending}, strict=strict)

    def summarize(self, budget: Budget) -> BudgetSummary:
        """
        Compute the derived figures for a budget.

        actual_spending is the month's expense total; percentages are zero
        whenever nothing was budgeted.
        """
        period = budget.period
        entries = self.income_statement.entries(period)
        expenses = self.income_statement.totals_for(Classification.EXPENSE, period, entries)
        income = self.income_statement.totals_for(Classification.INCOME, period, entries)

        budgeted = budget.budgeted_spending_money
        actual = expenses.total
        allocated = budget.allocated_spending
        tree = self.income_statement.categories

        category_summaries = []
        for budget_category in budget.categories:
            if budget_category.category_id not in tree:
                logger.debug("Budget category %r no longer exists", budget_category.category_id)
                continue
            category_actual = expenses.total_for(budget_category.category_id)
            category_summaries.append(
                BudgetCategorySummary(
                    category=tree.get(budget_category.category_id),
                    budgeted_spending=budget_category.budgeted_spending,
                    actual_spending=category_actual,
                    available_to_spend=budget_category.budgeted_spending - category_actual,
                    percent_of_budget_spent=_percent_spent(category_actual, budget_category.budgeted_spending),
                )
            )

        return BudgetSummary(
            budget=budget,
            actual_spending=actual,
            allocated_spending=allocated,
            available_to_spend=budgeted - actual,
            percent_of_budget_spent=_percent_spent(actual, budgeted),
            actual_income=income.total,
            available_to_allocate=budgeted - allocated,
            remaining_expected_income=budget.expected_income_money - income.total,
            categories=tuple(category_summaries),
        )


def _percent_spent(actual: Money, budgeted: Money) -> Decimal:
    return actual.percent_of(budgeted, places=1)
