#!/usr/bin/env python3
"""
Budget Domain Models

A Budget covers exactly one calendar month for one family and carries an
optional spending target, an optional expected income and one
BudgetCategory per expense category. Summaries pair a Budget with the
actual figures computed from the ledger.
"""

from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from typing import Any

from ..core.currency import DEFAULT_CURRENCY, normalize_currency
from ..core.exceptions import InvalidPeriod
from ..core.models import Category, CategoryId
from ..core.money import Money
from ..core.period import Period, end_of_month


def _money_or_none(value: Any, currency: str) -> Money | None:
    if value is None:
        return None
    return Money.of(str(value), currency)


@dataclass(frozen=True)
class BudgetCategory:
    """Spending target for one category within a Budget."""

    category_id: CategoryId
    budgeted_spending: Money

    def to_dict(self) -> dict[str, Any]:
        return {
            "category_id": self.category_id,
            "budgeted_spending": str(self.budgeted_spending.amount),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], currency: str) -> "BudgetCategory":
        return cls(
            category_id=str(data["category_id"]),
            budgeted_spending=Money.of(str(data.get("budgeted_spending", "0")), currency),
        )


@dataclass(frozen=True)
class Budget:
    """
    One family's budget for one calendar month.

    start_date and end_date always match the month boundaries derived from
    start_date. Budgets are immutable: updates produce a new Budget with the
    same id.
    """

    id: str
    family_id: str
    start_date: date
    end_date: date
    currency: str = DEFAULT_CURRENCY
    budgeted_spending: Money | None = None
    expected_income: Money | None = None
    categories: tuple[BudgetCategory, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "currency", normalize_currency(self.currency))
        if self.start_date.day != 1:
            raise InvalidPeriod(f"Budget must start on the first of a month, got {self.start_date}")
        month_end = end_of_month(self.start_date)
        if self.end_date != month_end:
            raise InvalidPeriod(f"Budget starting {self.start_date} must end on {month_end}, got {self.end_date}")

    @classmethod
    def for_month(
        cls, budget_id: str, family_id: str, month: date, currency: str = DEFAULT_CURRENCY, **kwargs
    ) -> "Budget":
        """Create a Budget whose dates are the boundaries of month."""
        period = Period.month_of(month)
        return cls(
            id=budget_id,
            family_id=family_id,
            start_date=period.start_date,
            end_date=period.end_date,
            currency=currency,
            **kwargs,
        )

    @property
    def period(self) -> Period:
        return Period(start_date=self.start_date, end_date=self.end_date)

    @property
    def month_param(self) -> str:
        """Month key in YYYY-MM form."""
        return self.start_date.strftime("%Y-%m")

    @property
    def budgeted_spending_money(self) -> Money:
        """Spending target, zero until one is set."""
        return self.budgeted_spending or Money.zero(self.currency)

    @property
    def expected_income_money(self) -> Money:
        """Expected income, zero until one is set."""
        return self.expected_income or Money.zero(self.currency)

    @property
    def allocated_spending(self) -> Money:
        """Sum of every category's budgeted spending."""
        return Money.sum((bc.budgeted_spending for bc in self.categories), self.currency)

    @property
    def category_ids(self) -> list[CategoryId]:
        return [bc.category_id for bc in self.categories]

    def category(self, category_id: CategoryId) -> BudgetCategory | None:
        for budget_category in self.categories:
            if budget_category.category_id == category_id:
                return budget_category
        return None

    def with_changes(
        self,
        budgeted_spending: Money | None = None,
        expected_income: Money | None = None,
        category_amounts: dict[CategoryId, Money] | None = None,
    ) -> "Budget":
        """
        Copy with the supplied fields replaced.

        Fields left as None keep their current value. category_amounts only
        touches categories already in this budget.
        """
        changes: dict[str, Any] = {}
        if budgeted_spending is not None:
            changes["budgeted_spending"] = budgeted_spending
        if expected_income is not None:
            changes["expected_income"] = expected_income
        if category_amounts:
            changes["categories"] = tuple(
                replace(bc, budgeted_spending=category_amounts[bc.category_id])
                if bc.category_id in category_amounts
                else bc
                for bc in self.categories
            )
        return replace(self, **changes) if changes else self

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "family_id": self.family_id,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "currency": self.currency,
            "budgeted_spending": str(self.budgeted_spending.amount) if self.budgeted_spending else None,
            "expected_income": str(self.expected_income.amount) if self.expected_income else None,
            "categories": [bc.to_dict() for bc in self.categories],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Budget":
        """
        Create Budget from a stored dict.

        Args:
            data: Dictionary as produced by to_dict()

        Returns:
            Budget instance
        """
        currency = data.get("currency", DEFAULT_CURRENCY)
        return cls(
            id=data["id"],
            family_id=data["family_id"],
            start_date=date.fromisoformat(data["start_date"]),
            end_date=date.fromisoformat(data["end_date"]),
            currency=currency,
            budgeted_spending=_money_or_none(data.get("budgeted_spending"), currency),
            expected_income=_money_or_none(data.get("expected_income"), currency),
            categories=tuple(BudgetCategory.from_dict(bc, currency) for bc in data.get("categories", [])),
        )


@dataclass(frozen=True)
class BudgetCategorySummary:
    """Budgeted vs actual spending for one category of a budget."""

    category: Category
    budgeted_spending: Money
    actual_spending: Money
    available_to_spend: Money
    percent_of_budget_spent: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.category.id,
            "name": self.category.name,
            "budgeted": self.budgeted_spending.format(),
            "spent": self.actual_spending.format(),
            "remaining": self.available_to_spend.format(),
            "percent_spent": float(self.percent_of_budget_spent),
        }


@dataclass(frozen=True)
class BudgetSummary:
    """A Budget together with its derived figures for the month."""

    budget: Budget
    actual_spending: Money
    allocated_spending: Money
    available_to_spend: Money
    percent_of_budget_spent: Decimal
    actual_income: Money
    available_to_allocate: Money
    remaining_expected_income: Money
    categories: tuple[BudgetCategorySummary, ...] = ()

    @property
    def budgeted_spending(self) -> Money:
        return self.budget.budgeted_spending_money

    @property
    def expected_income(self) -> Money:
        return self.budget.expected_income_money

    def category(self, category_id: CategoryId) -> BudgetCategorySummary | None:
        for summary in self.categories:
            if summary.category.id == category_id:
                return summary
        return None

    def to_dict(self) -> dict[str, Any]:
        budget = self.budget
        return {
            "id": budget.id,
            "start_date": budget.start_date.isoformat(),
            "end_date": budget.end_date.isoformat(),
            "currency": budget.currency,
            "budgeted_spending": self.budgeted_spending.format(),
            "expected_income": self.expected_income.format(),
            "actual_spending": self.actual_spending.format(),
            "allocated_spending": self.allocated_spending.format(),
            "available_to_spend": self.available_to_spend.format(),
            "available_to_allocate": self.available_to_allocate.format(),
            "actual_income": self.actual_income.format(),
            "remaining_expected_income": self.remaining_expected_income.format(),
            "percent_spent": float(self.percent_of_budget_spent),
            "categories": [c.to_dict() for c in self.categories],
        }
