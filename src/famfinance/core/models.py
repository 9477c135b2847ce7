#!/usr/bin/env python3
"""
Core Data Models for the Family Finance Engine

Value objects shared by the statements, budgets and reporting packages.
All of them are computed per request from externally supplied snapshots
and are never cached or mutated by the engine.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import Any

from .currency import DEFAULT_CURRENCY
from .money import Money

CategoryId = str

UNCATEGORIZED_ID: CategoryId = "uncategorized"

# Account classifications that count against net worth. Everything else is an asset.
LIABILITY_CLASSIFICATIONS = frozenset({"credit", "credit_card", "loan", "other_liability"})


class Classification(Enum):
    """Income or expense tag on a category or ledger entry."""

    INCOME = "income"
    EXPENSE = "expense"


class BalanceSide(Enum):
    """Which side of the balance sheet an account sits on."""

    ASSET = "asset"
    LIABILITY = "liability"


@dataclass(frozen=True)
class Category:
    """
    Family-owned income or expense category.

    At most one level of nesting is allowed, which is enforced by
    CategoryTree rather than here.
    """

    id: CategoryId
    name: str
    classification: Classification
    parent_id: CategoryId | None = None

    @property
    def is_subcategory(self) -> bool:
        return self.parent_id is not None

    @classmethod
    def uncategorized(cls, classification: Classification) -> "Category":
        """Synthetic root used for entries with no known category."""
        return cls(id=UNCATEGORIZED_ID, name="Uncategorized", classification=classification)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Category":
        """
        Create Category from a stored dict.

        Accepts either "classification" or "type" for the income/expense tag.
        """
        classification = data.get("classification", data.get("type", "expense"))
        parent_id = data.get("parent_id")
        return cls(
            id=str(data["id"]),
            name=data["name"],
            classification=Classification(classification),
            parent_id=str(parent_id) if parent_id is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "classification": self.classification.value,
            "parent_id": self.parent_id,
        }


@dataclass(frozen=True)
class Entry:
    """
    One dated, signed monetary event from the ledger.

    The sign convention belongs to the ledger: amounts are summed as given
    and classification decides whether the entry is income or expense.
    """

    date: date
    amount: Money
    category_id: CategoryId | None
    classification: Classification
    id: str | None = None
    name: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], currency: str = DEFAULT_CURRENCY) -> "Entry":
        """
        Create Entry from a stored dict.

        Args:
            data: Dict with date (ISO string), amount (string), category_id, classification
            currency: Currency to use when the dict has none

        Returns:
            Entry instance
        """
        category_id = data.get("category_id")
        return cls(
            date=date.fromisoformat(data["date"]),
            amount=Money.of(str(data["amount"]), data.get("currency", currency)),
            category_id=str(category_id) if category_id not in (None, "") else None,
            classification=Classification(data["classification"]),
            id=data.get("id"),
            name=data.get("name"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "amount": str(self.amount.amount),
            "currency": self.amount.currency,
            "category_id": self.category_id,
            "classification": self.classification.value,
            "name": self.name,
        }


@dataclass(frozen=True)
class AccountBalance:
    """Balance of one account as of a date, keyed by account classification."""

    classification: str
    balance: Money
    account_name: str | None = None

    @property
    def side(self) -> BalanceSide:
        if self.classification in LIABILITY_CLASSIFICATIONS:
            return BalanceSide.LIABILITY
        return BalanceSide.ASSET

    @classmethod
    def from_dict(cls, data: dict[str, Any], currency: str = DEFAULT_CURRENCY) -> "AccountBalance":
        return cls(
            classification=data["classification"],
            balance=Money.of(str(data["balance"]), data.get("currency", currency)),
            account_name=data.get("name"),
        )


@dataclass(frozen=True)
class CategoryTotal:
    """A leaf or rolled-up amount for one category."""

    category: Category
    total: Money

    def to_dict(self) -> dict[str, Any]:
        return {
            "category_id": self.category.id,
            "category": self.category.name,
            "parent_id": self.category.parent_id,
            "total": self.total.format(),
        }


@dataclass(frozen=True)
class IncomeStatementTotals:
    """
    Income or expense totals for one period.

    category_totals is ordered by descending total, then by name. Root
    categories carry their subcategories' amounts. rollup maps every
    category of the matching classification, including empty ones, to its
    rolled-up total.
    """

    classification: Classification
    total: Money
    category_totals: tuple[CategoryTotal, ...] = ()
    rollup: Mapping[CategoryId, Money] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "rollup", MappingProxyType(dict(self.rollup)))

    def total_for(self, category_id: CategoryId) -> Money:
        """Rolled-up total for a category, zero when it has no entries."""
        return self.rollup.get(category_id, Money.zero(self.total.currency))

    def root_totals(self) -> list[CategoryTotal]:
        """Category totals without subcategories, for flat rankings."""
        return [ct for ct in self.category_totals if not ct.category.is_subcategory]

    def to_dict(self) -> dict[str, Any]:
        return {
            "classification": self.classification.value,
            "total": self.total.format(),
            "category_totals": [ct.to_dict() for ct in self.category_totals],
        }


@dataclass(frozen=True)
class AccountGroup:
    """Summed balances for one account classification."""

    key: str
    total: Money
    account_count: int = 0


@dataclass(frozen=True)
class BalanceSheetTotals:
    """Total and per-classification groups for one side of the balance sheet."""

    side: BalanceSide
    total: Money
    account_groups: tuple[AccountGroup, ...] = ()

    def breakdown(self) -> dict[str, str]:
        """Classification key to formatted total, in group order."""
        return {group.key: group.total.format() for group in self.account_groups}
