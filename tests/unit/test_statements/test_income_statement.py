#!/usr/bin/env python3
"""Tests for IncomeStatement totals and category breakdowns."""

from datetime import date

import pytest

from famfinance.core.categories import CategoryTree
from famfinance.core.exceptions import CurrencyMismatch
from famfinance.core.models import Category, Classification
from famfinance.core.money import Money
from famfinance.core.period import Period
from famfinance.core.sources import InMemoryLedger
from famfinance.statements.income_statement import IncomeStatement
from tests.fixtures.ledger_data import FAMILY_ID, expense, income

MARCH = Period.month_of(date(2024, 3, 1))


@pytest.fixture
def statement(ledger, category_tree) -> IncomeStatement:
    return IncomeStatement(ledger, category_tree, FAMILY_ID)


@pytest.mark.reports
class TestExpenseTotals:
    """Test expense aggregation."""

    def test_groceries_and_dining_ranked_by_total(self):
        """Test the flat two-category case ranks the larger category first."""
        tree = CategoryTree(
            [
                Category("groceries", "Groceries", Classification.EXPENSE),
                Category("dining", "Dining", Classification.EXPENSE),
            ]
        )
        ledger = InMemoryLedger(
            {FAMILY_ID: [expense("2024-03-05", "120.00", "groceries"), expense("2024-03-12", "80.00", "dining")]}
        )

        totals = IncomeStatement(ledger, tree, FAMILY_ID).expense_totals(MARCH)

        assert totals.total == Money.of("200.00")
        assert [(ct.category.name, ct.total) for ct in totals.category_totals] == [
            ("Groceries", Money.of("120.00")),
            ("Dining", Money.of("80.00")),
        ]

    def test_total_and_rolled_up_parents(self, statement):
        totals = statement.expense_totals(MARCH)

        assert totals.total == Money.of("1245.50")
        by_id = {ct.category.id: ct.total for ct in totals.category_totals}
        assert by_id["food"] == Money.of("200.00")
        assert by_id["groceries"] == Money.of("120.00")
        assert by_id["dining"] == Money.of("80.00")
        assert by_id["rent"] == Money.of("1000.00")

    def test_ranking_descending_then_by_name(self, statement):
        totals = statement.expense_totals(MARCH)
        assert [ct.category.id for ct in totals.category_totals] == [
            "rent",
            "food",
            "groceries",
            "dining",
            "transport",
        ]

    def test_total_equals_sum_of_root_totals(self, statement):
        totals = statement.expense_totals(MARCH)
        assert Money.sum(ct.total for ct in totals.root_totals()) == totals.total

    def test_rollup_includes_empty_categories(self, ledger, sample_categories):
        tree = CategoryTree([*sample_categories, Category("pets", "Pets", Classification.EXPENSE)])
        totals = IncomeStatement(ledger, tree, FAMILY_ID).expense_totals(MARCH)

        assert totals.total_for("pets") == Money.zero()
        assert "pets" in totals.rollup
        assert "pets" not in {ct.category.id for ct in totals.category_totals}

    def test_totals_are_immutable_and_hashable(self, statement):
        totals = statement.expense_totals(MARCH)

        with pytest.raises(TypeError):
            totals.rollup["rent"] = Money.zero()
        assert hash(totals) == hash(statement.expense_totals(MARCH))
        assert totals == statement.expense_totals(MARCH)

    def test_ties_broken_by_name(self):
        tree = CategoryTree(
            [Category("b", "Books", Classification.EXPENSE), Category("a", "Art", Classification.EXPENSE)]
        )
        ledger = InMemoryLedger(
            {FAMILY_ID: [expense("2024-03-01", "10", "b"), expense("2024-03-02", "10", "a")]}
        )
        totals = IncomeStatement(ledger, tree, FAMILY_ID).expense_totals(MARCH)
        assert [ct.category.name for ct in totals.category_totals] == ["Art", "Books"]


@pytest.mark.reports
class TestIncomeTotals:
    """Test income aggregation and net savings."""

    def test_income_totals(self, statement):
        totals = statement.income_totals(MARCH)

        assert totals.classification == Classification.INCOME
        assert totals.total == Money.of("3012.34")
        assert [ct.category.name for ct in totals.category_totals] == ["Salary", "Interest"]

    def test_income_total_equals_sum_of_root_totals(self, statement):
        totals = statement.income_totals(MARCH)
        assert Money.sum(ct.total for ct in totals.root_totals()) == totals.total

    def test_net_savings(self, statement):
        assert statement.net_savings(MARCH) == Money.of("1766.84")


@pytest.mark.reports
class TestEdgeCases:
    """Test empty periods, uncategorized entries and currency checks."""

    def test_empty_period_is_zero_not_error(self, statement):
        totals = statement.expense_totals(Period.month_of(date(2020, 1, 1)))

        assert totals.total == Money.zero("USD")
        assert totals.category_totals == ()

    def test_entries_without_known_category_are_uncategorized(self, category_tree):
        ledger = InMemoryLedger(
            {
                FAMILY_ID: [
                    expense("2024-03-01", "10", None),
                    expense("2024-03-02", "5", "deleted-category"),
                    # An income category on an expense entry is not an expense category
                    expense("2024-03-03", "1", "salary"),
                ]
            }
        )
        totals = IncomeStatement(ledger, category_tree, FAMILY_ID).expense_totals(MARCH)

        assert totals.total == Money.of("16")
        assert [(ct.category.name, ct.total) for ct in totals.category_totals] == [("Uncategorized", Money.of("16"))]
        assert totals.total_for("uncategorized") == Money.of("16")

    def test_negative_amounts_kept_as_given(self, category_tree):
        ledger = InMemoryLedger(
            {FAMILY_ID: [expense("2024-03-01", "50", "rent"), expense("2024-03-02", "-20", "rent", "Refund")]}
        )
        totals = IncomeStatement(ledger, category_tree, FAMILY_ID).expense_totals(MARCH)
        assert totals.total == Money.of("30")

    def test_entries_in_other_currency_raise(self, category_tree):
        ledger = InMemoryLedger({FAMILY_ID: [expense("2024-03-01", "50", "rent", currency="EUR")]})
        with pytest.raises(CurrencyMismatch):
            IncomeStatement(ledger, category_tree, FAMILY_ID, currency="USD").expense_totals(MARCH)

    def test_home_currency_zero(self, category_tree):
        totals = IncomeStatement(InMemoryLedger(), category_tree, FAMILY_ID, currency="EUR").income_totals(MARCH)
        assert totals.total == Money.zero("EUR")

    def test_partial_period(self, statement):
        first_week = Period.custom(date(2024, 3, 1), date(2024, 3, 7))
        assert statement.expense_totals(first_week).total == Money.of("1070.00")

    def test_income_entry_is_not_expense(self, category_tree):
        ledger = InMemoryLedger({FAMILY_ID: [income("2024-03-01", "100", "salary")]})
        statement = IncomeStatement(ledger, category_tree, FAMILY_ID)
        assert statement.expense_totals(MARCH).total == Money.zero()


@pytest.mark.reports
class TestTransactionCount:
    """Test entry counting."""

    def test_counts(self, statement):
        assert statement.transaction_count(MARCH) == 7
        assert statement.transaction_count(MARCH, classification=Classification.EXPENSE) == 5
        assert statement.transaction_count(MARCH, category_ids={"food", "groceries", "dining"}) == 3

    def test_to_dict(self, statement):
        data = statement.expense_totals(MARCH).to_dict()
        assert data["total"] == "$1,245.50"
        assert data["category_totals"][0] == {
            "category_id": "rent",
            "category": "Rent",
            "parent_id": None,
            "total": "$1,000.00",
        }
