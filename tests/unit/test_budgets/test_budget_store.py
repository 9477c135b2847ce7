#!/usr/bin/env python3
"""Tests for the in-memory and JSON budget stores."""

import json
from datetime import date

import pytest

from famfinance.budgets.models import Budget, BudgetCategory
from famfinance.budgets.store import BudgetStore, InMemoryBudgetStore, JsonBudgetStore
from famfinance.core.money import Money


def make_budget(budget_id="b-1", family_id="smiths", month=date(2024, 3, 1), spending=None) -> Budget:
    return Budget.for_month(
        budget_id=budget_id,
        family_id=family_id,
        month=month,
        budgeted_spending=Money.of(spending) if spending is not None else None,
        categories=(BudgetCategory("food", Money.of("250")),),
    )


@pytest.fixture(params=["memory", "json"])
def store(request, tmp_path):
    if request.param == "memory":
        return InMemoryBudgetStore()
    return JsonBudgetStore(tmp_path / "smiths" / "budgets.json")


@pytest.mark.budget
class TestBudgetStores:
    """Behaviour shared by every BudgetStore."""

    def test_satisfies_protocol(self, store):
        assert isinstance(store, BudgetStore)

    def test_find_missing_returns_none(self, store):
        assert store.find("smiths", date(2024, 3, 1)) is None
        assert store.get("b-1") is None

    def test_save_then_find_by_any_day_of_month(self, store):
        budget = make_budget()
        store.save(budget)

        assert store.find("smiths", date(2024, 3, 17)) == budget
        assert store.get("b-1") == budget

    def test_save_replaces_same_family_month(self, store):
        store.save(make_budget(spending="100"))
        store.save(make_budget(spending="200"))

        assert store.find("smiths", date(2024, 3, 1)).budgeted_spending == Money.of("200")

    def test_months_and_families_are_separate(self, store):
        store.save(make_budget("b-1"))
        store.save(make_budget("b-2", month=date(2024, 4, 1)))
        store.save(make_budget("b-3", family_id="joneses"))

        assert store.find("smiths", date(2024, 4, 1)).id == "b-2"
        assert store.find("joneses", date(2024, 3, 1)).id == "b-3"
        assert store.find("joneses", date(2024, 4, 1)) is None


@pytest.mark.budget
class TestJsonBudgetStore:
    """File format details of JsonBudgetStore."""

    def test_creates_parent_directories(self, tmp_path):
        path = tmp_path / "a" / "b" / "budgets.json"
        JsonBudgetStore(path).save(make_budget())
        assert path.exists()

    def test_file_layout(self, tmp_path):
        path = tmp_path / "budgets.json"
        JsonBudgetStore(path).save(make_budget(spending="500.00"))

        data = json.loads(path.read_text())
        assert data["budgets"][0]["start_date"] == "2024-03-01"
        assert data["budgets"][0]["budgeted_spending"] == "500.00"
        assert data["budgets"][0]["categories"] == [{"category_id": "food", "budgeted_spending": "250"}]

    def test_reads_bare_list(self, tmp_path):
        path = tmp_path / "budgets.json"
        path.write_text(json.dumps([make_budget().to_dict()]))

        assert JsonBudgetStore(path).get("b-1") == make_budget()

    def test_rejects_unexpected_format(self, tmp_path):
        path = tmp_path / "budgets.json"
        path.write_text(json.dumps("nope"))

        with pytest.raises(ValueError, match="Invalid budgets file format"):
            JsonBudgetStore(path).find("smiths", date(2024, 3, 1))

    def test_survives_new_instance(self, tmp_path):
        path = tmp_path / "budgets.json"
        JsonBudgetStore(path).save(make_budget(spending="42.10"))

        assert JsonBudgetStore(path).find("smiths", date(2024, 3, 1)).budgeted_spending == Money.of("42.10")
