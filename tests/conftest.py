"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

from datetime import date
from pathlib import Path

import pytest

from famfinance.budgets.store import InMemoryBudgetStore
from famfinance.core import config as config_module
from famfinance.core.categories import CategoryTree
from famfinance.core.json_utils import write_json
from famfinance.core.models import AccountBalance, Category, Classification, Entry
from famfinance.core.sources import InMemoryBalances, InMemoryCategories, InMemoryLedger
from tests.fixtures.ledger_data import FAMILY_ID, account, expense, income


@pytest.fixture
def family_id() -> str:
    return FAMILY_ID


@pytest.fixture
def sample_categories() -> list[Category]:
    """Food (with Groceries and Dining), Rent, Transport, Salary, Interest."""
    return [
        Category("food", "Food", Classification.EXPENSE),
        Category("groceries", "Groceries", Classification.EXPENSE, parent_id="food"),
        Category("dining", "Dining", Classification.EXPENSE, parent_id="food"),
        Category("rent", "Rent", Classification.EXPENSE),
        Category("transport", "Transport", Classification.EXPENSE),
        Category("salary", "Salary", Classification.INCOME),
        Category("interest", "Interest", Classification.INCOME),
    ]


@pytest.fixture
def category_tree(sample_categories) -> CategoryTree:
    return CategoryTree(sample_categories)


@pytest.fixture
def sample_entries() -> list[Entry]:
    """
    Ledger for Feb-Apr 2024.

    March: expenses $1,245.50 (Food $200, Rent $1,000, Transport $45.50),
    income $3,012.34.
    """
    return [
        expense("2024-02-01", "1000.00", "rent"),
        expense("2024-02-10", "150.00", "groceries"),
        income("2024-02-25", "3000.00", "salary"),
        expense("2024-03-01", "1000.00", "rent", "March rent"),
        expense("2024-03-02", "70.00", "groceries"),
        expense("2024-03-09", "50.00", "groceries"),
        expense("2024-03-15", "80.00", "dining"),
        expense("2024-03-20", "45.50", "transport"),
        income("2024-03-25", "3000.00", "salary"),
        income("2024-03-31", "12.34", "interest"),
        expense("2024-04-01", "1000.00", "rent"),
    ]


@pytest.fixture
def sample_snapshots() -> dict[date, list[AccountBalance]]:
    """Month-end balances: net worth $13,500, $14,100, $14,700."""
    return {
        date(2024, 1, 31): [
            account("checking", "5000.00", "Checking"),
            account("savings", "10000.00", "Savings"),
            account("credit_card", "1500.00", "Visa"),
        ],
        date(2024, 2, 29): [
            account("checking", "5200.00", "Checking"),
            account("savings", "10100.00", "Savings"),
            account("credit_card", "1200.00", "Visa"),
        ],
        date(2024, 3, 31): [
            account("checking", "5400.00", "Checking"),
            account("savings", "10200.00", "Savings"),
            account("credit_card", "900.00", "Visa"),
        ],
    }


@pytest.fixture
def ledger(sample_entries) -> InMemoryLedger:
    return InMemoryLedger({FAMILY_ID: sample_entries})


@pytest.fixture
def category_source(sample_categories) -> InMemoryCategories:
    return InMemoryCategories({FAMILY_ID: sample_categories})


@pytest.fixture
def balance_source(sample_snapshots) -> InMemoryBalances:
    return InMemoryBalances({FAMILY_ID: sample_snapshots})


@pytest.fixture
def budget_store() -> InMemoryBudgetStore:
    return InMemoryBudgetStore()


@pytest.fixture
def data_dir(tmp_path) -> Path:
    return tmp_path / "data"


@pytest.fixture
def family_data_dir(data_dir, sample_categories, sample_entries, sample_snapshots) -> Path:
    """A family directory on disk holding the sample data as JSON files."""
    family_dir = data_dir / FAMILY_ID
    write_json(family_dir / "categories.json", {"categories": [c.to_dict() for c in sample_categories]})
    write_json(family_dir / "entries.json", [e.to_dict() for e in sample_entries])
    write_json(
        family_dir / "balances.json",
        {
            "snapshots": [
                {
                    "as_of": as_of.isoformat(),
                    "accounts": [
                        {"name": a.account_name, "classification": a.classification, "balance": str(a.balance.amount)}
                        for a in accounts
                    ],
                }
                for as_of, accounts in sample_snapshots.items()
            ]
        },
    )
    return family_dir


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, data_dir):
    """Set up test environment variables."""
    # Ensure tests don't use real data
    monkeypatch.setenv("FAMFINANCE_ENV", "test")
    monkeypatch.setenv("FAMFINANCE_DATA_DIR", str(data_dir))
    monkeypatch.setenv("FAMFINANCE_CURRENCY", "USD")
    monkeypatch.delenv("FAMFINANCE_TOP_OUTFLOWS_LIMIT", raising=False)
    monkeypatch.delenv("FAMFINANCE_MAX_OUTFLOWS", raising=False)
    monkeypatch.delenv("FAMFINANCE_NET_WORTH_MONTHS", raising=False)
    monkeypatch.delenv("DEBUG", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    # Drop any configuration cached by a previous test
    monkeypatch.setattr(config_module, "_config", None)


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "currency: Tests for currency handling and precision")
    config.addinivalue_line("markers", "budget: Tests for budget bootstrap, updates and summaries")
    config.addinivalue_line("markers", "reports: Tests for statements and derived reports")
