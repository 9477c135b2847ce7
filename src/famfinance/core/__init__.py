"""
Core Primitives Package

Value types and collaborator interfaces shared by every engine component.

This package provides:
- Money with exact decimal arithmetic and currency checking
- Period date ranges with calendar constructors and sub-period splitting
- CategoryTree for one-level category hierarchies and rollups
- Ledger, balance and category source protocols
- The engine's typed error taxonomy
- Configuration management for the CLI and file-backed sources
"""

from .categories import CategoryTree
from .config import Config, Environment, get_config, reload_config
from .currency import DEFAULT_CURRENCY, format_amount, parse_amount, percentage
from .exceptions import (
    BudgetNotFound,
    CategoryNotInBudget,
    CurrencyMismatch,
    DivisionByZero,
    FinanceEngineError,
    InvalidCategoryTree,
    InvalidMonthFormat,
    InvalidPeriod,
    UnknownCategory,
)
from .models import (
    UNCATEGORIZED_ID,
    AccountBalance,
    AccountGroup,
    BalanceSheetTotals,
    BalanceSide,
    Category,
    CategoryTotal,
    Classification,
    Entry,
    IncomeStatementTotals,
)
from .money import Money
from .period import DateRange, Granularity, Period
from .sources import (
    AccountBalanceSource,
    CategorySource,
    CurrentBalances,
    InMemoryBalances,
    InMemoryCategories,
    InMemoryLedger,
    LedgerSource,
)

__all__ = [
    "DEFAULT_CURRENCY",
    "UNCATEGORIZED_ID",
    "AccountBalance",
    "AccountBalanceSource",
    "AccountGroup",
    "BalanceSheetTotals",
    "BalanceSide",
    "BudgetNotFound",
    "Category",
    "CategoryNotInBudget",
    "CategorySource",
    "CategoryTotal",
    "CategoryTree",
    "Classification",
    # Configuration
    "Config",
    "CurrencyMismatch",
    "CurrentBalances",
    "DateRange",
    "DivisionByZero",
    "Entry",
    "Environment",
    "FinanceEngineError",
    "Granularity",
    "InMemoryBalances",
    "InMemoryCategories",
    "InMemoryLedger",
    "IncomeStatementTotals",
    "InvalidCategoryTree",
    "InvalidMonthFormat",
    "InvalidPeriod",
    "LedgerSource",
    "Money",
    "Period",
    "UnknownCategory",
    "format_amount",
    "get_config",
    "parse_amount",
    "percentage",
    "reload_config",
]
