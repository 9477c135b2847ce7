"""
famfinance - Family Finance Aggregation & Budget Engine

Turns a family's ledger entries and account balances into income
statements, balance sheets, monthly budgets and derived reports.

Key Features:
- Exact decimal Money with currency checking
- Calendar periods with monthly/quarterly/yearly breakdowns
- Category rollups over a one-level category tree
- Monthly budgets bootstrapped on first read, updated in one batch
- Net-worth series, cash-flow breakdowns and top outflows

Domain Packages:
- core: Money, Period, categories, collaborator protocols, configuration
- statements: IncomeStatement and BalanceSheet
- budgets: BudgetEngine, budget models and stores
- analysis: ReportBuilder and DataFrame export
- ledger: File-backed collaborators for a family data directory
- cli: Command-line interface

Example Usage:
    from famfinance import Money, Period, compute_income_statement
    from famfinance.ledger import FamilyDataStore
"""

__version__ = "0.1.0"
__author__ = "Karl Davis"

from .core.exceptions import (
    BudgetNotFound,
    CategoryNotInBudget,
    CurrencyMismatch,
    DivisionByZero,
    FinanceEngineError,
    InvalidMonthFormat,
    InvalidPeriod,
)
from .core.money import Money
from .core.period import Period
from .operations import (
    build_cashflow_breakdown,
    build_cashflow_report,
    build_net_worth_series,
    build_overview,
    build_top_outflows,
    compute_balance_sheet,
    compute_income_statement,
    find_budget,
    get_or_bootstrap_budget,
    update_budget,
)

__all__ = [
    "BudgetNotFound",
    "CategoryNotInBudget",
    "CurrencyMismatch",
    "DivisionByZero",
    "FinanceEngineError",
    "InvalidMonthFormat",
    "InvalidPeriod",
    "Money",
    "Period",
    "build_cashflow_breakdown",
    "build_cashflow_report",
    "build_net_worth_series",
    "build_overview",
    "build_top_outflows",
    "compute_balance_sheet",
    "compute_income_statement",
    "find_budget",
    "get_or_bootstrap_budget",
    "update_budget",
]
