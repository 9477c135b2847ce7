"""
Budgets Package

Monthly budgets per family with budgeted vs actual vs remaining figures.

This package provides:
- Budget and BudgetCategory value objects (one budget per family per month)
- BudgetEngine for bootstrap-on-first-read, batch updates and summaries
- BudgetStore protocol with in-memory and JSON-file implementations
- "YYYY-MM" month parameter parsing
"""

from .engine import BudgetEngine, date_to_param, param_to_date, parse_month
from .models import Budget, BudgetCategory, BudgetCategorySummary, BudgetSummary
from .store import BudgetStore, InMemoryBudgetStore, JsonBudgetStore

__all__ = [
    "Budget",
    "BudgetCategory",
    "BudgetCategorySummary",
    "BudgetEngine",
    "BudgetStore",
    "BudgetSummary",
    "InMemoryBudgetStore",
    "JsonBudgetStore",
    "date_to_param",
    "param_to_date",
    "parse_month",
]
