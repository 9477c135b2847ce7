"""
Financial Statements Package

Income statement and balance sheet computations over ledger and account
balance snapshots.

Key Components:
- income_statement: Income/expense totals with category rollups
- balance_sheet: Assets, liabilities and net worth by account classification
"""

from .balance_sheet import BalanceSheet, BalanceSheetSnapshot, group_balances
from .income_statement import IncomeStatement

__all__ = [
    "BalanceSheet",
    "BalanceSheetSnapshot",
    "IncomeStatement",
    "group_balances",
]
