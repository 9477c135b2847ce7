"""
Analysis Package

Derived financial reports and their tabular export.

This package provides:
- ReportBuilder: net-worth series, cash-flow breakdowns, top outflows
- Report row types (NetWorthPoint, CashflowItem, MonthlyCashflow, OutflowEntry)
- pandas DataFrame adapters for CSV export
"""

from .frames import (
    cashflow_items_to_dataframe,
    category_totals_to_dataframe,
    monthly_cashflow_to_dataframe,
    net_worth_to_dataframe,
    outflows_to_dataframe,
    write_csv,
)
from .reports import (
    DEFAULT_OUTFLOWS_LIMIT,
    MAX_NET_WORTH_MONTHS,
    MAX_OUTFLOWS_LIMIT,
    CashflowItem,
    CashflowReport,
    MonthlyCashflow,
    NetWorthPoint,
    OutflowEntry,
    ReportBuilder,
)

__all__ = [
    "DEFAULT_OUTFLOWS_LIMIT",
    "MAX_NET_WORTH_MONTHS",
    "MAX_OUTFLOWS_LIMIT",
    "CashflowItem",
    "CashflowReport",
    "MonthlyCashflow",
    "NetWorthPoint",
    "OutflowEntry",
    "ReportBuilder",
    "cashflow_items_to_dataframe",
    "category_totals_to_dataframe",
    "monthly_cashflow_to_dataframe",
    "net_worth_to_dataframe",
    "outflows_to_dataframe",
    "write_csv",
]
