#!/usr/bin/env python3
"""
DataFrame Adapters

Convert report results into pandas DataFrames for CSV export. Amounts are
kept as exact Decimal values so exported figures match the reports.
"""

import logging
from collections.abc import Sequence
from pathlib import Path

import pandas as pd

from ..core.models import CategoryTotal
from .reports import CashflowItem, MonthlyCashflow, NetWorthPoint, OutflowEntry

logger = logging.getLogger(__name__)


def net_worth_to_dataframe(points: Sequence[NetWorthPoint]) -> pd.DataFrame:
    """
    Convert a net-worth series to a DataFrame.

    Args:
        points: Series from ReportBuilder.net_worth_series

    Returns:
        DataFrame with date, assets, liabilities, net_worth columns
    """
    rows = [
        {
            "date": pd.Timestamp(point.date),
            "assets": point.assets.amount,
            "liabilities": point.liabilities.amount,
            "net_worth": point.net_worth.amount,
            "currency": point.net_worth.currency,
        }
        for point in points
    ]
    return pd.DataFrame(rows, columns=["date", "assets", "liabilities", "net_worth", "currency"])


def monthly_cashflow_to_dataframe(rows: Sequence[MonthlyCashflow]) -> pd.DataFrame:
    """Convert a monthly breakdown to a DataFrame, one row per month."""
    data = [
        {
            "month": row.label,
            "start_date": pd.Timestamp(row.period.start_date),
            "end_date": pd.Timestamp(row.period.end_date),
            "income": row.income.amount,
            "expenses": row.expenses.amount,
            "net": row.net.amount,
        }
        for row in rows
    ]
    return pd.DataFrame(data, columns=["month", "start_date", "end_date", "income", "expenses", "net"])


def cashflow_items_to_dataframe(items: Sequence[CashflowItem]) -> pd.DataFrame:
    data = [
        {
            "category_id": item.category.id,
            "category": item.category.name,
            "type": item.type.value,
            "total": item.total.amount,
        }
        for item in items
    ]
    return pd.DataFrame(data, columns=["category_id", "category", "type", "total"])


def outflows_to_dataframe(outflows: Sequence[OutflowEntry]) -> pd.DataFrame:
    """Convert a top-outflows ranking to a DataFrame, keeping rank order."""
    data = [
        {
            "rank": rank,
            "category_id": outflow.category.id,
            "category": outflow.category.name,
            "amount": outflow.amount.amount,
            "percentage": outflow.percentage,
            "transaction_count": outflow.transaction_count,
        }
        for rank, outflow in enumerate(outflows, start=1)
    ]
    return pd.DataFrame(
        data, columns=["rank", "category_id", "category", "amount", "percentage", "transaction_count"]
    )


def category_totals_to_dataframe(totals: Sequence[CategoryTotal]) -> pd.DataFrame:
    data = [
        {
            "category_id": ct.category.id,
            "category": ct.category.name,
            "parent_id": ct.category.parent_id,
            "total": ct.total.amount,
        }
        for ct in totals
    ]
    return pd.DataFrame(data, columns=["category_id", "category", "parent_id", "total"])


def write_csv(df: pd.DataFrame, path: str | Path) -> Path:
    """
    Write a DataFrame to CSV without the index.

    Args:
        df: Frame to write
        path: Destination file; parent directories are created

    Returns:
        The path written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False, date_format="%Y-%m-%d")
    logger.info("Wrote %d rows to %s", len(df), path)
    return path
