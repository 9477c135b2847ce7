#!/usr/bin/env python3
"""
Family Data Loader

Utilities for loading one family's data files from a local directory.

Directory layout:
    <data_dir>/<family_id>/categories.json
    <data_dir>/<family_id>/entries.json   (or entries.csv)
    <data_dir>/<family_id>/balances.json
    <data_dir>/<family_id>/budgets.json   (managed by JsonBudgetStore)

Functions:
- load_categories: Load categories as domain models
- load_entries: Load ledger entries from JSON or CSV
- load_balance_snapshots: Load dated account balance snapshots
"""

import logging
from datetime import date
from pathlib import Path
from typing import Any

import pandas as pd

from ..core.currency import DEFAULT_CURRENCY
from ..core.json_utils import read_json
from ..core.models import AccountBalance, Category, Entry

logger = logging.getLogger(__name__)

CATEGORIES_FILE = "categories.json"
ENTRIES_JSON_FILE = "entries.json"
ENTRIES_CSV_FILE = "entries.csv"
BALANCES_FILE = "balances.json"
BUDGETS_FILE = "budgets.json"


def _records(data: Any, key: str, path: Path) -> list[dict[str, Any]]:
    # Handle both array format and object format
    if isinstance(data, dict):
        records: list[dict[str, Any]] = data.get(key, [])
        return records
    if isinstance(data, list):
        return data
    raise ValueError(f"Invalid format in {path}: expected list or dict, got {type(data).__name__}")


def load_categories(family_dir: str | Path) -> list[Category]:
    """
    Load a family's categories.

    Args:
        family_dir: Directory holding the family's files

    Returns:
        List of Category domain models

    Raises:
        FileNotFoundError: If categories.json is missing
    """
    path = Path(family_dir) / CATEGORIES_FILE
    if not path.exists():
        raise FileNotFoundError(f"Categories file not found: {path}")

    categories = [Category.from_dict(c) for c in _records(read_json(path), "categories", path)]
    logger.info("Loaded %d categories from %s", len(categories), path)
    return categories


def _load_entries_csv(path: Path, currency: str) -> list[Entry]:
    # Read everything as text so amounts stay exact decimals
    df = pd.read_csv(path, dtype=str, keep_default_na=False)

    entries: list[Entry] = []
    for _, row in df.iterrows():
        record = {k: v for k, v in row.to_dict().items() if v != ""}
        try:
            entries.append(Entry.from_dict(record, currency))
        except (ValueError, KeyError, TypeError) as e:
            raise ValueError(f"Invalid entry row in {path}: {record}") from e
    return entries


def load_entries(family_dir: str | Path, currency: str = DEFAULT_CURRENCY) -> list[Entry]:
    """
    Load a family's ledger entries.

    entries.json is preferred; entries.csv (columns date, amount,
    category_id, classification and optionally id, name, currency) is read
    with pandas when no JSON file exists.

    Args:
        family_dir: Directory holding the family's files
        currency: Currency for entries that do not name one

    Returns:
        List of Entry domain models

    Raises:
        FileNotFoundError: If neither entries file exists
        ValueError: If an entry cannot be parsed
    """
    family_dir = Path(family_dir)
    json_path = family_dir / ENTRIES_JSON_FILE
    csv_path = family_dir / ENTRIES_CSV_FILE

    if json_path.exists():
        entries = [Entry.from_dict(e, currency) for e in _records(read_json(json_path), "entries", json_path)]
        source = json_path
    elif csv_path.exists():
        entries = _load_entries_csv(csv_path, currency)
        source = csv_path
    else:
        raise FileNotFoundError(f"Ledger entries not found in {family_dir} (expected entries.json or entries.csv)")

    logger.info("Loaded %d entries from %s", len(entries), source)
    return entries


def load_balance_snapshots(
    family_dir: str | Path, currency: str = DEFAULT_CURRENCY
) -> dict[date, list[AccountBalance]]:
    """
    Load a family's dated account balance snapshots.

    Each snapshot looks like:
        {"as_of": "2024-01-31", "accounts": [{"name": "Checking",
         "classification": "checking", "balance": "1200.00"}]}

    Args:
        family_dir: Directory holding the family's files
        currency: Currency for balances that do not name one

    Returns:
        Mapping of snapshot date to account balances; empty when the file is missing
    """
    path = Path(family_dir) / BALANCES_FILE
    if not path.exists():
        logger.warning("No balances file at %s; balance sheet will be empty", path)
        return {}

    snapshots: dict[date, list[AccountBalance]] = {}
    for snapshot in _records(read_json(path), "snapshots", path):
        as_of = date.fromisoformat(snapshot["as_of"])
        snapshots[as_of] = [AccountBalance.from_dict(a, currency) for a in snapshot.get("accounts", [])]

    logger.info("Loaded %d balance snapshots from %s", len(snapshots), path)
    return snapshots
