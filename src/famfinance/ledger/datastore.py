#!/usr/bin/env python3
"""
Family DataStore

File-backed implementation of the ledger, balance and category sources,
reading one directory per family under a data directory.
"""

import logging
from datetime import date, datetime
from pathlib import Path

from ..budgets.store import JsonBudgetStore
from ..core.currency import DEFAULT_CURRENCY
from ..core.models import AccountBalance, Category, Entry
from ..core.period import Period
from .loader import BUDGETS_FILE, load_balance_snapshots, load_categories, load_entries

logger = logging.getLogger(__name__)


class FamilyDataStore:
    """
    LedgerSource, AccountBalanceSource and CategorySource over local files.

    Files are re-read on every call, so each query sees the data as it is
    on disk at that moment.
    """

    supports_history = True

    def __init__(self, data_dir: str | Path, currency: str = DEFAULT_CURRENCY):
        """
        Initialize the store.

        Args:
            data_dir: Directory containing one subdirectory per family
            currency: Currency for amounts that do not name one
        """
        self.data_dir = Path(data_dir)
        self.currency = currency

    def family_dir(self, family_id: str) -> Path:
        return self.data_dir / family_id

    def exists(self, family_id: str) -> bool:
        """Check whether a family directory exists."""
        return self.family_dir(family_id).is_dir()

    def families(self) -> list[str]:
        """Ids of every family with a directory under data_dir."""
        if not self.data_dir.exists():
            return []
        return sorted(p.name for p in self.data_dir.iterdir() if p.is_dir())

    def last_modified(self, family_id: str) -> datetime | None:
        """Timestamp of the most recently changed file for a family."""
        if not self.exists(family_id):
            return None
        mtimes = [p.stat().st_mtime for p in self.family_dir(family_id).iterdir() if p.is_file()]
        return datetime.fromtimestamp(max(mtimes)) if mtimes else None

    def entries(self, family_id: str, period: Period) -> list[Entry]:
        entries = load_entries(self.family_dir(family_id), self.currency)
        return [e for e in entries if period.contains(e.date)]

    def categories(self, family_id: str) -> list[Category]:
        return load_categories(self.family_dir(family_id))

    def balances(self, family_id: str, as_of: date) -> list[AccountBalance]:
        """Latest snapshot taken on or before as_of, or nothing when there is none."""
        snapshots = load_balance_snapshots(self.family_dir(family_id), self.currency)
        eligible = [d for d in snapshots if d <= as_of]
        if not eligible:
            logger.debug("No balance snapshot for %s on or before %s", family_id, as_of)
            return []
        return snapshots[max(eligible)]

    def budget_store(self, family_id: str) -> JsonBudgetStore:
        """Budget store persisted in the family's budgets.json."""
        return JsonBudgetStore(self.family_dir(family_id) / BUDGETS_FILE)
