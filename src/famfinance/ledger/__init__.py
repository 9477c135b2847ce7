"""
Ledger Package

File-backed collaborators reading a family's data directory.

This package provides:
- Loaders for categories, entries (JSON or CSV) and balance snapshots
- FamilyDataStore implementing the ledger, balance and category sources
"""

from .datastore import FamilyDataStore
from .loader import load_balance_snapshots, load_categories, load_entries

__all__ = [
    "FamilyDataStore",
    "load_balance_snapshots",
    "load_categories",
    "load_entries",
]
