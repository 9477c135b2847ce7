#!/usr/bin/env python3
"""
Collaborator Protocols - Inputs the engine reads from.

The engine never owns ledger, balance or category storage. It is handed
objects satisfying these protocols and treats every call as a consistent
snapshot. In-memory implementations are provided for embedding and tests;
file-backed ones live in famfinance.ledger.datastore.
"""

from collections.abc import Iterable, Mapping, Sequence
from datetime import date
from typing import Protocol, runtime_checkable

from .models import AccountBalance, Category, Entry
from .period import Period


@runtime_checkable
class LedgerSource(Protocol):
    """Supplies dated, categorized monetary entries for a family."""

    def entries(self, family_id: str, period: Period) -> Sequence[Entry]:
        """
        Get all entries dated within period.

        Args:
            family_id: Family whose ledger is queried
            period: Inclusive date range

        Returns:
            Entries in any order
        """
        ...


@runtime_checkable
class AccountBalanceSource(Protocol):
    """
    Supplies account balances as of a date.

    Sources that can only report current balances set supports_history to
    False; every historical query then returns the same snapshot.
    """

    supports_history: bool

    def balances(self, family_id: str, as_of: date) -> Sequence[AccountBalance]:
        """
        Get every account's balance as of a date.

        Args:
            family_id: Family whose accounts are queried
            as_of: Point-in-time date

        Returns:
            One AccountBalance per account
        """
        ...


@runtime_checkable
class CategorySource(Protocol):
    """Supplies a family's flat category list."""

    def categories(self, family_id: str) -> Sequence[Category]:
        """Get every category owned by the family."""
        ...


class InMemoryLedger:
    """LedgerSource over entries held in memory, keyed by family."""

    def __init__(self, entries_by_family: Mapping[str, Iterable[Entry]] | None = None):
        self._entries: dict[str, list[Entry]] = {
            family_id: list(entries) for family_id, entries in (entries_by_family or {}).items()
        }

    def add(self, family_id: str, *entries: Entry) -> None:
        self._entries.setdefault(family_id, []).extend(entries)

    def entries(self, family_id: str, period: Period) -> list[Entry]:
        return [e for e in self._entries.get(family_id, []) if period.contains(e.date)]


class InMemoryBalances:
    """
    AccountBalanceSource over dated balance snapshots.

    A query as of a date returns the latest snapshot taken on or before it,
    or nothing when the first snapshot is later.
    """

    supports_history = True

    def __init__(self, snapshots_by_family: Mapping[str, Mapping[date, Iterable[AccountBalance]]] | None = None):
        self._snapshots: dict[str, dict[date, list[AccountBalance]]] = {}
        for family_id, snapshots in (snapshots_by_family or {}).items():
            for as_of, balances in snapshots.items():
                self.record(family_id, as_of, balances)

    def record(self, family_id: str, as_of: date, balances: Iterable[AccountBalance]) -> None:
        self._snapshots.setdefault(family_id, {})[as_of] = list(balances)

    def balances(self, family_id: str, as_of: date) -> list[AccountBalance]:
        snapshots = self._snapshots.get(family_id, {})
        eligible = [d for d in snapshots if d <= as_of]
        if not eligible:
            return []
        return list(snapshots[max(eligible)])


class CurrentBalances:
    """AccountBalanceSource that only knows today's balances."""

    supports_history = False

    def __init__(self, balances_by_family: Mapping[str, Iterable[AccountBalance]] | None = None):
        self._balances = {family_id: list(b) for family_id, b in (balances_by_family or {}).items()}

    def balances(self, family_id: str, as_of: date) -> list[AccountBalance]:
        return list(self._balances.get(family_id, []))


class InMemoryCategories:
    """CategorySource over categories held in memory, keyed by family."""

    def __init__(self, categories_by_family: Mapping[str, Iterable[Category]] | None = None):
        self._categories = {family_id: list(c) for family_id, c in (categories_by_family or {}).items()}

    def categories(self, family_id: str) -> list[Category]:
        return list(self._categories.get(family_id, []))
