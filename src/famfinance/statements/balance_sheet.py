#!/usr/bin/env python3
"""
Balance Sheet

Point-in-time asset total, liability total and net worth for a family,
grouped by account classification.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from typing import Any

from ..core.currency import DEFAULT_CURRENCY
from ..core.models import AccountBalance, AccountGroup, BalanceSheetTotals, BalanceSide
from ..core.money import Money
from ..core.sources import AccountBalanceSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BalanceSheetSnapshot:
    """Both sides of the balance sheet as of one date."""

    as_of: date
    assets: BalanceSheetTotals
    liabilities: BalanceSheetTotals

    @property
    def net_worth(self) -> Money:
        return self.assets.total - self.liabilities.total

    def to_dict(self) -> dict[str, Any]:
        return {
            "as_of": self.as_of.isoformat(),
            "assets": {"total": self.assets.total.format(), "breakdown": self.assets.breakdown()},
            "liabilities": {"total": self.liabilities.total.format(), "breakdown": self.liabilities.breakdown()},
            "net_worth": self.net_worth.format(),
        }


def group_balances(
    balances: Iterable[AccountBalance], side: BalanceSide, currency: str = DEFAULT_CURRENCY
) -> BalanceSheetTotals:
    """
    Sum balances of one side per account classification.

    Groups keep the order in which their classification first appears.

    Raises:
        CurrencyMismatch: If a balance is not in currency
    """
    totals: dict[str, Money] = {}
    counts: dict[str, int] = {}

    for account in balances:
        if account.side != side:
            continue
        key = account.classification
        totals[key] = totals.get(key, Money.zero(currency)).add(account.balance)
        counts[key] = counts.get(key, 0) + 1

    groups = tuple(AccountGroup(key=key, total=total, account_count=counts[key]) for key, total in totals.items())
    return BalanceSheetTotals(
        side=side,
        total=Money.sum((g.total for g in groups), currency),
        account_groups=groups,
    )


class BalanceSheet:
    """
    Computes assets, liabilities and net worth from an account balance source.

    Liability balances are amounts owed, so net worth is assets minus
    liabilities. Every method accepts an optional as_of date; without one
    the balance sheet's own as_of (default today) is used.
    """

    def __init__(
        self,
        source: AccountBalanceSource,
        family_id: str,
        currency: str = DEFAULT_CURRENCY,
        as_of: date | None = None,
    ):
        self.source = source
        self.family_id = family_id
        self.currency = currency
        self.as_of = as_of or date.today()

    def balances(self, as_of: date | None = None) -> list[AccountBalance]:
        as_of = as_of or self.as_of
        balances = list(self.source.balances(self.family_id, as_of))
        logger.debug("Loaded %d account balances for %s as of %s", len(balances), self.family_id, as_of)
        return balances

    def snapshot(self, as_of: date | None = None) -> BalanceSheetSnapshot:
        """Both sides from a single balance query."""
        as_of = as_of or self.as_of
        balances = self.balances(as_of)
        return BalanceSheetSnapshot(
            as_of=as_of,
            assets=group_balances(balances, BalanceSide.ASSET, self.currency),
            liabilities=group_balances(balances, BalanceSide.LIABILITY, self.currency),
        )

    def assets(self, as_of: date | None = None) -> BalanceSheetTotals:
        return group_balances(self.balances(as_of), BalanceSide.ASSET, self.currency)

    def liabilities(self, as_of: date | None = None) -> BalanceSheetTotals:
        return group_balances(self.balances(as_of), BalanceSide.LIABILITY, self.currency)

    def net_worth(self, as_of: date | None = None) -> Money:
        """Assets total minus liabilities total."""
        return self.snapshot(as_of).net_worth
