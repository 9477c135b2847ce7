#!/usr/bin/env python3
"""
Budget Stores - Where budgets live between calls.

BudgetStore is the protocol the engine saves through. A save always
receives a complete Budget, so a store that writes it in one step gives
all-or-nothing updates for free.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from ..core.json_utils import read_json, write_json
from ..core.period import beginning_of_month
from .models import Budget

logger = logging.getLogger(__name__)


@runtime_checkable
class BudgetStore(Protocol):
    """Persistence boundary for budgets, keyed by (family, month)."""

    def find(self, family_id: str, month: date) -> Budget | None:
        """
        Get the family's budget for the month containing month.

        Returns:
            The Budget, or None when none exists yet
        """
        ...

    def get(self, budget_id: str) -> Budget | None:
        """Get a budget by id."""
        ...

    def save(self, budget: Budget) -> Budget:
        """
        Insert or replace a budget as one unit.

        Returns:
            The stored Budget
        """
        ...


class InMemoryBudgetStore:
    """BudgetStore backed by a dict; the default for embedding and tests."""

    def __init__(self, budgets: list[Budget] | None = None):
        self._budgets: dict[tuple[str, date], Budget] = {}
        for budget in budgets or []:
            self.save(budget)

    def find(self, family_id: str, month: date) -> Budget | None:
        return self._budgets.get((family_id, beginning_of_month(month)))

    def get(self, budget_id: str) -> Budget | None:
        for budget in self._budgets.values():
            if budget.id == budget_id:
                return budget
        return None

    def save(self, budget: Budget) -> Budget:
        self._budgets[(budget.family_id, budget.start_date)] = budget
        return budget

    def __len__(self) -> int:
        return len(self._budgets)


class JsonBudgetStore:
    """
    BudgetStore backed by a single budgets.json file.

    The whole file is rewritten on every save through write_json, which
    replaces it atomically.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _load(self) -> list[Budget]:
        if not self.path.exists():
            return []

        data: Any = read_json(self.path)

        # Handle both array format and object format
        if isinstance(data, dict):
            budgets_list: list[dict[str, Any]] = data.get("budgets", [])
        elif isinstance(data, list):
            budgets_list = data
        else:
            raise ValueError(f"Invalid budgets file format: expected list or dict, got {type(data).__name__}")

        return [Budget.from_dict(b) for b in budgets_list]

    def find(self, family_id: str, month: date) -> Budget | None:
        start = beginning_of_month(month)
        for budget in self._load():
            if budget.family_id == family_id and budget.start_date == start:
                return budget
        return None

    def get(self, budget_id: str) -> Budget | None:
        for budget in self._load():
            if budget.id == budget_id:
                return budget
        return None

    def save(self, budget: Budget) -> Budget:
        budgets = [
            b
            for b in self._load()
            if not (b.family_id == budget.family_id and b.start_date == budget.start_date)
        ]
        budgets.append(budget)
        budgets.sort(key=lambda b: (b.family_id, b.start_date))

        write_json(self.path, {"budgets": [b.to_dict() for b in budgets]})
        logger.info("Saved budget %s for %s %s", budget.id, budget.family_id, budget.month_param)
        return budget
