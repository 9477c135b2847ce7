#!/usr/bin/env python3
"""
Engine Error Taxonomy

Typed failures raised by the aggregation and budget engine so a presentation
layer can map each kind to its own response format.

Arithmetic and period errors are programmer errors and fail the call.
Lookup errors (BudgetNotFound) are expected and recoverable by the caller.
"""


class FinanceEngineError(Exception):
    """Base class for every error raised by famfinance."""

    pass


class CurrencyMismatch(FinanceEngineError, ValueError):
    """Raised when two Money values with different currencies are combined."""

    def __init__(self, left: str, right: str, operation: str = "combine"):
        self.left = left
        self.right = right
        self.operation = operation
        super().__init__(f"Cannot {operation} {left} with {right}")


class DivisionByZero(FinanceEngineError, ZeroDivisionError):
    """Raised when a Money value is divided by zero."""

    pass


class InvalidPeriod(FinanceEngineError, ValueError):
    """Raised when a period ends before it starts."""

    pass


class InvalidMonthFormat(FinanceEngineError, ValueError):
    """Raised when a month parameter is not in YYYY-MM format."""

    pass


class InvalidCategoryTree(FinanceEngineError, ValueError):
    """Raised when categories cannot form a one-level hierarchy."""

    pass


class UnknownCategory(FinanceEngineError, KeyError):
    """Raised when a category id is not part of the tree being queried."""

    def __str__(self) -> str:
        return f"Unknown category: {self.args[0]!r}" if self.args else "Unknown category"


class BudgetNotFound(FinanceEngineError, LookupError):
    """Raised when no budget exists for a family and month."""

    def __init__(self, family_id: str, month: object):
        self.family_id = family_id
        self.month = month
        super().__init__(f"No budget for family {family_id!r} and month {month}")


class CategoryNotInBudget(FinanceEngineError, LookupError):
    """Raised by strict budget updates naming a category the budget lacks."""

    def __init__(self, category_id: str):
        self.category_id = category_id
        super().__init__(f"Category {category_id!r} is not part of this budget")
