#!/usr/bin/env python3
"""
Money Primitive Type

Immutable decimal amount tagged with an ISO currency code.
Prevents floating-point errors and refuses to mix currencies.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from .currency import (
    DEFAULT_CURRENCY,
    AmountLike,
    format_amount,
    minor_units,
    normalize_currency,
    percentage,
    quantum,
    round_half_up,
    to_decimal,
)
from .exceptions import CurrencyMismatch, DivisionByZero


@dataclass(frozen=True)
class Money:
    """
    Immutable money value.

    Supports both positive and negative amounts. Every operation returns a new
    Money; operations between two Money values require the same currency.

    Examples:
        >>> rent = Money.of("1000.00")
        >>> food = Money.of("300", "USD")
        >>> (rent + food).format()
        '$1,300.00'

        >>> rent - food
        Money(amount=Decimal('700.00'), currency='USD')

        >>> Money.of("5", "EUR") + Money.of("5", "USD")
        Traceback (most recent call last):
        ...
        famfinance.core.exceptions.CurrencyMismatch: Cannot add EUR with USD
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", to_decimal(self.amount))
        object.__setattr__(self, "currency", normalize_currency(self.currency))

    @classmethod
    def of(cls, amount: AmountLike, currency: str = DEFAULT_CURRENCY) -> "Money":
        """Create Money from a str, int or Decimal amount."""
        return cls(amount=to_decimal(amount), currency=currency)

    @classmethod
    def zero(cls, currency: str = DEFAULT_CURRENCY) -> "Money":
        """Create a zero amount in the given currency."""
        return cls(amount=Decimal(0), currency=currency)

    @classmethod
    def from_minor_units(cls, units: int, currency: str = DEFAULT_CURRENCY) -> "Money":
        """
        Create Money from an integer count of minor units (e.g. cents).

        Example:
            Money.from_minor_units(1234, "USD") -> $12.34
        """
        code = normalize_currency(currency)
        return cls(amount=Decimal(units) * quantum(code), currency=code)

    @classmethod
    def sum(cls, values: Iterable["Money"], currency: str = DEFAULT_CURRENCY) -> "Money":
        """
        Add up Money values, starting from zero in the given currency.

        Raises:
            CurrencyMismatch: If any value is in a different currency
        """
        total = cls.zero(currency)
        for value in values:
            total = total.add(value)
        return total

    def _check_currency(self, other: "Money", operation: str) -> None:
        if not isinstance(other, Money):
            raise TypeError(f"Cannot {operation} Money and {type(other).__name__}")
        if self.currency != other.currency:
            raise CurrencyMismatch(self.currency, other.currency, operation)

    def add(self, other: "Money") -> "Money":
        """Add two Money values of the same currency."""
        self._check_currency(other, "add")
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def subtract(self, other: "Money") -> "Money":
        """Subtract a Money value of the same currency."""
        self._check_currency(other, "subtract")
        return Money(amount=self.amount - other.amount, currency=self.currency)

    def negate(self) -> "Money":
        """Flip the sign."""
        return Money(amount=-self.amount, currency=self.currency)

    def abs(self) -> "Money":
        """Return absolute value of Money."""
        return Money(amount=abs(self.amount), currency=self.currency)

    def multiply(self, scalar: AmountLike) -> "Money":
        """Multiply by an int, str or Decimal scalar."""
        return Money(amount=self.amount * to_decimal(scalar), currency=self.currency)

    def divide(self, scalar: AmountLike) -> "Money":
        """
        Divide by an int, str or Decimal scalar.

        Raises:
            DivisionByZero: If scalar is zero
        """
        divisor = to_decimal(scalar)
        if divisor == 0:
            raise DivisionByZero(f"Cannot divide {self.format()} by zero")
        return Money(amount=self.amount / divisor, currency=self.currency)

    def ratio(self, other: "Money") -> Decimal:
        """
        Get self / other as a plain Decimal.

        Raises:
            CurrencyMismatch: If currencies differ
            DivisionByZero: If other is zero
        """
        self._check_currency(other, "divide")
        if other.amount == 0:
            raise DivisionByZero(f"Cannot divide {self.format()} by zero")
        return self.amount / other.amount

    def percent_of(self, whole: "Money", places: int = 1) -> Decimal:
        """
        Get this amount as a percentage of whole, rounded half-up.

        Returns 0 when whole is zero or negative instead of failing.
        """
        self._check_currency(whole, "compare")
        return percentage(self.amount, whole.amount, places)

    def compare(self, other: "Money") -> int:
        """
        Three-way comparison: -1, 0 or 1.

        Raises:
            CurrencyMismatch: If currencies differ
        """
        self._check_currency(other, "compare")
        if self.amount < other.amount:
            return -1
        if self.amount > other.amount:
            return 1
        return 0

    def is_zero(self) -> bool:
        return self.amount == 0

    def is_positive(self) -> bool:
        return self.amount > 0

    def is_negative(self) -> bool:
        return self.amount < 0

    def to_minor_units(self) -> int:
        """Get the amount as an integer count of minor units, rounded half-up."""
        return int(self.round().amount / quantum(self.currency))

    def round(self) -> "Money":
        """Round to the currency's minor units."""
        return Money(amount=round_half_up(self.amount, minor_units(self.currency)), currency=self.currency)

    def format(self) -> str:
        """Format with the currency's canonical number of minor units."""
        return format_amount(self.amount, self.currency)

    def __add__(self, other: "Money") -> "Money":
        return self.add(other)

    def __sub__(self, other: "Money") -> "Money":
        return self.subtract(other)

    def __neg__(self) -> "Money":
        return self.negate()

    def __mul__(self, scalar: AmountLike) -> "Money":
        return self.multiply(scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: AmountLike) -> "Money":
        return self.divide(scalar)

    def __lt__(self, other: "Money") -> bool:
        return self.compare(other) < 0

    def __le__(self, other: "Money") -> bool:
        return self.compare(other) <= 0

    def __gt__(self, other: "Money") -> bool:
        return self.compare(other) > 0

    def __ge__(self, other: "Money") -> bool:
        return self.compare(other) >= 0

    def __str__(self) -> str:
        return self.format()
