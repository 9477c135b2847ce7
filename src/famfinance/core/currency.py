#!/usr/bin/env python3
"""
Currency Tables and Decimal Helpers

Currency handling for the famfinance engine.
All amounts are exact decimals; nothing here ever touches floating point.

Key Principles:
- Amounts are decimal.Decimal, parsed from strings or integers only
- Each ISO currency has a canonical number of minor units used for display
- Rounding happens only when formatting or computing percentages (half-up)
"""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

DEFAULT_CURRENCY = "USD"

# Minor units per ISO 4217. Codes not listed here display with 2 places.
MINOR_UNITS: dict[str, int] = {
    "USD": 2,
    "EUR": 2,
    "GBP": 2,
    "CAD": 2,
    "AUD": 2,
    "CHF": 2,
    "MXN": 2,
    "INR": 2,
    "BRL": 2,
    "JPY": 0,
    "KRW": 0,
    "VND": 0,
    "CLP": 0,
    "BHD": 3,
    "KWD": 3,
    "JOD": 3,
    "OMR": 3,
}

SYMBOLS: dict[str, str] = {
    "USD": "$",
    "CAD": "C$",
    "AUD": "A$",
    "MXN": "MX$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "KRW": "₩",
    "INR": "₹",
    "BRL": "R$",
}

_CURRENCY_CODE = re.compile(r"^[A-Z]{3}$")

AmountLike = Union[Decimal, int, str]


def normalize_currency(code: str) -> str:
    """
    Normalize and validate an ISO currency code.

    Args:
        code: Currency code such as "usd" or "EUR"

    Returns:
        Upper-cased three letter code

    Raises:
        ValueError: If the code is not three letters
    """
    normalized = str(code).strip().upper()
    if not _CURRENCY_CODE.match(normalized):
        raise ValueError(f"Invalid currency code: {code!r}")
    return normalized


def minor_units(currency: str) -> int:
    """Get the number of minor units used to display a currency."""
    return MINOR_UNITS.get(currency, 2)


def quantum(currency: str) -> Decimal:
    """
    Get the smallest displayable step for a currency.

    Example:
        quantum("USD") -> Decimal("0.01")
        quantum("JPY") -> Decimal("1")
    """
    return Decimal(1).scaleb(-minor_units(currency))


def to_decimal(value: AmountLike) -> Decimal:
    """
    Convert an int, str or Decimal into a Decimal without precision loss.

    Floats are refused since they cannot represent most cent values exactly.

    Raises:
        TypeError: For floats and unsupported types
        ValueError: For strings that are not numbers
    """
    if isinstance(value, bool):
        raise TypeError("Booleans are not monetary amounts")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        raise TypeError("Float amounts are not allowed; pass a str or Decimal")
    if isinstance(value, str):
        return parse_amount(value)
    raise TypeError(f"Unsupported amount type: {type(value).__name__}")


def parse_amount(amount_str: str) -> Decimal:
    """
    Parse a display string into an exact Decimal.

    Args:
        amount_str: String like "1,234.56", "$12.34" or "-45.99"

    Returns:
        Exact decimal amount

    Raises:
        ValueError: If the string is not a number

    Examples:
        parse_amount("$1,234.56") -> Decimal("1234.56")
        parse_amount("-12.5") -> Decimal("-12.5")
    """
    clean = amount_str.strip()
    for symbol in sorted(SYMBOLS.values(), key=len, reverse=True):
        clean = clean.replace(symbol, "")
    clean = clean.replace(",", "").replace(" ", "")

    if not clean:
        raise ValueError(f"Empty amount: {amount_str!r}")

    try:
        result = Decimal(clean)
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount: {amount_str!r}") from e

    if not result.is_finite():
        raise ValueError(f"Invalid amount: {amount_str!r}")
    return result


def round_half_up(value: Decimal, places: int) -> Decimal:
    """Round a Decimal to a number of places, halves away from zero."""
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def format_amount(amount: Decimal, currency: str) -> str:
    """
    Format a decimal amount with thousands separators and symbol.

    Negative amounts put the sign in front of the symbol.

    Args:
        amount: Exact decimal amount
        currency: ISO currency code

    Returns:
        Display string

    Examples:
        format_amount(Decimal("1234.5"), "USD") -> "$1,234.50"
        format_amount(Decimal("-12"), "JPY") -> "-¥12"
        format_amount(Decimal("3"), "SEK") -> "SEK 3.00"
    """
    places = minor_units(currency)
    rounded = round_half_up(amount, places)
    is_negative = rounded < 0
    number = f"{abs(rounded):,.{places}f}"

    symbol = SYMBOLS.get(currency)
    body = f"{symbol}{number}" if symbol else f"{currency} {number}"
    return f"-{body}" if is_negative else body


def percentage(part: Decimal, whole: Decimal, places: int = 1) -> Decimal:
    """
    Compute part / whole * 100 rounded half-up.

    Returns Decimal 0 when whole is not positive, so callers never divide by zero.

    Example:
        percentage(Decimal("1000"), Decimal("1300")) -> Decimal("76.9")
    """
    if whole <= 0:
        return Decimal(0)
    return round_half_up(part / whole * 100, places)
