"""Fixed-point money helpers.

Balances and amounts are stored as integer minor units (cents). Values
entering the system are parsed from ``Decimal``, ``int`` or decimal strings
with at most two fractional digits; binary floats are refused outright.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Union

MoneyInput = Union[Decimal, int, str]

CENTS = Decimal("0.01")
_SCALE = 100


class MoneyFormatError(ValueError):
    """Raised when a value cannot be represented as an exact amount of cents."""


def parse_decimal(value: MoneyInput) -> Decimal:
    if isinstance(value, bool) or isinstance(value, float):
        raise MoneyFormatError(f"unsupported amount type: {type(value).__name__}")
    if isinstance(value, Decimal):
        parsed = value
    elif isinstance(value, int):
        parsed = Decimal(value)
    elif isinstance(value, str):
        try:
            parsed = Decimal(value.strip())
        except InvalidOperation as exc:
            raise MoneyFormatError(f"not a decimal amount: {value!r}") from exc
    else:
        raise MoneyFormatError(f"unsupported amount type: {type(value).__name__}")

    if not parsed.is_finite():
        raise MoneyFormatError(f"amount must be finite: {value!r}")
    try:
        quantized = parsed.quantize(CENTS)
    except InvalidOperation as exc:
        raise MoneyFormatError(f"amount out of range: {value!r}") from exc
    if parsed != quantized:
        raise MoneyFormatError(f"amount has more than two decimal places: {value!r}")
    return parsed


def to_cents(value: MoneyInput) -> int:
    return int(parse_decimal(value) * _SCALE)


def from_cents(cents: int) -> Decimal:
    return (Decimal(cents) / _SCALE).quantize(CENTS)


def try_parse_cents(text: str) -> int | None:
    """Return the amount in cents when ``text`` is an exact decimal amount, otherwise ``None``."""
    try:
        return to_cents(text)
    except MoneyFormatError:
        return None


__all__ = [
    "CENTS",
    "MoneyFormatError",
    "MoneyInput",
    "from_cents",
    "parse_decimal",
    "to_cents",
    "try_parse_cents",
]
