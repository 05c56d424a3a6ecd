"""
POS Money Primitive — Decimal Amounts
=======================================
Every price, subtotal, tax and total in the POS is a Decimal.

RULES (NON-NEGOTIABLE):
- No floats in arithmetic. Inputs are converted via str() so that
  899.99 stays 899.99 and never becomes 899.9900000000000091.
- Single currency; formatting is a presentation concern.
- Rounding happens only where money is derived from a rate
  (taxes), half-up to cents.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable

CENT = Decimal("0.01")
ZERO = Decimal(0)


def to_decimal(value: Any) -> Decimal:
    """Convert int/str/float/Decimal to Decimal without binary float noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("bool is not a monetary amount.")
    if isinstance(value, (int, float, str)):
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise ValueError(f"'{value}' is not a valid decimal amount.") from exc
        if not result.is_finite():
            raise ValueError(f"'{value}' is not a finite amount.")
        return result
    raise TypeError(
        f"Cannot convert {type(value).__name__} to a monetary amount."
    )


def quantize_money(amount: Decimal) -> Decimal:
    """Round half-up to cents."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def sum_money(amounts: Iterable[Decimal]) -> Decimal:
    total = ZERO
    for amount in amounts:
        total += amount
    return total
