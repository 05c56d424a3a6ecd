"""
POS Core Primitives — Shared Value Types
==========================================
Primitives are the shared, engine-agnostic building blocks that
the Catalog, Cart and Checkout engines consume. They are:

- Pure Python (no Django dependency)
- Immutable (frozen dataclasses)
- Deterministic (same input → same output)

Primitives:
    money    - Decimal conversion, cent rounding, summation
    product  - Catalog product snapshot
"""

from core.primitives.money import (
    CENT,
    ZERO,
    quantize_money,
    sum_money,
    to_decimal,
)
from core.primitives.product import Product

__all__ = [
    "CENT",
    "ZERO",
    "quantize_money",
    "sum_money",
    "to_decimal",
    "Product",
]
