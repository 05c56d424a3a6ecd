"""
POS Product Primitive — Catalog Product Snapshot
==================================================
A Product is an immutable snapshot of one catalog entry.

RULES (NON-NEGOTIABLE):
- id is a unique positive integer
- unit_price is a Decimal >= 0
- available_stock is an integer >= 0
- available_stock is the only field that ever changes, and only
  through Catalog.reduce_stock / Catalog.restore_stock, which swap
  in a new snapshot via with_stock()

This file contains NO persistence logic.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal

from core.primitives.money import to_decimal


@dataclass(frozen=True)
class Product:
    """
    Catalog product.

    Fields:
        id:              Unique positive identifier
        name:            Display name
        unit_price:      Price per unit (Decimal, coerced from int/str/float)
        available_stock: Units currently available for sale
    """
    id: int
    name: str
    unit_price: Decimal
    available_stock: int

    def __post_init__(self):
        if not isinstance(self.id, int) or isinstance(self.id, bool) or self.id <= 0:
            raise ValueError("id must be a positive integer.")
        if not self.name or not isinstance(self.name, str):
            raise ValueError("name must be non-empty string.")
        price = to_decimal(self.unit_price)
        if price < 0:
            raise ValueError("unit_price cannot be negative.")
        object.__setattr__(self, "unit_price", price)
        if (not isinstance(self.available_stock, int)
                or isinstance(self.available_stock, bool)
                or self.available_stock < 0):
            raise ValueError("available_stock must be a non-negative integer.")

    @property
    def is_in_stock(self) -> bool:
        return self.available_stock > 0

    def has_sufficient_stock(self, quantity: int) -> bool:
        return self.available_stock >= quantity

    def with_stock(self, available_stock: int) -> Product:
        """Return a new snapshot with a different stock count."""
        return replace(self, available_stock=available_stock)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "unit_price": str(self.unit_price),
            "available_stock": self.available_stock,
        }
