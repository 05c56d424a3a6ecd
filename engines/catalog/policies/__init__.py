"""
POS Catalog Engine — Policies
===============================
Validation policies for catalog operations.
Each policy returns None (pass) or a RejectionReason.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from core.commands.rejection import (
    ReasonCode,
    RejectionReason,
    insufficient_stock,
    invalid_quantity,
)
from core.primitives.product import Product


def positive_quantity_policy(
    quantity: Any, policy_name: str = "positive_quantity_policy",
) -> Optional[RejectionReason]:
    """Reject anything that is not an integer > 0."""
    if (
        not isinstance(quantity, int)
        or isinstance(quantity, bool)
        or quantity <= 0
    ):
        return invalid_quantity(quantity, policy_name)
    return None


def sufficient_stock_policy(
    product: Product,
    requested: int,
    policy_name: str = "sufficient_stock_policy",
) -> Optional[RejectionReason]:
    """Reject if the product cannot cover the requested quantity."""
    if not product.has_sufficient_stock(requested):
        return insufficient_stock(
            product_id=product.id,
            product_name=product.name,
            available=product.available_stock,
            requested=requested,
            policy_name=policy_name,
        )
    return None


def price_range_policy(
    min_price: Decimal, max_price: Decimal,
) -> Optional[RejectionReason]:
    """Reject negative bounds and min > max."""
    if min_price < 0 or max_price < 0 or min_price > max_price:
        return RejectionReason(
            code=ReasonCode.INVALID_RANGE,
            message=f"Invalid price range: {min_price} - {max_price}.",
            policy_name="price_range_policy",
            details={"min_price": str(min_price), "max_price": str(max_price)},
        )
    return None
