"""
POS Cart Engine — Policies
============================
Each policy returns None (pass) or a RejectionReason.
"""

from __future__ import annotations

from typing import Optional

from core.commands.rejection import (
    RejectionReason,
    insufficient_stock,
    not_in_cart,
    product_not_found,
)
from core.primitives.product import Product


def line_present_policy(
    line, product_id, policy_name: str,
) -> Optional[RejectionReason]:
    """Reject when the cart holds no line for product_id."""
    if line is None:
        return not_in_cart(product_id, policy_name)
    return None


def cart_stock_policy(
    product: Optional[Product],
    product_id,
    requested_total: int,
    policy_name: str,
) -> Optional[RejectionReason]:
    """
    Reject when the catalog cannot cover requested_total units.

    requested_total is what the cart would hold after the change,
    not the delta alone.
    """
    if product is None:
        return product_not_found(product_id, policy_name)
    if not product.has_sufficient_stock(requested_total):
        return insufficient_stock(
            product_id=product.id,
            product_name=product.name,
            available=product.available_stock,
            requested=requested_total,
            policy_name=policy_name,
        )
    return None
