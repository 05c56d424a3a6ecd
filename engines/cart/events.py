"""
POS Cart Engine — Event Types and Payload Builders
====================================================
Engine: Cart

Cart changes are informational: they describe the tentative order and
never imply a stock movement.
"""

from __future__ import annotations

from typing import Optional


# ══════════════════════════════════════════════════════════════
# EVENT TYPE CONSTANTS
# ══════════════════════════════════════════════════════════════

CART_CREATED_V1 = "cart.cart.created.v1"
CART_ITEM_ADDED_V1 = "cart.item.added.v1"
CART_ITEM_INCREASED_V1 = "cart.item.increased.v1"
CART_ITEM_DECREASED_V1 = "cart.item.decreased.v1"
CART_ITEM_REMOVED_V1 = "cart.item.removed.v1"
CART_ITEM_REJECTED_V1 = "cart.item.rejected.v1"
CART_CLEARED_V1 = "cart.cart.cleared.v1"
CART_REVALIDATION_FAILED_V1 = "cart.revalidation.failed.v1"

CART_EVENT_TYPES = (
    CART_CREATED_V1,
    CART_ITEM_ADDED_V1,
    CART_ITEM_INCREASED_V1,
    CART_ITEM_DECREASED_V1,
    CART_ITEM_REMOVED_V1,
    CART_ITEM_REJECTED_V1,
    CART_CLEARED_V1,
    CART_REVALIDATION_FAILED_V1,
)


# ══════════════════════════════════════════════════════════════
# PAYLOAD BUILDERS
# ══════════════════════════════════════════════════════════════

def build_line_changed_payload(
    cart_id: str,
    product_id: int,
    product_name: str,
    delta: int,
    new_quantity: int,
) -> dict:
    return {
        "cart_id": cart_id,
        "product_id": product_id,
        "product_name": product_name,
        "delta": delta,
        "quantity": new_quantity,
    }


def build_line_rejected_payload(
    cart_id: str,
    product_id,
    quantity,
    rejection_code: str,
    in_cart: Optional[int] = None,
) -> dict:
    return {
        "cart_id": cart_id,
        "product_id": product_id,
        "quantity": quantity,
        "in_cart": in_cart,
        "rejection_code": rejection_code,
    }


def build_cart_cleared_payload(cart_id: str, removed_lines: int) -> dict:
    return {"cart_id": cart_id, "removed_lines": removed_lines}
