"""
POS Command Layer — Rejection Model
======================================
Structured rejection reasons for denied operations.

A rejection is a VALUE, not an exception. Catalog, Cart and Checkout
return it inside a REJECTED Outcome and the caller decides how to
render it.

Every rejection must be:
- Deterministic (same input → same rejection)
- Machine-readable (code + details)
- Human-readable (message)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


# ══════════════════════════════════════════════════════════════
# REJECTION REASON (frozen explanation structure)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RejectionReason:
    """
    Structured reason for an operation rejection.

    Fields:
        code:        Machine-readable rejection code (see ReasonCode).
        message:     Human-readable explanation.
        policy_name: Name of the policy / operation that rejected.
        details:     Quantities and identifiers needed to render a
                     specific message (e.g. available/requested).
    """

    code: str
    message: str
    policy_name: str
    details: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.code or not isinstance(self.code, str):
            raise ValueError("code must be a non-empty string.")

        if not self.message or not isinstance(self.message, str):
            raise ValueError("message must be a non-empty string.")

        if not self.policy_name or not isinstance(self.policy_name, str):
            raise ValueError("policy_name must be a non-empty string.")

        if not isinstance(self.details, dict):
            raise ValueError("details must be a dict.")

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "policy_name": self.policy_name,
            "details": dict(self.details),
        }


# ══════════════════════════════════════════════════════════════
# STANDARD REJECTION CODES
# ══════════════════════════════════════════════════════════════

class ReasonCode:
    """
    Known rejection codes.

    Convention: SCREAMING_SNAKE_CASE.
    """

    # ── Input ─────────────────────────────────────────────────
    INVALID_QUANTITY = "INVALID_QUANTITY"
    INVALID_RANGE = "INVALID_RANGE"

    # ── Catalog ───────────────────────────────────────────────
    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
    INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"

    # ── Cart / checkout ───────────────────────────────────────
    NOT_IN_CART = "NOT_IN_CART"
    EMPTY_CART = "EMPTY_CART"

    # ── General ───────────────────────────────────────────────
    INTERNAL_ERROR = "INTERNAL_ERROR"


ALL_REASON_CODES = frozenset({
    ReasonCode.INVALID_QUANTITY,
    ReasonCode.INVALID_RANGE,
    ReasonCode.PRODUCT_NOT_FOUND,
    ReasonCode.INSUFFICIENT_STOCK,
    ReasonCode.NOT_IN_CART,
    ReasonCode.EMPTY_CART,
    ReasonCode.INTERNAL_ERROR,
})


# ══════════════════════════════════════════════════════════════
# REJECTION FACTORIES
# ══════════════════════════════════════════════════════════════

def invalid_quantity(quantity: Any, policy_name: str) -> RejectionReason:
    return RejectionReason(
        code=ReasonCode.INVALID_QUANTITY,
        message=f"Quantity must be a positive integer, got {quantity!r}.",
        policy_name=policy_name,
        details={"quantity": quantity},
    )


def product_not_found(product_id: Any, policy_name: str) -> RejectionReason:
    return RejectionReason(
        code=ReasonCode.PRODUCT_NOT_FOUND,
        message=f"Product {product_id} not found.",
        policy_name=policy_name,
        details={"product_id": product_id},
    )


def insufficient_stock(
    product_id: int,
    product_name: str,
    available: int,
    requested: int,
    policy_name: str,
) -> RejectionReason:
    return RejectionReason(
        code=ReasonCode.INSUFFICIENT_STOCK,
        message=(
            f"Insufficient stock for '{product_name}'. "
            f"Available: {available}, requested: {requested}."
        ),
        policy_name=policy_name,
        details={
            "product_id": product_id,
            "available": available,
            "requested": requested,
        },
    )


def not_in_cart(product_id: Any, policy_name: str) -> RejectionReason:
    return RejectionReason(
        code=ReasonCode.NOT_IN_CART,
        message=f"Product {product_id} is not in the cart.",
        policy_name=policy_name,
        details={"product_id": product_id},
    )
