"""
POS Checkout Engine — Event Types and Payload Builders
========================================================
Engine: Checkout
"""

from __future__ import annotations

from typing import List

from engines.checkout.invoice import Invoice


# ══════════════════════════════════════════════════════════════
# EVENT TYPE CONSTANTS
# ══════════════════════════════════════════════════════════════

CHECKOUT_STARTED_V1 = "checkout.sale.started.v1"
CHECKOUT_COMPLETED_V1 = "checkout.sale.completed.v1"
CHECKOUT_REJECTED_V1 = "checkout.sale.rejected.v1"
CHECKOUT_ROLLED_BACK_V1 = "checkout.commit.rolled_back.v1"
CHECKOUT_FAILED_V1 = "checkout.sale.failed.v1"

CHECKOUT_EVENT_TYPES = (
    CHECKOUT_STARTED_V1,
    CHECKOUT_COMPLETED_V1,
    CHECKOUT_REJECTED_V1,
    CHECKOUT_ROLLED_BACK_V1,
    CHECKOUT_FAILED_V1,
)


# ══════════════════════════════════════════════════════════════
# PAYLOAD BUILDERS
# ══════════════════════════════════════════════════════════════

def build_checkout_started_payload(
    cart_id: str, line_count: int, apply_service_charge: bool,
) -> dict:
    return {
        "cart_id": cart_id,
        "line_count": line_count,
        "apply_service_charge": apply_service_charge,
    }


def build_checkout_completed_payload(invoice: Invoice) -> dict:
    return {
        "invoice_id": invoice.invoice_id,
        "item_count": invoice.item_count,
        "total_units": invoice.total_units,
        "subtotal": str(invoice.subtotal),
        "taxes": invoice.taxes.to_dict(),
        "total": str(invoice.total),
    }


def build_checkout_rejected_payload(cart_id: str, rejection_code: str, details: dict) -> dict:
    return {
        "cart_id": cart_id,
        "rejection_code": rejection_code,
        "details": dict(details),
    }


def build_rollback_payload(cart_id: str, restored: List[tuple]) -> dict:
    """restored: [(product_id, quantity), ...] in restore order."""
    return {
        "cart_id": cart_id,
        "restored": [
            {"product_id": pid, "quantity": qty} for pid, qty in restored
        ],
    }
