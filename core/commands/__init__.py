"""
POS Command Layer — Outcomes and Rejections
==============================================
Every operation produces exactly one Outcome.
REJECTED outcomes are first-class values, never exceptions.
"""

from core.commands.outcomes import (
    Outcome,
    OutcomeStatus,
)
from core.commands.rejection import (
    ALL_REASON_CODES,
    ReasonCode,
    RejectionReason,
    insufficient_stock,
    invalid_quantity,
    not_in_cart,
    product_not_found,
)

__all__ = [
    # ── Outcomes ──────────────────────────────────────────────
    "Outcome",
    "OutcomeStatus",
    # ── Rejection ─────────────────────────────────────────────
    "RejectionReason",
    "ReasonCode",
    "ALL_REASON_CODES",
    "invalid_quantity",
    "product_not_found",
    "insufficient_stock",
    "not_in_cart",
]
