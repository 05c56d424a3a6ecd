"""
POS Checkout Engine
====================
Validation, tax computation, stock commit and invoicing.
"""

from engines.checkout.invoice import (
    Invoice,
    InvoiceLine,
    TaxBreakdown,
    TaxLine,
    statistics,
    summarize,
)
from engines.checkout.services import CheckoutService

__all__ = [
    "CheckoutService",
    "Invoice",
    "InvoiceLine",
    "TaxBreakdown",
    "TaxLine",
    "statistics",
    "summarize",
]
