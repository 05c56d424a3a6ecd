"""
POS Core Config — Public API
===============================
Tax rules, seller details and checkout configuration.
"""

from core.config.rules import (
    INVOICE_PREFIX,
    SERVICE_CHARGE_RATE,
    SERVICE_CHARGE_RULE,
    VAT_RATE,
    VAT_RULE,
    CheckoutConfig,
    SellerInfo,
    TaxRule,
    default_checkout_config,
)

__all__ = [
    "INVOICE_PREFIX",
    "SERVICE_CHARGE_RATE",
    "SERVICE_CHARGE_RULE",
    "VAT_RATE",
    "VAT_RULE",
    "CheckoutConfig",
    "SellerInfo",
    "TaxRule",
    "default_checkout_config",
]
