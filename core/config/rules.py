"""
POS Core Config — Tax Rules and Checkout Configuration
=========================================================
Tax rates, the invoice prefix and seller details are data, passed
to CheckoutService as a CheckoutConfig. Engine logic never hardcodes
a rate.

Defaults reproduce the store's fixed rates: IVA 13% on every sale,
optional 10% service charge.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from core.primitives.money import quantize_money, to_decimal


# ══════════════════════════════════════════════════════════════
# DEFAULTS
# ══════════════════════════════════════════════════════════════

VAT_RATE = Decimal("0.13")
SERVICE_CHARGE_RATE = Decimal("0.10")
INVOICE_PREFIX = "FACT"


# ══════════════════════════════════════════════════════════════
# TAX RULE
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class TaxRule:
    """
    Percentage charge computed on the checkout subtotal.

    label is derived from name and rate, e.g. "IVA (13%)"; it is the
    key under which the amount appears in the invoice TaxBreakdown.
    """

    code: str  # VAT | SERVICE_CHARGE
    name: str
    rate: Decimal  # 0.13 means 13%

    def __post_init__(self) -> None:
        if not self.code or not isinstance(self.code, str):
            raise ValueError("code must be a non-empty string.")
        if not self.name or not isinstance(self.name, str):
            raise ValueError("name must be a non-empty string.")
        rate = to_decimal(self.rate)
        if not 0 <= rate <= 1:
            raise ValueError(f"Tax rate must be between 0 and 1, got {rate}.")
        object.__setattr__(self, "rate", rate)

    @property
    def percent(self) -> str:
        return f"{(self.rate * 100).normalize():f}"

    @property
    def label(self) -> str:
        return f"{self.name} ({self.percent}%)"

    def compute(self, base: Decimal) -> Decimal:
        """Compute the charge for a base amount, rounded to cents."""
        return quantize_money(to_decimal(base) * self.rate)


VAT_RULE = TaxRule(code="VAT", name="IVA", rate=VAT_RATE)
SERVICE_CHARGE_RULE = TaxRule(
    code="SERVICE_CHARGE", name="Servicio", rate=SERVICE_CHARGE_RATE,
)


# ══════════════════════════════════════════════════════════════
# SELLER INFO
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SellerInfo:
    """Static seller block printed on every invoice."""

    name: str = "TechStore El Salvador"
    address: str = "San Salvador, El Salvador"
    phone: str = "+503 2234-5678"
    email: str = "ventas@techstore.sv"
    tax_id: str = "0614-123456-001-2"

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "address": self.address,
            "phone": self.phone,
            "email": self.email,
            "tax_id": self.tax_id,
        }


# ══════════════════════════════════════════════════════════════
# CHECKOUT CONFIG
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class CheckoutConfig:
    """
    Everything CheckoutService needs besides the cart and catalog.

    vat is always applied; service_charge only when the caller asks
    for it at process() time.
    """

    vat: TaxRule = VAT_RULE
    service_charge: Optional[TaxRule] = SERVICE_CHARGE_RULE
    invoice_prefix: str = INVOICE_PREFIX
    seller: SellerInfo = field(default_factory=SellerInfo)

    def __post_init__(self) -> None:
        if not isinstance(self.vat, TaxRule):
            raise ValueError("vat must be TaxRule.")
        if self.service_charge is not None and not isinstance(
            self.service_charge, TaxRule
        ):
            raise ValueError("service_charge must be TaxRule or None.")
        if not self.invoice_prefix or not isinstance(self.invoice_prefix, str):
            raise ValueError("invoice_prefix must be a non-empty string.")


def default_checkout_config() -> CheckoutConfig:
    return CheckoutConfig()
