"""
POS Checkout Engine — Invoice Model
=====================================
The immutable record of a completed checkout.

RULES (NON-NEGOTIABLE):
- subtotal == Σ line.quantity × line.unit_price
- total == subtotal + Σ taxes
- Lines are snapshots; they never reference the live Cart
- Taxes keep insertion order (VAT first, service charge second)

Both totals are checked at construction. An Invoice that does not
add up cannot exist.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Dict, Iterator, Optional, Tuple

from core.config.rules import SellerInfo, TaxRule
from core.primitives.money import sum_money, to_decimal

SUMMARY_DATE_FORMAT = "%d/%m/%Y %H:%M"


# ══════════════════════════════════════════════════════════════
# INVOICE LINE
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class InvoiceLine:
    product_id: int
    name: str
    unit_price: Decimal
    quantity: int

    def __post_init__(self):
        if not isinstance(self.product_id, int) or self.product_id <= 0:
            raise ValueError("product_id must be a positive integer.")
        if not self.name:
            raise ValueError("name must be non-empty.")
        price = to_decimal(self.unit_price)
        if price < 0:
            raise ValueError("unit_price cannot be negative.")
        object.__setattr__(self, "unit_price", price)
        if (not isinstance(self.quantity, int)
                or isinstance(self.quantity, bool)
                or self.quantity <= 0):
            raise ValueError("quantity must be a positive integer.")

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity

    @classmethod
    def from_line_item(cls, line) -> InvoiceLine:
        return cls(
            product_id=line.product_id,
            name=line.name,
            unit_price=line.unit_price,
            quantity=line.quantity,
        )

    def to_dict(self) -> dict:
        return {
            "product_id": self.product_id,
            "name": self.name,
            "unit_price": str(self.unit_price),
            "quantity": self.quantity,
            "line_total": str(self.line_total),
        }


# ══════════════════════════════════════════════════════════════
# TAX BREAKDOWN
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class TaxLine:
    label: str
    code: str
    rate: Decimal
    amount: Decimal

    @classmethod
    def from_rule(cls, rule: TaxRule, base: Decimal) -> TaxLine:
        return cls(
            label=rule.label, code=rule.code,
            rate=rule.rate, amount=rule.compute(base),
        )


@dataclass(frozen=True)
class TaxBreakdown:
    """Ordered label → amount mapping."""

    lines: Tuple[TaxLine, ...] = ()

    def __post_init__(self):
        labels = [line.label for line in self.lines]
        if len(labels) != len(set(labels)):
            raise ValueError("Tax labels must be unique.")

    def __iter__(self) -> Iterator[str]:
        return (line.label for line in self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    def __getitem__(self, label: str) -> Decimal:
        for line in self.lines:
            if line.label == label:
                return line.amount
        raise KeyError(label)

    def __contains__(self, label: object) -> bool:
        return any(line.label == label for line in self.lines)

    def get(self, label: str, default: Optional[Decimal] = None) -> Optional[Decimal]:
        try:
            return self[label]
        except KeyError:
            return default

    def keys(self) -> Tuple[str, ...]:
        return tuple(line.label for line in self.lines)

    def values(self) -> Tuple[Decimal, ...]:
        return tuple(line.amount for line in self.lines)

    def items(self) -> Tuple[Tuple[str, Decimal], ...]:
        return tuple((line.label, line.amount) for line in self.lines)

    @property
    def total(self) -> Decimal:
        return sum_money(self.values())

    def as_dict(self) -> Dict[str, Decimal]:
        return dict(self.items())

    def to_dict(self) -> Dict[str, str]:
        return {label: str(amount) for label, amount in self.items()}


# ══════════════════════════════════════════════════════════════
# INVOICE
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Invoice:
    """
    Fields:
        invoice_id: "FACT-YYYYMMDD-NNNN"
        issued_at:  Timezone-aware issue time
        lines:      Snapshot of the cart lines, cart order
        subtotal:   Σ line totals
        taxes:      Ordered tax breakdown
        total:      subtotal + Σ taxes
        seller:     Seller block printed on the invoice
    """
    invoice_id: str
    issued_at: datetime
    lines: Tuple[InvoiceLine, ...]
    subtotal: Decimal
    taxes: TaxBreakdown
    total: Decimal
    seller: SellerInfo = field(default_factory=SellerInfo)

    def __post_init__(self):
        if not self.invoice_id or not isinstance(self.invoice_id, str):
            raise ValueError("invoice_id must be a non-empty string.")
        if not isinstance(self.issued_at, datetime) or self.issued_at.tzinfo is None:
            raise ValueError("issued_at must be a timezone-aware datetime.")
        lines = tuple(self.lines)
        if not lines:
            raise ValueError("An invoice needs at least one line.")
        object.__setattr__(self, "lines", lines)
        if not isinstance(self.taxes, TaxBreakdown):
            raise ValueError("taxes must be TaxBreakdown.")

        subtotal = to_decimal(self.subtotal)
        total = to_decimal(self.total)
        object.__setattr__(self, "subtotal", subtotal)
        object.__setattr__(self, "total", total)

        expected_subtotal = sum_money(line.line_total for line in lines)
        if subtotal != expected_subtotal:
            raise ValueError(
                f"subtotal {subtotal} != sum of line totals {expected_subtotal}."
            )
        expected_total = subtotal + self.taxes.total
        if total != expected_total:
            raise ValueError(
                f"total {total} != subtotal + taxes {expected_total}."
            )

    @property
    def item_count(self) -> int:
        return len(self.lines)

    @property
    def total_units(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def total_tax(self) -> Decimal:
        return self.taxes.total

    def to_dict(self) -> dict:
        return {
            "invoice_id": self.invoice_id,
            "issued_at": self.issued_at.isoformat(),
            "lines": [line.to_dict() for line in self.lines],
            "subtotal": str(self.subtotal),
            "taxes": self.taxes.to_dict(),
            "total": str(self.total),
            "seller": self.seller.to_dict(),
        }


# ══════════════════════════════════════════════════════════════
# DERIVED VIEWS (pure)
# ══════════════════════════════════════════════════════════════

def summarize(invoice: Invoice) -> str:
    """Short multi-line summary: id, date, item count, total."""
    return "\n".join((
        f"Factura: {invoice.invoice_id}",
        f"Fecha: {invoice.issued_at.strftime(SUMMARY_DATE_FORMAT)}",
        f"Items: {invoice.item_count} productos",
        f"Total: ${invoice.total:.2f}",
    ))


def statistics(invoice: Invoice) -> dict:
    total_units = invoice.total_units
    priciest = max(invoice.lines, key=lambda line: line.unit_price)
    cheapest = min(invoice.lines, key=lambda line: line.unit_price)
    return {
        "item_count": invoice.item_count,
        "total_units": total_units,
        "subtotal": invoice.subtotal,
        "total_tax": invoice.total_tax,
        "total": invoice.total,
        "average_unit_price": (
            invoice.subtotal / Decimal(total_units) if total_units else None
        ),
        "priciest_product_name": priciest.name,
        "cheapest_product_name": cheapest.name,
    }
