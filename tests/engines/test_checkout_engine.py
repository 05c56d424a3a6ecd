"""
POS Checkout Engine — Test Suite
==================================
Tests for: pricing, stock commit, invoice numbering, rollback on
partial failure, and the derived invoice views.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from core.commands.outcomes import Outcome
from core.commands.rejection import ReasonCode, insufficient_stock
from core.config import CheckoutConfig, SellerInfo
from core.documents.numbering import SequenceExhaustedError
from core.events import EventLevel, InMemoryEventSink
from core.primitives import Product
from core.time import FixedClock
from engines.cart import Cart
from engines.catalog import Catalog
from engines.checkout import (
    CheckoutService,
    Invoice,
    InvoiceLine,
    TaxBreakdown,
    TaxLine,
    statistics,
    summarize,
)
from engines.checkout.events import (
    CHECKOUT_COMPLETED_V1,
    CHECKOUT_FAILED_V1,
    CHECKOUT_REJECTED_V1,
    CHECKOUT_ROLLED_BACK_V1,
    CHECKOUT_STARTED_V1,
)

NOW = datetime(2026, 2, 18, 15, 45, 0, tzinfo=timezone.utc)


# ══════════════════════════════════════════════════════════════
# TEST HELPERS
# ══════════════════════════════════════════════════════════════

class FailingCatalog(Catalog):
    """Refuses to reduce one product even though revalidation passed."""

    def __init__(self, products, fail_on, *, raise_error=False, **kwargs):
        super().__init__(products, **kwargs)
        self.fail_on = fail_on
        self.raise_error = raise_error

    def reduce_stock(self, product_id, quantity):
        if product_id == self.fail_on:
            if self.raise_error:
                raise RuntimeError("storage offline")
            product = self.get(product_id)
            return Outcome.rejected(insufficient_stock(
                product_id, product.name, 0, quantity, "test.reduce_stock",
            ))
        return super().reduce_stock(product_id, quantity)


class BrokenRestoreCatalog(FailingCatalog):
    """Raises while putting one product back."""

    def __init__(self, products, fail_on, broken_restore, **kwargs):
        super().__init__(products, fail_on, **kwargs)
        self.broken_restore = broken_restore

    def restore_stock(self, product_id, quantity):
        if product_id == self.broken_restore:
            raise RuntimeError("restore failed")
        return super().restore_stock(product_id, quantity)


class ExhaustedNumbering:
    def next_number(self, issued_at):
        raise SequenceExhaustedError("2026-02-18", 9998)


def products():
    return [
        Product(id=1, name="Widget", unit_price="10.00", available_stock=5),
        Product(id=2, name="Gadget", unit_price="100.00", available_stock=3),
        Product(id=3, name="Cable", unit_price="10.05", available_stock=10),
    ]


def make_catalog(catalog_cls=Catalog, **kwargs):
    return catalog_cls(
        products(), event_sink=InMemoryEventSink(), clock=FixedClock(NOW), **kwargs,
    )


def make_cart(catalog, *lines):
    cart = Cart(event_sink=InMemoryEventSink(), clock=FixedClock(NOW))
    for product_id, quantity in lines:
        assert cart.add_item(catalog, product_id, quantity).is_accepted
    return cart


def make_service(sink=None, **kwargs):
    return CheckoutService(
        clock=FixedClock(NOW),
        event_sink=sink if sink is not None else InMemoryEventSink(),
        **kwargs,
    )


# ══════════════════════════════════════════════════════════════
# HAPPY PATH
# ══════════════════════════════════════════════════════════════

class TestCheckoutSuccess:
    def test_single_line_with_vat(self):
        catalog = make_catalog()
        cart = make_cart(catalog, (1, 3))
        outcome = make_service().process(cart, catalog)

        invoice = outcome.value
        assert invoice.subtotal == Decimal("30.00")
        assert invoice.taxes.as_dict() == {"IVA (13%)": Decimal("3.90")}
        assert invoice.total == Decimal("33.90")
        assert invoice.invoice_id == "FACT-20260218-1000"
        assert invoice.issued_at == NOW
        assert catalog.get(1).available_stock == 2

    def test_checkout_does_not_clear_cart(self):
        catalog = make_catalog()
        cart = make_cart(catalog, (1, 1))
        make_service().process(cart, catalog)
        assert cart.quantity_of(1) == 1

    def test_service_charge_after_vat(self):
        catalog = make_catalog()
        cart = make_cart(catalog, (2, 1))
        invoice = make_service().process(cart, catalog, apply_service_charge=True).value
        assert list(invoice.taxes.items()) == [
            ("IVA (13%)", Decimal("13.00")),
            ("Servicio (10%)", Decimal("10.00")),
        ]
        assert invoice.total == Decimal("123.00")

    def test_taxes_rounded_half_up_to_cents(self):
        catalog = make_catalog()
        cart = make_cart(catalog, (3, 1))
        invoice = make_service().process(cart, catalog).value
        assert invoice.taxes["IVA (13%)"] == Decimal("1.31")
        assert invoice.total == Decimal("11.36")

    def test_sequential_numbers(self):
        catalog = make_catalog()
        service = make_service()
        first = service.process(make_cart(catalog, (1, 1)), catalog).value
        second = service.process(make_cart(catalog, (1, 1)), catalog).value
        assert first.invoice_id == "FACT-20260218-1000"
        assert second.invoice_id == "FACT-20260218-1001"

    def test_lines_are_snapshots_in_cart_order(self):
        catalog = make_catalog()
        cart = make_cart(catalog, (2, 1), (1, 2))
        invoice = make_service().process(cart, catalog).value
        assert [line.product_id for line in invoice.lines] == [2, 1]
        cart.clear()
        assert invoice.item_count == 2

    def test_custom_config(self):
        config = CheckoutConfig(invoice_prefix="TS", seller=SellerInfo(name="Tienda"))
        catalog = make_catalog()
        invoice = make_service(config=config).process(
            make_cart(catalog, (1, 1)), catalog,
        ).value
        assert invoice.invoice_id.startswith("TS-20260218-")
        assert invoice.seller.name == "Tienda"

    def test_events(self):
        sink = InMemoryEventSink()
        catalog = make_catalog()
        make_service(sink).process(make_cart(catalog, (1, 1)), catalog)
        assert sink.event_types() == [CHECKOUT_STARTED_V1, CHECKOUT_COMPLETED_V1]
        completed = sink.of_type(CHECKOUT_COMPLETED_V1)[0]
        assert completed.payload["total"] == "11.30"
        assert "Total: $11.30" in completed.message


# ══════════════════════════════════════════════════════════════
# REJECTIONS AND ROLLBACK
# ══════════════════════════════════════════════════════════════

class TestCheckoutRejections:
    def test_empty_cart(self):
        sink = InMemoryEventSink()
        catalog = make_catalog()
        outcome = make_service(sink).process(make_cart(catalog), catalog)
        assert outcome.code == ReasonCode.EMPTY_CART
        assert sink.event_types() == [CHECKOUT_REJECTED_V1]

    def test_revalidation_failure_changes_nothing(self):
        catalog = make_catalog()
        cart = make_cart(catalog, (1, 4), (2, 1))
        catalog.reduce_stock(2, 3)
        before = catalog.stock_snapshot()

        outcome = make_service().process(cart, catalog)

        assert outcome.code == ReasonCode.INSUFFICIENT_STOCK
        assert outcome.reason.details["product_id"] == 2
        assert catalog.stock_snapshot() == before

    def test_product_removed_from_catalog_view(self):
        catalog = make_catalog()
        cart = make_cart(catalog, (1, 1))
        other = Catalog(
            [Product(id=9, name="Other", unit_price="1", available_stock=1)],
            event_sink=InMemoryEventSink(),
        )
        outcome = make_service().process(cart, other)
        assert outcome.code == ReasonCode.PRODUCT_NOT_FOUND

    def test_partial_commit_is_rolled_back(self):
        sink = InMemoryEventSink()
        catalog = make_catalog(FailingCatalog, fail_on=3)
        cart = make_cart(catalog, (1, 2), (2, 1), (3, 1))
        before = catalog.stock_snapshot()

        outcome = make_service(sink).process(cart, catalog)

        assert outcome.code == ReasonCode.INSUFFICIENT_STOCK
        assert catalog.stock_snapshot() == before
        rollback = sink.of_type(CHECKOUT_ROLLED_BACK_V1)[0]
        assert rollback.level == EventLevel.WARNING
        assert rollback.payload["restored"] == [
            {"product_id": 2, "quantity": 1},
            {"product_id": 1, "quantity": 2},
        ]

    def test_unexpected_error_is_internal_error(self):
        sink = InMemoryEventSink()
        catalog = make_catalog(FailingCatalog, fail_on=2, raise_error=True)
        cart = make_cart(catalog, (1, 2), (2, 1))
        before = catalog.stock_snapshot()

        outcome = make_service(sink).process(cart, catalog)

        assert outcome.code == ReasonCode.INTERNAL_ERROR
        assert outcome.reason.details["error"] == "RuntimeError"
        assert catalog.stock_snapshot() == before
        assert sink.of_type(CHECKOUT_FAILED_V1)

    def test_numbering_failure_restores_stock(self):
        catalog = make_catalog()
        cart = make_cart(catalog, (1, 2), (3, 4))
        before = catalog.stock_snapshot()

        outcome = make_service(numbering=ExhaustedNumbering()).process(cart, catalog)

        assert outcome.code == ReasonCode.INTERNAL_ERROR
        assert catalog.stock_snapshot() == before

    def test_rollback_continues_past_failing_restore(self):
        sink = InMemoryEventSink()
        catalog = make_catalog(BrokenRestoreCatalog, fail_on=3, broken_restore=1)
        cart = make_cart(catalog, (1, 2), (2, 1), (3, 1))

        outcome = make_service(sink).process(cart, catalog)

        assert outcome.code == ReasonCode.INSUFFICIENT_STOCK
        assert catalog.get(2).available_stock == 3
        assert catalog.get(1).available_stock == 3
        rollback = sink.of_type(CHECKOUT_ROLLED_BACK_V1)[0]
        assert rollback.payload["restored"] == [{"product_id": 2, "quantity": 1}]

    def test_failing_restore_after_error_is_internal_error(self):
        catalog = make_catalog(BrokenRestoreCatalog, fail_on=None, broken_restore=3)
        cart = make_cart(catalog, (1, 2), (3, 4))

        outcome = make_service(numbering=ExhaustedNumbering()).process(cart, catalog)

        assert outcome.code == ReasonCode.INTERNAL_ERROR
        assert catalog.get(1).available_stock == 5
        assert catalog.get(3).available_stock == 6


# ══════════════════════════════════════════════════════════════
# INVOICE MODEL AND VIEWS
# ══════════════════════════════════════════════════════════════

def make_invoice(**overrides):
    fields = dict(
        invoice_id="FACT-20260218-1000",
        issued_at=NOW,
        lines=(
            InvoiceLine(product_id=1, name="Widget", unit_price="10.00", quantity=3),
            InvoiceLine(product_id=2, name="Gadget", unit_price="100.00", quantity=1),
        ),
        subtotal=Decimal("130.00"),
        taxes=TaxBreakdown((
            TaxLine(label="IVA (13%)", code="VAT", rate=Decimal("0.13"),
                    amount=Decimal("16.90")),
        )),
        total=Decimal("146.90"),
    )
    fields.update(overrides)
    return Invoice(**fields)


class TestInvoiceModel:
    def test_valid(self):
        invoice = make_invoice()
        assert invoice.total_units == 4
        assert invoice.total_tax == Decimal("16.90")

    @pytest.mark.parametrize("overrides", [
        dict(subtotal=Decimal("129.99")),
        dict(total=Decimal("146.00")),
        dict(lines=()),
        dict(issued_at=datetime(2026, 2, 18, 15, 45)),
        dict(invoice_id=""),
    ])
    def test_invalid(self, overrides):
        with pytest.raises(ValueError):
            make_invoice(**overrides)

    def test_duplicate_tax_labels(self):
        line = TaxLine(label="IVA (13%)", code="VAT", rate=Decimal("0.13"),
                       amount=Decimal("1"))
        with pytest.raises(ValueError):
            TaxBreakdown((line, line))

    def test_breakdown_mapping(self):
        taxes = make_invoice().taxes
        assert "IVA (13%)" in taxes
        assert taxes.get("Servicio (10%)") is None
        with pytest.raises(KeyError):
            taxes["Servicio (10%)"]
        assert taxes.to_dict() == {"IVA (13%)": "16.90"}

    def test_to_dict(self):
        data = make_invoice().to_dict()
        assert data["total"] == "146.90"
        assert data["lines"][0]["line_total"] == "30.00"
        assert data["seller"]["name"] == "TechStore El Salvador"


class TestInvoiceViews:
    def test_summarize(self):
        assert summarize(make_invoice()).splitlines() == [
            "Factura: FACT-20260218-1000",
            "Fecha: 18/02/2026 15:45",
            "Items: 2 productos",
            "Total: $146.90",
        ]

    def test_statistics(self):
        stats = statistics(make_invoice())
        assert stats["item_count"] == 2
        assert stats["total_units"] == 4
        assert stats["average_unit_price"] == Decimal("32.50")
        assert stats["priciest_product_name"] == "Gadget"
        assert stats["cheapest_product_name"] == "Widget"
        assert stats["total_tax"] == Decimal("16.90")

    def test_issued_at_keeps_timezone(self):
        shifted = NOW.astimezone(timezone(timedelta(hours=-6)))
        invoice = make_invoice(issued_at=shifted)
        assert summarize(invoice).splitlines()[1] == "Fecha: 18/02/2026 09:45"
