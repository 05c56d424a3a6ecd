"""
Tests for core.documents.renderer — console text output.
"""

from datetime import datetime, timezone
from decimal import Decimal

from core.config import SellerInfo
from core.documents.renderer import (
    format_money,
    render_cart,
    render_catalog,
    render_inventory_summary,
    render_invoice,
    render_search_results,
)
from core.events import NullEventSink
from core.primitives import Product
from core.time import FixedClock
from engines.cart import Cart
from engines.catalog import Catalog
from engines.checkout import Invoice, InvoiceLine, TaxBreakdown, TaxLine

ISSUED = datetime(2026, 2, 18, 14, 5, 9, tzinfo=timezone.utc)


def _widget():
    return Product(id=1, name="Widget", unit_price="10.00", available_stock=5)


def _invoice():
    lines = (InvoiceLine(product_id=1, name="Widget", unit_price="10.00", quantity=3),)
    taxes = TaxBreakdown((
        TaxLine(label="IVA (13%)", code="VAT", rate=Decimal("0.13"), amount=Decimal("3.90")),
    ))
    return Invoice(
        invoice_id="FACT-20260218-1000",
        issued_at=ISSUED,
        lines=lines,
        subtotal=Decimal("30.00"),
        taxes=taxes,
        total=Decimal("33.90"),
    )


class TestFormatMoney:
    def test_thousands_and_cents(self):
        assert format_money(Decimal("1234.5")) == "$1,234.50"
        assert format_money("0") == "$0.00"

    def test_negative(self):
        assert format_money(Decimal("-5")) == "-$5.00"


class TestCatalogRendering:
    def test_empty_catalog_message(self):
        assert render_catalog([]) == "No hay productos disponibles en este momento."

    def test_rows(self):
        text = render_catalog([_widget()])
        assert "CATÁLOGO DE PRODUCTOS" in text
        assert "Widget" in text
        assert "$10.00" in text
        assert "Total de productos disponibles: 1" in text

    def test_search_results(self):
        assert "No se encontraron" in render_search_results("zzz", [])
        text = render_search_results("wid", [_widget()])
        assert "Se encontraron 1 productos" in text

    def test_inventory_summary(self):
        catalog = Catalog([_widget()], event_sink=NullEventSink())
        text = render_inventory_summary(catalog.statistics())
        assert "RESUMEN DEL INVENTARIO" in text
        assert "$50.00" in text


class TestCartRendering:
    def test_empty_cart(self):
        assert render_cart(Cart(event_sink=NullEventSink())) == "Tu carrito está vacío"

    def test_lines_and_subtotal(self):
        catalog = Catalog([_widget()], event_sink=NullEventSink())
        cart = Cart(event_sink=NullEventSink())
        cart.add_item(catalog, 1, 2)
        text = render_cart(cart)
        assert "TU CARRITO DE COMPRAS" in text
        assert "Cant: 2" in text
        assert "SUBTOTAL: $20.00" in text


class TestInvoiceRendering:
    def test_sections_in_order(self):
        text = render_invoice(_invoice())
        markers = [
            "FACTURA DE VENTA",
            SellerInfo().name,
            "Factura No: FACT-20260218-1000",
            "Fecha: 18/02/2026 14:05:09",
            "DETALLE DE PRODUCTOS",
            "SUBTOTAL:",
            "IVA (13%)",
            "TOTAL A PAGAR:",
            "¡GRACIAS POR SU COMPRA!",
            "Conserve esta factura como comprobante",
        ]
        positions = [text.index(marker) for marker in markers]
        assert positions == sorted(positions)
        assert "$33.90" in text
        assert "NIT: 0614-123456-001-2" in text

    def test_custom_footer(self):
        text = render_invoice(_invoice(), footer="Vuelva pronto")
        assert "Vuelva pronto" in text
        assert "Conserve esta factura" not in text

    def test_pure(self):
        invoice = _invoice()
        assert render_invoice(invoice) == render_invoice(invoice)
