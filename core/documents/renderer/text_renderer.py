"""
POS Documents - Plain Text Renderer
=====================================
Turns catalog, cart and invoice values into fixed-width console text.

Doctrine:
- Pure functions: same input, same string. No printing, no logging.
- Read-only: renderers only use the public accessors of what they
  are given (products, cart.items(), invoice fields).
- Single currency, two decimals, thousands separator.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Mapping, Optional

from core.primitives.money import quantize_money, to_decimal

WIDE = 80
NARROW = 50
INVOICE_DATE_FORMAT = "%d/%m/%Y %H:%M:%S"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def format_money(amount) -> str:
    """Decimal("1234.5") -> "$1,234.50"."""
    value = quantize_money(to_decimal(amount))
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def _rule(char: str = "-", width: int = WIDE) -> str:
    return char * width


def _centered(text: str, width: int = WIDE) -> str:
    return text.center(width).rstrip()


def render_product_row(product) -> str:
    return (
        f"ID: {product.id:>3} | {product.name:<25.25} | "
        f"{format_money(product.unit_price):>11} | Stock: {product.available_stock:>3}"
    )


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

def render_catalog(products: Iterable, title: str = "CATÁLOGO DE PRODUCTOS") -> str:
    products = tuple(products)
    if not products:
        return "No hay productos disponibles en este momento."
    lines = [
        _rule("="),
        _centered(title),
        _rule("="),
        f"{'ID':<4} {'PRODUCTO':<30} {'PRECIO':<12} {'STOCK':<8}".rstrip(),
        _rule(),
    ]
    lines.extend(render_product_row(p) for p in products)
    lines.append(_rule())
    lines.append(f"Total de productos disponibles: {len(products)}")
    lines.append(_rule("="))
    return "\n".join(lines)


def render_search_results(term: str, products: Iterable) -> str:
    products = tuple(products)
    if not products:
        return f"No se encontraron productos con el término '{term}'"
    lines = [f"RESULTADOS DE BÚSQUEDA para '{term}':", _rule()]
    lines.extend(render_product_row(p) for p in products)
    lines.append(_rule())
    lines.append(f"Se encontraron {len(products)} productos")
    return "\n".join(lines)


def render_inventory_summary(stats: Mapping) -> str:
    average = stats.get("average_price")
    lines = [
        _rule("=", NARROW),
        _centered("RESUMEN DEL INVENTARIO", NARROW),
        _rule("=", NARROW),
        f"Total de productos:     {stats['product_count']}",
        f"Productos disponibles:  {stats['available_count']}",
        f"Productos agotados:     {stats['out_of_stock_count']}",
        f"Unidades en stock:      {stats['total_stock']}",
        f"Precio promedio:        {format_money(average) if average is not None else '-'}",
        f"Valor total:            {format_money(stats['inventory_value'])}",
        _rule("=", NARROW),
    ]
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------

def render_cart(cart) -> str:
    if cart.is_empty():
        return "Tu carrito está vacío"
    lines = [
        _rule("=", 70),
        _centered("TU CARRITO DE COMPRAS", 70),
        _rule("=", 70),
    ]
    for index, item in enumerate(cart.items(), start=1):
        lines.append(
            f"{index}. ID: {item.product_id} | {item.name} | Cant: {item.quantity} | "
            f"{format_money(item.unit_price)} c/u | "
            f"Subtotal: {format_money(item.line_total)}"
        )
    lines.append(_rule("-", 70))
    lines.append(
        f"Total de items: {cart.line_count()} productos "
        f"({cart.total_units()} unidades)"
    )
    lines.append(f"SUBTOTAL: {format_money(cart.subtotal())}")
    lines.append(_rule("=", 70))
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Invoice
# ---------------------------------------------------------------------------

def _total_row(label: str, amount: Decimal) -> str:
    return f"{label:<54} {format_money(amount):>15}"


def render_invoice(invoice, footer: Optional[str] = None) -> str:
    seller = invoice.seller
    lines = [
        _rule("="),
        _centered("FACTURA DE VENTA"),
        _rule("="),
        seller.name,
        seller.address,
        f"Tel: {seller.phone} | Email: {seller.email}",
        f"NIT: {seller.tax_id}",
        "",
        _rule(),
        f"Factura No: {invoice.invoice_id}",
        f"Fecha: {invoice.issued_at.strftime(INVOICE_DATE_FORMAT)}",
        "",
        _rule(),
        "DETALLE DE PRODUCTOS",
        _rule(),
        f"{'PRODUCTO':<35} {'CANT.':>6} {'PRECIO UNIT.':>12} {'SUBTOTAL':>15}",
        _rule(),
    ]
    for line in invoice.lines:
        lines.append(
            f"{line.name[:34]:<35} {line.quantity:>6} "
            f"{format_money(line.unit_price):>12} {format_money(line.line_total):>15}"
        )
    lines.append(_rule())
    lines.append(_total_row("SUBTOTAL:", invoice.subtotal))
    for label, amount in invoice.taxes.items():
        lines.append(_total_row(label, amount))
    lines.append(_rule())
    lines.append(_total_row("TOTAL A PAGAR:", invoice.total))
    lines.append(_rule("="))
    lines.append("")
    lines.append(_centered("¡GRACIAS POR SU COMPRA!"))
    lines.append(_centered(footer or "Conserve esta factura como comprobante"))
    lines.append(_rule("="))
    return "\n".join(lines)
