"""
POS Catalog Engine - Seed Data
================================
The TechStore opening inventory. Supplied to Catalog at construction;
the catalog itself has no knowledge of where its products come from.
"""

from __future__ import annotations

from typing import Optional, Tuple

from core.events.sink import EventSink
from core.primitives.product import Product
from core.time.clock import Clock
from engines.catalog.services import Catalog

# (id, name, unit_price, available_stock)
_SEED_ROWS = (
    (1, "Smartphone Samsung Galaxy", "899.99", 15),
    (2, "Laptop HP Pavilion", "1299.99", 8),
    (3, "Auriculares Bluetooth Sony", "199.99", 25),
    (4, "Tablet iPad Air", "749.99", 12),
    (5, "Monitor Gaming 27 pulgadas", "449.99", 10),
    (6, "Teclado Mecánico RGB", "129.99", 20),
    (7, "Mouse Gaming Inalámbrico", "89.99", 30),
    (8, "Webcam HD 1080p", "79.99", 18),
    (9, "Cargador Portátil 20000mAh", "39.99", 35),
    (10, "Cable USB-C 2 metros", "19.99", 50),
    (11, "Control Xbox Wireless", "69.99", 22),
    (12, "Tarjeta Gráfica RTX 4060", "599.99", 5),
    (13, "Silla Gaming Ergonómica", "299.99", 7),
    (14, "Micrófono USB Streaming", "149.99", 15),
    (15, "Mousepad Gaming XL", "29.99", 40),
)


def initial_products() -> Tuple[Product, ...]:
    """Fresh Product snapshots for the opening inventory."""
    return tuple(
        Product(id=pid, name=name, unit_price=price, available_stock=stock)
        for pid, name, price, stock in _SEED_ROWS
    )


def build_seeded_catalog(
    event_sink: Optional[EventSink] = None,
    clock: Optional[Clock] = None,
) -> Catalog:
    """Catalog pre-loaded with initial_products()."""
    return Catalog(initial_products(), event_sink=event_sink, clock=clock)
