"""
POS Cart Engine — Application Service
=======================================
A Cart accumulates the tentative order of one session.

RULES (NON-NEGOTIABLE):
- At most one LineItem per product_id (adding again merges)
- Every LineItem has quantity > 0; a line that would reach 0 is removed
- The cart consults the catalog for availability but never mutates it
- A rejected operation leaves the cart exactly as it was

A Cart belongs to a single session. Callers serialize access to
their own cart; the catalog lock only covers the catalog.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any, Dict, Optional, Tuple

from core.commands.outcomes import Outcome
from core.commands.rejection import RejectionReason
from core.events.sink import EventLevel, EventSink, LoggingEventSink, emit_event
from core.primitives.money import sum_money
from core.primitives.product import Product
from core.time.clock import Clock, SystemClock
from engines.cart.events import (
    CART_CLEARED_V1,
    CART_CREATED_V1,
    CART_ITEM_ADDED_V1,
    CART_ITEM_DECREASED_V1,
    CART_ITEM_INCREASED_V1,
    CART_ITEM_REJECTED_V1,
    CART_ITEM_REMOVED_V1,
    CART_REVALIDATION_FAILED_V1,
    build_cart_cleared_payload,
    build_line_changed_payload,
    build_line_rejected_payload,
)
from engines.cart.policies import cart_stock_policy, line_present_policy
from engines.catalog.policies import positive_quantity_policy


# ══════════════════════════════════════════════════════════════
# LINE ITEM
# ══════════════════════════════════════════════════════════════

@dataclass
class LineItem:
    """
    One product in the cart.

    product is the snapshot used for pricing; its stock figure is
    informational only and may be stale.
    """
    product_id: int
    quantity: int
    product: Product

    def __post_init__(self):
        if self.product.id != self.product_id:
            raise ValueError("product_id must match product.id.")
        if (not isinstance(self.quantity, int)
                or isinstance(self.quantity, bool)
                or self.quantity <= 0):
            raise ValueError("quantity must be a positive integer.")

    @property
    def name(self) -> str:
        return self.product.name

    @property
    def unit_price(self) -> Decimal:
        return self.product.unit_price

    @property
    def line_total(self) -> Decimal:
        return self.product.unit_price * self.quantity

    def copy(self) -> LineItem:
        return replace(self)

    def to_dict(self) -> dict:
        return {
            "product_id": self.product_id,
            "name": self.name,
            "unit_price": str(self.unit_price),
            "quantity": self.quantity,
            "line_total": str(self.line_total),
        }


# ══════════════════════════════════════════════════════════════
# CART
# ══════════════════════════════════════════════════════════════

class Cart:
    """Ordered, per-session collection of line items."""

    def __init__(
        self,
        cart_id: Optional[str] = None,
        *,
        event_sink: Optional[EventSink] = None,
        clock: Optional[Clock] = None,
    ):
        self._cart_id = cart_id or uuid.uuid4().hex
        # product_id → LineItem; insertion order is display/checkout order
        self._lines: Dict[int, LineItem] = {}
        self._sink = event_sink if event_sink is not None else LoggingEventSink()
        self._clock = clock or SystemClock()
        self._emit(
            EventLevel.INFO, CART_CREATED_V1,
            "Nuevo carrito de compras creado", {"cart_id": self._cart_id},
        )

    @property
    def cart_id(self) -> str:
        return self._cart_id

    def _emit(
        self, level: EventLevel, event_type: str, message: str,
        payload: Optional[Dict[str, Any]] = None,
    ) -> None:
        emit_event(
            self._sink,
            timestamp=self._clock.now(),
            level=level,
            event_type=event_type,
            message=message,
            payload=payload,
        )

    def _reject(
        self, rejection: RejectionReason, product_id, quantity,
    ) -> Outcome:
        self._emit(
            EventLevel.WARNING,
            CART_ITEM_REJECTED_V1,
            f"Operación de carrito rechazada - Producto ID:{product_id}: "
            f"{rejection.message}",
            build_line_rejected_payload(
                self._cart_id, product_id, quantity, rejection.code,
                self.quantity_of(product_id),
            ),
        )
        return Outcome.rejected(rejection)

    # ── Mutations ─────────────────────────────────────────────

    def add_item(self, catalog, product_id: int, quantity: int) -> Outcome:
        """
        Add quantity units, merging into an existing line.

        Outcome[LineItem] (a copy of the resulting line). REJECTED with
        INVALID_QUANTITY, PRODUCT_NOT_FOUND or INSUFFICIENT_STOCK, where
        requested counts what is already in the cart.
        """
        rejection = positive_quantity_policy(quantity, "cart.add_item")
        if rejection is not None:
            return self._reject(rejection, product_id, quantity)

        with catalog.lock:
            found = catalog.lookup(product_id)
            if found.is_rejected:
                return self._reject(found.reason, product_id, quantity)
            product = found.value
            in_cart = self.quantity_of(product_id)
            requested = in_cart + quantity
            rejection = None
            if not catalog.has_sufficient_stock(product_id, requested):
                rejection = cart_stock_policy(
                    catalog.get(product_id), product_id, requested, "cart.add_item",
                )
            if rejection is not None:
                return self._reject(rejection, product_id, quantity)

        line = self._lines.get(product_id)
        if line is None:
            line = LineItem(product_id=product_id, quantity=quantity, product=product)
            self._lines[product_id] = line
            message = f"Producto agregado al carrito - {product.name}: {quantity} unidades"
        else:
            line.quantity += quantity
            line.product = product
            message = (
                f"Cantidad aumentada en carrito - {product.name}: "
                f"+{quantity} (Total: {line.quantity})"
            )
        self._emit(
            EventLevel.INFO, CART_ITEM_ADDED_V1, message,
            build_line_changed_payload(
                self._cart_id, product_id, product.name, quantity, line.quantity,
            ),
        )
        return Outcome.accepted(line.copy())

    def remove_item(self, product_id: int) -> Outcome:
        """Outcome[LineItem] with the removed line; REJECTED with NOT_IN_CART."""
        line = self._lines.get(product_id)
        rejection = line_present_policy(line, product_id, "cart.remove_item")
        if rejection is not None:
            return self._reject(rejection, product_id, None)

        del self._lines[product_id]
        self._emit(
            EventLevel.INFO, CART_ITEM_REMOVED_V1,
            f"Producto eliminado del carrito - {line.name}",
            build_line_changed_payload(
                self._cart_id, product_id, line.name, -line.quantity, 0,
            ),
        )
        return Outcome.accepted(line.copy())

    def increase_quantity(self, catalog, product_id: int, delta: int) -> Outcome:
        """
        Outcome[LineItem]. REJECTED with INVALID_QUANTITY, NOT_IN_CART
        or INSUFFICIENT_STOCK (current quantity + delta against stock).
        """
        rejection = positive_quantity_policy(delta, "cart.increase_quantity")
        if rejection is None:
            rejection = line_present_policy(
                self._lines.get(product_id), product_id, "cart.increase_quantity",
            )
        if rejection is not None:
            return self._reject(rejection, product_id, delta)

        line = self._lines[product_id]
        requested = line.quantity + delta
        with catalog.lock:
            product = catalog.get(product_id)
            rejection = cart_stock_policy(
                product, product_id, requested, "cart.increase_quantity",
            )
        if rejection is not None:
            return self._reject(rejection, product_id, delta)

        line.quantity = requested
        line.product = product
        self._emit(
            EventLevel.INFO, CART_ITEM_INCREASED_V1,
            f"Cantidad aumentada en carrito - {line.name}: "
            f"+{delta} (Total: {line.quantity})",
            build_line_changed_payload(
                self._cart_id, product_id, line.name, delta, line.quantity,
            ),
        )
        return Outcome.accepted(line.copy())

    def decrease_quantity(self, product_id: int, delta: int) -> Outcome:
        """
        Outcome[Optional[LineItem]]: the updated line, or None when
        delta >= quantity removed the line entirely (not an error).
        REJECTED with INVALID_QUANTITY or NOT_IN_CART.
        """
        rejection = positive_quantity_policy(delta, "cart.decrease_quantity")
        if rejection is None:
            rejection = line_present_policy(
                self._lines.get(product_id), product_id, "cart.decrease_quantity",
            )
        if rejection is not None:
            return self._reject(rejection, product_id, delta)

        line = self._lines[product_id]
        if delta >= line.quantity:
            self.remove_item(product_id)
            return Outcome.accepted(None)

        line.quantity -= delta
        self._emit(
            EventLevel.INFO, CART_ITEM_DECREASED_V1,
            f"Cantidad reducida en carrito - {line.name}: "
            f"-{delta} (Quedan: {line.quantity})",
            build_line_changed_payload(
                self._cart_id, product_id, line.name, -delta, line.quantity,
            ),
        )
        return Outcome.accepted(line.copy())

    def clear(self) -> None:
        """Empty the cart. Idempotent."""
        removed = len(self._lines)
        self._lines.clear()
        self._emit(
            EventLevel.INFO, CART_CLEARED_V1,
            f"Carrito vaciado - Se eliminaron {removed} items",
            build_cart_cleared_payload(self._cart_id, removed),
        )

    # ── Validation ────────────────────────────────────────────

    def revalidate_against_catalog(self, catalog) -> Outcome:
        """
        Re-check every line against current stock, in cart order.

        REJECTED with the first PRODUCT_NOT_FOUND or INSUFFICIENT_STOCK.
        Takes the catalog lock; callers that need the verdict to stay
        true hold the lock themselves.
        """
        with catalog.lock:
            for line in self._lines.values():
                rejection = cart_stock_policy(
                    catalog.get(line.product_id),
                    line.product_id,
                    line.quantity,
                    "cart.revalidate_against_catalog",
                )
                if rejection is not None:
                    self._emit(
                        EventLevel.WARNING,
                        CART_REVALIDATION_FAILED_V1,
                        f"Validación de disponibilidad fallida: {rejection.message}",
                        build_line_rejected_payload(
                            self._cart_id, line.product_id, line.quantity,
                            rejection.code, line.quantity,
                        ),
                    )
                    return Outcome.rejected(rejection)
        return Outcome.accepted()

    # ── Reads ─────────────────────────────────────────────────

    def items(self) -> Tuple[LineItem, ...]:
        """Copies of the lines, insertion order."""
        return tuple(line.copy() for line in self._lines.values())

    def find_item(self, product_id: int) -> Optional[LineItem]:
        line = self._lines.get(product_id)
        return line.copy() if line is not None else None

    def quantity_of(self, product_id: int) -> int:
        line = self._lines.get(product_id)
        return line.quantity if line is not None else 0

    def subtotal(self) -> Decimal:
        return sum_money(line.line_total for line in self._lines.values())

    def is_empty(self) -> bool:
        return not self._lines

    def line_count(self) -> int:
        return len(self._lines)

    def total_units(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    def summary(self) -> str:
        if self.is_empty():
            return "Carrito vacío"
        return (
            f"{self.line_count()} productos ({self.total_units()} unidades) "
            f"- {self.subtotal():.2f}"
        )

    def to_dict(self) -> dict:
        return {
            "cart_id": self._cart_id,
            "lines": [line.to_dict() for line in self._lines.values()],
            "line_count": self.line_count(),
            "total_units": self.total_units(),
            "subtotal": str(self.subtotal()),
        }

    def __len__(self) -> int:
        return len(self._lines)

    def __repr__(self) -> str:
        return f"Cart(cart_id={self._cart_id!r}, lines={self.line_count()})"
