"""
POS Catalog Engine — Application Service
==========================================
Authoritative store of products and stock. Knows nothing about carts.

Concurrency: one re-entrant lock per Catalog guards every read and
every stock mutation. CheckoutService holds the same lock across
revalidate → commit → rollback so no interleaved checkout can drive
stock negative.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Iterable, Iterator, Optional, Tuple

from core.commands.outcomes import Outcome
from core.commands.rejection import ReasonCode, RejectionReason, product_not_found
from core.events.sink import EventLevel, EventSink, LoggingEventSink, emit_event
from core.primitives.money import sum_money, to_decimal
from core.primitives.product import Product
from core.time.clock import Clock, SystemClock
from engines.catalog.events import (
    CATALOG_LOADED_V1,
    CATALOG_PRICE_FILTER_COMPLETED_V1,
    CATALOG_PRICE_FILTER_REJECTED_V1,
    CATALOG_PRODUCT_NOT_FOUND_V1,
    CATALOG_PRODUCTS_LISTED_V1,
    CATALOG_SEARCH_COMPLETED_V1,
    CATALOG_SEARCH_DEGENERATE_V1,
    CATALOG_STOCK_REDUCED_V1,
    CATALOG_STOCK_REJECTED_V1,
    CATALOG_STOCK_RESTORED_V1,
    build_price_filter_payload,
    build_search_payload,
    build_stock_changed_payload,
    build_stock_rejected_payload,
    stock_change_message,
)
from engines.catalog.policies import (
    positive_quantity_policy,
    price_range_policy,
    sufficient_stock_policy,
)


# ══════════════════════════════════════════════════════════════
# SEARCH RESULT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SearchResult:
    """
    Products matching a name search, in catalog order.

    is_degenerate is True when the term was blank: the result is empty
    by definition and the caller should tell the user to type something.
    """
    term: str
    products: Tuple[Product, ...] = ()
    is_degenerate: bool = False

    def __iter__(self) -> Iterator[Product]:
        return iter(self.products)

    def __len__(self) -> int:
        return len(self.products)

    def __getitem__(self, index: int) -> Product:
        return self.products[index]


# ══════════════════════════════════════════════════════════════
# CATALOG
# ══════════════════════════════════════════════════════════════

class Catalog:
    """Shared product catalog with finite stock."""

    def __init__(
        self,
        products: Iterable[Product] = (),
        *,
        event_sink: Optional[EventSink] = None,
        clock: Optional[Clock] = None,
    ):
        self._lock = threading.RLock()
        # product_id → Product; insertion order is catalog order
        self._products: Dict[int, Product] = {}
        for product in products:
            if not isinstance(product, Product):
                raise ValueError(
                    f"Catalog seed must contain Product, got {type(product).__name__}."
                )
            if product.id in self._products:
                raise ValueError(f"Duplicate product id {product.id} in catalog seed.")
            self._products[product.id] = product

        self._sink = event_sink if event_sink is not None else LoggingEventSink()
        self._clock = clock or SystemClock()

        self._emit(
            EventLevel.INFO,
            CATALOG_LOADED_V1,
            f"Catalog initialized with {len(self._products)} products",
            {"product_count": len(self._products)},
        )

    # ── Infrastructure ────────────────────────────────────────

    @property
    def lock(self) -> threading.RLock:
        """Catalog-scoped lock; hold it to make several calls atomic."""
        return self._lock

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def event_sink(self) -> EventSink:
        return self._sink

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

    # ── Reads ─────────────────────────────────────────────────

    def lookup(self, product_id: int) -> Outcome:
        """Outcome[Product]; REJECTED with PRODUCT_NOT_FOUND."""
        with self._lock:
            product = self._products.get(product_id)
        if product is None:
            self._emit(
                EventLevel.WARNING,
                CATALOG_PRODUCT_NOT_FOUND_V1,
                f"Producto con ID {product_id} no encontrado",
                {"product_id": product_id},
            )
            return Outcome.rejected(product_not_found(product_id, "catalog.lookup"))
        return Outcome.accepted(product)

    def get(self, product_id: int) -> Optional[Product]:
        """Current snapshot or None. Emits nothing."""
        with self._lock:
            return self._products.get(product_id)

    def has_sufficient_stock(self, product_id: int, quantity: int) -> bool:
        """False (not an error) when the product does not exist."""
        with self._lock:
            product = self._products.get(product_id)
            if product is None:
                return False
            return product.has_sufficient_stock(quantity)

    def list_all(self) -> Tuple[Product, ...]:
        with self._lock:
            return tuple(self._products.values())

    def list_available(self) -> Tuple[Product, ...]:
        """Products with stock > 0, catalog order."""
        with self._lock:
            available = tuple(p for p in self._products.values() if p.is_in_stock)
        self._emit(
            EventLevel.DEBUG,
            CATALOG_PRODUCTS_LISTED_V1,
            f"Productos disponibles solicitados: {len(available)}",
            {"result_count": len(available)},
        )
        return available

    def available_ids(self) -> Tuple[int, ...]:
        with self._lock:
            return tuple(p.id for p in self._products.values() if p.is_in_stock)

    def search(self, term: Optional[str]) -> SearchResult:
        """Case-insensitive substring match against product names."""
        cleaned = (term or "").strip()
        if not cleaned:
            self._emit(
                EventLevel.WARNING,
                CATALOG_SEARCH_DEGENERATE_V1,
                "Búsqueda con término vacío",
                build_search_payload(term or "", 0),
            )
            return SearchResult(term=term or "", products=(), is_degenerate=True)

        needle = cleaned.lower()
        with self._lock:
            matches = tuple(
                p for p in self._products.values() if needle in p.name.lower()
            )
        self._emit(
            EventLevel.INFO,
            CATALOG_SEARCH_COMPLETED_V1,
            f"Búsqueda por nombre '{cleaned}': {len(matches)} resultados",
            build_search_payload(cleaned, len(matches)),
        )
        return SearchResult(term=cleaned, products=matches)

    def filter_by_price_range(self, min_price: Any, max_price: Any) -> Outcome:
        """
        Outcome[tuple[Product, ...]] with min <= unit_price <= max.

        REJECTED with INVALID_RANGE if min > max, either bound is
        negative, or a bound is not a number.
        """
        try:
            low = to_decimal(min_price)
            high = to_decimal(max_price)
        except (TypeError, ValueError):
            return self._reject_range(
                min_price, max_price,
                RejectionReason(
                    code=ReasonCode.INVALID_RANGE,
                    message=f"Invalid price range: {min_price} - {max_price}.",
                    policy_name="price_range_policy",
                    details={"min_price": str(min_price), "max_price": str(max_price)},
                ),
            )

        rejection = price_range_policy(low, high)
        if rejection is not None:
            return self._reject_range(low, high, rejection)

        with self._lock:
            matches = tuple(
                p for p in self._products.values() if low <= p.unit_price <= high
            )
        self._emit(
            EventLevel.INFO,
            CATALOG_PRICE_FILTER_COMPLETED_V1,
            f"Filtro por precio {low} - {high}: {len(matches)} resultados",
            build_price_filter_payload(low, high, len(matches)),
        )
        return Outcome.accepted(matches)

    def _reject_range(self, low, high, rejection: RejectionReason) -> Outcome:
        self._emit(
            EventLevel.WARNING,
            CATALOG_PRICE_FILTER_REJECTED_V1,
            f"Rango de precio inválido: {low} - {high}",
            build_price_filter_payload(low, high, None),
        )
        return Outcome.rejected(rejection)

    def statistics(self) -> dict:
        """Inventory-wide figures for the admin summary screen."""
        with self._lock:
            products = tuple(self._products.values())
        available = [p for p in products if p.is_in_stock]
        prices = [p.unit_price for p in products]
        return {
            "product_count": len(products),
            "available_count": len(available),
            "out_of_stock_count": len(products) - len(available),
            "inventory_value": sum_money(
                p.unit_price * p.available_stock for p in products
            ),
            "average_price": (
                sum_money(prices) / Decimal(len(prices)) if prices else None
            ),
            "total_stock": sum(p.available_stock for p in products),
        }

    # ── Mutations ─────────────────────────────────────────────

    def reduce_stock(self, product_id: int, quantity: int) -> Outcome:
        """
        Outcome[Product] with the new snapshot.

        REJECTED with INVALID_QUANTITY, PRODUCT_NOT_FOUND or
        INSUFFICIENT_STOCK; nothing changes on rejection.
        """
        with self._lock:
            rejection = positive_quantity_policy(quantity, "catalog.reduce_stock")
            product = self._products.get(product_id)
            if rejection is None and product is None:
                rejection = product_not_found(product_id, "catalog.reduce_stock")
            if rejection is None:
                rejection = sufficient_stock_policy(
                    product, quantity, "catalog.reduce_stock",
                )
            if rejection is not None:
                self._emit(
                    EventLevel.ERROR,
                    CATALOG_STOCK_REJECTED_V1,
                    f"Error al reducir stock - Producto ID:{product_id}: {rejection.message}",
                    build_stock_rejected_payload(
                        product_id, quantity, rejection.code,
                        product.available_stock if product is not None else None,
                    ),
                )
                return Outcome.rejected(rejection)

            updated = product.with_stock(product.available_stock - quantity)
            self._products[product_id] = updated
            self._emit(
                EventLevel.INFO,
                CATALOG_STOCK_REDUCED_V1,
                stock_change_message(product, updated),
                build_stock_changed_payload(product, updated, quantity),
            )
            return Outcome.accepted(updated)

    def restore_stock(self, product_id: int, quantity: int) -> Outcome:
        """
        Outcome[Product] with the new snapshot.

        Used by rollback and cancellation paths. REJECTED with
        INVALID_QUANTITY or PRODUCT_NOT_FOUND.
        """
        with self._lock:
            rejection = positive_quantity_policy(quantity, "catalog.restore_stock")
            product = self._products.get(product_id)
            if rejection is None and product is None:
                rejection = product_not_found(product_id, "catalog.restore_stock")
            if rejection is not None:
                self._emit(
                    EventLevel.ERROR,
                    CATALOG_STOCK_REJECTED_V1,
                    f"Error al restaurar stock - Producto ID:{product_id}: {rejection.message}",
                    build_stock_rejected_payload(product_id, quantity, rejection.code),
                )
                return Outcome.rejected(rejection)

            updated = product.with_stock(product.available_stock + quantity)
            self._products[product_id] = updated
            self._emit(
                EventLevel.INFO,
                CATALOG_STOCK_RESTORED_V1,
                stock_change_message(product, updated),
                build_stock_changed_payload(product, updated, quantity),
            )
            return Outcome.accepted(updated)

    def stock_snapshot(self) -> Dict[int, int]:
        """product_id → available_stock, for atomicity checks and audits."""
        with self._lock:
            return {pid: p.available_stock for pid, p in self._products.items()}

    def __len__(self) -> int:
        with self._lock:
            return len(self._products)

    def __contains__(self, product_id: object) -> bool:
        with self._lock:
            return product_id in self._products
