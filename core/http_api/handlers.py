"""
POS HTTP API - Framework-Agnostic Handlers
==========================================
Pure handler functions over contracts and injected dependencies.

Every handler returns a response envelope dict. Rejections from the
catalog, cart and checkout come back as error envelopes; the adapter
picks the HTTP status with errors.http_status_for().
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

from core.http_api.contracts import (
    CartHttpRequest,
    CartItemHttpRequest,
    CartItemRemoveHttpRequest,
    CheckoutHttpRequest,
    PriceRangeHttpRequest,
    SearchHttpRequest,
)
from core.http_api.dependencies import PosDependencies
from core.http_api.errors import (
    CART_NOT_FOUND,
    error_response,
    rejection_response,
    success_response,
)

logger = logging.getLogger("pos.http")


def _serialize_value(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    return value


def _serialize_products(products) -> list[dict[str, Any]]:
    return [product.to_dict() for product in products]


def _cart_not_found(cart_id: str) -> dict[str, Any]:
    return error_response(
        code=CART_NOT_FOUND,
        message=f"Cart {cart_id} not found.",
        details={"cart_id": cart_id},
    )


def _cart_outcome(outcome, cart) -> dict[str, Any]:
    if outcome.is_rejected:
        return rejection_response(outcome.reason, extra_details={"cart_id": cart.cart_id})
    return success_response(cart.to_dict())


# ── Catalog ───────────────────────────────────────────────────

def list_products(dependencies: PosDependencies) -> dict[str, Any]:
    products = dependencies.catalog.list_available()
    return success_response(
        _serialize_products(products),
        meta={"count": len(products)},
    )


def search_products(
    request: SearchHttpRequest, dependencies: PosDependencies,
) -> dict[str, Any]:
    result = dependencies.catalog.search(request.term)
    return success_response(
        _serialize_products(result),
        meta={
            "term": result.term,
            "count": len(result),
            "degenerate": result.is_degenerate,
        },
    )


def filter_products_by_price(
    request: PriceRangeHttpRequest, dependencies: PosDependencies,
) -> dict[str, Any]:
    outcome = dependencies.catalog.filter_by_price_range(
        request.min_price, request.max_price,
    )
    if outcome.is_rejected:
        return rejection_response(outcome.reason)
    return success_response(
        _serialize_products(outcome.value),
        meta={"count": len(outcome.value)},
    )


def catalog_statistics(dependencies: PosDependencies) -> dict[str, Any]:
    stats = dependencies.catalog.statistics()
    return success_response(
        {key: _serialize_value(value) for key, value in stats.items()}
    )


# ── Carts ─────────────────────────────────────────────────────

def open_cart(dependencies: PosDependencies) -> dict[str, Any]:
    cart = dependencies.carts.open()
    return success_response(cart.to_dict())


def get_cart(
    request: CartHttpRequest, dependencies: PosDependencies,
) -> dict[str, Any]:
    with dependencies.carts.session(request.cart_id) as cart:
        if cart is None:
            return _cart_not_found(request.cart_id)
        return success_response(cart.to_dict(), meta={"summary": cart.summary()})


def close_cart(
    request: CartHttpRequest, dependencies: PosDependencies,
) -> dict[str, Any]:
    if not dependencies.carts.close(request.cart_id):
        return _cart_not_found(request.cart_id)
    return success_response({"cart_id": request.cart_id, "closed": True})


def add_cart_item(
    request: CartItemHttpRequest, dependencies: PosDependencies,
) -> dict[str, Any]:
    with dependencies.carts.session(request.cart_id) as cart:
        if cart is None:
            return _cart_not_found(request.cart_id)
        outcome = cart.add_item(
            dependencies.catalog, request.product_id, request.quantity,
        )
        return _cart_outcome(outcome, cart)


def increase_cart_item(
    request: CartItemHttpRequest, dependencies: PosDependencies,
) -> dict[str, Any]:
    with dependencies.carts.session(request.cart_id) as cart:
        if cart is None:
            return _cart_not_found(request.cart_id)
        outcome = cart.increase_quantity(
            dependencies.catalog, request.product_id, request.quantity,
        )
        return _cart_outcome(outcome, cart)


def decrease_cart_item(
    request: CartItemHttpRequest, dependencies: PosDependencies,
) -> dict[str, Any]:
    with dependencies.carts.session(request.cart_id) as cart:
        if cart is None:
            return _cart_not_found(request.cart_id)
        outcome = cart.decrease_quantity(request.product_id, request.quantity)
        return _cart_outcome(outcome, cart)


def remove_cart_item(
    request: CartItemRemoveHttpRequest, dependencies: PosDependencies,
) -> dict[str, Any]:
    with dependencies.carts.session(request.cart_id) as cart:
        if cart is None:
            return _cart_not_found(request.cart_id)
        outcome = cart.remove_item(request.product_id)
        return _cart_outcome(outcome, cart)


def clear_cart(
    request: CartHttpRequest, dependencies: PosDependencies,
) -> dict[str, Any]:
    with dependencies.carts.session(request.cart_id) as cart:
        if cart is None:
            return _cart_not_found(request.cart_id)
        cart.clear()
        return success_response(cart.to_dict())


def checkout_cart(
    request: CheckoutHttpRequest, dependencies: PosDependencies,
) -> dict[str, Any]:
    """Issue an invoice and release the cart on success."""
    with dependencies.carts.session(request.cart_id) as cart:
        if cart is None:
            return _cart_not_found(request.cart_id)
        outcome = dependencies.checkout.process(
            cart, dependencies.catalog, request.apply_service_charge,
        )
        if outcome.is_rejected:
            return rejection_response(
                outcome.reason, extra_details={"cart_id": cart.cart_id},
            )
        invoice = outcome.value
        cart.clear()
        dependencies.carts.close(cart.cart_id)
        logger.info(f"Invoice {invoice.invoice_id} issued for cart {cart.cart_id}")
        return success_response(
            invoice.to_dict(),
            meta={"cart_id": cart.cart_id},
        )
