"""
POS Django Adapter Views
========================
Pass-through HTTP views over core/http_api handlers.
"""

from __future__ import annotations

import json
from typing import Any

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt

from adapters.django_api.wiring import build_dependencies
from core.http_api.contracts import (
    CartHttpRequest,
    CartItemHttpRequest,
    CartItemRemoveHttpRequest,
    CheckoutHttpRequest,
    PriceRangeHttpRequest,
    SearchHttpRequest,
)
from core.http_api.errors import (
    INVALID_REQUEST,
    METHOD_NOT_ALLOWED,
    error_response,
    http_status_for,
)
from core.http_api.handlers import (
    add_cart_item,
    catalog_statistics,
    checkout_cart,
    clear_cart,
    close_cart,
    decrease_cart_item,
    filter_products_by_price,
    get_cart,
    increase_cart_item,
    list_products,
    open_cart,
    remove_cart_item,
    search_products,
)

DEFAULT_MIN_PRICE = "0"


def _json_error(code: str, message: str, status: int = 400) -> JsonResponse:
    return JsonResponse(
        error_response(code=code, message=message, details={}),
        status=status,
    )


def _respond(payload: dict[str, Any]) -> JsonResponse:
    return JsonResponse(payload, status=http_status_for(payload))


def _parse_json_body(request: HttpRequest) -> dict[str, Any]:
    if not request.body:
        return {}
    try:
        parsed = json.loads(request.body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ValueError("Request body must be valid JSON.") from exc
    if not isinstance(parsed, dict):
        raise ValueError("Request body must be a JSON object.")
    return parsed


def _method_not_allowed() -> JsonResponse:
    return _json_error(
        METHOD_NOT_ALLOWED,
        "Method not allowed for this endpoint.",
        status=405,
    )


def _dispatch_write(handler, contract_factory, request: HttpRequest, **route):
    try:
        body = _parse_json_body(request)
        contract = contract_factory(body=body, **route)
    except (ValueError, KeyError) as exc:
        return _json_error(INVALID_REQUEST, str(exc), status=400)
    return _respond(handler(contract, build_dependencies()))


# ── Catalog ───────────────────────────────────────────────────

@csrf_exempt
def products_list_view(request: HttpRequest) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _respond(list_products(build_dependencies()))


@csrf_exempt
def products_search_view(request: HttpRequest) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    contract = SearchHttpRequest(term=request.GET.get("q", ""))
    return _respond(search_products(contract, build_dependencies()))


@csrf_exempt
def products_price_range_view(request: HttpRequest) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    max_price = request.GET.get("max")
    if max_price is None:
        return _json_error(INVALID_REQUEST, "max is required.", status=400)
    contract = PriceRangeHttpRequest(
        min_price=request.GET.get("min", DEFAULT_MIN_PRICE),
        max_price=max_price,
    )
    return _respond(filter_products_by_price(contract, build_dependencies()))


@csrf_exempt
def catalog_statistics_view(request: HttpRequest) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _respond(catalog_statistics(build_dependencies()))


# ── Carts ─────────────────────────────────────────────────────

@csrf_exempt
def carts_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return JsonResponse(open_cart(build_dependencies()), status=201)


@csrf_exempt
def cart_detail_view(request: HttpRequest, cart_id: str) -> JsonResponse:
    contract = CartHttpRequest(cart_id=cart_id)
    if request.method == "GET":
        return _respond(get_cart(contract, build_dependencies()))
    if request.method == "DELETE":
        return _respond(close_cart(contract, build_dependencies()))
    return _method_not_allowed()


def _item_contract_factory(*, body, cart_id, product_id=None):
    return CartItemHttpRequest(
        cart_id=cart_id,
        product_id=product_id if product_id is not None else body["product_id"],
        quantity=body["quantity"],
    )


@csrf_exempt
def cart_items_view(request: HttpRequest, cart_id: str) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_write(
        add_cart_item, _item_contract_factory, request, cart_id=cart_id,
    )


@csrf_exempt
def cart_item_increase_view(
    request: HttpRequest, cart_id: str, product_id: int,
) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_write(
        increase_cart_item, _item_contract_factory, request,
        cart_id=cart_id, product_id=product_id,
    )


@csrf_exempt
def cart_item_decrease_view(
    request: HttpRequest, cart_id: str, product_id: int,
) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_write(
        decrease_cart_item, _item_contract_factory, request,
        cart_id=cart_id, product_id=product_id,
    )


@csrf_exempt
def cart_item_remove_view(
    request: HttpRequest, cart_id: str, product_id: int,
) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    contract = CartItemRemoveHttpRequest(cart_id=cart_id, product_id=product_id)
    return _respond(remove_cart_item(contract, build_dependencies()))


@csrf_exempt
def cart_clear_view(request: HttpRequest, cart_id: str) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _respond(clear_cart(CartHttpRequest(cart_id=cart_id), build_dependencies()))


def _checkout_contract_factory(*, body, cart_id):
    return CheckoutHttpRequest(
        cart_id=cart_id,
        apply_service_charge=body.get("apply_service_charge", False),
    )


@csrf_exempt
def cart_checkout_view(request: HttpRequest, cart_id: str) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_write(
        checkout_cart, _checkout_contract_factory, request, cart_id=cart_id,
    )
