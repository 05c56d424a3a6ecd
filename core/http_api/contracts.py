"""
POS HTTP API - Contracts
========================
Framework-agnostic request/response DTOs for the store endpoints.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


def _require_cart_id(cart_id: Any) -> None:
    if not cart_id or not isinstance(cart_id, str):
        raise ValueError("cart_id must be a non-empty string.")


def _require_int(value: Any, field_name: str) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"{field_name} must be an integer.")


@dataclass(frozen=True)
class SearchHttpRequest:
    term: str = ""

    def __post_init__(self):
        if not isinstance(self.term, str):
            raise ValueError("term must be a string.")


@dataclass(frozen=True)
class PriceRangeHttpRequest:
    # Raw values; the catalog decides whether they form a valid range.
    min_price: Any
    max_price: Any


@dataclass(frozen=True)
class CartHttpRequest:
    cart_id: str

    def __post_init__(self):
        _require_cart_id(self.cart_id)


@dataclass(frozen=True)
class CartItemHttpRequest:
    """Add, increase or decrease: quantity is the delta."""
    cart_id: str
    product_id: int
    quantity: int

    def __post_init__(self):
        _require_cart_id(self.cart_id)
        _require_int(self.product_id, "product_id")
        _require_int(self.quantity, "quantity")


@dataclass(frozen=True)
class CartItemRemoveHttpRequest:
    cart_id: str
    product_id: int

    def __post_init__(self):
        _require_cart_id(self.cart_id)
        _require_int(self.product_id, "product_id")


@dataclass(frozen=True)
class CheckoutHttpRequest:
    cart_id: str
    apply_service_charge: bool = False

    def __post_init__(self):
        _require_cart_id(self.cart_id)
        if not isinstance(self.apply_service_charge, bool):
            raise ValueError("apply_service_charge must be a boolean.")


@dataclass(frozen=True)
class HttpApiErrorBody:
    code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": dict(self.details),
        }


@dataclass(frozen=True)
class HttpApiResponse:
    ok: bool
    data: Any = None
    error: Optional[HttpApiErrorBody] = None
    meta: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        if self.ok:
            body = {"ok": True, "data": self.data}
        else:
            if self.error is None:
                raise ValueError("error must be set when ok is False.")
            body = {"ok": False, "error": self.error.to_dict()}
        if self.meta:
            body["meta"] = dict(self.meta)
        return body
