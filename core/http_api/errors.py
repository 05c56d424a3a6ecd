"""
POS HTTP API - Error Mapping
============================
Stable transport error mapping for rejections and handler failures.
"""

from __future__ import annotations

from typing import Any, Optional

from core.commands.rejection import ReasonCode, RejectionReason
from core.http_api.contracts import HttpApiErrorBody, HttpApiResponse

INVALID_REQUEST = "INVALID_REQUEST"
CART_NOT_FOUND = "CART_NOT_FOUND"
METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"

HTTP_STATUS_BY_CODE = {
    ReasonCode.INVALID_QUANTITY: 400,
    ReasonCode.INVALID_RANGE: 400,
    ReasonCode.EMPTY_CART: 400,
    INVALID_REQUEST: 400,
    ReasonCode.PRODUCT_NOT_FOUND: 404,
    ReasonCode.NOT_IN_CART: 404,
    CART_NOT_FOUND: 404,
    METHOD_NOT_ALLOWED: 405,
    ReasonCode.INSUFFICIENT_STOCK: 409,
    ReasonCode.INTERNAL_ERROR: 500,
}


def error_response(
    *,
    code: str,
    message: str,
    details: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    return HttpApiResponse(
        ok=False,
        error=HttpApiErrorBody(
            code=code,
            message=message,
            details=details or {},
        ),
    ).to_dict()


def success_response(
    data: Any,
    *,
    meta: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    return HttpApiResponse(ok=True, data=data, meta=meta).to_dict()


def map_rejection_reason(reason: RejectionReason) -> HttpApiErrorBody:
    details = {"policy_name": reason.policy_name}
    details.update(reason.details)
    return HttpApiErrorBody(
        code=reason.code,
        message=reason.message,
        details=details,
    )


def rejection_response(
    reason: RejectionReason,
    *,
    extra_details: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    mapped = map_rejection_reason(reason)
    details = dict(mapped.details)
    if extra_details:
        details.update(extra_details)
    return error_response(
        code=mapped.code,
        message=mapped.message,
        details=details,
    )


def http_status_for(payload: dict[str, Any]) -> int:
    """200 for ok payloads; otherwise by error code, 400 if unknown."""
    if payload.get("ok"):
        return 200
    code = payload.get("error", {}).get("code")
    return HTTP_STATUS_BY_CODE.get(code, 400)
