"""
POS Checkout Engine — Application Service
===========================================
Turns a validated cart into committed stock deductions and an Invoice.

Flow (all under the catalog lock):
  empty check → revalidate → price → commit → number → build invoice

RULES (NON-NEGOTIABLE):
- A rejection before commit leaves the catalog untouched
- A failure during or after commit restores every deduction already
  applied, in reverse order, before the rejection is returned
- Checkout never mutates the cart; the caller clears it on success
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from core.commands.outcomes import Outcome
from core.commands.rejection import ReasonCode, RejectionReason
from core.config.rules import CheckoutConfig, default_checkout_config
from core.documents.numbering.models import NumberingPolicy
from core.documents.numbering.provider import (
    NumberingProvider,
    SequentialNumberingProvider,
)
from core.events.sink import EventLevel, EventSink, LoggingEventSink, emit_event
from core.time.clock import Clock, SystemClock
from engines.checkout.events import (
    CHECKOUT_COMPLETED_V1,
    CHECKOUT_FAILED_V1,
    CHECKOUT_REJECTED_V1,
    CHECKOUT_ROLLED_BACK_V1,
    CHECKOUT_STARTED_V1,
    build_checkout_completed_payload,
    build_checkout_rejected_payload,
    build_checkout_started_payload,
    build_rollback_payload,
)
from engines.checkout.invoice import Invoice, InvoiceLine, TaxBreakdown, TaxLine

logger = logging.getLogger("pos.checkout")


def empty_cart_rejection() -> RejectionReason:
    return RejectionReason(
        code=ReasonCode.EMPTY_CART,
        message="Cannot check out an empty cart.",
        policy_name="checkout.process",
    )


def internal_error_rejection(message: str, **details: Any) -> RejectionReason:
    return RejectionReason(
        code=ReasonCode.INTERNAL_ERROR,
        message=message,
        policy_name="checkout.process",
        details=details,
    )


class CheckoutService:
    """Stateless apart from its collaborators; safe to share."""

    def __init__(
        self,
        config: Optional[CheckoutConfig] = None,
        numbering: Optional[NumberingProvider] = None,
        clock: Optional[Clock] = None,
        event_sink: Optional[EventSink] = None,
    ):
        self._config = config or default_checkout_config()
        self._numbering = numbering or SequentialNumberingProvider(
            NumberingPolicy(prefix=self._config.invoice_prefix)
        )
        self._clock = clock or SystemClock()
        self._sink = event_sink if event_sink is not None else LoggingEventSink()

    @property
    def config(self) -> CheckoutConfig:
        return self._config

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

    # ── Pricing ───────────────────────────────────────────────

    def compute_taxes(self, subtotal, apply_service_charge: bool = False) -> TaxBreakdown:
        """VAT always; service charge after it when requested."""
        lines = [TaxLine.from_rule(self._config.vat, subtotal)]
        if apply_service_charge and self._config.service_charge is not None:
            lines.append(TaxLine.from_rule(self._config.service_charge, subtotal))
        return TaxBreakdown(tuple(lines))

    # ── Process ───────────────────────────────────────────────

    def process(self, cart, catalog, apply_service_charge: bool = False) -> Outcome:
        """
        Outcome[Invoice]. REJECTED with EMPTY_CART, PRODUCT_NOT_FOUND,
        INSUFFICIENT_STOCK or INTERNAL_ERROR.
        """
        if cart.is_empty():
            return self._rejected(cart, empty_cart_rejection())

        self._emit(
            EventLevel.INFO, CHECKOUT_STARTED_V1,
            "Inicio de operación: Procesamiento de compra",
            build_checkout_started_payload(
                cart.cart_id, cart.line_count(), apply_service_charge,
            ),
        )

        committed: List[Tuple[int, int]] = []
        with catalog.lock:
            try:
                validation = cart.revalidate_against_catalog(catalog)
                if validation.is_rejected:
                    return self._rejected(cart, validation.reason)

                lines = cart.items()
                subtotal = cart.subtotal()
                taxes = self.compute_taxes(subtotal, apply_service_charge)
                total = subtotal + taxes.total

                for line in lines:
                    reduced = catalog.reduce_stock(line.product_id, line.quantity)
                    if reduced.is_rejected:
                        self._rollback(cart, catalog, committed)
                        return self._rejected(cart, reduced.reason)
                    committed.append((line.product_id, line.quantity))

                issued_at = self._clock.now()
                invoice_id = self._numbering.next_number(issued_at)

                invoice = Invoice(
                    invoice_id=invoice_id,
                    issued_at=issued_at,
                    lines=tuple(InvoiceLine.from_line_item(line) for line in lines),
                    subtotal=subtotal,
                    taxes=taxes,
                    total=total,
                    seller=self._config.seller,
                )
            except Exception as exc:
                logger.error(
                    f"Checkout failed for cart {cart.cart_id}: {exc}",
                    exc_info=True,
                )
                self._rollback(cart, catalog, committed)
                self._emit(
                    EventLevel.ERROR, CHECKOUT_FAILED_V1,
                    f"Error al procesar compra: {exc}",
                    {"cart_id": cart.cart_id, "error": type(exc).__name__},
                )
                return Outcome.rejected(internal_error_rejection(
                    "Internal error while processing the purchase.",
                    error=type(exc).__name__,
                ))

        self._emit(
            EventLevel.INFO, CHECKOUT_COMPLETED_V1,
            f"COMPRA - Factura: {invoice.invoice_id}, Total: ${invoice.total:.2f}, "
            f"Items: {invoice.item_count}",
            build_checkout_completed_payload(invoice),
        )
        return Outcome.accepted(invoice)

    # ── Internals ─────────────────────────────────────────────

    def _rejected(self, cart, rejection: RejectionReason) -> Outcome:
        self._emit(
            EventLevel.ERROR, CHECKOUT_REJECTED_V1,
            f"Compra rechazada: {rejection.message}",
            build_checkout_rejected_payload(
                cart.cart_id, rejection.code, rejection.details,
            ),
        )
        return Outcome.rejected(rejection)

    def _rollback(self, cart, catalog, committed: List[Tuple[int, int]]) -> None:
        """Restore applied deductions, newest first. Caller holds the lock."""
        if not committed:
            return
        restored: List[Tuple[int, int]] = []
        for product_id, quantity in reversed(committed):
            try:
                outcome = catalog.restore_stock(product_id, quantity)
            except Exception as exc:
                logger.error(
                    f"Rollback failed restoring {quantity} of product "
                    f"{product_id}: {exc}",
                    exc_info=True,
                )
                continue
            if outcome.is_rejected:
                logger.error(
                    f"Rollback could not restore {quantity} of product "
                    f"{product_id}: {outcome.reason.message}"
                )
                continue
            restored.append((product_id, quantity))
        committed.clear()
        self._emit(
            EventLevel.WARNING, CHECKOUT_ROLLED_BACK_V1,
            f"Commit revertido: {len(restored)} productos restaurados",
            build_rollback_payload(cart.cart_id, restored),
        )
