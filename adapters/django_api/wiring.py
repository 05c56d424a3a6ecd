"""
POS Django Adapter Wiring
=========================
Constructs PosDependencies for the running server.

This module is adapter-only glue:
- one seeded catalog per process, shared by every cart
- carts live in memory until the process stops
"""

from __future__ import annotations

import threading

from core.events.sink import LoggingEventSink
from core.http_api.dependencies import CartRegistry, PosDependencies
from engines.cart.services import Cart
from engines.catalog.seed import build_seeded_catalog
from engines.checkout.services import CheckoutService


_DEPENDENCIES_LOCK = threading.Lock()
_DEPENDENCIES: PosDependencies | None = None


def _create_dependencies() -> PosDependencies:
    sink = LoggingEventSink()
    return PosDependencies(
        catalog=build_seeded_catalog(event_sink=sink),
        carts=CartRegistry(cart_factory=lambda: Cart(event_sink=sink)),
        checkout=CheckoutService(event_sink=sink),
    )


def build_dependencies() -> PosDependencies:
    """
    Lazy singleton wiring for adapter runtime.
    """
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        if _DEPENDENCIES is None:
            _DEPENDENCIES = _create_dependencies()
        return _DEPENDENCIES


def configure_dependencies(dependencies: PosDependencies) -> None:
    """Install a prepared bundle (tests, alternative seeds)."""
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        _DEPENDENCIES = dependencies


def reset_dependencies() -> None:
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        _DEPENDENCIES = None
