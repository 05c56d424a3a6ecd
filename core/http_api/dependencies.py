"""
POS HTTP API - Dependencies
===========================
Shared catalog, per-session carts and the checkout service.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, Optional


class CartRegistry:
    """
    Open carts by id.

    Each cart gets its own lock; session() holds it so two requests
    against the same cart never interleave.
    """

    def __init__(self, cart_factory: Callable[[], Any]):
        self._cart_factory = cart_factory
        self._lock = threading.Lock()
        self._carts: Dict[str, Any] = {}
        self._cart_locks: Dict[str, threading.Lock] = {}

    def open(self):
        cart = self._cart_factory()
        with self._lock:
            self._carts[cart.cart_id] = cart
            self._cart_locks[cart.cart_id] = threading.Lock()
        return cart

    def get(self, cart_id: str):
        with self._lock:
            return self._carts.get(cart_id)

    def close(self, cart_id: str) -> bool:
        with self._lock:
            self._cart_locks.pop(cart_id, None)
            return self._carts.pop(cart_id, None) is not None

    @contextmanager
    def session(self, cart_id: str) -> Iterator[Optional[Any]]:
        """Yield the cart (or None) while holding its lock."""
        with self._lock:
            cart = self._carts.get(cart_id)
            cart_lock = self._cart_locks.get(cart_id)
        if cart is None:
            yield None
            return
        with cart_lock:
            yield cart

    def __len__(self) -> int:
        with self._lock:
            return len(self._carts)


@dataclass(frozen=True)
class PosDependencies:
    catalog: Any
    carts: CartRegistry
    checkout: Any
