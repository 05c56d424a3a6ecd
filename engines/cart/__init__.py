"""
POS Cart Engine
================
Per-session tentative order. Never touches stock.
"""

from engines.cart.services import Cart, LineItem

__all__ = ["Cart", "LineItem"]
