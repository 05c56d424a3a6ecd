"""
POS Core Time — Public API
============================
Explicit clock protocol. Checkout never calls datetime.now() directly.
"""

from core.time.clock import (
    Clock,
    FixedClock,
    SystemClock,
)

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
]
