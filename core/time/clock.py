"""
POS Core Time — Explicit Clock Protocol
=========================================
Checkout needs wall-clock time for the invoice timestamp and the
date part of the invoice number. Time is injected through the Clock
protocol so tests can pin it.

All clocks return timezone-aware datetimes.
"""

from __future__ import annotations

from datetime import datetime, timedelta, tzinfo
from typing import Optional, Protocol


# ══════════════════════════════════════════════════════════════
# CLOCK PROTOCOL
# ══════════════════════════════════════════════════════════════

class Clock(Protocol):
    """Injectable time source."""

    def now(self) -> datetime:
        """Return the current timezone-aware time."""
        ...  # pragma: no cover


# ══════════════════════════════════════════════════════════════
# IMPLEMENTATIONS
# ══════════════════════════════════════════════════════════════

class SystemClock:
    """
    Production clock: real system time.

    Without an explicit tz the host's local zone is used, so invoice
    dates follow the store's calendar day.
    """

    def __init__(self, tz: Optional[tzinfo] = None) -> None:
        self._tz = tz

    def now(self) -> datetime:
        if self._tz is None:
            return datetime.now().astimezone()
        return datetime.now(self._tz)


class FixedClock:
    """
    Test clock: returns a fixed timestamp.

    Usage:
        clock = FixedClock(datetime(2025, 1, 1, tzinfo=timezone.utc))
        assert clock.now().year == 2025
    """

    def __init__(self, fixed_dt: datetime) -> None:
        if fixed_dt.tzinfo is None:
            raise ValueError("FixedClock requires timezone-aware datetime.")
        self._fixed_dt = fixed_dt

    def now(self) -> datetime:
        return self._fixed_dt

    def advance(self, seconds: float) -> None:
        """Advance the fixed time (useful for multi-step test scenarios)."""
        self._fixed_dt = self._fixed_dt + timedelta(seconds=seconds)
