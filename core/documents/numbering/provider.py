"""
POS Documents - Numbering Provider
=====================================
Protocol + implementations for invoice number issuance.

- SequentialNumberingProvider: per-day monotonic counter. Unique
  within a day for the life of the process. Default.
- RandomNumberingProvider: random four-digit suffix per invoice, the
  store's historical behaviour. Collisions within a day are possible.

Both are thread-safe and keep the "FACT-YYYYMMDD-NNNN" format.
"""

from __future__ import annotations

import random
import threading
from datetime import datetime
from typing import Optional, Protocol

from core.documents.numbering.engine import SequenceState
from core.documents.numbering.models import NumberingPolicy


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------

class NumberingProvider(Protocol):
    def next_number(self, issued_at: datetime) -> str:
        """
        Atomically get the next invoice number and advance the sequence.

        May raise NumberingError.
        """
        ...


# ---------------------------------------------------------------------------
# Sequential provider
# ---------------------------------------------------------------------------

class SequentialNumberingProvider:
    """
    Thread-safe in-memory sequential numbering.

    Sequence state is maintained in-memory and restarts with the
    process.
    """

    def __init__(self, policy: Optional[NumberingPolicy] = None):
        self._lock = threading.Lock()
        self._policy = policy or NumberingPolicy()
        self._state = SequenceState(self._policy)

    @property
    def policy(self) -> NumberingPolicy:
        return self._policy

    def next_number(self, issued_at: datetime) -> str:
        with self._lock:
            number, new_state = self._state.next_number(issued_at)
            self._state = new_state
            return number

    def current_sequence(self) -> int:
        """Inspect the next sequence value (test helper)."""
        with self._lock:
            return self._state.current_sequence


# ---------------------------------------------------------------------------
# Random provider
# ---------------------------------------------------------------------------

class RandomNumberingProvider:
    """
    Random suffix in [start_at, max_sequence], drawn per invoice.

    Pass a seeded random.Random for deterministic tests.
    """

    def __init__(
        self,
        policy: Optional[NumberingPolicy] = None,
        rng: Optional[random.Random] = None,
    ):
        self._lock = threading.Lock()
        self._policy = policy or NumberingPolicy()
        self._rng = rng or random.Random()

    @property
    def policy(self) -> NumberingPolicy:
        return self._policy

    def next_number(self, issued_at: datetime) -> str:
        with self._lock:
            sequence = self._rng.randint(
                self._policy.start_at, self._policy.max_sequence,
            )
        return self._policy.format_number(sequence, issued_at)
