"""
POS Documents - Numbering Engine
===================================
Deterministic invoice number generation from a NumberingPolicy +
sequence state.

Doctrine:
- Stateless engine: given the same inputs, always produces the same output.
- Sequence state is owned by a provider.
- Time is passed explicitly, never read from system clock here.
"""

from __future__ import annotations

from datetime import datetime

from core.documents.numbering.models import (
    RESET_DAILY,
    RESET_NEVER,
    NumberingPolicy,
    SequenceExhaustedError,
)


# ---------------------------------------------------------------------------
# Period key helpers
# ---------------------------------------------------------------------------

def period_key(policy: NumberingPolicy, issued_at: datetime) -> str:
    """
    Return a string key identifying the current reset period for issued_at.

    - NEVER → "" (constant)
    - DAILY → "2026-02-18", the calendar day of issued_at in its own
      timezone, which is also the day printed in the number
    """
    if policy.reset_period == RESET_NEVER:
        return ""
    if policy.reset_period == RESET_DAILY:
        return issued_at.strftime("%Y-%m-%d")
    return ""


# ---------------------------------------------------------------------------
# Sequence state
# ---------------------------------------------------------------------------

class SequenceState:
    """
    Tracks the current sequence counter for one policy.

    - current_period_key: the period key when the counter was last updated
    - current_sequence: the next sequence number to issue
    """

    def __init__(
        self,
        policy: NumberingPolicy,
        *,
        current_period_key: str = "",
        current_sequence: int | None = None,
    ):
        self._policy = policy
        self._current_period_key = current_period_key
        self._current_sequence = current_sequence if current_sequence is not None else policy.start_at

    @property
    def policy(self) -> NumberingPolicy:
        return self._policy

    @property
    def current_sequence(self) -> int:
        return self._current_sequence

    @property
    def current_period_key(self) -> str:
        return self._current_period_key

    def next_number(self, issued_at: datetime) -> tuple[str, "SequenceState"]:
        """
        Return (invoice_number, new_state) for issued_at.

        Resets counter if the period key has changed. Raises
        SequenceExhaustedError once the period has used max_sequence.
        Returns a new SequenceState (immutable pattern).
        """
        new_period_key = period_key(self._policy, issued_at)
        if new_period_key != self._current_period_key:
            next_seq = self._policy.start_at
        else:
            next_seq = self._current_sequence

        if next_seq > self._policy.max_sequence:
            raise SequenceExhaustedError(new_period_key, self._policy.max_sequence)

        number = self._policy.format_number(next_seq, issued_at)
        new_state = SequenceState(
            self._policy,
            current_period_key=new_period_key,
            current_sequence=next_seq + 1,
        )
        return number, new_state
