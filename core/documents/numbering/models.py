"""
POS Documents - Numbering Models
==================================
Defines the NumberingPolicy dataclass: the configuration for invoice
numbering.

Invoice numbers look like "FACT-20260218-1000":
    <prefix>-<YYYYMMDD of issued_at>-<sequence, zero-padded>

Doctrine:
- Same policy + sequence position + date → same number (deterministic).
- The date part comes from the explicit issued_at argument.
- Sequences live in [start_at, max_sequence]; the default range keeps
  every number at exactly four digits.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

# ---------------------------------------------------------------------------
# Reset period identifiers
# ---------------------------------------------------------------------------

RESET_NEVER = "NEVER"        # Sequence never resets
RESET_DAILY = "DAILY"        # Resets at start of each calendar day

VALID_RESET_PERIODS = frozenset({RESET_NEVER, RESET_DAILY})


class NumberingError(Exception):
    """Base error for invoice numbering."""
    pass


class SequenceExhaustedError(NumberingError):
    """No numbers left in the current period."""

    def __init__(self, period_key: str, max_sequence: int):
        self.period_key = period_key
        self.max_sequence = max_sequence
        super().__init__(
            f"Invoice sequence exhausted for period '{period_key}' "
            f"(max {max_sequence})."
        )


# ---------------------------------------------------------------------------
# NumberingPolicy
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class NumberingPolicy:
    """
    Declares how invoice numbers are formatted and sequenced.

    Fields:
        prefix: leading segment (e.g. "FACT")
        padding: minimum digit width for the sequence number
        reset_period: when the sequence counter resets (NEVER/DAILY)
        start_at: first sequence number of each period
        max_sequence: last sequence number a period may issue
    """
    prefix: str = "FACT"
    padding: int = 4
    reset_period: str = RESET_DAILY
    start_at: int = 1000
    max_sequence: int = 9998

    def __post_init__(self):
        if not self.prefix or not isinstance(self.prefix, str):
            raise ValueError("prefix must be a non-empty string.")
        if not isinstance(self.padding, int) or self.padding < 1:
            raise ValueError("padding must be int >= 1.")
        if self.reset_period not in VALID_RESET_PERIODS:
            raise ValueError(
                f"reset_period '{self.reset_period}' is not valid. "
                f"Must be one of: {sorted(VALID_RESET_PERIODS)}"
            )
        if not isinstance(self.start_at, int) or self.start_at < 1:
            raise ValueError("start_at must be int >= 1.")
        if not isinstance(self.max_sequence, int) or self.max_sequence < self.start_at:
            raise ValueError("max_sequence must be int >= start_at.")

    def format_number(self, sequence: int, issued_at: datetime) -> str:
        """
        Format an invoice number from a sequence position.

        Returns:
            e.g. "FACT-20260218-1000"
        """
        if not isinstance(sequence, int) or sequence < 1:
            raise ValueError("sequence must be int >= 1.")
        if not isinstance(issued_at, datetime):
            raise ValueError("issued_at must be datetime.")
        padded = str(sequence).zfill(self.padding)
        return f"{self.prefix}-{issued_at.strftime('%Y%m%d')}-{padded}"
