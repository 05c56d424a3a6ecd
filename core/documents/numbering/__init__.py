"""
POS Documents - Numbering Engine Public API
=============================================
"""

from core.documents.numbering.engine import (
    SequenceState,
    period_key,
)
from core.documents.numbering.models import (
    RESET_DAILY,
    RESET_NEVER,
    VALID_RESET_PERIODS,
    NumberingError,
    NumberingPolicy,
    SequenceExhaustedError,
)
from core.documents.numbering.provider import (
    NumberingProvider,
    RandomNumberingProvider,
    SequentialNumberingProvider,
)

__all__ = [
    "NumberingPolicy",
    "NumberingError",
    "SequenceExhaustedError",
    "RESET_NEVER",
    "RESET_DAILY",
    "VALID_RESET_PERIODS",
    "SequenceState",
    "period_key",
    "NumberingProvider",
    "SequentialNumberingProvider",
    "RandomNumberingProvider",
]
