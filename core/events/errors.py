"""
POS Event Sink — Errors
=========================
Error types for the event emission layer.
"""


class EventSinkError(Exception):
    """Base error for event sink operations."""
    pass


class InvalidEventTypeFormat(EventSinkError):
    """Event type does not follow engine.domain.action format."""

    def __init__(self, event_type: str):
        self.event_type = event_type
        super().__init__(
            f"Event type '{event_type}' does not follow "
            f"engine.domain.action format."
        )
