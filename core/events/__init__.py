"""
POS Event Sink — Public API
=============================
The core emits structured events; sinks decide where they go.
"""

from core.events.errors import (
    EventSinkError,
    InvalidEventTypeFormat,
)
from core.events.sink import (
    EventLevel,
    EventRecord,
    EventSink,
    InMemoryEventSink,
    LoggingEventSink,
    NullEventSink,
    emit_event,
    validate_event_type,
)

__all__ = [
    "EventLevel",
    "EventRecord",
    "EventSink",
    "InMemoryEventSink",
    "LoggingEventSink",
    "NullEventSink",
    "emit_event",
    "validate_event_type",
    "EventSinkError",
    "InvalidEventTypeFormat",
]
