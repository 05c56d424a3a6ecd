"""
POS Event Sink — Structured Event Records
============================================
The core emits one EventRecord per catalog mutation, cart change and
checkout outcome. Where the record ends up (log file, console, memory)
is the sink's business; the core only depends on the EventSink
protocol.

Rules:
- Event types follow engine.domain.action[.vN] format
- Levels are INFO | WARNING | ERROR | DEBUG
- Records are immutable
- Sinks never feed back into core state
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol, Tuple

from core.events.errors import InvalidEventTypeFormat


# ══════════════════════════════════════════════════════════════
# EVENT LEVEL
# ══════════════════════════════════════════════════════════════

class EventLevel(Enum):
    """Severity of an emitted event."""
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    DEBUG = "DEBUG"

    @property
    def logging_level(self) -> int:
        return _LOGGING_LEVELS[self]


_LOGGING_LEVELS = {
    EventLevel.INFO: logging.INFO,
    EventLevel.WARNING: logging.WARNING,
    EventLevel.ERROR: logging.ERROR,
    EventLevel.DEBUG: logging.DEBUG,
}


# ══════════════════════════════════════════════════════════════
# EVENT RECORD
# ══════════════════════════════════════════════════════════════

def validate_event_type(event_type: str) -> None:
    """Validate engine.domain.action format."""
    if not event_type or not isinstance(event_type, str):
        raise InvalidEventTypeFormat(event_type or "")
    parts = event_type.strip().split(".")
    if len(parts) < 3 or any(not part for part in parts):
        raise InvalidEventTypeFormat(event_type)


@dataclass(frozen=True)
class EventRecord:
    """
    One structured event.

    Fields:
        timestamp:  When the event occurred (timezone-aware)
        level:      EventLevel
        message:    Human-readable line for the log
        event_type: e.g. "catalog.stock.reduced.v1"
        payload:    Machine-readable facts (ids, quantities, totals)
    """
    timestamp: datetime
    level: EventLevel
    message: str
    event_type: str
    payload: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not isinstance(self.timestamp, datetime):
            raise ValueError("timestamp must be a datetime.")
        if not isinstance(self.level, EventLevel):
            raise ValueError("level must be EventLevel enum.")
        if not self.message or not isinstance(self.message, str):
            raise ValueError("message must be non-empty string.")
        validate_event_type(self.event_type)

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp.isoformat(),
            "level": self.level.value,
            "message": self.message,
            "event_type": self.event_type,
            "payload": dict(self.payload),
        }


# ══════════════════════════════════════════════════════════════
# SINK PROTOCOL
# ══════════════════════════════════════════════════════════════

class EventSink(Protocol):
    """Destination for emitted events."""

    def emit(self, record: EventRecord) -> None:
        ...  # pragma: no cover


# ══════════════════════════════════════════════════════════════
# IMPLEMENTATIONS
# ══════════════════════════════════════════════════════════════

class LoggingEventSink:
    """
    Forwards records to the stdlib logger (default "pos.events").

    Handlers, formats and the log file are configured through
    config.settings.LOGGING, not here.
    """

    def __init__(self, logger_name: str = "pos.events") -> None:
        self._logger = logging.getLogger(logger_name)

    def emit(self, record: EventRecord) -> None:
        self._logger.log(
            record.level.logging_level,
            record.message,
            extra={
                "event_type": record.event_type,
                "event_payload": record.payload,
            },
        )


class InMemoryEventSink:
    """Thread-safe in-memory sink. Used in tests and for inspection."""

    def __init__(self) -> None:
        self._records: List[EventRecord] = []
        self._lock = threading.Lock()

    def emit(self, record: EventRecord) -> None:
        with self._lock:
            self._records.append(record)

    @property
    def records(self) -> Tuple[EventRecord, ...]:
        with self._lock:
            return tuple(self._records)

    def of_type(self, event_type: str) -> Tuple[EventRecord, ...]:
        return tuple(r for r in self.records if r.event_type == event_type)

    def of_level(self, level: EventLevel) -> Tuple[EventRecord, ...]:
        return tuple(r for r in self.records if r.level == level)

    def event_types(self) -> List[str]:
        return [r.event_type for r in self.records]

    def clear(self) -> None:
        with self._lock:
            self._records.clear()


class NullEventSink:
    """Discards everything."""

    def emit(self, record: EventRecord) -> None:
        return None


# ══════════════════════════════════════════════════════════════
# EMISSION
# ══════════════════════════════════════════════════════════════

logger = logging.getLogger("pos.events")


def emit_event(
    sink: Optional[EventSink],
    *,
    timestamp: datetime,
    level: EventLevel,
    event_type: str,
    message: str,
    payload: Optional[Dict[str, Any]] = None,
) -> Optional[EventRecord]:
    """
    Build an EventRecord and hand it to the sink.

    Sink failures are logged and swallowed: a broken log sink must
    NEVER undo or block a committed stock change.
    """
    record = EventRecord(
        timestamp=timestamp,
        level=level,
        message=message,
        event_type=event_type,
        payload=payload or {},
    )
    if sink is None:
        return record
    try:
        sink.emit(record)
    except Exception as exc:
        logger.error(
            f"Event sink failed for {event_type}: {exc}",
            exc_info=True,
        )
    return record
