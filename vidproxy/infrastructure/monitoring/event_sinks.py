"""Concrete EventSink implementations.

LoggingEventSink turns trace events into log records; RecordingEventSink
keeps them in memory so tests and the CLI can inspect what happened.
"""

import logging
from dataclasses import asdict
from typing import Iterable, List, Optional, Type, TypeVar

from vidproxy.domain.events.cache_events import DomainEvent
from vidproxy.domain.interfaces.event_sink import EventSink

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=DomainEvent)


class LoggingEventSink(EventSink):
    """Writes each event to a logger."""

    def __init__(self, event_logger: Optional[logging.Logger] = None, level: int = logging.DEBUG):
        self.event_logger = event_logger or logger
        self.level = level

    def emit(self, event: DomainEvent) -> None:
        if not self.event_logger.isEnabledFor(self.level):
            return
        fields = {k: v for k, v in asdict(event).items() if k != "timestamp" and v is not None}
        details = ", ".join(f"{k}={v}" for k, v in fields.items())
        self.event_logger.log(self.level, f"{type(event).__name__}({details})")


class RecordingEventSink(EventSink):
    """Keeps every emitted event in order."""

    def __init__(self):
        self.events: List[DomainEvent] = []

    def emit(self, event: DomainEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: Type[E]) -> List[E]:
        """Returns the recorded events of the given type, oldest first."""
        return [e for e in self.events if isinstance(e, event_type)]

    def clear(self) -> None:
        self.events.clear()


class CompositeEventSink(EventSink):
    """Forwards every event to each of the wrapped sinks."""

    def __init__(self, sinks: Iterable[EventSink]):
        self.sinks = list(sinks)

    def emit(self, event: DomainEvent) -> None:
        for sink in self.sinks:
            sink.emit(event)
