"""Interface for observability sinks.

Services receive a sink at construction and report trace events to it
instead of printing.
"""

import abc

from vidproxy.domain.events.cache_events import DomainEvent


class EventSink(abc.ABC):
    """Abstract Base Class for receivers of domain events."""

    @abc.abstractmethod
    def emit(self, event: DomainEvent) -> None:
        """Records or forwards a single event.

        Args:
            event: The domain event to record.
        """
        pass
