"""Recording dispatcher for development and testing.

Keeps every dispatched event in order instead of delivering it anywhere.
It can be configured at runtime to fail, which reproduces the
persisted-but-not-notified state the service reports as DispatchError.
"""

from threading import Lock

from ordering.order.dispatcher.port import EventDispatcher
from ordering.order.events import EventType, OrderEvent
from ordering.order.exceptions import DispatchError


class InMemoryDispatcher(EventDispatcher):
    """Configurable in-memory dispatcher."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Broker unavailable"
        self._events: list[OrderEvent] = []
        self._lock = Lock()

    def configure(self, should_succeed: bool, failure_reason: str = "Broker unavailable") -> None:
        """Configure dispatcher behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def dispatch(self, event: OrderEvent) -> None:
        if not self.should_succeed:
            raise DispatchError(f"Could not dispatch {event.type.value}: {self.failure_reason}", event=event)
        with self._lock:
            self._events.append(event)

    @property
    def events(self) -> list[OrderEvent]:
        with self._lock:
            return list(self._events)

    def events_of(self, event_type: EventType) -> list[OrderEvent]:
        return [event for event in self.events if event.type == event_type]

    def clear(self) -> None:
        with self._lock:
            self._events.clear()
