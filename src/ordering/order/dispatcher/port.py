"""Event dispatcher port (abstract interface).

Defines the contract that all event transport adapters must implement.
OrderService calls ``dispatch`` exactly once per successful mutation, and
only after the change was persisted.
"""

from abc import ABC, abstractmethod

from ordering.order.events import OrderEvent


class EventDispatcher(ABC):
    """Abstract domain-event dispatcher."""

    @abstractmethod
    def dispatch(self, event: OrderEvent) -> None:
        """Deliver the event to its consumers, or raise DispatchError."""
        ...
