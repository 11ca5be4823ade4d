"""Event dispatcher factory.

Provides create_dispatcher() to build a dispatcher adapter by name:
- InMemoryDispatcher ("memory") for development and testing
- LoggingDispatcher ("log") to trace events without a transport
"""

from ordering.order.dispatcher.log_adapter import LoggingDispatcher
from ordering.order.dispatcher.memory_adapter import InMemoryDispatcher
from ordering.order.dispatcher.port import EventDispatcher

_ADAPTERS = {
    "memory": InMemoryDispatcher,
    "log": LoggingDispatcher,
}


def create_dispatcher(adapter: str = "memory") -> EventDispatcher:
    """Return a new dispatcher instance for the named adapter."""
    try:
        factory = _ADAPTERS[adapter]
    except KeyError:
        raise ValueError(f"Unknown dispatcher adapter: {adapter}") from None
    return factory()


__all__ = ["EventDispatcher", "InMemoryDispatcher", "LoggingDispatcher", "create_dispatcher"]
