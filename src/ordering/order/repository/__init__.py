"""Order repository factory.

Provides create_repository() to build a storage adapter by name:
- InMemoryOrderRepository ("memory") for development and testing
"""

from ordering.order.repository.memory_adapter import InMemoryOrderRepository
from ordering.order.repository.port import OrderRepository

_ADAPTERS = {
    "memory": InMemoryOrderRepository,
}


def create_repository(adapter: str = "memory") -> OrderRepository:
    """Return a new repository instance for the named adapter."""
    try:
        factory = _ADAPTERS[adapter]
    except KeyError:
        raise ValueError(f"Unknown repository adapter: {adapter}") from None
    return factory()


__all__ = ["InMemoryOrderRepository", "OrderRepository", "create_repository"]
