"""Order repository port (abstract interface).

Defines the contract every storage adapter must implement. OrderService
depends only on this interface, so the in-memory adapter used in
development and tests can be swapped for a database-backed one without
touching the service.

Soft-delete is part of the contract: ``find`` and ``delete`` must treat a
record with ``deleted_at`` set exactly like a missing record.
"""

from abc import ABC, abstractmethod
from uuid import UUID

from ordering.order.order import Order


class OrderRepository(ABC):
    """Abstract storage for Order aggregates."""

    @abstractmethod
    def next_id(self) -> UUID:
        """Allocate a new unique identifier (used for orders and items)."""
        ...

    @abstractmethod
    def store(self, order: Order) -> None:
        """Insert or overwrite the order record."""
        ...

    @abstractmethod
    def find(self, order_id: UUID) -> Order:
        """Return the order, or raise OrderNotFound if absent or soft-deleted."""
        ...

    @abstractmethod
    def delete(self, order_id: UUID) -> None:
        """Soft-delete the order by setting ``deleted_at``.

        Raises OrderNotFound if the order is absent or already soft-deleted.
        """
        ...
