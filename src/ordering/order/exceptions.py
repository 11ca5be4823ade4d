"""Errors raised by the Order service and its collaborators.

Domain errors (not found, invalid status, unknown item) are raised by the
service or by repository adapters. RepositoryError and DispatchError wrap
failures surfaced by the persistence and event-dispatch collaborators.
"""


class OrderingError(Exception):
    """Base class for every error raised by the ordering core."""


class OrderNotFound(OrderingError):
    """The order does not exist or has been soft-deleted."""

    def __init__(self, order_id):
        self.order_id = order_id
        super().__init__(f"Order {order_id} not found")


class ItemNotFound(OrderingError):
    """The item is not part of the order's item collection."""

    def __init__(self, order_id, item_id):
        self.order_id = order_id
        self.item_id = item_id
        super().__init__(f"Item {item_id} not found in order {order_id}")


class InvalidOrderStatus(OrderingError):
    """The order's current status forbids the attempted operation."""

    def __init__(self, order_id, status, message=None):
        self.order_id = order_id
        self.status = status
        super().__init__(message or f"Operation not allowed for order {order_id} in status {status}")


class InvalidItemPrice(OrderingError):
    def __init__(self, price):
        self.price = price
        super().__init__(f"Item price must be non-negative, got {price}")


class RepositoryError(OrderingError):
    """Opaque failure from the persistence collaborator."""


class DispatchError(OrderingError):
    """Opaque failure from the event dispatcher.

    Raised after the state change was persisted, so ``result`` holds what the
    operation would have returned (order id, item id, or None) and ``event``
    holds the undelivered event.
    """

    def __init__(self, message, event=None, result=None):
        self.event = event
        self.result = result
        super().__init__(message)
