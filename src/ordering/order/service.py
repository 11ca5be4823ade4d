"""Order service — creation, status changes, item management and deletion.

Every operation follows the same sequence: load the aggregate through the
repository, validate and mutate it in memory, persist it, then dispatch
exactly one domain event. An event is only dispatched after the store
succeeded. If dispatching fails the change stays persisted and the
operation raises DispatchError; nothing is rolled back or retried here.

The service holds no state of its own beyond its two collaborators.
"""

from contextlib import contextmanager
from typing import Annotated
from uuid import UUID

import structlog
from pydantic import Field, TypeAdapter, ValidationError

from ordering.order.dispatcher.port import EventDispatcher
from ordering.order.events import (
    OrderCreated,
    OrderDeleted,
    OrderEvent,
    OrderItemsChanged,
    OrderStatusChanged,
)
from ordering.order.exceptions import (
    DispatchError,
    InvalidItemPrice,
    InvalidOrderStatus,
    ItemNotFound,
    OrderingError,
    RepositoryError,
)
from ordering.order.order import Item, Order, OrderStatus, utc_now
from ordering.order.repository.port import OrderRepository

logger = structlog.get_logger(__name__)

_price_adapter = TypeAdapter(Annotated[float, Field(ge=0.0)])


def _validate_price(price) -> float:
    """Apply the Item price rule up front, before any repository call."""
    try:
        return _price_adapter.validate_python(price)
    except ValidationError:
        raise InvalidItemPrice(price) from None


@contextmanager
def _repository_call(operation: str):
    """Surface adapter failures as RepositoryError, domain errors unchanged."""
    try:
        yield
    except OrderingError:
        raise
    except Exception as exc:
        raise RepositoryError(f"Repository {operation} failed: {exc}") from exc


class OrderService:
    def __init__(self, repository: OrderRepository, dispatcher: EventDispatcher) -> None:
        self.repository = repository
        self.dispatcher = dispatcher

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------
    def _next_id(self) -> UUID:
        with _repository_call("next_id"):
            return self.repository.next_id()

    def _find(self, order_id: UUID, operation: str) -> Order:
        try:
            with _repository_call("find"):
                return self.repository.find(order_id)
        except OrderingError as exc:
            logger.warning(f"Cannot {operation}", order_id=str(order_id), error=str(exc))
            raise

    def _store(self, order: Order) -> None:
        with _repository_call("store"):
            self.repository.store(order)

    def _dispatch(self, event: OrderEvent, result=None) -> None:
        try:
            self.dispatcher.dispatch(event)
        except Exception as exc:
            logger.error(
                "Event dispatch failed after persisting change",
                order_id=str(event.order_id),
                event_type=event.type.value,
                error=str(exc),
            )
            if isinstance(exc, DispatchError):
                if exc.event is None:
                    exc.event = event
                exc.result = result
                raise
            raise DispatchError(f"Dispatching {event.type.value} failed: {exc}", event=event, result=result) from exc

    def _require_open(self, order: Order, operation: str) -> None:
        if order.status != OrderStatus.OPEN:
            logger.warning(
                f"Cannot {operation}: order is not open",
                order_id=str(order.id),
                status=order.status.value,
            )
            raise InvalidOrderStatus(
                order.id,
                order.status,
                f"Items of order {order.id} can only change while Open, current status is {order.status.value}",
            )

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def get_order(self, order_id: UUID) -> Order:
        """Return the order, or raise OrderNotFound if absent or soft-deleted."""
        with _repository_call("find"):
            return self.repository.find(order_id)

    # -------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------
    def create_order(self, customer_id: UUID) -> UUID:
        """Open a new, empty order for the customer and return its id."""
        order_id = self._next_id()
        now = utc_now()
        order = Order(
            id=order_id,
            customer_id=customer_id,
            status=OrderStatus.OPEN,
            created_at=now,
            updated_at=now,
        )
        self._store(order)

        logger.info("Order created", order_id=str(order_id), customer_id=str(customer_id))
        self._dispatch(OrderCreated(order_id=order_id, customer_id=customer_id), result=order_id)
        return order_id

    def delete_order(self, order_id: UUID) -> None:
        """Soft-delete the order.

        The repository re-checks the tombstone on delete, so an order removed
        concurrently between the lookup and the delete still raises
        OrderNotFound instead of succeeding twice.
        """
        self._find(order_id, "delete order")
        try:
            with _repository_call("delete"):
                self.repository.delete(order_id)
        except OrderingError as exc:
            logger.warning("Cannot delete order", order_id=str(order_id), error=str(exc))
            raise

        logger.info("Order deleted", order_id=str(order_id))
        self._dispatch(OrderDeleted(order_id=order_id))

    def set_status(self, order_id: UUID, new_status: OrderStatus | str) -> None:
        """Overwrite the order's status.

        Any target status is accepted, including the current one. Only a
        Cancelled order refuses further status changes.
        """
        try:
            new_status = OrderStatus(new_status)
        except ValueError:
            raise InvalidOrderStatus(order_id, new_status, f"Unknown order status: {new_status!r}") from None

        order = self._find(order_id, "change order status")
        if order.status == OrderStatus.CANCELLED:
            logger.warning(
                "Cannot change status of a cancelled order",
                order_id=str(order_id),
                requested_status=new_status.value,
            )
            raise InvalidOrderStatus(order_id, order.status, f"Order {order_id} is Cancelled and cannot change status")

        previous_status = order.status
        order.status = new_status
        order.updated_at = utc_now()
        self._store(order)

        logger.info(
            "Order status changed",
            order_id=str(order_id),
            previous_status=previous_status.value,
            new_status=new_status.value,
        )
        self._dispatch(OrderStatusChanged(order_id=order_id, new_status=new_status))

    def add_item(self, order_id: UUID, product_id: UUID, price: float) -> UUID:
        """Append an item to an open order and return the new item id."""
        price = _validate_price(price)

        order = self._find(order_id, "add item")
        self._require_open(order, "add item")

        item_id = self._next_id()
        order.items.append(Item(id=item_id, product_id=product_id, price=price))
        order.updated_at = utc_now()
        self._store(order)

        logger.info(
            "Item added to order",
            order_id=str(order_id),
            item_id=str(item_id),
            product_id=str(product_id),
            price=price,
        )
        self._dispatch(OrderItemsChanged(order_id=order_id, added_items=(item_id,)), result=item_id)
        return item_id

    def delete_item(self, order_id: UUID, item_id: UUID) -> None:
        """Remove an item from an open order, keeping the others in order."""
        order = self._find(order_id, "delete item")
        self._require_open(order, "delete item")

        item = order.find_item(item_id)
        if item is None:
            logger.warning("Cannot delete item: not in order", order_id=str(order_id), item_id=str(item_id))
            raise ItemNotFound(order_id, item_id)

        order.items = [i for i in order.items if i.id != item_id]
        order.updated_at = utc_now()
        self._store(order)

        logger.info("Item removed from order", order_id=str(order_id), item_id=str(item_id))
        self._dispatch(OrderItemsChanged(order_id=order_id, removed_items=(item_id,)))
