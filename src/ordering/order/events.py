"""Domain events for the Order aggregate.

All events are immutable facts describing a state change that was already
persisted. Each carries a ``type`` tag so dispatchers and consumers can
match on the event kind directly:

    match event.type:
        case EventType.ORDER_CREATED: ...
        case EventType.ORDER_ITEMS_CHANGED: ...

OrderEvent is the closed union of the four variants; parse_event() is the
inverse of BaseOrderEvent.to_message() for transports that carry JSON.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from ordering.order.order import OrderStatus, utc_now


class EventType(str, Enum):
    ORDER_CREATED = "OrderCreated"
    ORDER_ITEMS_CHANGED = "OrderItemsChanged"
    ORDER_STATUS_CHANGED = "OrderStatusChanged"
    ORDER_DELETED = "OrderDeleted"


class BaseOrderEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    __version__ = "v1"

    order_id: UUID
    occurred_at: datetime = Field(default_factory=utc_now)

    def to_message(self) -> dict:
        """JSON-safe representation, suitable for any transport."""
        return self.model_dump(mode="json")


class OrderCreated(BaseOrderEvent):
    """A new, empty order was opened for a customer."""

    type: Literal[EventType.ORDER_CREATED] = EventType.ORDER_CREATED
    customer_id: UUID


class OrderItemsChanged(BaseOrderEvent):
    """Items were added to or removed from an open order."""

    type: Literal[EventType.ORDER_ITEMS_CHANGED] = EventType.ORDER_ITEMS_CHANGED
    added_items: tuple[UUID, ...] = ()
    removed_items: tuple[UUID, ...] = ()


class OrderStatusChanged(BaseOrderEvent):
    """The order's status was overwritten (possibly with the same value)."""

    type: Literal[EventType.ORDER_STATUS_CHANGED] = EventType.ORDER_STATUS_CHANGED
    new_status: OrderStatus


class OrderDeleted(BaseOrderEvent):
    """The order was soft-deleted."""

    type: Literal[EventType.ORDER_DELETED] = EventType.ORDER_DELETED


OrderEvent = Annotated[
    OrderCreated | OrderItemsChanged | OrderStatusChanged | OrderDeleted,
    Field(discriminator="type"),
]

_event_adapter = TypeAdapter(OrderEvent)


def parse_event(data: dict | str | bytes) -> OrderEvent:
    """Rebuild the matching event variant from its message form.

    Raises pydantic.ValidationError for an unknown ``type`` tag or a
    malformed payload.
    """
    if isinstance(data, (str, bytes)):
        return _event_adapter.validate_json(data)
    return _event_adapter.validate_python(data)
