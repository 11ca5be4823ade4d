"""Order aggregate — the core of the ordering domain.

The aggregate is a plain value holder: the Order root plus the Items it
owns, treated as one consistency boundary. All mutation rules (status
gates, item management, event emission) live in OrderService; the models
here only guarantee structural validity.

Status:
    OPEN → PAID → SHIPPED → DELIVERED, any status → CANCELLED
    Items can only change while OPEN. CANCELLED is terminal.
"""

from datetime import UTC, datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    OPEN = "Open"
    PAID = "Paid"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


def utc_now() -> datetime:
    return datetime.now(UTC)


def _ensure_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
class Item(BaseModel):
    """A line item owned by exactly one Order.

    The price is a snapshot taken when the item was added and is never
    re-fetched from the catalogue.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: UUID = Field(frozen=True)
    product_id: UUID = Field(frozen=True)
    price: float = Field(ge=0.0)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
class Order(BaseModel):
    """An order placed by a customer.

    ``deleted_at`` marks a tombstone: the record is kept for audit, but
    repositories must treat it as absent on every lookup path.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: UUID = Field(frozen=True)
    customer_id: UUID = Field(frozen=True)
    status: OrderStatus = OrderStatus.OPEN
    items: list[Item] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    deleted_at: datetime | None = None

    @field_validator("created_at", "updated_at", "deleted_at")
    @classmethod
    def _normalize_timestamps(cls, value):
        return _ensure_utc(value)

    def __eq__(self, other):
        if not isinstance(other, Order):
            return NotImplemented
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def is_open(self) -> bool:
        return self.status == OrderStatus.OPEN

    @property
    def total(self) -> float:
        return sum(item.price for item in self.items)

    def find_item(self, item_id: UUID) -> Item | None:
        return next((item for item in self.items if item.id == item_id), None)
