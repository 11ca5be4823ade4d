"""In-memory order repository for development and testing.

Records live in a dict guarded by a re-entrant lock. Orders are copied on
the way in and on the way out, so a caller mutating a loaded aggregate
never changes the stored record until it calls ``store``.

It can also be configured at runtime to fail, which makes RepositoryError
paths easy to exercise:

    repo.configure(fail_on={"store"})

Only the most recent calls are kept in ``calls`` (CALL_HISTORY_SIZE).
"""

from collections import deque
from threading import RLock
from uuid import UUID, uuid4

from ordering.order.exceptions import OrderNotFound, RepositoryError
from ordering.order.order import Order, utc_now
from ordering.order.repository.port import OrderRepository

OPERATIONS = frozenset({"next_id", "store", "find", "delete"})
CALL_HISTORY_SIZE = 1000


class InMemoryOrderRepository(OrderRepository):
    """Thread-safe dict-backed repository with soft-delete semantics."""

    def __init__(self) -> None:
        self._records: dict[UUID, Order] = {}
        self._lock = RLock()
        self.fail_on: set[str] = set()
        self.failure_reason: str = "Storage unavailable"
        self.calls: deque[dict] = deque(maxlen=CALL_HISTORY_SIZE)  # Most recent calls only

    def configure(self, fail_on=(), failure_reason: str = "Storage unavailable") -> None:
        """Make the named operations raise RepositoryError."""
        unknown = set(fail_on) - OPERATIONS
        if unknown:
            raise ValueError(f"Unknown repository operations: {sorted(unknown)}")
        self.fail_on = set(fail_on)
        self.failure_reason = failure_reason

    def _record_call(self, method: str, **kwargs) -> None:
        with self._lock:
            self.calls.append({"method": method, **kwargs})
        if method in self.fail_on:
            raise RepositoryError(f"{method} failed: {self.failure_reason}")

    def next_id(self) -> UUID:
        self._record_call("next_id")
        return uuid4()

    def store(self, order: Order) -> None:
        self._record_call("store", order_id=order.id)
        with self._lock:
            self._records[order.id] = order.model_copy(deep=True)

    def find(self, order_id: UUID) -> Order:
        self._record_call("find", order_id=order_id)
        with self._lock:
            record = self._records.get(order_id)
            if record is None or record.is_deleted:
                raise OrderNotFound(order_id)
            return record.model_copy(deep=True)

    def delete(self, order_id: UUID) -> None:
        self._record_call("delete", order_id=order_id)
        with self._lock:
            record = self._records.get(order_id)
            if record is None or record.is_deleted:
                raise OrderNotFound(order_id)
            now = utc_now()
            record.deleted_at = now
            record.updated_at = now

    # -------------------------------------------------------------------
    # Inspection helpers (not part of the port)
    # -------------------------------------------------------------------
    def get_record(self, order_id: UUID) -> Order | None:
        """Return a copy of the raw record, tombstoned or not."""
        with self._lock:
            record = self._records.get(order_id)
            return None if record is None else record.model_copy(deep=True)

    def count(self) -> int:
        """Number of live (not soft-deleted) orders."""
        with self._lock:
            return sum(1 for record in self._records.values() if not record.is_deleted)

    def reset(self) -> None:
        with self._lock:
            self._records.clear()
            self.calls.clear()
        self.fail_on = set()
