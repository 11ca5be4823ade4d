"""Tests for the in-memory order repository adapter."""

from threading import Thread
from uuid import uuid4

import pytest
from ordering.order.exceptions import OrderNotFound, RepositoryError
from ordering.order.order import Item, Order, OrderStatus
from ordering.order.repository import InMemoryOrderRepository, OrderRepository, create_repository
from ordering.order.repository.memory_adapter import CALL_HISTORY_SIZE


def _make_order(repository, **overrides):
    defaults = {"id": repository.next_id(), "customer_id": uuid4()}
    defaults.update(overrides)
    return Order(**defaults)


class TestStoreAndFind:
    def test_find_returns_stored_order(self, repository):
        order = _make_order(repository)
        repository.store(order)
        assert repository.find(order.id) == order

    def test_find_missing_raises_not_found(self, repository):
        with pytest.raises(OrderNotFound):
            repository.find(uuid4())

    def test_store_overwrites(self, repository):
        order = _make_order(repository)
        repository.store(order)
        order.status = OrderStatus.PAID
        repository.store(order)
        assert repository.find(order.id).status == OrderStatus.PAID

    def test_stored_copy_is_detached_from_caller(self, repository):
        order = _make_order(repository)
        repository.store(order)

        order.items.append(Item(id=uuid4(), product_id=uuid4(), price=1.0))

        assert repository.find(order.id).items == []

    def test_loaded_copy_is_detached_from_store(self, repository):
        order = _make_order(repository)
        repository.store(order)

        loaded = repository.find(order.id)
        loaded.status = OrderStatus.SHIPPED

        assert repository.find(order.id).status == OrderStatus.OPEN


class TestSoftDelete:
    def test_delete_tombstones_record(self, repository):
        order = _make_order(repository)
        repository.store(order)

        repository.delete(order.id)

        record = repository.get_record(order.id)
        assert record.deleted_at is not None
        assert record.updated_at == record.deleted_at

    def test_find_skips_tombstoned(self, repository):
        order = _make_order(repository)
        repository.store(order)
        repository.delete(order.id)

        with pytest.raises(OrderNotFound):
            repository.find(order.id)

    def test_delete_missing_raises_not_found(self, repository):
        with pytest.raises(OrderNotFound):
            repository.delete(uuid4())

    def test_delete_tombstoned_raises_not_found(self, repository):
        order = _make_order(repository)
        repository.store(order)
        repository.delete(order.id)

        with pytest.raises(OrderNotFound):
            repository.delete(order.id)

    def test_count_ignores_tombstoned(self, repository):
        first, second = _make_order(repository), _make_order(repository)
        repository.store(first)
        repository.store(second)
        repository.delete(first.id)
        assert repository.count() == 1

    def test_get_record_missing_returns_none(self, repository):
        assert repository.get_record(uuid4()) is None


class TestConfiguration:
    def test_configured_operation_fails(self, repository):
        repository.configure(fail_on={"find"}, failure_reason="Disk full")

        with pytest.raises(RepositoryError, match="Disk full"):
            repository.find(uuid4())

    def test_other_operations_still_work(self, repository):
        repository.configure(fail_on={"delete"})
        order = _make_order(repository)
        repository.store(order)
        assert repository.find(order.id) == order

    def test_unknown_operation_is_rejected(self, repository):
        with pytest.raises(ValueError):
            repository.configure(fail_on={"truncate"})

    def test_calls_are_recorded(self, repository):
        order_id = repository.next_id()
        with pytest.raises(OrderNotFound):
            repository.find(order_id)
        assert list(repository.calls) == [
            {"method": "next_id"},
            {"method": "find", "order_id": order_id},
        ]

    def test_call_history_is_bounded(self, repository):
        for _ in range(CALL_HISTORY_SIZE + 10):
            repository.next_id()
        assert len(repository.calls) == CALL_HISTORY_SIZE

    def test_reset(self, repository):
        repository.configure(fail_on={"store"})
        repository.reset()

        order = _make_order(repository)
        repository.store(order)
        assert repository.count() == 1


class TestConcurrentAccess:
    def test_parallel_stores(self, repository):
        orders = [_make_order(repository) for _ in range(50)]
        threads = [Thread(target=repository.store, args=(order,)) for order in orders]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert repository.count() == 50


class TestFactory:
    def test_memory_adapter(self):
        repository = create_repository("memory")
        assert isinstance(repository, InMemoryOrderRepository)
        assert isinstance(repository, OrderRepository)

    def test_unknown_adapter(self):
        with pytest.raises(ValueError, match="postgres"):
            create_repository("postgres")
