from uuid import uuid4

import pytest

from ordering.order.dispatcher import InMemoryDispatcher
from ordering.order.repository import InMemoryOrderRepository
from ordering.order.service import OrderService


@pytest.fixture
def repository():
    return InMemoryOrderRepository()


@pytest.fixture
def dispatcher():
    return InMemoryDispatcher()


@pytest.fixture
def service(repository, dispatcher):
    return OrderService(repository=repository, dispatcher=dispatcher)


@pytest.fixture
def customer_id():
    return uuid4()


@pytest.fixture
def order_id(service, dispatcher, customer_id):
    """An open order, with the creation event already cleared."""
    created = service.create_order(customer_id)
    dispatcher.clear()
    return created
