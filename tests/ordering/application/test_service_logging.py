"""Tests for the structured log entries emitted by OrderService."""

from uuid import uuid4

import pytest
from ordering.order.exceptions import DispatchError, InvalidOrderStatus
from ordering.order.order import OrderStatus
from structlog.testing import capture_logs


class TestServiceLogging:
    def test_success_is_logged_at_info(self, service, customer_id):
        with capture_logs() as logs:
            order_id = service.create_order(customer_id)

        assert {
            "event": "Order created",
            "log_level": "info",
            "order_id": str(order_id),
            "customer_id": str(customer_id),
        } in logs

    def test_rejection_is_logged_at_warning(self, service, order_id):
        service.set_status(order_id, OrderStatus.CANCELLED)

        with capture_logs() as logs:
            with pytest.raises(InvalidOrderStatus):
                service.set_status(order_id, OrderStatus.OPEN)

        warnings = [entry for entry in logs if entry["log_level"] == "warning"]
        assert len(warnings) == 1
        assert warnings[0]["order_id"] == str(order_id)

    def test_dispatch_failure_is_logged_at_error(self, service, dispatcher, order_id):
        dispatcher.configure(should_succeed=False)

        with capture_logs() as logs:
            with pytest.raises(DispatchError):
                service.add_item(order_id, uuid4(), 1.0)

        errors = [entry for entry in logs if entry["log_level"] == "error"]
        assert len(errors) == 1
        assert errors[0]["event_type"] == "OrderItemsChanged"
