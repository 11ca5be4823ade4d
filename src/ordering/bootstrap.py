"""Composition root for the ordering core.

Builds an OrderService wired to the repository and dispatcher adapters
named in the settings. Entry points (HTTP, CLI, workers) call this once
and pass the service around; nothing here is a global.
"""

import structlog

from ordering.config import OrderingSettings, get_settings
from ordering.order.dispatcher import create_dispatcher
from ordering.order.repository import create_repository
from ordering.order.service import OrderService

logger = structlog.get_logger(__name__)


def build_order_service(settings: OrderingSettings | None = None) -> OrderService:
    settings = settings or get_settings()
    repository = create_repository(settings.repository_adapter)
    dispatcher = create_dispatcher(settings.dispatcher_adapter)

    logger.debug(
        "Order service built",
        environment=settings.environment.value,
        repository_adapter=settings.repository_adapter,
        dispatcher_adapter=settings.dispatcher_adapter,
    )
    return OrderService(repository=repository, dispatcher=dispatcher)
