"""Dispatcher that writes events to the structured log.

Used when no message transport is configured: every event is rendered in
its message form so it can still be traced and replayed by hand.
"""

import structlog

from ordering.order.dispatcher.port import EventDispatcher
from ordering.order.events import OrderEvent


class LoggingDispatcher(EventDispatcher):
    def __init__(self, logger=None) -> None:
        self.logger = logger or structlog.get_logger(__name__)

    def dispatch(self, event: OrderEvent) -> None:
        message = event.to_message()
        self.logger.info(
            "domain_event",
            event_type=message.pop("type"),
            version=event.__version__,
            **message,
        )
