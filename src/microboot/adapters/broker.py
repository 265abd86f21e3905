"""HTTP broker.

Subscribers live in this process: `publish` fans a message out to every
handler subscribed to the topic, in subscription order. The configured
addresses are kept for display and for the transport layer.
"""

import logging
import threading
from collections import defaultdict

from microboot.interfaces import Broker, Handler

logger = logging.getLogger(__name__)


class HttpBroker(Broker):
    """In-process pub/sub broker addressed over HTTP."""

    def __init__(self, addresses: list[str] | None = None) -> None:
        self._addresses = list(addresses or [])
        self._subscribers: dict[str, list[Handler]] = defaultdict(list)
        self._lock = threading.RLock()

    def __repr__(self) -> str:
        return f"HttpBroker(addresses={self._addresses!r})"

    @property
    def addresses(self) -> list[str]:
        return list(self._addresses)

    def subscribe(self, topic: str, handler: Handler) -> None:
        with self._lock:
            self._subscribers[topic].append(handler)
        logger.debug("Subscribed %r to topic %s", handler, topic)

    def unsubscribe(self, topic: str, handler: Handler) -> None:
        with self._lock:
            handlers = self._subscribers.get(topic, [])
            if handler in handlers:
                handlers.remove(handler)

    def publish(self, topic: str, payload: bytes) -> int:
        with self._lock:
            handlers = list(self._subscribers.get(topic, []))
        for handler in handlers:
            handler(topic, payload)
        logger.debug(
            "Published %d bytes on %s to %d handlers",
            len(payload),
            topic,
            len(handlers),
        )
        return len(handlers)


def new_broker(addresses: list[str]) -> HttpBroker:
    """Factory registered under the ``http`` broker kind."""
    return HttpBroker(addresses)
