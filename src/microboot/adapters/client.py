"""RPC client.

A client built with no arguments uses whatever broker, selector and transport
are the process-wide defaults at the time it is used, so it can be built
before or after those are published.
"""

from __future__ import annotations

from microboot.defaults import DEFAULTS
from microboot.interfaces import Broker, Client, Selector, Transport


class RpcClient(Client):
    """The process's RPC client."""

    def __init__(
        self,
        broker: Broker | None = None,
        selector: Selector | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._broker = broker
        self._selector = selector
        self._transport = transport

    def __repr__(self) -> str:
        return "RpcClient()"

    @property
    def broker(self) -> Broker | None:
        return self._broker or DEFAULTS.broker

    @property
    def selector(self) -> Selector | None:
        return self._selector or DEFAULTS.selector

    @property
    def transport(self) -> Transport | None:
        return self._transport or DEFAULTS.transport

    def publish(self, topic: str, payload: bytes) -> int:
        """Publish through the client's broker.

        Raises:
            RuntimeError: If no broker is configured or published.
        """
        if (broker := self.broker) is None:
            raise RuntimeError("No broker available to publish on")
        return broker.publish(topic, payload)


def new_client() -> RpcClient:
    """Build the default client."""
    return RpcClient()
