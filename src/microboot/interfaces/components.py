"""Contracts for the pluggable component kinds.

Each kind is an abstract base class. Concrete implementations are selected by
name at startup (see `microboot.options`) and published as the process-wide
default for their kind (see `microboot.defaults`).
"""

import abc
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

Handler = Callable[[str, bytes], None]


@dataclass(frozen=True)
class Node:
    """A single addressable instance of a service."""

    id: str
    address: str
    metadata: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Service:
    """A named, versioned service and the nodes currently serving it."""

    name: str
    version: str = ""
    nodes: tuple[Node, ...] = ()
    metadata: Mapping[str, str] = field(default_factory=dict)


class Broker(abc.ABC):
    """Contract for a pub/sub message broker."""

    @property
    @abc.abstractmethod
    def addresses(self) -> list[str]:
        """Addresses the broker was configured with."""

    @abc.abstractmethod
    def publish(self, topic: str, payload: bytes) -> int:
        """Publish ``payload`` on ``topic``.

        Returns:
            int: The number of subscribers the message was delivered to.
        """

    @abc.abstractmethod
    def subscribe(self, topic: str, handler: Handler) -> None:
        """Register ``handler`` to receive messages published on ``topic``."""

    @abc.abstractmethod
    def unsubscribe(self, topic: str, handler: Handler) -> None:
        """Remove a handler previously passed to `subscribe`."""


class Registry(abc.ABC):
    """Contract for a service discovery registry."""

    @property
    @abc.abstractmethod
    def addresses(self) -> list[str]:
        """Addresses of the discovery backend."""

    @abc.abstractmethod
    def register(self, service: Service) -> None:
        """Add or replace the nodes of ``service``.

        Nodes are keyed by id; registering a node id that already exists
        replaces it.
        """

    @abc.abstractmethod
    def deregister(self, service: Service) -> None:
        """Remove the nodes of ``service``. Unknown nodes are ignored."""

    @abc.abstractmethod
    def get_service(self, name: str) -> Service:
        """Return the service called ``name``.

        Raises:
            ServiceNotFoundError: If no node of the service is registered.
        """

    @abc.abstractmethod
    def list_services(self) -> list[Service]:
        """Return every registered service, sorted by name."""


class Selector(abc.ABC):
    """Contract for picking a node of a service."""

    @property
    @abc.abstractmethod
    def registry(self) -> Registry | None:
        """The registry nodes are looked up in, if any."""

    @abc.abstractmethod
    def select(self, service: str) -> Node:
        """Pick one node of ``service``.

        Raises:
            SelectorError: If the selector has no registry.
            ServiceNotFoundError: If the registry does not know the service.
            NoneAvailableError: If the service has no nodes.
        """


class Transport(abc.ABC):
    """Contract for a point-to-point transport."""

    @property
    @abc.abstractmethod
    def addresses(self) -> list[str]:
        """Addresses the transport was configured with."""


class Server(abc.ABC):
    """Contract for the process's RPC server."""

    name: str
    version: str
    id: str
    address: str
    advertise: str
    metadata: dict[str, str]

    @abc.abstractmethod
    def register(self, registry: Registry) -> None:
        """Announce this server as a node of its service."""

    @abc.abstractmethod
    def deregister(self, registry: Registry) -> None:
        """Withdraw this server's node from ``registry``."""


class Client(abc.ABC):
    """Contract for the process's RPC client."""

    @property
    @abc.abstractmethod
    def broker(self) -> Broker | None:
        """Broker used for publishing."""

    @property
    @abc.abstractmethod
    def selector(self) -> Selector | None:
        """Selector used to pick nodes for requests."""

    @property
    @abc.abstractmethod
    def transport(self) -> Transport | None:
        """Transport used to reach nodes."""

    @abc.abstractmethod
    def publish(self, topic: str, payload: bytes) -> int:
        """Publish through the client's broker."""
