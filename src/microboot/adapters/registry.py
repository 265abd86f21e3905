"""Service registries.

Exports
-------
- MemoryRegistry: catalog kept entirely in RAM.
- ConsulRegistry: the same catalog, addressed at a Consul agent. Syncing the
  catalog with the agent belongs to the Consul integration and is not done
  here; the addresses are recorded so that integration can pick them up.

Key behaviors
-------------
- Nodes are keyed by ``(service name, node id)``; re-registering a node id
  replaces that node.
- A service whose last node is deregistered disappears from the catalog.
- Service version and metadata follow the most recent registration.
- All reads and writes happen under an `RLock`.
"""

from __future__ import annotations

import threading

from microboot import config
from microboot.interfaces import Node, Registry, Service, ServiceNotFoundError


class MemoryRegistry(Registry):
    """In-memory service catalog."""

    def __init__(self, addresses: list[str] | None = None) -> None:
        self._addresses = list(addresses or [])
        self._services: dict[str, Service] = {}
        self._nodes: dict[str, dict[str, Node]] = {}
        self._lock = threading.RLock()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(addresses={self._addresses!r})"

    @property
    def addresses(self) -> list[str]:
        return list(self._addresses)

    def register(self, service: Service) -> None:
        with self._lock:
            nodes = self._nodes.setdefault(service.name, {})
            for node in service.nodes:
                nodes[node.id] = node
            self._services[service.name] = service

    def deregister(self, service: Service) -> None:
        with self._lock:
            nodes = self._nodes.get(service.name)
            if nodes is None:
                return
            for node in service.nodes:
                nodes.pop(node.id, None)
            if not nodes:
                del self._nodes[service.name]
                del self._services[service.name]

    def get_service(self, name: str) -> Service:
        with self._lock:
            if name not in self._nodes:
                raise ServiceNotFoundError(name)
            record = self._services[name]
            return Service(
                name=record.name,
                version=record.version,
                nodes=tuple(self._nodes[name].values()),
                metadata=dict(record.metadata),
            )

    def list_services(self) -> list[Service]:
        with self._lock:
            names = sorted(self._nodes)
        return [self.get_service(name) for name in names]


class ConsulRegistry(MemoryRegistry):
    """Registry addressed at one or more Consul agents.

    An address list with no non-empty entry (the flag was not given) falls
    back to the local agent at `config.DEFAULT_CONSUL_ADDRESS`.
    """

    def __init__(self, addresses: list[str] | None = None) -> None:
        addresses = [a for a in addresses or [] if a] or [config.DEFAULT_CONSUL_ADDRESS]
        super().__init__(addresses)


def new_registry(addresses: list[str]) -> ConsulRegistry:
    """Factory registered under the ``consul`` registry kind."""
    return ConsulRegistry(addresses)
