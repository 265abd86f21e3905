"""RPC server."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping

from microboot import config
from microboot.interfaces import Node, Registry, Server, Service

logger = logging.getLogger(__name__)

# pylint: disable=too-many-arguments


class RpcServer(Server):
    """The process's RPC server.

    Args:
        name: Service name the server registers under.
        version: Service version.
        server_id: Unique id of this instance. A UUID4 is generated when empty.
        address: Bind address.
        advertise: Address announced to the registry instead of ``address``
            when non-empty.
        metadata: Free-form annotations attached to the registered node.
    """

    def __init__(
        self,
        name: str = "",
        version: str = "",
        server_id: str = "",
        address: str = config.DEFAULT_SERVER_ADDRESS,
        advertise: str = "",
        metadata: Mapping[str, str] | None = None,
    ) -> None:
        self.name = name
        self.version = version
        self.id = server_id or str(uuid.uuid4())
        self.address = address
        self.advertise = advertise
        self.metadata = dict(metadata or {})

    def __repr__(self) -> str:
        return (
            f"RpcServer(name={self.name!r}, version={self.version!r}, "
            f"id={self.id!r}, address={self.address!r})"
        )

    def _service(self) -> Service:
        node = Node(
            id=f"{self.name}-{self.id}",
            address=self.advertise or self.address,
            metadata=dict(self.metadata),
        )
        return Service(name=self.name, version=self.version, nodes=(node,))

    def register(self, registry: Registry) -> None:
        service = self._service()
        logger.info("Registering node %s of %s", service.nodes[0].id, self.name)
        registry.register(service)

    def deregister(self, registry: Registry) -> None:
        service = self._service()
        logger.info("Deregistering node %s of %s", service.nodes[0].id, self.name)
        registry.deregister(service)


def new_server(
    name: str = "",
    version: str = "",
    server_id: str = "",
    address: str = config.DEFAULT_SERVER_ADDRESS,
    advertise: str = "",
    metadata: Mapping[str, str] | None = None,
) -> RpcServer:
    """Build the default server."""
    return RpcServer(
        name=name,
        version=version,
        server_id=server_id,
        address=address,
        advertise=advertise,
        metadata=metadata,
    )
