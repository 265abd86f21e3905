"""Interfaces (component contracts) for MICROBOOT.

Defines the abstract component kinds the bootstrap step wires together
(broker, registry, selector, transport, server, client), the small records
they exchange, and the error taxonomy.

Dependency rule: this package is independent; do not import from any other
`microboot.*` module. It may be imported by `microboot.adapters`,
`microboot.bootstrap` and `microboot.cmd`.
"""

from .components import (
    Broker,
    Client,
    Handler,
    Node,
    Registry,
    Selector,
    Server,
    Service,
    Transport,
)
from .errors import (
    BootstrapError,
    NoneAvailableError,
    RegistryError,
    SelectorError,
    ServiceNotFoundError,
    UnresolvedKindError,
)

__all__ = [
    "BootstrapError",
    "Broker",
    "Client",
    "Handler",
    "Node",
    "NoneAvailableError",
    "Registry",
    "RegistryError",
    "Selector",
    "SelectorError",
    "Server",
    "Service",
    "ServiceNotFoundError",
    "Transport",
    "UnresolvedKindError",
]
