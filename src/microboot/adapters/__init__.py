"""Adapters (built-in component implementations) for MICROBOOT.

One small implementation per component kind, registered under the default
kind names so that a process started with no flags still resolves. They keep
their state in process and do no networking.

Dependency rule: may import `microboot.interfaces` and `microboot.defaults`;
must not import `microboot.bootstrap` or `microboot.cmd`.
"""

from .broker import HttpBroker, new_broker
from .client import RpcClient, new_client
from .registry import ConsulRegistry, MemoryRegistry, new_registry
from .selector import RandomSelector, new_selector
from .server import RpcServer, new_server
from .transport import HttpTransport, new_transport

__all__ = [
    "ConsulRegistry",
    "HttpBroker",
    "HttpTransport",
    "MemoryRegistry",
    "RandomSelector",
    "RpcClient",
    "RpcServer",
    "new_broker",
    "new_client",
    "new_registry",
    "new_selector",
    "new_server",
    "new_transport",
]
