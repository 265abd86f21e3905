"""Option Set for a MICROBOOT command.

An `Options` value carries the service identity and the four factory tables
(broker, registry, selector, transport) that map a kind identifier to a
constructor. It is built once by applying option functions, in order, to a
value seeded with the built-in factories:

    options = new_options(
        name("greeter"),
        broker("nats", NatsBroker),
    )
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from microboot import config
from microboot.adapters import new_broker, new_registry, new_selector, new_transport

if TYPE_CHECKING:
    from microboot.interfaces import Broker, Registry, Selector, Transport

BrokerFactory = Callable[[list[str]], "Broker"]
RegistryFactory = Callable[[list[str]], "Registry"]
SelectorFactory = Callable[..., "Selector"]
TransportFactory = Callable[[list[str]], "Transport"]
Action = Callable[[Any], None]

DEFAULT_BROKERS: dict[str, BrokerFactory] = {config.DEFAULT_BROKER: new_broker}
DEFAULT_REGISTRIES: dict[str, RegistryFactory] = {
    config.DEFAULT_REGISTRY: new_registry
}
DEFAULT_SELECTORS: dict[str, SelectorFactory] = {
    config.BUILTIN_SELECTOR: new_selector
}
DEFAULT_TRANSPORTS: dict[str, TransportFactory] = {
    config.DEFAULT_TRANSPORT: new_transport
}


def _no_action(components: Any) -> None:  # pylint: disable=unused-argument
    """Default action: do nothing once bootstrap is done."""


@dataclass
class Options:  # pylint: disable=too-many-instance-attributes
    """Configuration of a command: identity, factory tables and action."""

    name: str = ""
    version: str = ""
    description: str = ""
    brokers: dict[str, BrokerFactory] = field(default_factory=dict)
    registries: dict[str, RegistryFactory] = field(default_factory=dict)
    selectors: dict[str, SelectorFactory] = field(default_factory=dict)
    transports: dict[str, TransportFactory] = field(default_factory=dict)
    action: Action = _no_action
    strict_kinds: bool = False


Option = Callable[[Options], None]


def new_options(*opts: Option) -> Options:
    """Build an `Options` value from the built-in factories and ``opts``.

    Options are applied in argument order, so later ones win. The factory
    tables are copies of the module defaults; registering a factory on one
    `Options` never changes another.
    """
    options = Options(
        brokers=dict(DEFAULT_BROKERS),
        registries=dict(DEFAULT_REGISTRIES),
        selectors=dict(DEFAULT_SELECTORS),
        transports=dict(DEFAULT_TRANSPORTS),
    )
    apply(options, *opts)
    if not options.description:
        options.description = config.DEFAULT_DESCRIPTION
    return options


def apply(options: Options, *opts: Option) -> Options:
    """Apply ``opts`` to ``options`` in place and return it."""
    for opt in opts:
        opt(options)
    return options


# --- identity ---


def name(value: str) -> Option:
    """Set the service name."""

    def _set(o: Options) -> None:
        o.name = value

    return _set


def version(value: str) -> Option:
    """Set the service version."""

    def _set(o: Options) -> None:
        o.version = value

    return _set


def description(value: str) -> Option:
    """Set the description shown as the command's usage line."""

    def _set(o: Options) -> None:
        o.description = value

    return _set


# --- single factory registration (merge) ---


def broker(kind: str, factory: BrokerFactory) -> Option:
    """Register ``factory`` under broker kind ``kind``."""

    def _set(o: Options) -> None:
        o.brokers[kind] = factory

    return _set


def registry(kind: str, factory: RegistryFactory) -> Option:
    """Register ``factory`` under registry kind ``kind``."""

    def _set(o: Options) -> None:
        o.registries[kind] = factory

    return _set


def selector(kind: str, factory: SelectorFactory) -> Option:
    """Register ``factory`` under selector kind ``kind``.

    Selector factories are called with a ``registry`` keyword argument.
    """

    def _set(o: Options) -> None:
        o.selectors[kind] = factory

    return _set


def transport(kind: str, factory: TransportFactory) -> Option:
    """Register ``factory`` under transport kind ``kind``."""

    def _set(o: Options) -> None:
        o.transports[kind] = factory

    return _set


# --- whole-table replacement ---


def brokers(table: Mapping[str, BrokerFactory]) -> Option:
    """Replace the broker table."""

    def _set(o: Options) -> None:
        o.brokers = dict(table)

    return _set


def registries(table: Mapping[str, RegistryFactory]) -> Option:
    """Replace the registry table."""

    def _set(o: Options) -> None:
        o.registries = dict(table)

    return _set


def selectors(table: Mapping[str, SelectorFactory]) -> Option:
    """Replace the selector table."""

    def _set(o: Options) -> None:
        o.selectors = dict(table)

    return _set


def transports(table: Mapping[str, TransportFactory]) -> Option:
    """Replace the transport table."""

    def _set(o: Options) -> None:
        o.transports = dict(table)

    return _set


# --- behaviour ---


def action(fn: Action) -> Option:
    """Run ``fn`` with the bootstrapped components after bootstrap succeeds."""

    def _set(o: Options) -> None:
        o.action = fn

    return _set


def strict_kinds(enabled: bool = True) -> Option:
    """Abort startup when a requested kind has no registered factory."""

    def _set(o: Options) -> None:
        o.strict_kinds = enabled

    return _set
