"""Resolve flags into components and publish them as the process defaults."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from microboot import __version__
from microboot.adapters import new_client, new_server
from microboot.defaults import DEFAULTS, ProcessDefaults
from microboot.interfaces import UnresolvedKindError
from microboot.logging import LoggingFlags, configure_logging, log_startup

if TYPE_CHECKING:
    from microboot.flags import FlagValues
    from microboot.interfaces import (
        Broker,
        Client,
        Registry,
        Selector,
        Server,
        Transport,
    )
    from microboot.options import Options

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolution:
    """Outcome of looking up one kind identifier in a factory table."""

    component: str
    kind: str
    resolved: bool
    instance: Any = None


@dataclass(frozen=True)
class Components:  # pylint: disable=too-many-instance-attributes
    """Everything one bootstrap run built, in build order."""

    broker: Broker | None
    registry: Registry | None
    selector: Selector | None
    transport: Transport | None
    server: Server
    client: Client
    metadata: dict[str, str] = field(default_factory=dict)
    unresolved: tuple[tuple[str, str], ...] = ()


def split_addresses(value: str | None) -> list[str]:
    """Split a comma-separated address flag.

    No trimming, deduplication or validation: ``"a,,b,"`` gives
    ``["a", "", "b", ""]`` and an empty value gives ``[""]``.
    """
    return (value or "").split(",")


def parse_metadata(tokens: Iterable[str]) -> dict[str, str]:
    """Build the server metadata map from ``key=value`` tokens.

    The key is everything before the first ``=`` and the value everything
    after it. A token without ``=`` maps its key to ``""``. Later duplicates
    win.
    """
    metadata: dict[str, str] = {}
    for token in tokens:
        key, _, value = token.partition("=")
        metadata[key] = value
    return metadata


def resolve(
    component: str,
    kind: str,
    factories: Mapping[str, Callable[..., Any]],
    *args: Any,
    **kwargs: Any,
) -> Resolution:
    """Call the factory registered under ``kind`` once, if there is one.

    An unknown ``kind`` is not an error here: the outcome is reported as
    unresolved and a warning is logged.
    """
    if (factory := factories.get(kind)) is None:
        logger.warning(
            "No %s factory registered for %r (known: %s); keeping current default",
            component,
            kind,
            ", ".join(sorted(factories)) or "<none>",
        )
        return Resolution(component=component, kind=kind, resolved=False)
    try:
        instance = factory(*args, **kwargs)
    except Exception:  # pylint: disable=broad-except
        logger.exception("The %s factory for %r failed", component, kind)
        raise
    logger.debug("Resolved %s %r -> %r", component, kind, instance)
    return Resolution(component=component, kind=kind, resolved=True, instance=instance)


def unknown_kinds(
    flags: FlagValues, options: Options
) -> tuple[tuple[str, str], ...]:
    """Return the ``(component, kind)`` pairs with no registered factory."""
    wanted = (
        ("broker", flags.broker, options.brokers),
        ("registry", flags.registry, options.registries),
        ("selector", flags.selector, options.selectors),
        ("transport", flags.transport, options.transports),
    )
    return tuple(
        (component, kind)
        for component, kind, factories in wanted
        if kind not in factories
    )


def _publish(defaults: ProcessDefaults, resolution: Resolution) -> None:
    if resolution.resolved:
        defaults.publish(resolution.component, resolution.instance)


def bootstrap(
    flags: FlagValues,
    options: Options,
    defaults: ProcessDefaults = DEFAULTS,
    *,
    color: bool = True,
) -> Components:
    """Build and publish the process components from parsed flags.

    Steps run in a fixed order: logging, broker, registry, selector,
    transport, server metadata, server, client. The selector factory receives
    the registry produced by the registry step (or the existing default
    registry if that step did not resolve), so the registry must come first.

    Args:
        flags: Parsed flag values.
        options: The command's options holding the factory tables.
        defaults: Slots to publish into; the process-wide `DEFAULTS` unless
            a test passes its own.
        color: Allow colored console logging.

    Returns:
        Components: What this run built. ``unresolved`` lists the
        ``(component, kind)`` pairs that had no factory.

    Raises:
        LoggingConfigError: If a logging flag is malformed.
        UnresolvedKindError: If ``options.strict_kinds`` is set and a kind
            had no factory. Checked before any factory runs, so
            nothing is published.
    """
    # 1) logging
    logging_flags = LoggingFlags.from_flags(flags)
    handlers = configure_logging(logging_flags, color=color)
    log_startup(logger, app_version=__version__, flags=logging_flags, handlers=handlers)

    if options.strict_kinds and (unknown := unknown_kinds(flags, options)):
        raise UnresolvedKindError(unknown)

    # 2) broker
    broker = resolve(
        "broker", flags.broker, options.brokers, split_addresses(flags.broker_address)
    )
    _publish(defaults, broker)

    # 3) registry
    registry = resolve(
        "registry",
        flags.registry,
        options.registries,
        split_addresses(flags.registry_address),
    )
    _publish(defaults, registry)

    # 4) selector, fed the registry from step 3
    selector_registry = registry.instance if registry.resolved else defaults.registry
    selector = resolve(
        "selector", flags.selector, options.selectors, registry=selector_registry
    )
    _publish(defaults, selector)

    # 5) transport
    transport = resolve(
        "transport",
        flags.transport,
        options.transports,
        split_addresses(flags.transport_address),
    )
    _publish(defaults, transport)

    unresolved = tuple(
        (r.component, r.kind)
        for r in (broker, registry, selector, transport)
        if not r.resolved
    )

    # 6) metadata
    metadata = parse_metadata(flags.server_metadata)

    # 7) server
    server = new_server(
        name=flags.server_name,
        version=flags.server_version,
        server_id=flags.server_id,
        address=flags.server_address,
        advertise=flags.server_advertise,
        metadata=metadata,
    )
    defaults.publish("server", server)

    # 8) client
    client = new_client()
    defaults.publish("client", client)

    logger.info(
        "Bootstrapped %s (broker=%s, registry=%s, selector=%s, transport=%s)",
        flags.server_name or "<unnamed>",
        *(
            r.kind if r.resolved else f"{r.kind}(unresolved)"
            for r in (broker, registry, selector, transport)
        ),
    )

    return Components(
        broker=defaults.broker,
        registry=defaults.registry,
        selector=defaults.selector,
        transport=defaults.transport,
        server=server,
        client=client,
        metadata=metadata,
        unresolved=unresolved,
    )
