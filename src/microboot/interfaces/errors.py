"""Errors raised while bootstrapping or using the wired components."""

from collections.abc import Iterable


class BootstrapError(Exception):
    """Base class for failures that abort process startup."""


class UnresolvedKindError(BootstrapError):
    """Raised when strict kind checking finds kinds with no registered factory."""

    def __init__(self, kinds: Iterable[tuple[str, str]]) -> None:
        self.kinds = tuple(kinds)
        listed = ", ".join(f"{component}={kind!r}" for component, kind in self.kinds)
        super().__init__(f"No factory registered for: {listed}")


class RegistryError(Exception):
    """Base class for service registry errors."""


class ServiceNotFoundError(RegistryError, LookupError):
    """Raised when a service has no registered nodes."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Service ({name}) not found in registry")


class SelectorError(Exception):
    """Base class for node selection errors."""


class NoneAvailableError(SelectorError):
    """Raised when a service exists but none of its nodes can be selected."""

    def __init__(self, service: str) -> None:
        self.service = service
        super().__init__(f"No nodes available for service ({service})")
