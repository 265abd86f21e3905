"""Random node selector."""

import random

from microboot.interfaces import (
    Node,
    NoneAvailableError,
    Registry,
    Selector,
    SelectorError,
)


class RandomSelector(Selector):
    """Pick a uniformly random node of a service from a registry.

    A selector built without a registry can still be constructed, but every
    `select` call fails until one is available.
    """

    def __init__(
        self, registry: Registry | None = None, rng: random.Random | None = None
    ) -> None:
        self._registry = registry
        self._rng = rng or random.Random()

    def __repr__(self) -> str:
        return f"RandomSelector(registry={self._registry!r})"

    @property
    def registry(self) -> Registry | None:
        return self._registry

    def select(self, service: str) -> Node:
        if self._registry is None:
            raise SelectorError("Selector has no registry to look up nodes in")
        nodes = self._registry.get_service(service).nodes
        if not nodes:
            raise NoneAvailableError(service)
        return self._rng.choice(nodes)


def new_selector(registry: Registry | None = None) -> RandomSelector:
    """Factory registered under the ``random`` selector kind."""
    return RandomSelector(registry=registry)
