"""Unit tests for the built-in registries and the random selector."""

import random

import pytest

from microboot.adapters import ConsulRegistry, MemoryRegistry, RandomSelector
from microboot.adapters.registry import new_registry
from microboot.adapters.selector import new_selector
from microboot.interfaces import (
    Node,
    NoneAvailableError,
    SelectorError,
    Service,
    ServiceNotFoundError,
)

# pylint: disable=magic-value-comparison


def _service(name="greeter", *node_ids, version="1.0.0"):
    nodes = tuple(Node(id=i, address=f"{i}:8080") for i in node_ids)
    return Service(name=name, version=version, nodes=nodes)


class TestMemoryRegistry:
    """Tests for MemoryRegistry."""

    @staticmethod
    def test_register_and_get():
        """Registered nodes are returned by get_service."""
        registry = MemoryRegistry()
        registry.register(_service("greeter", "a", "b"))
        service = registry.get_service("greeter")
        assert [n.id for n in service.nodes] == ["a", "b"]
        assert service.version == "1.0.0"

    @staticmethod
    def test_register_merges_nodes_by_id():
        """Registering more nodes adds to the service; same id replaces."""
        registry = MemoryRegistry()
        registry.register(_service("greeter", "a"))
        registry.register(
            Service(name="greeter", nodes=(Node(id="a", address="moved:1"),))
        )
        registry.register(_service("greeter", "b"))
        nodes = {n.id: n.address for n in registry.get_service("greeter").nodes}
        assert nodes == {"a": "moved:1", "b": "b:8080"}

    @staticmethod
    def test_unknown_service_raises():
        """An unknown service name is a ServiceNotFoundError."""
        with pytest.raises(ServiceNotFoundError) as exc:
            MemoryRegistry().get_service("missing")
        assert exc.value.name == "missing"

    @staticmethod
    def test_deregister_last_node_removes_service():
        """A service with no nodes left disappears."""
        registry = MemoryRegistry()
        registry.register(_service("greeter", "a", "b"))
        registry.deregister(_service("greeter", "a"))
        assert [n.id for n in registry.get_service("greeter").nodes] == ["b"]
        registry.deregister(_service("greeter", "b"))
        with pytest.raises(ServiceNotFoundError):
            registry.get_service("greeter")

    @staticmethod
    def test_deregister_unknown_is_ignored():
        """Deregistering something never registered is a no-op."""
        registry = MemoryRegistry()
        registry.deregister(_service("ghost", "x"))
        assert not registry.list_services()

    @staticmethod
    def test_list_services_sorted():
        """list_services returns services sorted by name."""
        registry = MemoryRegistry()
        registry.register(_service("zeta", "1"))
        registry.register(_service("alpha", "2"))
        assert [s.name for s in registry.list_services()] == ["alpha", "zeta"]


class TestConsulRegistry:
    """Tests for ConsulRegistry and its factory."""

    @staticmethod
    def test_keeps_given_addresses():
        """Non-empty addresses are kept as given."""
        registry = new_registry(["10.0.0.1:8500", "10.0.0.2:8500"])
        assert isinstance(registry, ConsulRegistry)
        assert registry.addresses == ["10.0.0.1:8500", "10.0.0.2:8500"]

    @staticmethod
    def test_unset_flag_falls_back_to_local_agent():
        """The [""] produced by an unset address flag means the local agent."""
        assert ConsulRegistry([""]).addresses == ["127.0.0.1:8500"]
        assert ConsulRegistry().addresses == ["127.0.0.1:8500"]


class TestRandomSelector:
    """Tests for RandomSelector."""

    @staticmethod
    def test_selects_a_registered_node():
        """select returns one of the service's nodes."""
        registry = MemoryRegistry()
        registry.register(_service("greeter", "a", "b", "c"))
        selector = RandomSelector(registry, rng=random.Random(7))
        picks = {selector.select("greeter").id for _ in range(50)}
        assert picks <= {"a", "b", "c"}
        assert len(picks) > 1

    @staticmethod
    def test_without_registry_cannot_select():
        """A selector with no registry builds but cannot select."""
        selector = new_selector()
        assert selector.registry is None
        with pytest.raises(SelectorError):
            selector.select("greeter")

    @staticmethod
    def test_unknown_service_propagates():
        """Registry lookup errors reach the caller."""
        selector = RandomSelector(MemoryRegistry())
        with pytest.raises(ServiceNotFoundError):
            selector.select("greeter")

    @staticmethod
    def test_service_without_nodes():
        """A service with an empty node list has none available."""

        class EmptyRegistry(MemoryRegistry):
            """Registry that reports every service with no nodes."""

            def get_service(self, name):
                return Service(name=name)

        selector = RandomSelector(EmptyRegistry())
        with pytest.raises(NoneAvailableError) as exc:
            selector.select("greeter")
        assert exc.value.service == "greeter"
