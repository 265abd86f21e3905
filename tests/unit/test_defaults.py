"""Unit tests for microboot.defaults."""

import pytest

from microboot.defaults import DEFAULTS, KINDS, ProcessDefaults, get_default


class TestProcessDefaults:
    """Tests for ProcessDefaults."""

    @staticmethod
    def test_starts_empty():
        """Every slot is None before anything is published."""
        defaults = ProcessDefaults()
        assert defaults.snapshot() == dict.fromkeys(KINDS)

    @staticmethod
    def test_publish_overwrites():
        """Publishing replaces the previous instance of the kind."""
        defaults = ProcessDefaults()
        first, second = object(), object()
        defaults.publish("broker", first)
        defaults.publish("broker", second)
        assert defaults.broker is second
        assert defaults.get("broker") is second

    @staticmethod
    def test_publish_touches_only_its_slot():
        """Other slots are unchanged by a publish."""
        defaults = ProcessDefaults()
        registry = object()
        defaults.publish("registry", registry)
        snapshot = defaults.snapshot()
        assert snapshot.pop("registry") is registry
        assert all(value is None for value in snapshot.values())

    @staticmethod
    def test_unknown_kind_rejected():
        """Only the six component kinds have slots."""
        defaults = ProcessDefaults()
        with pytest.raises(KeyError):
            defaults.publish("cache", object())
        with pytest.raises(KeyError):
            defaults.get("cache")

    @staticmethod
    def test_snapshot_is_a_copy():
        """Mutating a snapshot does not change the slots."""
        defaults = ProcessDefaults()
        snapshot = defaults.snapshot()
        snapshot["server"] = object()
        assert defaults.server is None

    @staticmethod
    def test_reset_clears_all():
        """reset returns every slot to None."""
        defaults = ProcessDefaults()
        for kind in KINDS:
            defaults.publish(kind, object())
        defaults.reset()
        assert defaults.snapshot() == dict.fromkeys(KINDS)


def test_get_default_reads_process_singleton():
    """get_default reads the module-level DEFAULTS."""
    transport = object()
    DEFAULTS.publish("transport", transport)
    assert get_default("transport") is transport
