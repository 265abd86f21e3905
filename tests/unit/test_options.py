"""Unit tests for microboot.options."""

from microboot import config, options
from microboot.adapters import new_broker, new_registry, new_selector, new_transport

# pylint: disable=magic-value-comparison


def fake_factory(*args, **kwargs):
    """Factory placeholder; never called by these tests."""
    return (args, kwargs)


def other_factory(*args, **kwargs):
    """Second placeholder to check overwrite semantics."""
    return (args, kwargs)


class TestNewOptions:
    """Tests for new_options."""

    @staticmethod
    def test_seeds_builtin_factories():
        """Each table starts with exactly one built-in entry."""
        opts = options.new_options()
        assert opts.brokers == {"http": new_broker}
        assert opts.registries == {"consul": new_registry}
        assert opts.selectors == {"random": new_selector}
        assert opts.transports == {"http": new_transport}

    @staticmethod
    def test_fallback_description():
        """An empty description is replaced with the fixed fallback."""
        opts = options.new_options()
        assert opts.description == config.DEFAULT_DESCRIPTION

    @staticmethod
    def test_explicit_description_kept():
        """A given description is not replaced."""
        opts = options.new_options(options.description("greets people"))
        assert opts.description == "greets people"

    @staticmethod
    def test_identity_options():
        """name and version set the identity fields."""
        opts = options.new_options(options.name("greeter"), options.version("1.2.0"))
        assert opts.name == "greeter"
        assert opts.version == "1.2.0"

    @staticmethod
    def test_options_applied_in_order():
        """Later options win over earlier ones."""
        opts = options.new_options(options.name("first"), options.name("second"))
        assert opts.name == "second"

    @staticmethod
    def test_registration_merges_into_table():
        """Registering a new kind keeps the built-in entry."""
        opts = options.new_options(options.broker("nats", fake_factory))
        assert opts.brokers == {"http": new_broker, "nats": fake_factory}

    @staticmethod
    def test_registration_overwrites_same_key():
        """A later registration for the same key replaces the earlier one."""
        opts = options.new_options(
            options.registry("etcd", fake_factory),
            options.registry("etcd", other_factory),
        )
        assert opts.registries["etcd"] is other_factory

    @staticmethod
    def test_builtin_key_can_be_overridden():
        """A built-in kind can be replaced by registering the same key."""
        opts = options.new_options(options.transport("http", fake_factory))
        assert opts.transports == {"http": fake_factory}

    @staticmethod
    def test_table_replacement():
        """The plural options replace the whole table."""
        opts = options.new_options(
            options.selectors({"roundrobin": fake_factory}),
            options.brokers({}),
        )
        assert opts.selectors == {"roundrobin": fake_factory}
        assert not opts.brokers

    @staticmethod
    def test_tables_are_not_shared():
        """Registering on one Options value never leaks into another."""
        first = options.new_options(options.broker("nats", fake_factory))
        second = options.new_options()
        assert "nats" in first.brokers
        assert "nats" not in second.brokers
        assert "nats" not in options.DEFAULT_BROKERS

    @staticmethod
    def test_action_and_strict_kinds():
        """Behaviour options set the action and strict flag."""
        calls = []
        opts = options.new_options(
            options.action(calls.append), options.strict_kinds()
        )
        opts.action("components")
        assert calls == ["components"]
        assert opts.strict_kinds is True

    @staticmethod
    def test_default_action_is_noop():
        """The default action accepts the components and does nothing."""
        opts = options.new_options()
        assert opts.action(object()) is None
        assert opts.strict_kinds is False


class TestApply:
    """Tests for apply."""

    @staticmethod
    def test_apply_mutates_in_place():
        """apply changes and returns the same Options value."""
        opts = options.new_options()
        result = options.apply(opts, options.name("later"))
        assert result is opts
        assert opts.name == "later"

    @staticmethod
    def test_apply_keeps_description_fallback():
        """apply does not reset the description chosen at construction."""
        opts = options.new_options()
        options.apply(opts, options.version("2.0.0"))
        assert opts.description == config.DEFAULT_DESCRIPTION
