"""
Abstraction Registry Tests

Validates category registration: whole-category replacement, snapshot
isolation from later edits, and the separate lint step.
"""

import threading

import pytest

from abstraction import AbstractionRegistry, CategoryConfig, lint_abstraction


def _identity(client_input, context):
    return dict(client_input)


def _config(operations=("verifyTransaction",), vendors=("paystack",)):
    return {
        "client": {
            op: {"schema": {"reference": {"type": "string", "required": True}}}
            for op in operations
        },
        "vendors": {
            name: {
                "adapter": name,
                "mappings": {
                    op: {"tool": f"{op}-tool", "transform": _identity}
                    for op in operations
                },
            }
            for name in vendors
        },
    }


class TestRegistration:
    """Test registering and replacing categories."""

    def test_register_plain_mapping(self):
        registry = AbstractionRegistry()
        registry.register("payment", _config())

        abstraction = registry.get("payment")
        assert abstraction.category == "payment"
        assert isinstance(abstraction.config, CategoryConfig)
        assert list(abstraction.client) == ["verifyTransaction"]
        assert abstraction.client["verifyTransaction"].fields["reference"].required is True
        assert abstraction.vendors["paystack"].mappings["verifyTransaction"].transform is _identity

    def test_replacement_is_whole_category(self):
        registry = AbstractionRegistry()
        registry.register("payment", _config(operations=("a", "b"), vendors=("x", "y")))
        registry.register("payment", _config(operations=("c",), vendors=("z",)))

        abstraction = registry.get("payment")
        assert list(abstraction.client) == ["c"]
        assert list(abstraction.vendors) == ["z"]
        assert registry.categories() == ["payment"]

    def test_categories_in_registration_order(self):
        registry = AbstractionRegistry()
        for name in ["payment", "banking", "infrastructure"]:
            registry.register(name, _config())

        assert registry.categories() == ["payment", "banking", "infrastructure"]
        assert len(registry) == 3
        assert "banking" in registry
        assert registry.get("unknown") is None

    def test_later_edits_to_source_config_do_not_leak(self):
        source = _config()
        registry = AbstractionRegistry()
        registry.register("payment", source)

        source["client"]["injected"] = {"schema": {}}
        source["vendors"].clear()

        abstraction = registry.get("payment")
        assert list(abstraction.client) == ["verifyTransaction"]
        assert list(abstraction.vendors) == ["paystack"]

    def test_snapshot_is_read_only_and_stable(self):
        registry = AbstractionRegistry()
        registry.register("payment", _config())
        before = registry.snapshot()

        with pytest.raises(TypeError):
            before["banking"] = None

        registry.register("banking", _config())
        assert list(before) == ["payment"]
        assert list(registry.snapshot()) == ["payment", "banking"]

    def test_concurrent_registration_keeps_every_category(self):
        registry = AbstractionRegistry()
        names = [f"category-{i}" for i in range(20)]
        threads = [threading.Thread(target=registry.register, args=(name, _config())) for name in names]

        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert sorted(registry.categories()) == sorted(names)


class TestLint:
    """Test the config lint step."""

    def test_clean_config(self):
        assert lint_abstraction(_config()) == []

    def test_reports_unknown_mapped_operation(self):
        config = _config()
        config["vendors"]["paystack"]["mappings"]["refund"] = {"tool": "refund", "transform": _identity}

        problems = lint_abstraction(config)
        assert "Vendor paystack maps unknown operation: refund" in problems

    def test_reports_vendor_without_client_operations(self):
        config = _config()
        config["vendors"]["ghost"] = {"adapter": "ghost", "mappings": {}}

        assert "Vendor ghost implements none of the client operations" in lint_abstraction(config)

    def test_reports_unknown_migration_target(self):
        config = _config()
        config["vendors"]["paystack"]["deprecated"] = True
        config["vendors"]["paystack"]["migrate_to"] = "nowhere"

        assert "Vendor paystack migrates to unregistered vendor: nowhere" in lint_abstraction(config)

    def test_registration_accepts_config_lint_rejects(self):
        config = _config()
        config["vendors"]["paystack"]["mappings"]["refund"] = {"tool": "refund", "transform": _identity}

        registry = AbstractionRegistry()
        registry.register("payment", config)
        assert registry.get("payment") is not None
