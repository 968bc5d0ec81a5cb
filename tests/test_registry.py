# Area: Core Tests
"""Tests for ModuleRegistry."""

import pytest

from party_core._core.registry import ModuleRegistry, validate_module
from party_core.errors import DuplicateModuleError, ModuleNotRegisteredError
from party_core.module import GameModule


class StubModule(GameModule):
    """Minimal module for registry tests."""

    def __init__(self, module_id):
        self.id = module_id

    def init(self, ctx):
        return None

    def register_screens(self):
        return {}

    def get_phase_controllers(self):
        return {}


class TestRegister:
    """Tests for register()/has()/get()."""

    def test_duplicate_register_raises(self):
        """register(moduleA) twice raises; a different id succeeds."""
        registry = ModuleRegistry()
        registry.register(StubModule("moduleA"))

        with pytest.raises(DuplicateModuleError) as exc_info:
            registry.register(StubModule("moduleA"))
        assert "Module with id moduleA already registered" in str(exc_info.value)

        registry.register(StubModule("moduleB"))
        assert registry.has("moduleB") is True

    def test_duplicate_keeps_first_module(self):
        registry = ModuleRegistry()
        first = StubModule("a")
        registry.register(first)
        with pytest.raises(DuplicateModuleError):
            registry.register(StubModule("a"))
        assert registry.get("a") is first

    def test_get_unknown_returns_none(self):
        assert ModuleRegistry().get("missing") is None

    def test_require_unknown_raises(self):
        with pytest.raises(ModuleNotRegisteredError):
            ModuleRegistry().require("missing")

    def test_constructor_registers_modules(self):
        registry = ModuleRegistry([StubModule("a"), StubModule("b")])
        assert len(registry) == 2
        assert "a" in registry
        assert [m.id for m in registry.list_modules()] == ["a", "b"]

    def test_iteration_in_registration_order(self):
        registry = ModuleRegistry([StubModule("z"), StubModule("a")])
        assert [m.id for m in registry] == ["z", "a"]

    def test_unregister(self):
        registry = ModuleRegistry([StubModule("a")])
        registry.unregister("a")
        registry.unregister("never-there")
        assert registry.has("a") is False
        registry.register(StubModule("a"))
        assert registry.has("a") is True

    def test_registries_are_independent(self):
        """There is no process-wide module table."""
        first = ModuleRegistry([StubModule("a")])
        second = ModuleRegistry()
        assert first.has("a") is True
        assert second.has("a") is False


class TestValidateModule:
    """Tests for the module contract check."""

    def test_duck_typed_module_accepted(self):
        class Duck:
            id = "duck"

            def init(self, ctx):
                pass

            def register_screens(self):
                return {}

            def get_phase_controllers(self):
                return {}

        validate_module(Duck())
        assert ModuleRegistry([Duck()]).has("duck")

    def test_missing_members_listed(self):
        class Broken:
            id = ""

        with pytest.raises(TypeError) as exc_info:
            validate_module(Broken())
        message = str(exc_info.value)
        assert "id must be a non-empty string" in message
        assert "init() is missing" in message
        assert "get_phase_controllers() is missing" in message

    def test_register_rejects_invalid_module(self):
        registry = ModuleRegistry()
        with pytest.raises(TypeError):
            registry.register(object())
        assert len(registry) == 0
