"""Tests for mcp_dispatch.registry module."""

import pytest

from mcp_dispatch.errors import RegistryError
from mcp_dispatch.registry import ToolRegistry
from mcp_dispatch.tools import CalculatorTool, GreetingTool, TransformTextTool


class TestToolRegistry:
    def test_create(self):
        registry = ToolRegistry()
        assert len(registry) == 0
        assert registry.list() == []

    def test_register(self):
        registry = ToolRegistry()
        descriptor = registry.register(GreetingTool())
        assert "greeting" in registry
        assert descriptor.name == "greeting"

    def test_create_with_tools(self):
        registry = ToolRegistry([GreetingTool(), CalculatorTool()])
        assert registry.names() == ["greeting", "calculator"]

    def test_list_preserves_registration_order(self):
        registry = ToolRegistry()
        registry.register(TransformTextTool())
        registry.register(CalculatorTool())
        registry.register(GreetingTool())
        assert [d.name for d in registry.list()] == [
            "transform_text", "calculator", "greeting",
        ]

    def test_list_is_repeatable(self):
        registry = ToolRegistry([GreetingTool(), CalculatorTool()])
        assert registry.list() == registry.list()

    def test_duplicate_name_rejected(self):
        registry = ToolRegistry()
        registry.register(GreetingTool())
        with pytest.raises(RegistryError):
            registry.register(GreetingTool())

    def test_frozen_registry_rejects_registration(self):
        registry = ToolRegistry()
        registry.freeze()
        assert registry.frozen is True
        with pytest.raises(RegistryError):
            registry.register(GreetingTool())

    def test_get(self):
        registry = ToolRegistry()
        tool = GreetingTool()
        registry.register(tool)
        assert registry.get("greeting") is tool

    def test_get_nonexistent(self):
        assert ToolRegistry().get("nonexistent") is None

    def test_lookup(self):
        registry = ToolRegistry([CalculatorTool()])
        descriptor = registry.lookup("calculator")
        assert descriptor.name == "calculator"
        assert descriptor.input_schema["type"] == "object"

    def test_lookup_nonexistent(self):
        assert ToolRegistry().lookup("nonexistent") is None

    def test_description_override(self):
        registry = ToolRegistry()
        registry.register(GreetingTool(), description="Say hello")
        assert registry.lookup("greeting").description == "Say hello"
