"""Tests for the tools registry."""

from unittest.mock import AsyncMock

import pytest

from coding_agent.errors import ToolNotFoundError
from coding_agent.models.llm import LLMToolDefinition
from coding_agent.tools.base import ToolResult
from coding_agent.tools.registry import ToolsRegistry, create_default_registry


def make_schema(name: str, description: str = "A tool") -> LLMToolDefinition:
    return LLMToolDefinition(name=name, description=description, input_schema={"type": "object", "properties": {}})


def make_handler(result: ToolResult) -> AsyncMock:
    handler = AsyncMock()
    handler.execute.return_value = result
    return handler


class TestRegistration:
    """Tests for registering tools and publishing schemas."""

    def test_get_schemas_in_registration_order(self):
        """Test that schemas come back in the order they were registered."""
        registry = ToolsRegistry()
        names = ["readFile", "listFiles", "searchInDirectory", "writeFile"]
        for name in names:
            registry.register(make_schema(name), make_handler(ToolResult.success(name)))

        assert [schema.name for schema in registry.get_schemas()] == names
        assert registry.get_tool_names() == names

    def test_get_schemas_returns_defensive_copy(self):
        """Test that mutating the returned list does not affect the registry."""
        registry = ToolsRegistry()
        registry.register(make_schema("readFile"), make_handler(ToolResult.success("")))

        schemas = registry.get_schemas()
        schemas.clear()
        schemas_again = registry.get_schemas()
        schemas_again[0].input_schema["properties"]["injected"] = {"type": "string"}

        assert len(registry.get_schemas()) == 1
        assert "injected" not in registry.get_schemas()[0].input_schema["properties"]

    @pytest.mark.asyncio
    async def test_duplicate_name_last_registration_wins(self):
        """Test that re-registering a name replaces the handler and keeps one schema."""
        registry = ToolsRegistry()
        first = make_handler(ToolResult.success("first"))
        second = make_handler(ToolResult.success("second"))

        registry.register(make_schema("readFile", "old"), first)
        registry.register(make_schema("listFiles"), make_handler(ToolResult.success("")))
        registry.register(make_schema("readFile", "new"), second)

        result = await registry.execute("readFile", {})

        assert result.content == "second"
        first.execute.assert_not_called()
        schemas = registry.get_schemas()
        assert [schema.name for schema in schemas] == ["listFiles", "readFile"]
        assert schemas[1].description == "new"

    def test_has_tool(self):
        """Test checking for registered tools."""
        registry = ToolsRegistry()
        registry.register(make_schema("readFile"), make_handler(ToolResult.success("")))
        assert registry.has_tool("readFile")
        assert not registry.has_tool("missing")


class TestExecution:
    """Tests for dispatching to handlers."""

    @pytest.mark.asyncio
    async def test_execute_missing_tool_raises(self):
        """Test that an unregistered name fails with ToolNotFoundError."""
        registry = ToolsRegistry()
        registry.register(make_schema("readFile"), make_handler(ToolResult.success("")))

        with pytest.raises(ToolNotFoundError, match="Tool not found: missing") as exc_info:
            await registry.execute("missing", {"path": "."})
        assert exc_info.value.name == "missing"

    @pytest.mark.asyncio
    async def test_execute_on_empty_registry_raises(self):
        """Test not-found on a registry with no tools at all."""
        with pytest.raises(ToolNotFoundError):
            await ToolsRegistry().execute("missing", None)

    @pytest.mark.asyncio
    async def test_execute_delegates_to_handler(self):
        """Test that input is forwarded and the result returned unchanged."""
        registry = ToolsRegistry()
        expected = ToolResult.success("file contents")
        handler = make_handler(expected)
        registry.register(make_schema("readFile"), handler)

        result = await registry.execute("readFile", {"path": "README.md"})

        assert result is expected
        handler.execute.assert_awaited_once_with({"path": "README.md"})

    @pytest.mark.asyncio
    async def test_handler_error_result_is_returned_not_raised(self):
        """Test that tool-level errors come back as data."""
        registry = ToolsRegistry()
        registry.register(make_schema("readFile"), make_handler(ToolResult.failure("File not found: x")))

        result = await registry.execute("readFile", {"path": "x"})

        assert result.error == "File not found: x"


class TestDefaultRegistry:
    """Tests for the built-in tool set."""

    def test_default_tools_registered(self):
        """Test that all filesystem tools are available."""
        registry = create_default_registry()
        assert registry.get_tool_names() == ["readFile", "listFiles", "searchInDirectory", "writeFile", "editFile"]

    def test_default_schemas_are_object_schemas(self):
        """Test that published input schemas describe their required arguments."""
        schemas = {schema.name: schema for schema in create_default_registry().get_schemas()}

        assert schemas["readFile"].input_schema["type"] == "object"
        assert schemas["readFile"].input_schema["required"] == ["path"]
        assert schemas["listFiles"].input_schema["required"] == ["path"]
        assert "recursive" in schemas["listFiles"].input_schema["properties"]
        assert sorted(schemas["writeFile"].input_schema["required"]) == ["content", "path"]
        assert sorted(schemas["editFile"].input_schema["required"]) == ["new_content", "path"]
        assert "title" not in schemas["readFile"].input_schema
