"""Tools registry for managing the agent's tools."""

from typing import Any

from coding_agent.errors import ToolNotFoundError
from coding_agent.models.llm import LLMToolDefinition
from coding_agent.tools.base import ToolHandler, ToolResult
from coding_agent.tools.edit_file import EditFileTool
from coding_agent.tools.list_files import ListFilesTool
from coding_agent.tools.read_file import ReadFileTool
from coding_agent.tools.search_in_directory import SearchInDirectoryTool
from coding_agent.tools.write_file import WriteFileTool
from coding_agent.utils.logging import get_logger

logger = get_logger(__name__)


class ToolsRegistry:
    """Registry mapping tool names to handlers.

    Populate it before starting any agent run; after that it is only read, so
    one instance can serve several concurrent runs.
    """

    def __init__(self):
        self._handlers: dict[str, ToolHandler] = {}
        self._schemas: list[LLMToolDefinition] = []

    def register(self, schema: LLMToolDefinition, handler: ToolHandler) -> None:
        """Register a tool.

        A name that is already registered is replaced by the newer
        registration, which moves to the end of the published schema list.
        """
        if schema.name in self._handlers:
            logger.warning(f"Replacing already registered tool: {schema.name}")
            self._schemas = [existing for existing in self._schemas if existing.name != schema.name]

        self._schemas.append(schema)
        self._handlers[schema.name] = handler

    def get_schemas(self) -> list[LLMToolDefinition]:
        """Get the schemas of all registered tools in registration order."""
        return [schema.model_copy(deep=True) for schema in self._schemas]

    async def execute(self, name: str, input: Any) -> ToolResult:
        """Run a registered tool.

        Args:
            name: Tool name requested by the model
            input: Raw tool input

        Returns:
            The handler's result, unchanged

        Raises:
            ToolNotFoundError: If no tool with that name is registered
        """
        handler = self._handlers.get(name)
        if handler is None:
            raise ToolNotFoundError(name)

        return await handler.execute(input)

    def get_tool_names(self) -> list[str]:
        """Get list of all registered tool names."""
        return [schema.name for schema in self._schemas]

    def has_tool(self, name: str) -> bool:
        """Check if a tool is registered."""
        return name in self._handlers


def create_default_registry() -> ToolsRegistry:
    """Create a registry holding the built-in filesystem tools."""
    registry = ToolsRegistry()
    for tool in [ReadFileTool(), ListFilesTool(), SearchInDirectoryTool(), WriteFileTool(), EditFileTool()]:
        registry.register(tool.schema(), tool)

    logger.info(f"Registered tools: {', '.join(registry.get_tool_names())}")
    return registry
