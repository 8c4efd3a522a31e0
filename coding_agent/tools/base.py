"""Base types and definitions for tools."""

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Protocol

from pydantic import BaseModel, ValidationError

from coding_agent.errors import ToolInputError
from coding_agent.models.llm import LLMToolDefinition


class ToolResult(BaseModel):
    """Outcome of one tool execution.

    Exactly one side is authoritative: ``content`` on success, ``error`` on an
    expected failure. Whatever ``content`` exists is always forwarded.
    """

    content: str = ""
    error: str | None = None

    @classmethod
    def success(cls, content: str) -> "ToolResult":
        return cls(content=content)

    @classmethod
    def failure(cls, error: str) -> "ToolResult":
        return cls(error=error)

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def to_json(self) -> str:
        """Compact JSON form sent back to the model."""
        return self.model_dump_json(exclude_none=True)


class ToolHandler(Protocol):
    """Interface every registered tool handler satisfies."""

    async def execute(self, input: Any) -> ToolResult:
        """Run the tool.

        Args:
            input: Raw tool input as sent by the model

        Returns:
            Tool result; expected failures are reported through ``error``

        Raises:
            ToolInputError: If the input does not match the tool's arguments
        """
        ...


class BaseTool(ABC):
    """Common plumbing for tools with a pydantic argument model."""

    name: ClassVar[str]
    description: ClassVar[str]
    input_model: ClassVar[type[BaseModel]]

    @classmethod
    def schema(cls) -> LLMToolDefinition:
        """Get the tool definition published to the model."""
        input_schema = cls.input_model.model_json_schema()
        input_schema.pop("title", None)
        return LLMToolDefinition(name=cls.name, description=cls.description, input_schema=input_schema)

    def parse_input(self, raw_input: Any) -> BaseModel:
        """Parse and validate tool input."""
        try:
            return self.input_model.model_validate(raw_input)
        except ValidationError as e:
            raise ToolInputError(self.name, str(e)) from e

    async def execute(self, input: Any) -> ToolResult:
        args = self.parse_input(input)
        return await self.run(args)

    @abstractmethod
    async def run(self, args: Any) -> ToolResult:
        """Run the tool with validated arguments."""
