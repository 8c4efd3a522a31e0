"""LLM-related data models and types (provider-agnostic)."""

from dataclasses import dataclass, field
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Discriminator, Tag, model_serializer


# Content block types
class TextBlock(BaseModel):
    """Text content block."""

    type: Literal["text"] = "text"
    text: str

    class Config:
        extra = "ignore"  # Ignore any additional fields from Anthropic


class ToolUseBlock(BaseModel):
    """Tool use content block."""

    type: Literal["tool_use"] = "tool_use"
    id: str
    name: str
    input: Any

    class Config:
        extra = "ignore"  # Ignore any additional fields from Anthropic


class ToolResultBlock(BaseModel):
    """Tool result content block."""

    type: Literal["tool_result"] = "tool_result"
    tool_use_id: str
    content: str
    is_error: bool | None = None

    class Config:
        extra = "ignore"  # Ignore any additional fields from Anthropic

    @model_serializer(mode="wrap")
    def _omit_unset_error(self, handler):
        data = handler(self)
        if data.get("is_error") is None:
            data.pop("is_error", None)
        return data


class UnknownBlock(BaseModel):
    """Content block of a type this client does not understand.

    All raw fields are kept so the block is sent back to the API unchanged.
    """

    type: str

    class Config:
        extra = "allow"

    @property
    def raw(self) -> dict[str, Any]:
        """Return the block exactly as it was received."""
        return self.model_dump()


KNOWN_BLOCK_TYPES = frozenset({"text", "tool_use", "tool_result"})


def _block_tag(value: Any) -> str:
    block_type = value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
    if isinstance(value, UnknownBlock) or block_type not in KNOWN_BLOCK_TYPES:
        return "unknown"
    return block_type


ContentBlock = Annotated[
    Annotated[TextBlock, Tag("text")]
    | Annotated[ToolUseBlock, Tag("tool_use")]
    | Annotated[ToolResultBlock, Tag("tool_result")]
    | Annotated[UnknownBlock, Tag("unknown")],
    Discriminator(_block_tag),
]

# Blocks are tried before plain text when decoding message content
MessageContent = list[ContentBlock] | str


class LLMMessage(BaseModel):
    """A message for LLM conversation."""

    role: Literal["user", "assistant"]
    content: MessageContent

    @classmethod
    def user_text(cls, text: str) -> "LLMMessage":
        """Create a plain-text user message."""
        return cls(role="user", content=text)

    @classmethod
    def assistant_text(cls, text: str) -> "LLMMessage":
        """Create a plain-text assistant message."""
        return cls(role="assistant", content=text)

    @property
    def blocks(self) -> list[ContentBlock]:
        """Content as blocks, empty for plain-text messages."""
        return self.content if isinstance(self.content, list) else []


class LLMToolDefinition(BaseModel):
    """Tool definition published to the LLM."""

    name: str
    description: str
    input_schema: dict[str, Any]

    class Config:
        frozen = True


class LLMUsage(BaseModel):
    """Token usage information from LLM provider."""

    input_tokens: int = 0
    output_tokens: int = 0

    class Config:
        extra = "ignore"

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    def add(self, other: "LLMUsage") -> None:
        """Accumulate another response's usage into this one."""
        self.input_tokens += other.input_tokens
        self.output_tokens += other.output_tokens


class LLMResponse(BaseModel):
    """Structured response from a single Messages API call."""

    id: str
    content: list[ContentBlock]
    stop_reason: str | None = None
    usage: LLMUsage

    class Config:
        extra = "ignore"  # model, role, type, stop_sequence, ...

    @property
    def tool_use_blocks(self) -> list[ToolUseBlock]:
        """Tool use blocks in the order the model emitted them."""
        return [block for block in self.content if isinstance(block, ToolUseBlock)]

    @property
    def text(self) -> str:
        """Concatenated text of all text blocks."""
        return "\n".join(block.text for block in self.content if isinstance(block, TextBlock))


@dataclass
class ConversationResult:
    """Result from executing an agent loop."""

    response: LLMResponse
    conversation: list[LLMMessage]
    iterations: int
    usage: LLMUsage = field(default_factory=LLMUsage)
