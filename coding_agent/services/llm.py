"""LLM service for high-level AI operations like agent loops."""

from dataclasses import dataclass
from typing import Protocol

from coding_agent.errors import MaxIterationsExceededError, ToolNotFoundError
from coding_agent.models.llm import (
    ContentBlock,
    ConversationResult,
    LLMMessage,
    LLMResponse,
    LLMToolDefinition,
    LLMUsage,
    ToolResultBlock,
    ToolUseBlock,
)
from coding_agent.prompts import SYSTEM_PROMPT
from coding_agent.tools.base import ToolResult
from coding_agent.tools.registry import ToolsRegistry
from coding_agent.utils.logging import get_logger

logger = get_logger(__name__)

TOOL_USE_STOP_REASON = "tool_use"


class ModelClient(Protocol):
    """Interface for clients that send a conversation to the model."""

    async def create_message(
        self,
        messages: list[LLMMessage],
        tools: list[LLMToolDefinition] | None = None,
        *,
        model: str | None = None,
        max_tokens: int | None = None,
        system: str | None = None,
    ) -> LLMResponse:
        """Send the conversation and return the model's response."""
        ...


@dataclass
class AgentConfig:
    """Configuration for the agent loop."""

    max_iterations: int = 10
    # Feed unknown tool names back to the model instead of aborting the run
    report_unknown_tools: bool = False
    system_prompt: str | None = SYSTEM_PROMPT


class LLMService:
    """High-level LLM service driving the tool-use agent loop."""

    def __init__(self, client: ModelClient, config: AgentConfig | None = None):
        """Initialize LLM service.

        Args:
            client: Model client used for every iteration
            config: Agent loop configuration
        """
        self.client = client
        self.config = config or AgentConfig()

    async def execute_with_tools(
        self,
        user_message: str,
        tools_registry: ToolsRegistry,
        *,
        max_iterations: int | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> ConversationResult:
        """Run the agent loop until the model gives a final answer.

        Args:
            user_message: Prompt that seeds the conversation
            tools_registry: Tools the model may call
            max_iterations: Maximum number of model calls (defaults to config)
            model: Model identifier passed to the client
            max_tokens: Output token budget passed to the client

        Returns:
            Final response, full conversation, iterations used and total usage

        Raises:
            MaxIterationsExceededError: If the budget runs out before a final answer
            ModelTransportError: If a model call fails
            ModelDecodeError: If a model response cannot be parsed
            ToolNotFoundError: If the model calls an unknown tool and unknown tools are not reported
            ToolInputError: If a tool receives input it cannot decode
        """
        max_iterations = max_iterations if max_iterations is not None else self.config.max_iterations
        conversation = [LLMMessage.user_text(user_message)]
        usage = LLMUsage()

        logger.info(
            f"Starting agent loop with {len(tools_registry.get_tool_names())} tools, max_iterations: {max_iterations}"
        )

        for iteration in range(max_iterations):
            logger.info(f"Iteration {iteration + 1}/{max_iterations}")

            response = await self.client.create_message(
                list(conversation),
                tools_registry.get_schemas(),
                model=model,
                max_tokens=max_tokens,
                system=self.config.system_prompt,
            )
            usage.add(response.usage)

            conversation.append(LLMMessage(role="assistant", content=list(response.content)))

            if response.stop_reason != TOOL_USE_STOP_REASON:
                logger.info(f"Conversation completed in {iteration + 1} iterations")
                return ConversationResult(
                    response=response,
                    conversation=conversation,
                    iterations=iteration + 1,
                    usage=usage,
                )

            logger.info("Executing tools...")
            tool_results = await self.execute_tools(response.content, tools_registry)
            conversation.append(LLMMessage(role="user", content=tool_results))

        logger.warning(f"Agent loop reached max iterations ({max_iterations})")
        raise MaxIterationsExceededError(max_iterations)

    async def execute_tools(self, content: list[ContentBlock], tools_registry: ToolsRegistry) -> list[ContentBlock]:
        """Run every tool use block in order and build the matching result blocks."""
        results: list[ContentBlock] = []

        for block in content:
            if not isinstance(block, ToolUseBlock):
                continue

            logger.info(f"Executing tool: {block.name}")
            logger.debug(f"Tool input: {block.input}")
            result = await self._dispatch(block, tools_registry)

            results.append(
                ToolResultBlock(
                    tool_use_id=block.id,
                    content=result.to_json(),
                    is_error=True if result.is_error else None,
                )
            )

            if result.is_error:
                logger.warning(f"Tool '{block.name}' reported an error: {result.error}")
            else:
                logger.info(f"Tool '{block.name}' executed successfully")

        return results

    async def _dispatch(self, block: ToolUseBlock, tools_registry: ToolsRegistry) -> ToolResult:
        try:
            return await tools_registry.execute(block.name, block.input)
        except ToolNotFoundError as e:
            if not self.config.report_unknown_tools:
                raise
            logger.error(f"Unknown tool requested: {block.name}")
            return ToolResult.failure(str(e))
