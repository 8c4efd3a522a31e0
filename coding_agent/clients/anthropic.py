"""Anthropic API client with rate limiting and error handling."""

import asyncio
import os
import time
from dataclasses import dataclass
from typing import Any

import tiktoken
from anthropic import APIConnectionError, APIStatusError, AsyncAnthropic
from limits import parse
from limits.storage import MemoryStorage
from limits.strategies import MovingWindowRateLimiter
from pydantic import ValidationError

from coding_agent.errors import ConfigError, ModelDecodeError, ModelTransportError
from coding_agent.models.llm import LLMMessage, LLMResponse, LLMToolDefinition
from coding_agent.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-5"
DEFAULT_MAX_TOKENS = 1024
MIN_RATE_LIMIT_WAIT = 0.1


@dataclass
class AnthropicConfig:
    """Configuration for Anthropic API client."""

    model: str = DEFAULT_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS
    # Retries are left to the caller
    max_retries: int = 0

    requests_per_minute: int = 50
    tokens_per_minute: int = 40_000

    # Close approximation for Claude; None disables the tokenizer
    tokenizer_model: str | None = "gpt-4"


class AnthropicRateLimiter:
    """Client-side rate limiter using the limits library."""

    def __init__(self, requests_per_minute: int = 50, tokens_per_minute: int = 40_000):
        """Initialize rate limiter.

        Args:
            requests_per_minute: Maximum requests per minute
            tokens_per_minute: Maximum tokens per minute
        """
        self.storage = MemoryStorage()
        self.limiter = MovingWindowRateLimiter(self.storage)

        self.request_limit = parse(f"{requests_per_minute}/minute")
        self.token_limit = parse(f"{tokens_per_minute}/minute")

    async def check_rate_limit(self, estimated_tokens: int, identifier: str = "anthropic") -> None:
        """Wait until the request fits within the rate limits."""
        logger.debug(f"Checking rate limit for {estimated_tokens} tokens, identifier: {identifier}")

        # A request only proceeds once its hit is recorded in the window
        while not self.limiter.hit(self.request_limit, identifier):
            await self._wait_for_reset(self.request_limit, identifier, "Request")

        token_identifier = f"{identifier}_tokens"
        cost = max(1, min(estimated_tokens, self.token_limit.amount))
        while not self.limiter.hit(self.token_limit, token_identifier, cost=cost):
            await self._wait_for_reset(self.token_limit, token_identifier, "Token")

    async def _wait_for_reset(self, limit, identifier: str, kind: str) -> None:
        window_stats = self.limiter.get_window_stats(limit, identifier)
        wait_time = max(MIN_RATE_LIMIT_WAIT, window_stats.reset_time - time.time())
        logger.warning(f"{kind} rate limit exceeded, waiting {wait_time:.2f}s")
        await asyncio.sleep(wait_time)


class AnthropicClient:
    """Low-level Anthropic Messages API client."""

    tokenizer: tiktoken.Encoding | None = None
    client: AsyncAnthropic
    config: AnthropicConfig
    rate_limiter: AnthropicRateLimiter

    def __init__(self, api_key: str | None = None, config: AnthropicConfig | None = None):
        """Initialize Anthropic client.

        Args:
            api_key: Anthropic API key (defaults to ANTHROPIC_API_KEY env var)
            config: Client configuration
        """
        anthropic_api_key = api_key or os.getenv("ANTHROPIC_API_KEY")
        if not anthropic_api_key:
            raise ConfigError("ANTHROPIC_API_KEY is required. Set via environment variable or --api-key flag.")

        self.config = config or AnthropicConfig()
        self.client = AsyncAnthropic(api_key=anthropic_api_key, max_retries=self.config.max_retries)
        self.rate_limiter = AnthropicRateLimiter(self.config.requests_per_minute, self.config.tokens_per_minute)

        if self.config.tokenizer_model:
            try:
                self.tokenizer = tiktoken.encoding_for_model(self.config.tokenizer_model)
            except Exception:
                logger.debug("Tokenizer unavailable, estimating tokens from character count")
                self.tokenizer = None

    async def create_message(
        self,
        messages: list[LLMMessage],
        tools: list[LLMToolDefinition] | None = None,
        *,
        model: str | None = None,
        max_tokens: int | None = None,
        system: str | None = None,
    ) -> LLMResponse:
        """Create a message with the Claude API.

        Args:
            messages: Full ordered conversation
            tools: Tool definitions to offer the model, omitted when None
            model: Model identifier (defaults to config)
            max_tokens: Output token budget (defaults to config)
            system: System prompt, omitted when None

        Returns:
            Parsed API response

        Raises:
            ModelTransportError: If the API is unreachable or returns a non-success status
            ModelDecodeError: If a successful response body cannot be parsed
        """
        request_params = self.build_request(messages, tools, model=model, max_tokens=max_tokens, system=system)

        estimated_tokens = self._estimate_tokens(messages, system or "")
        logger.debug(f"Estimated tokens: {estimated_tokens}")
        await self.rate_limiter.check_rate_limit(estimated_tokens)

        logger.debug(
            f"Making Anthropic API call with model: {request_params['model']}, "
            f"{len(messages)} messages, {len(tools) if tools else 0} tools"
        )

        try:
            raw_response = await self.client.messages.with_raw_response.create(**request_params)
        except APIStatusError as e:
            raise ModelTransportError(e.status_code, e.response.text) from e
        except APIConnectionError as e:
            raise ModelTransportError(None, str(e)) from e

        body = raw_response.http_response.text
        logger.debug(f"Received response from Anthropic API with status {raw_response.status_code}")

        try:
            response = LLMResponse.model_validate_json(body)
        except ValidationError as e:
            raise ModelDecodeError(body, str(e)) from e

        logger.info("Successfully received response from Claude")
        logger.debug(
            f"Response received - Stop reason: {response.stop_reason}, Content blocks: {len(response.content)}"
        )
        return response

    def build_request(
        self,
        messages: list[LLMMessage],
        tools: list[LLMToolDefinition] | None = None,
        *,
        model: str | None = None,
        max_tokens: int | None = None,
        system: str | None = None,
    ) -> dict[str, Any]:
        """Build the Messages API request body."""
        request_params: dict[str, Any] = {
            "model": model or self.config.model,
            "max_tokens": max_tokens or self.config.max_tokens,
            "messages": [message.model_dump(mode="json") for message in messages],
        }
        if tools is not None:
            request_params["tools"] = [tool.model_dump(mode="json") for tool in tools]
        if system is not None:
            request_params["system"] = system
        return request_params

    def _estimate_tokens(self, messages: list[LLMMessage], system_prompt: str) -> int:
        """Estimate token count for rate limiting."""
        text_content = system_prompt

        for message in messages:
            if isinstance(message.content, str):
                text_content += message.content
            else:
                for block in message.content:
                    value = getattr(block, "text", None) or getattr(block, "content", None)
                    if isinstance(value, str):
                        text_content += value

        return self.estimate_text_tokens(text_content)

    def estimate_text_tokens(self, text: str) -> int:
        """Estimate token count for a piece of text."""
        try:
            return len(self.tokenizer.encode(text)) if self.tokenizer else len(text) // 4
        except Exception:
            # Fallback: roughly 4 characters per token
            return len(text) // 4
