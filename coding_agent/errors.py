"""Exceptions that abort an agent run.

Expected tool-level failures (missing file, declined confirmation, ...) are
never raised; they travel back to the model as error tool results. Everything
here is a hard failure that unwinds out of the agent loop to the caller.
"""


class AgentError(Exception):
    """Base class for all hard failures."""


class ConfigError(AgentError):
    """Configuration could not be loaded or is incomplete."""


class ModelTransportError(AgentError):
    """The model API was unreachable or answered with a non-success status."""

    def __init__(self, status_code: int | None, body: str):
        self.status_code = status_code
        self.body = body
        if status_code is None:
            super().__init__(f"API request failed: {body}")
        else:
            super().__init__(f"API request failed with status {status_code}: {body}")


class ModelDecodeError(AgentError):
    """The model API answered successfully but the body could not be parsed."""

    def __init__(self, body: str, reason: str):
        self.body = body
        self.reason = reason
        super().__init__(f"Failed to parse API response: {reason}")


class ToolNotFoundError(AgentError):
    """A tool was requested that is not registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Tool not found: {name}")


class ToolInputError(AgentError):
    """Tool input could not be decoded into the tool's argument shape."""

    def __init__(self, tool_name: str, details: str):
        self.tool_name = tool_name
        self.details = details
        super().__init__(f"Failed to parse {tool_name} arguments: {details}")


class MaxIterationsExceededError(AgentError):
    """The agent loop used its whole iteration budget without a final answer."""

    def __init__(self, max_iterations: int):
        self.max_iterations = max_iterations
        super().__init__(f"Max iterations ({max_iterations}) reached without final response")
