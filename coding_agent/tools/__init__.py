"""Filesystem tools for the coding agent."""

from coding_agent.tools.base import BaseTool, ToolHandler, ToolResult
from coding_agent.tools.registry import ToolsRegistry, create_default_registry

__all__ = ["BaseTool", "ToolHandler", "ToolResult", "ToolsRegistry", "create_default_registry"]
