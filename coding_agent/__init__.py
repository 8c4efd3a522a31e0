"""Anthropic Claude CLI agent with local filesystem tools."""

__version__ = "0.1.0"
