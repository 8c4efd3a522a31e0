"""Read file tool."""

import asyncio
from pathlib import Path

from pydantic import BaseModel, Field

from coding_agent.tools.base import BaseTool, ToolResult
from coding_agent.utils.logging import get_logger

logger = get_logger(__name__)


class ReadFileInput(BaseModel):
    """Input schema for the readFile tool."""

    path: str = Field(..., description="Path of the file to read (e.g. README.md, src/main.py)")


class ReadFileTool(BaseTool):
    name = "readFile"
    description = "Read the contents of the file at the given path. Accepts relative or absolute paths."
    input_model = ReadFileInput

    async def run(self, args: ReadFileInput) -> ToolResult:
        logger.debug(f"Reading file: {args.path}")
        path = Path(args.path)

        if not path.exists():
            logger.warning(f"File not found: {args.path}")
            return ToolResult.failure(f"File not found: {args.path}")

        try:
            content = await asyncio.to_thread(path.read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to read file {args.path}: {e}")
            return ToolResult.failure(f"Failed to read file: {e}")

        logger.debug(f"Successfully read {len(content)} characters from {args.path}")
        return ToolResult.success(content)
