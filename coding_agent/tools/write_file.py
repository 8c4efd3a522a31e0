"""Write file tool."""

import asyncio
from pathlib import Path

from pydantic import BaseModel, Field

from coding_agent.tools.base import BaseTool, ToolResult
from coding_agent.tools.confirmation import Confirmer, confirm_action
from coding_agent.utils.logging import get_logger

logger = get_logger(__name__)


class WriteFileInput(BaseModel):
    """Input schema for the writeFile tool."""

    path: str = Field(..., description="Full path of the file to create (e.g. test.txt, src/new_file.py)")
    content: str = Field(..., description="Content to write to the file")


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


class WriteFileTool(BaseTool):
    name = "writeFile"
    description = (
        "Create a new file at the given path and write the content to it. "
        "Missing parent directories are created. "
        "Asks the user for confirmation, including before overwriting an existing file."
    )
    input_model = WriteFileInput

    def __init__(self, confirm: Confirmer = confirm_action):
        self.confirm = confirm

    async def run(self, args: WriteFileInput) -> ToolResult:
        logger.debug(f"Writing to file: {args.path}")
        path = Path(args.path)

        if path.exists():
            logger.warning(f"File already exists: {args.path}")
            message = f"File '{args.path}' already exists. Overwrite it?"
        else:
            message = f"Create file '{args.path}'?"

        try:
            confirmed = await self.confirm(message)
        except (EOFError, OSError) as e:
            return ToolResult.failure(f"Failed to read user input: {e}")

        if not confirmed:
            logger.debug("User cancelled")
            return ToolResult.failure("Cancelled by user")

        try:
            await asyncio.to_thread(_write, path, args.content)
        except OSError as e:
            logger.warning(f"Failed to write file {args.path}: {e}")
            return ToolResult.failure(f"Failed to write file: {e}")

        size = len(args.content.encode("utf-8"))
        logger.debug(f"File written successfully: {args.path}")
        return ToolResult.success(f"Created file '{args.path}' ({size} bytes)")
