"""Edit file tool."""

import asyncio
from pathlib import Path

from pydantic import BaseModel, Field

from coding_agent.tools.base import BaseTool, ToolResult
from coding_agent.tools.confirmation import Confirmer, confirm_action
from coding_agent.utils.logging import get_logger

logger = get_logger(__name__)


class EditFileInput(BaseModel):
    """Input schema for the editFile tool."""

    path: str = Field(..., description="Path of the existing file to edit")
    new_content: str = Field(..., description="Complete new content that replaces the whole file")


class EditFileTool(BaseTool):
    name = "editFile"
    description = (
        "Completely overwrite the contents of an existing file. "
        "To avoid corrupting the file, always follow this workflow:\n"
        "1. Use 'readFile' to get the current complete content\n"
        "2. Build the complete new version of the file from what you read\n"
        "3. Use this tool to write the complete new content\n"
        "Do not use it for partial edits; always provide the entire file content. "
        "Asks the user for permission before running."
    )
    input_model = EditFileInput

    def __init__(self, confirm: Confirmer = confirm_action):
        self.confirm = confirm

    async def run(self, args: EditFileInput) -> ToolResult:
        logger.debug(f"editFile args: path={args.path}, content_length={len(args.new_content)}")
        path = Path(args.path)

        if not path.exists():
            logger.warning(f"editFile: file does not exist: {args.path}")
            return ToolResult.failure("File does not exist. Use writeFile to create new files.")

        if not path.is_file():
            logger.warning(f"editFile: not a file: {args.path}")
            return ToolResult.failure(f"{args.path} is not a file.")

        try:
            confirmed = await self.confirm(f"\nAbout to edit existing file: {args.path}\nProceed?")
        except (EOFError, OSError) as e:
            logger.warning(f"editFile: error while asking for confirmation: {e}")
            return ToolResult.failure(f"Error while asking for confirmation: {e}")

        if not confirmed:
            logger.warning("editFile: cancelled by user")
            return ToolResult.failure("Cancelled by user")

        try:
            await asyncio.to_thread(path.write_text, args.new_content, encoding="utf-8")
        except OSError as e:
            logger.warning(f"editFile: failed to write file: {e}")
            return ToolResult.failure(f"Failed to write file: {e}")

        logger.debug(f"editFile: updated {args.path}")
        return ToolResult.success(f"Updated file {args.path}")
