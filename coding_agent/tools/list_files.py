"""List files tool."""

import asyncio
import json
import os
from pathlib import Path

from pydantic import BaseModel, Field

from coding_agent.tools.base import BaseTool, ToolResult
from coding_agent.utils.logging import get_logger

logger = get_logger(__name__)


class ListFilesInput(BaseModel):
    """Input schema for the listFiles tool."""

    path: str = Field(..., description="Directory to list (e.g. src, ., ./docs)")
    recursive: bool = Field(
        default=False,
        description="Also list the contents of subdirectories (default: false)",
    )


class FileInfo(BaseModel):
    """One entry of a directory listing."""

    path: str
    is_dir: bool
    size: int


def _collect_entries(root: Path, recursive: bool) -> list[FileInfo]:
    if recursive:
        candidates = []
        for dirpath, dirnames, filenames in os.walk(root):
            candidates.extend(Path(dirpath) / name for name in dirnames + filenames)
    else:
        candidates = list(root.iterdir())

    entries = []
    for entry_path in candidates:
        try:
            stat = entry_path.stat()
        except OSError as e:
            logger.warning(f"Failed to get metadata for {entry_path}: {e}")
            continue
        entries.append(FileInfo(path=str(entry_path), is_dir=entry_path.is_dir(), size=stat.st_size))

    return sorted(entries, key=lambda info: info.path)


class ListFilesTool(BaseTool):
    name = "listFiles"
    description = (
        "List the files and directories inside the given directory. "
        "When recursive is true, subdirectories are included as well."
    )
    input_model = ListFilesInput

    async def run(self, args: ListFilesInput) -> ToolResult:
        logger.debug(f"Listing files in: {args.path} (recursive: {args.recursive})")
        path = Path(args.path)

        if not path.exists():
            logger.warning(f"Directory not found: {args.path}")
            return ToolResult.failure(f"Directory not found: {args.path}")

        if not path.is_dir():
            logger.warning(f"Path is not a directory: {args.path}")
            return ToolResult.failure(f"Path is not a directory: {args.path}")

        try:
            entries = await asyncio.to_thread(_collect_entries, path, args.recursive)
        except OSError as e:
            return ToolResult.failure(f"Failed to read directory: {e}")

        logger.debug(f"Found {len(entries)} files/directories")
        return ToolResult.success(json.dumps([entry.model_dump() for entry in entries], indent=2))
