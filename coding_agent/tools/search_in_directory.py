"""Keyword search tool."""

import asyncio
import json
import os
from pathlib import Path

from pydantic import BaseModel, Field

from coding_agent.tools.base import BaseTool, ToolResult
from coding_agent.utils.logging import get_logger

logger = get_logger(__name__)


class SearchInDirectoryInput(BaseModel):
    """Input schema for the searchInDirectory tool."""

    path: str = Field(..., description="Directory to start searching from")
    keyword: str = Field(..., description="Keyword to search for; an empty keyword matches every line")


class SearchMatch(BaseModel):
    """A single matching line."""

    path: str
    line_number: int
    line: str


def _split_lines(content: str) -> list[str]:
    # Only "\n" and "\r\n" end a line; form feeds and other separators stay in the text
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


def _search(root: Path, keyword: str) -> list[SearchMatch]:
    keyword_lower = keyword.lower()
    if root.is_file():
        files = [root]
    else:
        files = sorted(Path(dirpath) / name for dirpath, _, filenames in os.walk(root) for name in filenames)

    matches = []
    for file_path in files:
        try:
            with open(file_path, encoding="utf-8", newline="") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError):
            # Binary files and permission errors are skipped
            logger.debug(f"Skipping file: {file_path}")
            continue

        for line_number, line in enumerate(_split_lines(content), start=1):
            if keyword_lower in line.lower():
                matches.append(SearchMatch(path=str(file_path), line_number=line_number, line=line))

    return matches


class SearchInDirectoryTool(BaseTool):
    name = "searchInDirectory"
    description = (
        "Search the files under the given directory for a keyword and return the matching lines. "
        "Matching is case-insensitive."
    )
    input_model = SearchInDirectoryInput

    async def run(self, args: SearchInDirectoryInput) -> ToolResult:
        logger.debug(f"Searching for '{args.keyword}' in: {args.path}")
        path = Path(args.path)

        if not path.exists():
            logger.warning(f"Directory not found: {args.path}")
            return ToolResult.failure(f"Directory not found: {args.path}")

        matches = await asyncio.to_thread(_search, path, args.keyword)

        logger.debug(f"Found {len(matches)} matches")
        return ToolResult.success(json.dumps([match.model_dump() for match in matches], indent=2))
