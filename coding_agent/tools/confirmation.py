"""Interactive operator confirmation for tools that modify the filesystem."""

import asyncio
from collections.abc import Awaitable, Callable

from rich.console import Console

from coding_agent.utils.logging import get_logger

logger = get_logger(__name__)

Confirmer = Callable[[str], Awaitable[bool]]

console = Console()


def prompt_user_confirmation(message: str) -> bool:
    """Ask the operator a yes/no question on the terminal.

    Only ``y`` (any case, surrounding whitespace ignored) counts as yes; anything
    else, including an empty line, is a no.

    Raises:
        EOFError: If stdin is closed
    """
    answer = console.input(f"\n{message} [y/N]: ", markup=False)
    return answer.strip().lower() == "y"


async def confirm_action(message: str) -> bool:
    """Ask for confirmation without blocking the event loop."""
    confirmed = await asyncio.to_thread(prompt_user_confirmation, message)
    logger.debug(f"Confirmation for '{message}': {confirmed}")
    return confirmed
