"""Coding agent CLI - typer application entry point."""

import asyncio
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console

from coding_agent import __version__
from coding_agent.clients.anthropic import AnthropicClient, AnthropicConfig
from coding_agent.errors import AgentError
from coding_agent.models.llm import ConversationResult, TextBlock
from coding_agent.services.llm import AgentConfig, LLMService
from coding_agent.tools.registry import create_default_registry
from coding_agent.utils.config import load_config
from coding_agent.utils.logging import LogConfig, get_logger, setup_logging

# Load environment variables from .env file
load_dotenv()

logger = get_logger(__name__)

app = typer.Typer(
    name="coding-agent",
    help="Anthropic Claude CLI agent with local filesystem tools.",
)
console = Console()
error_console = Console(stderr=True)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"coding-agent v{__version__}")
        raise typer.Exit()


def _print_result(result: ConversationResult) -> None:
    console.print("\n--- Claude's Response ---", markup=False)
    for block in result.response.content:
        if isinstance(block, TextBlock):
            console.print(block.text, markup=False)

    console.print("\n--- Metadata ---", markup=False)
    console.print(f"Iterations: {result.iterations}")
    console.print(f"Input tokens: {result.usage.input_tokens}")
    console.print(f"Output tokens: {result.usage.output_tokens}")


@app.command()
def main(
    message: Annotated[str, typer.Argument(metavar="MESSAGE", help="User message/prompt to send to Claude")],
    api_key: Annotated[
        str | None,
        typer.Option("--api-key", envvar="ANTHROPIC_API_KEY", help="Anthropic API key", show_default=False),
    ] = None,
    model: Annotated[str | None, typer.Option("--model", "-m", help="Model to use")] = None,
    max_tokens: Annotated[int | None, typer.Option("--max-tokens", min=1, help="Maximum tokens to generate")] = None,
    max_iterations: Annotated[
        int | None, typer.Option("--max-iterations", min=1, help="Maximum tool use iterations")
    ] = None,
    config_file: Annotated[
        Path | None, typer.Option("--config", help="Config file (default: ~/.coding-agent/config.toml)")
    ] = None,
    verbose: Annotated[
        int, typer.Option("-v", "--verbose", count=True, help="Increase verbosity: -v for INFO, -vv for DEBUG.")
    ] = 0,
    version: Annotated[
        bool | None, typer.Option("--version", callback=_version_callback, is_eager=True, help="Show version.")
    ] = None,
) -> None:
    """Send MESSAGE to Claude and let it use filesystem tools until it has an answer."""
    setup_logging(LogConfig.from_verbosity(verbose))

    try:
        config = load_config(config_file)
        client = AnthropicClient(
            api_key=api_key,
            config=AnthropicConfig(
                model=model or config.model.default,
                max_tokens=max_tokens or config.model.max_tokens,
            ),
        )
        service = LLMService(
            client,
            AgentConfig(
                max_iterations=max_iterations or config.agent.max_iterations,
                report_unknown_tools=config.agent.report_unknown_tools,
            ),
        )
        registry = create_default_registry()

        logger.info("Sending message to Claude API")
        result = asyncio.run(service.execute_with_tools(message, registry))
    except AgentError as e:
        logger.error(f"Agent run failed: {e}")
        error_console.print(f"Error: {e}", style="red", markup=False)
        raise typer.Exit(code=1) from e

    _print_result(result)


if __name__ == "__main__":
    app()
