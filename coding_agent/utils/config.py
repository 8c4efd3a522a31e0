"""Application configuration loaded from a TOML file."""

import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from coding_agent.clients.anthropic import DEFAULT_MAX_TOKENS, DEFAULT_MODEL
from coding_agent.errors import ConfigError
from coding_agent.utils.logging import get_logger

logger = get_logger(__name__)

CONFIG_HOME_ENV = "CODING_AGENT_HOME"


class ModelSettings(BaseModel):
    """Model configuration."""

    default: str = DEFAULT_MODEL
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, gt=0)


class AgentSettings(BaseModel):
    """Agent loop configuration."""

    max_iterations: int = Field(default=10, gt=0)
    report_unknown_tools: bool = False


class AppConfig(BaseModel):
    """Application configuration."""

    model: ModelSettings = Field(default_factory=ModelSettings)
    agent: AgentSettings = Field(default_factory=AgentSettings)


def config_home() -> Path:
    """Get the configuration directory (~/.coding-agent unless overridden)."""
    override = os.getenv(CONFIG_HOME_ENV)
    if override:
        return Path(override)
    return Path.home() / ".coding-agent"


def config_path() -> Path:
    """Get the default config file path."""
    return config_home() / "config.toml"


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration from file, or use defaults if it does not exist.

    Args:
        path: Config file to read (defaults to config_path())

    Returns:
        Parsed configuration; missing sections and fields take their defaults

    Raises:
        ConfigError: If the file cannot be read or contains invalid values
    """
    path = path or config_path()

    if not path.exists():
        logger.debug(f"Config file not found at {path}, using defaults")
        return AppConfig()

    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Failed to read config file {path}: {e}") from e

    try:
        config = AppConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config file {path}: {e}") from e

    logger.info(f"Loaded config from {path}")
    return config
