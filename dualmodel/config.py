"""Configuration settings for DualModel.

Settings are read once at process start from the environment (and an optional
``.env`` file) and are frozen afterwards. The OpenRouter key is read from the
unprefixed ``OPENROUTER_API_KEY`` variable; everything else can be overridden
with ``DUAL_MODEL_``-prefixed variables.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from dotenv import find_dotenv, load_dotenv
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dualmodel.errors import ConfigurationError

DEFAULT_SYSTEM_PROMPT = """Answer in a structured and concise way, in 6-8 paragraphs of 5-7 sentences each, following this outline:
- Analysis of the core problem or question
- Context and background
- Sources, data and evidence
- Main argument (several perspectives)
- Alternative approaches or counterarguments
- Methodological reflection (where relevant)
- Short conclusion with open questions

Be concise, use technical terms correctly, and acknowledge complexity."""

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class Backend:
    """A labeled model identifier queried on every invocation."""

    label: str
    model: str


class Settings(BaseSettings):
    """Configuration settings for the DualModel server."""

    model_config = SettingsConfigDict(
        env_prefix="DUAL_MODEL_",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    OPENROUTER_API_KEY: str | None = Field(default=None, validation_alias="OPENROUTER_API_KEY")

    # Backends, in the order they are rendered
    PRIMARY_LABEL: str = "CLAUDE SONNET 4.5"
    PRIMARY_MODEL: str = "anthropic/claude-sonnet-4.5"
    SECONDARY_LABEL: str = "OPENAI GPT-5.2"
    SECONDARY_MODEL: str = "openai/gpt-5.2"

    # Gateway request settings
    API_URL: str = "https://openrouter.ai/api/v1/chat/completions"
    TEMPERATURE: float = 0.7
    MAX_TOKENS: int = 6000
    REQUEST_TIMEOUT: float = 60.0
    HTTP_REFERER: str = "https://github.com/dualmodel-mcp-server"
    APP_TITLE: str = "Dual Model MCP Server"

    SYSTEM_PROMPT: str = DEFAULT_SYSTEM_PROMPT

    SERVER_NAME: str = "dual-model-mcp-server"
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    @property
    def backends(self) -> tuple[Backend, ...]:
        """Configured backends in fixed order."""
        return (
            Backend(label=self.PRIMARY_LABEL, model=self.PRIMARY_MODEL),
            Backend(label=self.SECONDARY_LABEL, model=self.SECONDARY_MODEL),
        )


def load_env_file(env_file: Path | str | None = None) -> None:
    """Load a .env file into the environment without overriding set values."""
    dotenv_path = str(env_file) if env_file else find_dotenv(".env", usecwd=True)
    if dotenv_path:
        load_dotenv(dotenv_path)


def load_settings(env_file: Path | str | None = None, require_key: bool = True) -> Settings:
    """Load settings from the environment and verify required values.

    Args:
        env_file: Optional path to a .env file. Defaults to the nearest .env
            found from the current working directory.
        require_key: Fail when OPENROUTER_API_KEY is missing

    Returns:
        Frozen Settings instance

    Raises:
        ConfigurationError: If a value is malformed, or OPENROUTER_API_KEY is
            missing or blank while required
    """
    load_env_file(env_file)

    try:
        settings = Settings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e

    if require_key and (not settings.OPENROUTER_API_KEY or not settings.OPENROUTER_API_KEY.strip()):
        raise ConfigurationError("OPENROUTER_API_KEY not found in environment or .env")
    return settings


def configure_logging(level: str = "INFO") -> None:
    """Send log records to stderr; stdout carries the MCP framing."""
    resolved = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=resolved, format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger().setLevel(resolved)
