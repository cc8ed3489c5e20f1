"""feeddump configuration.

Two layers:

- `Settings`: process settings from environment variables with the
  FEEDDUMP_ prefix (logging, HTTP behaviour, default output folder).
- `FeedConfig`: the user's TOML file listing feeds and optional
  directory/format overrides.

Example:
    >>> from feeddump.core.config import FeedConfig, get_settings
    >>> get_settings(log_level="DEBUG").log_level
    'DEBUG'
    >>> config = FeedConfig.from_toml('''
    ... [source]
    ... blog = "https://example.com/rss.xml"
    ... ''')
    >>> config.setting.output_format
    'html'
"""

from __future__ import annotations

import tomllib
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from feeddump.core.exceptions import ConfigNotFoundError, ConfigurationError


class Settings(BaseSettings):
    """Application settings.

    Loads from environment variables with FEEDDUMP_ prefix.

    Example:
        >>> from feeddump.core.config import Settings
        >>> Settings(request_timeout=5.0).request_timeout
        5.0
    """

    model_config = SettingsConfigDict(
        env_prefix="FEEDDUMP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    # Fetching
    request_timeout: float = Field(default=30.0, ge=1.0, description="Per-feed timeout in seconds")
    max_retries: int = Field(default=2, ge=0, le=10)
    user_agent: str | None = Field(default=None, description="Override the User-Agent header")

    # Output
    folder: Path | None = Field(default=None, description="Default output directory")


def get_settings(**overrides: Any) -> Settings:
    """Get settings with optional overrides."""
    return Settings(**overrides)


class Setting(BaseModel):
    """The optional ``[setting]`` table of the config file."""

    model_config = ConfigDict(extra="forbid")

    output_format: str = "html"
    output_dir: str | None = None
    metadata_dir: str | None = None


class FeedConfig(BaseModel):
    """A parsed configuration file.

    ``source`` maps feed alias to feed URL. Iteration is in alias order,
    so runs are deterministic whatever the file order.

    Example:
        >>> config = FeedConfig(source={"b": "https://b", "a": "https://a"})
        >>> [alias for alias, _ in config.feeds()]
        ['a', 'b']
    """

    model_config = ConfigDict(extra="forbid")

    setting: Setting = Field(default_factory=Setting)
    source: dict[str, str] = Field(default_factory=dict)

    def feeds(self) -> Iterator[tuple[str, str]]:
        """Yield ``(alias, url)`` pairs sorted by alias."""
        for alias in sorted(self.source):
            yield alias, self.source[alias]

    @classmethod
    def from_toml(cls, text: str) -> FeedConfig:
        """Parse a config document.

        Raises:
            ConfigurationError: If the TOML or its structure is invalid.
        """
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"Invalid TOML: {e}") from e
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e


def load_config(path: Path) -> FeedConfig:
    """Load the config file at ``path``.

    Raises:
        ConfigNotFoundError: If the file does not exist.
        ConfigurationError: If it cannot be parsed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigNotFoundError(f"Config file not found: {path}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e
    return FeedConfig.from_toml(text)
