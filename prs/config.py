"""Configuration loading from YAML and environment.

The access token is taken from PRS_GITHUB_ACCESS_TOKEN or from the file
named by PRS_GITHUB_ACCESS_TOKEN_FILE (Docker secrets). Never put real
tokens in config files.
"""

import os
from pathlib import Path
from typing import Any, Sequence

import yaml
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from prs.models import Credentials

TOKEN_ENV = "PRS_GITHUB_ACCESS_TOKEN"
TOKEN_FILE_ENV = "PRS_GITHUB_ACCESS_TOKEN_FILE"
USERNAME_ENV = "PRS_USERNAME"
CONFIG_PATH_ENV = "PRS_CONFIG"
DEFAULT_CONFIG_PATH = Path("prs.yaml")

USAGE = f"usage: prs [{USERNAME_ENV}]"


class ConfigError(Exception):
    """Raised when configuration or command-line input is missing or
    invalid.

    The message is meant to be shown to the user as is.
    """

    pass


def _read_secret(env_key: str, file_env_key: str) -> str | None:
    """Read secret from env var or from file path in env (e.g. Docker
    secrets)."""
    value = os.environ.get(env_key)
    if value:
        return value.strip()
    file_path = os.environ.get(file_env_key)
    if file_path:
        try:
            return Path(file_path).read_text().strip()
        except OSError as e:
            raise ConfigError(f"Cannot read {file_env_key} file {file_path}: {e}") from e
    return None


class GitHubConfig(BaseSettings):
    """GitHub API settings."""

    model_config = SettingsConfigDict(env_prefix="PRS_GITHUB_", extra="ignore")

    api_url: str = Field(default="https://api.github.com", description="API base URL")
    timeout: int = Field(default=30, ge=1, description="Request timeout in seconds")
    per_page: int = Field(default=30, ge=1, le=100, description="Search results per page (first page only)")


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="PRS_LOGGING_", extra="ignore")

    level: str = Field(default="WARNING", description="Log level")
    format: str = Field(
        default="%(levelname)s: %(message)s",
        description="Log format",
    )


class AppConfig(BaseSettings):
    """Root application config from YAML + env."""

    model_config = SettingsConfigDict(env_prefix="PRS_", extra="ignore")

    username: str = Field(default="", description="User whose pull requests are listed")
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def github_token_resolved(self) -> str | None:
        """Resolve GitHub token from env or Docker secret file (never from
        YAML)."""
        return _read_secret(TOKEN_ENV, TOKEN_FILE_ENV) or None


def _substitute_env(value: Any) -> Any:
    """Replace ${VAR} and $VAR in strings with os.environ."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return os.environ.get(key, value)
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return os.environ.get(key, value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v) for v in value]
    return value


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load config from YAML file and environment.

    Without ``config_path`` the file named by PRS_CONFIG is used, falling
    back to ./prs.yaml. A missing ./prs.yaml yields env-only defaults; a
    missing file that was asked for explicitly raises ConfigError.
    """
    explicit = config_path or os.environ.get(CONFIG_PATH_ENV)
    path = Path(explicit) if explicit else DEFAULT_CONFIG_PATH
    if explicit and not path.is_file():
        raise ConfigError(f"Config file not found: {path}")
    try:
        if not path.is_file():
            return AppConfig()

        try:
            raw = yaml.safe_load(path.read_text()) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e
        if not isinstance(raw, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        raw = _substitute_env(raw)

        # Env wins over the file for the username
        username = os.environ.get(USERNAME_ENV) or raw.get("username") or ""
        if str(username).startswith("$"):
            username = ""

        return AppConfig(
            username=str(username),
            github=GitHubConfig(**(raw.get("github") or {})),
            logging=LoggingConfig(**(raw.get("logging") or {})),
        )
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def resolve_credentials(config: AppConfig, args: Sequence[str]) -> Credentials:
    """Return token and username, the command line taking precedence over
    the configured username.

    With no configured username exactly one positional argument is
    required. With one configured, a single argument overrides it and any
    other count leaves it in place.
    """
    token = config.github_token_resolved
    if not token:
        raise ConfigError(f"No access token in env | {TOKEN_ENV}")

    username = config.username
    if not username:
        if len(args) != 1:
            raise ConfigError(USAGE)
        username = args[0]
    elif len(args) == 1:
        username = args[0]

    if not username:
        raise ConfigError(USAGE)
    return Credentials(token=token, username=username)
