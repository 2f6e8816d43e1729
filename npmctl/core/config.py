"""
Configuration Management.

Loads connection settings from NPM_* environment variables and defaults
from the YAML files bundled in npmctl/settings/.

Environment:
    NPM_API_URL, NPM_USERNAME, NPM_PASSWORD

Settings (YAML):
    application.yaml   - App identity, request timeout
    logging.yaml       - Logging configuration

Resolution order, per field:
    api_url            - flag value, unless it is still DEFAULT_API_URL and
                         NPM_API_URL is set and non-empty
    username/password  - flag value, unless it is empty and the matching
                         environment variable is set and non-empty
"""

from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from npmctl.core.config_schema import ApplicationSchema, LoggingSchema

DEFAULT_API_URL = "http://dockernuc:81/api"

SETTINGS_DIR = Path(__file__).resolve().parent.parent / "settings"


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a YAML configuration file from npmctl/settings/."""
    config_path = SETTINGS_DIR / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    """Connection values read from NPM_* environment variables."""

    api_url: str = ""
    username: str = ""
    password: str = ""

    model_config = SettingsConfigDict(
        env_prefix="NPM_",
        case_sensitive=False,
        extra="ignore",
    )


def _load_validated(schema_cls: type, filename: str) -> Any:
    """Load YAML and validate against schema. Returns typed model instance."""
    raw = load_yaml_config(filename)
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ValueError(
            f"Invalid configuration in {filename}:\n{e}"
        ) from e


class AppConfig:
    """
    Application configuration loaded from the bundled YAML files.

    Each file is validated against its Pydantic schema at load time.
    """

    def __init__(self) -> None:
        self._application = _load_validated(ApplicationSchema, "application.yaml")
        self._logging = _load_validated(LoggingSchema, "logging.yaml")

    @property
    def application(self) -> ApplicationSchema:
        """Application settings."""
        return self._application

    @property
    def logging(self) -> LoggingSchema:
        """Logging settings."""
        return self._logging


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()


@dataclass(frozen=True)
class CLIConfig:
    """Effective connection settings for a single invocation."""

    api_url: str
    username: str
    password: str = field(repr=False)
    timeout: float = 30.0


def resolve_config(
    api_url: str = DEFAULT_API_URL,
    username: str = "",
    password: str = "",
    settings: Settings | None = None,
) -> CLIConfig:
    """
    Merge flag values with environment fallbacks.

    Args:
        api_url: Value of --api-url (DEFAULT_API_URL when not given)
        username: Value of --username (empty when not given)
        password: Value of --password (empty when not given)
        settings: Environment settings. Read from os.environ if None.

    Returns:
        Immutable CLIConfig. The URL is not validated here; a bad URL
        surfaces as a TransportError on the first request.
    """
    env = settings if settings is not None else Settings()

    if api_url == DEFAULT_API_URL and env.api_url:
        api_url = env.api_url
    if not username and env.username:
        username = env.username
    if not password and env.password:
        password = env.password

    return CLIConfig(
        api_url=api_url,
        username=username,
        password=password,
        timeout=get_app_config().application.timeouts.request,
    )
