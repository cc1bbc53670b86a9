"""Configuration service for enumeration lists.
Loads configuration from environment variables, an optional ``.env`` file and an optional YAML file.
"""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, cast

import yaml
from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

from common.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "The provided value is invalid"


class EnumSettings(BaseSettings):
    """Process-wide defaults, read from ``TABLE_ENUM_*`` environment variables."""

    model_config = SettingsConfigDict(env_prefix="TABLE_ENUM_", extra="ignore")

    default_strategy: str = "lookup"
    error_message: str = DEFAULT_ERROR_MESSAGE
    config_file: str | None = None
    log_level: str = "INFO"
    log_json_format: bool = False


def load_yaml_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML mapping from ``path``.

    Raises:
        ConfigurationError: If the file is missing, unparsable or not a mapping
    """
    file_path = Path(path)
    if not file_path.exists():
        raise ConfigurationError(f"Configuration file not found: {file_path}")

    try:
        with open(file_path) as f:
            data: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse configuration file {file_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file {file_path} must contain a mapping")
    return cast(dict[str, Any], data)


class ConfigService:
    """Service for loading and accessing enumeration configuration.
    Combines environment variables and values from a YAML file.
    """

    settings: EnumSettings

    def __init__(self, env_file: str | Path | None = None, config_file: str | Path | None = None) -> None:
        self._env = os.getenv("APP_ENV", "local")
        self._file_config: dict[str, Any] = {}

        self._load_env_file(env_file)
        self.settings = EnumSettings()

        config_path = config_file or self.settings.config_file
        if config_path:
            self._file_config = load_yaml_file(config_path)
            logger.info(f"Loaded enum configuration from {config_path}")

    def _load_env_file(self, env_file: str | Path | None) -> None:
        """Load the appropriate .env file based on environment"""
        env_files_to_try: list[Path] = []
        if env_file is not None:
            env_files_to_try.append(Path(env_file))
        else:
            env_files_to_try.append(Path.cwd() / f".env.{self._env}")
            env_files_to_try.append(Path.cwd() / ".env")

        for candidate in env_files_to_try:
            if candidate.exists():
                logger.debug(f"Loading environment from {candidate}")
                _ = load_dotenv(candidate)
                return

    @property
    def app_env(self) -> str:
        return self._env

    def is_testing(self) -> bool:
        return self._env in ("test", "testing")

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by key.
        Priority order:
        1. Typed settings (environment variables)
        2. YAML configuration file (supports nested keys with dot notation)
        3. Default value
        """
        if key in EnumSettings.model_fields:
            return getattr(self.settings, key)

        value: Any = self._file_config
        for part in key.split("."):
            if isinstance(value, dict) and part in value:
                value = cast("Any", value[part])
            else:
                return default
        return value


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    return ConfigService()
