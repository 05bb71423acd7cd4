"""Configuration management for the Currency Converter."""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional
import yaml
from dotenv import load_dotenv
from currency_converter.utils.errors import ConfigurationError
from currency_converter.utils.logging import setup_logging
import logging

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER_BASE_URL = "http://data.fixer.io/api"
DEFAULT_PROVIDER_TIMEOUT = 5.0


class Config:
    """Layered configuration: .env, then optional YAML defaults, then environment."""

    def __init__(self, config_path: str = "config.yaml"):
        """
        Initialize configuration.

        Args:
            config_path: Path to YAML configuration file. The file is optional;
                when it exists it must contain a mapping.
        """
        self.config_path = Path(config_path)
        self._config: Dict[str, Any] = {}
        self._load()

    def _load(self) -> None:
        """Load configuration from .env and YAML."""
        load_dotenv()

        if not self.config_path.exists():
            logger.debug(f"Config file not found, using defaults: {self.config_path}")
            return

        try:
            with open(self.config_path, 'r') as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid configuration file {self.config_path}: {e}") from e

        if not loaded:
            raise ConfigurationError(f"Empty configuration file: {self.config_path}")
        if not isinstance(loaded, dict):
            raise ConfigurationError(f"Configuration file must contain a mapping: {self.config_path}")

        self._config = loaded

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-separated key.

        Args:
            key: Dot-separated key (e.g., "provider.timeout")
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split('.')
        value = self._config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    def get_env(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get environment variable."""
        return os.getenv(key, default)

    def require_env(self, key: str) -> str:
        """Get required environment variable or raise error."""
        value = os.getenv(key)
        if not value:
            raise ConfigurationError(f"Required environment variable not set: {key}")
        return value


@dataclass(frozen=True)
class Settings:
    """Immutable runtime settings handed to the application factory."""

    fixer_api_key: str
    database_url: str
    provider_name: str = "fixer"
    provider_base_url: str = DEFAULT_PROVIDER_BASE_URL
    provider_timeout: float = DEFAULT_PROVIDER_TIMEOUT
    database_echo: bool = False
    log_level: str = "INFO"
    log_format: str = "json"
    log_file: Optional[str] = None

    def __repr__(self) -> str:
        return (
            f"Settings(fixer_api_key='***', database_url={self.database_url!r}, "
            f"provider_name={self.provider_name!r}, provider_base_url={self.provider_base_url!r}, "
            f"provider_timeout={self.provider_timeout!r})"
        )


def load_settings(config_path: str = "config.yaml") -> Settings:
    """Build settings from config file and environment, then configure logging.

    Raises:
        ConfigurationError: when FIXER_API_KEY or DATABASE_URL is missing, or a
            value cannot be parsed.
    """
    config = Config(config_path)

    api_key = config.require_env("FIXER_API_KEY")
    database_url = config.require_env("DATABASE_URL")

    raw_timeout = config.get_env("PROVIDER_TIMEOUT") or config.get("provider.timeout", DEFAULT_PROVIDER_TIMEOUT)
    try:
        timeout = float(raw_timeout)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid provider timeout: {raw_timeout!r}") from e
    if timeout <= 0:
        raise ConfigurationError(f"Provider timeout must be positive, got {timeout}")

    settings = Settings(
        fixer_api_key=api_key,
        database_url=database_url,
        provider_name=config.get("provider.name", "fixer"),
        provider_base_url=config.get_env("FIXER_BASE_URL") or config.get("provider.base_url", DEFAULT_PROVIDER_BASE_URL),
        provider_timeout=timeout,
        database_echo=bool(config.get("database.echo", False)),
        log_level=config.get_env("LOG_LEVEL") or config.get("logging.level", "INFO"),
        log_format=config.get("logging.format", "json"),
        log_file=config.get("logging.file"),
    )

    setup_logging(
        level=settings.log_level,
        log_file=settings.log_file,
        format_type=settings.log_format,
    )
    logger.info("Configuration loaded successfully")
    return settings
