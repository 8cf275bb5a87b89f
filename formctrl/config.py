"""Configuration for formctrl."""

import os
from abc import ABC, abstractmethod
from enum import Enum
from typing import Mapping, Optional

from formctrl.shared.logging import configure_logging

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Environment(Enum):
    """Runtime environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TEST = "test"


class LogFormat(Enum):
    """Log output format."""

    JSON = "json"
    KEYVALUE = "keyvalue"


class ConfigSource(ABC):
    """Port for configuration lookups."""

    @abstractmethod
    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """
        Get a configuration value.

        Args:
            key: Configuration key
            default: Value returned when the key is not set

        Returns:
            The configured value or `default`
        """
        pass


class EnvironmentConfigSource(ConfigSource):
    """Configuration read from environment variables."""

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return os.environ.get(key, default)


class DictConfigSource(ConfigSource):
    """Configuration read from a mapping, for tests and embedding."""

    def __init__(self, values: Mapping[str, str]) -> None:
        self._values = dict(values)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._values.get(key, default)


class Config:
    """formctrl configuration."""

    def __init__(self, source: Optional[ConfigSource] = None):
        """Initialize configuration from a source, the environment by default."""
        self.source = source or EnvironmentConfigSource()
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from the source."""
        # Environment
        self.ENVIRONMENT = Environment(
            (self.source.get("FORMCTRL_ENVIRONMENT", "development") or "development").lower()
        )

        # Logging
        self.LOG_LEVEL = (self.source.get("FORMCTRL_LOG_LEVEL", "INFO") or "INFO").upper()
        default_format = (
            LogFormat.KEYVALUE.value
            if self.ENVIRONMENT == Environment.DEVELOPMENT
            else LogFormat.JSON.value
        )
        self.LOG_FORMAT = (self.source.get("FORMCTRL_LOG_FORMAT", default_format) or default_format).lower()

    def validate(self) -> None:
        """Validate configuration values."""
        if self.LOG_LEVEL not in LOG_LEVELS:
            raise ValueError(
                f"FORMCTRL_LOG_LEVEL {self.LOG_LEVEL} not supported. "
                f"Use one of {', '.join(LOG_LEVELS)}"
            )

        if self.LOG_FORMAT not in {fmt.value for fmt in LogFormat}:
            raise ValueError(
                f"FORMCTRL_LOG_FORMAT {self.LOG_FORMAT} not supported. Use json or keyvalue"
            )

    @property
    def json_logs(self) -> bool:
        return self.LOG_FORMAT == LogFormat.JSON.value


def setup_logging(config: Optional[Config] = None) -> Config:
    """
    Configure formctrl logging.

    This should be called at application startup.

    Args:
        config: Configuration to apply, read from the environment when omitted

    Returns:
        The applied configuration
    """
    config = config or Config()
    config.validate()

    configure_logging(
        environment=config.ENVIRONMENT.value,
        log_level=config.LOG_LEVEL,
        json_logs=config.json_logs,
        include_caller_info=config.ENVIRONMENT == Environment.DEVELOPMENT,
    )

    return config
