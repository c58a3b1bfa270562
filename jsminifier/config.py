"""Configuration management for jsminifier.

Loads configuration from environment variables with sane defaults.
Uses python-dotenv to load from .env file if present.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()

_TRUE_VALUES = ("1", "true", "yes", "on")


def _get_env_str(key: str, default: str) -> str:
    """Get string from environment variable."""
    return os.getenv(key, default)


def _get_env_bool(key: str, default: bool) -> bool:
    """Get boolean from environment variable."""
    value = os.getenv(key)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


@dataclass(frozen=True)
class LoggingConfig:
    """Logging-related configuration."""

    level: str
    format: str

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        """Create LoggingConfig from environment variables."""
        return cls(
            level=_get_env_str("LOG_LEVEL", "INFO"),
            format=_get_env_str("LOG_FORMAT", "simple"),
        )


@dataclass(frozen=True)
class MinifierConfig:
    """Minification run configuration."""

    history_enabled: bool
    fallback_original: bool
    js_mime_type: str
    html_mime_type: str

    @classmethod
    def from_env(cls) -> "MinifierConfig":
        """Create MinifierConfig from environment variables."""
        return cls(
            history_enabled=_get_env_bool("JSMIN_HISTORY_ENABLED", False),
            fallback_original=_get_env_bool("JSMIN_FALLBACK_ORIGINAL", False),
            js_mime_type=_get_env_str("JSMIN_JS_MIME_TYPE", "text/javascript"),
            html_mime_type=_get_env_str("JSMIN_HTML_MIME_TYPE", "text/html"),
        )


@dataclass(frozen=True)
class Config:
    """Main configuration container."""

    logging: LoggingConfig
    minifier: MinifierConfig

    @classmethod
    def from_env(cls) -> "Config":
        """Create Config from environment variables."""
        return cls(
            logging=LoggingConfig.from_env(),
            minifier=MinifierConfig.from_env(),
        )


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def reset_config() -> None:
    """Reset the global configuration (useful for testing)."""
    global _config
    _config = None
