"""
================================================================================
WebUI Toolkit Common Utilities
================================================================================

This module provides shared configuration management and logging setup for
the toolkit.

Exports:
    - GlobalConfig: Singleton configuration manager
    - get_config: Convenience function to get configuration values
    - set_config: Convenience function to set configuration values
    - init_logger: Function to initialize loguru logger with standard settings

Usage:
    from webui_toolkit.common import get_config, init_logger

    init_logger()
    max_tags = get_config("html_tree.max_tags", 10_000_000)

================================================================================
"""

import os
import sys
from typing import Any, Dict, Optional

import yaml
from loguru import logger

# ============================================================
# Configuration Management
# ============================================================

DEFAULT_CONFIG: Dict[str, Any] = {
    "logging": {
        "level": "INFO",
        "rotation": "10 MB",
        "retention": "7 days",
    },
    "html_tree": {
        "max_tags": 10_000_000,
    },
    "browser": {
        "timeout": 5000,
    },
}

ENV_MAPPING: Dict[str, str] = {
    "WEBUI_LOG_LEVEL": "logging.level",
    "WEBUI_LOG_FILE": "logging.file",
    "WEBUI_MAX_TAGS": "html_tree.max_tags",
    "WEBUI_DEFAULT_TIMEOUT": "browser.timeout",
}


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merges two dictionaries, with override taking precedence.
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class GlobalConfig:
    """
    Singleton class to manage global configuration for the toolkit.

    Loads settings from a YAML configuration file and environment variables.
    Environment variables take precedence over file-based configuration.
    """
    _instance: Optional["GlobalConfig"] = None

    def __new__(cls, config_path: Optional[str] = None) -> "GlobalConfig":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[str] = None):
        if self._initialized:
            return
        self._config: Dict[str, Any] = {}
        self._config_path = config_path
        self._load_configs()
        self._initialized = True

    @classmethod
    def reset(cls) -> None:
        """Drop the singleton instance so the next access reloads everything."""
        cls._instance = None

    def _load_configs(self) -> None:
        """
        Loads configurations from YAML files and environment variables.
        """
        self._config = _deep_merge({}, DEFAULT_CONFIG)

        # Look for config in multiple locations
        config_paths = [
            "config/toolkit_config.yaml",
            os.path.join(os.path.dirname(__file__), "..", "..", "config", "toolkit_config.yaml"),
        ]
        if self._config_path:
            config_paths.insert(0, self._config_path)

        for config_path in config_paths:
            if os.path.exists(config_path):
                try:
                    with open(config_path, "r", encoding="utf-8") as f:
                        file_config = yaml.safe_load(f) or {}
                    self._config = _deep_merge(self._config, file_config)
                    logger.debug(f"Loaded configuration from {config_path}")
                    break
                except (OSError, yaml.YAMLError) as e:
                    logger.warning(f"Failed to load config from {config_path}: {e}")

        # Override with environment variables
        for env_key, config_key in ENV_MAPPING.items():
            if env_key in os.environ:
                self._set_nested(config_key, os.environ[env_key])

    def _set_nested(self, key: str, value: Any) -> None:
        """
        Sets a nested configuration value using dot notation.
        """
        keys = key.split(".")
        current = self._config
        for k in keys[:-1]:
            if k not in current or not isinstance(current[k], dict):
                current[k] = {}
            current = current[k]
        current[keys[-1]] = value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Retrieves a configuration value using dot notation.

        Args:
            key: Configuration key (e.g., "html_tree.max_tags")
            default: Default value if key is not found

        Returns:
            Configuration value or default
        """
        keys = key.split(".")
        value = self._config
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def set(self, key: str, value: Any) -> None:
        """
        Sets a configuration value.

        Args:
            key: Configuration key (e.g., "logging.level")
            value: Value to set
        """
        self._set_nested(key, value)

    def get_all(self) -> Dict[str, Any]:
        """
        Returns the entire configuration dictionary.
        """
        return self._config.copy()


def get_config(key: str, default: Any = None) -> Any:
    """
    Convenience function to get a configuration value.

    Args:
        key: Configuration key using dot notation
        default: Default value if not found

    Returns:
        Configuration value or default

    Example:
        max_tags = get_config("html_tree.max_tags", 10_000_000)
    """
    return GlobalConfig().get(key, default)


def set_config(key: str, value: Any) -> None:
    """
    Convenience function to set a configuration value.

    Args:
        key: Configuration key using dot notation
        value: Value to set
    """
    GlobalConfig().set(key, value)


# ============================================================
# Logging Setup
# ============================================================

_logger_initialized = False

DEFAULT_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


def init_logger(
    level: str = None,
    format_string: str = None,
    log_file: str = None
) -> None:
    """
    Initializes the loguru logger with standard settings.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to config value.
        format_string: Log format string. Uses default if not provided.
        log_file: Optional file path to write logs to.

    Example:
        init_logger()  # Use defaults
        init_logger(level="DEBUG", log_file="logs/toolkit.log")
    """
    global _logger_initialized

    if _logger_initialized:
        return

    # Remove default handler
    logger.remove()

    level = (level or get_config("logging.level", "INFO")).upper()
    format_string = format_string or get_config("logging.format", DEFAULT_LOG_FORMAT)

    logger.add(
        sys.stderr,
        format=format_string,
        level=level,
        colorize=True,
    )

    log_file = log_file or get_config("logging.file")
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        logger.add(
            log_file,
            format=format_string,
            level=level,
            rotation=get_config("logging.rotation", "10 MB"),
            retention=get_config("logging.retention", "7 days"),
        )

    _logger_initialized = True
    logger.debug("Logger initialized successfully")


def reset_logger() -> None:
    """Allow `init_logger` to run again (sinks are replaced on the next call)."""
    global _logger_initialized
    _logger_initialized = False


__all__ = [
    "GlobalConfig",
    "get_config",
    "set_config",
    "init_logger",
    "reset_logger",
]
