"""Thread-safe singleton configuration manager for CommentWall."""

import logging
import os
import threading
from pathlib import Path
from typing import Any

import yaml

from commentwall.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

# Process environment variable that overrides api.base_url
API_URL_ENV_VAR = "COMMENTWALL_API_URL"

SUPPORTED_LOCALES = ("en_US", "ko_KR")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Default configuration template
DEFAULT_CONFIG = {
    "app": {
        "locale": "en_US",
        "log_level": "INFO",
        "version": "1.0.0",
    },
    "api": {
        "base_url": "http://localhost:3000",
        "timeout": 30,
    },
    "security": {
        "mask_logs": True,
    },
}


class ConfigManager:
    """Thread-safe singleton configuration manager.

    - Singleton pattern ensuring only one instance exists
    - Automatic settings.yaml creation if missing
    - Dot-notation key access (e.g., "api.base_url")
    - Validation rules applied by update()
    """

    _instance = None
    _lock = threading.RLock()

    def __new__(cls):
        """Ensure singleton instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        # Prevent re-initialization
        if hasattr(self, '_initialized'):
            return

        with self._lock:
            if hasattr(self, '_initialized'):
                return

            self.PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
            self.CONFIG_PATH = self.PROJECT_ROOT / "config" / "settings.yaml"

            self._config = {}
            self._instance_lock = threading.RLock()

            self._load_or_create_config()

            self._initialized = True

    def _load_or_create_config(self):
        """Load settings.yaml or create it from defaults."""
        if not self.CONFIG_PATH.exists():
            logger.info(f"Config file not found at {self.CONFIG_PATH}")
            self._config = self._deep_copy(DEFAULT_CONFIG)
            self.save()
            logger.info(f"Created default configuration at {self.CONFIG_PATH}")
            return

        try:
            with open(self.CONFIG_PATH, 'r', encoding='utf-8') as f:
                self._config = yaml.safe_load(f) or {}
            logger.info(f"Loaded configuration from {self.CONFIG_PATH}")
        except (yaml.YAMLError, OSError) as e:
            logger.error(f"Failed to read config at {self.CONFIG_PATH}: {e}")
            logger.warning("Using DEFAULT_CONFIG")
            self._config = self._deep_copy(DEFAULT_CONFIG)

    def get(self, key: str, default=None) -> Any:
        """Get configuration value using dot-notation key.

        Example:
            >>> config.get("api.timeout")
            30
        """
        with self._instance_lock:
            value = self._config
            for part in key.split('.'):
                if isinstance(value, dict) and part in value:
                    value = value[part]
                else:
                    return default
            return value

    def set(self, key: str, value: Any) -> None:
        """Set configuration value using dot-notation key. Does NOT save."""
        with self._instance_lock:
            parts = key.split('.')
            target = self._config
            for part in parts[:-1]:
                if not isinstance(target.get(part), dict):
                    target[part] = {}
                target = target[part]
            target[parts[-1]] = value

    def update(self, changes: dict) -> None:
        """Batch update from a flat dict of dot-notation keys, then save once.

        Validation Rules:
            - app.locale: must be "en_US" or "ko_KR"
            - app.log_level: must be a standard logging level name
            - api.base_url: must start with http:// or https://
            - api.timeout: integer, minimum 1
        """
        with self._instance_lock:
            for key, value in changes.items():
                validated = self._validate_key_value(key, value)
                if validated is not None:
                    self.set(key, validated)
            self.save()

    def _validate_key_value(self, key: str, value: Any) -> Any:
        """Return the value to store, or None to ignore the change."""
        if key == "app.locale":
            if value not in SUPPORTED_LOCALES:
                logger.warning(f"Invalid locale '{value}'. Ignoring.")
                return None
            return value

        if key == "app.log_level":
            level = str(value).upper()
            if level not in LOG_LEVELS:
                logger.warning(f"Invalid log level '{value}'. Ignoring.")
                return None
            return level

        if key == "api.base_url":
            if not isinstance(value, str) or not value.startswith(("http://", "https://")):
                logger.warning(f"Invalid base_url '{value}'. Must be http(s). Ignoring.")
                return None
            return value.rstrip("/")

        if key == "api.timeout":
            try:
                timeout = int(value)
            except (TypeError, ValueError):
                logger.warning(f"Invalid timeout '{value}'. Must be int. Ignoring.")
                return None
            if timeout < 1:
                logger.warning(f"api timeout {timeout} < 1. Forcing to 1.")
                return 1
            return timeout

        return value

    def get_api_base_url(self) -> str:
        """Backend base URL: the environment variable wins over settings.yaml.

        Trailing slashes are stripped so callers can append "/api/comments".
        """
        env_value = os.environ.get(API_URL_ENV_VAR, "").strip()
        if env_value:
            return env_value.rstrip("/")
        return str(self.get("api.base_url", DEFAULT_CONFIG["api"]["base_url"])).rstrip("/")

    def save(self) -> None:
        """Write current configuration to settings.yaml."""
        with self._instance_lock:
            try:
                self.CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
                with open(self.CONFIG_PATH, 'w', encoding='utf-8') as f:
                    yaml.safe_dump(self._config, f, default_flow_style=False, sort_keys=False)
                logger.debug(f"Saved configuration to {self.CONFIG_PATH}")
            except OSError as e:
                logger.error(f"Failed to save configuration: {e}")
                raise ConfigError(f"Failed to save configuration: {e}")

    @classmethod
    def reset(cls) -> None:
        """Reset singleton instance (for testing)."""
        with cls._lock:
            cls._instance = None

    @staticmethod
    def _deep_copy(obj):
        """Deep copy of nested dict/list structures."""
        if isinstance(obj, dict):
            return {k: ConfigManager._deep_copy(v) for k, v in obj.items()}
        if isinstance(obj, list):
            return [ConfigManager._deep_copy(item) for item in obj]
        return obj
