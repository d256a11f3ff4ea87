"""Thread-safe singleton configuration manager for ThreadScribe."""

import logging
import threading
from pathlib import Path
from typing import Any

import yaml

from src.core.exceptions import ConfigError
from src.core.types import ThreadSelectors

logger = logging.getLogger(__name__)


# Default configuration template
DEFAULT_CONFIG = {
    "app": {
        "version": "0.1.0",
        "log_level": "INFO",
    },
    "fetch": {
        "timeout": 30,
        "max_retries": 3,
        "user_agent": "desktop:threadscribe:v0.1.0 (thread to markdown exporter)",
    },
    "export": {
        "output_dir": "exports",
        "overwrite": True,
    },
    "gui": {
        "settle_delay_ms": 2000,
    },
    "selectors": {
        "post": "shreddit-post",
        "post_body": '[id$="-post-rtjson-content"]',
        "comment_tree": "shreddit-comment-tree",
        "comment": "shreddit-comment",
        "comment_body": '[id$="-comment-rtjson-content"] > div',
    },
    "security": {
        "mask_logs": True,
    },
}

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigManager:
    """Thread-safe singleton configuration manager.

    Manages application configuration with:
    - Singleton pattern ensuring only one instance exists
    - Thread-safe operations using RLock
    - Automatic settings.yaml creation if missing
    - Dot-notation key access (e.g., "fetch.timeout")
    - Validation rules for critical settings
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
        """Initialize configuration manager."""
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
        if self.CONFIG_PATH.exists():
            try:
                with open(self.CONFIG_PATH, 'r', encoding='utf-8') as f:
                    self._config = yaml.safe_load(f) or {}
                logger.info(f"Loaded configuration from {self.CONFIG_PATH}")
            except yaml.YAMLError as e:
                logger.error(f"Failed to parse YAML at {self.CONFIG_PATH}: {e}")
                logger.warning("Using DEFAULT_CONFIG due to parse error")
                self._config = self._deep_copy(DEFAULT_CONFIG)
            except OSError as e:
                logger.error(f"Could not read config: {e}")
                logger.warning("Using DEFAULT_CONFIG")
                self._config = self._deep_copy(DEFAULT_CONFIG)
        else:
            logger.info(f"Config file not found at {self.CONFIG_PATH}")
            self.CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
            self._config = self._deep_copy(DEFAULT_CONFIG)
            self.save()
            logger.info(f"Created default configuration at {self.CONFIG_PATH}")

    def get(self, key: str, default=None) -> Any:
        """Get configuration value using dot-notation key.

        Args:
            key: Dot-separated key path (e.g., "fetch.timeout")
            default: Value to return if key not found

        Returns:
            Configuration value or default

        Example:
            >>> config.get("gui.settle_delay_ms")
            2000
        """
        with self._instance_lock:
            parts = key.split('.')
            value = self._config

            for part in parts:
                if isinstance(value, dict) and part in value:
                    value = value[part]
                else:
                    return default

            return value

    def set(self, key: str, value: Any) -> None:
        """Set configuration value using dot-notation key.

        Note: This does NOT save to disk. Use save() to persist changes.
        """
        with self._instance_lock:
            parts = key.split('.')
            target = self._config

            for part in parts[:-1]:
                if part not in target:
                    target[part] = {}
                target = target[part]

            target[parts[-1]] = value

    def update(self, changes: dict) -> None:
        """Batch update configuration from flat dict of dot-notation keys.

        Applies validation rules and saves to disk once after all updates.

        Validation Rules:
            - app.log_level: one of DEBUG, INFO, WARNING, ERROR, CRITICAL
            - fetch.timeout: minimum 5
            - fetch.max_retries: 0-10
            - gui.settle_delay_ms: minimum 0
        """
        with self._instance_lock:
            validated_changes = {}

            for key, value in changes.items():
                validated_value = self._validate_key_value(key, value)
                if validated_value is not None:
                    validated_changes[key] = validated_value

            for key, value in validated_changes.items():
                self.set(key, value)

            self.save()

    def _validate_key_value(self, key: str, value: Any) -> Any:
        """Apply validation rules to key-value pair.

        Returns:
            Validated value or None if invalid (will be ignored)
        """
        if key == "app.log_level":
            level = str(value).upper()
            if level not in _LOG_LEVELS:
                logger.warning(f"Invalid log level '{value}'. Ignoring.")
                return None
            return level

        if key == "fetch.timeout":
            try:
                timeout = int(value)
                if timeout < 5:
                    logger.warning(f"fetch timeout {timeout} < 5. Forcing to 5.")
                    return 5
                return timeout
            except (TypeError, ValueError):
                logger.warning(f"Invalid fetch timeout '{value}'. Must be int. Ignoring.")
                return None

        if key == "fetch.max_retries":
            try:
                retries = int(value)
                if not (0 <= retries <= 10):
                    logger.warning(f"max_retries {retries} out of range [0, 10]. Forcing to 3.")
                    return 3
                return retries
            except (TypeError, ValueError):
                logger.warning(f"Invalid max_retries '{value}'. Must be int. Ignoring.")
                return None

        if key == "gui.settle_delay_ms":
            try:
                delay = int(value)
                if delay < 0:
                    logger.warning(f"settle_delay_ms {delay} < 0. Forcing to 0.")
                    return 0
                return delay
            except (TypeError, ValueError):
                logger.warning(f"Invalid settle_delay_ms '{value}'. Must be int. Ignoring.")
                return None

        return value

    def save(self) -> None:
        """Write current configuration to settings.yaml."""
        with self._instance_lock:
            try:
                self.CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
                with open(self.CONFIG_PATH, 'w', encoding='utf-8') as f:
                    yaml.safe_dump(self._config, f, default_flow_style=False, sort_keys=False)
                logger.debug(f"Saved configuration to {self.CONFIG_PATH}")
            except (OSError, yaml.YAMLError) as e:
                logger.error(f"Failed to save configuration: {e}")
                raise ConfigError(f"Failed to save configuration: {e}")

    def get_output_dir(self) -> Path:
        """Get the export directory.

        Relative values resolve against PROJECT_ROOT.
        """
        with self._instance_lock:
            out = Path(self.get("export.output_dir", "exports"))
            if out.is_absolute():
                return out
            return self.PROJECT_ROOT / out

    def get_selectors(self) -> ThreadSelectors:
        """Build ThreadSelectors, falling back to defaults for missing keys."""
        defaults = DEFAULT_CONFIG["selectors"]
        return ThreadSelectors(**{
            name: self.get(f"selectors.{name}", default) or default
            for name, default in defaults.items()
        })

    @classmethod
    def reset(cls) -> None:
        """Reset singleton instance (for testing)."""
        with cls._lock:
            cls._instance = None

    @staticmethod
    def _deep_copy(obj):
        """Create a deep copy of nested dict/list structures."""
        if isinstance(obj, dict):
            return {k: ConfigManager._deep_copy(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [ConfigManager._deep_copy(item) for item in obj]
        else:
            return obj
