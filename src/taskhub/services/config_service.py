"""Configuration service for managing taskhub configuration.

This module provides the ConfigService class, the single source of truth for
configuration. It handles:

- Loading and saving config.json under the user config directory
- Creating a default config on first run
- Reading and writing individual keys
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir, user_data_dir
from pydantic import ValidationError

from taskhub.models.config_models import AppConfig

logger = logging.getLogger(__name__)


class ConfigService:
    """Service for managing application configuration."""

    def __init__(self):
        """Initialize the config service."""
        self.config_dir = Path(user_config_dir("taskhub"))
        self.config_path = self.config_dir / "config.json"
        self.data_dir = Path(user_data_dir("taskhub"))

        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load configuration from storage."""
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # Expected on first run
            self._config = self.create_default_config()
        except ValidationError as e:
            raise RuntimeError(f"Failed to load config: {e}") from e

        return self._config

    def save_config(self) -> None:
        """Save the current configuration to storage."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self.config.model_dump_json(indent=4))

            self.config_path.chmod(0o600)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def create_default_config(self) -> AppConfig:
        """Create and persist a configuration pointing at the user data dir."""
        self._config = AppConfig(db_path=str(self.data_dir / "taskhub.db"))
        self.save_config()
        logger.info("created default config at %s", self.config_path)
        return self._config

    def get(self, key: str) -> Any:
        """Get a configuration value by key, None if unknown."""
        return getattr(self.config, key, None)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by key and persist it.

        Raises:
            KeyError: If the key is not a configuration field
            ValueError: If the value does not validate
        """
        if key not in AppConfig.model_fields:
            raise KeyError(key)

        config_dict = self.config.model_dump()
        config_dict[key] = value
        try:
            self._config = AppConfig(**config_dict)
        except ValidationError as e:
            raise ValueError(f"Invalid value for {key}: {value}") from e
        self.save_config()

    def reset_config(self) -> None:
        """Reset configuration to defaults."""
        self._config = None
        if self.config_path.exists():
            self.config_path.unlink()
        self.create_default_config()


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    config_service = ConfigService()
    config_service.load_config()
    return config_service
