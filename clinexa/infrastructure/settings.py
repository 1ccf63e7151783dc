"""Application Settings and Configuration.

This module provides application-wide settings that combine configuration
from the configuration manager with application-specific defaults.
"""

import os
from typing import Optional

from clinexa.infrastructure.config_manager import ConfigManager, RecordConfig

# Application metadata
APP_NAME = "Clinexa-Base"
APP_VERSION = "0.1.0"


class Settings:
    """Application settings loaded from configuration manager and environment.

    Record policies (clock, temporal ordering, storage) come from
    ConfigManager and are loaded lazily on first access.
    """

    def __init__(self):
        """Initialize settings from environment."""
        self._record_config: Optional[RecordConfig] = None
        self._config_manager: Optional[ConfigManager] = None

        self.app_name = os.getenv("CLX_APP_NAME", APP_NAME)

        # Logging
        self.log_level = os.getenv("CLX_LOG_LEVEL", "INFO")
        self.log_json = os.getenv("CLX_LOG_JSON", "false").lower() == "true"

    @property
    def config_manager(self) -> ConfigManager:
        """Get configuration manager instance."""
        if self._config_manager is None:
            self._config_manager = ConfigManager.from_environment()
        return self._config_manager

    @property
    def record_config(self) -> RecordConfig:
        """Get record configuration.

        Returns:
            RecordConfig instance loaded from the configuration manager
        """
        if self._record_config is None:
            self._record_config = self.config_manager.get_record_config()
        return self._record_config


# Global settings instance
settings = Settings()
