"""Configuration Manager for Record Policies.

This module loads the settings that govern how patient records are built and
stored: which clock feeds age derivation, whether temporal ordering is enforced,
and which storage adapter is used.

Security Impact:
    - Configuration values are validated before use (fail fast)
    - Configuration files with permissive modes are reported

Architecture:
    - Infrastructure layer, isolated from the domain
    - Supports environment variables (with optional .env) and JSON files
    - Type-safe configuration using Pydantic models
"""

import json
import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from pydantic import AwareDatetime, BaseModel, Field, field_validator, model_validator

logger = logging.getLogger(__name__)


class ClockMode(str, Enum):
    """Enumeration of supported clock sources."""
    SYSTEM = "system"
    FIXED = "fixed"


class RecordConfig(BaseModel):
    """Record construction and storage configuration.

    Parameters:
        clock_mode: Which clock feeds age derivation (system or fixed)
        fixed_now: Instant reported by the fixed clock (required for fixed mode)
        enforce_temporal_order: Reject death dates earlier than birth dates at build time
        storage_type: Storage adapter to use
    """

    clock_mode: ClockMode = Field(default=ClockMode.SYSTEM, description="Clock source")
    fixed_now: Optional[AwareDatetime] = Field(None, description="Pinned instant for fixed clock")
    enforce_temporal_order: bool = Field(default=True, description="Reject death before birth")
    storage_type: str = Field(default="memory", description="Storage adapter type")

    @field_validator("clock_mode", mode="before")
    @classmethod
    def normalize_clock_mode(cls, v: Any) -> Any:
        """Accept clock mode names case-insensitively."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("storage_type")
    @classmethod
    def validate_storage_type(cls, v: str) -> str:
        """Validate storage type."""
        supported_types = ["memory"]
        if v.lower() not in supported_types:
            raise ValueError(f"Unsupported storage type: {v}. Supported: {supported_types}")
        return v.lower()

    @model_validator(mode='after')
    def check_fixed_clock(self) -> 'RecordConfig':
        """A fixed clock needs an instant to report."""
        if self.clock_mode == ClockMode.FIXED and self.fixed_now is None:
            raise ValueError("clock_mode 'fixed' requires fixed_now")
        return self


def _parse_bool(value: Optional[str], default: bool) -> bool:
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class ConfigManager:
    """Configuration manager for record policies.

    Example Usage:
        ```python
        # Load from environment variables
        config = ConfigManager.from_environment()
        record_config = config.get_record_config()

        # Load from file
        config = ConfigManager.from_file("clinexa.json")
        record_config = config.get_record_config()
        ```
    """

    def __init__(self, config_data: Dict[str, Any]):
        """Initialize configuration manager.

        Parameters:
            config_data: Configuration dictionary
        """
        self._config_data = config_data
        self._record_config: Optional[RecordConfig] = None

    @classmethod
    def from_environment(cls) -> 'ConfigManager':
        """Load configuration from environment variables.

        Environment Variables:
            - CLX_CLOCK_MODE: Clock source (system, fixed)
            - CLX_FIXED_NOW: ISO-8601 instant with offset, for the fixed clock
            - CLX_ENFORCE_TEMPORAL_ORDER: true/false
            - CLX_STORAGE_TYPE: Storage adapter (memory)

        Returns:
            ConfigManager instance
        """
        env_path = Path(__file__).parent.parent.parent / ".env"
        if env_path.exists():
            load_dotenv(env_path)
            logger.debug(f"Loaded environment variables from {env_path}")

        config_data = {
            "records": {
                "clock_mode": os.getenv("CLX_CLOCK_MODE", ClockMode.SYSTEM.value),
                "fixed_now": os.getenv("CLX_FIXED_NOW") or None,
                "enforce_temporal_order": _parse_bool(os.getenv("CLX_ENFORCE_TEMPORAL_ORDER"), True),
                "storage_type": os.getenv("CLX_STORAGE_TYPE", "memory"),
            }
        }

        return cls(config_data)

    @classmethod
    def from_file(cls, config_path: str) -> 'ConfigManager':
        """Load configuration from a JSON file.

        Parameters:
            config_path: Path to configuration file

        Returns:
            ConfigManager instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config file is invalid
        """
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        stat_info = config_file.stat()
        if stat_info.st_mode & 0o077 != 0:
            logger.warning(
                f"Configuration file has overly permissive permissions: {config_path}. "
                "Consider setting to 600."
            )

        try:
            with open(config_file, 'r') as f:
                config_data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in configuration file: {str(e)}")

        return cls(config_data)

    def get_record_config(self) -> RecordConfig:
        """Get the validated record configuration.

        Returns:
            RecordConfig instance

        Raises:
            pydantic.ValidationError: If the configuration is invalid
        """
        if self._record_config is None:
            self._record_config = RecordConfig(**self._config_data.get("records", {}))
        return self._record_config

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key.

        Parameters:
            key: Configuration key (supports dot notation, e.g., "records.clock_mode")
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split(".")
        value = self._config_data

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default

        return value if value is not None else default


def get_record_config() -> RecordConfig:
    """Convenience function to get record configuration from environment.

    Returns:
        RecordConfig instance
    """
    return ConfigManager.from_environment().get_record_config()
