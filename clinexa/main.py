"""Application wiring for Clinexa Base.

Factory functions that turn configuration into ready-to-use collaborators:
the clock that feeds age derivation, a configured PatientRecordBuilder and the
storage adapter.

Architecture:
    - Follows Hexagonal Architecture principles
    - Domain components receive their adapters here, never construct them
"""

import logging
from typing import Optional

from clinexa.adapters.storage import InMemoryPatientRecordStore
from clinexa.domain.builder import PatientRecordBuilder
from clinexa.domain.ports import ClockPort, PatientRecordStoragePort
from clinexa.infrastructure.clock import FixedClock, SystemClock
from clinexa.infrastructure.config_manager import ClockMode, RecordConfig
from clinexa.infrastructure.logging_config import setup_logging
from clinexa.infrastructure.settings import settings

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Install the log handler configured in settings."""
    setup_logging(use_json=settings.log_json, log_level=settings.log_level)


def create_clock(config: Optional[RecordConfig] = None) -> ClockPort:
    """Create the clock adapter selected by configuration.

    Parameters:
        config: Record configuration (defaults to settings.record_config)

    Returns:
        ClockPort: SystemClock or FixedClock
    """
    config = config or settings.record_config
    if config.clock_mode == ClockMode.FIXED:
        logger.info("Using fixed clock for age derivation")
        return FixedClock(config.fixed_now)
    return SystemClock()


def create_storage_adapter(config: Optional[RecordConfig] = None) -> PatientRecordStoragePort:
    """Create storage adapter based on configuration.

    Parameters:
        config: Record configuration (defaults to settings.record_config)

    Returns:
        PatientRecordStoragePort: Configured storage adapter instance

    Raises:
        ValueError: If storage type is unsupported
    """
    config = config or settings.record_config
    if config.storage_type == "memory":
        logger.info("Initializing in-memory patient record store")
        return InMemoryPatientRecordStore()
    raise ValueError(f"Unsupported storage type: {config.storage_type}")


def new_patient_builder(
    config: Optional[RecordConfig] = None,
    clock: Optional[ClockPort] = None
) -> PatientRecordBuilder:
    """Create a PatientRecordBuilder wired to the configured policies.

    Parameters:
        config: Record configuration (defaults to settings.record_config)
        clock: Clock override; built from ``config`` when omitted

    Returns:
        A fresh builder
    """
    config = config or settings.record_config
    return PatientRecordBuilder(
        clock=clock or create_clock(config),
        enforce_temporal_order=config.enforce_temporal_order,
    )
