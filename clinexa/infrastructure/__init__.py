"""Infrastructure layer: clock adapters, configuration and logging setup."""

from clinexa.infrastructure.clock import FixedClock, SystemClock

__all__ = ["FixedClock", "SystemClock"]
