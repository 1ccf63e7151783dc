"""Unit tests for clock adapters."""

from datetime import datetime, timedelta, timezone

import pytest

from clinexa.domain.ports import ClockPort
from clinexa.infrastructure.clock import FixedClock, SystemClock


class TestSystemClock:
    """Test suite for SystemClock."""

    def test_returns_aware_utc_instant(self):
        """Test that the system clock reports UTC."""
        now = SystemClock().now()
        assert now.tzinfo is not None
        assert now.utcoffset() == timedelta(0)

    def test_implements_port(self):
        """Test that SystemClock satisfies ClockPort."""
        assert isinstance(SystemClock(), ClockPort)


class TestFixedClock:
    """Test suite for FixedClock."""

    def test_returns_pinned_instant(self):
        """Test that the fixed clock always reports the same instant."""
        instant = datetime(2023, 1, 1, tzinfo=timezone.utc)
        clock = FixedClock(instant)
        assert clock.now() == instant
        assert clock.now() == instant

    def test_rejects_naive_datetime(self):
        """Test that a naive instant is refused."""
        with pytest.raises(ValueError):
            FixedClock(datetime(2023, 1, 1))

    def test_advance(self):
        """Test moving the pinned instant forward."""
        clock = FixedClock(datetime(2023, 1, 1, tzinfo=timezone.utc))
        clock.advance(timedelta(days=1))
        assert clock.now() == datetime(2023, 1, 2, tzinfo=timezone.utc)

    def test_abstract_port_cannot_be_instantiated(self):
        """Test that ClockPort is abstract."""
        with pytest.raises(TypeError):
            ClockPort()
