"""Shared fixtures for Clinexa Base tests."""

from datetime import datetime, timezone

import pytest

from clinexa.domain.builder import PatientRecordBuilder
from clinexa.domain.enums import Gender, Race
from clinexa.infrastructure.clock import FixedClock

BIRTH_DATE = datetime(2000, 1, 1, tzinfo=timezone.utc)
CLOCK_NOW = datetime(2023, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock():
    """Clock pinned to 2023-01-01T00:00Z."""
    return FixedClock(CLOCK_NOW)


@pytest.fixture
def builder(fixed_clock):
    """Builder with every required field populated and an empty history."""
    return (
        PatientRecordBuilder(clock=fixed_clock)
        .set_id(1)
        .set_first_name("John")
        .set_last_name("Doe")
        .set_gender(Gender.MALE)
        .set_race(Race.WHITE)
        .set_birth_date(BIRTH_DATE)
        .reset_history()
    )


@pytest.fixture
def make_record(fixed_clock):
    """Factory building a record with the given id and optional overrides."""
    def _make(record_id=1, **overrides):
        builder = (
            PatientRecordBuilder(clock=fixed_clock)
            .set_id(record_id)
            .set_first_name(overrides.get("first_name", "John"))
            .set_last_name(overrides.get("last_name", "Doe"))
            .set_gender(overrides.get("gender", Gender.MALE))
            .set_race(overrides.get("race", Race.WHITE))
            .set_birth_date(overrides.get("birth_date", BIRTH_DATE))
            .set_occupation(overrides.get("occupation"))
            .reset_history()
        )
        return builder.build()
    return _make
