"""Unit tests for the calculate_age derivation."""

from datetime import datetime, timedelta, timezone

import pytest

from clinexa.domain.patient_record import calculate_age

UTC = timezone.utc


class TestCalculateAge:
    """Test suite for whole-year age calculation."""

    @pytest.mark.parametrize("birth, end, expected", [
        (datetime(2000, 1, 1, tzinfo=UTC), datetime(2020, 6, 15, tzinfo=UTC), 20),
        (datetime(2000, 1, 1, tzinfo=UTC), datetime(2023, 1, 1, tzinfo=UTC), 23),
        (datetime(2000, 6, 15, tzinfo=UTC), datetime(2023, 6, 15, tzinfo=UTC), 23),
        (datetime(2000, 6, 15, tzinfo=UTC), datetime(2023, 6, 14, tzinfo=UTC), 22),
        (datetime(2000, 6, 15, 12, 0, tzinfo=UTC), datetime(2023, 6, 15, 11, 59, tzinfo=UTC), 22),
        (datetime(2000, 1, 1, tzinfo=UTC), datetime(2000, 12, 31, tzinfo=UTC), 0),
        (datetime(2000, 1, 1, tzinfo=UTC), datetime(2000, 1, 1, tzinfo=UTC), 0),
    ])
    def test_whole_years(self, birth, end, expected):
        """Test year counting around anniversaries."""
        assert calculate_age(birth, end) == expected

    def test_leap_day_birth(self):
        """Test a 29 February birthday in a non-leap year."""
        birth = datetime(2004, 2, 29, tzinfo=UTC)
        assert calculate_age(birth, datetime(2023, 2, 28, tzinfo=UTC)) == 18
        assert calculate_age(birth, datetime(2023, 3, 1, tzinfo=UTC)) == 19

    def test_offsets_normalized_to_utc(self):
        """Test that differing offsets are compared as UTC instants."""
        # 2000-01-01T01:00+02:00 is 1999-12-31T23:00Z
        birth = datetime(2000, 1, 1, 1, 0, tzinfo=timezone(timedelta(hours=2)))
        end = datetime(2019, 12, 31, 23, 30, tzinfo=UTC)
        assert calculate_age(birth, end) == 20

    def test_end_before_birth_is_negative(self):
        """Test the sign when the end precedes the birth."""
        birth = datetime(2020, 6, 15, tzinfo=UTC)
        end = datetime(2000, 1, 1, tzinfo=UTC)
        assert calculate_age(birth, end) == -20
