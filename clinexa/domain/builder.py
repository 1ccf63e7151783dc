"""Patient Record Builder.

Accumulates field values through chained setters, validates them, derives the
patient's age and produces a PatientRecord. This is the only supported way to
create a record.

Security Impact:
    - Construction errors name the offending fields, never their values
    - Histories are copied on the way in and on every build, so no caller alias
      can reach into a record's history

Architecture:
    - Pure domain component; the time source is injected via ClockPort
    - Pydantic validation errors are translated into PatientRecordConstructionError
"""

import logging
from datetime import datetime
from typing import Any, Iterable, Optional

from pydantic import ValidationError as PydanticValidationError

from clinexa.domain.enums import Gender, Race
from clinexa.domain.patient_record import PatientRecord, calculate_age
from clinexa.domain.ports import (
    ClockPort,
    PatientRecordConstructionError,
    PreconditionViolation,
)

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("first_name", "last_name", "birth_date", "race")


class PatientRecordBuilder:
    """Fluent builder for PatientRecord.

    Every setter returns the builder. The history must be initialized with
    ``reset_history()`` or ``set_history()`` before ``build()``.

    A builder may be reused: each ``build()`` hands the new record its own copy
    of the pending history.

    Parameters:
        clock: Source of "now" for living patients (see clinexa.main.new_patient_builder)
        enforce_temporal_order: Reject a death date earlier than the birth date

    Example Usage:
        ```python
        record = (
            PatientRecordBuilder(clock=FixedClock(now))
            .set_id(42)
            .set_first_name("Ada")
            .set_last_name("Lovelace")
            .set_race(Race.WHITE)
            .set_birth_date(datetime(1815, 12, 10, tzinfo=timezone.utc))
            .reset_history()
            .build()
        )
        ```
    """

    def __init__(self, clock: ClockPort, enforce_temporal_order: bool = True):
        self._clock = clock
        self._enforce_temporal_order = enforce_temporal_order

        self._id: int = 0
        self._first_name: Optional[str] = None
        self._second_name: Optional[str] = None
        self._last_name: Optional[str] = None
        self._gender: Gender = Gender.UNDEFINED
        self._race: Optional[Race] = None
        self._birth_date: Optional[datetime] = None
        self._death_date: Optional[datetime] = None
        self._occupation: Optional[str] = None
        self._history: Optional[list[Any]] = None

    def set_id(self, record_id: int) -> 'PatientRecordBuilder':
        self._id = record_id
        return self

    def set_first_name(self, first_name: str) -> 'PatientRecordBuilder':
        self._first_name = first_name
        return self

    def set_second_name(self, second_name: Optional[str]) -> 'PatientRecordBuilder':
        self._second_name = second_name
        return self

    def set_last_name(self, last_name: str) -> 'PatientRecordBuilder':
        self._last_name = last_name
        return self

    def set_gender(self, gender: Gender) -> 'PatientRecordBuilder':
        self._gender = gender
        return self

    def set_race(self, race: Race) -> 'PatientRecordBuilder':
        self._race = race
        return self

    def set_birth_date(self, birth_date: datetime) -> 'PatientRecordBuilder':
        self._birth_date = birth_date
        return self

    def set_death_date(self, death_date: Optional[datetime]) -> 'PatientRecordBuilder':
        self._death_date = death_date
        return self

    def set_occupation(self, occupation: Optional[str]) -> 'PatientRecordBuilder':
        self._occupation = occupation
        return self

    def set_history(self, history: Iterable[Any]) -> 'PatientRecordBuilder':
        """Replace the pending history with a copy of ``history``."""
        self._history = list(history)
        return self

    def reset_history(self) -> 'PatientRecordBuilder':
        """Initialize the pending history to an empty list."""
        self._history = []
        return self

    def append_history(self, item: Any) -> 'PatientRecordBuilder':
        """Append an item to the pending history.

        Raises:
            PreconditionViolation: If the history was never initialized
        """
        if self._history is None:
            raise PreconditionViolation(
                "History must be initialized with reset_history() or set_history() before appending"
            )
        self._history.append(item)
        return self

    def _missing_fields(self) -> list[str]:
        missing = [name for name in REQUIRED_FIELDS if getattr(self, f"_{name}") is None]
        if self._history is None:
            missing.append("history")
        return missing

    def build(self) -> PatientRecord:
        """Validate the accumulated values and create a PatientRecord.

        Returns:
            A new PatientRecord with ``is_changed()`` False

        Raises:
            PatientRecordConstructionError: If a required field is missing, the
                history was never initialized, the death date precedes the birth
                date (when enforced), the clock returned a naive datetime, or a
                value has the wrong type
        """
        missing = self._missing_fields()
        if missing:
            raise PatientRecordConstructionError(
                f"Cannot build PatientRecord, missing required fields: {', '.join(missing)}",
                missing_fields=missing,
            )

        try:
            if (
                self._enforce_temporal_order
                and self._death_date is not None
                and self._death_date < self._birth_date
            ):
                raise PatientRecordConstructionError(
                    "Cannot build PatientRecord, death_date precedes birth_date",
                    details={"invalid_fields": ["death_date"]},
                )
            end = self._death_date
            if end is None:
                end = self._clock.now()
                if end.tzinfo is None or end.utcoffset() is None:
                    raise PatientRecordConstructionError(
                        "Cannot build PatientRecord, clock returned a naive datetime",
                        details={"invalid_fields": ["clock"]},
                    )
            age = calculate_age(self._birth_date, end)
        except (TypeError, ValueError, AttributeError) as e:
            # Naive and aware datetimes cannot be compared; plain dates have no astimezone().
            raise PatientRecordConstructionError(
                f"Cannot build PatientRecord, invalid date values: {type(e).__name__}",
                details={"invalid_fields": ["birth_date", "death_date"]},
            ) from e

        try:
            record = PatientRecord._create(
                history=list(self._history),
                id=self._id,
                first_name=self._first_name,
                second_name=self._second_name,
                last_name=self._last_name,
                gender=self._gender,
                race=self._race,
                birth_date=self._birth_date,
                death_date=self._death_date,
                age=age,
                occupation=self._occupation,
            )
        except PydanticValidationError as e:
            invalid = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
            raise PatientRecordConstructionError(
                f"Cannot build PatientRecord, invalid fields: {', '.join(invalid)}",
                details={"invalid_fields": invalid, "error_count": e.error_count()},
            ) from e

        logger.debug(f"Built patient record {record.id} (age {record.age})")
        return record
