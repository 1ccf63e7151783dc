"""Patient Record Entity.

This module defines the PatientRecord entity: demographic facts, vital-status dates
and an append-only clinical history for one patient, plus a dirty flag that tells
the persistence collaborator whether the instance has unsaved mutations.

Security Impact:
    - Names and dates are PII; the diagnostic representation omits them
    - Log messages reference the record id only
    - History is exposed as an immutable snapshot so no outside alias can mutate it

Architecture:
    - Pure domain model with zero infrastructure dependencies
    - Type safety enforced at runtime via Pydantic V2 (validate_assignment)
    - Immutable fields are frozen; only gender, death_date, occupation and history change
    - Instances are created exclusively through PatientRecordBuilder
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, PrivateAttr

from clinexa.domain.enums import Gender, Race
from clinexa.domain.ports import PreconditionViolation

logger = logging.getLogger(__name__)

# Handed to __init__ by _create(); anything else is a direct construction attempt.
_BUILDER_TOKEN = object()


def calculate_age(birth_date: datetime, end: datetime) -> int:
    """Whole years elapsed between two timezone-aware instants.

    Both values are normalized to UTC before comparison. A year is counted only
    once the anniversary instant has been reached.

    Parameters:
        birth_date: Start instant (date of birth)
        end: End instant (date of death or the current instant)

    Returns:
        Number of full years; negative if ``end`` precedes ``birth_date``
    """
    start = birth_date.astimezone(timezone.utc)
    finish = end.astimezone(timezone.utc)

    if finish < start:
        return -calculate_age(finish, start)

    years = finish.year - start.year
    if (finish.month, finish.day, finish.time()) < (start.month, start.day, start.time()):
        years -= 1
    return years


class PatientRecord(BaseModel):
    """Clinical record for a single patient.

    Equality and hashing are identity semantics based solely on ``id``: two
    records with the same id are equal even if every other field differs.

    ``age`` is derived once at construction from ``birth_date`` and either
    ``death_date`` or the builder's clock. It is not recomputed when
    ``set_death_date`` is called later.

    Parameters:
        id: Unique identifier assigned by the caller (e.g. a database key)
        first_name: First name (PII)
        second_name: Second name, if any (PII)
        last_name: Last name or surname (PII)
        gender: Gender; mutable
        race: Race
        birth_date: Date of birth (PII, timezone-aware)
        death_date: Date of death if deceased; mutable
        age: Whole years at construction time
        occupation: Occupation, if any; mutable
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    id: int = Field(..., frozen=True, description="Unique patient identifier")
    first_name: str = Field(..., frozen=True, min_length=1, description="First name (PII)")
    second_name: Optional[str] = Field(None, frozen=True, description="Second name (PII)")
    last_name: str = Field(..., frozen=True, min_length=1, description="Last name (PII)")
    gender: Gender = Field(Gender.UNDEFINED, description="Gender")
    race: Race = Field(..., frozen=True, description="Race")
    birth_date: AwareDatetime = Field(..., frozen=True, description="Date of birth (PII)")
    death_date: Optional[AwareDatetime] = Field(None, description="Date of death if deceased")
    age: int = Field(..., frozen=True, description="Whole years at construction")
    occupation: Optional[str] = Field(None, description="Occupation")

    _history: list[Any] = PrivateAttr(default_factory=list)
    _changed: bool = PrivateAttr(default=False)

    def __init__(self, _token: object = None, history: Optional[list[Any]] = None, **data: Any):
        if _token is not _BUILDER_TOKEN:
            raise PreconditionViolation(
                "PatientRecord instances must be created through PatientRecordBuilder"
            )
        super().__init__(**data)
        self._history = history if history is not None else []

    @classmethod
    def _create(cls, history: list[Any], **data: Any) -> 'PatientRecord':
        """Construct a record. Reserved for PatientRecordBuilder.

        ``history`` is taken over as-is; the caller must hand in a list
        nobody else holds.
        """
        return cls(_BUILDER_TOKEN, history=history, **data)

    def __copy__(self) -> 'PatientRecord':
        # model_copy() and copy.copy() share private attributes; history must not be shared.
        copied = super().__copy__()
        copied._history = list(self._history)
        return copied

    @property
    def history(self) -> tuple[Any, ...]:
        """Snapshot of the clinical history in insertion order."""
        return tuple(self._history)

    @property
    def is_deceased(self) -> bool:
        """True if a death date is recorded."""
        return self.death_date is not None

    def set_gender(self, gender: Gender) -> None:
        """Replace the gender and mark the record as changed."""
        self.gender = gender
        self._changed = True

    def set_death_date(self, death_date: Optional[datetime]) -> None:
        """Replace the death date and mark the record as changed.

        Passing None marks the patient as alive again. ``age`` keeps the value
        computed at construction.

        Parameters:
            death_date: Timezone-aware date of death, or None
        """
        self.death_date = death_date
        self._changed = True
        if self.death_date is not None and self.death_date < self.birth_date:
            logger.warning(f"Patient {self.id}: death date set earlier than birth date")

    def set_occupation(self, occupation: Optional[str]) -> None:
        """Replace the occupation and mark the record as changed."""
        self.occupation = occupation
        self._changed = True

    def append_history(self, item: Any) -> None:
        """Append an item to the end of the clinical history.

        The change exists only in this instance until a storage adapter
        persists it.

        Parameters:
            item: Opaque history record
        """
        self._history.append(item)
        self._changed = True

    def is_changed(self) -> bool:
        """Return True if the record was mutated since the last acknowledgment."""
        return self._changed

    def acknowledge_changes(self) -> None:
        """Clear the dirty flag.

        Called by the persistence collaborator after it has durably saved the
        current state.
        """
        self._changed = False

    def to_storage_dict(self) -> dict:
        """Convert to a plain dictionary for persistence.

        Returns:
            All fields plus the history as a list (the dirty flag is not persisted)
        """
        data = self.model_dump()
        data["history"] = list(self._history)
        return data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PatientRecord):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return (
            f"PatientRecord(id={self.id}, age={self.age}, gender={self.gender.name}, "
            f"deceased={self.is_deceased}, history={len(self._history)})"
        )

    __str__ = __repr__
