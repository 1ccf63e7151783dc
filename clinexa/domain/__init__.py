"""Domain layer for Clinexa Base.

This module contains the patient record entity, its builder and the ports
(abstract contracts) for the clock and storage collaborators.
All domain models are pure Python with no external dependencies beyond Pydantic.
"""

from .enums import Gender, Race
from .patient_record import PatientRecord, calculate_age
from .builder import PatientRecordBuilder
from .ports import (
    ClockPort,
    PatientRecordConstructionError,
    PatientRecordError,
    PatientRecordStoragePort,
    PreconditionViolation,
    Result,
    StorageError,
)

__all__ = [
    "Gender",
    "Race",
    "PatientRecord",
    "calculate_age",
    "PatientRecordBuilder",
    "ClockPort",
    "PatientRecordConstructionError",
    "PatientRecordError",
    "PatientRecordStoragePort",
    "PreconditionViolation",
    "Result",
    "StorageError",
]
