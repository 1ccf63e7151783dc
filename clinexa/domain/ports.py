"""Domain Ports - Abstract Contracts for Record Collaborators.

This module defines the Port interfaces that Adapters must implement, together with
the Result type and the exception hierarchy shared across the domain. Following
Hexagonal Architecture, the Domain Core defines what it needs, not how it's provided.

Security Impact:
    - Exceptions carry field names, never field values (names and dates are PII)
    - Storage adapters acknowledge changes only after a durable write

Architecture:
    - Pure abstract interfaces with zero infrastructure dependencies
    - Adapters (clock, storage) implement these ports
    - The time source is injected so age derivation stays deterministic under test
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Generic, Iterable, Optional, TypeVar, Union

if TYPE_CHECKING:
    from clinexa.domain.patient_record import PatientRecord

# Type variable for Result generic
T = TypeVar('T')


# ============================================================================
# Result Type for Success/Failure Communication
# ============================================================================

@dataclass(frozen=True)
class Result(Generic[T]):
    """Result type for communicating success or failure without exceptions.

    Storage adapters return Results so callers can decide how to react to a
    failed save without wrapping every call in try/except.

    Attributes:
        success: True if the operation succeeded, False otherwise
        value: The successful result value (only present if success=True)
        error: Error information (only present if success=False)
        error_type: Type of error (StorageError, PatientRecordError, etc.)
        error_details: Additional error context (record_id, operation, etc.)

    Example:
        ```python
        result = store.save(record)
        if result.is_failure():
            logger.error(result.error)
        ```
    """

    success: bool
    value: Optional[T] = None
    error: Optional[str] = None
    error_type: Optional[str] = None
    error_details: Optional[dict] = None

    @classmethod
    def success_result(cls, value: T) -> 'Result[T]':
        """Create a successful result.

        Parameters:
            value: The successful result value

        Returns:
            Result: Success result with the value
        """
        return cls(success=True, value=value)

    @classmethod
    def failure_result(
        cls,
        error: Union[str, Exception],
        error_type: Optional[str] = None,
        error_details: Optional[dict] = None
    ) -> 'Result[T]':
        """Create a failure result.

        Parameters:
            error: Error message or exception
            error_type: Type of error (defaults to the exception class name)
            error_details: Additional context (record_id, operation, etc.)

        Returns:
            Result: Failure result with error information
        """
        error_message = str(error) if isinstance(error, Exception) else error
        error_type_name = error_type or (type(error).__name__ if isinstance(error, Exception) else "UnknownError")

        return cls(
            success=False,
            value=None,
            error=error_message,
            error_type=error_type_name,
            error_details=error_details or {}
        )

    def is_success(self) -> bool:
        """Check if result is successful."""
        return self.success

    def is_failure(self) -> bool:
        """Check if result is a failure."""
        return not self.success


# ============================================================================
# Custom Exception Hierarchy
# ============================================================================

class PatientRecordError(Exception):
    """Base exception for all patient record errors."""
    pass


class PatientRecordConstructionError(PatientRecordError):
    """Raised by the builder when a record cannot be constructed.

    The message always names the offending fields so the caller can fix the
    input. No partially built record is ever returned alongside this error.

    Attributes:
        missing_fields: Required fields that were never supplied
        details: Additional context (invalid fields, validation messages)
    """

    def __init__(
        self,
        message: str,
        missing_fields: Iterable[str] = (),
        details: Optional[dict] = None
    ):
        super().__init__(message)
        self.missing_fields = tuple(missing_fields)
        self.details = details or {}


class PreconditionViolation(PatientRecordError):
    """Raised when an operation presumes state that was never established.

    This is a programming defect, not a runtime condition to recover from.
    Examples: appending history on a builder before the history was
    initialized, or constructing a PatientRecord outside the builder.
    """
    pass


class StorageError(PatientRecordError):
    """Raised when a persistence collaborator fails.

    Attributes:
        operation: The storage operation that failed (save, get)
        details: Additional error context
    """

    def __init__(self, message: str, operation: Optional[str] = None, details: Optional[dict] = None):
        super().__init__(message)
        self.operation = operation
        self.details = details or {}


# ============================================================================
# Clock Port
# ============================================================================

class ClockPort(ABC):
    """Abstract source of the current instant.

    Age derivation for a living patient depends on "now". Injecting the clock
    keeps construction deterministic and testable.
    """

    @abstractmethod
    def now(self) -> datetime:
        """Return the current instant as a timezone-aware datetime."""
        pass


# ============================================================================
# Storage Port
# ============================================================================

class PatientRecordStoragePort(ABC):
    """Abstract persistence collaborator for patient records.

    Contract:
        - ``save`` reads every field plus ``is_changed()`` and, after a durable
          write, calls ``record.acknowledge_changes()``
        - Records that are already stored and not dirty are skipped
        - No transaction or retry support is implied; that belongs to the adapter

    Example Implementation:
        ```python
        class SQLStore(PatientRecordStoragePort):
            def save(self, record: PatientRecord) -> Result[int]:
                ...
                record.acknowledge_changes()
                return Result.success_result(1)
        ```
    """

    @abstractmethod
    def save(self, record: 'PatientRecord') -> Result[int]:
        """Persist a record if it is new or has unsaved changes.

        Parameters:
            record: The record to persist

        Returns:
            Result[int]: Number of records written (0 or 1) on success
        """
        pass

    def save_all(self, records: Iterable['PatientRecord']) -> Result[int]:
        """Persist several records, stopping at the first failure.

        Parameters:
            records: Records to persist

        Returns:
            Result[int]: Total number of records written on success
        """
        written = 0
        for record in records:
            result = self.save(record)
            if result.is_failure():
                return result
            written += result.value or 0
        return Result.success_result(written)

    @abstractmethod
    def get(self, record_id: int) -> Result['PatientRecord']:
        """Fetch a stored record by id.

        Parameters:
            record_id: Identity key of the record

        Returns:
            Result[PatientRecord]: The stored record, or a failure if absent
        """
        pass

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored records."""
        pass
