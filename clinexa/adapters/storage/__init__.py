"""Storage adapters for patient records.

This package contains implementations of PatientRecordStoragePort.
"""

from clinexa.adapters.storage.memory_adapter import InMemoryPatientRecordStore

__all__ = ['InMemoryPatientRecordStore']
