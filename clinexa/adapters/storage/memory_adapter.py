"""In-Memory Storage Adapter.

This adapter implements the PatientRecordStoragePort contract without any I/O.
It is the reference persistence collaborator: it honors the dirty-flag protocol
(save only new or changed records, then acknowledge) and keeps a snapshot of
what was last written.

Architecture:
    - Implements PatientRecordStoragePort (Hexagonal Architecture)
    - Isolated from domain core - only depends on ports and models
    - Not thread-safe; one owner per store
"""

import logging
from typing import Dict, Optional

from clinexa.domain.patient_record import PatientRecord
from clinexa.domain.ports import PatientRecordStoragePort, Result, StorageError

logger = logging.getLogger(__name__)


class InMemoryPatientRecordStore(PatientRecordStoragePort):
    """Dictionary-backed implementation of PatientRecordStoragePort.

    Example Usage:
        ```python
        store = InMemoryPatientRecordStore()
        record.append_history(visit)
        result = store.save(record)
        assert result.value == 1 and not record.is_changed()
        ```
    """

    def __init__(self):
        self._records: Dict[int, PatientRecord] = {}
        self._snapshots: Dict[int, dict] = {}

    def save(self, record: PatientRecord) -> Result[int]:
        """Persist a record if it is new or has unsaved changes.

        Records are keyed by id. Saving a different instance whose id is
        already stored replaces the stored instance and is always written.

        Parameters:
            record: The record to persist

        Returns:
            Result[int]: 1 if written, 0 if skipped as unchanged
        """
        stored = self._records.get(record.id)
        if stored is record and not record.is_changed():
            logger.debug(f"Patient {record.id} unchanged, skipping save")
            return Result.success_result(0)

        if stored is not None and stored is not record:
            logger.info(f"Patient {record.id}: replacing stored instance")
        self._records[record.id] = record
        self._snapshots[record.id] = record.to_storage_dict()
        record.acknowledge_changes()
        logger.info(f"Saved patient {record.id}")
        return Result.success_result(1)

    def get(self, record_id: int) -> Result[PatientRecord]:
        """Fetch a stored record by id."""
        record = self._records.get(record_id)
        if record is None:
            return Result.failure_result(
                StorageError(f"Patient {record_id} not found", operation="get"),
                error_details={"record_id": record_id},
            )
        return Result.success_result(record)

    def get_snapshot(self, record_id: int) -> Optional[dict]:
        """Return the field values captured at the last save, if any."""
        snapshot = self._snapshots.get(record_id)
        return dict(snapshot) if snapshot is not None else None

    def count(self) -> int:
        return len(self._records)
