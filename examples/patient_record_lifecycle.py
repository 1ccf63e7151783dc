"""Example: Patient Record Lifecycle.

This example demonstrates the lifecycle of a single patient record:
1. Builder -> validation -> age derivation -> PatientRecord
2. Mutation -> dirty flag -> storage save -> acknowledgment
3. Construction errors naming the missing fields
"""

import sys
from datetime import datetime, timezone
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from clinexa.domain.enums import Gender, Race
from clinexa.domain.ports import PatientRecordConstructionError
from clinexa.infrastructure.clock import FixedClock
from clinexa.infrastructure.config_manager import RecordConfig
from clinexa.main import configure_logging, create_storage_adapter, new_patient_builder


def main():
    configure_logging()
    config = RecordConfig(clock_mode="fixed", fixed_now=datetime(2023, 1, 1, tzinfo=timezone.utc))
    store = create_storage_adapter(config)

    record = (
        new_patient_builder(config)
        .set_id(1)
        .set_first_name("John")
        .set_last_name("Doe")
        .set_gender(Gender.MALE)
        .set_race(Race.WHITE)
        .set_birth_date(datetime(2000, 1, 1, tzinfo=timezone.utc))
        .reset_history()
        .append_history("initial consultation")
        .build()
    )
    print(f"SUCCESS: Built {record}")
    print(f"  Changed after build: {record.is_changed()}")

    store.save(record)
    record.append_history("follow-up visit")
    record.set_occupation("Carpenter")
    print(f"  Changed after mutation: {record.is_changed()}")

    result = store.save(record)
    print(f"  Saved: {result.value} record(s), changed now: {record.is_changed()}")

    try:
        new_patient_builder(config, clock=FixedClock(datetime(2023, 1, 1, tzinfo=timezone.utc))).build()
    except PatientRecordConstructionError as e:
        print(f"ERROR (expected): {e}")
        print(f"  Missing fields: {', '.join(e.missing_fields)}")


if __name__ == "__main__":
    main()
