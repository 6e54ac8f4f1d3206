from datetime import date, datetime
from typing import List, Optional, Sequence, Tuple

from schemas.dose_log import DoseLogEntry, DoseStatus
from schemas.medication import Medication, MedicationStatus
from utils.ids import CounterIdGenerator

_entry_ids = CounterIdGenerator(prefix="log-")


def make_med(
    id: str = "med-1",
    slots: Sequence[str] = ("06:00", "18:00"),
    frequency: str = "12h",
    period_days: int = 10,
    status: MedicationStatus = MedicationStatus.ACTIVE,
    subject_name: str = "Sijugrino",
    name: str = "AGEMOXI 250MG",
) -> Medication:
    return Medication(
        id=id,
        subject_name=subject_name,
        name=name,
        dosage="1/2 comprimido",
        frequency=frequency,
        time_slots=list(slots),
        period_days=period_days,
        start_date=date(2026, 10, 1),
        status=status,
    )


def make_entry(
    medication_id: str = "med-1",
    time_slot: str = "06:00",
    timestamp: datetime = datetime(2026, 10, 19, 6, 5),
    status: DoseStatus = DoseStatus.TAKEN,
    id: Optional[str] = None,
) -> DoseLogEntry:
    return DoseLogEntry(
        id=id or _entry_ids.new_id(),
        medication_id=medication_id,
        medication_name="AGEMOXI 250MG",
        subject_name="Sijugrino",
        timestamp=timestamp,
        time_slot=time_slot,
        status=status,
    )


class InMemoryRepository:
    """Stand-in for SnapshotRepository that keeps the last saved snapshot."""

    def __init__(self, medications: Sequence[Medication] = (), log: Sequence[DoseLogEntry] = ()):
        self.medications: List[Medication] = list(medications)
        self.log: List[DoseLogEntry] = list(log)
        self.saves = 0

    def load(self, today: Optional[date] = None) -> Tuple[List[Medication], List[DoseLogEntry]]:
        return list(self.medications), list(self.log)

    def save(self, medications, log) -> None:
        self.medications = list(medications)
        self.log = list(log)
        self.saves += 1
