import logging
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Callable, List, Optional, Protocol, Sequence, Tuple

from schemas.dose_log import DoseLogEntry, DoseStatus
from schemas.medication import Medication, MedicationCreate, MedicationStatus
from services import dose_log_service
from services.schedule_service import expand_slots
from services.snapshot_repository import SnapshotError
from utils.ids import IdGenerator, UuidIdGenerator


class TrackerError(Exception):
    pass


class MedicationNotFoundError(TrackerError):
    def __init__(self, medication_id: str):
        super().__init__(f"Medication {medication_id} not found")
        self.medication_id = medication_id


class UnknownTimeSlotError(TrackerError):
    def __init__(self, medication_id: str, time_slot: str):
        super().__init__(f"{time_slot} is not a scheduled slot of medication {medication_id}")
        self.medication_id = medication_id
        self.time_slot = time_slot


class DuplicateDoseLogError(TrackerError):
    def __init__(self, entry: DoseLogEntry):
        super().__init__(
            f"Dose {entry.time_slot} of medication {entry.medication_id} already logged as {entry.status.value} on {entry.day}"
        )
        self.entry = entry


class DoseLogNotFoundError(TrackerError):
    def __init__(self, medication_id: str, time_slot: str, day: date):
        super().__init__(f"No entry for {medication_id} at {time_slot} on {day}")
        self.medication_id = medication_id
        self.time_slot = time_slot
        self.day = day


class ReadOnlySnapshotError(TrackerError):
    def __init__(self):
        super().__init__("Stored dose history is unreadable; changes are disabled until it is repaired")


class Repository(Protocol):
    def load(self, today: Optional[date] = None) -> Tuple[List[Medication], List[DoseLogEntry]]: ...

    def save(self, medications: Sequence[Medication], log: Sequence[DoseLogEntry]) -> None: ...


@dataclass(frozen=True)
class TrackerState:
    medications: Tuple[Medication, ...] = ()
    log: Tuple[DoseLogEntry, ...] = ()

    def get_medication(self, medication_id: str) -> Optional[Medication]:
        for m in self.medications:
            if m.id == medication_id:
                return m
        return None


class TrackerStore:
    """Holds the medications and the dose log as one immutable snapshot.

    load() reads the snapshot from the repository at startup. Every mutation
    builds a new TrackerState, persists it with save() and returns it.

    Unreadable medications are replaced by the seed dataset; a readable log
    is kept alongside. When the log itself is unreadable the store becomes
    read-only, since saving would overwrite the stored history.
    """

    def __init__(
        self,
        repository: Repository,
        id_generator: Optional[IdGenerator] = None,
        seed: Optional[Callable[[], List[Medication]]] = None,
    ):
        self.repository = repository
        self.ids = id_generator or UuidIdGenerator()
        self.seed = seed
        self.read_only = False
        self._state = TrackerState()

    @property
    def state(self) -> TrackerState:
        return self._state

    # -- lifecycle -----------------------------------------------------

    def load(self, today: Optional[date] = None) -> TrackerState:
        self.read_only = False
        try:
            medications, log = self.repository.load(today)
        except SnapshotError as e:
            logging.exception("Saved tracker data is unreadable; falling back to the default dataset")
            if e.medications is None:
                medications = self.seed() if self.seed else []
            else:
                medications = e.medications
            if e.log is None:
                logging.error("Dose history could not be read; tracker is read-only")
                self.read_only = True
            self._state = TrackerState(medications=tuple(medications), log=tuple(e.log or ()))
            return self._state

        self._state = TrackerState(medications=tuple(medications), log=tuple(log))
        if not medications and self.seed:
            logging.info("No medications stored; seeding the default dataset")
            self._commit(replace(self._state, medications=tuple(self.seed())))
        return self._state

    def save(self) -> None:
        self.repository.save(self._state.medications, self._state.log)

    def _commit(self, state: TrackerState) -> TrackerState:
        if self.read_only:
            raise ReadOnlySnapshotError()
        self._state = state
        self.save()
        return state

    # -- medications ---------------------------------------------------

    def get_medication(self, medication_id: str) -> Medication:
        med = self._state.get_medication(medication_id)
        if med is None:
            raise MedicationNotFoundError(medication_id)
        return med

    def build_medication(
        self,
        data: MedicationCreate,
        medication_id: Optional[str] = None,
        today: Optional[date] = None,
    ) -> Medication:
        """Turn a create/update body into a Medication, recomputing its slots."""
        return Medication(
            id=medication_id or self.ids.new_id(),
            subject_name=data.subject_name,
            name=data.name,
            dosage=data.dosage,
            frequency=data.frequency,
            time_slots=expand_slots(data.first_time, data.frequency),
            obs1=data.obs1,
            obs2=data.obs2,
            period_days=data.period_days,
            start_date=data.start_date or today or date.today(),
            status=data.status,
        )

    def add_medication(self, medication: Medication) -> TrackerState:
        logging.info("Adding medication %s (%s) for %s", medication.id, medication.name, medication.subject_name)
        return self._commit(replace(self._state, medications=self._state.medications + (medication,)))

    def update_medication(self, medication: Medication) -> TrackerState:
        self.get_medication(medication.id)
        meds = tuple(medication if m.id == medication.id else m for m in self._state.medications)
        logging.info("Updated medication %s", medication.id)
        return self._commit(replace(self._state, medications=meds))

    def set_status(self, medication_id: str, status: MedicationStatus) -> TrackerState:
        med = self.get_medication(medication_id)
        return self.update_medication(med.model_copy(update={"status": status}))

    def toggle_status(self, medication_id: str) -> TrackerState:
        med = self.get_medication(medication_id)
        status = MedicationStatus.PAUSED if med.is_active else MedicationStatus.ACTIVE
        return self.set_status(medication_id, status)

    def remove_medication(self, medication_id: str) -> TrackerState:
        """Delete a medication. Its dose history is kept."""
        self.get_medication(medication_id)
        meds = tuple(m for m in self._state.medications if m.id != medication_id)
        logging.info("Removed medication %s", medication_id)
        return self._commit(replace(self._state, medications=meds))

    # -- dose log ------------------------------------------------------

    def log_dose(self, medication_id: str, time_slot: str, status: DoseStatus, now: datetime) -> TrackerState:
        """Record a slot of today as taken or skipped.

        Only one entry per (medication, slot, day) is accepted.
        """
        med = self.get_medication(medication_id)
        if time_slot not in med.time_slots:
            raise UnknownTimeSlotError(medication_id, time_slot)
        existing = dose_log_service.find_entry(self._state.log, medication_id, time_slot, now.date())
        if existing is not None:
            raise DuplicateDoseLogError(existing)

        entry = DoseLogEntry(
            id=self.ids.new_id(),
            medication_id=med.id,
            medication_name=med.name,
            subject_name=med.subject_name,
            timestamp=now,
            time_slot=time_slot,
            status=status,
        )
        logging.info("Dose %s of %s marked %s", time_slot, med.id, status.value)
        return self._commit(replace(self._state, log=dose_log_service.append(self._state.log, entry)))

    def undo_dose(self, medication_id: str, time_slot: str, day: Optional[date] = None) -> TrackerState:
        """Remove today's entry for a slot; earlier days are never changed."""
        day = day or date.today()
        log = dose_log_service.remove_by_key(self._state.log, medication_id, time_slot, day)
        if len(log) == len(self._state.log):
            raise DoseLogNotFoundError(medication_id, time_slot, day)
        logging.info("Undid dose %s of %s on %s", time_slot, medication_id, day)
        return self._commit(replace(self._state, log=log))

    def history(
        self,
        medication_id: Optional[str] = None,
        status: Optional[DoseStatus] = None,
    ) -> List[DoseLogEntry]:
        return dose_log_service.query(
            self._state.log,
            lambda e: (medication_id is None or e.medication_id == medication_id)
            and (status is None or e.status == status),
        )
