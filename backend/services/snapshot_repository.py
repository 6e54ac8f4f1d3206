import logging
from datetime import date
from typing import Iterable, List, Optional, Tuple

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.dose_log import DoseLogRow
from models.medication import MedicationRow
from schemas.dose_log import DoseLogEntry
from schemas.medication import Medication, MedicationStatus


class SnapshotError(Exception):
    """The persisted snapshot could not be read back into domain records.

    medications / log hold whichever collection was still readable, None
    for the one that failed (both None when the database itself failed).
    """

    def __init__(
        self,
        message: str,
        medications: Optional[List[Medication]] = None,
        log: Optional[List[DoseLogEntry]] = None,
    ):
        super().__init__(message)
        self.medications = medications
        self.log = log


class SnapshotRepository:
    """Loads and saves the two tracker collections as whole snapshots.

    save() is a full overwrite: every row is deleted and the given
    collections are inserted again in one transaction, last writer wins.
    """

    def __init__(self, db: Session):
        self.db = db

    def load(self, today: Optional[date] = None) -> Tuple[List[Medication], List[DoseLogEntry]]:
        today = today or date.today()
        try:
            med_rows = self.db.query(MedicationRow).order_by(MedicationRow.position).all()
            log_rows = self.db.query(DoseLogRow).order_by(DoseLogRow.position).all()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise SnapshotError(str(e)) from e

        # each collection is validated on its own so a bad medication row
        # does not cost the dose history, and the other way round
        medications = log = None
        errors = []
        try:
            medications = [self._to_medication(r, today) for r in med_rows]
        except (ValidationError, TypeError, ValueError) as e:
            errors.append(f"medications: {e}")
        try:
            log = [DoseLogEntry.model_validate(r) for r in log_rows]
        except (ValidationError, TypeError, ValueError) as e:
            errors.append(f"dose log: {e}")
        if errors:
            raise SnapshotError("; ".join(errors), medications=medications, log=log)
        return medications, log

    @staticmethod
    def _to_medication(row: MedicationRow, today: date) -> Medication:
        # Rows saved before status/start_date existed default to paused / today
        return Medication(
            id=row.id,
            subject_name=row.subject_name,
            name=row.name,
            dosage=row.dosage,
            frequency=row.frequency,
            time_slots=list(row.time_slots or []),
            obs1=row.obs1 or "",
            obs2=row.obs2 or "",
            period_days=row.period_days,
            start_date=row.start_date or today,
            status=row.status or MedicationStatus.PAUSED,
        )

    def save(self, medications: Iterable[Medication], log: Iterable[DoseLogEntry]) -> None:
        try:
            self.db.query(DoseLogRow).delete(synchronize_session=False)
            self.db.query(MedicationRow).delete(synchronize_session=False)
            # rows loaded earlier in this session would clash with the re-inserted ids
            for obj in list(self.db.identity_map.values()):
                if isinstance(obj, (MedicationRow, DoseLogRow)):
                    self.db.expunge(obj)
            for i, m in enumerate(medications):
                self.db.add(MedicationRow(
                    id=m.id,
                    position=i,
                    subject_name=m.subject_name,
                    name=m.name,
                    dosage=m.dosage,
                    frequency=m.frequency,
                    time_slots=list(m.time_slots),
                    obs1=m.obs1,
                    obs2=m.obs2,
                    period_days=m.period_days,
                    start_date=m.start_date,
                    status=m.status.value,
                ))
            for i, e in enumerate(log):
                self.db.add(DoseLogRow(
                    id=e.id,
                    position=i,
                    medication_id=e.medication_id,
                    medication_name=e.medication_name,
                    subject_name=e.subject_name,
                    timestamp=e.timestamp,
                    time_slot=e.time_slot,
                    status=e.status.value,
                ))
            self.db.commit()
        except SQLAlchemyError:
            logging.exception("Snapshot save failed; rolling back")
            self.db.rollback()
            raise
