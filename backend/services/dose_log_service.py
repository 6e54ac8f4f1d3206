from datetime import date
from typing import Callable, Iterable, List, Optional, Tuple

from schemas.dose_log import DoseLogEntry

DoseLog = Tuple[DoseLogEntry, ...]


def append(log: Iterable[DoseLogEntry], entry: DoseLogEntry) -> DoseLog:
    """Return a new log with entry at the head (newest first).

    No dedup happens here; TrackerStore.log_dose owns that policy.
    """
    return (entry,) + tuple(log)


def remove_by_key(
    log: Iterable[DoseLogEntry],
    medication_id: str,
    time_slot: str,
    day: Optional[date] = None,
) -> DoseLog:
    """Drop the entries for (medication_id, time_slot) recorded on day.

    day defaults to today. Entries from other days are never touched.
    """
    day = day or date.today()
    return tuple(
        e for e in log
        if not (e.medication_id == medication_id and e.time_slot == time_slot and e.day == day)
    )


def query(log: Iterable[DoseLogEntry], predicate: Callable[[DoseLogEntry], bool]) -> List[DoseLogEntry]:
    return [e for e in log if predicate(e)]


def find_entry(
    log: Iterable[DoseLogEntry],
    medication_id: str,
    time_slot: str,
    day: date,
) -> Optional[DoseLogEntry]:
    for e in log:
        if e.medication_id == medication_id and e.time_slot == time_slot and e.day == day:
            return e
    return None
