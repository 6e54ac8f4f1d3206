from datetime import datetime
from typing import Iterable, List, Sequence

from schemas.dose_log import DoseLogEntry
from schemas.medication import Medication
from schemas.schedule import DoseSlot, TodayBuckets
from services.dose_log_service import find_entry
from services.progress_service import medication_progress
from services.schedule_service import format_time


def classify(medications: Iterable[Medication], log: Sequence[DoseLogEntry], now: datetime) -> TodayBuckets:
    """Split today's doses of active medications into late / next / taken.

    A slot with a log entry for today is 'taken' whatever the entry status
    (taken or skipped). Otherwise it is 'late' when its HH:MM sorts before
    the current HH:MM, and 'next' when not. Paused medications and
    medications without slots contribute nothing. Uses the persisted
    time_slots; the schedule is not re-expanded here.
    """
    today = now.date()
    current = format_time(now.hour, now.minute)
    late: List[DoseSlot] = []
    upcoming: List[DoseSlot] = []
    taken: List[DoseSlot] = []

    for med in medications:
        if not med.is_active:
            continue
        prog = medication_progress(med, log)
        for slot in med.time_slots or []:
            entry = find_entry(log, med.id, slot, today)
            item = DoseSlot(medication=med, time_slot=slot, log=entry, progress=prog)
            if entry is not None:
                taken.append(item)
            elif slot < current:
                late.append(item)
            else:
                upcoming.append(item)

    def by_slot(d: DoseSlot) -> str:
        return d.time_slot

    return TodayBuckets(
        late=sorted(late, key=by_slot),
        next=sorted(upcoming, key=by_slot),
        taken=sorted(taken, key=by_slot),
    )
