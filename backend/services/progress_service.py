import math
from typing import Any, Iterable

from schemas.dose_log import DoseLogEntry, DoseStatus
from schemas.medication import Medication
from schemas.schedule import Progress
from services.schedule_service import doses_per_day


def progress(medication_id: str, period_days: int, frequency_hours: Any, log: Iterable[DoseLogEntry]) -> Progress:
    """Doses taken vs. doses expected over the whole treatment.

    Skipped doses never count as taken and never shrink the total: the dose
    is still owed, so the end of the treatment moves later. The count runs
    over the full log for the medication, not just the treatment window.
    """
    expected = (period_days or 0) * doses_per_day(frequency_hours)
    # round half up, 4.5 expected doses -> 5
    total = max(1, int(math.floor(expected + 0.5)))
    taken = sum(1 for e in log if e.medication_id == medication_id and e.status == DoseStatus.TAKEN)
    percent = min(100.0, taken / total * 100)
    return Progress(taken=taken, total=total, percent=percent)


def medication_progress(medication: Medication, log: Iterable[DoseLogEntry]) -> Progress:
    return progress(medication.id, medication.period_days, medication.frequency_hours, log)
