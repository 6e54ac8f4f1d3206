from pydantic import BaseModel
from typing import List, Optional

from schemas.dose_log import DoseLogEntry
from schemas.medication import Medication


class Progress(BaseModel):
    taken: int
    total: int
    percent: float


class DoseSlot(BaseModel):
    medication: Medication
    time_slot: str
    log: Optional[DoseLogEntry] = None
    progress: Optional[Progress] = None


class TodayBuckets(BaseModel):
    late: List[DoseSlot] = []
    next: List[DoseSlot] = []
    taken: List[DoseSlot] = []


class MedicationOut(Medication):
    progress: Progress


class SlotPreview(BaseModel):
    frequency: str
    first_time: str
    time_slots: List[str]
