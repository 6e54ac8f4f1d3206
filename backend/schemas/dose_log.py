from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
import enum

from services.schedule_service import format_time, parse_time


class DoseStatus(str, enum.Enum):
    TAKEN = "taken"
    SKIPPED = "skipped"


class DoseLogEntry(BaseModel):
    """One taken/skipped record for a scheduled slot.

    medication_name and subject_name are copied from the medication when the
    entry is written, so history stays readable after the medication is
    edited or deleted.
    """
    id: str
    medication_id: str
    medication_name: str
    subject_name: str
    timestamp: datetime
    time_slot: str
    status: DoseStatus

    model_config = ConfigDict(frozen=True, from_attributes=True)

    @property
    def day(self):
        return self.timestamp.date()


class DoseLogCreate(BaseModel):
    medication_id: str = Field(..., min_length=1)
    time_slot: str = Field(..., description="Scheduled slot being fulfilled, HH:MM")
    status: DoseStatus = DoseStatus.TAKEN

    @field_validator("time_slot")
    @classmethod
    def _time_slot(cls, v: str) -> str:
        return format_time(*parse_time(v))
