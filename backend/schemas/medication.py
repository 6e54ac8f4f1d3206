from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from datetime import date
import enum

from services.schedule_service import format_frequency, parse_frequency, parse_time


class MedicationStatus(str, enum.Enum):
    ACTIVE = "active"
    PAUSED = "paused"


def _normalize_frequency(value):
    hours = parse_frequency(value)
    if hours is None:
        return value
    return format_frequency(hours)


class Medication(BaseModel):
    """A medication schedule template for one subject (person or pet).

    time_slots is always derived from frequency + first dose time, see
    services.schedule_service.expand_slots.
    """
    id: str
    subject_name: str
    name: str
    dosage: str
    frequency: str
    time_slots: List[str] = Field(default_factory=list)
    obs1: str = ""
    obs2: str = ""
    period_days: int
    start_date: date = Field(default_factory=date.today)
    status: MedicationStatus = MedicationStatus.PAUSED

    model_config = ConfigDict(frozen=True, from_attributes=True)

    @field_validator("frequency", mode="before")
    @classmethod
    def _frequency(cls, v):
        return _normalize_frequency(v)

    @field_validator("obs1", "obs2", mode="before")
    @classmethod
    def _notes(cls, v):
        return v or ""

    @property
    def frequency_hours(self) -> Optional[int]:
        return parse_frequency(self.frequency)

    @property
    def is_active(self) -> bool:
        return self.status == MedicationStatus.ACTIVE


class MedicationCreate(BaseModel):
    """Body of POST /medications and PUT /medications/{id}.

    Slots are not accepted from the client; they are recomputed from
    first_time and frequency.
    """
    subject_name: str = Field(..., min_length=1, description="Who the medication is for")
    name: str = Field(..., min_length=1, description="Medication name")
    dosage: str = Field(..., min_length=1, description="Dosage, e.g. '1/2 comprimido' or '1ml'")
    frequency: str = Field("24h", description="Dosing interval in hours, e.g. '12h'")
    first_time: str = Field("08:00", description="First dose of the day, HH:MM")
    obs1: str = ""
    obs2: str = ""
    period_days: int = Field(10, gt=0, description="Treatment duration in days")
    start_date: Optional[date] = None
    status: MedicationStatus = MedicationStatus.PAUSED

    @field_validator("frequency", mode="before")
    @classmethod
    def _frequency(cls, v):
        hours = parse_frequency(v)
        if hours is None or hours <= 0:
            raise ValueError("frequency must be a positive number of hours, e.g. '8h'")
        return format_frequency(hours)

    @field_validator("first_time")
    @classmethod
    def _first_time(cls, v: str) -> str:
        hour, minute = parse_time(v)
        return f"{hour:02d}:{minute:02d}"


class MedicationUpdate(MedicationCreate):
    pass
