from fastapi import APIRouter, Depends, HTTPException, status
from datetime import datetime

from routes.deps import get_tracker
from schemas.dose_log import DoseLogCreate, DoseLogEntry
from schemas.schedule import TodayBuckets
from services.schedule_service import format_time, parse_time
from services.today_service import classify
from services.tracker_store import (
    DoseLogNotFoundError,
    DuplicateDoseLogError,
    MedicationNotFoundError,
    TrackerStore,
    UnknownTimeSlotError,
)
from utils.clock import get_now

router = APIRouter()


@router.get("/today", response_model=TodayBuckets)
def today(store: TrackerStore = Depends(get_tracker), now: datetime = Depends(get_now)):
    """Late, upcoming and done doses of active medications for today."""
    return classify(store.state.medications, store.state.log, now)


@router.post("/", response_model=DoseLogEntry, status_code=status.HTTP_201_CREATED)
def log_dose(data: DoseLogCreate, store: TrackerStore = Depends(get_tracker), now: datetime = Depends(get_now)):
    """Mark one of today's slots as taken or skipped."""
    try:
        state = store.log_dose(data.medication_id, data.time_slot, data.status, now)
    except MedicationNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except UnknownTimeSlotError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DuplicateDoseLogError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return state.log[0]


@router.delete("/{medication_id}/{time_slot}", status_code=status.HTTP_204_NO_CONTENT)
def undo_dose(
    medication_id: str,
    time_slot: str,
    store: TrackerStore = Depends(get_tracker),
    now: datetime = Depends(get_now),
):
    """Undo today's entry for a slot. Entries of earlier days cannot be undone."""
    try:
        slot = format_time(*parse_time(time_slot))
        store.undo_dose(medication_id, slot, day=now.date())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DoseLogNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return None
