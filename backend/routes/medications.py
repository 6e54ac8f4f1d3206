from fastapi import APIRouter, Depends, HTTPException, Query, status
from datetime import datetime
from typing import List
import logging

from routes.deps import get_tracker
from schemas.medication import MedicationCreate, MedicationUpdate
from schemas.schedule import MedicationOut, SlotPreview
from services.progress_service import medication_progress
from services.schedule_service import expand_slots, format_frequency, parse_frequency, parse_time
from services.tracker_store import MedicationNotFoundError, TrackerStore
from utils.clock import get_now

router = APIRouter()


def _out(store: TrackerStore, medication_id: str) -> MedicationOut:
    med = store.get_medication(medication_id)
    return MedicationOut(**med.model_dump(), progress=medication_progress(med, store.state.log))


@router.get("/", response_model=List[MedicationOut])
def list_medications(store: TrackerStore = Depends(get_tracker)):
    return [_out(store, m.id) for m in store.state.medications]


@router.get("/preview-slots", response_model=SlotPreview)
def preview_slots(
    first_time: str = Query("08:00", description="First dose of the day, HH:MM"),
    frequency: str = Query("24h", description="Dosing interval, e.g. '8h'"),
):
    """Live preview of the slots a medication would get, same rules as save."""
    try:
        hour, minute = parse_time(first_time)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    first_time = f"{hour:02d}:{minute:02d}"
    hours = parse_frequency(frequency)
    normalized = format_frequency(hours) if hours is not None else frequency
    return SlotPreview(frequency=normalized, first_time=first_time, time_slots=expand_slots(first_time, frequency))


@router.post("/", response_model=MedicationOut, status_code=status.HTTP_201_CREATED)
def create_medication(
    data: MedicationCreate,
    store: TrackerStore = Depends(get_tracker),
    now: datetime = Depends(get_now),
):
    med = store.build_medication(data, today=now.date())
    store.add_medication(med)
    return _out(store, med.id)


@router.get("/{medication_id}", response_model=MedicationOut)
def get_medication(medication_id: str, store: TrackerStore = Depends(get_tracker)):
    try:
        return _out(store, medication_id)
    except MedicationNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{medication_id}", response_model=MedicationOut)
def update_medication(medication_id: str, data: MedicationUpdate, store: TrackerStore = Depends(get_tracker)):
    """Full replace; slots are recomputed from first_time and frequency."""
    try:
        current = store.get_medication(medication_id)
        med = store.build_medication(data, medication_id=medication_id)
        if data.start_date is None:
            med = med.model_copy(update={"start_date": current.start_date})
        store.update_medication(med)
        return _out(store, medication_id)
    except MedicationNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/{medication_id}/toggle", response_model=MedicationOut)
def toggle_medication(medication_id: str, store: TrackerStore = Depends(get_tracker)):
    """Switch between active and paused."""
    try:
        store.toggle_status(medication_id)
        return _out(store, medication_id)
    except MedicationNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{medication_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_medication(medication_id: str, store: TrackerStore = Depends(get_tracker)):
    """Delete a medication; its dose history stays in the log."""
    try:
        store.remove_medication(medication_id)
    except MedicationNotFoundError as e:
        logging.warning("Delete of unknown medication %s", medication_id)
        raise HTTPException(status_code=404, detail=str(e))
    return None
