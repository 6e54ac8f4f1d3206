from fastapi import APIRouter, Depends
from typing import List, Optional

from routes.deps import get_tracker
from schemas.dose_log import DoseLogEntry, DoseStatus
from services.tracker_store import TrackerStore

router = APIRouter()


@router.get("/", response_model=List[DoseLogEntry])
def get_history(
    medication_id: Optional[str] = None,
    status: Optional[DoseStatus] = None,
    store: TrackerStore = Depends(get_tracker),
):
    """Every dose log entry, newest first, including deleted medications."""
    return store.history(medication_id=medication_id, status=status)
