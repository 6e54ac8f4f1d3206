from fastapi import Depends
from sqlalchemy.orm import Session

from core.config import settings
from db.session import get_db
from services.seed_data import default_medications
from services.snapshot_repository import SnapshotRepository
from services.tracker_store import TrackerStore
from utils.clock import get_now
from utils.ids import IdGenerator, get_id_generator


def get_tracker(
    db: Session = Depends(get_db),
    ids: IdGenerator = Depends(get_id_generator),
    now=Depends(get_now),
) -> TrackerStore:
    """A TrackerStore loaded from the database for the current request."""
    store = TrackerStore(
        SnapshotRepository(db),
        id_generator=ids,
        seed=default_medications if settings.SEED_DEFAULT_DATA else None,
    )
    store.load(today=now.date())
    return store
