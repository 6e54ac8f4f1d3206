from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
import logging

from db.session import get_db
from models.assistant_message import AssistantMessage
from routes.deps import get_tracker
from schemas.assistant import AskRequest, AskResponse, AssistantMessageOut
from services import assistant_service
from services.tracker_store import TrackerStore
from utils.clock import get_now

router = APIRouter()


@router.post("/ask", response_model=AskResponse)
def ask(
    req: AskRequest,
    db: Session = Depends(get_db),
    store: TrackerStore = Depends(get_tracker),
    now=Depends(get_now),
):
    """Answer a question about the current medications.

    The reply is appended to the transcript; medication and dose state are
    not touched. LLM failures come back as an apology, never as an error.
    """
    medications = list(store.state.medications)
    logging.info("Assistant: question with %d medications in context", len(medications))
    reply = assistant_service.ask_with_meta(req.question, medications)

    seq = db.query(AssistantMessage).count()
    db.add(AssistantMessage(seq=seq, role="user", text=req.question, created_at=now))
    db.add(AssistantMessage(
        seq=seq + 1,
        role="assistant",
        text=reply.text,
        provider=reply.provider,
        model=reply.model,
        status_code=reply.status_code,
        duration_ms=reply.duration_ms,
        created_at=now,
    ))
    db.commit()
    return {"reply": reply.text}


@router.get("/transcript", response_model=List[AssistantMessageOut])
def transcript(db: Session = Depends(get_db)):
    return db.query(AssistantMessage).order_by(AssistantMessage.seq).all()
