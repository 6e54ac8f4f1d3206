from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime


class AskRequest(BaseModel):
    question: str = Field(..., min_length=1)


class AskResponse(BaseModel):
    reply: str


class AssistantMessageOut(BaseModel):
    id: str
    role: str
    text: str
    created_at: datetime
    provider: Optional[str] = None
    model: Optional[str] = None
    status_code: Optional[int] = None
    duration_ms: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)
