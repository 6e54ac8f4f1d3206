from sqlalchemy import Column, String, DateTime, Text, Integer
import uuid
from datetime import datetime
from db.base import Base


class AssistantMessage(Base):
    __tablename__ = "assistant_messages"
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    seq = Column(Integer, nullable=False, default=0)
    role = Column(String(16), nullable=False)  # 'user' or 'assistant'
    text = Column(Text, nullable=False)
    provider = Column(String(50), nullable=True)
    model = Column(String(100), nullable=True)
    status_code = Column(Integer, nullable=True)
    duration_ms = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=datetime.now)
