from sqlalchemy import Column, String, DateTime, Integer, Index
import uuid
from db.base import Base


class DoseLogRow(Base):
    __tablename__ = "dose_logs"
    __table_args__ = (
        Index('ix_dose_logs_medication_id', 'medication_id'),
    )
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    position = Column(Integer, nullable=False, default=0)
    # no ForeignKey: history outlives the medication it refers to
    medication_id = Column(String(36), nullable=False)
    medication_name = Column(String(255), nullable=False)
    subject_name = Column(String(255), nullable=False)
    timestamp = Column(DateTime, nullable=False)
    time_slot = Column(String(5), nullable=False)
    status = Column(String(16), nullable=False)
