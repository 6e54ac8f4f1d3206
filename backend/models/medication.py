from sqlalchemy import Column, String, Integer, Date, Text, Index, JSON
import uuid
from db.base import Base


class MedicationRow(Base):
    __tablename__ = "medications"
    __table_args__ = (
        Index('ix_medications_status', 'status'),
    )
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # insertion order of the snapshot, medications keep the order they were added in
    position = Column(Integer, nullable=False, default=0)
    subject_name = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    dosage = Column(String(255), nullable=False)
    frequency = Column(String(16), nullable=False)
    time_slots = Column(JSON, nullable=False, default=list)
    obs1 = Column(Text, nullable=True)
    obs2 = Column(Text, nullable=True)
    period_days = Column(Integer, nullable=False)
    # nullable for rows written before these columns existed
    start_date = Column(Date, nullable=True)
    status = Column(String(16), nullable=True)
