# src/models/follow_up.py
from sqlalchemy import Column, Integer, String, Text, Date, DateTime
from sqlalchemy.sql import func
from db.database import Base


class FollowUpRecord(Base):
    __tablename__ = "follow_up_records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    ip_no = Column("IPNo", String(50), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    date = Column(Date, nullable=False)

    diagnosis = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    actions = Column(Text, nullable=True)
    comments = Column(Text, nullable=True)

    # Stored filename under the followups upload directory
    attachment = Column(String(500), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
