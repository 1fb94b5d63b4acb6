# src/models/patient.py
from sqlalchemy import Column, Integer, String, Text, Date, Float, DateTime
from sqlalchemy.sql import func
from db.database import Base


class OPPatient(Base):
    __tablename__ = "op_patients"

    id = Column(Integer, primary_key=True, autoincrement=True)
    hosp_no = Column("HospNo", String(50), nullable=False, unique=True, index=True)

    # Personal information
    name = Column(String(100), nullable=False)
    date = Column(Date, nullable=False)  # registration date
    age = Column(Integer, nullable=False)
    gender = Column(String(20), nullable=False)
    blood_group = Column(String(10), nullable=True)
    height = Column(Float, nullable=True)
    weight = Column(Float, nullable=True)

    # Contact information
    department = Column(String(100), nullable=True)
    phone = Column(String(15), nullable=True)
    address = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
