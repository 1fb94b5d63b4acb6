# src/models/screening.py
from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    Date,
    Float,
    Boolean,
    DateTime,
    ForeignKey,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from db.database import Base


class IPNutritionalScreening(Base):
    __tablename__ = "ip_nutritional_screening"

    screening_id = Column(Integer, primary_key=True, autoincrement=True)
    ip_no = Column("IPNo", String(50), nullable=False, index=True)
    hosp_no = Column("HospNo", String(50), nullable=True, index=True)

    # Demographic snapshot
    name = Column(String(100), nullable=False)
    ward = Column(String(100), nullable=True)
    date = Column(Date, nullable=True)
    age = Column(Integer, nullable=True)
    gender = Column(String(20), nullable=True)
    blood_group = Column(String(10), nullable=True)
    height = Column(Float, nullable=True)
    weight = Column(Float, nullable=True)
    bmi = Column(Float, nullable=True)

    # Clinical fields
    diagnosis = Column(Text, nullable=True)
    food_allergies = Column(Text, nullable=True)
    dietary_advice = Column(Text, nullable=True)

    # Therapeutic diet flags
    diet_normal = Column(Boolean, nullable=False, default=False)
    diet_soft = Column(Boolean, nullable=False, default=False)
    diet_liquid_clear = Column(Boolean, nullable=False, default=False)
    diet_liquid_full = Column(Boolean, nullable=False, default=False)
    diet_bland = Column(Boolean, nullable=False, default=False)
    diet_diabetic = Column(Boolean, nullable=False, default=False)
    diet_renal = Column(Boolean, nullable=False, default=False)
    diet_cardiac = Column(Boolean, nullable=False, default=False)
    diet_low_salt = Column(Boolean, nullable=False, default=False)
    diet_npo = Column(Boolean, nullable=False, default=False)
    diet_enteral = Column(Boolean, nullable=False, default=False)
    diet_tpn = Column(Boolean, nullable=False, default=False)
    diet_others = Column(Boolean, nullable=False, default=False)

    other_diet_note = Column(Text, nullable=True)
    feed_rate = Column(String(100), nullable=True)
    nutrient_requirements = Column(Text, nullable=True)
    attachment_path = Column(String(500), nullable=True)
    dietitian_name = Column(String(100), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    custom_fields = relationship(
        "IPCustomField",
        back_populates="screening",
        lazy="selectin",
        order_by="IPCustomField.id",
    )


class IPCustomField(Base):
    __tablename__ = "ip_custom_fields"

    id = Column(Integer, primary_key=True, autoincrement=True)
    screening_id = Column(
        Integer,
        ForeignKey("ip_nutritional_screening.screening_id"),
        nullable=False,
        index=True,
    )
    field_name = Column(String(100), nullable=False)
    field_value = Column(Text, nullable=False, default="")

    screening = relationship("IPNutritionalScreening", back_populates="custom_fields")


class OPNutritionalScreening(Base):
    __tablename__ = "op_nutritional_screening"

    screening_id = Column(Integer, primary_key=True, autoincrement=True)
    hosp_no = Column("HospNo", String(50), nullable=False, index=True)

    # Demographic snapshot
    name = Column(String(100), nullable=False)
    date = Column(Date, nullable=True)
    age = Column(Integer, nullable=True)
    gender = Column(String(20), nullable=True)
    blood_group = Column(String(10), nullable=True)
    height = Column(Float, nullable=True)
    weight = Column(Float, nullable=True)
    bmi = Column(Float, nullable=True)

    # Clinical fields
    diagnosis = Column(Text, nullable=True)
    food_allergies = Column(Text, nullable=True)
    dietary_advice = Column(Text, nullable=True)
    report_filename = Column(String(500), nullable=True)
    dietitian_name = Column(String(100), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    custom_fields = relationship(
        "OPCustomField",
        back_populates="screening",
        lazy="selectin",
        order_by="OPCustomField.id",
    )


class OPCustomField(Base):
    __tablename__ = "op_custom_fields"

    id = Column(Integer, primary_key=True, autoincrement=True)
    screening_id = Column(
        Integer,
        ForeignKey("op_nutritional_screening.screening_id"),
        nullable=False,
        index=True,
    )
    field_name = Column(String(100), nullable=False)
    field_value = Column(Text, nullable=False, default="")

    screening = relationship("OPNutritionalScreening", back_populates="custom_fields")
