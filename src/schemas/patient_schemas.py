# src/schemas/patient_schemas.py
from pydantic import Field, field_validator
from typing import Optional, List
import datetime as dt
from .base_schemas import BaseSchema, ResponseBase, blank_to_none


class PatientBase(BaseSchema):
    """Base outpatient schema"""

    hosp_no: str = Field(alias="HospNo", min_length=1, max_length=50)
    name: str = Field(min_length=1)
    date: dt.date
    age: int = Field(ge=0)
    gender: str = Field(min_length=1)
    blood_group: Optional[str] = None
    height: Optional[float] = Field(None, ge=0)
    weight: Optional[float] = Field(None, ge=0)
    department: Optional[str] = None
    phone: Optional[str] = Field(None, pattern=r"^\d{10,15}$")
    address: Optional[str] = None


class PatientCreate(PatientBase):
    """Schema for registering an outpatient"""

    @field_validator(
        "blood_group", "height", "weight", "department", "phone", "address",
        mode="before",
    )
    @classmethod
    def empty_as_missing(cls, v):
        return blank_to_none(v)


class PatientPublic(PatientBase):
    """Public outpatient schema"""

    id: int
    created_at: Optional[dt.datetime] = None


class PatientCreateResponse(ResponseBase):
    patient_id: int = Field(alias="patientId")


class PatientResponse(ResponseBase):
    patient: PatientPublic


class PatientListResponse(ResponseBase):
    data: List[PatientPublic]
