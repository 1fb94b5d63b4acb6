# src/schemas/screening_schemas.py
import datetime as dt
from pydantic import Field, field_validator
from typing import Optional, List
from .base_schemas import BaseSchema, ResponseBase, blank_to_none

NUMERIC_FIELDS = ("age", "height", "weight", "bmi")


class ScreeningBase(BaseSchema):
    """Fields common to IP and OP screenings"""

    hosp_no: Optional[str] = Field(None, alias="HospNo", max_length=50)
    name: str = Field(min_length=1, max_length=100)
    date: Optional[dt.date] = None
    age: Optional[int] = Field(None, ge=0)
    gender: Optional[str] = None
    blood_group: Optional[str] = None
    height: Optional[float] = Field(None, ge=0)
    weight: Optional[float] = Field(None, ge=0)
    bmi: Optional[float] = Field(None, ge=0)
    diagnosis: Optional[str] = None
    food_allergies: Optional[str] = None
    dietary_advice: Optional[str] = None
    dietitian_name: Optional[str] = None

    @field_validator(
        "hosp_no", "date", "gender", "blood_group", "diagnosis", "food_allergies",
        "dietary_advice", "dietitian_name", *NUMERIC_FIELDS,
        mode="before",
    )
    @classmethod
    def empty_as_missing(cls, v):
        return blank_to_none(v)


class IPScreeningCreate(ScreeningBase):
    """Fixed fields of an inpatient screening submission"""

    ip_no: str = Field(alias="IPNo", min_length=1, max_length=50)
    ward: Optional[str] = None
    other_diet_note: Optional[str] = None
    feed_rate: Optional[str] = None
    nutrient_requirements: Optional[str] = None

    @field_validator(
        "ward", "other_diet_note", "feed_rate", "nutrient_requirements", mode="before"
    )
    @classmethod
    def optional_text(cls, v):
        return blank_to_none(v)


class OPScreeningCreate(ScreeningBase):
    """Fixed fields of an outpatient screening submission"""

    hosp_no: str = Field(alias="HospNo", min_length=1, max_length=50)


class CustomFieldPublic(BaseSchema):
    field_name: str
    field_value: str


class TherapeuticDiet(BaseSchema):
    normal: bool = False
    soft: bool = False
    liquidClear: bool = False
    liquidFull: bool = False
    bland: bool = False
    diabetic: bool = False
    renal: bool = False
    cardiac: bool = False
    lowSalt: bool = False
    npo: bool = False
    enteral: bool = False
    tpn: bool = False
    others: bool = False


class ScreeningPublicBase(BaseSchema):
    screening_id: int
    hosp_no: Optional[str] = Field(None, alias="HospNo")
    name: str
    date: Optional[dt.date] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    blood_group: Optional[str] = None
    height: Optional[float] = None
    weight: Optional[float] = None
    bmi: Optional[float] = None
    diagnosis: Optional[str] = None
    food_allergies: Optional[str] = None
    dietary_advice: Optional[str] = None
    dietitian_name: Optional[str] = None
    created_at: Optional[dt.datetime] = None


class IPScreeningPublic(ScreeningPublicBase):
    """Inpatient screening with the diet flags folded into one object"""

    ip_no: str = Field(alias="IPNo")
    ward: Optional[str] = None
    other_diet_note: Optional[str] = None
    feed_rate: Optional[str] = None
    nutrient_requirements: Optional[str] = None
    attachment_path: Optional[str] = None
    therapeutic_diet: TherapeuticDiet = Field(alias="therapeuticDiet")


class OPScreeningPublic(ScreeningPublicBase):
    hosp_no: str = Field(alias="HospNo")
    report_filename: Optional[str] = None
    report_path: Optional[str] = None


class ScreeningCreateResponse(ResponseBase):
    screening_id: int


class IPScreeningResponse(ResponseBase):
    screening: IPScreeningPublic
    custom_fields: List[CustomFieldPublic] = Field(alias="customFields")


class OPScreeningResponse(ResponseBase):
    screening: OPScreeningPublic
    custom_fields: List[CustomFieldPublic] = Field(alias="customFields")


class IPScreeningListResponse(ResponseBase):
    data: List[IPScreeningPublic]


class OPScreeningListResponse(ResponseBase):
    data: List[OPScreeningPublic]
