# src/schemas/follow_up_schemas.py
import datetime as dt
from pydantic import Field, field_validator
from typing import Optional, List
from .base_schemas import BaseSchema, ResponseBase, blank_to_none


class FollowUpCreate(BaseSchema):
    ip_no: str = Field(alias="IPNo", min_length=1, max_length=50)
    name: str = Field(min_length=1)
    date: dt.date
    diagnosis: Optional[str] = None
    notes: Optional[str] = None
    actions: Optional[str] = None
    comments: Optional[str] = None

    @field_validator("diagnosis", "notes", "actions", "comments", mode="before")
    @classmethod
    def empty_as_missing(cls, v):
        return blank_to_none(v)


class FollowUpUpdate(BaseSchema):
    """Incoming values; falsy ones keep the stored value"""

    ip_no: Optional[str] = Field(None, alias="IPNo")
    name: Optional[str] = None
    date: Optional[dt.date] = None
    diagnosis: Optional[str] = None
    notes: Optional[str] = None
    actions: Optional[str] = None
    comments: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def blank_date(cls, v):
        return blank_to_none(v)


class FollowUpPublic(BaseSchema):
    id: int
    ip_no: str = Field(alias="IPNo")
    name: str
    date: dt.date
    diagnosis: Optional[str] = None
    notes: Optional[str] = None
    actions: Optional[str] = None
    comments: Optional[str] = None
    attachment: Optional[str] = None
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None


class FollowUpSummary(BaseSchema):
    id: int
    ip_no: str = Field(alias="IPNo")
    name: str
    date: dt.date
    attachment: Optional[str] = None


class FollowUpCreateResponse(ResponseBase):
    data: FollowUpSummary


class FollowUpResponse(ResponseBase):
    data: FollowUpPublic


class FollowUpListResponse(ResponseBase):
    data: List[FollowUpPublic]
