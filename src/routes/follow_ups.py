# src/routes/follow_ups.py
from fastapi import APIRouter, Depends, status, Form, File, UploadFile
from fastapi.responses import FileResponse
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, Optional
from db.database import get_db
from schemas.base_schemas import build_from_form
from schemas.follow_up_schemas import (
    FollowUpCreate,
    FollowUpUpdate,
    FollowUpPublic,
    FollowUpSummary,
    FollowUpCreateResponse,
    FollowUpResponse,
    FollowUpListResponse,
)
from services.follow_up_service import follow_up_service
from utils.exceptions import BadRequestException

router = APIRouter(prefix="/follow-ups", tags=["follow-ups"])


@router.post(
    "/",
    response_model=FollowUpCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create follow-up record",
    description="Record a follow-up visit with an optional PDF, Word, JPG or PNG attachment",
)
async def create_follow_up(
    ip_no: Optional[str] = Form(None, alias="IPNo"),
    name: Optional[str] = Form(None),
    date: Optional[str] = Form(None),
    diagnosis: Optional[str] = Form(None),
    notes: Optional[str] = Form(None),
    actions: Optional[str] = Form(None),
    comments: Optional[str] = Form(None),
    attachment: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """Create follow-up record endpoint"""
    if not all(value and value.strip() for value in (ip_no, name, date)):
        raise BadRequestException("IPNo, name, and date are required fields")

    follow_up_data = build_from_form(
        FollowUpCreate,
        {
            "IPNo": ip_no,
            "name": name,
            "date": date,
            "diagnosis": diagnosis,
            "notes": notes,
            "actions": actions,
            "comments": comments,
        },
    )
    record = await follow_up_service.create_follow_up(db, follow_up_data, attachment)
    return FollowUpCreateResponse(
        message="Follow-up record saved successfully",
        data=FollowUpSummary.model_validate(record),
    )


@router.get(
    "/patient/{ip_no}",
    response_model=FollowUpListResponse,
    summary="List patient follow-ups",
    description="All follow-up records for an IP number, most recent visit first",
)
async def get_patient_follow_ups(
    ip_no: str,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """Patient follow-ups endpoint"""
    records = await follow_up_service.get_patient_follow_ups(db, ip_no)
    return FollowUpListResponse(
        data=[FollowUpPublic.model_validate(record) for record in records]
    )


@router.get("/attachment/{filename}", summary="Download follow-up attachment")
async def download_follow_up_attachment(filename: str) -> Any:
    """Download follow-up attachment endpoint"""
    file_path = follow_up_service.get_attachment_path(filename)
    return FileResponse(file_path, filename=filename)


@router.get("/", response_model=FollowUpListResponse, summary="List follow-ups")
async def list_follow_ups(db: AsyncSession = Depends(get_db)) -> Any:
    """List follow-ups endpoint"""
    records = await follow_up_service.list_follow_ups(db)
    return FollowUpListResponse(
        data=[FollowUpPublic.model_validate(record) for record in records]
    )


@router.get(
    "/{follow_up_id}",
    response_model=FollowUpResponse,
    summary="Get follow-up record",
)
async def get_follow_up(
    follow_up_id: int,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """Get follow-up record endpoint"""
    record = await follow_up_service.get_follow_up(db, follow_up_id)
    return FollowUpResponse(data=FollowUpPublic.model_validate(record))


@router.put(
    "/{follow_up_id}",
    response_model=FollowUpResponse,
    summary="Update follow-up record",
    description="Merge new values into a follow-up record; empty values keep the stored ones",
)
async def update_follow_up(
    follow_up_id: int,
    ip_no: Optional[str] = Form(None, alias="IPNo"),
    name: Optional[str] = Form(None),
    date: Optional[str] = Form(None),
    diagnosis: Optional[str] = Form(None),
    notes: Optional[str] = Form(None),
    actions: Optional[str] = Form(None),
    comments: Optional[str] = Form(None),
    attachment: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """Update follow-up record endpoint"""
    update_data = build_from_form(
        FollowUpUpdate,
        {
            "IPNo": ip_no,
            "name": name,
            "date": date,
            "diagnosis": diagnosis,
            "notes": notes,
            "actions": actions,
            "comments": comments,
        },
    )
    record = await follow_up_service.update_follow_up(
        db, follow_up_id, update_data, attachment
    )
    return FollowUpResponse(
        message="Follow-up record updated successfully",
        data=FollowUpPublic.model_validate(record),
    )
