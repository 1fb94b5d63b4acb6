# src/routes/op_screening.py
from fastapi import APIRouter, Depends, status, Form, File, UploadFile
from fastapi.responses import FileResponse
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, Optional
from db.database import get_db
from schemas.base_schemas import build_from_form
from schemas.screening_schemas import (
    OPScreeningCreate,
    OPScreeningResponse,
    OPScreeningListResponse,
    ScreeningCreateResponse,
)
from services.screening_service import op_screening_service
from utils.exceptions import BadRequestException

router = APIRouter(prefix="/op-screening", tags=["op-screening"])


def screening_response(screening) -> OPScreeningResponse:
    return OPScreeningResponse(
        screening=op_screening_service.to_public(screening),
        custom_fields=op_screening_service.custom_fields_of(screening),
    )


@router.post(
    "/nutritional-screening",
    response_model=ScreeningCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create OP screening",
    description="Save an outpatient nutritional screening with custom fields and an optional report",
)
async def create_op_screening(
    hosp_no: Optional[str] = Form(None, alias="HospNo"),
    name: Optional[str] = Form(None),
    date: Optional[str] = Form(None),
    age: Optional[str] = Form(None),
    gender: Optional[str] = Form(None),
    blood_group: Optional[str] = Form(None),
    height: Optional[str] = Form(None),
    weight: Optional[str] = Form(None),
    bmi: Optional[str] = Form(None),
    diagnosis: Optional[str] = Form(None),
    food_allergies: Optional[str] = Form(None),
    dietary_advice: Optional[str] = Form(None),
    dietitian_name: Optional[str] = Form(None),
    custom_fields: Optional[str] = Form(None, alias="customFields"),
    report: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """Create OP screening endpoint"""
    if not (hosp_no and hosp_no.strip()) or not (name and name.strip()):
        raise BadRequestException("HospNo and name are required fields")

    screening_data = build_from_form(
        OPScreeningCreate,
        {
            "HospNo": hosp_no,
            "name": name,
            "date": date,
            "age": age,
            "gender": gender,
            "blood_group": blood_group,
            "height": height,
            "weight": weight,
            "bmi": bmi,
            "diagnosis": diagnosis,
            "food_allergies": food_allergies,
            "dietary_advice": dietary_advice,
            "dietitian_name": dietitian_name,
        },
    )

    screening = await op_screening_service.create_screening(
        db, screening_data, custom_fields=custom_fields, upload=report
    )
    return ScreeningCreateResponse(
        message="Screening and custom fields saved",
        screening_id=screening.screening_id,
    )


@router.get("/", response_model=OPScreeningListResponse, summary="List OP screenings")
async def list_op_screenings(
    skip: int = 0,
    limit: int = 100,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """List OP screenings endpoint"""
    screenings = await op_screening_service.list_screenings(db, skip=skip, limit=limit)
    return OPScreeningListResponse(
        data=[op_screening_service.to_public(s) for s in screenings]
    )


@router.get(
    "/record/{screening_id}",
    response_model=OPScreeningResponse,
    summary="Get OP screening by id",
)
async def get_op_screening(
    screening_id: int,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """Get OP screening by id endpoint"""
    screening = await op_screening_service.get_screening(db, screening_id)
    return screening_response(screening)


@router.get("/attachment/{filename}", summary="Download OP screening report")
async def download_op_report(filename: str) -> Any:
    """Download OP screening report endpoint"""
    file_path = op_screening_service.get_attachment_path(filename)
    return FileResponse(file_path, filename=filename)


@router.get(
    "/{hosp_no}",
    response_model=OPScreeningResponse,
    summary="Get latest OP screening",
    description="Latest OP screening for a hospital number with its custom fields",
)
async def get_latest_op_screening(
    hosp_no: str,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """Latest OP screening by hospital number endpoint"""
    screening = await op_screening_service.get_latest_by_hosp_no(db, hosp_no)
    return screening_response(screening)
