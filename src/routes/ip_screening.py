# src/routes/ip_screening.py
from fastapi import APIRouter, Depends, status, Form, File, UploadFile
from fastapi.responses import FileResponse
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, Optional
from db.database import get_db
from schemas.base_schemas import build_from_form
from schemas.screening_schemas import (
    IPScreeningCreate,
    IPScreeningResponse,
    IPScreeningListResponse,
    ScreeningCreateResponse,
)
from services.screening_service import ip_screening_service
from utils.exceptions import BadRequestException
from utils.logger import setup_logger

router = APIRouter(prefix="/ipnutritional-screening", tags=["ip-screening"])
logger = setup_logger("IP_SCREENING_ROUTES")


def screening_response(screening) -> IPScreeningResponse:
    return IPScreeningResponse(
        screening=ip_screening_service.to_public(screening),
        custom_fields=ip_screening_service.custom_fields_of(screening),
    )


@router.post(
    "/ip-nutritional-screening",
    response_model=ScreeningCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create IP screening",
    description="Save an inpatient nutritional screening with custom fields and an optional attachment",
)
async def create_ip_screening(
    ip_no: Optional[str] = Form(None, alias="IPNo"),
    hosp_no: Optional[str] = Form(None, alias="HospNo"),
    name: Optional[str] = Form(None),
    ward: Optional[str] = Form(None),
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
    feed_rate: Optional[str] = Form(None),
    nutrient_requirements: Optional[str] = Form(None),
    other_diet_note: Optional[str] = Form(None),
    dietitian_name: Optional[str] = Form(None),
    therapeutic_diet: Optional[str] = Form(None),
    custom_fields: Optional[str] = Form(None, alias="customFields"),
    attachment_path: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """Create IP screening endpoint"""
    if not (ip_no and ip_no.strip()) or not (name and name.strip()):
        raise BadRequestException("IPNo and name are required fields")

    screening_data = build_from_form(
        IPScreeningCreate,
        {
            "IPNo": ip_no,
            "HospNo": hosp_no,
            "name": name,
            "ward": ward,
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
            "feed_rate": feed_rate,
            "nutrient_requirements": nutrient_requirements,
            "other_diet_note": other_diet_note,
            "dietitian_name": dietitian_name,
        },
    )

    screening = await ip_screening_service.create_screening(
        db,
        screening_data,
        therapeutic_diet=therapeutic_diet,
        custom_fields=custom_fields,
        upload=attachment_path,
    )
    return ScreeningCreateResponse(
        message="IP Nutritional Screening saved successfully",
        screening_id=screening.screening_id,
    )


@router.get(
    "/",
    response_model=IPScreeningListResponse,
    summary="List IP screenings",
)
async def list_ip_screenings(
    skip: int = 0,
    limit: int = 100,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """List IP screenings endpoint"""
    screenings = await ip_screening_service.list_screenings(db, skip=skip, limit=limit)
    return IPScreeningListResponse(
        data=[ip_screening_service.to_public(s) for s in screenings]
    )


@router.get(
    "/record/{screening_id}",
    response_model=IPScreeningResponse,
    summary="Get IP screening by id",
)
async def get_ip_screening(
    screening_id: int,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """Get IP screening by id endpoint"""
    screening = await ip_screening_service.get_screening(db, screening_id)
    return screening_response(screening)


@router.get(
    "/hospital/{hosp_no}",
    response_model=IPScreeningResponse,
    summary="Get latest IP screening by hospital number",
)
async def get_latest_ip_screening_by_hosp_no(
    hosp_no: str,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """Latest IP screening by hospital number endpoint"""
    screening = await ip_screening_service.get_latest_by_hosp_no(db, hosp_no)
    return screening_response(screening)


@router.get(
    "/attachment/{filename}",
    summary="Download IP screening attachment",
)
async def download_ip_attachment(filename: str) -> Any:
    """Download IP screening attachment endpoint"""
    file_path = ip_screening_service.get_attachment_path(filename)
    return FileResponse(file_path, filename=filename)


@router.get(
    "/{ip_no}",
    response_model=IPScreeningResponse,
    summary="Get latest IP screening",
    description="Latest IP screening for an IP number with its custom fields",
)
async def get_latest_ip_screening(
    ip_no: str,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """Latest IP screening by IP number endpoint"""
    screening = await ip_screening_service.get_latest_by_ip_no(db, ip_no)
    return screening_response(screening)
