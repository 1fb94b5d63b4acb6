# src/routes/patients.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any
from db.database import get_db
from schemas.patient_schemas import (
    PatientCreate,
    PatientPublic,
    PatientCreateResponse,
    PatientResponse,
    PatientListResponse,
)
from services.patient_service import patient_service
from utils.logger import setup_logger

router = APIRouter(prefix="/op-patients", tags=["patients"])
logger = setup_logger("PATIENT_ROUTES")


@router.post(
    "/patient-registration",
    response_model=PatientCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register patient",
    description="Register a new outpatient by hospital number",
)
async def register_patient(
    patient_data: PatientCreate,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """Patient registration endpoint"""
    patient = await patient_service.register_patient(db, patient_data)
    return PatientCreateResponse(
        message="Patient saved successfully", patient_id=patient.id
    )


@router.get(
    "/",
    response_model=PatientListResponse,
    summary="List patients",
    description="List registered outpatients, newest first",
)
async def list_patients(
    skip: int = 0,
    limit: int = 50,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """List patients endpoint"""
    patients = await patient_service.list_patients(db, skip=skip, limit=limit)
    return PatientListResponse(
        data=[PatientPublic.model_validate(patient) for patient in patients]
    )


@router.get(
    "/{hosp_no}",
    response_model=PatientResponse,
    summary="Get patient",
    description="Get an outpatient by hospital number",
)
async def get_patient(
    hosp_no: str,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """Get patient by hospital number endpoint"""
    patient = await patient_service.get_by_hosp_no(db, hosp_no)
    return PatientResponse(patient=PatientPublic.model_validate(patient))
