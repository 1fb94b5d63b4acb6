# src/services/patient_service.py
from typing import List
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from models.patient import OPPatient
from schemas.patient_schemas import PatientCreate
from utils.exceptions import ConflictException, NotFoundException, handle_db_exception
from utils.logger import setup_logger
from .base_service import BaseService

logger = setup_logger("PATIENT_SERVICE")

DUPLICATE_HOSP_NO = "Hospital Number already exists."


class PatientService(BaseService):
    def __init__(self):
        super().__init__(OPPatient, "PATIENT_SERVICE")

    async def get_by_hosp_no(self, db: AsyncSession, hosp_no: str) -> OPPatient:
        """Find an outpatient by hospital number, ignoring surrounding whitespace"""
        hosp_no = hosp_no.strip()
        try:
            result = await db.execute(
                select(OPPatient).where(OPPatient.hosp_no == hosp_no)
            )
            patient = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            await handle_db_exception(
                db, logger, "fetch patient", e, hosp_no=hosp_no
            )

        if patient is None:
            raise NotFoundException("Patient not found")
        return patient

    async def register_patient(
        self, db: AsyncSession, patient_data: PatientCreate
    ) -> OPPatient:
        """Register a new outpatient; hospital numbers are unique"""
        result = await db.execute(
            select(OPPatient.id).where(OPPatient.hosp_no == patient_data.hosp_no)
        )
        if result.first() is not None:
            logger.warning(f"Duplicate registration for {patient_data.hosp_no}")
            raise ConflictException(DUPLICATE_HOSP_NO)

        # The unique index still catches a concurrent registration
        patient = await self.create(
            db, patient_data.model_dump(), conflict_detail=DUPLICATE_HOSP_NO
        )
        logger.info(f"Registered patient {patient.hosp_no} as {patient.id}")
        return patient

    async def list_patients(
        self, db: AsyncSession, skip: int = 0, limit: int = 50
    ) -> List[OPPatient]:
        return await self.get_multi(db, skip=skip, limit=limit)


patient_service = PatientService()
