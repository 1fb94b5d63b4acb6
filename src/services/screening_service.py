# src/services/screening_service.py
from typing import Any, Dict, Iterable, List, Optional, Tuple, Type
from fastapi import UploadFile
from sqlalchemy import select, inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from core.config import settings
from models.screening import (
    IPNutritionalScreening,
    IPCustomField,
    OPNutritionalScreening,
    OPCustomField,
)
from schemas.screening_schemas import (
    IPScreeningCreate,
    OPScreeningCreate,
    IPScreeningPublic,
    OPScreeningPublic,
    CustomFieldPublic,
)
from utils.exceptions import NotFoundException, handle_db_exception
from utils.screening_utils import (
    DIET_COLUMNS,
    IP_RESERVED_FIELDS,
    OP_RESERVED_FIELDS,
    diet_flags_to_display,
    filter_custom_fields,
    parse_custom_fields,
    parse_diet_selection,
)
from .base_service import BaseService
from .file_storage import FileStorage, IP_REPORTS, OP_REPORTS, file_storage


class ScreeningService(BaseService):
    """
    Shared persistence for IP and OP nutritional screenings.

    A screening row, its custom-field rows and its attachment are saved as one
    unit: the row is flushed to obtain ``screening_id``, the custom fields and
    the attachment follow, and a single commit ends the transaction. Any
    failure rolls everything back and removes an attachment already written.
    """

    custom_field_model: Type[Any]
    subfolder: str
    attachment_attr: str
    key_attr: str
    not_found_detail = "No screening data found"
    # JSON keys used by the client for custom field entries
    field_name_key = "field_name"
    field_value_key = "field_value"

    def __init__(
        self,
        model: Type[Any],
        storage: FileStorage,
        reserved_fields: Iterable[str],
        logger_name: str,
    ):
        super().__init__(model, logger_name)
        self.storage = storage
        self.reserved_fields = frozenset(reserved_fields)

    def filter_custom_fields(self, raw: Optional[str]) -> List[Tuple[str, str]]:
        return filter_custom_fields(
            parse_custom_fields(raw),
            self.field_name_key,
            self.field_value_key,
            self.reserved_fields,
        )

    def attachment_reference(self, file_name: str) -> str:
        """Value stored in the attachment column for a written file"""
        return file_name

    async def save_screening(
        self,
        db: AsyncSession,
        values: Dict[str, Any],
        custom_fields: List[Tuple[str, str]],
        upload: Optional[UploadFile] = None,
    ) -> Any:
        """Insert the screening, its custom fields and attachment atomically"""
        patient_key = values.get(self.key_attr)
        file_name = None
        try:
            screening = self.model(**values)
            db.add(screening)
            await db.flush()

            if custom_fields:
                db.add_all(
                    [
                        self.custom_field_model(
                            screening_id=screening.screening_id,
                            field_name=field_name,
                            field_value=field_value,
                        )
                        for field_name, field_value in custom_fields
                    ]
                )
                await db.flush()

            if upload is not None and upload.filename:
                file_name = await self.storage.store_file(self.subfolder, upload)
                setattr(screening, self.attachment_attr, self.attachment_reference(file_name))

            await db.commit()
        except Exception as e:
            if file_name:
                await self.storage.delete_file(self.subfolder, file_name)
            await handle_db_exception(
                db,
                self.logger,
                f"save {self.model.__name__}",
                e,
                patient=patient_key,
                custom_fields=len(custom_fields),
            )

        self.logger.info(
            f"Saved screening {screening.screening_id} for {patient_key} "
            f"with {len(custom_fields)} custom fields"
        )
        return screening

    async def get_latest(self, db: AsyncSession, attr: str, key: str) -> Any:
        """Most recently inserted screening for a patient key, 404 when none"""
        column = getattr(self.model, attr)
        try:
            result = await db.execute(
                select(self.model)
                .where(column == key)
                .order_by(self.model.screening_id.desc())
                .limit(1)
            )
            screening = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            await handle_db_exception(
                db, self.logger, f"fetch {self.model.__name__}", e, **{attr: key}
            )

        if screening is None:
            raise NotFoundException(self.not_found_detail)
        return screening

    async def get_screening(self, db: AsyncSession, screening_id: int) -> Any:
        screening = await self.get(db, screening_id)
        if screening is None:
            raise NotFoundException(self.not_found_detail)
        return screening

    async def list_screenings(
        self, db: AsyncSession, skip: int = 0, limit: int = 100
    ) -> List[Any]:
        return await self.get_multi(db, skip=skip, limit=limit)

    def get_attachment_path(self, file_name: str) -> str:
        return self.storage.get_file_path(self.subfolder, file_name)

    @staticmethod
    def column_values(screening: Any) -> Dict[str, Any]:
        """Mapped attribute values of a row keyed by attribute name"""
        return {
            attr.key: getattr(screening, attr.key)
            for attr in inspect(screening).mapper.column_attrs
        }

    @staticmethod
    def custom_fields_of(screening: Any) -> List[CustomFieldPublic]:
        return [
            CustomFieldPublic(field_name=field.field_name, field_value=field.field_value)
            for field in screening.custom_fields
        ]


class IPScreeningService(ScreeningService):
    custom_field_model = IPCustomField
    subfolder = IP_REPORTS
    attachment_attr = "attachment_path"
    key_attr = "ip_no"
    not_found_detail = "No screening data found for this IPNo."

    def __init__(self, storage: FileStorage):
        super().__init__(
            IPNutritionalScreening, storage, IP_RESERVED_FIELDS, "IP_SCREENING_SERVICE"
        )

    def attachment_reference(self, file_name: str) -> str:
        return self.storage.relative_path(self.subfolder, file_name)

    async def create_screening(
        self,
        db: AsyncSession,
        screening_data: IPScreeningCreate,
        therapeutic_diet: Optional[str] = None,
        custom_fields: Optional[str] = None,
        upload: Optional[UploadFile] = None,
    ) -> IPNutritionalScreening:
        """Validate the diet object and custom fields, then save the screening"""
        diet = parse_diet_selection(therapeutic_diet)
        fields = self.filter_custom_fields(custom_fields)

        values = screening_data.model_dump()
        values.update(diet)
        return await self.save_screening(db, values, fields, upload)

    async def get_latest_by_ip_no(self, db: AsyncSession, ip_no: str):
        return await self.get_latest(db, "ip_no", ip_no)

    async def get_latest_by_hosp_no(self, db: AsyncSession, hosp_no: str):
        return await self.get_latest(db, "hosp_no", hosp_no)

    def to_public(self, screening: IPNutritionalScreening) -> IPScreeningPublic:
        """Fixed fields plus a nested diet object; flat flag columns are dropped"""
        data = self.column_values(screening)
        for column in DIET_COLUMNS:
            data.pop(column, None)
        data["therapeutic_diet"] = diet_flags_to_display(screening)
        return IPScreeningPublic.model_validate(data)


class OPScreeningService(ScreeningService):
    custom_field_model = OPCustomField
    subfolder = OP_REPORTS
    attachment_attr = "report_filename"
    key_attr = "hosp_no"
    not_found_detail = "No screening record found"
    field_name_key = "fieldName"
    field_value_key = "fieldValue"

    def __init__(self, storage: FileStorage, enforce_reserved_fields: bool = False):
        super().__init__(
            OPNutritionalScreening,
            storage,
            OP_RESERVED_FIELDS if enforce_reserved_fields else (),
            "OP_SCREENING_SERVICE",
        )

    async def create_screening(
        self,
        db: AsyncSession,
        screening_data: OPScreeningCreate,
        custom_fields: Optional[str] = None,
        upload: Optional[UploadFile] = None,
    ) -> OPNutritionalScreening:
        fields = self.filter_custom_fields(custom_fields)
        return await self.save_screening(db, screening_data.model_dump(), fields, upload)

    async def get_latest_by_hosp_no(self, db: AsyncSession, hosp_no: str):
        return await self.get_latest(db, "hosp_no", hosp_no)

    def to_public(self, screening: OPNutritionalScreening) -> OPScreeningPublic:
        data = self.column_values(screening)
        data["report_path"] = (
            self.storage.relative_path(self.subfolder, screening.report_filename)
            if screening.report_filename
            else None
        )
        return OPScreeningPublic.model_validate(data)


ip_screening_service = IPScreeningService(file_storage)
op_screening_service = OPScreeningService(
    file_storage, enforce_reserved_fields=settings.OP_ENFORCE_RESERVED_FIELDS
)
