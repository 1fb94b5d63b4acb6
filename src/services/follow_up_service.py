# src/services/follow_up_service.py
from typing import List, Optional
from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession
from core.config import settings
from models.follow_up import FollowUpRecord
from schemas.follow_up_schemas import FollowUpCreate, FollowUpUpdate
from utils.exceptions import NotFoundException, handle_db_exception
from utils.logger import setup_logger
from .base_service import BaseService
from .file_storage import FileStorage, FOLLOW_UPS, file_storage

logger = setup_logger("FOLLOW_UP_SERVICE")

MERGED_FIELDS = ("ip_no", "name", "date", "diagnosis", "notes", "actions", "comments")


class FollowUpService(BaseService):
    def __init__(self, storage: FileStorage, allowed_extensions: List[str]):
        super().__init__(FollowUpRecord, "FOLLOW_UP_SERVICE")
        self.storage = storage
        self.allowed_extensions = allowed_extensions

    def check_attachment(self, upload: Optional[UploadFile]) -> None:
        """Reject disallowed attachment types before anything is written"""
        if upload is None or not upload.filename:
            return
        self.storage.check_extension(
            upload.filename,
            self.allowed_extensions,
            "Only PDF, Word, JPG, and PNG files are allowed",
        )

    async def _store_attachment(self, upload: Optional[UploadFile]) -> Optional[str]:
        if upload is None or not upload.filename:
            return None
        return await self.storage.store_file(FOLLOW_UPS, upload)

    async def create_follow_up(
        self,
        db: AsyncSession,
        follow_up_data: FollowUpCreate,
        upload: Optional[UploadFile] = None,
    ) -> FollowUpRecord:
        self.check_attachment(upload)

        record = FollowUpRecord(**follow_up_data.model_dump())
        file_name = None
        try:
            db.add(record)
            await db.flush()
            file_name = await self._store_attachment(upload)
            record.attachment = file_name
            await db.commit()
            await db.refresh(record)
        except Exception as e:
            await self.storage.delete_file(FOLLOW_UPS, file_name)
            await handle_db_exception(
                db, logger, "create follow-up record", e, ip_no=follow_up_data.ip_no
            )

        logger.info(f"Created follow-up {record.id} for {record.ip_no}")
        return record

    async def get_follow_up(self, db: AsyncSession, follow_up_id: int) -> FollowUpRecord:
        record = await self.get(db, follow_up_id)
        if record is None:
            raise NotFoundException("Follow-up record not found")
        return record

    async def get_patient_follow_ups(
        self, db: AsyncSession, ip_no: str
    ) -> List[FollowUpRecord]:
        return await self.get_multi(
            db,
            limit=None,
            order_by=FollowUpRecord.date.desc(),
            ip_no=ip_no,
        )

    async def list_follow_ups(self, db: AsyncSession) -> List[FollowUpRecord]:
        return await self.get_multi(db, limit=None, order_by=FollowUpRecord.date.desc())

    async def update_follow_up(
        self,
        db: AsyncSession,
        follow_up_id: int,
        update_data: FollowUpUpdate,
        upload: Optional[UploadFile] = None,
    ) -> FollowUpRecord:
        """
        Replace a follow-up record's fields.

        An incoming value that is falsy (missing, empty string) keeps the stored
        value, so a field cannot be cleared through this call. The attachment
        changes only when a new file is uploaded; the previous file is kept on
        disk.
        """
        record = await self.get_follow_up(db, follow_up_id)
        self.check_attachment(upload)

        file_name = None
        try:
            for field in MERGED_FIELDS:
                incoming = getattr(update_data, field)
                if incoming:
                    setattr(record, field, incoming)

            file_name = await self._store_attachment(upload)
            if file_name:
                record.attachment = file_name

            await db.commit()
            await db.refresh(record)
        except Exception as e:
            await self.storage.delete_file(FOLLOW_UPS, file_name)
            await handle_db_exception(
                db, logger, "update follow-up record", e, id=follow_up_id
            )

        logger.info(f"Updated follow-up {follow_up_id}")
        return record

    def get_attachment_path(self, file_name: str) -> str:
        return self.storage.get_file_path(FOLLOW_UPS, file_name)


follow_up_service = FollowUpService(file_storage, settings.FOLLOW_UP_ALLOWED_EXTENSIONS)
