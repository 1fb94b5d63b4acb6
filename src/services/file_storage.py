# src/services/file_storage.py
import os
import re
import time
from typing import Iterable, Optional
from uuid import uuid4
import aiofiles
from fastapi import UploadFile
from core.config import settings
from utils.exceptions import BadRequestException, NotFoundException, StoreException
from utils.logger import setup_logger

logger = setup_logger("FILE_STORAGE")

IP_REPORTS = "ip_reports"
OP_REPORTS = "op_reports"
FOLLOW_UPS = "followups"

CHUNK_SIZE = 1024 * 1024


class FileStorage:
    """Attachment store on the local filesystem, one sub-directory per record type"""

    def __init__(self, root: str):
        self.root = root

        # Ensure storage directories exist
        for subfolder in (IP_REPORTS, OP_REPORTS, FOLLOW_UPS):
            os.makedirs(os.path.join(self.root, subfolder), exist_ok=True)

    def _clean_name(self, file_name: str) -> str:
        """Strip any directory part and characters unsafe in a filename"""
        base = os.path.basename(file_name.replace("\\", "/"))
        base = re.sub(r"[^A-Za-z0-9._ -]", "_", base).strip(" .")
        return base or "attachment"

    def _generate_file_name(self, file_name: str) -> str:
        """Timestamp and random token keep uploads with the same name apart"""
        return f"{int(time.time() * 1000)}-{uuid4().hex}-{self._clean_name(file_name)}"

    def resolve(self, subfolder: str, file_name: str) -> str:
        """Absolute path of a stored file; rejects names escaping the sub-directory"""
        directory = os.path.abspath(os.path.join(self.root, subfolder))
        path = os.path.abspath(os.path.join(directory, file_name))
        if os.path.dirname(path) != directory:
            raise NotFoundException("File not found")
        return path

    def relative_path(self, subfolder: str, file_name: str) -> str:
        return os.path.join(os.path.basename(os.path.normpath(self.root)), subfolder, file_name)

    @staticmethod
    def check_extension(file_name: str, allowed: Iterable[str], message: str) -> None:
        ext = os.path.splitext(file_name or "")[1].lower()
        if ext not in set(allowed):
            raise BadRequestException(message)

    async def store_file(self, subfolder: str, upload: UploadFile) -> str:
        """Write an uploaded file and return its generated filename"""
        file_name = self._generate_file_name(upload.filename or "")
        file_path = self.resolve(subfolder, file_name)

        created = False
        try:
            size = 0
            # Exclusive create; an existing file is never truncated
            async with aiofiles.open(file_path, "xb") as f:
                created = True
                while True:
                    chunk = await upload.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    size += len(chunk)
                    await f.write(chunk)
        except OSError as e:
            logger.error(f"Error storing file {file_path}: {e}")
            if created:
                await self.delete_file(subfolder, file_name)
            raise StoreException(
                detail="Failed to store attachment", internal_detail=str(e)
            )

        logger.info(f"Stored file: {file_path} ({size} bytes)")
        return file_name

    def get_file_path(self, subfolder: str, file_name: str) -> str:
        """Path of an existing stored file, 404 when missing"""
        file_path = self.resolve(subfolder, file_name)
        if not os.path.isfile(file_path):
            raise NotFoundException("File not found")
        return file_path

    async def delete_file(self, subfolder: str, file_name: Optional[str]) -> bool:
        """Remove a stored file; used to undo a write when the record is not saved"""
        if not file_name:
            return False
        try:
            file_path = self.resolve(subfolder, file_name)
            if os.path.exists(file_path):
                os.remove(file_path)
                logger.info(f"Deleted file: {file_path}")
                return True
            return False
        except (OSError, NotFoundException) as e:
            logger.error(f"Error deleting file {file_name}: {e}")
            return False


file_storage = FileStorage(settings.UPLOAD_DIR)
