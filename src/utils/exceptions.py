# src/utils/exceptions.py
from fastapi import HTTPException, status
from typing import Any, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
import logging


class BaseAPIException(HTTPException):
    def __init__(
        self,
        status_code: int,
        detail: Any = None,
        headers: Optional[dict] = None,
        internal_detail: Optional[str] = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        # Only exposed to clients in development
        self.internal_detail = internal_detail


class BadRequestException(BaseAPIException):
    def __init__(self, detail: str = "Bad Request"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class UnauthorizedException(BaseAPIException):
    def __init__(self, detail: str = "Invalid credentials."):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class NotFoundException(BaseAPIException):
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ConflictException(BaseAPIException):
    def __init__(self, detail: str = "Resource already exists"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class StoreException(BaseAPIException):
    def __init__(
        self, detail: str = "Internal server error", internal_detail: Optional[str] = None
    ):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            internal_detail=internal_detail,
        )


async def handle_db_exception(
    db: AsyncSession,
    logger: logging.Logger,
    operation: str,
    exception: Exception,
    conflict_detail: Optional[str] = None,
    **context: Any,
):
    """Roll back, log with context and re-raise as an API exception"""
    await db.rollback()

    if isinstance(exception, BaseAPIException):
        raise exception

    if conflict_detail and isinstance(exception, IntegrityError):
        logger.warning(f"Duplicate key during {operation} {context}: {exception.orig}")
        raise ConflictException(conflict_detail)

    logger.error(
        f"Database error during {operation} {context}: {str(exception)}", exc_info=True
    )
    raise StoreException(
        detail=f"Failed to {operation}", internal_detail=str(exception)
    ) from exception
