# src/utils/exception_handler.py
from fastapi import FastAPI, Request, status
from starlette.exceptions import HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from core.config import settings
from .logger import setup_logger
from .exceptions import BaseAPIException

logger = setup_logger("EXCEPTION HANDLER")


def error_body(message, error_type: str, details=None) -> dict:
    """Uniform error payload; details only leak in development"""
    body = {"success": False, "error": message, "type": error_type}
    if details is not None and settings.is_development:
        body["details"] = details
    return body


def setup_exception_handlers(app: FastAPI):
    @app.exception_handler(BaseAPIException)
    async def api_exception_handler(request: Request, exc: BaseAPIException):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path}: {exc.detail}")
        elif exc.status_code == status.HTTP_404_NOT_FOUND:
            logger.info(f"Not found: {exc.detail}")
        else:
            logger.warning(f"API Exception {exc.status_code}: {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(
                exc.detail, exc.__class__.__name__, exc.internal_detail
            ),
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        missing = [
            str(err["loc"][-1]) for err in exc.errors() if err.get("type") == "missing"
        ]
        if missing:
            message = f"Missing required fields: {', '.join(missing)}"
        else:
            message = "; ".join(err.get("msg", "invalid") for err in exc.errors())
        logger.warning(f"Validation error on {request.url.path}: {message}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body(message, "ValidationError"),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        error_details = {
            status.HTTP_400_BAD_REQUEST: "Bad request",
            status.HTTP_401_UNAUTHORIZED: "Invalid credentials.",
            status.HTTP_404_NOT_FOUND: "Resource not found",
            status.HTTP_405_METHOD_NOT_ALLOWED: "Method not allowed",
            status.HTTP_409_CONFLICT: "Conflict - Resource already exists",
            status.HTTP_500_INTERNAL_SERVER_ERROR: "Internal server error",
        }

        detail = exc.detail or error_details.get(exc.status_code, "An error occurred")

        if exc.status_code == status.HTTP_404_NOT_FOUND:
            logger.info(f"Not found: {detail}")
        else:
            logger.warning(f"HTTP Exception {exc.status_code}: {detail}")

        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(detail, "HTTPException"),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError):
        logger.error(f"Database error on {request.url.path}: {str(exc)}", exc_info=True)

        if isinstance(exc, IntegrityError):
            detail = "Duplicate or constraint violation"
            status_code = status.HTTP_409_CONFLICT
        else:
            detail = "Database operation failed"
            status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

        return JSONResponse(
            status_code=status_code,
            content=error_body(detail, "DatabaseError", str(exc)),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unexpected error on {request.url.path}: {str(exc)}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body("Internal server error", "InternalServerError", str(exc)),
        )
