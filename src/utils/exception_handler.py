# src/utils/exception_handler.py
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException
from sqlalchemy.exc import IntegrityError, NoResultFound, SQLAlchemyError
from .logger import setup_logger
from .exceptions import BaseAPIException
from .responses import error_response

logger = setup_logger("EXCEPTION HANDLER")

# Fallback messages for framework-raised HTTP errors without a detail
ERROR_DETAILS = {
    status.HTTP_400_BAD_REQUEST: "Bad request",
    status.HTTP_401_UNAUTHORIZED: "Authentication required",
    status.HTTP_403_FORBIDDEN: "Access denied",
    status.HTTP_404_NOT_FOUND: "Resource not found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "Method not allowed",
    status.HTTP_409_CONFLICT: "Resource already exists",
    status.HTTP_500_INTERNAL_SERVER_ERROR: "Internal server error",
}


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(
            str(loc) for loc in error.get("loc", ()) if loc not in ("body", "query", "path")
        )
        message = error.get("msg", "Invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "Invalid request"


def setup_exception_handlers(app: FastAPI):
    @app.exception_handler(BaseAPIException)
    async def api_exception_handler(request: Request, exc: BaseAPIException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            logger.info(f"Not found: {exc.detail}")
        else:
            logger.warning(f"API Exception {exc.status_code}: {exc.detail}")
        return error_response(exc.status_code, str(exc.detail), headers=exc.headers)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        detail = exc.detail or ERROR_DETAILS.get(exc.status_code, "An error occurred")
        logger.warning(f"HTTP Exception {exc.status_code}: {detail}")
        return error_response(
            exc.status_code, str(detail), headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        message = _format_validation_errors(exc)
        logger.warning(f"Validation error on {request.url.path}: {message}")
        return error_response(status.HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError):
        logger.error(f"Database error: {str(exc)}", exc_info=True)

        if isinstance(exc, IntegrityError):
            return error_response(
                status.HTTP_409_CONFLICT,
                "Database integrity error - possible duplicate or constraint violation",
            )
        if isinstance(exc, NoResultFound):
            return error_response(status.HTTP_404_NOT_FOUND, "Resource not found")
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"
        )

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
        logger.warning(f"Rate limit exceeded: {str(exc)}")
        return error_response(
            status.HTTP_429_TOO_MANY_REQUESTS,
            "Too many requests - please try again later",
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unexpected error: {str(exc)}", exc_info=True)
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"
        )
