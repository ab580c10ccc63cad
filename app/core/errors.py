"""
Central error handling for Staff Records Service

Service-level failures are raised as ServiceError subclasses. Each kind has a
fixed HTTP status and a machine-readable code so callers can tell
"email already in use" apart from "employee not found".
"""
import logging
import traceback

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi import HTTPException

logger = logging.getLogger(__name__)


class ServiceError(HTTPException):
    """Base class for errors raised by the service layer"""
    status_code = status.HTTP_400_BAD_REQUEST
    code = "SERVICE_ERROR"

    def __init__(self, detail: str):
        super().__init__(status_code=self.status_code, detail=detail)


class ValidationError(ServiceError):
    """Malformed or out-of-range input (negative salary, empty required field)"""
    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"


class ConflictError(ServiceError):
    """Uniqueness violation (duplicate email, duplicate department name)"""
    status_code = status.HTTP_409_CONFLICT
    code = "CONFLICT"


class UnresolvedReferenceError(ServiceError):
    """A department or manager id that does not resolve to an existing record"""
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "REFERENCE_ERROR"


class NotFoundError(ServiceError):
    """The operation target does not exist (or is inactive, where that matters)"""
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"


class TransientStorageError(ServiceError):
    """Lock timeout, deadlock or lost connection. Safe to retry the whole operation."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "TRANSIENT_STORAGE_ERROR"


def _error_content(request: Request, status_code: int, code: str, detail) -> dict:
    return {
        "error": True,
        "status_code": status_code,
        "code": code,
        "detail": detail,
        "path": str(request.url.path)
    }


async def service_exception_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """
    Handle ServiceError with consistent JSON response format

    Args:
        request: FastAPI request object
        exc: ServiceError instance

    Returns:
        JSONResponse with error details and the error code
    """
    if isinstance(exc, TransientStorageError):
        logger.warning("Transient storage failure on %s: %s", request.url.path, exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_content(request, exc.status_code, exc.code, exc.detail)
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """
    Handle HTTPException with consistent JSON response format

    Args:
        request: FastAPI request object
        exc: HTTPException instance

    Returns:
        JSONResponse with error details
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_content(request, exc.status_code, "HTTP_ERROR", exc.detail),
        headers=getattr(exc, "headers", None)
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handle RequestValidationError with consistent JSON response format

    Does not leak internal validation details in production.
    """
    from app.core.config import settings

    content = _error_content(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "REQUEST_VALIDATION_ERROR",
        "Validation error: Invalid request data" if settings.APP_ENV == "prod" else "Validation error"
    )

    if settings.APP_ENV != "prod":
        # Sanitize for JSON: e.g. ctx.error ValueError -> str
        errors = []
        for e in exc.errors():
            err = dict(e)
            if "ctx" in err and isinstance(err["ctx"], dict):
                err["ctx"] = {
                    k: (str(v) if not isinstance(v, (str, int, float, bool, type(None))) else v)
                    for k, v in err["ctx"].items()
                }
            errors.append(err)
        content["errors"] = errors

    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=content)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected exceptions with consistent JSON response format

    Does not leak internal error details in production.
    """
    from app.core.config import settings

    logger.error("Unhandled exception: %s", exc, exc_info=True)

    if settings.APP_ENV == "prod":
        detail = "Internal server error"
    else:
        detail = str(exc)

    content = _error_content(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR", detail)
    if settings.APP_ENV == "local":
        content["traceback"] = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )

    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)
