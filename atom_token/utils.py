import datetime
import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from atom_token.exceptions import BaseApplicationError
from atom_token.models import ErrorResponse

__all__ = ("universal_exception_handler", "utcnow", "unix_now")
logger = logging.getLogger(__name__)


async def universal_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Universal exception handler: renders any error as `{"type": "error", "reason": ...}`"""

    log_data: dict[str, str] = {
        "error": "Internal server error",
        "detail": str(exc),
        "path": request.url.path,
        "method": request.method,
    }
    log_level = logging.ERROR
    status_code: int = 500
    reason: str = str(exc)

    if isinstance(exc, BaseApplicationError):
        log_level = exc.log_level
        log_message = f"{exc.log_message}: {exc.message}"
        status_code = exc.status_code
        reason = exc.message
        log_data |= {"error": exc.log_message, "detail": str(exc.message)}

    elif isinstance(exc, (RequestValidationError, ValidationError)):
        log_level = logging.WARNING
        log_message = f"Validation error: {str(exc)}"
        status_code = 422
        reason = _validation_reason(exc)
        log_data |= {"error": log_message}

    else:
        log_message = f"Internal server error: {exc}"

    exc_info = exc if logger.isEnabledFor(logging.DEBUG) else None
    logger.log(log_level, log_message, extra=log_data, exc_info=exc_info)

    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(reason=reason).model_dump(),
    )


def _validation_reason(exc: RequestValidationError | ValidationError) -> str:
    details = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error["loc"] if item != "body")
        details.append(f"{location}: {error['msg']}" if location else error["msg"])

    return "; ".join(details) or "invalid request"


def utcnow() -> datetime.datetime:
    """Just a simple wrapper for deprecated datetime.utcnow (naive UTC datetime)"""
    return datetime.datetime.now(datetime.UTC).replace(tzinfo=None)


def unix_now() -> int:
    """Current UTC time as unix timestamp (seconds)"""
    return int(datetime.datetime.now(datetime.UTC).timestamp())
