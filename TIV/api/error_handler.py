from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from packages.tiv_core.dto import utc_now
from packages.tiv_core.errors import TIVBaseError
from packages.tiv_core.logging import get_logger, get_request_id

logger = get_logger("TIV.error_handler")


def _envelope(request: Request, status_code: int, code: str, message: str, detail: Any = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "detail": detail,
            },
            "request_id": get_request_id() or getattr(request.state, "request_id", None),
            "timestamp": utc_now().isoformat(),
        },
    )


async def tiv_exception_handler(request: Request, exc: TIVBaseError) -> JSONResponse:
    """Map TIVBaseError to the standard error response."""
    if exc.status_code >= 500:
        logger.exception(f"Unhandled TIVBaseError: {exc.message}", exc_info=exc)
    else:
        logger.warning(f"TIVBaseError ({exc.code}): {exc.message}")

    return _envelope(request, exc.status_code, exc.code, exc.message, exc.details or None)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Missing or malformed request fields are a client error (400)."""
    missing = [".".join(str(p) for p in err.get("loc", ())[1:]) for err in exc.errors()]
    logger.warning(f"Request validation failed on {request.url.path}: {missing}")
    return _envelope(request, 400, "MALFORMED_INPUT", "Missing fields", {"fields": missing})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unexpected error on {request.url.path}", exc_info=exc)
    return _envelope(request, 500, "INTERNAL_SERVER_ERROR", "An unexpected error occurred.")
