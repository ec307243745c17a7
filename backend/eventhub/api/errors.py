"""
Translate domain errors into HTTP responses.

Services raise eventhub.core.errors types only; this is the one place that
knows about status codes. Bodies look like
{"error": message, "code": CODE, ...detail}.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from eventhub.core.errors import ErrorCode, DomainError
from eventhub.core.logging import get_logger

logger = get_logger(__name__)

STATUS_BY_CODE = {
    ErrorCode.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.CAPACITY_EXCEEDED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.STORAGE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Request bodies rejected by FastAPI before any service runs
REQUEST_VALIDATION_MESSAGE = "All fields are required"


def error_body(code: ErrorCode, message: str, **detail) -> dict:
    return {"error": message, "code": code.value, **detail}


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    status_code = STATUS_BY_CODE.get(exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        # Storage details stay in the logs
        logger.error("request_storage_failure", error=str(exc))
    return JSONResponse(
        status_code=status_code,
        content=error_body(exc.code, exc.message, **exc.detail),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    fields = [".".join(str(part) for part in err["loc"][1:]) for err in errors]
    if all(err["loc"] and err["loc"][0] == "body" for err in errors):
        message = REQUEST_VALIDATION_MESSAGE
    else:
        message = "Invalid request parameters"
    logger.warning("request_rejected", reason="invalid_request", fields=fields)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(ErrorCode.VALIDATION_FAILED, message, fields=fields),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
