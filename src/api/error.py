"""API error types and handlers

Every error response has the shape {"error": {"code": ..., "message": ...}}.
"""

import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from libs.result import Error
from src.app.use_cases.invoicing import errors

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = {
    errors.INVOICE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    errors.ENTRY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    errors.CLIENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    errors.ENTRY_ALREADY_CLAIMED: status.HTTP_409_CONFLICT,
    errors.INVALID_TRANSITION: status.HTTP_409_CONFLICT,
    errors.NO_BILLABLE_ENTRIES: status.HTTP_422_UNPROCESSABLE_ENTITY,
    errors.ENTRY_CLIENT_MISMATCH: status.HTTP_422_UNPROCESSABLE_ENTITY,
    errors.INVALID_STATUS: status.HTTP_400_BAD_REQUEST,
    errors.PERSISTENCE_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ClientError(Exception):
    """Business error raised by routes and rendered as JSON"""

    def __init__(self, error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code

    @classmethod
    def from_error(cls, error: Error) -> "ClientError":
        return cls(error, status_code=ERROR_STATUS_CODES.get(error.code, status.HTTP_400_BAD_REQUEST))


def _error_body(code: str, message: str) -> dict:
    return {"error": {"code": code, "message": message}}


async def client_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.error.code} ({exc.error.reason})")
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.error.code, exc.error.message),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = f"{location}: {first.get('msg')}" if first else "Invalid request parameters"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body("VALIDATION_ERROR", message),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ClientError, client_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
