from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
import logging

from app.core.error_codes import INVALID_INPUT, INTERNAL_ERROR

logger = logging.getLogger("uvicorn.error")

class CustomHTTPException(Exception):
    """A custom HTTPException that we can use for additional context."""
    def __init__(self, status_code: int, detail: str, error_code: str = None, headers: dict = None):
        self.status_code = status_code
        self.detail = detail
        self.error_code = error_code
        self.headers = headers
        super().__init__(detail)  # Initialize the base Exception with the detail message

async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Reject malformed payloads with a 400 and the field errors."""
    logger.info(f"Validation error on {request.url}: {exc.errors()}")

    errors = []
    for error in exc.errors():
        errors.append({
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": error.get("msg"),
            "type": error.get("type"),
        })

    return JSONResponse(
        status_code=400,
        content={
            "message": "Invalid inputs",
            "error_code": INVALID_INPUT,
            "errors": errors,
        },
    )

async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Custom HTTP exception handler for better error responses."""
    if isinstance(exc, CustomHTTPException):
        if exc.status_code >= 500:
            logger.error(f"Custom HTTP error on {request.url}: {exc.detail}")
        else:
            logger.info(f"Custom HTTP error on {request.url}: {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "message": exc.detail,
                "error_code": exc.error_code
            },
            headers=exc.headers or {},
        )
    elif isinstance(exc, HTTPException):
        logger.info(f"HTTP error on {request.url}: {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=exc.headers or {},
        )

    logger.error(f"Unexpected error on {request.url}: {str(exc)}")
    return JSONResponse(
        status_code=500,
        content={"message": "An unexpected error occurred", "error_code": INTERNAL_ERROR},
    )

async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort boundary: log the traceback, never echo the exception text."""
    logger.exception(f"Unhandled error on {request.url}: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "message": "An unexpected error occurred. Please try again later.",
            "error_code": INTERNAL_ERROR,
        },
    )
