"""
Boundary that converts every failure into a ``{"error": <message>}`` response.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskboard.exceptions import AuthenticationError, TaskboardError
from taskboard.utils.logger import setup_logger

logger = setup_logger("errors")


def _error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"error": message}, headers=headers
    )


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request body"

    first = errors[0]
    if first.get("type") == "json_invalid":
        return "Malformed JSON body"

    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    if not field:
        if first.get("type") == "missing":
            return "Request body is required"
        return "Invalid request body"
    return f"Invalid value for '{field}': {first.get('msg')}"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(TaskboardError)
    async def taskboard_error_handler(request: Request, exc: TaskboardError):
        headers = None
        if isinstance(exc, AuthenticationError):
            headers = {"WWW-Authenticate": "Bearer"}
        if exc.status_code >= 500:
            logger.error(
                f"{request.method} {request.url.path} failed: {exc.message}",
                exc_info=exc,
            )
            return _error_response(exc.status_code, exc.default_message)
        return _error_response(exc.status_code, exc.message, headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return _error_response(
            status.HTTP_400_BAD_REQUEST, _describe_validation_error(exc)
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return _error_response(exc.status_code, message, getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def unexpected_exception_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled error on {request.method} {request.url.path}: {exc}",
            exc_info=exc,
        )
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error"
        )
