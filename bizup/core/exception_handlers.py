import logging
import uuid
from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from bizup.core.exceptions import ApiError, ApiTransportError, ValidationFailed

log = logging.getLogger("bizup.errors")


def _rid():
    """Generates a unique request ID for tracing."""
    return uuid.uuid4().hex


def _error_body(code: str, message, details=None):
    error = {"code": code, "message": message}
    if details is not None:
        error["details"] = details
    return {"success": False, "error": error, "request_id": _rid()}


# ----------- Exception Handlers (called by FastAPI) -----------

def http_exception_handler(request: Request, exc: HTTPException):
    """Handles exceptions raised by HTTPException (e.g., 404, 400)."""
    return JSONResponse(status_code=exc.status_code, content=_error_body("http_error", exc.detail))


def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handles Pydantic validation errors (422 Unprocessable Entity)."""
    return JSONResponse(status_code=422, content=_error_body("validation_error", "Invalid input data", exc.errors()))


def upstream_error_handler(request: Request, exc: ApiError):
    """The upstream API rejected a call; pass its status and message through."""
    return JSONResponse(status_code=exc.status_code, content=_error_body("upstream_error", exc.message))


def upstream_unreachable_handler(request: Request, exc: ApiTransportError):
    return JSONResponse(status_code=502, content=_error_body("upstream_unreachable", exc.message))


def client_validation_handler(request: Request, exc: ValidationFailed):
    return JSONResponse(status_code=400, content=_error_body("validation_error", exc.message))


def generic_exception_handler(request: Request, exc: Exception):
    """Handles all unhandled exceptions (500 Internal Server Error)."""
    log.exception(f"Unhandled exception on path: {request.url.path}")
    return JSONResponse(status_code=500, content=_error_body("server_error", "Internal Server Error"))


# ----------- Registration Function -----------

def setup_exception_handlers(app: FastAPI):
    """Registers all custom exception handlers with the FastAPI application."""
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ApiError, upstream_error_handler)
    app.add_exception_handler(ApiTransportError, upstream_unreachable_handler)
    app.add_exception_handler(ValidationFailed, client_validation_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    return app
