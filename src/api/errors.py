"""
Centralised exception handlers.

Every failure leaves the API as ``{"success": false, "message", "error",
...}`` with a distinct machine-readable ``error`` code.
"""

import logging
from collections import defaultdict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.domain.errors import EndpointError, InternalError, ValidationError

logger = logging.getLogger(__name__)


def validation_details(exc: RequestValidationError) -> dict[str, list[str]]:
    """Group pydantic errors by dotted field path (``origin.lat``)."""
    details: dict[str, list[str]] = defaultdict(list)
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        details[".".join(loc) or "body"].append(error.get("msg", "Invalid value"))
    return dict(details)


def _endpoint_error_handler(_: Request, exc: EndpointError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.payload())


def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    error = ValidationError(details=validation_details(exc))
    logger.error("Validation Error path=%s errors=%s", request.url.path, error.details)
    return _endpoint_error_handler(request, error)


def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # Hide internal details in production
    logger.exception("Unhandled error on %s", request.url.path)
    production = request.app.state.settings.is_production
    error = InternalError(details=None if production else str(exc))
    return _endpoint_error_handler(request, error)


def install(app: FastAPI) -> None:
    app.add_exception_handler(EndpointError, _endpoint_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
