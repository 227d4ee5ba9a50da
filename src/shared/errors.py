"""Error taxonomy shared by every bounded context.

Domain and application code raise these where a rule is checked; the HTTP
layer maps them onto status codes in one place (see ``install_error_handlers``).
Protean's own ``ValidationError`` and ``ObjectNotFoundError`` are mapped
alongside them so aggregates can keep raising framework exceptions.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

logger = structlog.get_logger(__name__)

GENERIC_FAILURE_MESSAGE = "Something went wrong while processing the request"


class StorefrontError(Exception):
    """Base class for classified failures."""

    status_code = 500
    default_message = GENERIC_FAILURE_MESSAGE

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_payload(self):
        return {"error": self.message}


class NotFound(StorefrontError):
    status_code = 404
    default_message = "Resource not found"


class AuthenticationFailed(StorefrontError):
    status_code = 401
    default_message = "Login first to access this resource"


class PermissionDenied(StorefrontError):
    status_code = 403
    default_message = "You are not allowed to access this resource"


class Conflict(StorefrontError):
    status_code = 409
    default_message = "The resource is in a state that does not allow this change"


class RequestValidationFailed(StorefrontError):
    """Field-level validation failure reported before any persistence call."""

    status_code = 400
    default_message = "Request validation failed"

    def __init__(self, errors):
        self.errors = tuple(errors)
        super().__init__(self.default_message)

    def to_payload(self):
        messages = {}
        for error in self.errors:
            messages.setdefault(error.field, []).append(error.message)
        return {"error": messages}


# ---------------------------------------------------------------------------
# HTTP mapping
# ---------------------------------------------------------------------------
async def _storefront_error(request: Request, exc: StorefrontError):
    logger.info(
        "request_failed",
        path=request.url.path,
        status_code=exc.status_code,
        error_type=type(exc).__name__,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


async def _domain_validation_error(request: Request, exc: ValidationError):
    logger.info("domain_validation_failed", path=request.url.path, messages=exc.messages)
    return JSONResponse(status_code=400, content={"error": exc.messages})


async def _object_not_found(request: Request, exc: ObjectNotFoundError):
    logger.info("object_not_found", path=request.url.path)
    return JSONResponse(status_code=404, content={"error": NotFound.default_message})


async def _unclassified_error(request: Request, exc: Exception):
    logger.exception("unhandled_error", path=request.url.path, error_type=type(exc).__name__)
    return JSONResponse(status_code=500, content={"error": GENERIC_FAILURE_MESSAGE})


def install_error_handlers(app: FastAPI) -> None:
    """Register the taxonomy's HTTP mapping on a FastAPI application."""
    app.add_exception_handler(StorefrontError, _storefront_error)
    app.add_exception_handler(ValidationError, _domain_validation_error)
    app.add_exception_handler(ObjectNotFoundError, _object_not_found)
    app.add_exception_handler(Exception, _unclassified_error)
