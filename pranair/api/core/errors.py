"""Error taxonomy shared by the gateway, the parser and the routers."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

RAW_PREVIEW_CHARS = 500


class PranairError(Exception):
    """Base error converted into a JSON envelope at the handler boundary."""

    status_code = 500
    error = "Internal error"

    def __init__(self, message: str, *, error: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if error is not None:
            self.error = error


class ConfigurationError(PranairError):
    """A required setting, usually a provider credential, is absent."""

    error = "Configuration error"


class InputError(PranairError):
    """The request is missing required input."""

    status_code = 400
    error = "Invalid request"


class UpstreamError(PranairError):
    """The provider failed, was unreachable, or returned unusable output."""

    error = "Upstream provider failed"

    def __init__(
        self,
        message: str,
        *,
        raw: str = "",
        status: int | None = None,
        error: str | None = None,
    ) -> None:
        super().__init__(message, error=error)
        self.raw = raw
        self.status = status

    def __str__(self) -> str:
        if not self.raw:
            return self.message
        return f"{self.message}: {self.raw[:RAW_PREVIEW_CHARS]}"


class ResponseParseError(UpstreamError):
    """Provider text did not contain the expected JSON."""

    error = "Could not parse provider response"


class ProviderWarmingUp(UpstreamError):
    """The hosted model is still loading."""

    status_code = 503
    error = "Provider warming up"


def error_response(exc: PranairError, *, detail_key: str = "message", error: str | None = None) -> JSONResponse:
    """Render an error as ``{error, <detail_key>}`` with the matching status."""

    if isinstance(exc, UpstreamError):
        logger.error("%s (status=%s): %s", exc.message, exc.status, exc.raw[:RAW_PREVIEW_CHARS])
    else:
        logger.warning("%s: %s", exc.error, exc.message)
    # Route labels apply to provider faults only; the other errors keep their own label.
    overridable = isinstance(exc, UpstreamError) and not isinstance(exc, ProviderWarmingUp)
    label = error if error is not None and overridable else exc.error
    return JSONResponse(status_code=exc.status_code, content={"error": label, detail_key: str(exc)})


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request", "detail": jsonable_errors(exc)},
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"error": PranairError.error, "message": str(exc) or type(exc).__name__},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
