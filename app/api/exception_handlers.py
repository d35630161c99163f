from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.api.schemas import ErrorOut
from app.domain.exceptions import GatewayError

logger = logging.getLogger("app.errors")


def _error_response(*, status_code: int, error: str, details: str | None) -> JSONResponse:
    body = ErrorOut(error=error, details=details).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)


def _summarize_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        msg = err.get("msg", "invalid value")
        parts.append(f"{loc}: {msg}" if loc else str(msg))
    return "; ".join(parts)


def register_exception_handlers(app: FastAPI) -> None:
    """Register application exception handlers (all errors render as `{error, details?}`)."""

    @app.exception_handler(GatewayError)
    async def handle_gateway_error(request: Request, exc: GatewayError) -> JSONResponse:
        # Never log request bodies: they carry learner transcripts and answers.
        request_id = getattr(request.state, "request_id", None) or request.headers.get(
            "X-Request-ID"
        )
        logger.info(
            "Gateway error",
            extra={
                "request_id": request_id,
                "http_method": request.method,
                "request_path": request.url.path,  # no query string
                "status_code": exc.status_code,
                "error": exc.__class__.__name__,
            },
        )
        return _error_response(status_code=exc.status_code, error=exc.message, details=exc.details)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        logger.info(
            "Request validation failed",
            extra={
                "request_id": getattr(request.state, "request_id", None),
                "http_method": request.method,
                "request_path": request.url.path,
                "status_code": 400,
                "error": "request_validation",
            },
        )
        return _error_response(
            status_code=400,
            error="Invalid request body.",
            details=_summarize_validation_errors(exc),
        )
