from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.exception_handlers import register_exception_handlers
from app.api.schemas import ErrorOut, HealthOut
from app.aptitude.router import router as aptitude_router
from app.coach.router import router as coach_router
from app.core.llm.deps import build_gateway, build_gateway_config
from app.core.logging import setup_logging
from app.core.metrics import PrometheusMetricsMiddleware, metrics_router
from app.core.middleware.http_logging import HttpLoggingMiddleware
from app.core.settings import get_settings
from app.interview.router import router as interview_router

setup_logging()
logger = logging.getLogger("app.startup")

_ERROR_RESPONSES = {
    400: {"model": ErrorOut, "description": "Missing or invalid input."},
    500: {"model": ErrorOut, "description": "No provider configured, or all providers failed."},
}
_COACH_ERROR_RESPONSES = {
    **_ERROR_RESPONSES,
    401: {"model": ErrorOut, "description": "Upstream provider rejected the credentials."},
    502: {"model": ErrorOut, "description": "Upstream provider request failed."},
}


def create_app() -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Read provider credentials once at startup, not at import time.
        config = build_gateway_config(get_settings())
        app.state.llm_gateway = build_gateway(config)
        logger.info(
            "LLM gateway configured",
            extra={"provider": ",".join(p.name for p in config.providers) or "none"},
        )
        yield

    app = FastAPI(
        title="AptiVerse LLM Gateway",
        description=(
            "Stateless endpoints that turn learner input (reading transcripts, aptitude "
            "answers, interview answers, code) into prompts for an external LLM and relay "
            "the generated text.\n\n"
            "Design principles:\n"
            "- Providers are tried in a fixed order (OpenRouter, then Gemini).\n"
            "- Learner-facing features degrade to canned text instead of failing where possible.\n"
            "- Logs and metrics carry metadata only; prompts and outputs are never logged."
        ),
        lifespan=lifespan,
        docs_url="/swagger",
        redoc_url="/docs",
        openapi_tags=[
            {
                "name": "health",
                "description": "Basic uptime check for load balancers and monitoring.",
            },
            {"name": "coach", "description": "Reading-practice communication feedback."},
            {"name": "aptitude", "description": "Explanations for aptitude questions."},
            {"name": "interview", "description": "Mock technical interview and code review."},
            {"name": "monitoring", "description": "Prometheus-compatible metrics endpoint."},
        ],
    )

    app.add_middleware(PrometheusMetricsMiddleware)
    app.add_middleware(HttpLoggingMiddleware)

    register_exception_handlers(app)

    @app.get(
        "/health",
        response_model=HealthOut,
        tags=["health"],
        summary="Health check",
        description=(
            "Lightweight endpoint to verify the API process is running.\n\n"
            "This endpoint does not call any LLM provider."
        ),
    )
    async def health() -> HealthOut:
        return HealthOut(status="ok")

    app.include_router(metrics_router)
    app.include_router(coach_router, responses=_COACH_ERROR_RESPONSES)
    app.include_router(aptitude_router, responses=_ERROR_RESPONSES)
    app.include_router(interview_router, responses=_ERROR_RESPONSES)
    return app


app = create_app()
