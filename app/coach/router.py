from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request

from app.coach.schemas import CoachFeedbackOut, CoachRequest
from app.coach.service import CoachFeedbackService
from app.core.llm.base import GenerationParams
from app.core.llm.deps import get_gateway
from app.core.llm.gateway import LLMGateway
from app.core.settings import get_settings
from app.domain.exceptions import GatewayError

router = APIRouter(tags=["coach"])
logger = logging.getLogger("app.coach")


@router.post(
    "/coach",
    response_model=CoachFeedbackOut,
    summary="Reading-practice feedback",
    description=(
        "Generate varied, plain-text coaching feedback for a read-aloud attempt.\n\n"
        "Providers are tried in a fixed order (OpenRouter, then Gemini); the first "
        "non-empty answer is returned."
    ),
)
async def post_coach_feedback(
    payload: CoachRequest,
    request: Request,
    gateway: LLMGateway = Depends(get_gateway),
) -> CoachFeedbackOut:
    settings = get_settings()
    request_id = getattr(request.state, "request_id", None) or request.headers.get("X-Request-ID")
    svc = CoachFeedbackService(
        gateway=gateway,
        params=GenerationParams(
            temperature=settings.coach_temperature,
            max_output_tokens=settings.coach_max_tokens,
        ),
    )

    try:
        feedback = await svc.generate_feedback(request=payload)
    except GatewayError as exc:
        logger.info(
            "Coach feedback failed",
            extra={
                "request_id": request_id,
                "status_code": exc.status_code,
                "error": exc.__class__.__name__,
            },
        )
        raise

    logger.info("Coach feedback generated", extra={"request_id": request_id})
    return CoachFeedbackOut(feedback=feedback)
