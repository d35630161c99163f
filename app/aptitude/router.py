from __future__ import annotations

from fastapi import APIRouter, Depends

from app.aptitude.schemas import ExplanationOut, ExplanationRequest
from app.aptitude.service import AptitudeExplanationService
from app.core.llm.base import GenerationParams
from app.core.llm.deps import get_gateway
from app.core.llm.gateway import LLMGateway
from app.core.settings import get_settings

router = APIRouter(tags=["aptitude"])


@router.post(
    "/explain",
    response_model=ExplanationOut,
    summary="Explain an aptitude answer",
    description=(
        "Explain the correct answer to an aptitude question and why the learner's choice "
        "was wrong.\n\n"
        "If the AI provider fails, a short canned explanation is returned with status 200 "
        "so the client always has something to display."
    ),
)
@router.post("/aptitude/explain", response_model=ExplanationOut, include_in_schema=False)
async def post_explanation(
    payload: ExplanationRequest,
    gateway: LLMGateway = Depends(get_gateway),
) -> ExplanationOut:
    settings = get_settings()
    svc = AptitudeExplanationService(
        gateway=gateway,
        params=GenerationParams(
            temperature=settings.explanation_temperature,
            max_output_tokens=settings.explanation_max_tokens,
        ),
        min_sentences=settings.explanation_min_sentences,
    )
    explanation = await svc.generate_explanation(request=payload)
    return ExplanationOut(explanation=explanation)
