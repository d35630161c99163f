from __future__ import annotations

from app.coach.prompt import build_coach_prompts
from app.coach.schemas import CoachRequest
from app.core.llm.base import GenerationParams
from app.core.llm.gateway import LLMGateway
from app.domain.exceptions import InvalidInput


class CoachFeedbackService:
    def __init__(self, *, gateway: LLMGateway, params: GenerationParams):
        self._gateway = gateway
        self._params = params

    async def generate_feedback(self, *, request: CoachRequest) -> str:
        paragraph = (request.paragraph or "").strip()
        transcript = (request.transcript or "").strip()

        missing = [
            name
            for name, value in (("paragraph", paragraph), ("transcript", transcript))
            if not value
        ]
        if missing:
            raise InvalidInput(missing)

        self._gateway.require_configured()

        system_prompt, user_prompt = build_coach_prompts(
            paragraph=paragraph,
            transcript=transcript,
            metrics=request.metrics,
            role_focus=request.context.role_focus,
            company=request.context.company,
            previous_feedback=request.previous_feedback,
        )
        return await self._gateway.generate_with_fallback(
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            params=self._params,
            operation="coach_feedback",
        )
