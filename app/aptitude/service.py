from __future__ import annotations

import logging

from app.aptitude.prompt import build_explanation_prompts, fallback_explanation
from app.aptitude.schemas import ExplanationRequest
from app.core.llm.base import GenerationParams, ProviderSuccess
from app.core.llm.gateway import LLMGateway
from app.core.middleware.http_logging import get_request_id
from app.domain.exceptions import InvalidInput

logger = logging.getLogger("app.aptitude")


class AptitudeExplanationService:
    def __init__(self, *, gateway: LLMGateway, params: GenerationParams, min_sentences: int):
        self._gateway = gateway
        self._params = params
        self._min_sentences = min_sentences

    async def generate_explanation(self, *, request: ExplanationRequest) -> str:
        """
        Explain why the correct answer is right and the learner's answer is wrong.

        Only the primary provider is used. Once input and configuration checks pass,
        this never fails: an upstream failure yields the canned fallback text.
        """

        question = (request.question or "").strip()
        correct_answer = (request.correct_answer or "").strip()
        user_answer = (request.user_answer or "").strip()

        missing = [
            name
            for name, value in (
                ("question", question),
                ("correctAnswer", correct_answer),
                ("userAnswer", user_answer),
            )
            if not value
        ]
        if missing:
            raise InvalidInput(missing)

        self._gateway.require_configured()

        system_prompt, user_prompt = build_explanation_prompts(
            question=question,
            correct_answer=correct_answer,
            user_answer=user_answer,
            min_sentences=self._min_sentences,
        )
        result = await self._gateway.generate_once(
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            params=self._params,
            operation="aptitude_explanation",
        )
        if isinstance(result, ProviderSuccess):
            return result.text

        logger.warning(
            "Aptitude explanation degraded to fallback",
            extra={
                "request_id": get_request_id(),
                "provider": result.provider,
                "upstream_status": result.http_status,
            },
        )
        return fallback_explanation(correct_answer=correct_answer, user_answer=user_answer)
