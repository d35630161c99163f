from __future__ import annotations

import logging
from collections.abc import Sequence

from app.core.llm.base import ChatTurn, GenerationParams, ProviderSuccess
from app.core.llm.gateway import LLMGateway
from app.core.middleware.http_logging import get_request_id
from app.domain.exceptions import InvalidInput
from app.interview.prompt import (
    CODE_REVIEW_APOLOGY,
    DEFAULT_CONFIDENCE,
    FALLBACK_GREETING,
    FALLBACK_PARAGRAPH,
    NOT_CONFIGURED_STEP,
    STEP_APOLOGY,
    STEP_SYSTEM_PROMPT,
    build_code_review_prompts,
    build_first_turn_prompt,
    build_followup_prompt,
    build_start_prompts,
)
from app.interview.schemas import HistoryTurn, TechnicalQuestion

logger = logging.getLogger("app.interview")

CONVERSATION_PARAMS = GenerationParams(
    temperature=0.7, max_output_tokens=1024, top_p=0.95, top_k=40
)
CODE_REVIEW_PARAMS = GenerationParams(
    temperature=0.2, max_output_tokens=1024, top_p=0.95, top_k=40
)

_QUESTION_MARKER = "NEXT_QUESTION"
_FALLBACK_REPLIES = frozenset({STEP_APOLOGY, NOT_CONFIGURED_STEP})


def _completed_turns(history: Sequence[HistoryTurn]) -> list[HistoryTurn]:
    """Drop fixed fallback replies together with the answer each one interrupted.

    The candidate is asked to repeat that answer, so it must not advance the
    question bank.
    """

    turns: list[HistoryTurn] = []
    for turn in history:
        if turn.role == "model" and turn.text.strip() in _FALLBACK_REPLIES:
            if turns and turns[-1].role == "user":
                turns.pop()
            continue
        turns.append(turn)
    return turns


class InterviewService:
    """
    Mock-interview conversation and code review.

    Every operation degrades to a fixed message instead of failing so the
    interview loop on the client is never interrupted. Only the primary
    provider is used; no state is kept between calls.
    """

    def __init__(self, *, gateway: LLMGateway):
        self._gateway = gateway

    async def start_interview(self, *, role: str | None, wants_paragraph: bool) -> str:
        fallback = FALLBACK_PARAGRAPH if wants_paragraph else FALLBACK_GREETING
        if not self._gateway.is_configured:
            logger.warning(
                "Interview start served fallback (LLM not configured)",
                extra={"request_id": get_request_id()},
            )
            return fallback

        system_prompt, user_prompt = build_start_prompts(
            role=(role or "").strip() or "General", wants_paragraph=wants_paragraph
        )
        result = await self._gateway.generate_once(
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            params=CONVERSATION_PARAMS,
            operation="interview_start",
        )
        return result.text if isinstance(result, ProviderSuccess) else fallback

    async def process_step(
        self,
        *,
        history: Sequence[HistoryTurn],
        questions: Sequence[TechnicalQuestion],
        confidence: float | None,
    ) -> str:
        if not history:
            raise InvalidInput(["history"])
        if history[-1].role != "user":
            raise InvalidInput(
                ["history"], message="The last history turn must be the candidate's response."
            )

        if not self._gateway.is_configured:
            logger.warning(
                "Interview step served fallback (LLM not configured)",
                extra={"request_id": get_request_id()},
            )
            return NOT_CONFIGURED_STEP

        turns = _completed_turns(history)
        latest = turns[-1].text.strip()
        user_turns = sum(1 for turn in turns if turn.role == "user")
        # Questions already asked = model turns that carried a NEXT_QUESTION field.
        asked = sum(1 for turn in turns if turn.role == "model" and _QUESTION_MARKER in turn.text)

        if user_turns == 1:
            prompt = build_first_turn_prompt(
                candidate_name=latest, first=questions[0] if questions else None
            )
        else:
            previous = questions[asked - 1] if 0 < asked <= len(questions) else None
            upcoming = questions[asked] if asked < len(questions) else None
            prompt = build_followup_prompt(
                candidate_response=latest,
                confidence=DEFAULT_CONFIDENCE if confidence is None else confidence,
                previous=previous,
                upcoming=upcoming,
            )

        prior = [ChatTurn(role=turn.role, text=turn.text) for turn in turns[:-1]]
        result = await self._gateway.generate_once(
            system_prompt=STEP_SYSTEM_PROMPT,
            user_prompt=prompt,
            params=CONVERSATION_PARAMS,
            history=prior,
            operation="interview_step",
        )
        return result.text if isinstance(result, ProviderSuccess) else STEP_APOLOGY

    async def review_code(
        self, *, challenge_title: str | None, problem_statement: str | None, code: str | None
    ) -> str:
        title = (challenge_title or "").strip()
        statement = (problem_statement or "").strip()
        source = (code or "").strip()

        missing = [
            name
            for name, value in (
                ("challengeTitle", title),
                ("problemStatement", statement),
                ("code", source),
            )
            if not value
        ]
        if missing:
            raise InvalidInput(missing)

        if not self._gateway.is_configured:
            logger.warning(
                "Code review served fallback (LLM not configured)",
                extra={"request_id": get_request_id()},
            )
            return CODE_REVIEW_APOLOGY

        system_prompt, user_prompt = build_code_review_prompts(
            challenge_title=title, problem_statement=statement, code=source
        )
        result = await self._gateway.generate_once(
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            params=CODE_REVIEW_PARAMS,
            operation="code_review",
        )
        return result.text if isinstance(result, ProviderSuccess) else CODE_REVIEW_APOLOGY
