from __future__ import annotations

from fastapi import APIRouter, Depends

from app.core.llm.deps import get_gateway
from app.core.llm.gateway import LLMGateway
from app.interview.schemas import (
    CodeReviewOut,
    CodeReviewRequest,
    InterviewMessageOut,
    InterviewStartRequest,
    InterviewStepRequest,
)
from app.interview.service import InterviewService

router = APIRouter(prefix="/interview", tags=["interview"])


@router.post(
    "/start",
    response_model=InterviewMessageOut,
    summary="Start an interview",
    description=(
        "Return either the interviewer's opening greeting or a practice-reading paragraph "
        "for the role. Falls back to fixed text when no AI provider is available."
    ),
)
async def post_interview_start(
    payload: InterviewStartRequest,
    gateway: LLMGateway = Depends(get_gateway),
) -> InterviewMessageOut:
    svc = InterviewService(gateway=gateway)
    message = await svc.start_interview(role=payload.role, wants_paragraph=payload.wants_paragraph)
    return InterviewMessageOut(message=message)


@router.post(
    "/step",
    response_model=InterviewMessageOut,
    summary="Advance the interview",
    description=(
        "Grade the candidate's latest answer and ask the next question from the bank. "
        "The full conversation is replayed on every call; nothing is stored server-side."
    ),
)
async def post_interview_step(
    payload: InterviewStepRequest,
    gateway: LLMGateway = Depends(get_gateway),
) -> InterviewMessageOut:
    svc = InterviewService(gateway=gateway)
    message = await svc.process_step(
        history=payload.history,
        questions=payload.technical_questions,
        confidence=payload.metrics.confidence,
    )
    return InterviewMessageOut(message=message)


@router.post(
    "/code-review",
    response_model=CodeReviewOut,
    summary="Review a code submission",
)
async def post_code_review(
    payload: CodeReviewRequest,
    gateway: LLMGateway = Depends(get_gateway),
) -> CodeReviewOut:
    svc = InterviewService(gateway=gateway)
    review = await svc.review_code(
        challenge_title=payload.challenge_title,
        problem_statement=payload.problem_statement,
        code=payload.code,
    )
    return CodeReviewOut(review=review)
