from __future__ import annotations

from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator


class InterviewStartRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    role: str | None = Field(default=None, description="Target role.", examples=["Go Developer"])
    wants_paragraph: bool = Field(
        default=False,
        validation_alias=AliasChoices("wantsParagraph", "isParagraph", "wants_paragraph"),
        description=(
            "If true, return a 60-100 word practice-reading paragraph; otherwise return the "
            "interviewer's opening greeting."
        ),
    )


class HistoryTurn(BaseModel):
    """One conversation turn. Accepts `{role, text}` or the chat-style `{role, parts: [{text}]}`."""

    role: Literal["user", "model"]
    text: str = ""

    @model_validator(mode="before")
    @classmethod
    def _flatten_parts(cls, data: Any) -> Any:
        if isinstance(data, dict) and "text" not in data and isinstance(data.get("parts"), list):
            texts = [p.get("text", "") for p in data["parts"] if isinstance(p, dict)]
            return {**data, "text": "".join(t for t in texts if isinstance(t, str))}
        return data


class TechnicalQuestion(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    question: str = Field(min_length=1)
    options: list[str] = Field(min_length=4, max_length=4, description="Options A-D.")
    correct_answer: int = Field(
        ge=0,
        le=3,
        validation_alias=AliasChoices("correctAnswer", "correct_answer"),
        description="Index of the correct option (0 = A).",
    )
    explanation: str = ""


class StepMetrics(BaseModel):
    confidence: float | None = Field(
        default=None, ge=0.0, le=1.0, description="Speech confidence score for the answer."
    )


class InterviewStepRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    history: list[HistoryTurn] = Field(
        default_factory=list,
        description="Full conversation so far; the last turn is the candidate's latest answer.",
    )
    technical_questions: list[TechnicalQuestion] = Field(
        default_factory=list,
        validation_alias=AliasChoices("technicalQuestions", "technical_questions"),
        description="Question bank, asked in order.",
    )
    metrics: StepMetrics = Field(default_factory=StepMetrics)


class CodeReviewRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    challenge_title: str | None = Field(
        default=None, validation_alias=AliasChoices("challengeTitle", "challenge_title")
    )
    problem_statement: str | None = Field(
        default=None, validation_alias=AliasChoices("problemStatement", "problem_statement")
    )
    code: str | None = None


class InterviewMessageOut(BaseModel):
    message: str = Field(
        description="Interviewer message. Step responses use `FEEDBACK: ...` / `NEXT_QUESTION: ...`."
    )


class CodeReviewOut(BaseModel):
    review: str = Field(description="Plain-text review ending with a score out of 100.")
