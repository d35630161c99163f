from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ExplanationRequest(BaseModel):
    # Answers like `4` arrive as JSON numbers from some clients.
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    question: str | None = Field(default=None, description="The aptitude question text.")
    correct_answer: str | None = Field(
        default=None,
        validation_alias=AliasChoices("correctAnswer", "correct_answer"),
        description="The correct option as shown to the learner.",
        examples=["4"],
    )
    user_answer: str | None = Field(
        default=None,
        validation_alias=AliasChoices("userAnswer", "user_answer"),
        description="The option the learner picked.",
        examples=["5"],
    )


class ExplanationOut(BaseModel):
    explanation: str = Field(
        description=(
            "Plain-text explanation in three blank-line separated sections. When the AI "
            "provider fails this is a short canned answer stating the correct option."
        )
    )
