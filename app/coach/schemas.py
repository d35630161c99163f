from __future__ import annotations

import math
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class CoachMetrics(BaseModel):
    """
    Speech metrics measured client-side for one reading attempt.

    Missing or malformed values (non-numeric, NaN, infinite) fall back to zero
    instead of rejecting the request.
    """

    speed: float = Field(default=0.0, description="Speaking speed in words per minute.")
    confidence: float = Field(
        default=0.0, description="Speech recognition confidence in [0, 1].", examples=[0.83]
    )
    fillers: float = Field(default=0.0, description="Number of filler words detected.")
    pauses: float = Field(default=0.0, description="Number of long pauses detected.")

    @field_validator("speed", "confidence", "fillers", "pauses", mode="before")
    @classmethod
    def _malformed_to_zero(cls, value: Any) -> float:
        if isinstance(value, bool) or value is None:
            return 0.0
        if isinstance(value, (int, float)):
            number = float(value)
        elif isinstance(value, str):
            try:
                number = float(value.strip())
            except ValueError:
                return 0.0
        else:
            return 0.0
        return number if math.isfinite(number) else 0.0


class CoachContext(BaseModel):
    role_focus: str | None = Field(
        default=None,
        validation_alias=AliasChoices("role_focus", "roleFocus", "langs"),
        description="Role or language focus of the practice session. Defaults to `General`.",
        examples=["Python, SQL"],
    )
    company: str | None = Field(
        default=None, description="Target company, if any.", examples=["Acme Corp"]
    )


class CoachRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Presence is checked by the service so the error can name every missing field.
    paragraph: str | None = Field(
        default=None, description="The paragraph the learner was asked to read aloud."
    )
    transcript: str | None = Field(
        default=None, description="Speech-to-text transcript of the learner's attempt."
    )
    metrics: CoachMetrics = Field(default_factory=CoachMetrics)
    context: CoachContext = Field(default_factory=CoachContext)
    previous_feedback: str | None = Field(
        default=None,
        validation_alias=AliasChoices("previous_feedback", "previousFeedback"),
        description="Feedback shown for the previous attempt; the model avoids repeating it.",
    )

    @field_validator("metrics", mode="before")
    @classmethod
    def _metrics_default(cls, value: Any) -> Any:
        return value if isinstance(value, (dict, CoachMetrics)) else {}

    @field_validator("context", mode="before")
    @classmethod
    def _context_default(cls, value: Any) -> Any:
        return value if isinstance(value, (dict, CoachContext)) else {}


class CoachFeedbackOut(BaseModel):
    feedback: str = Field(description="Plain-text coaching feedback (4-6 sentences).")
