from __future__ import annotations

import math

from app.coach.schemas import CoachMetrics


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (72.5 -> 73)."""

    return int(math.floor(value + 0.5))


def format_metrics(metrics: CoachMetrics) -> list[str]:
    confidence = min(max(metrics.confidence, 0.0), 1.0)
    return [
        f"Speed: {round_half_up(metrics.speed)} WPM",
        f"Confidence: {round_half_up(confidence * 100)}%",
        f"Fillers: {round_half_up(metrics.fillers)}",
        f"Pauses: {round_half_up(metrics.pauses)}",
    ]


def build_coach_prompts(
    *,
    paragraph: str,
    transcript: str,
    metrics: CoachMetrics,
    role_focus: str | None,
    company: str | None,
    previous_feedback: str | None,
) -> tuple[str, str]:
    """
    Create (system_prompt, user_prompt) for reading-practice feedback.

    The system prompt stays stable; everything learner-specific goes in the user prompt.
    """

    system_prompt = " ".join(
        [
            "You are an expert communication coach for AptiVerse.",
            "You must produce varied, non-repetitive feedback every time; never fall back on a fixed template.",
            "Refer to specific words or phrases from the transcript and to the provided metrics.",
            "Be professional, concise, and actionable.",
            "Write 4 to 6 sentences of plain text: no markdown, no bullets, no asterisks.",
            "If previous feedback is supplied, do not repeat its wording or its advice.",
            "Do not mention being an AI model or policies.",
        ]
    )

    focus = (role_focus or "").strip() or "General"
    company = (company or "").strip()
    previous_feedback = (previous_feedback or "").strip()

    lines = [
        "Context:",
        f"Role focus: {focus}{f' at {company}' if company else ''}.",
        "",
        "Reading paragraph:",
        paragraph,
        "",
        "User transcript:",
        transcript,
        "",
        "Metrics:",
        *format_metrics(metrics),
        "",
    ]
    if previous_feedback:
        lines += [f"Previous feedback (avoid repeating it): {previous_feedback}", ""]
    lines += [
        "Task:",
        "Give 4 to 6 sentences:",
        "1) One sentence praising something specific.",
        "2) Two to three sentences of corrections referencing the metrics and/or transcript.",
        "3) One sentence with a concrete drill for the next attempt.",
        "Use numbers naturally (e.g., WPM, filler count, confidence %).",
    ]

    return system_prompt, "\n".join(lines)
