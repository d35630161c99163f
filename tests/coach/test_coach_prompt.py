from __future__ import annotations

from app.coach.prompt import build_coach_prompts, format_metrics, round_half_up
from app.coach.schemas import CoachMetrics


def _prompts(**overrides) -> tuple[str, str]:
    kwargs = {
        "paragraph": "The quick brown fox",
        "transcript": "The quick brown fox",
        "metrics": CoachMetrics(speed=120, confidence=0.9, fillers=0, pauses=0),
        "role_focus": None,
        "company": None,
        "previous_feedback": None,
    }
    kwargs.update(overrides)
    return build_coach_prompts(**kwargs)


def test_metrics_are_rounded_and_formatted() -> None:
    lines = format_metrics(CoachMetrics(speed=72.6, confidence=0.83, fillers=4.2, pauses=2.5))

    assert lines == ["Speed: 73 WPM", "Confidence: 83%", "Fillers: 4", "Pauses: 3"]


def test_round_half_up() -> None:
    assert round_half_up(72.5) == 73
    assert round_half_up(0.49) == 0
    assert round_half_up(-0.2) == 0


def test_confidence_is_clamped_to_unit_interval() -> None:
    assert format_metrics(CoachMetrics(confidence=1.7))[1] == "Confidence: 100%"
    assert format_metrics(CoachMetrics(confidence=-0.3))[1] == "Confidence: 0%"


def test_user_prompt_embeds_request_data() -> None:
    _, user = _prompts(
        transcript="The quick brown fox jumps",
        metrics=CoachMetrics(speed=72.6, confidence=0.83, fillers=4.2, pauses=1),
    )

    assert "Role focus: General." in user
    assert "Reading paragraph:\nThe quick brown fox" in user
    assert "User transcript:\nThe quick brown fox jumps" in user
    assert "73 WPM" in user
    assert "83%" in user
    assert "Fillers: 4" in user
    assert "Previous feedback" not in user


def test_role_focus_company_and_previous_feedback() -> None:
    _, user = _prompts(
        role_focus="Python", company="Acme", previous_feedback="  Slow down a little.  "
    )

    assert "Role focus: Python at Acme." in user
    assert "Previous feedback (avoid repeating it): Slow down a little." in user


def test_system_prompt_asks_for_varied_plain_text() -> None:
    system, _ = _prompts()

    assert "communication coach" in system
    assert "non-repetitive" in system
    assert "4 to 6 sentences" in system
    assert "no markdown" in system
