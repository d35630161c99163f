from __future__ import annotations

import pytest

from tests._helpers import FakeProvider, failure, make_client

VALID_BODY = {
    "paragraph": "The quick brown fox",
    "transcript": "The quick brown fox",
    "metrics": {"speed": 120, "confidence": 0.9, "fillers": 0, "pauses": 0},
}


def test_coach_returns_feedback_from_primary_provider() -> None:
    provider = FakeProvider("openrouter", "Great clarity! ...")

    with make_client(provider) as client:
        res = client.post("/coach", json=VALID_BODY)

    assert res.status_code == 200, res.text
    assert res.json() == {"feedback": "Great clarity! ..."}
    assert "X-Request-ID" in res.headers

    call = provider.calls[0]
    assert call["params"].temperature == pytest.approx(0.9)
    assert call["params"].max_output_tokens == 220
    assert "Speed: 120 WPM" in call["user_prompt"]
    assert "Confidence: 90%" in call["user_prompt"]


def test_coach_falls_back_to_secondary_provider() -> None:
    primary = FakeProvider("openrouter", failure("openrouter"))
    secondary = FakeProvider("gemini", "  Steady pace today.  ")

    with make_client(primary, secondary) as client:
        res = client.post("/coach", json=VALID_BODY)

    assert res.status_code == 200
    assert res.json() == {"feedback": "Steady pace today."}


@pytest.mark.parametrize(
    ("body", "missing"),
    [
        ({**VALID_BODY, "paragraph": "   "}, "paragraph"),
        ({**VALID_BODY, "transcript": ""}, "transcript"),
        ({"metrics": VALID_BODY["metrics"]}, "paragraph, transcript"),
    ],
)
def test_coach_missing_text_returns_400_without_network_call(body: dict, missing: str) -> None:
    provider = FakeProvider("openrouter", "unused")

    with make_client(provider) as client:
        res = client.post("/coach", json=body)

    assert res.status_code == 400
    assert missing in res.json()["error"]
    assert provider.calls == []


def test_coach_invalid_json_returns_400() -> None:
    with make_client(FakeProvider("openrouter", "unused")) as client:
        res = client.post(
            "/coach", content=b"{not json", headers={"Content-Type": "application/json"}
        )

    assert res.status_code == 400
    assert res.json()["error"] == "Invalid request body."


def test_coach_without_providers_returns_500() -> None:
    with make_client() as client:
        res = client.post("/coach", json=VALID_BODY)

    assert res.status_code == 500
    assert "OPENROUTER_API_KEY" in res.json()["error"]


def test_coach_upstream_auth_rejected_returns_401() -> None:
    provider = FakeProvider("openrouter", failure("openrouter", "invalid api key", 401))

    with make_client(provider) as client:
        res = client.post("/coach", json=VALID_BODY)

    assert res.status_code == 401
    assert res.json() == {
        "error": "Upstream AI provider rejected the credentials.",
        "details": "invalid api key",
    }


def test_coach_upstream_failure_returns_502() -> None:
    provider = FakeProvider("openrouter", failure("openrouter", "empty generated text", 200))

    with make_client(provider) as client:
        res = client.post("/coach", json=VALID_BODY)

    assert res.status_code == 502
    assert res.json()["error"] == "Upstream AI request failed."
    assert res.json()["details"] == "empty generated text"


def test_coach_all_providers_failed_lists_both() -> None:
    primary = FakeProvider("openrouter", failure("openrouter", "rate limited", 429))
    secondary = FakeProvider("gemini", failure("gemini", "request timed out", None))

    with make_client(primary, secondary) as client:
        res = client.post("/coach", json=VALID_BODY)

    assert res.status_code == 500
    error = res.json()["error"]
    assert "rate limited" in error
    assert "request timed out" in error


def test_coach_malformed_metrics_default_to_zero() -> None:
    provider = FakeProvider("openrouter", "ok")
    body = {
        "paragraph": "Hello",
        "transcript": "Hello",
        "metrics": {"speed": "fast", "confidence": None, "fillers": [1]},
        "context": None,
        "previousFeedback": "Try slowing down.",
    }

    with make_client(provider) as client:
        res = client.post("/coach", json=body)

    assert res.status_code == 200
    prompt = provider.calls[0]["user_prompt"]
    assert "Speed: 0 WPM" in prompt
    assert "Confidence: 0%" in prompt
    assert "Fillers: 0" in prompt
    assert "Pauses: 0" in prompt
    assert "Previous feedback (avoid repeating it): Try slowing down." in prompt


def test_coach_accepts_langs_context_alias() -> None:
    provider = FakeProvider("openrouter", "ok")
    body = {**VALID_BODY, "context": {"langs": "Go", "company": "Initech"}}

    with make_client(provider) as client:
        res = client.post("/coach", json=body)

    assert res.status_code == 200
    assert "Role focus: Go at Initech." in provider.calls[0]["user_prompt"]


def test_coach_documents_upstream_error_statuses() -> None:
    with make_client() as client:
        schema = client.get("/openapi.json").json()

    coach = schema["paths"]["/coach"]["post"]["responses"]
    assert {"400", "401", "500", "502"} <= set(coach)
    explain = schema["paths"]["/explain"]["post"]["responses"]
    assert "502" not in explain
