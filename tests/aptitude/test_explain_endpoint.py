from __future__ import annotations

import pytest

from tests._helpers import FakeProvider, failure, make_client

BODY = {"question": "2+2=?", "correctAnswer": "4", "userAnswer": "5"}


def test_explain_returns_model_text_without_markup() -> None:
    provider = FakeProvider("openrouter", "**The correct answer is 4.**\n\nAdd two and two.")

    with make_client(provider) as client:
        res = client.post("/explain", json=BODY)

    assert res.status_code == 200, res.text
    assert res.json() == {"explanation": "The correct answer is 4.\n\nAdd two and two."}

    call = provider.calls[0]
    assert call["params"].temperature <= 0.5
    assert "QUESTION: 2+2=?" in call["user_prompt"]
    assert "STUDENT'S WRONG CHOICE: 5" in call["user_prompt"]
    assert "ACTUAL CORRECT ANSWER: 4" in call["user_prompt"]
    assert "at least 6 sentences" in call["system_prompt"]


def test_explain_provider_error_degrades_to_canned_answer() -> None:
    provider = FakeProvider("openrouter", failure("openrouter", "upstream returned an error", 500))

    with make_client(provider) as client:
        res = client.post("/explain", json=BODY)

    assert res.status_code == 200
    explanation = res.json()["explanation"]
    assert explanation.startswith("The correct answer is 4. ")
    assert "unavailable" in explanation


def test_explain_uses_primary_provider_only() -> None:
    primary = FakeProvider("openrouter", failure("openrouter"))
    secondary = FakeProvider("gemini", "should not be used")

    with make_client(primary, secondary) as client:
        res = client.post("/explain", json=BODY)

    assert res.status_code == 200
    assert res.json()["explanation"].startswith("The correct answer is 4.")
    assert secondary.calls == []


@pytest.mark.parametrize("field", ["question", "correctAnswer", "userAnswer"])
def test_explain_missing_field_returns_400_without_network_call(field: str) -> None:
    provider = FakeProvider("openrouter", "unused")
    body = {k: v for k, v in BODY.items() if k != field}

    with make_client(provider) as client:
        res = client.post("/explain", json=body)

    assert res.status_code == 400
    assert field in res.json()["error"]
    assert provider.calls == []


def test_explain_without_providers_returns_500() -> None:
    with make_client() as client:
        res = client.post("/explain", json=BODY)

    assert res.status_code == 500
    assert "API_KEY" in res.json()["error"]


def test_explain_accepts_numeric_answers_and_legacy_path() -> None:
    provider = FakeProvider("openrouter", "The correct answer is 4.")

    with make_client(provider) as client:
        res = client.post(
            "/aptitude/explain", json={"question": "2+2=?", "correctAnswer": 4, "userAnswer": 5}
        )

    assert res.status_code == 200
    assert "ACTUAL CORRECT ANSWER: 4" in provider.calls[0]["user_prompt"]


def test_explain_min_sentences_is_configurable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXPLANATION_MIN_SENTENCES", "10")
    provider = FakeProvider("openrouter", "ok")

    with make_client(provider) as client:
        client.post("/explain", json=BODY)

    assert "at least 10 sentences" in provider.calls[0]["system_prompt"]
