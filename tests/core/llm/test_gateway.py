from __future__ import annotations

import asyncio

import pytest

from app.core.llm.base import GenerationParams, ProviderFailure, ProviderSuccess
from app.core.llm.gateway import LLMGateway, strip_emphasis
from app.domain.exceptions import (
    AllProvidersFailed,
    NoProviderConfigured,
    UpstreamAuthRejected,
    UpstreamRequestFailed,
)
from tests._helpers import FakeProvider, failure

PARAMS = GenerationParams(temperature=0.9, max_output_tokens=220)


def _run(gateway: LLMGateway) -> str:
    return asyncio.run(
        gateway.generate_with_fallback(system_prompt="sys", user_prompt="user", params=PARAMS)
    )


def test_primary_success_short_circuits_secondary() -> None:
    primary = FakeProvider("openrouter", "Primary answer.")
    secondary = FakeProvider("gemini", "Secondary answer.")

    assert _run(LLMGateway(providers=[primary, secondary])) == "Primary answer."
    assert len(primary.calls) == 1
    assert secondary.calls == []


def test_falls_back_to_secondary_and_trims_text() -> None:
    primary = FakeProvider("openrouter", failure("openrouter"))
    secondary = FakeProvider("gemini", "   Secondary answer.\n\n")

    assert _run(LLMGateway(providers=[primary, secondary])) == "Secondary answer."
    assert len(primary.calls) == 1
    assert len(secondary.calls) == 1


def test_exception_and_blank_text_count_as_failures() -> None:
    raising = FakeProvider("openrouter", RuntimeError("socket closed"))
    blank = FakeProvider("gemini", "  ** **  ")

    with pytest.raises(AllProvidersFailed) as exc_info:
        _run(LLMGateway(providers=[raising, blank]))

    reasons = [f.reason for f in exc_info.value.failures]
    assert reasons == ["unexpected error (RuntimeError)", "empty generated text"]


def test_all_providers_failing_enumerates_every_reason() -> None:
    primary = FakeProvider("openrouter", failure("openrouter", "rate limited", 429))
    secondary = FakeProvider("gemini", failure("gemini", "request timed out", None))

    with pytest.raises(AllProvidersFailed) as exc_info:
        _run(LLMGateway(providers=[primary, secondary]))

    err = exc_info.value
    assert err.status_code == 500
    assert "openrouter (HTTP 429): rate limited" in err.message
    assert "gemini: request timed out" in err.message


def test_single_provider_auth_failure_is_distinct() -> None:
    only = FakeProvider("openrouter", failure("openrouter", "invalid key", 401))

    with pytest.raises(UpstreamAuthRejected) as exc_info:
        _run(LLMGateway(providers=[only]))

    assert exc_info.value.status_code == 401
    assert exc_info.value.details == "invalid key"


def test_single_provider_other_failure_is_upstream_request_failed() -> None:
    only = FakeProvider("gemini", failure("gemini", "upstream returned an error: boom", 503))

    with pytest.raises(UpstreamRequestFailed) as exc_info:
        _run(LLMGateway(providers=[only]))

    assert exc_info.value.status_code == 502
    assert "boom" in (exc_info.value.details or "")


def test_no_providers_raises_without_any_call() -> None:
    gateway = LLMGateway(providers=[])

    with pytest.raises(NoProviderConfigured) as exc_info:
        _run(gateway)

    assert "OPENROUTER_API_KEY" in exc_info.value.message
    assert "GEMINI_API_KEY" in exc_info.value.message


def test_generate_once_uses_primary_only() -> None:
    primary = FakeProvider("openrouter", failure("openrouter"))
    secondary = FakeProvider("gemini", "never used")
    gateway = LLMGateway(providers=[primary, secondary])

    result = asyncio.run(
        gateway.generate_once(system_prompt="sys", user_prompt="user", params=PARAMS)
    )

    assert isinstance(result, ProviderFailure)
    assert secondary.calls == []


def test_generate_once_strips_emphasis() -> None:
    gateway = LLMGateway(providers=[FakeProvider("gemini", "**Bold** and *italic* text")])

    result = asyncio.run(
        gateway.generate_once(system_prompt="sys", user_prompt="user", params=PARAMS)
    )

    assert result == ProviderSuccess(provider="gemini", text="Bold and italic text")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("**The correct answer is 4.**", "The correct answer is 4."),
        ("## Feedback\nGood pace.", "Feedback\nGood pace."),
        ("Use `defer` here, ***always***.", "Use defer here, always."),
        ("snake_case_name stays", "snake_case_name stays"),
        ("Define __init__ and use __name__", "Define __init__ and use __name__"),
        ("  plain text  ", "plain text"),
    ],
)
def test_strip_emphasis(raw: str, expected: str) -> None:
    assert strip_emphasis(raw) == expected
