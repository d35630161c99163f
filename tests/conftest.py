from __future__ import annotations

import pytest

_PROVIDER_ENV_VARS = (
    "OPENROUTER_API_KEY",
    "GEMINI_API_KEY",
    "NEXT_PUBLIC_GEMINI_API_KEY",
    "EXPLANATION_MIN_SENTENCES",
    "COACH_TEMPERATURE",
)


@pytest.fixture(autouse=True)
def _isolate_provider_env(monkeypatch: pytest.MonkeyPatch):
    # Never let a developer's real keys leak into tests (no network calls allowed).
    for name in _PROVIDER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Settings are cached via @lru_cache; clear so each test sees its own environment.
    from app.core.settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from app.main import create_app

    app = create_app()
    with TestClient(app) as c:
        yield c
