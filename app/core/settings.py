from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Provider A (OpenRouter, OpenAI-compatible chat completions)
    # Keys are optional: a missing key disables the provider, it never crashes startup.
    openrouter_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("OPENROUTER_API_KEY", "openrouter_api_key"),
        description="OpenRouter API key. Tried first when present.",
    )
    openrouter_model: str = Field(
        default="openai/gpt-4o-mini",
        validation_alias=AliasChoices("OPENROUTER_MODEL", "openrouter_model"),
        description="OpenRouter model identifier.",
    )
    openrouter_base_url: str = Field(
        default="https://openrouter.ai/api/v1",
        validation_alias=AliasChoices("OPENROUTER_BASE_URL", "openrouter_base_url"),
        description="Base URL for the OpenRouter API (override for proxies/emulators).",
    )
    openrouter_app_title: str = Field(
        default="AptiVerse",
        validation_alias=AliasChoices("OPENROUTER_APP_TITLE", "openrouter_app_title"),
        description="Value sent in the X-Title header for OpenRouter attribution.",
    )

    # Provider B (Google Gemini generateContent REST API)
    gemini_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "GEMINI_API_KEY",
            "NEXT_PUBLIC_GEMINI_API_KEY",
            "gemini_api_key",
        ),
        description="Google Gemini API key. Used as fallback after OpenRouter.",
    )
    gemini_model: str = Field(
        default="gemini-1.5-flash",
        validation_alias=AliasChoices("GEMINI_MODEL", "gemini_model"),
        description="Gemini model identifier.",
    )
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        validation_alias=AliasChoices("GEMINI_BASE_URL", "gemini_base_url"),
        description="Base URL for the Gemini API.",
    )

    llm_timeout_seconds: float = Field(
        default=30.0,
        ge=1.0,
        validation_alias=AliasChoices("LLM_TIMEOUT_SECONDS", "llm_timeout_seconds"),
        description="Timeout for a single provider attempt (seconds).",
    )
    upstream_error_snippet_chars: int = Field(
        default=500,
        ge=0,
        validation_alias=AliasChoices(
            "UPSTREAM_ERROR_SNIPPET_CHARS", "upstream_error_snippet_chars"
        ),
        description="Max characters of an upstream error body kept in failure reasons.",
    )

    # Generation parameters per feature
    coach_temperature: float = Field(
        default=0.9,
        ge=0.0,
        le=2.0,
        validation_alias=AliasChoices("COACH_TEMPERATURE", "coach_temperature"),
        description="Sampling temperature for coaching feedback (high for variety).",
    )
    coach_max_tokens: int = Field(
        default=220,
        ge=16,
        validation_alias=AliasChoices("COACH_MAX_TOKENS", "coach_max_tokens"),
        description="Output token budget for coaching feedback.",
    )
    explanation_temperature: float = Field(
        default=0.3,
        ge=0.0,
        le=2.0,
        validation_alias=AliasChoices("EXPLANATION_TEMPERATURE", "explanation_temperature"),
        description="Sampling temperature for aptitude explanations.",
    )
    explanation_max_tokens: int = Field(
        default=1000,
        ge=16,
        validation_alias=AliasChoices("EXPLANATION_MAX_TOKENS", "explanation_max_tokens"),
        description="Output token budget for aptitude explanations.",
    )
    explanation_min_sentences: int = Field(
        default=6,
        ge=1,
        le=20,
        validation_alias=AliasChoices("EXPLANATION_MIN_SENTENCES", "explanation_min_sentences"),
        description="Minimum sentence count requested from the model for explanations.",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
