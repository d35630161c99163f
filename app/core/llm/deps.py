from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request

from app.core.llm.base import LLMProvider, ProviderConfig
from app.core.llm.gateway import LLMGateway
from app.core.llm.gemini_client import GeminiClient
from app.core.llm.openrouter_client import OpenRouterClient
from app.core.settings import Settings

OPENROUTER = "openrouter"
GEMINI = "gemini"


@dataclass(frozen=True)
class GatewayConfig:
    """Immutable, ordered set of available providers (preference order)."""

    providers: tuple[ProviderConfig, ...]
    openrouter_app_title: str | None = None
    error_snippet_chars: int = 500


def build_gateway_config(settings: Settings) -> GatewayConfig:
    """Read provider credentials once; a provider without a key is skipped."""

    providers: list[ProviderConfig] = []
    if settings.openrouter_api_key:
        providers.append(
            ProviderConfig(
                name=OPENROUTER,
                api_key=settings.openrouter_api_key,
                base_url=settings.openrouter_base_url,
                model=settings.openrouter_model,
                timeout_seconds=float(settings.llm_timeout_seconds),
            )
        )
    if settings.gemini_api_key:
        providers.append(
            ProviderConfig(
                name=GEMINI,
                api_key=settings.gemini_api_key,
                base_url=settings.gemini_base_url,
                model=settings.gemini_model,
                timeout_seconds=float(settings.llm_timeout_seconds),
            )
        )
    return GatewayConfig(
        providers=tuple(providers),
        openrouter_app_title=settings.openrouter_app_title,
        error_snippet_chars=int(settings.upstream_error_snippet_chars),
    )


def build_provider(config: ProviderConfig, *, gateway_config: GatewayConfig) -> LLMProvider:
    if config.name == OPENROUTER:
        return OpenRouterClient(
            config=config,
            app_title=gateway_config.openrouter_app_title,
            error_snippet_chars=gateway_config.error_snippet_chars,
        )
    if config.name == GEMINI:
        return GeminiClient(config=config, error_snippet_chars=gateway_config.error_snippet_chars)
    raise ValueError(f"Unknown LLM provider: {config.name}")


def build_gateway(config: GatewayConfig) -> LLMGateway:
    return LLMGateway(
        providers=[build_provider(p, gateway_config=config) for p in config.providers]
    )


def get_gateway(request: Request) -> LLMGateway:
    """
    Dependency provider for the gateway built at application startup.

    Tests override this via `app.dependency_overrides` to inject fake providers.
    """

    return request.app.state.llm_gateway
