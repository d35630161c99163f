"""Ordered multi-provider gateway.

Providers are tried strictly sequentially in the configured order. The first
non-empty generation wins and later providers are never called. Failures are
collected and only surfaced once every provider has been attempted.
"""

from __future__ import annotations

import logging
import re
import time
from collections.abc import Sequence

from app.core.llm.base import (
    ChatTurn,
    GenerationParams,
    LLMProvider,
    ProviderFailure,
    ProviderResult,
    ProviderSuccess,
)
from app.core.metrics import observe_provider_attempt
from app.core.middleware.http_logging import get_request_id
from app.domain.exceptions import (
    AllProvidersFailed,
    NoProviderConfigured,
    UpstreamAuthRejected,
    UpstreamRequestFailed,
)

logger = logging.getLogger("app.llm.gateway")

# Credentials checked at startup, in preference order.
PROVIDER_CREDENTIALS: tuple[str, ...] = ("OPENROUTER_API_KEY", "GEMINI_API_KEY")

# Underscore runs are left alone so identifiers like __init__ survive.
_BOLD_ITALIC_RE = re.compile(r"(\*{1,3})(?=\S)(.+?)(?<=\S)\1", re.DOTALL)
_HEADING_RE = re.compile(r"^\s{0,3}#{1,6}\s+", re.MULTILINE)


def strip_emphasis(text: str) -> str:
    """Remove markdown emphasis the model may emit despite plain-text instructions."""

    text = _BOLD_ITALIC_RE.sub(r"\2", text)
    text = _HEADING_RE.sub("", text)
    text = text.replace("*", "").replace("`", "")
    return text.strip()


class LLMGateway:
    def __init__(self, *, providers: Sequence[LLMProvider]):
        self._providers = tuple(providers)

    @property
    def provider_names(self) -> tuple[str, ...]:
        return tuple(p.name for p in self._providers)

    @property
    def is_configured(self) -> bool:
        return bool(self._providers)

    def require_configured(self) -> None:
        if not self._providers:
            raise NoProviderConfigured(PROVIDER_CREDENTIALS)

    async def _attempt(
        self,
        provider: LLMProvider,
        *,
        system_prompt: str,
        user_prompt: str,
        params: GenerationParams,
        history: Sequence[ChatTurn],
        operation: str,
    ) -> ProviderResult:
        started = time.perf_counter()
        try:
            result = await provider.generate(
                system_prompt=system_prompt,
                user_prompt=user_prompt,
                params=params,
                history=history,
            )
        except Exception as exc:  # noqa: BLE001 - a misbehaving client must not break the chain
            logger.exception(
                "LLM provider raised",
                extra={
                    "request_id": get_request_id(),
                    "provider": provider.name,
                    "operation": operation,
                },
            )
            result = ProviderFailure(
                provider=provider.name, reason=f"unexpected error ({exc.__class__.__name__})"
            )

        if isinstance(result, ProviderSuccess):
            text = strip_emphasis(result.text)
            if not text:
                result = ProviderFailure(provider=provider.name, reason="empty generated text")
            else:
                result = ProviderSuccess(provider=provider.name, text=text)

        duration = time.perf_counter() - started
        outcome = "success" if isinstance(result, ProviderSuccess) else "failure"
        observe_provider_attempt(provider=provider.name, outcome=outcome, duration_seconds=duration)
        # Metadata only: prompts and generated text are never logged.
        logger.info(
            "LLM provider attempt finished",
            extra={
                "request_id": get_request_id(),
                "provider": provider.name,
                "operation": operation,
                "outcome": outcome,
                "upstream_status": getattr(result, "http_status", None),
                "duration_ms": round(duration * 1000.0, 2),
            },
        )
        return result

    async def generate_with_fallback(
        self,
        *,
        system_prompt: str,
        user_prompt: str,
        params: GenerationParams,
        history: Sequence[ChatTurn] = (),
        operation: str = "generate",
    ) -> str:
        """Try each provider in order and return the first successful text.

        Raises:
            NoProviderConfigured: no providers at all.
            UpstreamAuthRejected / UpstreamRequestFailed: the only provider failed.
            AllProvidersFailed: two or more providers were attempted and all failed.
        """

        self.require_configured()

        failures: list[ProviderFailure] = []
        for provider in self._providers:
            result = await self._attempt(
                provider,
                system_prompt=system_prompt,
                user_prompt=user_prompt,
                params=params,
                history=history,
                operation=operation,
            )
            if isinstance(result, ProviderSuccess):
                return result.text
            failures.append(result)

        if len(failures) == 1:
            failure = failures[0]
            if failure.is_auth_error:
                raise UpstreamAuthRejected(failure)
            raise UpstreamRequestFailed(failure)
        raise AllProvidersFailed(failures)

    async def generate_once(
        self,
        *,
        system_prompt: str,
        user_prompt: str,
        params: GenerationParams,
        history: Sequence[ChatTurn] = (),
        operation: str = "generate",
    ) -> ProviderResult:
        """Single attempt against the primary provider; no fallback chain."""

        self.require_configured()
        return await self._attempt(
            self._providers[0],
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            params=params,
            history=history,
            operation=operation,
        )
