from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import httpx

from app.core.llm.base import (
    ChatTurn,
    GenerationParams,
    ProviderConfig,
    ProviderFailure,
    ProviderResult,
    ProviderSuccess,
    truncate_snippet,
)


class GeminiClient:
    """
    Minimal Google Gemini client (`models/{model}:generateContent` REST API).

    Same contract as `OpenRouterClient`: no logging, stateless, failures returned.
    """

    def __init__(
        self,
        *,
        config: ProviderConfig,
        error_snippet_chars: int = 500,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._config = config
        self._snippet_chars = error_snippet_chars
        self._transport = transport

    @property
    def name(self) -> str:
        return self._config.name

    def _build_payload(
        self,
        *,
        system_prompt: str,
        user_prompt: str,
        params: GenerationParams,
        history: Sequence[ChatTurn],
    ) -> dict[str, Any]:
        contents = [{"role": turn.role, "parts": [{"text": turn.text}]} for turn in history]
        contents.append({"role": "user", "parts": [{"text": user_prompt}]})

        generation_config: dict[str, Any] = {
            "temperature": params.temperature,
            "maxOutputTokens": params.max_output_tokens,
        }
        if params.top_p is not None:
            generation_config["topP"] = params.top_p
        if params.top_k is not None:
            generation_config["topK"] = params.top_k

        return {
            "systemInstruction": {"parts": [{"text": system_prompt}]},
            "contents": contents,
            "generationConfig": generation_config,
        }

    @staticmethod
    def _extract_text(data: dict[str, Any]) -> str:
        candidates = data.get("candidates") or []
        if not candidates:
            return ""
        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(p.get("text", "") for p in parts if isinstance(p, dict))

    async def generate(
        self,
        *,
        system_prompt: str,
        user_prompt: str,
        params: GenerationParams,
        history: Sequence[ChatTurn] = (),
    ) -> ProviderResult:
        url = (
            f"{self._config.base_url.rstrip('/')}/models/{self._config.model}:generateContent"
        )
        headers = {
            "x-goog-api-key": self._config.api_key,
            "Content-Type": "application/json",
        }
        payload = self._build_payload(
            system_prompt=system_prompt, user_prompt=user_prompt, params=params, history=history
        )

        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout_seconds, transport=self._transport
            ) as client:
                resp = await client.post(url, headers=headers, json=payload)
        except httpx.TimeoutException:
            return ProviderFailure(provider=self.name, reason="request timed out")
        except httpx.HTTPError as exc:
            return ProviderFailure(
                provider=self.name, reason=f"request failed ({exc.__class__.__name__})"
            )

        if resp.status_code != 200:
            reason = "upstream returned an error"
            snippet = truncate_snippet(resp.text, limit=self._snippet_chars)
            if snippet:
                reason = f"{reason}: {snippet}"
            return ProviderFailure(provider=self.name, reason=reason, http_status=resp.status_code)

        try:
            data = resp.json()
            text = self._extract_text(data).strip()
        except (ValueError, AttributeError, TypeError):
            return ProviderFailure(
                provider=self.name,
                reason="unexpected response shape",
                http_status=resp.status_code,
            )

        if not text:
            block_reason = (data.get("promptFeedback") or {}).get("blockReason")
            reason = f"prompt blocked ({block_reason})" if block_reason else "empty generated text"
            return ProviderFailure(provider=self.name, reason=reason, http_status=resp.status_code)
        return ProviderSuccess(provider=self.name, text=text)
