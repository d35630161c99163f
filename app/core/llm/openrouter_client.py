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


class OpenRouterClient:
    """
    Minimal OpenRouter client (OpenAI-compatible `/chat/completions`).

    Design notes:
    - No logging in this module; the gateway logs attempt metadata only.
    - Stateless requests; prior turns are replayed by the caller via `history`.
    - Upstream problems are returned as `ProviderFailure`, never raised.
    """

    def __init__(
        self,
        *,
        config: ProviderConfig,
        app_title: str | None = None,
        error_snippet_chars: int = 500,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._config = config
        self._app_title = app_title
        self._snippet_chars = error_snippet_chars
        self._transport = transport

    @property
    def name(self) -> str:
        return self._config.name

    def _build_messages(
        self, *, system_prompt: str, user_prompt: str, history: Sequence[ChatTurn]
    ) -> list[dict[str, str]]:
        messages = [{"role": "system", "content": system_prompt}]
        for turn in history:
            role = "assistant" if turn.role == "model" else "user"
            messages.append({"role": role, "content": turn.text})
        messages.append({"role": "user", "content": user_prompt})
        return messages

    async def generate(
        self,
        *,
        system_prompt: str,
        user_prompt: str,
        params: GenerationParams,
        history: Sequence[ChatTurn] = (),
    ) -> ProviderResult:
        url = f"{self._config.base_url.rstrip('/')}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self._config.api_key}",
            "Content-Type": "application/json",
        }
        if self._app_title:
            headers["X-Title"] = self._app_title

        payload: dict[str, Any] = {
            "model": self._config.model,
            "temperature": params.temperature,
            "max_tokens": params.max_output_tokens,
            "messages": self._build_messages(
                system_prompt=system_prompt, user_prompt=user_prompt, history=history
            ),
        }
        if params.top_p is not None:
            payload["top_p"] = params.top_p

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
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError):
            return ProviderFailure(
                provider=self.name,
                reason="unexpected response shape",
                http_status=resp.status_code,
            )

        text = content.strip() if isinstance(content, str) else ""
        if not text:
            return ProviderFailure(
                provider=self.name, reason="empty generated text", http_status=resp.status_code
            )
        return ProviderSuccess(provider=self.name, text=text)
