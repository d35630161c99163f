from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal, Protocol

ChatRole = Literal["user", "model"]


@dataclass(frozen=True)
class ProviderConfig:
    """Credentials and endpoint for one LLM provider.

    Built once at startup from settings; never mutated afterwards.
    """

    name: str
    api_key: str
    base_url: str
    model: str
    timeout_seconds: float

    def __repr__(self) -> str:
        # Never render the key (repr ends up in tracebacks and debug logs).
        return (
            f"ProviderConfig(name={self.name!r}, base_url={self.base_url!r}, "
            f"model={self.model!r}, timeout_seconds={self.timeout_seconds!r})"
        )


@dataclass(frozen=True)
class GenerationParams:
    temperature: float
    max_output_tokens: int
    top_p: float | None = None
    top_k: int | None = None


@dataclass(frozen=True)
class ChatTurn:
    """One prior conversation turn replayed to the model as context."""

    role: ChatRole
    text: str


@dataclass(frozen=True)
class ProviderSuccess:
    provider: str
    text: str


@dataclass(frozen=True)
class ProviderFailure:
    provider: str
    reason: str
    http_status: int | None = None

    @property
    def is_auth_error(self) -> bool:
        return self.http_status in (401, 403)

    def describe(self) -> str:
        if self.http_status is None:
            return f"{self.provider}: {self.reason}"
        return f"{self.provider} (HTTP {self.http_status}): {self.reason}"


ProviderResult = ProviderSuccess | ProviderFailure


class LLMProvider(Protocol):
    """Capability shared by every provider client.

    Implementations must not raise for upstream problems (bad status, timeout,
    empty output); those are returned as `ProviderFailure`.
    """

    @property
    def name(self) -> str: ...

    async def generate(
        self,
        *,
        system_prompt: str,
        user_prompt: str,
        params: GenerationParams,
        history: Sequence[ChatTurn] = (),
    ) -> ProviderResult: ...


def truncate_snippet(text: str, *, limit: int) -> str:
    """Trim an upstream error body to a diagnostic snippet."""

    text = (text or "").strip()
    if limit <= 0:
        return ""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."
