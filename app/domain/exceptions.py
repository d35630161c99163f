from __future__ import annotations

from collections.abc import Sequence

from app.core.llm.base import ProviderFailure


class GatewayError(Exception):
    """Base error for gateway operations; rendered as `{error, details?}`."""

    status_code: int = 500

    def __init__(self, message: str, *, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details


class InvalidInput(GatewayError):
    """Raised when required request fields are missing or empty."""

    status_code = 400

    def __init__(self, missing: Sequence[str], *, message: str | None = None):
        self.missing = tuple(missing)
        super().__init__(message or f"Missing required field(s): {', '.join(self.missing)}.")


class NoProviderConfigured(GatewayError):
    """Raised when no LLM provider credential is present in the environment."""

    status_code = 500

    def __init__(self, credentials: Sequence[str]):
        self.credentials = tuple(credentials)
        super().__init__(
            f"Server is missing {' and '.join(self.credentials)}.",
        )


class UpstreamAuthRejected(GatewayError):
    """Raised when the provider rejects our credentials."""

    status_code = 401

    def __init__(self, failure: ProviderFailure):
        self.failure = failure
        super().__init__("Upstream AI provider rejected the credentials.", details=failure.reason)


class UpstreamRequestFailed(GatewayError):
    """Raised when the provider fails, times out or returns no usable text."""

    status_code = 502

    def __init__(self, failure: ProviderFailure):
        self.failure = failure
        super().__init__("Upstream AI request failed.", details=failure.reason)


class AllProvidersFailed(GatewayError):
    """Raised when every configured provider was attempted and failed."""

    status_code = 500

    def __init__(self, failures: Sequence[ProviderFailure]):
        self.failures = tuple(failures)
        super().__init__(
            "All AI providers failed: " + "; ".join(f.describe() for f in self.failures)
        )
