"""LLM integration layer.

This package is intentionally small:
- No prompt/output logging (learner transcripts and answers stay out of logs).
- Providers are configured once from environment variables at startup.
- Provider clients are stateless and report failures as values, not exceptions.
"""
