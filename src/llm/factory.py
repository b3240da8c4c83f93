"""LLM provider factory with credential auto-detection."""

import os

from .base import LLMError, LLMProvider

# First match wins; ANTHROPIC_AUTH_TOKEN is what proxied Claude Code setups export
_CLAUDE_KEY_ENV_VARS = ("ANTHROPIC_API_KEY", "ANTHROPIC_AUTH_TOKEN")
_CLAUDE_BASE_URL_ENV = "ANTHROPIC_BASE_URL"
_CLAUDE_MODEL_ENV = "ANTHROPIC_DEFAULT_HAIKU_MODEL"


def _claude_api_key() -> str | None:
    for env_var in _CLAUDE_KEY_ENV_VARS:
        value = os.getenv(env_var)
        if value:
            return value
    return None


def create_llm_provider(
    provider: str | None = None,
    api_key: str | None = None,
    model: str | None = None,
    client=None,
    timeout: float | None = None,
) -> LLMProvider:
    """Create an LLM provider instance.

    Args:
        provider: "claude", "auto", or None (auto-detect)
        api_key: Explicit API key (overrides env vars)
        model: Model name (None = env override, then provider default)
        client: Pre-built SDK client for testing/DI
        timeout: Per-request timeout in seconds

    Returns:
        LLMProvider instance

    Raises:
        LLMError: Unknown provider or no credentials available.
    """
    resolved = provider or "auto"
    if resolved == "auto":
        resolved = _auto_detect_provider(api_key, client)

    if resolved == "claude":
        from .providers.claude import ClaudeProvider

        if not api_key and not client:
            api_key = _claude_api_key()
            if not api_key:
                raise LLMError(
                    "No Claude API key found. Set ANTHROPIC_API_KEY or ANTHROPIC_AUTH_TOKEN"
                )

        return ClaudeProvider(
            api_key=api_key,
            model=model or os.getenv(_CLAUDE_MODEL_ENV),
            client=client,
            base_url=os.getenv(_CLAUDE_BASE_URL_ENV),
            timeout=timeout,
        )
    raise LLMError(f"Unknown provider: {resolved}. Use: claude")


def _auto_detect_provider(api_key: str | None = None, client=None) -> str:
    """Detect provider from explicit key prefix, then env vars."""
    if client or (api_key and api_key.startswith("sk-ant-")):
        return "claude"
    if api_key or _claude_api_key():
        return "claude"
    raise LLMError("No LLM API key found. Set ANTHROPIC_API_KEY or ANTHROPIC_AUTH_TOKEN")
