"""Optional text generation for session summaries."""

from abc import ABC, abstractmethod
from typing import Optional

import structlog

from cli.retry import llm_retry
from llm import LLMError, LLMProvider, LLMRateLimitError, create_llm_provider
from sync_config import SummaryConfig

from .models import SessionState

logger = structlog.get_logger(source="summarizer")


class TextGenerator(ABC):
    """Turns a prompt into text. May raise ``LLMError``."""

    @abstractmethod
    def generate(self, prompt: str) -> str: ...


class NullTextGenerator(TextGenerator):
    """Used when no credentials are configured; yields no text."""

    def generate(self, prompt: str) -> str:
        return ""


class LLMTextGenerator(TextGenerator):
    """Provider-backed generator; rate-limit retries stop at ``deadline`` seconds."""

    def __init__(
        self, provider: LLMProvider, max_tokens: int = 1024, deadline: Optional[float] = None
    ):
        self.provider = provider
        self.max_tokens = max_tokens
        self._call = llm_retry(exceptions=(LLMRateLimitError,), max_delay=deadline)(
            self._generate_once
        )

    def _generate_once(self, prompt: str) -> str:
        messages = [{"role": "user", "content": prompt}]
        return self.provider.generate(messages, max_tokens=self.max_tokens).strip()

    def generate(self, prompt: str) -> str:
        return self._call(prompt)


def create_text_generator(config: SummaryConfig) -> TextGenerator:
    """LLM-backed generator when enabled and credentials exist, else a null one."""
    if not config.enabled:
        return NullTextGenerator()

    try:
        provider = create_llm_provider(
            provider=config.provider,
            api_key=config.api_key,
            model=config.model,
            timeout=config.timeout_seconds,
        )
    except LLMError as e:
        logger.warning("summary_generator_unavailable", error=str(e))
        return NullTextGenerator()

    return LLMTextGenerator(
        provider, max_tokens=config.max_tokens, deadline=config.timeout_seconds
    )


def build_summary_prompt(state: SessionState, template: str) -> str:
    observations = "\n".join(f"- {obs.type}: {obs.title}" for obs in state.observations)
    return template.format(
        project_path=state.project_path,
        observation_count=len(state.observations),
        read_count=len(state.files_read),
        modified_count=len(state.files_modified),
        observations=observations,
    )
