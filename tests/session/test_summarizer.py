"""Tests for session summary text generation."""

from unittest.mock import MagicMock

import pytest

from llm import LLMAuthError, LLMRateLimitError
from notes.labels import get_labels
from session.models import ObservationRecord, SessionState
from session.summarizer import (
    LLMTextGenerator,
    NullTextGenerator,
    build_summary_prompt,
    create_text_generator,
)
from shared_types import Locale, ObservationType
from sync_config import SummaryConfig


class TestCreateTextGenerator:
    def test_disabled(self):
        generator = create_text_generator(SummaryConfig(enabled=False))
        assert isinstance(generator, NullTextGenerator)
        assert generator.generate("anything") == ""

    def test_no_credentials_falls_back(self):
        assert isinstance(create_text_generator(SummaryConfig()), NullTextGenerator)

    def test_explicit_key(self):
        generator = create_text_generator(SummaryConfig(api_key="sk-ant-test", max_tokens=256))
        assert isinstance(generator, LLMTextGenerator)
        assert generator.max_tokens == 256
        assert generator.provider.provider_name == "claude"

    def test_env_key(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_AUTH_TOKEN", "proxy-token")
        assert isinstance(create_text_generator(SummaryConfig()), LLMTextGenerator)


class TestLLMTextGenerator:
    def test_generate_strips(self):
        provider = MagicMock()
        provider.generate.return_value = "  summary text \n"

        generator = LLMTextGenerator(provider, max_tokens=300)

        assert generator.generate("prompt") == "summary text"
        provider.generate.assert_called_once_with(
            [{"role": "user", "content": "prompt"}], max_tokens=300
        )

    def test_retries_rate_limit(self):
        provider = MagicMock()
        provider.generate.side_effect = [LLMRateLimitError("slow down"), "ok"]

        assert LLMTextGenerator(provider).generate("p") == "ok"
        assert provider.generate.call_count == 2

    def test_rate_limit_retry_stops_at_deadline(self):
        provider = MagicMock()
        provider.generate.side_effect = [LLMRateLimitError("slow down"), "ok"]

        with pytest.raises(LLMRateLimitError):
            LLMTextGenerator(provider, deadline=0).generate("p")
        assert provider.generate.call_count == 1

    def test_auth_error_not_retried(self):
        provider = MagicMock()
        provider.generate.side_effect = LLMAuthError("bad key")

        with pytest.raises(LLMAuthError):
            LLMTextGenerator(provider).generate("p")
        assert provider.generate.call_count == 1


class TestBuildSummaryPrompt:
    def test_includes_counts_and_observations(self):
        state = SessionState(
            session_id="s1",
            project_path="/work/webapp",
            files_read=["a.py", "b.py"],
            files_modified=["a.py"],
            observations=[
                ObservationRecord(
                    id=1,
                    timestamp=1,
                    tool_name="Edit",
                    type=ObservationType.BUGFIX,
                    title="Edit a.py",
                )
            ],
        )
        prompt = build_summary_prompt(state, get_labels(Locale.EN)["summary_prompt"])

        assert "- Project path: /work/webapp" in prompt
        assert "- Observations: 1" in prompt
        assert "- Files read: 2" in prompt
        assert "- Files modified: 1" in prompt
        assert "- bugfix: Edit a.py" in prompt
