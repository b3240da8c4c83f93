"""Shared test fixtures for obsidian-sync."""

import json
import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from notes.models import NoteMetadata, Observation, Summary
from observability import metrics
from sync_config import SyncConfig

# 2026-01-28T10:30:00.000Z
JAN_28_MS = 1769596200000
# 2025-06-15T12:00:00.000Z
JUN_15_MS = 1749988800000


@pytest.fixture(autouse=True)
def reset_metrics():
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture(autouse=True)
def no_llm_credentials(monkeypatch):
    """Keep tests from ever reaching a real API."""
    for var in (
        "ANTHROPIC_API_KEY",
        "ANTHROPIC_AUTH_TOKEN",
        "ANTHROPIC_BASE_URL",
        "ANTHROPIC_DEFAULT_HAIKU_MODEL",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def vault(tmp_path):
    path = tmp_path / "vault"
    path.mkdir()
    return path


@pytest.fixture
def state_dir(tmp_path):
    return tmp_path / "state"


@pytest.fixture
def make_config(vault, state_dir):
    """Factory for configs pointing at the temp vault, summaries text disabled."""

    def _make(**overrides) -> SyncConfig:
        data = {
            "vault_path": str(vault),
            "state_dir": str(state_dir),
            "summary": {"enabled": False},
        }
        data.update(overrides)
        return SyncConfig.from_dict(data)

    return _make


@pytest.fixture
def sync_config(make_config):
    return make_config()


@pytest.fixture
def config_file(tmp_path, vault, state_dir):
    """Write a JSON config file and return its path."""

    def _write(**overrides) -> Path:
        data = {
            "vaultPath": str(vault),
            "stateDir": str(state_dir),
            "logFile": str(tmp_path / "logs" / "sync.log"),
            "summary": {"enabled": False},
        }
        data.update(overrides)
        path = tmp_path / "obsidian-sync.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def observation():
    return Observation(
        type="bugfix",
        title="Fix login redirect",
        subtitle="Redirect loop after OAuth callback",
        facts=["Callback URL lacked trailing slash"],
        narrative="The OAuth provider rejected the callback.",
        concepts=["auth", "oauth"],
        files_read=["src/auth/config.py"],
        files_modified=["src/auth/callback.py"],
    )


@pytest.fixture
def observation_metadata():
    return NoteMetadata(
        id=42,
        session_id="sess-abc123",
        project="webapp",
        prompt_number=3,
        created_at_epoch=JAN_28_MS,
    )


@pytest.fixture
def summary():
    return Summary(
        request="Fix the login flow",
        investigated="Read the OAuth config",
        learned="The callback URL must match exactly",
        completed="Patched the callback handler",
        next_steps="Add a regression test",
        notes=None,
    )


@pytest.fixture
def summary_metadata():
    return NoteMetadata(
        id=7,
        session_id="sess-abc123",
        project="webapp",
        prompt_number=5,
        created_at_epoch=JAN_28_MS,
    )
