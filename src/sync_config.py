"""Pydantic configuration models shared by the note, vault, session and CLI layers."""

import os
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from shared_types import Locale

VALID_LOG_LEVELS = {"debug", "info", "warn", "warning", "error"}
VALID_LLM_PROVIDERS = {"auto", "claude"}

DEFAULT_TRACKED_TOOLS = ["Read", "Edit", "Write", "MultiEdit", "Bash"]
DEFAULT_STATE_DIR = Path(tempfile.gettempdir()) / "claude-obsidian-sync"


class _CamelModel(BaseModel):
    """Accepts both camelCase (hook JSON) and snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class SummaryConfig(_CamelModel):
    """Session summary text generation."""

    enabled: bool = True
    provider: str = "auto"
    model: Optional[str] = None
    api_key: Optional[str] = None
    timeout_seconds: float = 30.0
    max_tokens: int = 1024

    @field_validator("provider")
    @classmethod
    def validate_provider(cls, v: str) -> str:
        if v not in VALID_LLM_PROVIDERS:
            raise ValueError(f"Invalid LLM provider: {v}. Must be one of {VALID_LLM_PROVIDERS}")
        return v

    @field_validator("api_key")
    @classmethod
    def expand_env_var(cls, v: Optional[str]) -> Optional[str]:
        """Expand ${VAR} references."""
        if v and v.startswith("${") and v.endswith("}"):
            return os.getenv(v[2:-1]) or None
        return v


class SyncConfig(_CamelModel):
    """Main configuration model. Immutable once loaded."""

    vault_path: str
    base_folder: str = "ClaudeCode"
    observations_folder: Optional[str] = None  # None = locale default
    summaries_folder: Optional[str] = None
    sync_observations: bool = True
    sync_summaries: bool = True
    enabled: bool = True
    tracked_tools: list[str] = Field(default_factory=lambda: list(DEFAULT_TRACKED_TOOLS))
    log_level: str = "info"
    log_file: Optional[Path] = None
    locale: Locale = Locale.ZH
    state_dir: Path = DEFAULT_STATE_DIR
    summary: SummaryConfig = Field(default_factory=SummaryConfig)

    @field_validator("log_level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v_lower = v.lower()
        if v_lower not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {VALID_LOG_LEVELS}")
        return v_lower

    @model_validator(mode="before")
    @classmethod
    def expand_paths(cls, data):
        """Expand ~ in path settings."""
        if isinstance(data, dict):
            data = dict(data)
            for key in ("vault_path", "vaultPath", "state_dir", "stateDir", "log_file", "logFile"):
                if isinstance(data.get(key), str) and data[key]:
                    data[key] = os.path.expanduser(data[key])
        return data

    @property
    def stdlib_log_level(self) -> str:
        return "WARNING" if self.log_level in ("warn", "warning") else self.log_level.upper()

    @classmethod
    def from_dict(cls, data: dict) -> "SyncConfig":
        return cls.model_validate(data)

    def to_dict(self) -> dict:
        return self.model_dump(mode="python")
