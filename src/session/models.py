"""Per-session working state persisted between hook invocations."""

import time
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from shared_types import ObservationType


def now_ms() -> int:
    return int(time.time() * 1000)


class ObservationRecord(BaseModel):
    """Accumulator-side observation, projected to ``notes.Observation`` on close."""

    id: int
    timestamp: int  # ms since epoch
    tool_name: str
    type: ObservationType = ObservationType.CHANGE
    title: str
    subtitle: Optional[str] = None
    facts: list[str] = Field(default_factory=list)
    files_read: list[str] = Field(default_factory=list)
    files_modified: list[str] = Field(default_factory=list)
    prompt_number: int = 0


class SessionState(BaseModel):
    session_id: str
    project_path: str
    start_time: int = Field(default_factory=now_ms)
    observations: list[ObservationRecord] = Field(default_factory=list)
    files_read: list[str] = Field(default_factory=list)
    files_modified: list[str] = Field(default_factory=list)
    prompt_count: int = 0

    @property
    def project_name(self) -> str:
        return Path(self.project_path).name or "unknown-project"

    def next_observation_id(self, timestamp: int) -> int:
        """Timestamp-derived id, bumped past the last one so ids stay unique."""
        if self.observations:
            return max(timestamp, self.observations[-1].id + 1)
        return timestamp
