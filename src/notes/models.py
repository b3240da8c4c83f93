"""Data models for observation and summary notes."""

from dataclasses import dataclass, field
from pathlib import Path

from shared_types import ObservationType


@dataclass
class Observation:
    """One discrete recorded event from an assistant session."""

    type: str
    title: str | None = None
    subtitle: str | None = None
    facts: list[str] = field(default_factory=list)
    narrative: str | None = None
    concepts: list[str] = field(default_factory=list)
    files_read: list[str] = field(default_factory=list)
    files_modified: list[str] = field(default_factory=list)

    @property
    def kind(self) -> ObservationType:
        return ObservationType(self.type)

    @classmethod
    def from_dict(cls, data: dict) -> "Observation":
        return cls(
            type=str(data.get("type") or ObservationType.CHANGE),
            title=data.get("title"),
            subtitle=data.get("subtitle"),
            facts=list(data.get("facts") or []),
            narrative=data.get("narrative"),
            concepts=list(data.get("concepts") or []),
            files_read=list(data.get("files_read") or []),
            files_modified=list(data.get("files_modified") or []),
        )


@dataclass
class Summary:
    """End-of-session report."""

    request: str = ""
    investigated: str = ""
    learned: str = ""
    completed: str = ""
    next_steps: str = ""
    notes: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "Summary":
        return cls(
            request=data.get("request") or "",
            investigated=data.get("investigated") or "",
            learned=data.get("learned") or "",
            completed=data.get("completed") or "",
            next_steps=data.get("next_steps") or "",
            notes=data.get("notes"),
        )


@dataclass
class NoteMetadata:
    """Identity and timing shared by observation and summary notes.

    ``created_at_epoch`` is milliseconds since the epoch.
    """

    id: int
    session_id: str
    project: str
    prompt_number: int
    created_at_epoch: int

    @classmethod
    def from_dict(cls, data: dict) -> "NoteMetadata":
        """Build from snake_case or camelCase keys."""

        def pick(snake: str, camel: str, default=None):
            if snake in data:
                return data[snake]
            return data.get(camel, default)

        return cls(
            id=int(pick("id", "id")),
            session_id=str(pick("session_id", "sessionId", "")),
            project=str(pick("project", "project", "")),
            prompt_number=int(pick("prompt_number", "promptNumber", 0)),
            created_at_epoch=int(pick("created_at_epoch", "createdAtEpoch")),
        )


ObservationMetadata = NoteMetadata
SummaryMetadata = NoteMetadata


@dataclass
class SyncResult:
    """Outcome of writing one note."""

    success: bool
    file_path: Path | None = None
    error: str | None = None
