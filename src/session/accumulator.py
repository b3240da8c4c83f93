"""Fold hook events into session state and turn closed sessions into notes."""

import asyncio
import json
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterable, Optional

import structlog

from notes.labels import get_labels
from notes.models import NoteMetadata, Observation, Summary, SyncResult
from shared_types import Locale, ObservationType
from sync_config import DEFAULT_TRACKED_TOOLS
from vault.sync import VaultSync

from .events import StopEvent, ToolUseEvent
from .models import ObservationRecord, SessionState, now_ms
from .store import SessionStore
from .summarizer import NullTextGenerator, TextGenerator, build_summary_prompt

logger = structlog.get_logger(source="session")

READ_TOOLS = {"Read"}
MODIFY_TOOLS = {"Edit", "MultiEdit", "Write", "NotebookEdit"}
COMMAND_TOOLS = {"Bash"}
DISCOVERY_TOOLS = {"Read", "Glob", "Grep"}

SUBTITLE_LIMIT = 100
FACT_COMMAND_LIMIT = 200
TITLE_COMMAND_LIMIT = 30

# Checked in order; first cue found wins
_TYPE_CUES: list[tuple[ObservationType, tuple[str, ...]]] = [
    (ObservationType.BUGFIX, ("fix", "bug", "error")),
    (ObservationType.FEATURE, ("add", "new", "feature")),
    (ObservationType.REFACTOR, ("refactor", "rename", "move")),
]


def _content_text(tool_input: dict[str, Any]) -> str:
    """Edited/written text of a tool call, or the whole serialized input."""
    parts = [tool_input.get(key) for key in ("content", "new_string", "new_source")]
    for edit in tool_input.get("edits") or []:
        if isinstance(edit, dict):
            parts.append(edit.get("new_string"))
    text = "\n".join(p for p in parts if isinstance(p, str))
    return text or json.dumps(tool_input, ensure_ascii=False, default=str)


def infer_observation_type(tool_name: str, tool_input: dict[str, Any]) -> ObservationType:
    """Best-effort guess from substring cues. Not authoritative."""
    text = _content_text(tool_input).lower()
    for obs_type, cues in _TYPE_CUES:
        if any(cue in text for cue in cues):
            return obs_type
    if tool_name in DISCOVERY_TOOLS:
        return ObservationType.DISCOVERY
    return ObservationType.CHANGE


def _file_path(tool_input: dict[str, Any]) -> str:
    value = tool_input.get("file_path") or tool_input.get("notebook_path") or ""
    return str(value)


def _shorten(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


def generate_title(tool_name: str, tool_input: dict[str, Any], labels: dict[str, str]) -> str:
    name = Path(_file_path(tool_input)).name
    if tool_name == "Write":
        return labels["title_write"].format(name=name) if name else labels["title_write_unnamed"]
    if tool_name in MODIFY_TOOLS:
        return labels["title_edit"].format(name=name) if name else labels["title_edit_unnamed"]
    if tool_name in COMMAND_TOOLS:
        command = str(tool_input.get("command") or "")
        return labels["title_command"].format(command=_shorten(command, TITLE_COMMAND_LIMIT))
    return labels["title_tool"].format(tool=tool_name)


def _append_unique(items: list[str], value: str) -> None:
    if value not in items:
        items.append(value)


def to_observation(record: ObservationRecord) -> Observation:
    return Observation(
        type=record.type.value,
        title=record.title,
        subtitle=record.subtitle,
        facts=list(record.facts),
        narrative=None,
        concepts=[],
        files_read=list(record.files_read),
        files_modified=list(record.files_modified),
    )


def _run_detached(func: Callable[[str], str], arg: str) -> "asyncio.Future[str]":
    """Run ``func(arg)`` on a daemon thread and expose the result as a future.

    The thread is never joined: neither ``asyncio.run`` shutdown nor
    interpreter exit waits for an abandoned call.
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future[str] = loop.create_future()

    def _settle(result: Optional[str], error: Optional[BaseException]) -> None:
        if future.done():
            return
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(result)

    def _target() -> None:
        result, error = None, None
        try:
            result = func(arg)
        except Exception as e:
            error = e
        try:
            loop.call_soon_threadsafe(_settle, result, error)
        except RuntimeError:
            logger.debug("summary_result_discarded", reason="event loop closed")

    threading.Thread(target=_target, name="summary-generator", daemon=True).start()
    return future


@dataclass
class SessionReport:
    """What a session close wrote."""

    session_id: str
    observation_results: list[SyncResult] = field(default_factory=list)
    summary_result: Optional[SyncResult] = None
    files_read: int = 0
    files_modified: int = 0
    operations: int = 0
    summary_skipped: bool = False

    @property
    def results(self) -> list[SyncResult]:
        extra = [self.summary_result] if self.summary_result else []
        return [*self.observation_results, *extra]

    @property
    def written(self) -> int:
        return sum(1 for r in self.results if r.success and r.file_path)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.success)


class SessionAccumulator:
    """Builds per-session state from tool events and flushes it on session end."""

    def __init__(
        self,
        store: SessionStore,
        tracked_tools: Iterable[str] = DEFAULT_TRACKED_TOOLS,
        locale: str | Locale = Locale.ZH,
        summary_timeout: float = 30.0,
        clock: Callable[[], int] = now_ms,
    ):
        self.store = store
        self.tracked_tools = set(tracked_tools)
        self.labels = get_labels(locale)
        self.summary_timeout = summary_timeout
        self.clock = clock

    def apply(self, state: SessionState, event: ToolUseEvent) -> SessionState:
        """Fold one tool event into ``state`` (mutated in place and returned)."""
        if event.hook_event_name != "PostToolUse":
            return state
        if event.tool_name not in self.tracked_tools:
            return state

        tool = event.tool_name
        tool_input = event.tool_input
        path = _file_path(tool_input)
        timestamp = self.clock()
        prompt_number = state.prompt_count + 1

        if tool in READ_TOOLS and path:
            _append_unique(state.files_read, path)
        elif tool in MODIFY_TOOLS and path:
            _append_unique(state.files_modified, path)
            state.observations.append(
                ObservationRecord(
                    id=state.next_observation_id(timestamp),
                    timestamp=timestamp,
                    tool_name=tool,
                    type=infer_observation_type(tool, tool_input),
                    title=generate_title(tool, tool_input, self.labels),
                    facts=[self.labels["fact_file"].format(path=path)],
                    files_read=list(state.files_read),
                    files_modified=[path],
                    prompt_number=prompt_number,
                )
            )
        elif tool in COMMAND_TOOLS and tool_input.get("command"):
            command = str(tool_input["command"])
            state.observations.append(
                ObservationRecord(
                    id=state.next_observation_id(timestamp),
                    timestamp=timestamp,
                    tool_name=tool,
                    type=ObservationType.CHANGE,
                    title=generate_title(tool, tool_input, self.labels),
                    subtitle=command[:SUBTITLE_LIMIT],
                    facts=[
                        self.labels["fact_command"].format(command=command[:FACT_COMMAND_LIMIT])
                    ],
                    prompt_number=prompt_number,
                )
            )

        state.prompt_count = prompt_number
        return state

    def _load_or_create(self, session_id: str, project_path: str) -> SessionState:
        state = self.store.load(session_id)
        if state is None:
            state = SessionState(
                session_id=session_id, project_path=project_path, start_time=self.clock()
            )
            logger.info("session_state_created", session_id=session_id)
        return state

    def record(self, event: ToolUseEvent) -> SessionState:
        """Load, fold and persist one tool event."""
        state = self._load_or_create(event.session_id, event.project_root)
        state = self.apply(state, event)
        self.store.save(state)
        logger.debug(
            "tool_event_recorded",
            session_id=event.session_id,
            tool=event.tool_name,
            observations=len(state.observations),
        )
        return state

    async def _generate_summary_text(self, state: SessionState, generator: TextGenerator) -> str:
        prompt = build_summary_prompt(state, self.labels["summary_prompt"])
        try:
            return await asyncio.wait_for(
                _run_detached(generator.generate, prompt), timeout=self.summary_timeout
            )
        except asyncio.TimeoutError:
            logger.warning("summary_generation_timeout", timeout=self.summary_timeout)
        except Exception as e:
            # LLMError or anything else the collaborator raises; never fatal
            logger.warning(
                "summary_generation_failed", error=str(e), error_type=type(e).__name__
            )
        return ""

    def build_summary(self, state: SessionState, event: StopEvent, learned: str) -> Summary:
        """Summary from aggregate counts plus whatever text is available."""
        return Summary(
            request=self.labels["session_request"].format(session=state.session_id[:8]),
            investigated=self.labels["session_investigated"].format(count=len(state.files_read)),
            learned=learned,
            completed=self.labels["session_completed"].format(
                modified=len(state.files_modified), operations=len(state.observations)
            ),
            next_steps="",
            notes=self.labels["session_notes"].format(reason=event.stop_reason)
            if event.stop_reason
            else None,
        )

    async def close(
        self,
        event: StopEvent,
        sync: VaultSync,
        generator: Optional[TextGenerator] = None,
    ) -> SessionReport:
        """Write the session's notes, then delete its state whatever happens."""
        try:
            state = self._load_or_create(event.session_id, event.project_root)
            return await self._flush(state, event, sync, generator or NullTextGenerator())
        finally:
            self.store.delete(event.session_id)

    async def _flush(
        self,
        state: SessionState,
        event: StopEvent,
        sync: VaultSync,
        generator: TextGenerator,
    ) -> SessionReport:
        project = state.project_name
        logger.info(
            "session_closing",
            session_id=state.session_id,
            observations=len(state.observations),
        )

        items = [
            (
                to_observation(record),
                NoteMetadata(
                    id=record.id,
                    session_id=state.session_id,
                    project=project,
                    prompt_number=record.prompt_number,
                    created_at_epoch=record.timestamp,
                ),
            )
            for record in state.observations
        ]
        report = SessionReport(
            session_id=state.session_id,
            files_read=len(state.files_read),
            files_modified=len(state.files_modified),
            operations=len(state.observations),
        )
        report.observation_results = await sync.sync_observations(items)

        if sync.is_enabled() and sync.config.sync_summaries and state.observations:
            learned = event.transcript_summary or await self._generate_summary_text(
                state, generator
            )
            if learned.strip():
                closed_at = self.clock()
                report.summary_result = await sync.sync_summary(
                    self.build_summary(state, event, learned),
                    NoteMetadata(
                        id=closed_at,
                        session_id=state.session_id,
                        project=project,
                        prompt_number=state.prompt_count,
                        created_at_epoch=closed_at,
                    ),
                )
            else:
                report.summary_skipped = True
                logger.warning(
                    "summary_skipped",
                    session_id=state.session_id,
                    reason="no summary text",
                    files_read=report.files_read,
                    files_modified=report.files_modified,
                    operations=report.operations,
                )

        logger.info(
            "session_closed",
            session_id=state.session_id,
            written=report.written,
            failed=report.failed,
        )
        return report
