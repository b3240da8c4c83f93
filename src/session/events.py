"""Hook event payloads sent by the assistant on stdin."""

from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

TOOL_EVENTS = {"PreToolUse", "PostToolUse"}
STOP_EVENTS = {"Stop", "SessionEnd"}


class HookEvent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    hook_event_name: str = Field(validation_alias=AliasChoices("hook_event_name", "hook_type"))
    session_id: str
    cwd: str = ""
    project_path: Optional[str] = None

    @property
    def project_root(self) -> str:
        return self.project_path or self.cwd


class ToolUseEvent(HookEvent):
    tool_name: str
    tool_input: dict[str, Any] = Field(default_factory=dict)
    tool_output: Any = Field(
        default=None, validation_alias=AliasChoices("tool_output", "tool_response")
    )


class StopEvent(HookEvent):
    stop_reason: str = Field(default="", validation_alias=AliasChoices("stop_reason", "reason"))
    transcript_summary: Optional[str] = None


def parse_event(payload: dict) -> ToolUseEvent | StopEvent:
    """Build the typed event for a raw hook payload.

    Raises:
        ValueError: Unknown event kind or invalid payload.
    """
    if not isinstance(payload, dict):
        raise ValueError("Hook payload must be a JSON object")

    kind = payload.get("hook_event_name") or payload.get("hook_type")
    if kind in TOOL_EVENTS:
        return ToolUseEvent.model_validate(payload)
    if kind in STOP_EVENTS:
        return StopEvent.model_validate(payload)
    raise ValueError(f"Unsupported hook event: {kind!r}")
