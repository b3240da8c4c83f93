"""Tests for hook event parsing."""

import pytest

from session.events import StopEvent, ToolUseEvent, parse_event


class TestParseEvent:
    def test_post_tool_use(self):
        event = parse_event(
            {
                "hook_event_name": "PostToolUse",
                "session_id": "s1",
                "cwd": "/work/webapp",
                "tool_name": "Edit",
                "tool_input": {"file_path": "/work/webapp/a.py"},
                "tool_response": {"success": True},
                "transcript_path": "/tmp/t.jsonl",
            }
        )

        assert isinstance(event, ToolUseEvent)
        assert event.tool_name == "Edit"
        assert event.tool_output == {"success": True}
        assert event.project_root == "/work/webapp"

    def test_legacy_hook_type_key(self):
        event = parse_event({"hook_type": "PreToolUse", "session_id": "s1", "tool_name": "Read"})
        assert event.hook_event_name == "PreToolUse"
        assert event.tool_input == {}

    @pytest.mark.parametrize("kind", ["Stop", "SessionEnd"])
    def test_stop_events(self, kind):
        event = parse_event({"hook_event_name": kind, "session_id": "s1", "reason": "exit"})
        assert isinstance(event, StopEvent)
        assert event.stop_reason == "exit"
        assert event.transcript_summary is None

    def test_project_path_wins_over_cwd(self):
        event = parse_event(
            {
                "hook_event_name": "Stop",
                "session_id": "s1",
                "cwd": "/tmp",
                "project_path": "/work/webapp",
            }
        )
        assert event.project_root == "/work/webapp"

    def test_unknown_event(self):
        with pytest.raises(ValueError, match="Unsupported hook event"):
            parse_event({"hook_event_name": "Notification", "session_id": "s1"})

    def test_not_a_mapping(self):
        with pytest.raises(ValueError):
            parse_event(["PostToolUse"])

    def test_missing_session_id(self):
        with pytest.raises(ValueError):
            parse_event({"hook_event_name": "PostToolUse", "tool_name": "Edit"})
