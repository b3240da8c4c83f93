"""Tests for persisted session state models."""

from session.models import ObservationRecord, SessionState


def _record(record_id):
    return ObservationRecord(id=record_id, timestamp=record_id, tool_name="Edit", title="t")


class TestSessionState:
    def test_project_name(self):
        assert SessionState(session_id="s", project_path="/work/webapp/").project_name == "webapp"

    def test_project_name_fallback(self):
        assert SessionState(session_id="s", project_path="").project_name == "unknown-project"

    def test_first_id_is_timestamp(self):
        assert SessionState(session_id="s", project_path="/p").next_observation_id(500) == 500

    def test_id_bumped_past_last(self):
        state = SessionState(session_id="s", project_path="/p", observations=[_record(900)])
        assert state.next_observation_id(500) == 901
        assert state.next_observation_id(2000) == 2000

