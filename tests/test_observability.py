"""Tests for run metrics."""

import pytest

from observability import Metrics


class TestMetrics:
    def test_counters(self):
        m = Metrics()
        m.counter("notes_written")
        m.counter("notes_written", 2)
        assert m.get("notes_written") == 3
        assert m.get("missing") == 0

    def test_timer_records_on_error(self):
        m = Metrics()
        with pytest.raises(RuntimeError):
            with m.timer("note_write"):
                raise RuntimeError("fail")

        assert m.summary()["timers"]["note_write"]["count"] == 1

    def test_summary_and_reset(self):
        m = Metrics()
        m.counter("notes_failed")
        with m.timer("note_write"):
            pass

        summary = m.summary()
        assert summary["counters"] == {"notes_failed": 1}
        assert set(summary["timers"]["note_write"]) == {"count", "total", "max"}

        m.reset()
        assert m.summary() == {"counters": {}, "timers": {}}
