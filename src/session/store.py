"""JSON file store for per-session state."""

import os
import time
from datetime import timedelta
from pathlib import Path
from typing import Optional

import structlog
from pydantic import ValidationError

from sync_config import DEFAULT_STATE_DIR

from .models import SessionState

logger = structlog.get_logger(source="session_store")

DEFAULT_MAX_AGE = timedelta(hours=24)


class SessionStore:
    """One JSON record per session id under ``state_dir``.

    Read-modify-write is not atomic across processes: callers must be the
    only writer for a given session id at a time. The assistant runs hooks
    for one session sequentially, which satisfies this.
    """

    def __init__(self, state_dir: str | Path = DEFAULT_STATE_DIR):
        self.state_dir = Path(state_dir).expanduser().resolve()

    def _path(self, session_id: str) -> Path:
        """State file for a session, refusing ids that escape state_dir."""
        if not session_id or "/" in session_id or "\\" in session_id:
            raise ValueError(f"Invalid session id: {session_id!r}")
        path = (self.state_dir / f"{session_id}.json").resolve()
        if path.parent != self.state_dir:
            raise ValueError(f"Session id escapes state directory: {session_id!r}")
        return path

    def load(self, session_id: str) -> Optional[SessionState]:
        """Stored state, or None if absent or unreadable."""
        path = self._path(session_id)
        if not path.exists():
            return None
        try:
            return SessionState.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            logger.warning("session_state_unreadable", session_id=session_id, error=str(e))
            return None

    def save(self, state: SessionState) -> Path:
        """Write the whole record, replacing any previous version."""
        path = self._path(state.session_id)
        self.state_dir.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(state.model_dump_json(indent=2), encoding="utf-8")
        os.replace(tmp, path)
        return path

    def delete(self, session_id: str) -> bool:
        path = self._path(session_id)
        try:
            path.unlink()
            return True
        except FileNotFoundError:
            return False

    def list_sessions(self) -> list[str]:
        if not self.state_dir.is_dir():
            return []
        return sorted(p.stem for p in self.state_dir.glob("*.json"))

    def sweep(self, max_age: timedelta = DEFAULT_MAX_AGE, now: Optional[float] = None) -> int:
        """Delete state files not modified within ``max_age``. Returns count removed."""
        if not self.state_dir.is_dir():
            return 0

        now = time.time() if now is None else now
        cutoff = now - max_age.total_seconds()
        removed = 0
        for path in self.state_dir.glob("*.json"):
            try:
                if path.stat().st_mtime < cutoff:
                    path.unlink()
                    removed += 1
            except OSError as e:
                logger.warning("session_sweep_failed", path=str(path), error=str(e))

        if removed:
            logger.info("session_states_swept", removed=removed)
        return removed
