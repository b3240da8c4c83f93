"""Session event accumulation and persistence."""

from .accumulator import SessionAccumulator, SessionReport, infer_observation_type
from .events import StopEvent, ToolUseEvent, parse_event
from .models import ObservationRecord, SessionState
from .store import SessionStore
from .summarizer import (
    LLMTextGenerator,
    NullTextGenerator,
    TextGenerator,
    create_text_generator,
)

__all__ = [
    "SessionAccumulator",
    "SessionReport",
    "SessionState",
    "SessionStore",
    "ObservationRecord",
    "ToolUseEvent",
    "StopEvent",
    "parse_event",
    "infer_observation_type",
    "TextGenerator",
    "NullTextGenerator",
    "LLMTextGenerator",
    "create_text_generator",
]
