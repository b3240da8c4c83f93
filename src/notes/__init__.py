"""Note models, Markdown rendering and vault path planning."""

from .formatter import (
    TYPE_EMOJI,
    format_iso_date,
    format_observation_note,
    format_readable_date,
    format_summary_note,
    format_year_month,
    generate_frontmatter,
    sanitize_file_name,
)
from .models import (
    NoteMetadata,
    Observation,
    ObservationMetadata,
    Summary,
    SummaryMetadata,
    SyncResult,
)
from .paths import NotePath, plan_observation_path, plan_summary_path

__all__ = [
    "Observation",
    "Summary",
    "NoteMetadata",
    "ObservationMetadata",
    "SummaryMetadata",
    "SyncResult",
    "NotePath",
    "TYPE_EMOJI",
    "sanitize_file_name",
    "format_year_month",
    "format_iso_date",
    "format_readable_date",
    "generate_frontmatter",
    "format_observation_note",
    "format_summary_note",
    "plan_observation_path",
    "plan_summary_path",
]
