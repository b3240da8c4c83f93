"""Render observations and summaries as Obsidian Markdown notes."""

import re
from datetime import datetime, timezone
from typing import Any, Mapping

from shared_types import Locale, ObservationType

from .labels import get_labels
from .models import NoteMetadata, Observation, Summary

TAG_ROOT = "ClaudeCode"
MAX_FILENAME_LENGTH = 80

TYPE_EMOJI: dict[ObservationType, str] = {
    ObservationType.BUGFIX: "🔴",
    ObservationType.FEATURE: "🟣",
    ObservationType.REFACTOR: "🔄",
    ObservationType.CHANGE: "✅",
    ObservationType.DISCOVERY: "🔵",
    ObservationType.DECISION: "⚖️",
    ObservationType.UNKNOWN: "📝",
}
SUMMARY_EMOJI = "📋"

_FORBIDDEN_CHARS = re.compile(r'[<>:"/\\|?*]')
_WHITESPACE_RUN = re.compile(r"\s+")
_UNDERSCORE_RUN = re.compile(r"_+")


def sanitize_file_name(name: str | None) -> str:
    """Make a string safe for use as a file name or tag segment.

    Never fails; empty input (or input that sanitizes to nothing) gives
    ``"untitled"``.
    """
    if not name:
        return "untitled"

    cleaned = _FORBIDDEN_CHARS.sub("_", name)
    cleaned = _WHITESPACE_RUN.sub("_", cleaned)
    cleaned = _UNDERSCORE_RUN.sub("_", cleaned)
    cleaned = cleaned.strip("_")[:MAX_FILENAME_LENGTH].strip("_")
    return cleaned or "untitled"


def _split_epoch(epoch_ms: int) -> tuple[int, int]:
    seconds, millis = divmod(int(epoch_ms), 1000)
    return seconds, millis


def format_year_month(epoch_ms: int) -> str:
    """YYYY-MM bucket in the process's local time zone."""
    seconds, _ = _split_epoch(epoch_ms)
    return datetime.fromtimestamp(seconds).strftime("%Y-%m")


def format_iso_date(epoch_ms: int) -> str:
    """UTC ISO-8601 instant with millisecond precision, e.g. 2026-01-28T10:30:00.000Z."""
    seconds, millis = _split_epoch(epoch_ms)
    dt = datetime.fromtimestamp(seconds, tz=timezone.utc)
    return f"{dt.strftime('%Y-%m-%dT%H:%M:%S')}.{millis:03d}Z"


def format_readable_date(epoch_ms: int) -> str:
    """Local 'YYYY-MM-DD HH:MM' for display only."""
    seconds, _ = _split_epoch(epoch_ms)
    return datetime.fromtimestamp(seconds).strftime("%Y-%m-%d %H:%M")


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def generate_frontmatter(data: Mapping[str, Any]) -> str:
    """Serialize a mapping into a narrow YAML front matter block.

    Not a general YAML emitter: None values and empty lists are skipped,
    lists become ``  - item`` lines, multi-line strings become literal
    blocks, everything else is interpolated as-is.
    """
    lines = ["---"]

    for key, value in data.items():
        if value is None:
            continue

        if isinstance(value, (list, tuple)):
            if not value:
                continue
            lines.append(f"{key}:")
            for item in value:
                lines.append(f"  - {_scalar(item)}")
        elif isinstance(value, str) and "\n" in value:
            lines.append(f"{key}: |")
            for line in value.split("\n"):
                lines.append(f"  {line}")
        else:
            lines.append(f"{key}: {_scalar(value)}")

    lines.append("---")
    return "\n".join(lines)


def observation_tags(observation: Observation, project: str) -> list[str]:
    tags = [
        f"{TAG_ROOT}/observation",
        f"{TAG_ROOT}/type/{observation.type}",
        f"{TAG_ROOT}/project/{sanitize_file_name(project)}",
    ]
    tags.extend(f"{TAG_ROOT}/concept/{concept}" for concept in observation.concepts or [])
    return tags


def format_observation_note(
    observation: Observation,
    metadata: NoteMetadata,
    locale: str | Locale = Locale.ZH,
) -> str:
    """Render an observation as front matter plus Markdown body."""
    labels = get_labels(locale)
    emoji = TYPE_EMOJI[observation.kind]
    files_read = observation.files_read or []
    files_modified = observation.files_modified or []

    frontmatter = generate_frontmatter(
        {
            "id": metadata.id,
            "type": observation.type,
            "project": metadata.project,
            "session_id": metadata.session_id,
            "prompt_number": metadata.prompt_number,
            "created_at": format_iso_date(metadata.created_at_epoch),
            "tags": observation_tags(observation, metadata.project),
            "files_read": files_read,
            "files_modified": files_modified,
        }
    )

    sections = [f"# {emoji} {observation.title or labels['untitled_observation']}", ""]

    if observation.subtitle:
        sections += [f"> {observation.subtitle}", ""]

    sections.append(
        f"**{labels['type']}**: {observation.type} | "
        f"**{labels['time']}**: {format_readable_date(metadata.created_at_epoch)} | "
        f"**{labels['project']}**: {metadata.project}"
    )
    sections.append("")

    if observation.facts:
        sections.append(f"## {labels['facts']}")
        sections += [f"- {fact}" for fact in observation.facts]
        sections.append("")

    if observation.narrative:
        sections += [f"## {labels['narrative']}", observation.narrative, ""]

    if observation.concepts:
        sections.append(f"## {labels['concepts']}")
        sections.append(" ".join(f"#{TAG_ROOT}/concept/{c}" for c in observation.concepts))
        sections.append("")

    if files_read or files_modified:
        sections.append(f"## {labels['related_files']}")
        if files_read:
            sections.append(f"### {labels['files_read']}")
            sections += [f"- `{path}`" for path in files_read]
        if files_modified:
            sections.append(f"### {labels['files_modified']}")
            sections += [f"- `{path}`" for path in files_modified]
        sections.append("")

    return frontmatter + "\n\n" + "\n".join(sections)


def format_summary_note(
    summary: Summary,
    metadata: NoteMetadata,
    locale: str | Locale = Locale.ZH,
) -> str:
    """Render a session summary as front matter plus Markdown body."""
    labels = get_labels(locale)

    frontmatter = generate_frontmatter(
        {
            "id": metadata.id,
            "project": metadata.project,
            "session_id": metadata.session_id,
            "prompt_number": metadata.prompt_number,
            "created_at": format_iso_date(metadata.created_at_epoch),
            "tags": [
                f"{TAG_ROOT}/summary",
                f"{TAG_ROOT}/project/{sanitize_file_name(metadata.project)}",
            ],
        }
    )

    sections = [
        f"# {SUMMARY_EMOJI} {summary.request or labels['untitled_summary']}",
        "",
        f"**{labels['time']}**: {format_readable_date(metadata.created_at_epoch)} | "
        f"**{labels['project']}**: {metadata.project}",
        "",
    ]

    for field_name in ("investigated", "learned", "completed", "next_steps", "notes"):
        text = getattr(summary, field_name)
        if isinstance(text, str) and text:
            sections += [f"## {labels[field_name]}", text, ""]

    return frontmatter + "\n\n" + "\n".join(sections)
