"""Vault path planning for rendered notes."""

from dataclasses import dataclass
from pathlib import Path

from sync_config import SyncConfig

from .formatter import format_year_month, sanitize_file_name
from .labels import get_labels
from .models import NoteMetadata, Observation, Summary


@dataclass(frozen=True)
class NotePath:
    directory: Path
    filename: str

    @property
    def path(self) -> Path:
        return self.directory / self.filename


def observations_root(config: SyncConfig) -> Path:
    folder = config.observations_folder or get_labels(config.locale)["observations_folder"]
    return Path(config.vault_path) / config.base_folder / folder


def summaries_root(config: SyncConfig) -> Path:
    folder = config.summaries_folder or get_labels(config.locale)["summaries_folder"]
    return Path(config.vault_path) / config.base_folder / folder


def plan_observation_path(
    observation: Observation, metadata: NoteMetadata, config: SyncConfig
) -> NotePath:
    """<observations>/YYYY-MM/obs_{id}_{title}.md, bucketed by creation time.

    Same id and title in the same month map to the same file.
    """
    directory = observations_root(config) / format_year_month(metadata.created_at_epoch)
    filename = f"obs_{metadata.id}_{sanitize_file_name(observation.title)}.md"
    return NotePath(directory, filename)


def plan_summary_path(summary: Summary, metadata: NoteMetadata, config: SyncConfig) -> NotePath:
    """<summaries>/YYYY-MM/sum_{id}_{request}.md, bucketed by creation time."""
    directory = summaries_root(config) / format_year_month(metadata.created_at_epoch)
    filename = f"sum_{metadata.id}_{sanitize_file_name(summary.request)}.md"
    return NotePath(directory, filename)
