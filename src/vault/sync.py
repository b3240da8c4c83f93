"""Vault sync engine: render notes and write them into an Obsidian vault."""

import asyncio
from pathlib import Path
from typing import Any, Awaitable, Callable, Iterable, Optional

import structlog
from pydantic import ValidationError

from notes.formatter import format_observation_note, format_summary_note
from notes.models import NoteMetadata, Observation, Summary, SyncResult
from notes.paths import NotePath, plan_observation_path, plan_summary_path
from observability import metrics
from sync_config import SyncConfig


class ConfigError(ValueError):
    """Invalid sync configuration, raised before any note is written."""


def _error_message(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


class VaultSync:
    """Writes observation and summary notes as Markdown files in a vault.

    A failing note never raises: every sync call returns a ``SyncResult``.
    """

    def __init__(self, config: SyncConfig, logger: Any = None):
        self._config = config
        self.logger = logger or structlog.get_logger(source="vault_sync")

        if config.enabled:
            self.logger.info(
                "vault_sync_initialized",
                vault_path=config.vault_path,
                base_folder=config.base_folder,
            )

    @property
    def config(self) -> SyncConfig:
        return self._config

    def is_enabled(self) -> bool:
        """Master switch on and a vault path configured."""
        return self._config.enabled and bool(self._config.vault_path)

    def _ensure_directory(self, directory: Path) -> None:
        if not directory.is_dir():
            directory.mkdir(parents=True, exist_ok=True)
            self.logger.debug("directory_created", path=str(directory))

    def _write_note(self, note_path: NotePath, content: str) -> Path:
        self._ensure_directory(note_path.directory)
        path = note_path.path
        path.write_text(content, encoding="utf-8")
        self.logger.debug("note_written", path=str(path))
        return path

    async def _sync_note(
        self,
        kind: str,
        render: Callable[[], str],
        plan: Callable[[], NotePath],
        log_fields: dict,
    ) -> SyncResult:
        try:
            content = render()
            note_path = plan()
            with metrics.timer("note_write"):
                file_path = await asyncio.to_thread(self._write_note, note_path, content)
        except Exception as e:
            metrics.counter("notes_failed")
            self.logger.error(
                f"{kind}_sync_failed", error=_error_message(e), exc_info=e, **log_fields
            )
            return SyncResult(success=False, error=_error_message(e))

        metrics.counter("notes_written")
        self.logger.info(f"{kind}_synced", path=str(file_path), **log_fields)
        return SyncResult(success=True, file_path=file_path)

    async def sync_observation(
        self, observation: Observation, metadata: NoteMetadata
    ) -> SyncResult:
        """Write one observation note. Disabled sync is a successful no-op."""
        if not self.is_enabled() or not self._config.sync_observations:
            metrics.counter("notes_skipped")
            return SyncResult(success=True)

        return await self._sync_note(
            "observation",
            lambda: format_observation_note(observation, metadata, self._config.locale),
            lambda: plan_observation_path(observation, metadata, self._config),
            {
                "id": metadata.id,
                "type": observation.type,
                "title": observation.title or "(untitled)",
            },
        )

    async def sync_summary(self, summary: Summary, metadata: NoteMetadata) -> SyncResult:
        """Write one summary note. Disabled sync is a successful no-op."""
        if not self.is_enabled() or not self._config.sync_summaries:
            metrics.counter("notes_skipped")
            return SyncResult(success=True)

        return await self._sync_note(
            "summary",
            lambda: format_summary_note(summary, metadata, self._config.locale),
            lambda: plan_summary_path(summary, metadata, self._config),
            {"id": metadata.id, "request": summary.request or "(no request)"},
        )

    async def _settle(self, pending: list[Awaitable[SyncResult]]) -> list[SyncResult]:
        """Wait for every write; one result per input, in input order."""
        outcomes = await asyncio.gather(*pending, return_exceptions=True)

        results = []
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                self.logger.error(
                    "batch_item_rejected",
                    error=_error_message(outcome),
                    error_type=type(outcome).__name__,
                )
                results.append(SyncResult(success=False, error=_error_message(outcome)))
            else:
                results.append(outcome)
        return results

    async def sync_observations(
        self, items: Iterable[tuple[Observation, NoteMetadata]]
    ) -> list[SyncResult]:
        """Write many observations concurrently; failures do not abort the batch."""
        return await self._settle([self.sync_observation(obs, meta) for obs, meta in items])

    async def sync_summaries(
        self, items: Iterable[tuple[Summary, NoteMetadata]]
    ) -> list[SyncResult]:
        """Write many summaries concurrently; failures do not abort the batch."""
        return await self._settle([self.sync_summary(summ, meta) for summ, meta in items])


def create_vault_sync(config: SyncConfig | dict, logger: Optional[Any] = None) -> VaultSync:
    """Validate the vault and build a ``VaultSync`` with defaults filled in.

    Raises:
        ConfigError: If the config is invalid or the vault path is missing
            or not a directory.
    """
    if isinstance(config, dict):
        try:
            config = SyncConfig.from_dict(config)
        except ValidationError as e:
            raise ConfigError(f"Invalid sync config: {e}") from e

    if not config.vault_path:
        raise ConfigError("vault_path is not configured")

    vault = Path(config.vault_path)
    if not vault.exists():
        raise ConfigError(f"vault_path does not exist: {config.vault_path}")
    if not vault.is_dir():
        raise ConfigError(f"vault_path is not a directory: {config.vault_path}")

    return VaultSync(config, logger)
