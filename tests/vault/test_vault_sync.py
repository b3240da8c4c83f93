"""Tests for the vault sync engine."""

from unittest.mock import MagicMock

import frontmatter
import pytest

from notes.formatter import format_year_month
from notes.models import NoteMetadata, Observation, Summary
from notes.paths import observations_root
from observability import metrics
from vault import ConfigError, VaultSync, create_vault_sync

JAN_28_MS = 1769596200000
JUN_15_MS = 1749988800000


def _meta(note_id, created=JAN_28_MS):
    return NoteMetadata(
        id=note_id, session_id="s1", project="webapp", prompt_number=1, created_at_epoch=created
    )


def _notes_in(vault):
    return sorted(p for p in vault.rglob("*.md"))


class TestSyncObservation:
    @pytest.mark.asyncio
    async def test_writes_note(self, sync_config, vault, observation, observation_metadata):
        sync = VaultSync(sync_config)
        result = await sync.sync_observation(observation, observation_metadata)

        assert result.success
        assert result.error is None
        assert result.file_path.exists()
        assert result.file_path.name == "obs_42_Fix_login_redirect.md"
        assert frontmatter.load(result.file_path)["id"] == 42
        assert metrics.get("notes_written") == 1

    @pytest.mark.asyncio
    async def test_overwrites_same_id_and_title(self, sync_config, vault):
        sync = VaultSync(sync_config)
        first = await sync.sync_observation(
            Observation(type="change", title="Same", facts=["old"]), _meta(1)
        )
        second = await sync.sync_observation(
            Observation(type="change", title="Same", facts=["new"]), _meta(1)
        )

        assert first.file_path == second.file_path
        assert _notes_in(vault) == [second.file_path]
        assert "- new" in second.file_path.read_text(encoding="utf-8")

    @pytest.mark.asyncio
    async def test_disabled_is_noop(self, make_config, vault, observation, observation_metadata):
        sync = VaultSync(make_config(enabled=False))
        result = await sync.sync_observation(observation, observation_metadata)

        assert result.success
        assert result.file_path is None
        assert _notes_in(vault) == []
        assert metrics.get("notes_skipped") == 1

    @pytest.mark.asyncio
    async def test_observations_switch_off(
        self, make_config, vault, observation, observation_metadata
    ):
        sync = VaultSync(make_config(sync_observations=False))
        result = await sync.sync_observation(observation, observation_metadata)

        assert result.success
        assert result.file_path is None
        assert _notes_in(vault) == []

    @pytest.mark.asyncio
    async def test_write_failure_returns_result(self, sync_config, observation):
        month_dir = observations_root(sync_config) / format_year_month(JAN_28_MS)
        month_dir.parent.mkdir(parents=True)
        month_dir.write_text("not a directory")

        logger = MagicMock()
        sync = VaultSync(sync_config, logger=logger)
        result = await sync.sync_observation(observation, _meta(1))

        assert not result.success
        assert result.file_path is None
        assert result.error
        assert metrics.get("notes_failed") == 1
        logger.error.assert_called_once()
        assert logger.error.call_args.args[0] == "observation_sync_failed"


class TestSyncSummary:
    @pytest.mark.asyncio
    async def test_writes_note(self, sync_config, summary, summary_metadata):
        sync = VaultSync(sync_config)
        result = await sync.sync_summary(summary, summary_metadata)

        assert result.success
        assert result.file_path.name == "sum_7_Fix_the_login_flow.md"
        assert "摘要" in result.file_path.parts

    @pytest.mark.asyncio
    async def test_summaries_switch_off(self, make_config, vault, summary, summary_metadata):
        sync = VaultSync(make_config(sync_summaries=False))
        result = await sync.sync_summary(summary, summary_metadata)

        assert result.success
        assert result.file_path is None
        assert _notes_in(vault) == []


class TestBatchSync:
    @pytest.mark.asyncio
    async def test_partial_failure_keeps_order(self, sync_config):
        # A file where June's month directory should be makes that one write fail
        blocked = observations_root(sync_config) / format_year_month(JUN_15_MS)
        blocked.parent.mkdir(parents=True)
        blocked.write_text("")

        sync = VaultSync(sync_config)
        results = await sync.sync_observations(
            [
                (Observation(type="change", title="first"), _meta(1)),
                (Observation(type="change", title="blocked"), _meta(2, JUN_15_MS)),
                (Observation(type="change", title="third"), _meta(3)),
            ]
        )

        assert [r.success for r in results] == [True, False, True]
        assert results[0].file_path.name == "obs_1_first.md"
        assert results[2].file_path.name == "obs_3_third.md"
        assert results[0].file_path.exists()
        assert results[2].file_path.exists()
        assert "id: 3" in results[2].file_path.read_text(encoding="utf-8")
        assert results[1].error
        assert results[1].file_path is None

    @pytest.mark.asyncio
    async def test_rejected_item_becomes_failed_result(self, sync_config, monkeypatch):
        sync = VaultSync(sync_config)
        real = sync.sync_observation

        async def flaky(observation, metadata):
            if metadata.id == 2:
                raise RuntimeError("boom")
            return await real(observation, metadata)

        monkeypatch.setattr(sync, "sync_observation", flaky)
        results = await sync.sync_observations(
            [
                (Observation(type="change", title="a"), _meta(1)),
                (Observation(type="change", title="b"), _meta(2)),
            ]
        )

        assert results[0].success
        assert not results[1].success
        assert results[1].error == "boom"

    @pytest.mark.asyncio
    async def test_empty_batch(self, sync_config):
        sync = VaultSync(sync_config)
        assert await sync.sync_observations([]) == []
        assert await sync.sync_summaries([]) == []

    @pytest.mark.asyncio
    async def test_summaries_batch(self, sync_config, vault):
        sync = VaultSync(sync_config)
        results = await sync.sync_summaries(
            [(Summary(request="one"), _meta(1)), (Summary(request="two"), _meta(2))]
        )

        assert all(r.success for r in results)
        assert len(_notes_in(vault)) == 2


class TestCreateVaultSync:
    def test_from_model(self, sync_config):
        sync = create_vault_sync(sync_config)
        assert sync.config is sync_config
        assert sync.is_enabled()

    def test_from_camel_case_dict(self, vault):
        sync = create_vault_sync({"vaultPath": str(vault), "syncSummaries": False})
        assert sync.config.vault_path == str(vault)
        assert sync.config.sync_summaries is False
        assert sync.config.base_folder == "ClaudeCode"

    def test_missing_vault_path_key(self):
        with pytest.raises(ConfigError, match="Invalid sync config"):
            create_vault_sync({"basePath": "x"})

    def test_empty_vault_path(self):
        with pytest.raises(ConfigError, match="not configured"):
            create_vault_sync({"vaultPath": ""})

    def test_nonexistent_vault(self, tmp_path):
        with pytest.raises(ConfigError, match="does not exist"):
            create_vault_sync({"vaultPath": str(tmp_path / "nope")})

    def test_vault_is_file(self, tmp_path):
        path = tmp_path / "file.md"
        path.write_text("")
        with pytest.raises(ConfigError, match="not a directory"):
            create_vault_sync({"vaultPath": str(path)})

    def test_disabled_config_still_validated(self, vault):
        sync = create_vault_sync({"vaultPath": str(vault), "enabled": False})
        assert not sync.is_enabled()
