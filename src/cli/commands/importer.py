"""Import CLI command: bulk-sync observations and summaries from a JSON file."""

import asyncio
import json
from pathlib import Path

import click

from cli.utils import console, require_config
from observability import log_run_summary


def load_import_file(path: Path) -> tuple[list, list]:
    """Parse ``{"observations": [...], "summaries": [...]}``.

    Each item is ``{"observation"|"summary": {...}, "metadata": {...}}``.
    """
    from notes import NoteMetadata, Observation, Summary

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid JSON in {path}: {e}")

    try:
        observations = [
            (Observation.from_dict(item["observation"]), NoteMetadata.from_dict(item["metadata"]))
            for item in data.get("observations", [])
        ]
        summaries = [
            (Summary.from_dict(item["summary"]), NoteMetadata.from_dict(item["metadata"]))
            for item in data.get("summaries", [])
        ]
    except (KeyError, TypeError, ValueError) as e:
        raise click.ClickException(f"Malformed import item in {path}: {e}")
    return observations, summaries


@click.command("import")
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def import_notes(ctx: click.Context, source: Path):
    """Write notes for observations/summaries listed in SOURCE."""
    from vault import ConfigError, create_vault_sync

    config = require_config((ctx.obj or {}).get("config_path"))
    try:
        sync = create_vault_sync(config)
    except ConfigError as e:
        raise click.ClickException(str(e))

    observations, summaries = load_import_file(source)

    async def run():
        return (
            await sync.sync_observations(observations),
            await sync.sync_summaries(summaries),
        )

    obs_results, sum_results = asyncio.run(run())
    results = obs_results + sum_results
    failed = [r for r in results if not r.success]
    written = sum(1 for r in results if r.success and r.file_path)

    console.print(f"Wrote {written} note(s), {len(failed)} failed")
    for result in failed:
        console.print(f"  [red]✗[/] {result.error}")
    log_run_summary(written=written, failed=len(failed))

    if failed:
        ctx.exit(1)
