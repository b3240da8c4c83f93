"""Sweep CLI command: delete abandoned session state."""

from datetime import timedelta

import click

from cli.config import load_config_model
from cli.utils import console
from sync_config import DEFAULT_STATE_DIR


@click.command()
@click.option(
    "--max-age-hours", default=24.0, show_default=True, help="Delete state older than this"
)
@click.pass_context
def sweep(ctx: click.Context, max_age_hours: float):
    """Delete session state files that were never closed."""
    from session import SessionStore

    try:
        config = load_config_model((ctx.obj or {}).get("config_path"))
    except ValueError as e:
        raise click.ClickException(str(e))

    store = SessionStore(config.state_dir if config else DEFAULT_STATE_DIR)
    removed = store.sweep(max_age=timedelta(hours=max_age_hours))
    console.print(f"Removed {removed} stale session state file(s) from {store.state_dir}")
